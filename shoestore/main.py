"""Shoestore API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from shoestore.api.health import router as health_router
from shoestore.api.home import router as home_router
from shoestore.api.middleware import error_response, setup_middleware
from shoestore.api.products import router as products_router
from shoestore.domain.exceptions import ProductNotFoundError
from shoestore.infrastructure.config import settings
from shoestore.infrastructure.database import engine
from shoestore.infrastructure.log_config import configure_logging

configure_logging(settings.log_level, debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Shoestore API",
        version=settings.api_version,
        debug=settings.debug,
        page_size=settings.catalog_page_size,
    )

    yield

    logger.info("Shutting down Shoestore API")
    await engine.dispose()


app = FastAPI(
    title="Shoestore API",
    description="Footwear storefront catalog: browsing, search, filters and product pages",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(home_router)
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTP errors, including routing 404/405s, in the error envelope."""
    detail = exc.detail
    if isinstance(detail, dict):
        return error_response(
            request,
            exc.status_code,
            detail.get("error_code", "ERROR"),
            detail.get("message", str(detail)),
            detail.get("details"),
            headers=exc.headers,
        )
    return error_response(request, exc.status_code, "ERROR", str(detail), headers=exc.headers)


@app.exception_handler(ProductNotFoundError)
async def product_not_found_handler(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    """Missing and inactive products are both a 404."""
    return error_response(
        request,
        status.HTTP_404_NOT_FOUND,
        "PRODUCT_NOT_FOUND",
        exc.message,
        [{"field": "slug", "message": f"No active product with slug '{exc.slug}'"}],
    )
