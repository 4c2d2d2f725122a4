"""API middleware for the storefront.

Provides:
- Request ID correlation and access logging
- A last-resort 500 handler
- The shared ``{error_code, message, details, request_id}`` error body
"""

import time
from typing import Any, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render an error in the storefront's error envelope.

    The request ID is taken from request state when the correlation
    middleware has already run.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
        headers=headers,
    )


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with a correlation ID and log its outcome.

    The ID comes from the ``X-Request-ID`` header or is generated. It is
    stored on ``request.state``, bound into structlog's context for the
    duration of the request, and echoed on the response.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                query=request.url.query or None,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions that escape the routers into a generic 500.

    This is the application's only catch-all: each failure is logged
    once, here, and its details are never returned to the client.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "An internal error occurred",
            )


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed),
    so the request ID is bound before errors are handled.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
