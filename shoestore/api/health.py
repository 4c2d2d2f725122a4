"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from datetime import datetime, timezone
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shoestore.api.schemas import HealthResponse
from shoestore.infrastructure.config import settings
from shoestore.infrastructure.database import get_session

router = APIRouter()

logger = structlog.get_logger()


@router.get("/health-check", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Liveness status with the current UTC time.
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        service="shoestore-api",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict[str, str]:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status.

    Raises:
        HTTPException: If the database cannot be reached.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database not reachable", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "error_code": "DATABASE_UNAVAILABLE",
                "message": "Database is not reachable",
            },
        ) from e

    return {"status": "ready"}
