"""Liveness, readiness and service information endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import check_db, get_db
from ..core.exceptions import StorageError
from ..core.observability import SERVICE_NAME, SERVICE_VERSION

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

DB_DEPENDENCY = Depends(get_db)


@router.get("/health", summary="Health Check", response_model=dict)
async def health_check() -> dict:
    """Liveness probe; does not touch the database."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "environment": settings.environment,
    }


@router.get("/ready", summary="Readiness Check", response_model=dict)
async def readiness_check(db: AsyncSession = DB_DEPENDENCY) -> dict:
    """
    Readiness probe running ``SELECT 1``.

    Raises:
        StorageError: If the database cannot be reached
    """
    try:
        await check_db(db)
    except SQLAlchemyError as e:
        logger.error("Readiness check failed", extra={"error": str(e)})
        raise StorageError(detail="The database is not reachable.") from e

    return {"status": "ready", "service": SERVICE_NAME, "checks": {"database": "ok"}}


@router.get("/info", summary="Service Information", tags=["Info"], response_model=dict)
async def service_info() -> dict:
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "environment": settings.environment,
        "api_prefix": settings.api_prefix,
        "date_locale": settings.date_locale,
        "endpoints": {
            "health": "/health",
            "readiness": "/ready",
            "metrics": "/metrics",
            "docs": "/docs" if settings.debug else None,
        },
    }
