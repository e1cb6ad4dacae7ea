"""Health check endpoints."""

from collections.abc import Callable
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_uow_factory
from core.config import settings
from core.exceptions import StorageUnavailableError
from domain.repositories.unit_of_work import IUnitOfWork

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    profiles: int | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    uow_factory: Callable[[], IUnitOfWork] = Depends(get_uow_factory),
) -> HealthResponse:
    """
    Detailed health check including the profile store.

    Runs the same profile count as the keep-alive ping; a store failure
    reports ``degraded`` instead of failing the request.
    """
    profiles: int | None = None
    try:
        async with uow_factory() as uow:
            profiles = await uow.profiles.count()
        db_status = "healthy"
    except StorageUnavailableError:
        db_status = "unhealthy"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=db_status,
        profiles=profiles,
    )
