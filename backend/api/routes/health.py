"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings, get_settings

from ..dependencies import get_broadcaster

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    live_push: str
    auth: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    settings: Settings = Depends(get_settings),
    broadcaster=Depends(get_broadcaster),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which storage backend is configured, whether live push is
    on, and whether tokens can be issued.
    """
    auth_ready = bool(settings.jwt_secret)
    return ReadinessResponse(
        status="ready" if auth_ready else "degraded",
        storage=settings.storage_backend,
        live_push="enabled" if settings.broadcast_enabled else "disabled",
        auth="configured" if auth_ready else "missing secret",
    )
