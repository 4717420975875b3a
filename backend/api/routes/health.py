"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings, get_settings
from shared.database import get_database, is_database_configured

from ..dependencies import get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    schema_ready: bool
    degraded: list[str] = []


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports database reachability and whether schema setup has run.
    Optional schema steps that failed are listed under ``degraded``.
    """
    if not is_database_configured():
        database = "not_configured"
    elif await get_database().ping():
        database = "connected"
    else:
        database = "unreachable"

    schema = get_container().schema
    ready = database == "connected" and schema.ready
    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        database=database,
        schema_ready=schema.ready,
        degraded=list(schema.degraded),
    )
