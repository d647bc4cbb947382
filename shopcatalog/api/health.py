"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shopcatalog.catalog.filters import get_filter_registry

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    from shopcatalog.infrastructure.config import settings

    return HealthResponse(
        status="healthy",
        service="shopcatalog",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Check if service is ready to accept requests.

    The service is ready once startup has frozen the filter registry.

    Returns:
        Readiness status.
    """
    if not get_filter_registry().frozen:
        return {"status": "starting"}
    return {"status": "ready"}
