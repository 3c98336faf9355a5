"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="agromarket",
        version=request.app.state.settings.api_version,
    )


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, str]:
    """Check if the catalog store has been loaded.

    Returns:
        Readiness status.
    """
    if getattr(request.app.state, "catalog_store", None) is None:
        return {"status": "starting"}
    return {"status": "ready"}
