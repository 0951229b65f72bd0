"""
Service info and liveness endpoints.

- /: Service name, version and links
- /health: Liveness probe (no dependency checks)
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

logger = logging.getLogger(__name__)

SERVICE_NAME = "Patient Vitals Dashboard"
SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Response model for /health endpoint."""
    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


@router.get("/", summary="Service info")
async def root() -> dict:
    """Basic service information and links to the main endpoints."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "dashboard": "/dashboard",
        "summary": "/api/v1/dashboard/summary",
        "health": "/health",
        "docs": "/docs",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Check if the application is running. Does not contact the record service."
)
async def health_check() -> HealthResponse:
    """Liveness probe - always 200 while the process is up."""
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )
