"""Health check router for the Couchtube HTTP server."""

from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from ... import __version__

router = APIRouter(prefix="/api")


class HealthResponse(BaseModel):
    """Response model for health check endpoint.

    Attributes:
        status: Health status of the service.
        timestamp: Current server timestamp.
        service: Name of the service.
        version: Version of the service.
    """

    status: Literal["healthy", "degraded", "unhealthy"]
    timestamp: datetime
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the service is up."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        service="couchtube",
        version=__version__,
    )
