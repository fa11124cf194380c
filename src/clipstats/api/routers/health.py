"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from clipstats import __version__
from clipstats.api.schemas.responses import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """
    Health check endpoint.

    Reports the application version. Does not launch a browser.
    """
    return HealthStatus(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
    )
