"""Pydantic schemas for API requests and responses."""

from clipstats.api.schemas.responses import (
    ErrorResponse,
    HealthStatus,
    MetricsResponse,
    RawTexts,
)

__all__ = [
    "ErrorResponse",
    "HealthStatus",
    "MetricsResponse",
    "RawTexts",
]
