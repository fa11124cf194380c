"""API response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from clipstats.models.enums import FailureKind, MetricField
from clipstats.models.metrics import ExtractionFailure, MetricResult

ERROR_SUMMARIES: dict[FailureKind, str] = {
    FailureKind.INVALID_INPUT: "Missing or invalid url parameter",
    FailureKind.RESOLUTION_FAILED: "No browser available for extraction",
    FailureKind.LAUNCH_FAILED: "Could not load the page",
    FailureKind.FRAGMENT_TIMEOUT: "Engagement counters not found on the page",
    FailureKind.PARSE_FAILURE: "Engagement counters could not be read",
}
"""Short human-readable summary per failure kind."""

ERROR_STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: 400,
}
"""HTTP status per failure kind; anything unlisted is a 500."""


class RawTexts(BaseModel):
    """Original counter display strings."""

    model_config = ConfigDict(strict=True)

    likes: str
    comments: str
    favorites: str
    shares: str


class MetricsResponse(BaseModel):
    """Successful extraction response."""

    model_config = ConfigDict(strict=True)

    likes: int = Field(..., ge=0, examples=[10500])
    comments: int = Field(..., ge=0, examples=[342])
    favorites: int = Field(..., ge=0, examples=[1100000])
    shares: int = Field(..., ge=0, examples=[89])
    raw: RawTexts

    @classmethod
    def from_result(cls, result: MetricResult) -> MetricsResponse:
        """Build the response body from a pipeline result."""
        return cls(
            likes=result.likes,
            comments=result.comments,
            favorites=result.favorites,
            shares=result.shares,
            raw=RawTexts(
                likes=result.raw[MetricField.LIKES],
                comments=result.raw[MetricField.COMMENTS],
                favorites=result.raw[MetricField.FAVORITES],
                shares=result.raw[MetricField.SHARES],
            ),
        )


class ErrorResponse(BaseModel):
    """
    Failure response body.

    Attributes
    ----------
    error : str
        Short summary of what went wrong.
    details : str
        Underlying cause: missing or unparsable fields, timeout kind, or
        the browser paths tried.
    kind : str | None
        Machine-readable failure kind, when the failure came from the
        extraction pipeline.
    """

    error: str = Field(..., examples=["Engagement counters not found on the page"])
    details: str = Field(
        ...,
        examples=["Counter(s) did not appear within 15s: shares; missing: shares"],
    )
    kind: str | None = Field(default=None, examples=["fragment_timeout"])

    @classmethod
    def from_failure(cls, failure: ExtractionFailure) -> ErrorResponse:
        """Build the response body from a pipeline failure."""
        return cls(
            error=ERROR_SUMMARIES.get(failure.kind, "Extraction failed"),
            details=failure.details,
            kind=failure.kind.value,
        )


class HealthStatus(BaseModel):
    """Application health status."""

    model_config = ConfigDict(strict=True)

    status: str  # "healthy"
    version: str  # clipstats version
    timestamp: datetime
