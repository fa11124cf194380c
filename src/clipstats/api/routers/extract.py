"""Engagement metrics extraction endpoint."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from clipstats.api.deps import get_extraction_service
from clipstats.api.schemas.responses import ErrorResponse, MetricsResponse
from clipstats.exceptions import ExtractionError
from clipstats.models.metrics import ExtractionFailure
from clipstats.services.extraction import ExtractionService

router = APIRouter()


@router.get(
    "/auto",
    response_model=MetricsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing url parameter"},
        500: {"model": ErrorResponse, "description": "Extraction failed"},
    },
)
async def extract_metrics(
    url: Optional[str] = Query(
        default=None, description="Video page URL to read engagement counts from"
    ),
    service: ExtractionService = Depends(get_extraction_service),
) -> MetricsResponse:
    """
    Extract likes, comments, favorites and shares from a video page.

    Launches a headless browser for the duration of the request. The
    response includes the raw counter strings alongside the parsed values.
    """
    outcome = await service.extract(url)
    if isinstance(outcome, ExtractionFailure):
        raise ExtractionError(outcome)
    return MetricsResponse.from_result(outcome)
