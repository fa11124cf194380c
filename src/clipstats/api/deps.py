"""FastAPI dependencies for API endpoints."""

from __future__ import annotations

from clipstats.config.settings import settings
from clipstats.services.extraction import ExtractionService

# Module-level singleton: the service holds configuration only, each
# extract() call still launches its own browser.
_extraction_service: ExtractionService | None = None


def get_extraction_service() -> ExtractionService:
    """
    Dependency for the extraction service.

    Builds the service from application settings on first use and reuses
    it afterwards.

    Returns
    -------
    ExtractionService
        The shared extraction service.
    """
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService(settings.extraction_config())
    return _extraction_service
