"""
Services module for clipstats.

Contains the extraction pipeline: browser discovery, session lifecycle,
counter extraction and the public extraction service.
"""

from __future__ import annotations

from clipstats.services.extraction import ExtractionService

__all__: list[str] = ["ExtractionService"]
