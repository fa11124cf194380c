"""
Data models module for clipstats.

Defines Pydantic models and enums for extraction requests, results and
the typed failures every pipeline stage can return.
"""

from __future__ import annotations

from .enums import FailureKind, LaunchErrorReason, MetricField, ParseErrorKind
from .metrics import (
    ExtractionConfig,
    ExtractionFailure,
    LaunchError,
    MetricRequest,
    MetricResult,
    ParseError,
    RawFragment,
    ResolutionError,
)

__all__ = [
    "ExtractionConfig",
    "ExtractionFailure",
    "FailureKind",
    "LaunchError",
    "LaunchErrorReason",
    "MetricField",
    "MetricRequest",
    "MetricResult",
    "ParseError",
    "ParseErrorKind",
    "RawFragment",
    "ResolutionError",
]
