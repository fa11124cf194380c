"""
Pytest configuration and fixtures for clipstats tests.
"""

from __future__ import annotations

import pytest

from clipstats.models.enums import MetricField
from clipstats.models.metrics import ExtractionConfig, MetricResult

COUNTER_TEXTS = {
    MetricField.LIKES: "10.5K",
    MetricField.COMMENTS: "342",
    MetricField.FAVORITES: "1.1M",
    MetricField.SHARES: "89",
}


@pytest.fixture
def counter_texts() -> dict[MetricField, str]:
    """Display strings for a typical video page."""
    return dict(COUNTER_TEXTS)


@pytest.fixture
def extraction_config() -> ExtractionConfig:
    """Config using the bundled browser with short timeouts."""
    return ExtractionConfig(
        fragment_timeout_seconds=0.5,
        navigation_timeout_seconds=1.0,
        extraction_timeout_seconds=5.0,
    )


@pytest.fixture
def metric_result() -> MetricResult:
    """A successful extraction for the typical page."""
    return MetricResult(
        likes=10500,
        comments=342,
        favorites=1100000,
        shares=89,
        raw=dict(COUNTER_TEXTS),
    )
