"""
Tests for MetricExtractor.
"""

from __future__ import annotations

import asyncio

import pytest

from clipstats.models.enums import FailureKind, MetricField
from clipstats.models.metrics import ExtractionFailure, MetricResult
from clipstats.services.extraction.metric_extractor import (
    DEFAULT_FRAGMENT_SELECTORS,
    MetricExtractor,
)
from tests.factories.extraction_fakes import FakePage

pytestmark = pytest.mark.asyncio


def _page(texts: dict[MetricField, str]) -> FakePage:
    """Page showing ``texts`` at the default selectors."""
    return FakePage(
        {DEFAULT_FRAGMENT_SELECTORS[field]: text for field, text in texts.items()}
    )


class GatedPage(FakePage):
    """
    Page whose counters only appear once all four waits are in flight.

    A wait that starts alone gives up after ``patience`` seconds, so waiting
    one counter at a time finds none of them.
    """

    def __init__(self, texts: dict[str, str], patience: float = 1.0) -> None:
        super().__init__(texts)
        self.patience = patience
        self.in_flight = 0
        self.peak_in_flight = 0
        self._all_waiting = asyncio.Event()

    async def wait_for_fragment(self, selector: str, timeout_ms: float) -> bool:
        self.waited.append((selector, timeout_ms))
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        if self.in_flight == len(DEFAULT_FRAGMENT_SELECTORS):
            self._all_waiting.set()
        try:
            await asyncio.wait_for(self._all_waiting.wait(), timeout=self.patience)
        except asyncio.TimeoutError:
            return False
        finally:
            self.in_flight -= 1
        return selector in self.texts


class TestExtract:
    """Tests for MetricExtractor.extract."""

    async def test_typical_page(self, counter_texts: dict[MetricField, str]) -> None:
        """Test the four counters of a typical page."""
        extractor = MetricExtractor()

        result = await extractor.extract(_page(counter_texts))

        assert isinstance(result, MetricResult)
        assert result.likes == 10500
        assert result.comments == 342
        assert result.favorites == 1100000
        assert result.shares == 89
        assert result.raw == counter_texts

    async def test_waits_with_configured_timeout(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that every counter is awaited with the configured timeout."""
        page = _page(counter_texts)
        extractor = MetricExtractor(fragment_timeout_seconds=15.0)

        await extractor.extract(page)

        assert sorted(page.waited) == sorted(
            (selector, 15000.0) for selector in DEFAULT_FRAGMENT_SELECTORS.values()
        )

    async def test_counter_waits_overlap(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that all four counter waits are in flight at the same time."""
        page = GatedPage(
            {
                DEFAULT_FRAGMENT_SELECTORS[field]: text
                for field, text in counter_texts.items()
            }
        )

        result = await MetricExtractor().extract(page)

        assert isinstance(result, MetricResult)
        assert page.peak_in_flight == 4

    async def test_missing_counter_found_in_one_round(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that a missing counter costs no serial per-counter timeouts."""
        del counter_texts[MetricField.SHARES]
        page = GatedPage(
            {
                DEFAULT_FRAGMENT_SELECTORS[field]: text
                for field, text in counter_texts.items()
            },
            patience=0.2,
        )
        loop = asyncio.get_running_loop()

        started = loop.time()
        result = await MetricExtractor().extract(page)
        elapsed = loop.time() - started

        assert isinstance(result, ExtractionFailure)
        assert result.missing_fields == [MetricField.SHARES]
        assert elapsed < 0.2

    async def test_reads_in_fixed_order(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that text is read likes, comments, favorites, shares."""
        page = _page(counter_texts)

        await MetricExtractor().extract(page)

        assert page.read == [
            DEFAULT_FRAGMENT_SELECTORS[MetricField.LIKES],
            DEFAULT_FRAGMENT_SELECTORS[MetricField.COMMENTS],
            DEFAULT_FRAGMENT_SELECTORS[MetricField.FAVORITES],
            DEFAULT_FRAGMENT_SELECTORS[MetricField.SHARES],
        ]

    async def test_missing_counter(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that an absent counter is reported as FRAGMENT_TIMEOUT."""
        del counter_texts[MetricField.SHARES]
        page = _page(counter_texts)

        result = await MetricExtractor(fragment_timeout_seconds=15.0).extract(page)

        assert isinstance(result, ExtractionFailure)
        assert result.kind == FailureKind.FRAGMENT_TIMEOUT
        assert result.missing_fields == [MetricField.SHARES]
        assert "15s" in result.message
        assert page.read == []

    async def test_names_exactly_the_missing_subset(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that every missing counter, and only those, is named."""
        del counter_texts[MetricField.COMMENTS]
        del counter_texts[MetricField.FAVORITES]

        result = await MetricExtractor().extract(_page(counter_texts))

        assert isinstance(result, ExtractionFailure)
        assert result.missing_fields == [
            MetricField.COMMENTS,
            MetricField.FAVORITES,
        ]

    async def test_unparsable_counter_keeps_all_raw_text(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that PARSE_FAILURE carries all four original strings."""
        counter_texts[MetricField.COMMENTS] = "Comment"

        result = await MetricExtractor().extract(_page(counter_texts))

        assert isinstance(result, ExtractionFailure)
        assert result.kind == FailureKind.PARSE_FAILURE
        assert result.failed_fields == [MetricField.COMMENTS]
        assert result.partial_raw == counter_texts
        assert 'favorites="1.1M"' in result.details

    async def test_empty_counter_text(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that an empty counter is a parse failure."""
        counter_texts[MetricField.FAVORITES] = ""

        result = await MetricExtractor().extract(_page(counter_texts))

        assert isinstance(result, ExtractionFailure)
        assert result.kind == FailureKind.PARSE_FAILURE
        assert result.failed_fields == [MetricField.FAVORITES]


class TestSelectors:
    """Tests for selector configuration."""

    async def test_default_selectors(self) -> None:
        """Test the data-e2e selectors used out of the box."""
        selectors = MetricExtractor().selectors
        assert selectors[MetricField.LIKES] == 'strong[data-e2e="like-count"]'
        assert selectors[MetricField.COMMENTS] == 'strong[data-e2e="comment-count"]'
        assert selectors[MetricField.FAVORITES] == 'strong[data-e2e="undefined-count"]'
        assert selectors[MetricField.SHARES] == 'strong[data-e2e="share-count"]'

    async def test_override_one_selector(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that an override replaces only the named metric's selector."""
        override = 'strong[data-e2e="favorite-count"]'
        extractor = MetricExtractor(selectors={MetricField.FAVORITES: override})
        texts = {
            extractor.selectors[field]: text for field, text in counter_texts.items()
        }

        result = await extractor.extract(FakePage(texts))

        assert isinstance(result, MetricResult)
        assert result.favorites == 1100000
        assert extractor.selectors[MetricField.LIKES] == (
            DEFAULT_FRAGMENT_SELECTORS[MetricField.LIKES]
        )
