"""
Engagement counter extraction from an open page.

Given a page handle, waits for the four counter elements concurrently,
reads their text in a fixed order, and parses each into an integer.

Classes
-------
MetricExtractor
    Runs the await / read / parse / decide sequence for one page.

Constants
---------
DEFAULT_FRAGMENT_SELECTORS
    CSS selector per metric, keyed by the page's ``data-e2e`` attribute.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

from clipstats.models.enums import MetricField
from clipstats.models.metrics import (
    ExtractionFailure,
    MetricResult,
    ParseError,
    RawFragment,
)
from clipstats.services.extraction.browser_session import PageHandle
from clipstats.services.extraction.number_parser import parse_count

logger = logging.getLogger(__name__)

# The favorites counter carries no metric-specific attribute upstream;
# "undefined-count" is what the page renders for it today.
DEFAULT_FRAGMENT_SELECTORS: dict[MetricField, str] = {
    MetricField.LIKES: 'strong[data-e2e="like-count"]',
    MetricField.COMMENTS: 'strong[data-e2e="comment-count"]',
    MetricField.FAVORITES: 'strong[data-e2e="undefined-count"]',
    MetricField.SHARES: 'strong[data-e2e="share-count"]',
}
"""CSS selector for each counter element."""


class MetricExtractor:
    """
    Extract the four engagement counts from a loaded page.

    Parameters
    ----------
    fragment_timeout_seconds : float
        Upper bound for each counter's presence wait. The four waits run
        concurrently, so this is also the worst-case wait overall.
    selectors : Mapping[MetricField, str] | None
        Per-metric selector overrides; defaults to
        ``DEFAULT_FRAGMENT_SELECTORS``.

    Examples
    --------
    >>> extractor = MetricExtractor(fragment_timeout_seconds=15.0)
    >>> outcome = await extractor.extract(page)
    >>> if isinstance(outcome, MetricResult):
    ...     print(outcome.likes)
    """

    def __init__(
        self,
        fragment_timeout_seconds: float = 15.0,
        selectors: Mapping[MetricField, str] | None = None,
    ) -> None:
        self._fragment_timeout_seconds = fragment_timeout_seconds
        self._selectors = dict(DEFAULT_FRAGMENT_SELECTORS)
        if selectors:
            self._selectors.update(selectors)

    @property
    def selectors(self) -> dict[MetricField, str]:
        """Selector in use for each metric."""
        return dict(self._selectors)

    async def extract(self, page: PageHandle) -> MetricResult | ExtractionFailure:
        """
        Run the extraction sequence against ``page``.

        1. Wait for all four counters concurrently; any that never appear
           yield a FRAGMENT_TIMEOUT naming exactly those fields.
        2. Read each counter's text in fixed field order.
        3. Parse every text; any failure yields a PARSE_FAILURE carrying
           all four raw strings.

        Parameters
        ----------
        page : PageHandle
            Handle on an already-navigated page.

        Returns
        -------
        MetricResult | ExtractionFailure
            The parsed counts, or a FRAGMENT_TIMEOUT / PARSE_FAILURE.
        """
        missing = await self._await_fragments(page)
        if missing:
            logger.warning(
                "Counters missing after %.0fs: %s",
                self._fragment_timeout_seconds,
                ", ".join(field.value for field in missing),
            )
            return ExtractionFailure.fragment_timeout(
                missing, self._fragment_timeout_seconds
            )

        fragments = await self._read_fragments(page)
        raw = {fragment.field: fragment.text for fragment in fragments}

        counts: dict[MetricField, int] = {}
        failed: list[MetricField] = []
        for fragment in fragments:
            parsed = parse_count(fragment.text)
            if isinstance(parsed, ParseError):
                logger.warning(
                    "Unparsable %s text %r (%s)",
                    fragment.field.value,
                    fragment.text,
                    parsed.kind.value,
                )
                failed.append(fragment.field)
            else:
                counts[fragment.field] = parsed

        if failed:
            return ExtractionFailure.parse_failure(failed, raw)

        return MetricResult(
            likes=counts[MetricField.LIKES],
            comments=counts[MetricField.COMMENTS],
            favorites=counts[MetricField.FAVORITES],
            shares=counts[MetricField.SHARES],
            raw=raw,
        )

    async def _await_fragments(self, page: PageHandle) -> list[MetricField]:
        """
        Wait for every counter concurrently and return the ones that timed out.

        All four waits are joined before classifying, so the result names
        exactly the subset that never appeared.
        """
        timeout_ms = self._fragment_timeout_seconds * 1000
        fields = list(MetricField)
        present = await asyncio.gather(
            *(
                page.wait_for_fragment(self._selectors[field], timeout_ms)
                for field in fields
            )
        )
        return [field for field, ok in zip(fields, present) if not ok]

    async def _read_fragments(self, page: PageHandle) -> list[RawFragment]:
        """Read every counter's text in fixed field order."""
        fragments: list[RawFragment] = []
        for field in MetricField:
            text = await page.read_text(self._selectors[field])
            fragments.append(RawFragment(field=field, text=text))
        return fragments
