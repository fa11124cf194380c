"""
Engagement metrics extraction services.

This package drives a headless browser against a social-video page and
turns its four engagement counters into integers.

The extraction process includes:
- Browser executable discovery (optional per deployment)
- Scoped browser session with guaranteed teardown
- Concurrent wait for the four counter elements
- Suffix- and separator-aware count parsing

Modules
-------
number_parser
    Display text to integer conversion
executable_resolver
    Local browser binary lookup
browser_session
    Playwright-backed browser and page lifecycle
metric_extractor
    Await / read / parse sequence for one page
service
    Public ``extract(url)`` orchestration
"""

from clipstats.services.extraction.browser_session import (
    BrowserSession,
    PageHandle,
    PlaywrightPageHandle,
)
from clipstats.services.extraction.executable_resolver import ExecutableResolver
from clipstats.services.extraction.metric_extractor import (
    DEFAULT_FRAGMENT_SELECTORS,
    MetricExtractor,
)
from clipstats.services.extraction.number_parser import parse_count
from clipstats.services.extraction.service import ExtractionService

__all__ = [
    "BrowserSession",
    "DEFAULT_FRAGMENT_SELECTORS",
    "ExecutableResolver",
    "ExtractionService",
    "MetricExtractor",
    "PageHandle",
    "PlaywrightPageHandle",
    "parse_count",
]
