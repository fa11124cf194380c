"""
Extraction orchestration.

``ExtractionService.extract(url)`` is the single public operation of the
pipeline. It validates the URL, resolves a browser executable when the
deployment needs one, opens a BrowserSession scoped to the call, delegates
to MetricExtractor, and translates every failure into an
``ExtractionFailure``. The session is closed before ``extract`` returns on
every path.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

from playwright.async_api import Error as PlaywrightError

from clipstats.models.enums import LaunchErrorReason
from clipstats.models.metrics import (
    ExtractionConfig,
    ExtractionFailure,
    LaunchError,
    MetricRequest,
    MetricResult,
    ResolutionError,
)
from clipstats.services.extraction.browser_session import BrowserSession
from clipstats.services.extraction.executable_resolver import ExecutableResolver
from clipstats.services.extraction.metric_extractor import MetricExtractor

logger = logging.getLogger(__name__)

T = TypeVar("T")

SessionFactory = Callable[[ExtractionConfig, Path | None], BrowserSession]


class ExtractionService:
    """
    Public entry point for engagement metric extraction.

    Each ``extract`` call owns its own browser process, so concurrent
    calls share no state and need no locking.

    Parameters
    ----------
    config : ExtractionConfig | None
        Browser discovery, timing and identity settings.
    resolver : ExecutableResolver | None
        Executable lookup; built from ``config`` when omitted.
    session_factory : SessionFactory
        Creates a BrowserSession from ``(config, executable_path)``.
    extractor : MetricExtractor | None
        Counter extractor; built from ``config`` when omitted.

    Examples
    --------
    >>> service = ExtractionService(settings.extraction_config())
    >>> outcome = await service.extract("https://www.tiktok.com/@user/video/1")
    >>> if isinstance(outcome, ExtractionFailure):
    ...     print(outcome.kind, outcome.details)
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        resolver: ExecutableResolver | None = None,
        session_factory: SessionFactory = BrowserSession,
        extractor: MetricExtractor | None = None,
    ) -> None:
        self._config = config or ExtractionConfig()
        self._resolver = resolver or ExecutableResolver(
            override=self._config.executable_path_override,
            fallback_paths=self._config.fallback_paths,
        )
        self._session_factory = session_factory
        self._extractor = extractor or MetricExtractor(
            fragment_timeout_seconds=self._config.fragment_timeout_seconds
        )

    @property
    def config(self) -> ExtractionConfig:
        """Configuration this service was built with."""
        return self._config

    async def extract(self, url: str | None) -> MetricResult | ExtractionFailure:
        """
        Extract the four engagement counts from the page at ``url``.

        Parameters
        ----------
        url : str | None
            Page to inspect.

        Returns
        -------
        MetricResult | ExtractionFailure
            Parsed counts with their raw strings, or a failure whose kind
            is one of INVALID_INPUT, RESOLUTION_FAILED, LAUNCH_FAILED,
            FRAGMENT_TIMEOUT or PARSE_FAILURE.
        """
        if url is None or not url.strip():
            return ExtractionFailure.invalid_input("Missing url parameter")
        request = MetricRequest(url=url.strip())

        executable_path: Path | None = None
        if self._config.requires_resolution:
            resolved = self._resolver.resolve()
            if isinstance(resolved, ResolutionError):
                logger.error("Browser resolution failed: %s", resolved.message)
                return ExtractionFailure.from_resolution_error(resolved)
            executable_path = resolved

        start = time.perf_counter()
        async with self._session_factory(self._config, executable_path) as session:
            try:
                outcome = await self._with_deadline(self._run(session, request))
            except asyncio.TimeoutError:
                outcome = ExtractionFailure.from_launch_error(
                    LaunchError(
                        reason=LaunchErrorReason.DEADLINE_EXCEEDED,
                        message=(
                            "Extraction did not finish within "
                            f"{self._config.extraction_timeout_seconds:g}s"
                        ),
                    )
                )
            except PlaywrightError as e:
                logger.exception("Browser error while extracting %s", request.url)
                outcome = ExtractionFailure.from_launch_error(
                    LaunchError(
                        reason=LaunchErrorReason.BROWSER_ERROR,
                        message=f"Browser error: {e.message}",
                    )
                )
        duration = time.perf_counter() - start

        if isinstance(outcome, ExtractionFailure):
            logger.warning(
                "Extraction failed for %s (%s, %.3fs): %s",
                request.url,
                outcome.kind.value,
                duration,
                outcome.details,
            )
        else:
            logger.info("Extracted metrics for %s (%.3fs)", request.url, duration)
        return outcome

    async def _run(
        self, session: BrowserSession, request: MetricRequest
    ) -> MetricResult | ExtractionFailure:
        """Open the page and run the extractor against it."""
        page = await session.open(request.url)
        if isinstance(page, LaunchError):
            return ExtractionFailure.from_launch_error(page)
        return await self._extractor.extract(page)

    async def _with_deadline(self, awaitable: Awaitable[T]) -> T:
        """Apply the overall extraction deadline, if one is configured."""
        timeout = self._config.extraction_timeout_seconds
        if timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=timeout)
