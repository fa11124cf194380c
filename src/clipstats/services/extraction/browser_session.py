"""
Headless browser session lifecycle.

A ``BrowserSession`` owns exactly one Chromium process (started through
Playwright) and one page within it. It opens the target URL with a fixed
viewport and user-agent, and guarantees the process is torn down on every
exit path, including cancellation of the surrounding task.

Classes
-------
PageHandle
    Protocol for the page operations the metric extractor needs.
PlaywrightPageHandle
    PageHandle backed by a Playwright ``Page``.
BrowserSession
    Scoped owner of one browser process and page.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import Any, Protocol

from playwright.async_api import Browser, BrowserContext, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from clipstats.models.enums import LaunchErrorReason
from clipstats.models.metrics import ExtractionConfig, LaunchError

logger = logging.getLogger(__name__)

# Visible text first; textContent covers elements present but not rendered.
_READ_TEXT_SCRIPT = "el => el.innerText || el.textContent || ''"


class PageHandle(Protocol):
    """Page operations consumed by MetricExtractor."""

    async def wait_for_fragment(self, selector: str, timeout_ms: float) -> bool:
        """Wait until ``selector`` is attached; False if the wait timed out."""
        ...

    async def read_text(self, selector: str) -> str:
        """Read the text of the first element matching ``selector``."""
        ...


class PlaywrightPageHandle:
    """
    PageHandle backed by a Playwright page.

    Parameters
    ----------
    page : Page
        The open page. Owned by the BrowserSession, not by this handle.
    """

    def __init__(self, page: Page) -> None:
        self._page = page

    async def wait_for_fragment(self, selector: str, timeout_ms: float) -> bool:
        try:
            await self._page.wait_for_selector(
                selector, state="attached", timeout=timeout_ms
            )
        except PlaywrightTimeoutError:
            return False
        return True

    async def read_text(self, selector: str) -> str:
        text = await self._page.eval_on_selector(selector, _READ_TEXT_SCRIPT)
        return "" if text is None else str(text)


class BrowserSession:
    """
    Scoped owner of one headless browser process and one page.

    Each session launches exactly one browser on ``open()`` and releases
    it on ``close()``. ``close()`` is idempotent and safe after a failed
    or partial ``open()``; using the session as an async context manager
    calls it on every exit path.

    Parameters
    ----------
    config : ExtractionConfig
        Viewport, user-agent, launch flags and navigation timeout.
    executable_path : Path | None
        Browser binary to launch, or None for Playwright's bundled one.
    playwright_factory : Callable[[], Any]
        Returns an object whose ``start()`` coroutine yields a Playwright
        driver. Defaults to ``async_playwright``; injectable for tests.

    Examples
    --------
    >>> async with BrowserSession(config) as session:
    ...     page = await session.open("https://www.tiktok.com/@user/video/1")
    ...     if not isinstance(page, LaunchError):
    ...         text = await page.read_text('strong[data-e2e="like-count"]')
    """

    def __init__(
        self,
        config: ExtractionConfig,
        executable_path: Path | None = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ) -> None:
        self._config = config
        self._executable_path = executable_path
        self._playwright_factory = playwright_factory

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._opened = False
        self._closed = False

    @property
    def is_closed(self) -> bool:
        """Whether ``close()`` has run."""
        return self._closed

    async def __aenter__(self) -> BrowserSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def open(self, url: str) -> PageHandle | LaunchError:
        """
        Launch the browser and navigate to ``url``.

        Navigation waits for the network to go idle, bounded by the
        configured navigation timeout.

        Parameters
        ----------
        url : str
            Page to open.

        Returns
        -------
        PageHandle | LaunchError
            A handle on the loaded page, or a ``LaunchError`` whose reason
            is LAUNCH, NAVIGATION or NAVIGATION_TIMEOUT.

        Raises
        ------
        RuntimeError
            If the session was already opened or closed.
        """
        if self._opened or self._closed:
            raise RuntimeError("BrowserSession can only be opened once")
        self._opened = True

        launch_kwargs: dict[str, Any] = {
            "headless": True,
            "args": list(self._config.launch_args),
        }
        if self._executable_path is not None:
            launch_kwargs["executable_path"] = str(self._executable_path)

        try:
            self._playwright = await self._playwright_factory().start()
            self._browser = await self._playwright.chromium.launch(**launch_kwargs)
            self._context = await self._browser.new_context(
                viewport={
                    "width": self._config.viewport_width,
                    "height": self._config.viewport_height,
                },
                user_agent=self._config.user_agent,
            )
            self._page = await self._context.new_page()
        except PlaywrightError as e:
            logger.warning("Browser launch failed: %s", e.message)
            return LaunchError(
                reason=LaunchErrorReason.LAUNCH,
                message=f"Browser launch failed: {e.message}",
            )

        timeout_seconds = self._config.navigation_timeout_seconds
        try:
            await self._page.goto(
                url, wait_until="networkidle", timeout=timeout_seconds * 1000
            )
        except PlaywrightTimeoutError:
            logger.warning(
                "Navigation to %s did not settle within %.0fs", url, timeout_seconds
            )
            return LaunchError(
                reason=LaunchErrorReason.NAVIGATION_TIMEOUT,
                message=(
                    f"Navigation did not settle within {timeout_seconds:g}s"
                ),
            )
        except PlaywrightError as e:
            logger.warning("Navigation to %s failed: %s", url, e.message)
            return LaunchError(
                reason=LaunchErrorReason.NAVIGATION,
                message=f"Navigation failed: {e.message}",
            )

        logger.debug("Opened %s", url)
        return PlaywrightPageHandle(self._page)

    async def close(self) -> None:
        """
        Release the page, context, browser process and Playwright driver.

        Runs at most once. Teardown is shielded from cancellation: if the
        calling task is cancelled mid-teardown, the release still runs to
        completion before the cancellation propagates, however many times
        the caller is cancelled.
        """
        if self._closed:
            return
        self._closed = True

        teardown = asyncio.ensure_future(self._teardown())
        cancelled: asyncio.CancelledError | None = None
        while not teardown.done():
            try:
                await asyncio.shield(teardown)
            except asyncio.CancelledError as e:
                cancelled = e
        if cancelled is not None:
            raise cancelled

    async def _teardown(self) -> None:
        """Close every acquired resource, newest first."""
        if self._page is not None:
            try:
                await self._page.close()
            except PlaywrightError as e:
                logger.warning("Error closing page: %s", e.message)
        if self._context is not None:
            try:
                await self._context.close()
            except PlaywrightError as e:
                logger.warning("Error closing browser context: %s", e.message)
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as e:
                logger.warning("Error closing browser: %s", e.message)
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as e:
                logger.warning("Error stopping Playwright driver: %s", e.message)

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        logger.debug("Browser session closed")
