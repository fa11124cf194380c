"""
Browser executable discovery.

Locates a local Chromium binary from an explicit override or a short list
of well-known install paths. Deployments that rely on Playwright's bundled
browser skip this step entirely.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from clipstats.models.metrics import DEFAULT_FALLBACK_PATHS, ResolutionError

logger = logging.getLogger(__name__)


class ExecutableResolver:
    """
    Resolve the browser binary to launch.

    Parameters
    ----------
    override : Path | None
        Explicit executable location, checked first when set.
    fallback_paths : Sequence[Path]
        Candidate install locations, checked in order.
    exists : Callable[[Path], bool]
        Filesystem existence check; injectable for tests.

    Examples
    --------
    >>> resolver = ExecutableResolver(override=Path("/opt/chrome/chrome"))
    >>> outcome = resolver.resolve()
    >>> if isinstance(outcome, ResolutionError):
    ...     print(outcome.message)
    """

    def __init__(
        self,
        override: Path | None = None,
        fallback_paths: Sequence[Path] = DEFAULT_FALLBACK_PATHS,
        exists: Callable[[Path], bool] = Path.exists,
    ) -> None:
        self._override = override
        self._fallback_paths = tuple(fallback_paths)
        self._exists = exists

    @property
    def candidates(self) -> list[Path]:
        """Every path that ``resolve()`` checks, in order."""
        paths = list(self._fallback_paths)
        if self._override is not None:
            paths.insert(0, self._override)
        return paths

    def resolve(self) -> Path | ResolutionError:
        """
        Return the first candidate that exists on disk.

        Returns
        -------
        Path | ResolutionError
            The executable path, or a ``ResolutionError`` listing every
            path that was tried.
        """
        tried: list[Path] = []
        for path in self.candidates:
            tried.append(path)
            if self._exists(path):
                logger.debug("Using browser executable %s", path)
                return path

        logger.warning(
            "No browser executable found after checking %d path(s)", len(tried)
        )
        return ResolutionError(tried_paths=tried)
