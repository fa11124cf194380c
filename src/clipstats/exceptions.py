"""
Custom exceptions for the clipstats application.

The extraction pipeline reports expected failures as typed
``ExtractionFailure`` values rather than exceptions. The exceptions here
cover the edges of the application: carrying a failure out of a command
to its exit code, and configuration problems found at startup.
"""

from __future__ import annotations

from clipstats.models.enums import FailureKind
from clipstats.models.metrics import ExtractionFailure


class ClipstatsError(Exception):
    """Base exception for all clipstats errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize ClipstatsError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class ExtractionError(ClipstatsError):
    """
    Exception wrapping an ExtractionFailure for callers that prefer raising.

    Attributes
    ----------
    failure : ExtractionFailure
        The structured failure returned by the pipeline.

    Examples
    --------
    >>> outcome = await service.extract(url)
    >>> if isinstance(outcome, ExtractionFailure):
    ...     raise ExtractionError(outcome)
    """

    def __init__(self, failure: ExtractionFailure) -> None:
        """
        Initialize ExtractionError.

        Parameters
        ----------
        failure : ExtractionFailure
            The structured failure to carry.
        """
        self.failure = failure
        super().__init__(failure.details)

    @property
    def exit_code(self) -> int:
        """CLI exit code for the wrapped failure kind."""
        return EXIT_CODES_BY_KIND.get(self.failure.kind, EXIT_CODE_GENERAL_ERROR)


# CLI exit codes
EXIT_CODE_SUCCESS = 0
EXIT_CODE_GENERAL_ERROR = 1
EXIT_CODE_INVALID_INPUT = 2
EXIT_CODE_RESOLUTION_FAILED = 3
EXIT_CODE_LAUNCH_FAILED = 4
EXIT_CODE_FRAGMENT_TIMEOUT = 5
EXIT_CODE_PARSE_FAILURE = 6
EXIT_CODE_INTERRUPTED = 130  # Standard Unix signal interrupt exit code

EXIT_CODES_BY_KIND: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: EXIT_CODE_INVALID_INPUT,
    FailureKind.RESOLUTION_FAILED: EXIT_CODE_RESOLUTION_FAILED,
    FailureKind.LAUNCH_FAILED: EXIT_CODE_LAUNCH_FAILED,
    FailureKind.FRAGMENT_TIMEOUT: EXIT_CODE_FRAGMENT_TIMEOUT,
    FailureKind.PARSE_FAILURE: EXIT_CODE_PARSE_FAILURE,
}
