"""
Tests for clipstats exceptions.
"""

from __future__ import annotations

import pytest

from clipstats.exceptions import (
    EXIT_CODE_FRAGMENT_TIMEOUT,
    EXIT_CODE_INVALID_INPUT,
    EXIT_CODE_LAUNCH_FAILED,
    EXIT_CODE_PARSE_FAILURE,
    EXIT_CODE_RESOLUTION_FAILED,
    ClipstatsError,
    ExtractionError,
)
from clipstats.models.enums import FailureKind, LaunchErrorReason, MetricField
from clipstats.models.metrics import (
    ExtractionFailure,
    LaunchError,
    ResolutionError,
)


class TestClipstatsError:
    """Tests for the base exception."""

    def test_message(self):
        error = ClipstatsError("something broke")
        assert error.message == "something broke"
        assert str(error) == "something broke"


class TestExtractionError:
    """Tests for ExtractionError."""

    def test_carries_failure(self):
        """Test that the failure and its details are kept."""
        failure = ExtractionFailure.invalid_input("Missing url parameter")
        error = ExtractionError(failure)

        assert error.failure is failure
        assert str(error) == "Missing url parameter"
        assert isinstance(error, ClipstatsError)

    @pytest.mark.parametrize(
        ("failure", "expected"),
        [
            (ExtractionFailure.invalid_input("no url"), EXIT_CODE_INVALID_INPUT),
            (
                ExtractionFailure.from_resolution_error(ResolutionError()),
                EXIT_CODE_RESOLUTION_FAILED,
            ),
            (
                ExtractionFailure.from_launch_error(
                    LaunchError(reason=LaunchErrorReason.LAUNCH, message="x")
                ),
                EXIT_CODE_LAUNCH_FAILED,
            ),
            (
                ExtractionFailure.fragment_timeout([MetricField.LIKES], 15),
                EXIT_CODE_FRAGMENT_TIMEOUT,
            ),
            (
                ExtractionFailure(
                    kind=FailureKind.PARSE_FAILURE, message="unreadable"
                ),
                EXIT_CODE_PARSE_FAILURE,
            ),
        ],
    )
    def test_exit_code_per_kind(self, failure, expected):
        """Test that each failure kind has its own exit code."""
        assert ExtractionError(failure).exit_code == expected

    def test_exit_codes_are_distinct(self):
        """Test that no two kinds share an exit code."""
        codes = {
            EXIT_CODE_INVALID_INPUT,
            EXIT_CODE_RESOLUTION_FAILED,
            EXIT_CODE_LAUNCH_FAILED,
            EXIT_CODE_FRAGMENT_TIMEOUT,
            EXIT_CODE_PARSE_FAILURE,
        }
        assert len(codes) == 5
