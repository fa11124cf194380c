"""
Tests for extraction pipeline models.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from clipstats.models.enums import (
    FailureKind,
    LaunchErrorReason,
    MetricField,
    ParseErrorKind,
)
from clipstats.models.metrics import (
    ExtractionConfig,
    ExtractionFailure,
    LaunchError,
    MetricResult,
    ParseError,
    ResolutionError,
)


class TestEnums:
    """Enum values are part of the HTTP and CLI surface."""

    def test_metric_field_order(self) -> None:
        """Test the fixed read order."""
        assert [field.value for field in MetricField] == [
            "likes",
            "comments",
            "favorites",
            "shares",
        ]

    def test_failure_kind_values(self) -> None:
        """Test failure kind wire values."""
        assert {kind.value for kind in FailureKind} == {
            "invalid_input",
            "resolution_failed",
            "launch_failed",
            "fragment_timeout",
            "parse_failure",
        }

    def test_enums_are_strings(self) -> None:
        """Test that enum members compare equal to their values."""
        assert ParseErrorKind.EMPTY == "empty"
        assert LaunchErrorReason.NAVIGATION_TIMEOUT == "navigation_timeout"


class TestExtractionConfig:
    """Tests for ExtractionConfig."""

    def test_defaults(self) -> None:
        """Test default timing, viewport and launch flags."""
        config = ExtractionConfig()

        assert config.navigation_timeout_seconds == 60.0
        assert config.fragment_timeout_seconds == 15.0
        assert config.extraction_timeout_seconds == 120.0
        assert (config.viewport_width, config.viewport_height) == (1200, 2000)
        assert config.launch_args == ("--no-sandbox", "--disable-setuid-sandbox")
        assert config.use_bundled_browser is True

    def test_requires_resolution(self) -> None:
        """Test when executable resolution is needed."""
        assert ExtractionConfig().requires_resolution is False
        assert ExtractionConfig(use_bundled_browser=False).requires_resolution
        assert ExtractionConfig(
            executable_path_override=Path("/opt/chrome")
        ).requires_resolution

    def test_rejects_non_positive_timeouts(self) -> None:
        """Test that timeouts must be positive."""
        with pytest.raises(ValidationError):
            ExtractionConfig(fragment_timeout_seconds=0)

    def test_is_frozen(self) -> None:
        """Test that a config cannot be mutated after construction."""
        config = ExtractionConfig()
        with pytest.raises(ValidationError):
            config.viewport_width = 800  # type: ignore[misc]


class TestMetricResult:
    """Tests for MetricResult."""

    def test_count_by_field(self, metric_result: MetricResult) -> None:
        """Test reading a count by field."""
        assert metric_result.count(MetricField.FAVORITES) == 1100000

    def test_rejects_negative_counts(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that counts are non-negative."""
        with pytest.raises(ValidationError):
            MetricResult(
                likes=-1, comments=0, favorites=0, shares=0, raw=counter_texts
            )

    def test_requires_all_raw_fields(
        self, counter_texts: dict[MetricField, str]
    ) -> None:
        """Test that raw text must cover all four fields."""
        del counter_texts[MetricField.SHARES]
        with pytest.raises(ValidationError, match="raw is missing fields: shares"):
            MetricResult(likes=1, comments=1, favorites=1, shares=1, raw=counter_texts)


class TestErrorValues:
    """Tests for per-stage error values."""

    def test_parse_error_keeps_text(self) -> None:
        """Test that ParseError keeps the rejected text."""
        error = ParseError(kind=ParseErrorKind.NOT_NUMERIC, text="abc")
        assert error.text == "abc"

    def test_resolution_error_message(self) -> None:
        """Test that the message lists the paths tried."""
        error = ResolutionError(
            tried_paths=[Path("/usr/bin/chromium"), Path("/usr/bin/google-chrome")]
        )
        assert error.message == (
            "No browser executable found "
            "(tried: /usr/bin/chromium, /usr/bin/google-chrome)"
        )


class TestExtractionFailure:
    """Tests for ExtractionFailure constructors and details."""

    def test_invalid_input(self) -> None:
        """Test the INVALID_INPUT constructor."""
        failure = ExtractionFailure.invalid_input("Missing url parameter")
        assert failure.kind == FailureKind.INVALID_INPUT
        assert failure.details == "Missing url parameter"

    def test_from_resolution_error(self) -> None:
        """Test that tried paths survive translation."""
        failure = ExtractionFailure.from_resolution_error(
            ResolutionError(tried_paths=[Path("/usr/bin/chromium")])
        )
        assert failure.kind == FailureKind.RESOLUTION_FAILED
        assert failure.tried_paths == ["/usr/bin/chromium"]
        assert "/usr/bin/chromium" in failure.details

    def test_from_launch_error(self) -> None:
        """Test that the launch reason appears in the details."""
        failure = ExtractionFailure.from_launch_error(
            LaunchError(
                reason=LaunchErrorReason.NAVIGATION_TIMEOUT,
                message="Navigation did not settle within 60s",
            )
        )
        assert failure.kind == FailureKind.LAUNCH_FAILED
        assert failure.details == (
            "Navigation did not settle within 60s; reason: navigation_timeout"
        )

    def test_fragment_timeout(self) -> None:
        """Test that the missing counters are named."""
        failure = ExtractionFailure.fragment_timeout(
            [MetricField.COMMENTS, MetricField.SHARES], 15.0
        )
        assert failure.message == (
            "Counter(s) did not appear within 15s: comments, shares"
        )
        assert "missing: comments, shares" in failure.details

    def test_parse_failure(self, counter_texts: dict[MetricField, str]) -> None:
        """Test that every raw string is kept and shown."""
        counter_texts[MetricField.LIKES] = "Like"
        failure = ExtractionFailure.parse_failure([MetricField.LIKES], counter_texts)

        assert failure.partial_raw == counter_texts
        assert failure.details == (
            "Could not parse counter text for: likes; unparsable: likes; "
            'raw: likes="Like", comments="342", favorites="1.1M", shares="89"'
        )

    def test_details_in_dump(self) -> None:
        """Test that details is serialized alongside the fields."""
        dumped = ExtractionFailure.invalid_input("Missing url parameter").model_dump()
        assert dumped["details"] == "Missing url parameter"
