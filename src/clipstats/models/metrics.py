"""
Pydantic models for the engagement metrics extraction pipeline.

Provides validated data models for extraction requests, raw counter
fragments, successful results, and the typed outcomes each pipeline stage
returns instead of raising.

Models
------
ExtractionConfig
    Immutable configuration handed to an ExtractionService.
MetricRequest
    One extraction request for a single page URL.
RawFragment
    Display text read from one counter element.
MetricResult
    Four parsed counts plus the raw strings they came from.
ParseError
    Why a display string could not be turned into a count.
ResolutionError
    No browser executable exists at any candidate path.
LaunchError
    Browser launch, navigation, or in-page failure.
ExtractionFailure
    Unified failure surface returned by the service.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)

from clipstats.models.enums import (
    FailureKind,
    LaunchErrorReason,
    MetricField,
    ParseErrorKind,
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/114.0.0.0 Safari/537.36"
)
"""Desktop Chrome identity presented to the target page."""

DEFAULT_FALLBACK_PATHS: tuple[Path, ...] = (
    Path("/usr/bin/chromium"),
    Path("/usr/bin/chromium-browser"),
    Path("/usr/bin/google-chrome-stable"),
    Path("/usr/bin/google-chrome"),
)
"""Well-known Chromium install locations, checked in order."""

DEFAULT_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
)
"""Sandboxing is disabled so the browser starts inside containers."""


class ExtractionConfig(BaseModel):
    """
    Configuration for one ExtractionService.

    Replaces process-wide environment lookups: everything the pipeline
    needs to find, launch and drive the browser is passed in explicitly.

    Attributes
    ----------
    executable_path_override : Path | None
        Explicit browser binary, checked before the fallback list.
    fallback_paths : tuple[Path, ...]
        Ordered candidate install locations.
    use_bundled_browser : bool
        When True and no override is set, skip resolution and let
        Playwright launch its bundled Chromium.
    navigation_timeout_seconds : float
        Upper bound for the network-idle navigation wait.
    fragment_timeout_seconds : float
        Upper bound for each counter's presence wait.
    extraction_timeout_seconds : float | None
        Overall deadline for the browser stage, or None for no deadline.
    viewport_width, viewport_height : int
        Page viewport; wide enough that all four counters render.
    user_agent : str
        Request identity presented to the page.
    launch_args : tuple[str, ...]
        Extra Chromium command-line flags.
    """

    model_config = ConfigDict(frozen=True)

    executable_path_override: Path | None = None
    fallback_paths: tuple[Path, ...] = DEFAULT_FALLBACK_PATHS
    use_bundled_browser: bool = True
    navigation_timeout_seconds: float = Field(default=60.0, gt=0)
    fragment_timeout_seconds: float = Field(default=15.0, gt=0)
    extraction_timeout_seconds: float | None = Field(default=120.0, gt=0)
    viewport_width: int = Field(default=1200, gt=0)
    viewport_height: int = Field(default=2000, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS

    @property
    def requires_resolution(self) -> bool:
        """Whether an executable must be resolved before launching."""
        return (
            not self.use_bundled_browser
            or self.executable_path_override is not None
        )


class MetricRequest(BaseModel):
    """A single extraction request. Created per call, never persisted."""

    model_config = ConfigDict(frozen=True)

    url: str


class RawFragment(BaseModel):
    """Display text read from one counter element."""

    model_config = ConfigDict(frozen=True)

    field: MetricField
    text: str


class MetricResult(BaseModel):
    """
    Successfully extracted engagement metrics.

    The four counts are non-negative integers. ``raw`` always carries the
    original display strings for all four fields, keyed identically, so a
    surprising number can be traced back to what the page showed.

    Attributes
    ----------
    likes : int
        Like count.
    comments : int
        Comment count.
    favorites : int
        Favorite (saved) count.
    shares : int
        Share count.
    raw : dict[MetricField, str]
        Original display text per field.
    """

    model_config = ConfigDict(frozen=True)

    likes: int = Field(ge=0)
    comments: int = Field(ge=0)
    favorites: int = Field(ge=0)
    shares: int = Field(ge=0)
    raw: dict[MetricField, str]

    @field_validator("raw")
    @classmethod
    def validate_raw_complete(
        cls, v: dict[MetricField, str]
    ) -> dict[MetricField, str]:
        """
        Validate that raw text is present for every metric.

        Raises
        ------
        ValueError
            If any of the four fields is missing.
        """
        missing = [field.value for field in MetricField if field not in v]
        if missing:
            raise ValueError(f"raw is missing fields: {', '.join(missing)}")
        return v

    def count(self, field: MetricField) -> int:
        """Return the parsed count for ``field``."""
        return int(getattr(self, field.value))


class ParseError(BaseModel):
    """Why a display string could not be parsed into a count."""

    model_config = ConfigDict(frozen=True)

    kind: ParseErrorKind
    text: str | None = None


class ResolutionError(BaseModel):
    """No browser executable exists at any of the paths tried."""

    model_config = ConfigDict(frozen=True)

    tried_paths: list[Path] = Field(default_factory=list)

    @property
    def message(self) -> str:
        """Human-readable summary listing every path checked."""
        if not self.tried_paths:
            return "No browser executable configured"
        tried = ", ".join(str(path) for path in self.tried_paths)
        return f"No browser executable found (tried: {tried})"


class LaunchError(BaseModel):
    """Browser launch, navigation or in-page failure."""

    model_config = ConfigDict(frozen=True)

    reason: LaunchErrorReason
    message: str


class ExtractionFailure(BaseModel):
    """
    Any non-success extraction outcome.

    Every failure carries enough context for an operator to diagnose it
    without access to the host: the missing or unparsable fields, the
    paths probed for a browser, and whatever counter text was captured.

    Attributes
    ----------
    kind : FailureKind
        Which stage failed.
    message : str
        Human-readable summary.
    partial_raw : dict[MetricField, str] | None
        Counter text captured before the failure, when available.
    missing_fields : list[MetricField]
        Counters that never appeared (FRAGMENT_TIMEOUT).
    failed_fields : list[MetricField]
        Counters whose text did not parse (PARSE_FAILURE).
    tried_paths : list[str]
        Executable locations probed (RESOLUTION_FAILED).
    launch_reason : LaunchErrorReason | None
        Sub-kind of a LAUNCH_FAILED outcome.
    """

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    message: str
    partial_raw: dict[MetricField, str] | None = None
    missing_fields: list[MetricField] = Field(default_factory=list)
    failed_fields: list[MetricField] = Field(default_factory=list)
    tried_paths: list[str] = Field(default_factory=list)
    launch_reason: LaunchErrorReason | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def details(self) -> str:
        """
        Diagnostic detail line for HTTP and CLI surfaces.

        Returns
        -------
        str
            The message followed by the failure-specific context.
        """
        parts = [self.message]
        if self.missing_fields:
            parts.append(
                "missing: " + ", ".join(f.value for f in self.missing_fields)
            )
        if self.failed_fields:
            parts.append(
                "unparsable: " + ", ".join(f.value for f in self.failed_fields)
            )
        if self.launch_reason is not None:
            parts.append(f"reason: {self.launch_reason.value}")
        if self.partial_raw:
            raw = ", ".join(
                f'{field.value}="{text}"' for field, text in self.partial_raw.items()
            )
            parts.append(f"raw: {raw}")
        return "; ".join(parts)

    @classmethod
    def invalid_input(cls, message: str) -> ExtractionFailure:
        """Build an INVALID_INPUT failure."""
        return cls(kind=FailureKind.INVALID_INPUT, message=message)

    @classmethod
    def from_resolution_error(cls, error: ResolutionError) -> ExtractionFailure:
        """Translate a ResolutionError into the unified failure shape."""
        return cls(
            kind=FailureKind.RESOLUTION_FAILED,
            message=error.message,
            tried_paths=[str(path) for path in error.tried_paths],
        )

    @classmethod
    def from_launch_error(cls, error: LaunchError) -> ExtractionFailure:
        """Translate a LaunchError into the unified failure shape."""
        return cls(
            kind=FailureKind.LAUNCH_FAILED,
            message=error.message,
            launch_reason=error.reason,
        )

    @classmethod
    def fragment_timeout(
        cls,
        missing: list[MetricField],
        timeout_seconds: float,
    ) -> ExtractionFailure:
        """Build a FRAGMENT_TIMEOUT failure naming the missing counters."""
        names = ", ".join(field.value for field in missing)
        return cls(
            kind=FailureKind.FRAGMENT_TIMEOUT,
            message=(
                f"Counter(s) did not appear within {timeout_seconds:g}s: {names}"
            ),
            missing_fields=missing,
        )

    @classmethod
    def parse_failure(
        cls,
        failed: list[MetricField],
        raw: dict[MetricField, str],
    ) -> ExtractionFailure:
        """Build a PARSE_FAILURE failure that keeps all four raw strings."""
        names = ", ".join(field.value for field in failed)
        return cls(
            kind=FailureKind.PARSE_FAILURE,
            message=f"Could not parse counter text for: {names}",
            failed_fields=failed,
            partial_raw=dict(raw),
        )
