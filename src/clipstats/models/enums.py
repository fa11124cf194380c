"""
Enums for clipstats models.

Defines enumeration types used across the extraction pipeline for
consistent type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class MetricField(str, Enum):
    """Engagement metrics read from a video page, in fixed read order."""

    LIKES = "likes"
    COMMENTS = "comments"
    FAVORITES = "favorites"
    SHARES = "shares"


class FailureKind(str, Enum):
    """
    Kinds of non-success extraction outcomes.

    INVALID_INPUT: Missing or blank URL, rejected before any browser starts
    RESOLUTION_FAILED: No usable browser executable was found
    LAUNCH_FAILED: Browser process or navigation failure
    FRAGMENT_TIMEOUT: One or more counters never appeared on the page
    PARSE_FAILURE: Counter text was read but is not a recognizable number
    """

    INVALID_INPUT = "invalid_input"
    RESOLUTION_FAILED = "resolution_failed"
    LAUNCH_FAILED = "launch_failed"
    FRAGMENT_TIMEOUT = "fragment_timeout"
    PARSE_FAILURE = "parse_failure"


class ParseErrorKind(str, Enum):
    """Reasons a display string could not be turned into a count."""

    EMPTY = "empty"
    NOT_NUMERIC = "not_numeric"


class LaunchErrorReason(str, Enum):
    """Sub-kinds of LAUNCH_FAILED."""

    LAUNCH = "launch"
    NAVIGATION = "navigation"
    NAVIGATION_TIMEOUT = "navigation_timeout"
    BROWSER_ERROR = "browser_error"
    DEADLINE_EXCEEDED = "deadline_exceeded"
