"""
clipstats - Engagement metrics extraction for social-video pages.

Drives a headless browser against a video page, waits for the like,
comment, favorite and share counters to render, and normalizes their
display text into integers.
"""

from __future__ import annotations

__version__ = "0.3.0"
__author__ = "clipstats"
__email__ = "noreply@clipstats.dev"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__email__", "__license__"]
