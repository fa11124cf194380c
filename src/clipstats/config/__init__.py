"""
Configuration management module for clipstats.

Handles application settings, environment variables, browser discovery
and extraction timing parameters.
"""

from __future__ import annotations

__all__: list[str] = []
