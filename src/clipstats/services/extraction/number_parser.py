"""
Counter text normalization.

Video pages render engagement counts either abbreviated (``"4.3K"``,
``"1.2M"``) or in full with locale-dependent grouping (``"4,321"``,
``"4.321"``). ``parse_count`` turns either form into an integer, or a
``ParseError`` describing why it could not.

Functions
---------
parse_count
    Convert a display string into a non-negative integer count.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal

from clipstats.models.enums import ParseErrorKind
from clipstats.models.metrics import ParseError

_SUFFIX_MULTIPLIERS: dict[str, int] = {
    "K": 1_000,
    "M": 1_000_000,
}

_INTEGER_RE = re.compile(r"^[0-9]+$")
_DECIMAL_RE = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")
_COMMA_DECIMAL_RE = re.compile(r"^[0-9]+,[0-9]{1,2}$")

# Digit runs longer than this are rejected as not a count.
_MAX_DIGITS = 18


def _normalize_decimal(prefix: str) -> str:
    """
    Normalize the numeric part of an abbreviated count.

    A ``,`` is grouping when a ``.`` is also present. A lone ``,`` followed
    by one or two digits is the decimal mark (``"4,3"`` -> ``"4.3"``);
    followed by three it is grouping (``"1,234"`` -> ``"1234"``).

    Parameters
    ----------
    prefix : str
        Text before the K/M suffix.

    Returns
    -------
    str
        The prefix with ``.`` as the only decimal mark.
    """
    if "." not in prefix and _COMMA_DECIMAL_RE.match(prefix):
        return prefix.replace(",", ".")
    return prefix.replace(",", "")


def _digit_count(value: str) -> int:
    return sum(c.isdigit() for c in value)


def parse_count(text: str | None) -> int | ParseError:
    """
    Parse a displayed engagement count into an integer.

    Plain numbers have every ``.`` and ``,`` removed as thousands
    separators. A trailing ``K`` or ``M`` (case-insensitive) multiplies the
    decimal prefix by 1,000 or 1,000,000, rounding half up since the
    abbreviated form is itself approximate.

    Parameters
    ----------
    text : str | None
        Counter text as read from the page, e.g. ``"10.5K"``, ``"1,234"``.

    Returns
    -------
    int | ParseError
        The count, or ``ParseError(kind=EMPTY)`` for missing/blank text and
        ``ParseError(kind=NOT_NUMERIC)`` for anything else unrecognized,
        including digit runs longer than 18 digits.

    Examples
    --------
    >>> parse_count("839")
    839
    >>> parse_count("1.234")
    1234
    >>> parse_count("4.3K")
    4300
    >>> parse_count("1.2M")
    1200000
    >>> parse_count("abc")
    ParseError(kind=<ParseErrorKind.NOT_NUMERIC: 'not_numeric'>, text='abc')
    """
    if text is None or not text.strip():
        return ParseError(kind=ParseErrorKind.EMPTY, text=text)

    cleaned = text.strip().upper()

    multiplier = _SUFFIX_MULTIPLIERS.get(cleaned[-1])
    if multiplier is not None:
        prefix = _normalize_decimal(cleaned[:-1].strip())
        if not _DECIMAL_RE.match(prefix) or _digit_count(prefix) > _MAX_DIGITS:
            return ParseError(kind=ParseErrorKind.NOT_NUMERIC, text=text)
        value = Decimal(prefix) * multiplier
        return int(value.to_integral_value(rounding=ROUND_HALF_UP))

    digits = re.sub(r"[.,]", "", cleaned)
    if not _INTEGER_RE.match(digits) or len(digits) > _MAX_DIGITS:
        return ParseError(kind=ParseErrorKind.NOT_NUMERIC, text=text)
    return int(digits)
