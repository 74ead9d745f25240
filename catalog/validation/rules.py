"""
Reusable checks and sanitizers for field chains.

Checks are built by small factories returning a Check with its failure
message. Sanitizers are plain functions; every sanitizer is total (never
raises) and idempotent, so sanitizing sanitized input changes nothing.
"""

import re
from datetime import date, datetime
from typing import Any

from catalog.validation.pipeline import Check

_ALPHANUMERIC_RE = re.compile(r"[A-Za-z0-9]+")

# `&` that does not already start a character reference
_BARE_AMPERSAND_RE = re.compile(r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)")

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}


def _text(value: Any) -> str:
    """Trimmed string form of a raw value; None becomes ""."""
    if value is None:
        return ""
    return str(value).strip()


def parse_iso_date(value: Any) -> date | None:
    """
    Parse an ISO-8601 calendar date.

    Accepts date and datetime objects, "YYYY-MM-DD" strings and ISO
    datetime strings (the date part is kept).

    Returns:
        The parsed date, or None when the value is empty or invalid.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


# ============================================================================
# Checks
# ============================================================================


def required(message: str, min_length: int = 1) -> Check:
    """Trimmed value must be at least `min_length` characters."""
    return Check(test=lambda value: len(_text(value)) >= min_length, message=message)


def max_length(message: str, length: int) -> Check:
    """Trimmed value must be at most `length` characters."""
    return Check(test=lambda value: len(_text(value)) <= length, message=message)


def alphanumeric(message: str) -> Check:
    """Trimmed value may only contain ASCII letters and digits."""
    return Check(
        test=lambda value: _ALPHANUMERIC_RE.fullmatch(_text(value)) is not None,
        message=message,
    )


def iso_date(message: str) -> Check:
    """Value must parse as an ISO-8601 calendar date."""
    return Check(test=lambda value: parse_iso_date(value) is not None, message=message)


# ============================================================================
# Sanitizers
# ============================================================================


def trim(value: Any) -> str | None:
    """
    String form of the value with surrounding whitespace stripped.

    Numbers and other scalars posted as JSON are converted to text first so
    name fields always hold strings; None stays None.
    """
    if value is None:
        return None
    return str(value).strip()


def escape(value: Any) -> Any:
    """
    HTML-escape a string without double-escaping existing entities.

    Example:
        >>> escape("Tom & <Jerry>")
        'Tom &amp; &lt;Jerry&gt;'
        >>> escape(escape("Tom & <Jerry>"))
        'Tom &amp; &lt;Jerry&gt;'
    """
    if not isinstance(value, str):
        return value

    value = _BARE_AMPERSAND_RE.sub("&amp;", value)
    return "".join(_ESCAPES.get(char, char) for char in value)


def to_date(value: Any) -> date | None:
    """Convert a date-like value to a date; anything unparsable becomes None."""
    return parse_iso_date(value)
