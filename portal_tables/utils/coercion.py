"""
Coercion of raw query-string values.

Query strings carry untrusted text. These helpers turn it into typed values
or ``None``; they never raise and never guess.
"""

import re
from typing import Any, Optional

_INT_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


def coerce_query_int(value: Any) -> Optional[int]:
    """
    Coerce a query-string value to an integer.

    Args:
        value: Raw value, usually a ``str`` or ``None``.

    Returns:
        The integer, or ``None`` for missing, empty or non-integral input.

    Examples:
        >>> coerce_query_int("3")
        3
        >>> coerce_query_int("3.5") is None
        True
        >>> coerce_query_int(None) is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value)
    if not _INT_PATTERN.match(text):
        return None
    return int(text)


def coerce_query_str(value: Any) -> Optional[str]:
    """Return a stripped, non-empty string or ``None``."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
