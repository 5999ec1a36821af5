"""
Core Utilities

Shared helpers used across the application.
"""
import re
from datetime import datetime, timezone
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def utcnow() -> datetime:
    """
    Return timezone-aware UTC datetime.

    Use this instead of datetime.utcnow() which returns naive datetime.
    """
    return datetime.now(timezone.utc)


def parse_int_prefix(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a query/body value.

    "1500" -> 1500, "149.99" -> 149, "42abc" -> 42, "abc" -> None.
    Storefront clients send numbers as loosely formatted strings, so only the
    leading digits are significant. Digit runs too long for int() also give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        return None
