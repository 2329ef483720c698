"""Shared coercion utilities for raw order records.

Upstream sheets hand us numbers as strings ("1.5kg", "7", " 450 "),
timestamps in several formats and the occasional NaN. The helpers here turn
those into plain Python values without ever raising on bad input.

Examples:
    >>> from butcher_core.cleaning import leading_number, to_number
    >>> leading_number("1.5kg")
    1.5
    >>> leading_number("abc") is None
    True
    >>> to_number("  12 ")
    12.0
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Optional

import pandas as pd

# Same prefix grammar as JavaScript's parseFloat: sign, digits, optional fraction
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def is_missing(x: Any) -> bool:
    """Return True for None and float NaN (including numpy/pandas NaN)."""
    if x is None:
        return True
    if isinstance(x, float) and math.isnan(x):
        return True
    return False


def leading_number(x: Any) -> Optional[float]:
    """Parse the numeric prefix of a value.

    Leading whitespace is skipped and anything after the number is ignored,
    so "2 kg" gives 2.0 and "3pcs" gives 3.0.

    Args:
        x: Value to parse (string, number, or None).

    Returns:
        Parsed float, or None if the value has no numeric prefix or the
        result is not finite.
    """
    if is_missing(x):
        return None
    if isinstance(x, bool):
        return None
    if isinstance(x, (int, float)):
        value = float(x)
        return value if math.isfinite(value) else None

    match = _LEADING_NUMBER_RE.match(str(x).strip())
    if not match:
        return None
    value = float(match.group(0))
    return value if math.isfinite(value) else None


def to_number(x: Any, default: float = 0.0) -> float:
    """Coerce a value to float, falling back to ``default`` instead of NaN."""
    value = leading_number(x)
    return default if value is None else value


def to_optional_number(x: Any) -> Optional[float]:
    """Coerce a value to float, keeping None for missing/unparsable input."""
    return leading_number(x)


def to_datetime(x: Any) -> Optional[datetime]:
    """Parse a timestamp into a naive local ``datetime``.

    Accepts ``datetime`` objects, pandas Timestamps, ISO strings and epoch
    milliseconds (the upstream sheets serialize JS Dates as either).
    Timezone-aware values are converted to local wall-clock time and made naive
    so that hour-of-day and calendar-day bucketing use local time.

    Returns:
        A naive datetime, or None if the value is missing or unparsable.
    """
    if is_missing(x) or x == "":
        return None
    try:
        if isinstance(x, (int, float)) and not isinstance(x, bool):
            ts = pd.to_datetime(x, unit="ms", utc=True)
        else:
            ts = pd.Timestamp(x)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        return ts.to_pydatetime().astimezone().replace(tzinfo=None)
    return ts.to_pydatetime()
