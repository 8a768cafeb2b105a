from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from typing import Any

"""Tolerant cell value parsers.

All parsers degrade invalid input to a neutral value (0 / False / "") instead
of raising, so a malformed cell never blocks an ingestion. Callers must treat
0 as ambiguous between "truly zero" and "unparseable".
"""

__all__ = [
    "parse_time_string_to_decimal",
    "safe_float",
    "is_not_empty",
    "cell_text",
]

# Full numeric literal (no underscores, no nan/inf spellings)
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _is_missing(value: Any) -> bool:
    # pandas missing marker (NaN) is treated like None
    return value is None or (isinstance(value, float) and math.isnan(value))


def _number_or_none(text: str) -> float | None:
    """Parse one "HH" / "MM" component; empty component counts as 0."""
    stripped = text.strip()
    if stripped == "":
        return 0.0
    if not _NUMBER_RE.fullmatch(stripped):
        return None
    return float(stripped)


def parse_time_string_to_decimal(value: Any) -> float:
    """Convert an "HH:MM" string to decimal hours ("08:30" -> 8.5).

    Returns 0 for None/blank, non-string input, a missing colon or a
    non-numeric component. Parts after the second colon are ignored.
    """
    if not value or not isinstance(value, str) or ":" not in value:
        return 0.0
    parts = value.split(":")
    hours = _number_or_none(parts[0])
    minutes = _number_or_none(parts[1])
    if hours is None or minutes is None:
        return 0.0
    return hours + minutes / 60


def safe_float(value: Any) -> float:
    """Float parse that never raises; unparseable input gives 0.

    Strings are parsed by their leading numeric prefix ("7.5h" -> 7.5).
    """
    if isinstance(value, bool) or _is_missing(value):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        m = _NUMBER_RE.match(value.strip())
        if m:
            return float(m.group(0))
    return 0.0


def is_not_empty(value: Any) -> bool:
    """False for None/NaN and blank strings; True otherwise (0 included)."""
    if _is_missing(value):
        return False
    if isinstance(value, str) and value.strip() == "":
        return False
    return True


def cell_text(value: Any) -> str:
    """Display text for an identity cell (emp id, name, date, clock in/out)."""
    if _is_missing(value):
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        # Excel の数値 ID は 101.0 で届くことがある
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return str(value)
