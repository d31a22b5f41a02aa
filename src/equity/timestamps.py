# src/equity/timestamps.py
from __future__ import annotations

import math
import re
from numbers import Real
from typing import Any, Optional

import pandas as pd

# numerische Werte darüber sind Millisekunden (~ Jahr 2033 in Sekunden * 1000)
MS_THRESHOLD = 2_000_000_000_000

_MS_RE = re.compile(r"[0-9]{13}")
_SEC_RE = re.compile(r"[0-9]{10}")

# pandas liest diese als aktuelle Uhrzeit
_RELATIVE_WORDS = {"now", "today"}


def is_finite(v: Real) -> bool:
    try:
        return math.isfinite(v)
    except OverflowError:
        # int zu groß für float
        return False


def _parse_any(s: str) -> Optional[int]:
    if s.strip().lower() in _RELATIVE_WORDS:
        return None
    try:
        ts = pd.to_datetime(s, utc=True, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    # Timestamp.value = ns seit Epoch
    return int(ts.value // 1_000_000_000)


def to_sec(value: Any) -> Optional[float]:
    """
    Convert a timestamp in any of the shapes the backend hands out into epoch
    seconds.

    Accepted: epoch ms / s as number, 13-digit (ms) or 10-digit (s) strings,
    and any date/time string pandas can parse (naive values are UTC).
    Numeric seconds below the ms threshold come back unchanged, floats
    included. Relative words like "now" are not timestamps. Returns None for
    anything else, never raises.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Real):
        if not is_finite(value):
            return None
        if value > MS_THRESHOLD:
            return math.floor(value / 1000)
        return value  # already seconds

    s = str(value)
    if _MS_RE.fullmatch(s):
        return int(s) // 1000
    if _SEC_RE.fullmatch(s):
        return int(s)
    return _parse_any(s)


__all__ = ["to_sec", "is_finite", "MS_THRESHOLD"]
