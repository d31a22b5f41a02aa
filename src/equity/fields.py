# src/equity/fields.py
from __future__ import annotations

import math
from numbers import Real
from typing import Any, Callable, List, Mapping, Optional, Tuple

from src.equity.timestamps import to_sec

# Reihenfolge = Priorität
CLOSE_TIME_FIELDS: Tuple[str, ...] = (
    "close_timestamp",
    "exit",
    "close_time",
    "timestamp",
    "entry_timestamp",
)


def _coerce_number(raw: Any) -> Optional[float]:
    """Number(raw) for values that are not numbers yet; only finite results count."""
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        v = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    return v if math.isfinite(v) else None


def _numeric_or_coerced(raw: Any) -> Optional[float]:
    # bereits eine Zahl -> direkt übernehmen (Endlichkeit prüft der Aggregator)
    if isinstance(raw, Real) and not isinstance(raw, bool):
        return raw
    return _coerce_number(raw)


PNL_FIELDS: List[Tuple[str, Callable[[Any], Optional[float]]]] = [
    ("real_profit_loss", _numeric_or_coerced),
    ("real_net_profit_loss", _numeric_or_coerced),
    ("real_net_pnl", _numeric_or_coerced),
    ("real_pnl", _numeric_or_coerced),
]


def get_close_sec(trade: Any) -> Optional[float]:
    """Close time of a raw trade in epoch seconds, first usable field wins."""
    if not isinstance(trade, Mapping):
        return None
    for field in CLOSE_TIME_FIELDS:
        sec = to_sec(trade.get(field))
        if sec is not None:
            return sec
    return None


def get_pnl(trade: Any) -> Optional[float]:
    """
    Realised profit/loss of a raw trade.

    Walks PNL_FIELDS in order and stops at the first field whose value is
    present and resolves. Missing fields and values that do not coerce to a
    finite number fall through to the next field.
    """
    if not isinstance(trade, Mapping):
        return None
    for field, resolve in PNL_FIELDS:
        raw = trade.get(field)
        if raw is None:
            continue
        v = resolve(raw)
        if v is not None:
            return v
    return None


__all__ = ["CLOSE_TIME_FIELDS", "PNL_FIELDS", "get_close_sec", "get_pnl"]
