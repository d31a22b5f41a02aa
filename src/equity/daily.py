# src/equity/daily.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from src.equity.fields import get_close_sec, get_pnl
from src.equity.timestamps import is_finite


def day_key(sec: float) -> Optional[str]:
    """UTC calendar day (YYYY-MM-DD) of an epoch second, None if out of range."""
    try:
        d = datetime.fromtimestamp(sec, tz=timezone.utc).date()
    except (OverflowError, OSError, ValueError):
        return None
    return d.isoformat()


def aggregate_daily(
    trades: Iterable[Any],
    into: Optional[Dict[str, float]] = None,
) -> Dict[str, float]:
    """
    Sum realised PnL per UTC close day.

    Trades without a usable close time or PnL are dropped silently. Pass
    `into` to keep accumulating into an existing bucket map, e.g. one call
    per symbol for a portfolio-level total.
    """
    daily_pl: Dict[str, float] = {} if into is None else into
    for t in trades:
        sec = get_close_sec(t)
        if sec is None:
            continue
        pl = get_pnl(t)
        if pl is None or not is_finite(pl):
            continue
        day = day_key(sec)
        if day is None:
            continue
        daily_pl[day] = daily_pl.get(day, 0.0) + pl
    return daily_pl


__all__ = ["aggregate_daily", "day_key"]
