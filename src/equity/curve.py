# src/equity/curve.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping


def build_equity_curve(
    daily_pl: Mapping[str, float],
    starting_balance: float,
) -> List[Dict[str, Any]]:
    """
    Prefix sum over the daily buckets, oldest day first.

    YYYY-MM-DD sorts lexicographically in calendar order, so a plain sort of
    the keys is enough.
    """
    curve: List[Dict[str, Any]] = []
    eq = starting_balance
    for day in sorted(daily_pl):
        eq += daily_pl[day]
        curve.append({"day": day, "equity": eq})
    return curve


def summarize_equity(
    points: List[Dict[str, Any]],
    starting_balance: float,
) -> Dict[str, Any]:
    min_eq = max_eq = final_eq = starting_balance
    if points:
        vals = [p["equity"] for p in points]
        min_eq = min(vals)
        max_eq = max(vals)
        final_eq = vals[-1]

    net_pnl = final_eq - starting_balance
    return {
        "days": len(points),
        "starting_balance": starting_balance,
        "min_equity": min_eq,
        "max_equity": max_eq,
        "final_equity": final_eq,
        "net_pnl": net_pnl,
        "net_positive": net_pnl >= 0,
    }


def format_net_pnl(net_pnl: float) -> str:
    sign = "+" if net_pnl >= 0 else ""
    return f"{sign}{net_pnl:.4f}"


__all__ = ["build_equity_curve", "summarize_equity", "format_net_pnl"]
