# src/reports/plot_equity.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # type: ignore
import pandas as pd

from src.equity.config import DEFAULT_COLORS
from src.equity.curve import format_net_pnl, summarize_equity

REPORT_DIR = Path("data") / "reports"


def plot_equity_png(
    points: List[Dict[str, Any]],
    starting_balance: float,
    out_path: Optional[Path] = None,
    palette: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Daily equity curve as PNG. Returns None when there is nothing to draw."""
    if not points:
        print("no equity points to plot")
        return None

    colors = dict(DEFAULT_COLORS)
    if palette:
        colors.update(palette)

    s = summarize_equity(points, starting_balance)
    days = pd.to_datetime([p["day"] for p in points], format="%Y-%m-%d")
    equity = [p["equity"] for p in points]
    line_color = colors["linePos"] if s["net_positive"] else colors["lineNeg"]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(days, equity, linewidth=1.5, color=line_color, marker="o", markersize=3)
    if s["min_equity"] <= starting_balance <= s["max_equity"]:
        ax.axhline(starting_balance, color=colors["grid"], linestyle="--", linewidth=1)
    ax.set_title(f"Equity curve (daily) - Net PnL {format_net_pnl(s['net_pnl'])}")
    ax.set_xlabel("day (UTC)")
    ax.set_ylabel("equity")
    ax.grid(True, linestyle=":", linewidth=0.5)

    out = out_path or REPORT_DIR / "equity_daily.png"
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.autofmt_xdate()
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)
    return out


__all__ = ["plot_equity_png"]
