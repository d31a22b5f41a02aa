# src/reports/equity_svg.py
from __future__ import annotations

from html import escape
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from src.equity.config import DEFAULT_COLORS
from src.equity.curve import format_net_pnl, summarize_equity

PADDING_LEFT = 40
PADDING_RIGHT = 12
PADDING_TOP = 16
PADDING_BOTTOM = 32


def chart_geometry(
    points: List[Dict[str, Any]],
    width: int,
    height: int,
    starting_balance: float,
) -> Tuple[Callable[[int], float], Callable[[float], float]]:
    """
    Screen mapping for the equity chart: (x_at(index), y_at(equity)).

    x spreads the points evenly over the inner width, a single point sits in
    the middle. y maps [min, max] equity to [bottom, top]; a flat series gets
    a range of 1 so nothing divides by zero.
    """
    inner_w = width - PADDING_LEFT - PADDING_RIGHT
    inner_h = height - PADDING_TOP - PADDING_BOTTOM

    s = summarize_equity(points, starting_balance)
    lo = s["min_equity"]
    hi = s["max_equity"]
    if hi - lo < 1e-6:
        hi = lo + 1

    n = len(points)

    def x_at(idx: int) -> float:
        if n <= 1:
            return PADDING_LEFT + inner_w / 2
        step = inner_w / (n - 1)
        return PADDING_LEFT + idx * step

    def y_at(eq: float) -> float:
        norm = (eq - lo) / (hi - lo)
        return PADDING_TOP + (1 - norm) * inner_h

    return x_at, y_at


def equity_path(points: List[Dict[str, Any]], x_at, y_at) -> str:
    parts = []
    for idx, p in enumerate(points):
        cmd = "M" if idx == 0 else "L"
        parts.append(f"{cmd} {x_at(idx):g} {y_at(p['equity']):g}")
    return " ".join(parts)


def render_equity_svg(
    points: List[Dict[str, Any]],
    starting_balance: float,
    width: int = 520,
    height: int = 260,
    palette: Optional[Mapping[str, str]] = None,
) -> str:
    colors = dict(DEFAULT_COLORS)
    if palette:
        colors.update(palette)
    # Farben landen in Attributen
    colors = {k: escape(str(v), quote=True) for k, v in colors.items()}

    s = summarize_equity(points, starting_balance)
    legend_color = colors["pos"] if s["net_positive"] else colors["neg"]
    legend = (
        f'<text x="{width - PADDING_RIGHT}" y="{PADDING_TOP - 4}" text-anchor="end" font-size="12" '
        f'fill="{legend_color}">Net PnL: {escape(format_net_pnl(s["net_pnl"]))}</text>'
    )
    head = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'role="img" aria-label="Daily equity curve">'
    )
    bg = f'<rect x="0" y="0" width="{width}" height="{height}" fill="{colors["bg"]}"/>'

    if not points:
        return "\n".join([
            head,
            bg,
            f'<text x="{width / 2:g}" y="{height / 2:g}" text-anchor="middle" '
            f'font-size="13" fill="{colors["text"]}">No trades available.</text>',
            legend,
            "</svg>",
        ])

    x_at, y_at = chart_geometry(points, width, height, starting_balance)
    line_color = colors["linePos"] if s["net_positive"] else colors["lineNeg"]
    dot_color = colors["pos"] if s["net_positive"] else colors["neg"]

    out = [head, bg]

    # Referenzlinie auf Startkapital, falls im sichtbaren Bereich
    if s["min_equity"] <= starting_balance <= s["max_equity"]:
        y_ref = y_at(starting_balance)
        out.append(
            f'<line x1="{PADDING_LEFT}" x2="{width - PADDING_RIGHT}" y1="{y_ref:g}" y2="{y_ref:g}" '
            f'stroke="{colors["grid"]}" stroke-width="1" stroke-dasharray="4 4" opacity="0.7"/>'
        )

    out.append(
        f'<path d="{equity_path(points, x_at, y_at)}" fill="none" '
        f'stroke="{line_color}" stroke-width="2"/>'
    )
    out.append(
        f'<circle cx="{x_at(len(points) - 1):g}" cy="{y_at(s["final_equity"]):g}" r="3" fill="{dot_color}"/>'
    )

    # x-Achse: MM-DD
    label_y = height - 8
    for idx, p in enumerate(points):
        out.append(
            f'<text x="{x_at(idx):g}" y="{label_y}" text-anchor="middle" font-size="11" '
            f'fill="{colors["text"]}" opacity="0.7">{escape(p["day"][5:])}</text>'
        )

    out.append(legend)
    out.append("</svg>")
    return "\n".join(out)


__all__ = ["render_equity_svg", "chart_geometry", "equity_path"]
