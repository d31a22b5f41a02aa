# src/equity/config.py
from __future__ import annotations

# ============================================================
# BOOTSTRAP ENV (einmal, zentral)
# ============================================================
from src.bootstrap.env import PROJECT_ROOT  # noqa: F401  (loads .env via side-effect)

import math
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

CONFIG_DIR = PROJECT_ROOT / "configs"

DEFAULT_SYMBOLS: List[str] = [
    "ADAUSDT",
    "BTCUSDT",
    "ETHUSDT",
    "SOLUSDT",
    "XRPUSDT",
    "DOGEUSDT",
    "PEPEUSDT",
    "TRUMPUSDT",
]

DEFAULT_COLORS: Dict[str, str] = {
    "bg": "#0b1220",
    "grid": "#1f2a44",
    "text": "#cbd5e1",
    "pos": "#22c55e",
    "neg": "#ef4444",
    "linePos": "#22c55e",
    "lineNeg": "#ef4444",
}

DEFAULT_EXCHANGE = "binance"
DEFAULT_DB = "coin-stats"
DEFAULT_STARTING_BALANCE = 1000.0
DEFAULT_WIDTH = 520
DEFAULT_HEIGHT = 260


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        import yaml

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _parse_balance(raw: Any) -> Optional[float]:
    try:
        v = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v) or v < 0:
        return None
    return v


def _parse_symbols(raw: Any) -> List[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        return []
    return [str(s).strip().upper() for s in raw if str(s).strip()]


def load_equity_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Inputs of one equity cycle plus chart settings.

    configs/equity.yaml first, then EQUITY_* environment variables on top.
    Broken values fall back to the defaults.
    """
    cfg = _read_yaml(path or CONFIG_DIR / "equity.yaml")

    symbols = _parse_symbols(cfg.get("symbols", DEFAULT_SYMBOLS))
    env_symbols = os.getenv("EQUITY_SYMBOLS")
    if env_symbols:
        symbols = _parse_symbols(env_symbols)
    if not symbols:
        print("[WARN] no symbols configured, using defaults", file=sys.stderr)
        symbols = list(DEFAULT_SYMBOLS)

    exchange = str(os.getenv("EQUITY_EXCHANGE") or cfg.get("exchange") or DEFAULT_EXCHANGE)
    db = os.getenv("EQUITY_DB") or cfg.get("db") or DEFAULT_DB

    raw_balance = os.getenv("EQUITY_STARTING_BALANCE")
    if raw_balance is None:
        raw_balance = cfg.get("starting_balance", DEFAULT_STARTING_BALANCE)
    starting_balance = _parse_balance(raw_balance)
    if starting_balance is None:
        print(f"[WARN] invalid starting balance {raw_balance!r}, using {DEFAULT_STARTING_BALANCE}", file=sys.stderr)
        starting_balance = DEFAULT_STARTING_BALANCE

    chart = cfg.get("chart") or {}
    if not isinstance(chart, dict):
        chart = {}
    try:
        width = int(chart.get("width", DEFAULT_WIDTH))
        height = int(chart.get("height", DEFAULT_HEIGHT))
    except (TypeError, ValueError):
        width, height = DEFAULT_WIDTH, DEFAULT_HEIGHT

    palette = dict(DEFAULT_COLORS)
    user_palette = cfg.get("palette")
    if isinstance(user_palette, dict):
        palette.update({str(k): str(v) for k, v in user_palette.items()})

    return {
        "symbols": symbols,
        "exchange": exchange,
        "db": str(db),
        "starting_balance": starting_balance,
        "width": width,
        "height": height,
        "palette": palette,
    }


__all__ = ["load_equity_config", "DEFAULT_SYMBOLS", "DEFAULT_COLORS"]
