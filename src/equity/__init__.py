from src.equity.timestamps import to_sec
from src.equity.fields import get_close_sec, get_pnl
from src.equity.daily import aggregate_daily
from src.equity.curve import build_equity_curve, summarize_equity

__all__ = [
    "to_sec",
    "get_close_sec",
    "get_pnl",
    "aggregate_daily",
    "build_equity_curve",
    "summarize_equity",
]
