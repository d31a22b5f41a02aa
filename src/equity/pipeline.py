# src/equity/pipeline.py
from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Dict, List, Optional, Sequence

from src.data.coin_stats_client import CoinStatsClient
from src.equity.curve import build_equity_curve
from src.equity.daily import aggregate_daily


def fetch_all_trades(
    client: CoinStatsClient,
    symbols: Sequence[str],
    exchange: str,
    db: Optional[str] = None,
    max_workers: Optional[int] = None,
) -> List[Any]:
    """
    Fetch raw trades for every symbol in parallel and merge them.

    All or nothing: the first failing request is re-raised and whatever the
    other symbols returned is thrown away. Requests already in flight run to
    completion, their results are ignored.
    """
    if not symbols:
        return []

    workers = max_workers or len(symbols)
    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="coin-stats")
    try:
        futures: List[Future] = [
            pool.submit(client.fetch_raw_trades, sym, exchange, db) for sym in symbols
        ]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        for fut in futures:
            if fut in done and fut.exception() is not None:
                raise fut.exception()  # type: ignore[misc]

        trades: List[Any] = []
        for fut in futures:
            trades.extend(fut.result())
        return trades
    finally:
        # noch nicht gestartete Requests verwerfen
        pool.shutdown(wait=False, cancel_futures=True)


def compute_equity_points(
    client: CoinStatsClient,
    symbols: Sequence[str],
    exchange: str,
    starting_balance: float,
    db: Optional[str] = None,
) -> List[Dict[str, Any]]:
    trades = fetch_all_trades(client, symbols, exchange, db=db)
    daily_pl = aggregate_daily(trades)
    return build_equity_curve(daily_pl, starting_balance)


__all__ = ["fetch_all_trades", "compute_equity_points"]
