# src/data/coin_stats_client.py
from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional

import requests

COIN_STATS_API_BASE = os.getenv("COIN_STATS_API_BASE", "http://localhost:5000")
_TIMEOUT = float(os.getenv("COIN_STATS_TIMEOUT_SEC", "10"))

RAW_TRADES_PATH = "/api/coin-stats/raw"


class CoinStatsFetchError(RuntimeError):
    """
    A raw-trades request failed: non-2xx status or transport error.

    status_code is None when the request never got an HTTP response.
    """

    def __init__(
        self,
        message: str,
        symbol: Optional[str] = None,
        status_code: Optional[int] = None,
        reason: str = "",
    ) -> None:
        super().__init__(message)
        self.symbol = symbol
        self.status_code = status_code
        self.reason = reason


class CoinStatsClient:
    """
    Read-only client for the coin-stats backend.

    Only the raw trade dump per symbol is used:
        GET /api/coin-stats/raw?exchange=binance&symbol=BTCUSDT[&db=...]
    -> {"trades": [ {...}, ... ]}

    `db` is passed through but currently ignored by the server.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.base_url = (base_url if base_url is not None else COIN_STATS_API_BASE).rstrip("/")
        self.timeout = _TIMEOUT if timeout is None else float(timeout)

    @classmethod
    def from_env(cls) -> "CoinStatsClient":
        base = os.getenv("COIN_STATS_API_BASE", COIN_STATS_API_BASE)
        timeout = float(os.getenv("COIN_STATS_TIMEOUT_SEC", str(_TIMEOUT)))
        return cls(base, timeout)

    def fetch_raw_trades(
        self,
        symbol: str,
        exchange: str = "binance",
        db: Optional[str] = None,
    ) -> List[Any]:
        params: Dict[str, Any] = {"exchange": exchange, "symbol": symbol}
        if db:
            params["db"] = db

        url = f"{self.base_url}{RAW_TRADES_PATH}"
        headers = {"User-Agent": "coin-stats-equity/0.1"}
        try:
            r = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise CoinStatsFetchError(str(e) or type(e).__name__, symbol=symbol) from e

        if not 200 <= r.status_code < 300:
            reason = r.reason or ""
            raise CoinStatsFetchError(
                f"{r.status_code} {reason}".strip(),
                symbol=symbol,
                status_code=r.status_code,
                reason=reason,
            )

        try:
            data = r.json()
        except ValueError:
            print(f"[WARN] invalid JSON for {symbol}", file=sys.stderr)
            return []
        if not isinstance(data, dict):
            return []
        trades = data.get("trades")
        return trades if isinstance(trades, list) else []


__all__ = ["CoinStatsClient", "CoinStatsFetchError", "RAW_TRADES_PATH"]
