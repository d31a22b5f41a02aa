# src/equity/cycle.py
from __future__ import annotations

import math
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from src.data.coin_stats_client import CoinStatsClient
from src.equity.curve import summarize_equity
from src.equity.pipeline import compute_equity_points


class CycleToken:
    """Marks one fetch cycle; a cancelled cycle must not touch shared state."""

    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class EquityCurveState:
    points: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: str = ""
    starting_balance: float = 1000.0

    @property
    def has_data(self) -> bool:
        return len(self.points) > 0

    @property
    def summary(self) -> Dict[str, Any]:
        return summarize_equity(self.points, self.starting_balance)


def _validate(symbols: Sequence[str], starting_balance: float) -> Tuple[Tuple[str, ...], float]:
    if isinstance(symbols, str):
        raise ValueError(f"symbols must be a list of symbols, not a string: {symbols!r}")
    syms = tuple(symbols)
    for s in syms:
        if not isinstance(s, str) or not s.strip():
            raise ValueError(f"invalid symbol: {s!r}")
    try:
        bal = float(starting_balance)
    except (TypeError, ValueError):
        raise ValueError(f"invalid starting balance: {starting_balance!r}")
    if not math.isfinite(bal) or bal < 0:
        raise ValueError(f"starting balance must be finite and >= 0, got {starting_balance!r}")
    return syms, bal


class EquityCurveController:
    """
    Holds the committed equity series plus loading/error status and
    recomputes it whenever the inputs change.

    Each refresh runs as its own cycle with a fresh CycleToken. Starting a
    new cycle cancels the previous token; the old cycle still finishes its
    HTTP calls but its result is dropped at commit time.
    """

    def __init__(
        self,
        client: CoinStatsClient,
        symbols: Sequence[str],
        exchange: str = "binance",
        starting_balance: float = 1000.0,
        db: Optional[str] = None,
    ) -> None:
        self.client = client
        self.symbols, self.starting_balance = _validate(symbols, starting_balance)
        self.exchange = exchange
        self.db = db

        self._state = EquityCurveState(starting_balance=self.starting_balance)
        self._token: Optional[CycleToken] = None
        self._lock = threading.Lock()
        self._pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="equity-cycle")

    # ------------------------------------------------------------
    # state
    # ------------------------------------------------------------

    @property
    def state(self) -> EquityCurveState:
        with self._lock:
            return EquityCurveState(
                points=list(self._state.points),
                loading=self._state.loading,
                error=self._state.error,
                starting_balance=self._state.starting_balance,
            )

    def _params_key(self) -> Tuple[Any, ...]:
        return (",".join(self.symbols), self.exchange, self.db, self.starting_balance)

    # ------------------------------------------------------------
    # cycles
    # ------------------------------------------------------------

    def _begin(self) -> Tuple[CycleToken, Tuple[Any, ...]]:
        token = CycleToken()
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = token
            self._state.loading = True
            self._state.error = ""
        params = (self.symbols, self.exchange, self.starting_balance, self.db)
        return token, params

    def _run(self, token: CycleToken, params: Tuple[Any, ...]) -> Optional[List[Dict[str, Any]]]:
        symbols, exchange, starting_balance, db = params
        try:
            pts = compute_equity_points(self.client, symbols, exchange, starting_balance, db=db)
        except Exception as e:
            msg = str(e) or "Failed to load"
            with self._lock:
                if token.cancelled:
                    return None
                # alte Punkte bleiben sichtbar
                self._state.error = msg
                self._state.loading = False
            print(f"[WARN] equity cycle failed: {msg}", file=sys.stderr)
            return None

        with self._lock:
            if token.cancelled:
                return None
            self._state.points = pts
            self._state.starting_balance = starting_balance
            self._state.loading = False
        return pts

    def refresh(self) -> Future:
        """Start a new cycle in the background, superseding any running one."""
        token, params = self._begin()
        return self._pool.submit(self._run, token, params)

    def run_cycle(self) -> Optional[List[Dict[str, Any]]]:
        """Same as refresh() but blocking; returns the committed points or None."""
        token, params = self._begin()
        return self._run(token, params)

    def update(
        self,
        symbols: Optional[Sequence[str]] = None,
        exchange: Optional[str] = None,
        db: Optional[str] = None,
        starting_balance: Optional[float] = None,
    ) -> Optional[Future]:
        """Change inputs; only an actual change triggers a new cycle."""
        new_symbols = self.symbols if symbols is None else symbols
        new_balance = self.starting_balance if starting_balance is None else starting_balance
        new_symbols, new_balance = _validate(new_symbols, new_balance)

        before = self._params_key()
        self.symbols = new_symbols
        self.starting_balance = new_balance
        if exchange is not None:
            self.exchange = exchange
        if db is not None:
            self.db = db
        if self._params_key() == before:
            return None
        return self.refresh()

    def close(self) -> None:
        with self._lock:
            if self._token is not None:
                self._token.cancel()
        self._pool.shutdown(wait=False)


__all__ = ["CycleToken", "EquityCurveState", "EquityCurveController"]
