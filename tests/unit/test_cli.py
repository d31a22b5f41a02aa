from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import pytest

import src.equity.__main__ as cli
from src.data.coin_stats_client import CoinStatsFetchError
from src.equity.config import DEFAULT_COLORS


class FakeClient:
    def __init__(self, fail: bool = False):
        self.fail = fail

    def fetch_raw_trades(self, symbol: str, exchange: str = "binance", db: Optional[str] = None) -> List[Any]:
        if self.fail:
            raise CoinStatsFetchError("500 Internal Server Error", symbol=symbol, status_code=500)
        return [{"close_timestamp": 1700000000, "real_profit_loss": 50}]


def _setup(monkeypatch: pytest.MonkeyPatch, fail: bool = False) -> None:
    cfg = {
        "symbols": ["BTCUSDT"],
        "exchange": "binance",
        "db": "coin-stats",
        "starting_balance": 1000.0,
        "width": 520,
        "height": 260,
        "palette": dict(DEFAULT_COLORS),
    }
    monkeypatch.setattr(cli, "load_equity_config", lambda: cfg)
    monkeypatch.setattr(cli.CoinStatsClient, "from_env", classmethod(lambda c: FakeClient(fail)))


def test_curve_command(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _setup(monkeypatch)
    assert cli.main(["curve"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == [{"day": "2023-11-14", "equity": 1050.0}]


def test_summary_command(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _setup(monkeypatch)
    assert cli.main(["summary"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["net_pnl"] == 50
    assert out["net_positive"] is True


def test_svg_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    _setup(monkeypatch)
    monkeypatch.chdir(tmp_path)
    assert cli.main(["svg"]) == 0
    svg = (tmp_path / "data" / "reports" / "equity_daily.svg").read_text(encoding="utf-8")
    assert "Net PnL: +50.0000" in svg


def test_fetch_failure_exit_code(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _setup(monkeypatch, fail=True)
    assert cli.main(["curve"]) == 1
    assert "500 Internal Server Error" in capsys.readouterr().err


def test_usage(capsys: pytest.CaptureFixture) -> None:
    assert cli.main([]) == 0
    assert "Usage" in capsys.readouterr().out
    assert cli.main(["bogus"]) == 2


def test_info_line_shows_env(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    _setup(monkeypatch)
    monkeypatch.setenv("COIN_STATS_API_BASE", "http://backend.test")
    assert cli.main(["summary"]) == 0
    err = capsys.readouterr().err
    assert "[INFO] env=" in err
    assert "http://backend.test" in err
