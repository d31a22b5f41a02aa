import os

import pytest

from src.data.coin_stats_client import CoinStatsClient, CoinStatsFetchError
from src.equity.daily import aggregate_daily

pytestmark = pytest.mark.skipif(
    not os.getenv("COIN_STATS_API_BASE"),
    reason="COIN_STATS_API_BASE not set (needs a running coin-stats backend)",
)


def test_fetch_raw_trades_live():
    client = CoinStatsClient.from_env()
    try:
        trades = client.fetch_raw_trades("BTCUSDT", exchange="binance", db="coin-stats")
    except CoinStatsFetchError as e:
        # Backend erreichbar, aber z.B. Symbol unbekannt
        pytest.skip(f"backend answered with error: {e}")
    assert isinstance(trades, list)
    # jeder Bucket ist ein YYYY-MM-DD String
    for day in aggregate_daily(trades):
        assert len(day) == 10 and day[4] == "-" and day[7] == "-"
