from __future__ import annotations

import math

from src.equity.fields import get_close_sec, get_pnl


def test_pnl_priority_order() -> None:
    assert get_pnl({"real_profit_loss": 5, "real_net_pnl": 999}) == 5


def test_pnl_skips_absent_and_coerces_string() -> None:
    t = {"real_profit_loss": None, "real_net_profit_loss": "12.5"}
    assert get_pnl(t) == 12.5


def test_pnl_uncoercible_falls_through() -> None:
    t = {"real_profit_loss": "n/a", "real_net_profit_loss": "inf", "real_net_pnl": " -3 ", "real_pnl": 7}
    assert get_pnl(t) == -3.0


def test_pnl_zero_is_a_value() -> None:
    assert get_pnl({"real_profit_loss": 0, "real_pnl": 4}) == 0


def test_pnl_blank_string_is_not_a_number() -> None:
    assert get_pnl({"real_profit_loss": "  ", "real_pnl": 2}) == 2


def test_pnl_numeric_nan_is_returned_as_is() -> None:
    # the aggregator drops it, the resolver does not look further
    v = get_pnl({"real_profit_loss": float("nan"), "real_pnl": 1})
    assert v is not None and math.isnan(v)


def test_pnl_missing() -> None:
    assert get_pnl({"profit": 10}) is None
    assert get_pnl({}) is None
    assert get_pnl("not a trade") is None


def test_close_time_priority() -> None:
    t = {
        "exit": 1700000000,
        "close_time": "2020-01-01T00:00:00Z",
        "entry_timestamp": 1600000000,
    }
    assert get_close_sec(t) == 1700000000


def test_close_time_skips_unparseable_field() -> None:
    t = {"close_timestamp": "??", "exit": None, "close_time": "1700000000000"}
    assert get_close_sec(t) == 1700000000


def test_close_time_zero_stops_search() -> None:
    assert get_close_sec({"close_timestamp": 0, "timestamp": 1700000000}) == 0


def test_close_time_falls_back_to_entry() -> None:
    assert get_close_sec({"entry_timestamp": "1700000000"}) == 1700000000


def test_close_time_missing() -> None:
    assert get_close_sec({"foo": "bar"}) is None
    assert get_close_sec(None) is None
