from __future__ import annotations

import pytest

from src.equity.timestamps import to_sec

INSTANT = 1700000000  # 2023-11-14T22:13:20Z


@pytest.mark.parametrize(
    "raw",
    [
        1700000000,
        "1700000000000",
        "1700000000",
        "2023-11-14T22:13:20Z",
        "2023-11-14T22:13:20.000+00:00",
        "2023-11-14 23:13:20+01:00",
    ],
)
def test_all_encodings_same_instant(raw) -> None:
    assert to_sec(raw) == INSTANT


def test_ms_number_above_threshold_is_floored() -> None:
    assert to_sec(2_100_000_000_000) == 2_100_000_000
    assert to_sec(2_100_000_000_999) == 2_100_000_000
    assert to_sec("1700000000999") == INSTANT


def test_ms_number_below_threshold_is_seconds() -> None:
    # numerisch gilt nur > 2e12 als Millisekunden
    assert to_sec(1700000000000) == 1700000000000


def test_seconds_pass_through_unchanged() -> None:
    assert to_sec(0) == 0
    assert to_sec(1.5) == 1.5
    # genau an der Schwelle noch Sekunden
    assert to_sec(2_000_000_000_000) == 2_000_000_000_000


def test_naive_string_is_utc() -> None:
    assert to_sec("2023-11-14T22:13:20") == INSTANT
    assert to_sec("2023-11-14") == 1699920000


@pytest.mark.parametrize(
    "raw",
    [
        None, "", "no-such-time", True, False, float("nan"), float("inf"),
        "now", "today", " NOW ", "Today",
    ],
)
def test_unparseable_is_absent(raw) -> None:
    assert to_sec(raw) is None


def test_never_raises_on_huge_int() -> None:
    assert to_sec(10**400) is None
