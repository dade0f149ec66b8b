"""Tests for the rolling win-rate series."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tradestats.analysis.rolling import rolling_win_rate
from tradestats.core.types import TradeRecord

_BASE_TIME = datetime(2024, 6, 3, 9, 0, tzinfo=UTC)


def _sequence(*results: float) -> list[TradeRecord]:
    trades = []
    for i, result in enumerate(results):
        ts = _BASE_TIME + timedelta(hours=i)
        trades.append(
            TradeRecord(
                id=f"t{i}",
                instrument="US30",
                lot_size=1.0,
                entry_price=39000.0,
                type="sell",
                status="closed",
                open_date=ts,
                timestamp=ts,
                result=result,
            )
        )
    return trades


class TestRollingWinRate:
    def test_below_minimum_is_empty(self) -> None:
        assert rolling_win_rate(_sequence(1, 1, -1, 1)) == []

    def test_empty(self) -> None:
        assert rolling_win_rate([]) == []

    def test_twenty_trades_one_point(self) -> None:
        points = rolling_win_rate(_sequence(*([1] * 15 + [-1] * 5)))
        assert len(points) == 1
        assert points[0].trade_index == 20
        assert points[0].rolling_win_rate == pytest.approx(75.0)

    def test_small_sample_shrinks_window(self) -> None:
        points = rolling_win_rate(_sequence(1, -1, 1, -1, 1))
        assert len(points) == 1
        assert points[0].trade_index == 5
        assert points[0].rolling_win_rate == pytest.approx(60.0)

    def test_slides_over_trailing_window(self) -> None:
        # 20 losses then 5 wins: each new win replaces a loss in the window
        points = rolling_win_rate(_sequence(*([-1] * 20 + [1] * 5)))

        assert len(points) == 25 - 20 + 1
        assert [p.trade_index for p in points] == [20, 21, 22, 23, 24, 25]
        assert [p.rolling_win_rate for p in points] == pytest.approx([0, 5, 10, 15, 20, 25])

    def test_breakeven_is_not_a_win(self) -> None:
        points = rolling_win_rate(_sequence(0, 0, 0, 0, 1))
        assert points[0].rolling_win_rate == pytest.approx(20.0)

    def test_sorted_by_timestamp(self) -> None:
        trades = list(reversed(_sequence(-1, -1, -1, -1, -1, 1)))
        points = rolling_win_rate(trades, window=5)
        # windows: trades 1-5 (all losses), then 2-6 (one win)
        assert [p.rolling_win_rate for p in points] == pytest.approx([0.0, 20.0])
        assert points[-1].timestamp == _BASE_TIME + timedelta(hours=5)

    def test_custom_window(self) -> None:
        points = rolling_win_rate(_sequence(*([1] * 10)), window=3, min_window=2)
        assert len(points) == 8
        assert all(p.rolling_win_rate == pytest.approx(100.0) for p in points)
