"""Trade selection — closed-only and look-back period filters."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from tradestats.core.types import PERIODS, Period, TradeRecord

PERIOD_DAYS: dict[Period, int] = {
    "week": 7,
    "month": 30,
    "quarter": 90,
}


def filter_closed(trades: Iterable[TradeRecord]) -> list[TradeRecord]:
    """Closed trades only, in input order."""
    return [t for t in trades if t.is_closed]


def period_start(period: Period, reference_time: datetime) -> datetime | None:
    """Inclusive lower bound for ``period``, or None for "all".

    Raises:
        ValueError: for an unknown period name.
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}'. Expected one of {', '.join(PERIODS)}.")
    if period == "all":
        return None
    return reference_time - timedelta(days=PERIOD_DAYS[period])


def filter_by_period(
    trades: Iterable[TradeRecord],
    period: Period,
    reference_time: datetime,
) -> list[TradeRecord]:
    """Trades whose ``timestamp`` is on or after ``reference_time`` minus the period."""
    start = period_start(period, reference_time)
    if start is None:
        return list(trades)
    return [t for t in trades if t.timestamp >= start]


def select_trades(
    trades: Iterable[TradeRecord],
    period: Period,
    reference_time: datetime,
) -> list[TradeRecord]:
    """The trade set every analytics view works on: closed and in period."""
    return filter_by_period(filter_closed(trades), period, reference_time)


def sort_chronologically(trades: Iterable[TradeRecord], reverse: bool = False) -> list[TradeRecord]:
    """A sorted copy by ``timestamp``. Ties keep input order."""
    return sorted(trades, key=lambda t: t.timestamp, reverse=reverse)
