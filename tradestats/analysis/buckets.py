"""Time-bucket aggregation — performance by month, weekday, hour, and duration."""

from __future__ import annotations

import math
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Literal

from tradestats.core.types import TradeRecord

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

DurationUnit = Literal["minutes", "hours", "days"]


@dataclass(frozen=True, slots=True)
class TimeBucket:
    """Aggregate over the trades sharing one key.

    ``trade_count == 0`` marks a zero-filled bucket with no activity, as
    opposed to an active bucket that netted zero P&L.
    """

    bucket_key: str
    label: str
    trade_count: int = 0
    win_count: int = 0
    total_pnl: float = 0.0
    win_rate: float = 0.0
    avg_pnl: float = 0.0

    @property
    def has_data(self) -> bool:
        return self.trade_count > 0


@dataclass(slots=True)
class _Accumulator:
    trade_count: int = 0
    win_count: int = 0
    total_pnl: float = 0.0

    def add(self, trade: TradeRecord) -> None:
        self.trade_count += 1
        self.total_pnl += trade.result
        if trade.result > 0:
            self.win_count += 1

    def to_bucket(self, key: str, label: str) -> TimeBucket:
        if self.trade_count == 0:
            return TimeBucket(bucket_key=key, label=label)
        return TimeBucket(
            bucket_key=key,
            label=label,
            trade_count=self.trade_count,
            win_count=self.win_count,
            total_pnl=self.total_pnl,
            win_rate=self.win_count / self.trade_count * 100,
            avg_pnl=self.total_pnl / self.trade_count,
        )


def _group(
    trades: list[TradeRecord],
    key: Callable[[TradeRecord], Hashable | None],
) -> dict[Hashable, _Accumulator]:
    """Accumulate trades per key. A key of None drops the trade."""
    groups: dict[Hashable, _Accumulator] = {}
    for trade in trades:
        k = key(trade)
        if k is None:
            continue
        groups.setdefault(k, _Accumulator()).add(trade)
    return groups


def bucket_by_month(trades: list[TradeRecord], tz: tzinfo = UTC) -> list[TimeBucket]:
    """One bucket per calendar month of ``timestamp``, oldest first.

    Keys are ``YYYY-MM``; labels read like ``Jun 2024``.
    """

    def month_of(trade: TradeRecord) -> tuple[int, int]:
        local = trade.timestamp.astimezone(tz)
        return local.year, local.month

    groups = _group(trades, month_of)
    buckets: list[TimeBucket] = []
    for year, month in sorted(groups):  # type: ignore[type-var]
        label = datetime(year, month, 1).strftime("%b %Y")
        buckets.append(groups[(year, month)].to_bucket(f"{year:04d}-{month:02d}", label))
    return buckets


def bucket_by_weekday(trades: list[TradeRecord], tz: tzinfo = UTC) -> list[TimeBucket]:
    """Monday to Friday of ``timestamp``, always five buckets in order.

    Weekend trades are left out of this view.
    """

    def weekday_of(trade: TradeRecord) -> int | None:
        weekday = trade.timestamp.astimezone(tz).weekday()
        return weekday if weekday < 5 else None

    groups = _group(trades, weekday_of)
    return [
        groups.get(index, _Accumulator()).to_bucket(day, day[:3])
        for index, day in enumerate(WEEKDAYS)
    ]


def bucket_by_hour(trades: list[TradeRecord], tz: tzinfo = UTC) -> list[TimeBucket]:
    """Hour of day of ``open_date``, always 24 buckets from 00:00 to 23:00."""
    groups = _group(trades, lambda t: t.open_date.astimezone(tz).hour)
    return [
        groups.get(hour, _Accumulator()).to_bucket(str(hour), f"{hour:02d}:00")
        for hour in range(24)
    ]


# --- Duration scatter ---


@dataclass(frozen=True, slots=True)
class DurationPoint:
    """Holding time against P&L for one trade.

    ``duration`` is expressed in ``unit``, which is picked per trade, so
    points with different units are not on a common scale.
    """

    trade_id: str
    instrument: str
    duration: float
    unit: DurationUnit
    label: str
    profit: float
    outcome: Literal["win", "loss"]


@dataclass(frozen=True, slots=True)
class TrendLine:
    """Least-squares fit of profit on duration, with its endpoints."""

    slope: float
    intercept: float
    start_duration: float
    start_profit: float
    end_duration: float
    end_profit: float


def _display_duration(minutes: float) -> tuple[float, DurationUnit, str]:
    if minutes < 60:
        return minutes, "minutes", f"{minutes:.0f} min"
    hours = minutes / 60
    if hours < 24:
        return hours, "hours", f"{hours:.1f} hrs"
    days = hours / 24
    return days, "days", f"{days:.1f} days"


def duration_scatter(trades: list[TradeRecord]) -> list[DurationPoint]:
    """Holding time vs. P&L for trades with a close date, shortest first."""
    points: list[DurationPoint] = []
    for trade in trades:
        if trade.duration is None:
            continue
        minutes = trade.duration.total_seconds() / 60
        value, unit, label = _display_duration(minutes)
        points.append(
            DurationPoint(
                trade_id=trade.id,
                instrument=trade.instrument,
                duration=value,
                unit=unit,
                label=label,
                profit=round(trade.result, 2),
                outcome="win" if trade.result >= 0 else "loss",
            )
        )
    points.sort(key=lambda p: p.duration)
    return points


def fit_trend_line(points: list[DurationPoint]) -> TrendLine | None:
    """Ordinary least-squares line through (duration, profit).

    Returns None for fewer than two points or when all durations are equal.
    """
    n = len(points)
    if n < 2:
        return None

    lo = min(p.duration for p in points)
    hi = max(p.duration for p in points)
    if lo == hi:
        return None

    sum_x = sum(p.duration for p in points)
    sum_y = sum(p.profit for p in points)
    sum_xy = sum(p.duration * p.profit for p in points)
    sum_xx = sum(p.duration * p.duration for p in points)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    if not (math.isfinite(slope) and math.isfinite(intercept)):
        return None

    return TrendLine(
        slope=slope,
        intercept=intercept,
        start_duration=lo,
        start_profit=slope * lo + intercept,
        end_duration=hi,
        end_profit=slope * hi + intercept,
    )
