"""Performance by instrument and by emotion, and the P&L distribution."""

from __future__ import annotations

import math
from dataclasses import dataclass

from tradestats.core.types import TradeRecord


@dataclass(frozen=True, slots=True)
class GroupPerformance:
    """Aggregate over the trades sharing one instrument or emotion."""

    key: str
    trade_count: int
    win_count: int
    total_pnl: float
    win_rate: float
    avg_pnl: float


@dataclass(frozen=True, slots=True)
class DistributionRange:
    """Number of trades in one P&L range."""

    label: str
    count: int


# (label, lower, upper), lower bound exclusive
PNL_RANGES: tuple[tuple[str, float, float], ...] = (
    ("< -$500", -math.inf, -500.0),
    ("-$500 to -$200", -500.0, -200.0),
    ("-$200 to $0", -200.0, 0.0),
    ("$0 to $200", 0.0, 200.0),
    ("$200 to $500", 200.0, 500.0),
    ("> $500", 500.0, math.inf),
)


def _summarize(groups: dict[str, list[TradeRecord]]) -> list[GroupPerformance]:
    rows: list[GroupPerformance] = []
    for key, members in groups.items():
        total = sum(t.result for t in members)
        wins = sum(1 for t in members if t.result > 0)
        rows.append(
            GroupPerformance(
                key=key,
                trade_count=len(members),
                win_count=wins,
                total_pnl=total,
                win_rate=wins / len(members) * 100,
                avg_pnl=total / len(members),
            )
        )
    return rows


def instrument_performance(trades: list[TradeRecord]) -> list[GroupPerformance]:
    """Per-instrument results, most profitable first (ties by symbol)."""
    groups: dict[str, list[TradeRecord]] = {}
    for trade in trades:
        groups.setdefault(trade.instrument, []).append(trade)
    rows = _summarize(groups)
    rows.sort(key=lambda r: (-r.total_pnl, r.key))
    return rows


def emotion_performance(trades: list[TradeRecord]) -> list[GroupPerformance]:
    """Per-emotion results for trades that recorded one, most frequent first."""
    groups: dict[str, list[TradeRecord]] = {}
    for trade in trades:
        if trade.emotion:
            groups.setdefault(trade.emotion, []).append(trade)
    rows = _summarize(groups)
    rows.sort(key=lambda r: (-r.trade_count, r.key))
    return rows


def pnl_distribution(trades: list[TradeRecord]) -> list[DistributionRange]:
    """Histogram of results over the fixed ``PNL_RANGES``."""
    return [
        DistributionRange(
            label=label,
            count=sum(1 for t in trades if lower < t.result <= upper),
        )
        for label, lower, upper in PNL_RANGES
    ]
