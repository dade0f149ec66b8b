"""Win/loss streaks, equity curve, and drawdown over closed trades."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from tradestats.analysis.filters import sort_chronologically
from tradestats.core.types import TradeRecord

StreakType = Literal["win", "loss", "none"]


@dataclass(frozen=True, slots=True)
class CurrentStreak:
    type: StreakType = "none"
    count: int = 0


@dataclass(frozen=True, slots=True)
class StreakState:
    """Current run plus the longest runs seen."""

    current_type: StreakType = "none"
    current_count: int = 0
    max_win_streak: int = 0
    max_loss_streak: int = 0


@dataclass(frozen=True, slots=True)
class Drawdown:
    """Largest peak-to-trough decline of cumulative P&L.

    ``max_drawdown`` is in account currency, ``max_drawdown_percent`` is
    relative to the peak and stays 0 while the peak is never positive.
    """

    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0


@dataclass(frozen=True, slots=True)
class EquityPoint:
    """Cumulative P&L after one closed trade."""

    sequence_index: int
    timestamp: datetime
    cumulative_equity: float
    drawdown_from_peak: float
    drawdown_percent: float


def _sign(result: float) -> int:
    if result > 0:
        return 1
    if result < 0:
        return -1
    return 0


def calculate_streaks(trades: list[TradeRecord]) -> tuple[int, int]:
    """Longest consecutive (wins, losses) in timestamp order.

    A break-even trade ends both runs.
    """
    max_wins = max_losses = 0
    wins = losses = 0
    for trade in sort_chronologically(trades):
        if trade.result > 0:
            wins += 1
            losses = 0
        elif trade.result < 0:
            losses += 1
            wins = 0
        else:
            wins = losses = 0
        max_wins = max(max_wins, wins)
        max_losses = max(max_losses, losses)
    return max_wins, max_losses


def calculate_current_streak(trades: list[TradeRecord]) -> CurrentStreak:
    """Run of same-signed results ending at the most recent trade."""
    if not trades:
        return CurrentStreak()

    recent_first = sort_chronologically(trades, reverse=True)
    sign = _sign(recent_first[0].result)
    if sign == 0:
        return CurrentStreak()

    count = 0
    for trade in recent_first:
        if _sign(trade.result) != sign:
            break
        count += 1
    return CurrentStreak(type="win" if sign > 0 else "loss", count=count)


def calculate_streak_state(trades: list[TradeRecord]) -> StreakState:
    max_wins, max_losses = calculate_streaks(trades)
    current = calculate_current_streak(trades)
    return StreakState(
        current_type=current.type,
        current_count=current.count,
        max_win_streak=max_wins,
        max_loss_streak=max_losses,
    )


def build_equity_curve(trades: list[TradeRecord]) -> list[EquityPoint]:
    """One point per trade, in timestamp order, starting from zero equity."""
    curve: list[EquityPoint] = []
    running_total = 0.0
    peak = 0.0
    for index, trade in enumerate(sort_chronologically(trades), start=1):
        running_total += trade.result
        peak = max(peak, running_total)
        drawdown = peak - running_total
        curve.append(
            EquityPoint(
                sequence_index=index,
                timestamp=trade.timestamp,
                cumulative_equity=running_total,
                drawdown_from_peak=drawdown,
                drawdown_percent=drawdown / peak * 100 if peak > 0 else 0.0,
            )
        )
    return curve


def calculate_drawdown(trades: list[TradeRecord]) -> Drawdown:
    """Maximum drawdown of the cumulative P&L curve.

    The peak starts at 0, so an opening loss already counts as drawdown.
    Returns zeros for empty or monotonically increasing curves.
    """
    max_dd = 0.0
    max_dd_pct = 0.0
    for point in build_equity_curve(trades):
        max_dd = max(max_dd, point.drawdown_from_peak)
        max_dd_pct = max(max_dd_pct, point.drawdown_percent)
    return Drawdown(max_drawdown=max_dd, max_drawdown_percent=max_dd_pct)


def calculate_avg_duration(trades: list[TradeRecord]) -> float:
    """Mean holding time in hours over trades with a close date; 0.0 if none."""
    hours = [
        duration.total_seconds() / 3600
        for duration in (t.duration for t in trades)
        if duration is not None
    ]
    if not hours:
        return 0.0
    return sum(hours) / len(hours)
