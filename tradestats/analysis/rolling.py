"""Rolling win rate over the most recent trades."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tradestats.analysis.filters import sort_chronologically
from tradestats.core.types import TradeRecord

DEFAULT_WINDOW = 20
MIN_WINDOW = 5


@dataclass(frozen=True, slots=True)
class RollingPoint:
    """Win rate of the window ending at ``trade_index`` (1-based)."""

    trade_index: int
    timestamp: datetime
    rolling_win_rate: float


def rolling_win_rate(
    trades: list[TradeRecord],
    window: int = DEFAULT_WINDOW,
    min_window: int = MIN_WINDOW,
) -> list[RollingPoint]:
    """Sliding-window win rate in timestamp order.

    The window shrinks to the trade count when there are fewer than
    ``window`` trades; below ``min_window`` the series is empty. Produces
    ``len(trades) - window + 1`` points.
    """
    size = min(window, len(trades))
    if size < min_window:
        return []

    ordered = sort_chronologically(trades)
    wins = [1 if t.result > 0 else 0 for t in ordered]
    in_window = sum(wins[:size])

    points: list[RollingPoint] = []
    for i in range(size - 1, len(ordered)):
        if i >= size:
            in_window += wins[i] - wins[i - size]
        points.append(
            RollingPoint(
                trade_index=i + 1,
                timestamp=ordered[i].timestamp,
                rolling_win_rate=in_window / size * 100,
            )
        )
    return points
