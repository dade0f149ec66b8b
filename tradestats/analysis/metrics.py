"""Core performance metrics over a set of closed trades.

Every function returns a finite number. Ratios whose denominator is zero
fall back to 0.0, or to ``PROFIT_FACTOR_CAP`` for a profit factor with
winners but no losers.
"""

from __future__ import annotations

from dataclasses import dataclass

from tradestats.core.types import TradeRecord

PROFIT_FACTOR_CAP = 999.0


@dataclass(frozen=True, slots=True)
class CoreMetrics:
    """Aggregate statistics for a trade set. Rates are percentages (0-100)."""

    total_trades: int = 0
    win_trades: int = 0
    loss_trades: int = 0
    total_pnl: float = 0.0
    win_rate: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    avg_rr: float = 0.0
    kelly_percent: float = 0.0


def calculate_win_rate(trades: list[TradeRecord]) -> float:
    """Percentage of winning trades (0 to 100).

    Break-even trades (result == 0) count in the denominator but not as wins.
    Returns 0.0 if the trade list is empty.
    """
    if not trades:
        return 0.0
    winners = sum(1 for t in trades if t.result > 0)
    return winners / len(trades) * 100


def calculate_profit_factor(
    trades: list[TradeRecord],
    cap: float = PROFIT_FACTOR_CAP,
) -> float:
    """Gross profit divided by gross loss.

    Returns:
        0.0 if there are no winners.
        ``cap`` if there are winners but no losers, or the ratio exceeds it.
        The ratio otherwise.
    """
    gross_profit = sum(t.result for t in trades if t.result > 0)
    gross_loss = abs(sum(t.result for t in trades if t.result < 0))
    if gross_loss == 0.0:
        return cap if gross_profit > 0 else 0.0
    return min(gross_profit / gross_loss, cap)


def calculate_expectancy(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """Expected P&L per trade from a win rate (percent) and average win/loss sizes."""
    return (win_rate / 100 * avg_win) - ((100 - win_rate) / 100 * avg_loss)


def calculate_kelly_percent(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """Kelly criterion as a percentage of capital.

    Unclamped: a negative value means the history shows no edge. Returns
    0.0 when there are no wins or no losses to size against.
    """
    if win_rate <= 0 or avg_loss <= 0:
        return 0.0
    payoff = avg_win / avg_loss
    if payoff == 0:
        return 0.0
    p = win_rate / 100
    return (p - (1 - p) / payoff) * 100


def clamp_kelly(kelly_percent: float) -> float:
    """Clamp a raw Kelly percentage to the displayable 0-100 range."""
    return max(0.0, min(100.0, kelly_percent))


def calculate_core_metrics(
    trades: list[TradeRecord],
    profit_factor_cap: float = PROFIT_FACTOR_CAP,
) -> CoreMetrics:
    """Compute every aggregate metric for an already-filtered closed trade list."""
    if not trades:
        return CoreMetrics()

    wins = [t.result for t in trades if t.result > 0]
    losses = [t.result for t in trades if t.result < 0]

    total_pnl = sum(t.result for t in trades)
    win_rate = len(wins) / len(trades) * 100

    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = abs(sum(losses) / len(losses)) if losses else 0.0

    return CoreMetrics(
        total_trades=len(trades),
        win_trades=len(wins),
        loss_trades=len(losses),
        total_pnl=total_pnl,
        win_rate=win_rate,
        avg_win=avg_win,
        avg_loss=avg_loss,
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        profit_factor=calculate_profit_factor(trades, cap=profit_factor_cap),
        expectancy=calculate_expectancy(win_rate, avg_win, avg_loss),
        avg_rr=avg_win / avg_loss if avg_loss > 0 else 0.0,
        kelly_percent=calculate_kelly_percent(win_rate, avg_win, avg_loss),
    )
