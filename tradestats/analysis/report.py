"""Analytics report — every view computed from one trade snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, is_dataclass
from datetime import UTC, date, datetime, tzinfo
from typing import Any

from tradestats.analysis.breakdowns import (
    DistributionRange,
    GroupPerformance,
    emotion_performance,
    instrument_performance,
    pnl_distribution,
)
from tradestats.analysis.buckets import (
    DurationPoint,
    TimeBucket,
    TrendLine,
    bucket_by_hour,
    bucket_by_month,
    bucket_by_weekday,
    duration_scatter,
    fit_trend_line,
)
from tradestats.analysis.filters import select_trades
from tradestats.analysis.metrics import PROFIT_FACTOR_CAP, CoreMetrics, calculate_core_metrics
from tradestats.analysis.risk_reward import RiskRewardPoint, risk_reward_scatter
from tradestats.analysis.rolling import (
    DEFAULT_WINDOW,
    MIN_WINDOW,
    RollingPoint,
    rolling_win_rate,
)
from tradestats.analysis.streaks import (
    Drawdown,
    EquityPoint,
    StreakState,
    build_equity_curve,
    calculate_avg_duration,
    calculate_drawdown,
    calculate_streak_state,
)
from tradestats.core.types import Period, TradeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsReport:
    """Results for one (trades, period, reference_time) snapshot.

    Holds only derived values; nothing references the input records.
    """

    period: Period
    reference_time: datetime
    open_trades: int
    metrics: CoreMetrics
    streaks: StreakState
    drawdown: Drawdown
    avg_duration_hours: float
    equity_curve: list[EquityPoint]
    monthly: list[TimeBucket]
    weekday: list[TimeBucket]
    hourly: list[TimeBucket]
    duration_points: list[DurationPoint]
    trend_line: TrendLine | None
    rolling_win_rate: list[RollingPoint]
    risk_reward: list[RiskRewardPoint]
    instruments: list[GroupPerformance]
    emotions: list[GroupPerformance]
    distribution: list[DistributionRange]
    profit_factor_cap: float = PROFIT_FACTOR_CAP

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-ready data; datetimes become ISO 8601 strings."""
        result: dict[str, Any] = _to_plain(self)
        return result

    def summary(self) -> str:
        """Human-readable summary of the core metrics."""
        m = self.metrics
        s = self.streaks
        pf_str = f"{m.profit_factor:.2f}" if m.profit_factor < self.profit_factor_cap else "inf"
        if s.current_type == "none":
            current = "-"
        else:
            current = f"{s.current_count} {s.current_type}{'s' if s.current_count != 1 else ''}"
        lines = [
            "=" * 50,
            f"TRADING STATISTICS ({self.period.upper()})",
            "=" * 50,
            f"As of:           {self.reference_time:%Y-%m-%d %H:%M}",
            f"Closed Trades:   {m.total_trades} ({m.win_trades}W / {m.loss_trades}L)",
            f"Open Trades:     {self.open_trades}",
            f"Total P&L:       {m.total_pnl:+,.2f}",
            f"Win Rate:        {m.win_rate:.1f}%",
            f"Avg Win:         {m.avg_win:,.2f}",
            f"Avg Loss:        {m.avg_loss:,.2f}",
            f"Largest Win:     {m.largest_win:,.2f}",
            f"Largest Loss:    {m.largest_loss:,.2f}",
            f"Profit Factor:   {pf_str}",
            f"Expectancy:      {m.expectancy:+,.2f}",
            f"Avg R:R:         {m.avg_rr:.2f}",
            f"Kelly:           {m.kelly_percent:.1f}%",
            f"Max Drawdown:    {self.drawdown.max_drawdown:,.2f} "
            f"({self.drawdown.max_drawdown_percent:.1f}%)",
            f"Win Streak:      {s.max_win_streak}",
            f"Loss Streak:     {s.max_loss_streak}",
            f"Current Streak:  {current}",
            f"Avg Duration:    {self.avg_duration_hours:.1f} h",
            "=" * 50,
        ]
        return "\n".join(lines)


def _to_plain(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        plain = {f.name: _to_plain(getattr(obj, f.name)) for f in fields(obj)}
        if isinstance(obj, TimeBucket):
            plain["has_data"] = obj.has_data
        return plain
    if isinstance(obj, list):
        return [_to_plain(item) for item in obj]
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return obj


def analyze(
    trades: list[TradeRecord],
    period: Period = "all",
    *,
    reference_time: datetime,
    tz: tzinfo = UTC,
    rolling_window: int = DEFAULT_WINDOW,
    rolling_min_window: int = MIN_WINDOW,
    profit_factor_cap: float = PROFIT_FACTOR_CAP,
) -> AnalyticsReport:
    """Compute every analytics view for closed trades in ``period``.

    ``reference_time`` anchors the look-back period; ``tz`` decides which
    calendar month, weekday and hour a trade falls in. The input list is
    not modified.

    Raises:
        ValueError: for an unknown period.
    """
    selected = select_trades(trades, period, reference_time)
    open_count = sum(1 for t in trades if not t.is_closed)
    logger.debug(
        "Analyzing %d closed trades (period=%s, open=%d, total=%d)",
        len(selected),
        period,
        open_count,
        len(trades),
    )

    duration_points = duration_scatter(selected)
    return AnalyticsReport(
        period=period,
        reference_time=reference_time,
        open_trades=open_count,
        metrics=calculate_core_metrics(selected, profit_factor_cap=profit_factor_cap),
        streaks=calculate_streak_state(selected),
        drawdown=calculate_drawdown(selected),
        avg_duration_hours=calculate_avg_duration(selected),
        equity_curve=build_equity_curve(selected),
        monthly=bucket_by_month(selected, tz),
        weekday=bucket_by_weekday(selected, tz),
        hourly=bucket_by_hour(selected, tz),
        duration_points=duration_points,
        trend_line=fit_trend_line(duration_points),
        rolling_win_rate=rolling_win_rate(
            selected, window=rolling_window, min_window=rolling_min_window
        ),
        risk_reward=risk_reward_scatter(selected),
        instruments=instrument_performance(selected),
        emotions=emotion_performance(selected),
        distribution=pnl_distribution(selected),
        profit_factor_cap=profit_factor_cap,
    )
