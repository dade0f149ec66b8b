"""Analysis module — metrics, time buckets, and charts for journaled trades."""

from tradestats.analysis.charts import (
    plot_duration_scatter,
    plot_equity_curve,
    plot_weekday_performance,
)
from tradestats.analysis.metrics import (
    CoreMetrics,
    calculate_core_metrics,
    calculate_expectancy,
    calculate_kelly_percent,
    calculate_profit_factor,
    calculate_win_rate,
    clamp_kelly,
)
from tradestats.analysis.report import AnalyticsReport, analyze

__all__ = [
    "AnalyticsReport",
    "CoreMetrics",
    "analyze",
    "calculate_core_metrics",
    "calculate_expectancy",
    "calculate_kelly_percent",
    "calculate_profit_factor",
    "calculate_win_rate",
    "clamp_kelly",
    "plot_duration_scatter",
    "plot_equity_curve",
    "plot_weekday_performance",
]
