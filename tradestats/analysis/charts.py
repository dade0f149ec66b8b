"""Interactive Plotly chart functions for journal analytics."""

from __future__ import annotations

from pathlib import Path

import plotly.graph_objects as go

from tradestats.analysis.buckets import DurationPoint, TimeBucket, TrendLine
from tradestats.analysis.streaks import EquityPoint

WIN_COLOR = "#28A745"
LOSS_COLOR = "#DC3545"
PRIMARY_COLOR = "#1E90FF"
NO_DATA_COLOR = "#CBD5E1"


def _write_empty(fig: go.Figure, title: str, output_path: str | Path) -> None:
    fig.add_annotation(
        text="No data",
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        showarrow=False,
        font=dict(size=20),
    )
    fig.update_layout(title=title)
    fig.write_html(str(output_path))


def plot_equity_curve(
    equity_curve: list[EquityPoint],
    output_path: str | Path,
    title: str = "Equity Curve",
) -> None:
    """Plot cumulative P&L per trade with drawdown shading and save as HTML.

    Args:
        equity_curve: Points from ``build_equity_curve``.
        output_path: File path for the HTML output.
        title: Chart title.
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    fig = go.Figure()

    if not equity_curve:
        _write_empty(fig, title, output_path)
        return

    trade_numbers = [pt.sequence_index for pt in equity_curve]
    equities = [pt.cumulative_equity for pt in equity_curve]
    peaks = [pt.cumulative_equity + pt.drawdown_from_peak for pt in equity_curve]

    # Peak line (upper bound for drawdown fill)
    fig.add_trace(
        go.Scatter(
            x=trade_numbers,
            y=peaks,
            mode="lines",
            line=dict(width=0),
            showlegend=False,
            hoverinfo="skip",
        )
    )

    # Equity line (fills down to equity from peak to show drawdown)
    fig.add_trace(
        go.Scatter(
            x=trade_numbers,
            y=equities,
            mode="lines+markers",
            name="Equity",
            line=dict(color=PRIMARY_COLOR, width=2),
            fill="tonexty",
            fillcolor="rgba(255, 0, 0, 0.15)",
            text=[f"{pt.timestamp:%Y-%m-%d}" for pt in equity_curve],
        )
    )

    fig.update_layout(
        title=title,
        xaxis_title="Trade #",
        yaxis_title="Cumulative P&L",
        template="plotly_white",
        hovermode="x unified",
    )

    fig.write_html(str(output_path))


def plot_duration_scatter(
    points: list[DurationPoint],
    trend_line: TrendLine | None,
    output_path: str | Path,
    title: str = "Trade Duration vs P&L",
) -> None:
    """Plot holding time against P&L, colored by outcome, with an optional trend line."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    fig = go.Figure()

    if not points:
        _write_empty(fig, title, output_path)
        return

    fig.add_trace(
        go.Scatter(
            x=[p.duration for p in points],
            y=[p.profit for p in points],
            mode="markers",
            name="Trades",
            marker=dict(
                size=10,
                color=[WIN_COLOR if p.outcome == "win" else LOSS_COLOR for p in points],
                line=dict(width=1, color="black"),
            ),
            text=[f"{p.instrument}<br>Duration: {p.label}<br>P&L: {p.profit:+.2f}" for p in points],
            hoverinfo="text",
        )
    )

    if trend_line is not None:
        fig.add_trace(
            go.Scatter(
                x=[trend_line.start_duration, trend_line.end_duration],
                y=[trend_line.start_profit, trend_line.end_profit],
                mode="lines",
                name="Trend",
                line=dict(color=PRIMARY_COLOR, width=2, dash="dash"),
            )
        )

    fig.add_hline(y=0, line_width=1, line_color="gray")
    fig.update_layout(
        title=title,
        xaxis_title="Duration",
        yaxis_title="P&L",
        template="plotly_white",
    )

    fig.write_html(str(output_path))


def plot_weekday_performance(
    buckets: list[TimeBucket],
    output_path: str | Path,
    title: str = "Win Rate by Day of Week",
) -> None:
    """Bar chart of weekday win rates. Days without trades are drawn grey."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    fig = go.Figure()

    if not any(b.has_data for b in buckets):
        _write_empty(fig, title, output_path)
        return

    fig.add_trace(
        go.Bar(
            x=[b.label for b in buckets],
            y=[b.win_rate for b in buckets],
            marker_color=[PRIMARY_COLOR if b.has_data else NO_DATA_COLOR for b in buckets],
            text=[
                f"{b.bucket_key}<br>Trades: {b.trade_count}<br>Total: {b.total_pnl:+.2f}"
                if b.has_data
                else f"{b.bucket_key}<br>No trades"
                for b in buckets
            ],
            hoverinfo="text",
        )
    )

    fig.update_layout(
        title=title,
        xaxis_title="Day",
        yaxis_title="Win Rate (%)",
        yaxis_range=[0, 100],
        template="plotly_white",
    )

    fig.write_html(str(output_path))
