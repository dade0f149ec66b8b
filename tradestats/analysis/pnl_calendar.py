"""Monthly P&L calendar — daily results laid out in Sunday-first weeks."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import UTC, date, timedelta, tzinfo

from tradestats.analysis.filters import filter_closed
from tradestats.core.types import TradeRecord


@dataclass(frozen=True, slots=True)
class CalendarDay:
    date: date
    pnl: float
    trade_count: int
    wins: int
    losses: int
    in_month: bool


@dataclass(frozen=True, slots=True)
class MonthSummary:
    total_pnl: float
    total_trades: int
    wins: int
    losses: int
    win_rate: float
    profit_days: int
    loss_days: int
    avg_daily_pnl: float


@dataclass(frozen=True, slots=True)
class CalendarMonth:
    """A month grid plus its summary. ``days`` always spans whole weeks."""

    year: int
    month: int
    days: list[CalendarDay]
    summary: MonthSummary

    @property
    def weeks(self) -> list[list[CalendarDay]]:
        return [self.days[i : i + 7] for i in range(0, len(self.days), 7)]


def _days_since_sunday(day: date) -> int:
    # date.weekday() is Monday=0 .. Sunday=6
    return (day.weekday() + 1) % 7


def build_calendar_month(
    trades: list[TradeRecord],
    year: int,
    month: int,
    tz: tzinfo = UTC,
) -> CalendarMonth:
    """Daily closed-trade P&L for ``year``/``month``, keyed by local ``timestamp`` day.

    Leading and trailing days from neighbouring months fill the first and
    last week; they carry their own trades but are flagged ``in_month=False``
    and do not count towards the summary.

    Raises:
        ValueError: if ``month`` is not in 1..12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    days_in_month = calendar.monthrange(year, month)[1]
    first = date(year, month, 1)
    last = date(year, month, days_in_month)
    grid_start = first - timedelta(days=_days_since_sunday(first))
    grid_end = last + timedelta(days=6 - _days_since_sunday(last))

    by_day: dict[date, list[TradeRecord]] = {}
    for trade in filter_closed(trades):
        day = trade.timestamp.astimezone(tz).date()
        if grid_start <= day <= grid_end:
            by_day.setdefault(day, []).append(trade)

    days: list[CalendarDay] = []
    current = grid_start
    while current <= grid_end:
        members = by_day.get(current, [])
        days.append(
            CalendarDay(
                date=current,
                pnl=sum(t.result for t in members),
                trade_count=len(members),
                wins=sum(1 for t in members if t.result > 0),
                losses=sum(1 for t in members if t.result < 0),
                in_month=current.month == month,
            )
        )
        current += timedelta(days=1)

    month_days = [d for d in days if d.in_month]
    total_pnl = sum(d.pnl for d in month_days)
    total_trades = sum(d.trade_count for d in month_days)
    wins = sum(d.wins for d in month_days)
    losses = sum(d.losses for d in month_days)

    summary = MonthSummary(
        total_pnl=total_pnl,
        total_trades=total_trades,
        wins=wins,
        losses=losses,
        win_rate=wins / total_trades * 100 if total_trades else 0.0,
        profit_days=sum(1 for d in month_days if d.pnl > 0),
        loss_days=sum(1 for d in month_days if d.pnl < 0),
        avg_daily_pnl=total_pnl / days_in_month if total_trades else 0.0,
    )
    return CalendarMonth(year=year, month=month, days=days, summary=summary)


def format_calendar(cal: CalendarMonth) -> str:
    """Plain-text month grid with the daily P&L under each date."""
    title = date(cal.year, cal.month, 1).strftime("%B %Y")
    header = " ".join(f"{name:>9}" for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"))
    lines = [title.center(len(header)), header]
    for week in cal.weeks:
        dates = []
        pnls = []
        for day in week:
            dates.append(f"{day.date.day:>9}" if day.in_month else " " * 9)
            if day.in_month and day.trade_count:
                pnls.append(f"{day.pnl:>+9.2f}")
            else:
                pnls.append(" " * 9)
        lines.append(" ".join(dates))
        lines.append(" ".join(pnls))

    s = cal.summary
    lines += [
        "",
        f"Total P&L:      {s.total_pnl:+,.2f}",
        f"Trades:         {s.total_trades} ({s.wins}W / {s.losses}L)",
        f"Win Rate:       {s.win_rate:.1f}%",
        f"Profit Days:    {s.profit_days}",
        f"Loss Days:      {s.loss_days}",
        f"Avg Daily P&L:  {s.avg_daily_pnl:+,.2f}",
    ]
    return "\n".join(lines)
