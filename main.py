"""Tradestats — CLI entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from tradestats.config import settings, setup_logging
from tradestats.core.types import PERIODS, TradeRecord

logger = logging.getLogger(__name__)


def _parse_date(date_str: str) -> datetime:
    """Parse a YYYY-MM-DD string into a timezone-aware UTC datetime."""
    try:
        dt = datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD.") from None
    return dt.replace(tzinfo=UTC)


def _parse_month(month_str: str) -> tuple[int, int]:
    """Parse a YYYY-MM string into (year, month)."""
    try:
        dt = datetime.strptime(month_str, "%Y-%m")
    except ValueError:
        raise ValueError(f"Invalid month format: '{month_str}'. Expected YYYY-MM.") from None
    return dt.year, dt.month


def _reference_time(args: argparse.Namespace) -> datetime:
    """End of the --as-of day, or the current UTC time."""
    if args.as_of is None:
        return datetime.now(UTC)
    try:
        as_of = _parse_date(args.as_of)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    return as_of.replace(hour=23, minute=59, second=59)


def _load(args: argparse.Namespace) -> list[TradeRecord]:
    from tradestats.core.ingest import TradeValidationError, load_trades

    try:
        return load_trades(args.trades, strict=not args.skip_invalid)
    except FileNotFoundError:
        print(f"Error: trade file not found: {args.trades}")
        sys.exit(1)
    except (TradeValidationError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_stats(args: argparse.Namespace) -> None:
    """Print the statistics summary and write report, charts, and CSV."""
    from tradestats.analysis.charts import (
        plot_duration_scatter,
        plot_equity_curve,
        plot_weekday_performance,
    )
    from tradestats.analysis.filters import select_trades
    from tradestats.analysis.report import analyze
    from tradestats.export import export_trades_csv

    trades = _load(args)
    reference_time = _reference_time(args)

    logger.info(
        "Computing statistics: trades=%d, period=%s, as_of=%s",
        len(trades),
        args.period,
        reference_time.isoformat(),
    )

    report = analyze(
        trades,
        args.period,
        reference_time=reference_time,
        tz=settings.tz,
        rolling_window=settings.rolling_window_size,
        rolling_min_window=settings.rolling_window_min,
        profit_factor_cap=settings.profit_factor_cap,
    )

    print(report.summary())

    output_dir = Path(args.output) / args.period
    output_dir.mkdir(parents=True, exist_ok=True)

    report_path = output_dir / "report.json"
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, sort_keys=True)
    print(f"\nReport JSON:        {report_path}")

    equity_path = output_dir / "equity_curve.html"
    plot_equity_curve(report.equity_curve, equity_path)
    print(f"Equity curve chart: {equity_path}")

    duration_path = output_dir / "duration_scatter.html"
    plot_duration_scatter(report.duration_points, report.trend_line, duration_path)
    print(f"Duration chart:     {duration_path}")

    weekday_path = output_dir / "weekday.html"
    plot_weekday_performance(report.weekday, weekday_path)
    print(f"Weekday chart:      {weekday_path}")

    trades_path = output_dir / "trades.csv"
    export_trades_csv(select_trades(trades, args.period, reference_time), trades_path)
    print(f"Trades CSV:         {trades_path}")

    logger.info("Statistics complete. Output saved to %s", output_dir)


def cmd_calendar(args: argparse.Namespace) -> None:
    """Print the P&L calendar for one month."""
    from tradestats.analysis.pnl_calendar import build_calendar_month, format_calendar

    if args.month is None:
        now = datetime.now(settings.tz)
        year, month = now.year, now.month
    else:
        try:
            year, month = _parse_month(args.month)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

    trades = _load(args)
    cal = build_calendar_month(trades, year, month, tz=settings.tz)
    print(format_calendar(cal))


def cmd_export(args: argparse.Namespace) -> None:
    """Export closed trades in the selected period to CSV."""
    from tradestats.analysis.filters import select_trades
    from tradestats.export import default_export_name, export_trades_csv

    trades = _load(args)
    reference_time = _reference_time(args)
    selected = select_trades(trades, args.period, reference_time)

    if not selected:
        print("Error: No data to export")
        sys.exit(1)

    if args.out is not None:
        out_path = Path(args.out)
    else:
        out_path = Path(args.output) / default_export_name(args.period, reference_time)

    export_trades_csv(selected, out_path)
    print(f"Exported {len(selected)} trades to {out_path}")


def cmd_position_size(args: argparse.Namespace) -> None:
    """Suggest a lot size for a risk budget."""
    from tradestats.core.instruments import get_instrument, position_size

    try:
        result = position_size(
            args.instrument,
            args.balance,
            args.entry,
            args.stop,
            risk_percent=args.risk_percent,
            risk_amount=args.risk_amount,
            leverage=args.leverage,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    spec = get_instrument(args.instrument)
    unit = "Pip" if spec is None or spec.is_forex else "Point"
    print(
        f"Instrument:       {args.instrument}"
        f"\nRisk:             {result.risk_amount:,.2f} ({result.risk_percent:.2f}%)"
        f"\n{unit} Distance:   {result.point_difference:.2f}"
        f"\n{unit} Value:      {result.point_value:.2f}"
        f"\nLot Size:         {result.lot_size:.2f}"
        f"\nMargin Required:  {result.margin_required:,.2f}"
    )


def _add_trade_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--trades",
        default=settings.trades_path,
        help=f"Trade export file, .json or .csv (default: {settings.trades_path})",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip malformed trade rows instead of failing",
    )


def _add_period(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--period",
        choices=PERIODS,
        default=settings.default_period,
        help=f"Look-back period (default: {settings.default_period})",
    )
    parser.add_argument(
        "--as-of",
        default=None,
        help="Reference date YYYY-MM-DD for the period (default: now)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="tradestats",
        description="Tradestats — trading journal analytics",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # stats
    st = subparsers.add_parser(
        "stats",
        help="Compute trading statistics",
        description="Summarize closed trades and write report.json, charts, and trades.csv.",
    )
    _add_trade_source(st)
    _add_period(st)
    st.add_argument(
        "--output",
        default=settings.output_path,
        help=f"Output directory (default: {settings.output_path})",
    )

    # calendar
    cal = subparsers.add_parser(
        "calendar",
        help="Show the monthly P&L calendar",
        description="Print daily closed-trade P&L for one month.",
    )
    _add_trade_source(cal)
    cal.add_argument("--month", default=None, help="Month YYYY-MM (default: current month)")

    # export
    ex = subparsers.add_parser(
        "export",
        help="Export trades to CSV",
        description="Write closed trades in the selected period to a CSV file.",
    )
    _add_trade_source(ex)
    _add_period(ex)
    ex.add_argument(
        "--output",
        default=settings.output_path,
        help=f"Output directory (default: {settings.output_path})",
    )
    ex.add_argument("--out", default=None, help="Explicit CSV path (overrides --output)")

    # position-size
    ps = subparsers.add_parser(
        "position-size",
        help="Suggest a position size",
        description="Lot size that risks a given amount between entry and stop loss.",
    )
    ps.add_argument("--instrument", required=True, help="Symbol (e.g., NAS100, EUR/USD)")
    ps.add_argument("--balance", type=float, required=True, help="Account balance")
    ps.add_argument("--entry", type=float, required=True, help="Entry price")
    ps.add_argument("--stop", type=float, required=True, help="Stop-loss price")
    risk = ps.add_mutually_exclusive_group(required=True)
    risk.add_argument("--risk-percent", type=float, default=None, help="Risk as %% of balance")
    risk.add_argument("--risk-amount", type=float, default=None, help="Risk in account currency")
    ps.add_argument("--leverage", type=float, default=100.0, help="Leverage (default: 100)")

    return parser


def main() -> None:
    """Main entry point."""
    setup_logging(settings.log_level)

    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    command_map = {
        "stats": cmd_stats,
        "calendar": cmd_calendar,
        "export": cmd_export,
        "position-size": cmd_position_size,
    }

    handler = command_map[args.command]
    handler(args)


if __name__ == "__main__":
    main()
