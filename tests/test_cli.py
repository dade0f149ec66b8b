"""Tests for the CLI entry point and command handlers."""

from __future__ import annotations

import argparse
import csv
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from main import (
    _parse_date,
    _parse_month,
    build_parser,
    cmd_calendar,
    cmd_export,
    cmd_position_size,
    cmd_stats,
)


def _write_trades(path: Path) -> Path:
    rows = [
        {
            "id": "a",
            "instrument": "EUR/USD",
            "lotSize": 1,
            "entryPrice": 1.1,
            "stopLoss": 1.095,
            "takeProfit": 1.11,
            "exitPrice": 1.105,
            "result": 50,
            "type": "buy",
            "status": "closed",
            "openDate": "2024-06-03T09:00:00Z",
            "closeDate": "2024-06-03T11:00:00Z",
            "timestamp": "2024-06-03T11:00:00Z",
            "emotion": "Calm",
        },
        {
            "id": "b",
            "instrument": "NAS100",
            "lotSize": 2,
            "entryPrice": 18000,
            "result": -30,
            "type": "sell",
            "status": "closed",
            "openDate": "2024-06-20T14:00:00Z",
            "closeDate": "2024-06-20T15:00:00Z",
            "timestamp": "2024-06-20T15:00:00Z",
        },
        {
            "id": "c",
            "instrument": "XAUUSD",
            "lotSize": 0.1,
            "entryPrice": 2300,
            "type": "buy",
            "status": "open",
            "openDate": "2024-06-28T10:00:00Z",
            "timestamp": "2024-06-28T10:00:00Z",
        },
    ]
    path.write_text(json.dumps(rows))
    return path


def _args(**kwargs) -> argparse.Namespace:
    defaults = dict(skip_invalid=False, period="all", as_of="2024-06-30")
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------


class TestBuildParser:
    """Test CLI argument parsing for all commands."""

    def test_no_command_returns_none(self) -> None:
        parser = build_parser()
        args = parser.parse_args([])
        assert args.command is None

    def test_stats_defaults(self) -> None:
        args = build_parser().parse_args(["stats"])
        assert args.command == "stats"
        assert args.period == "all"
        assert args.as_of is None
        assert args.skip_invalid is False

    def test_stats_period(self) -> None:
        args = build_parser().parse_args(["stats", "--period", "week", "--as-of", "2024-06-30"])
        assert args.period == "week"
        assert args.as_of == "2024-06-30"

    def test_invalid_period_exits(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["stats", "--period", "year"])

    def test_calendar_month(self) -> None:
        args = build_parser().parse_args(["calendar", "--month", "2024-06"])
        assert args.command == "calendar"
        assert args.month == "2024-06"

    def test_export_out(self) -> None:
        args = build_parser().parse_args(["export", "--out", "x.csv", "--period", "month"])
        assert args.out == "x.csv"
        assert args.period == "month"

    def test_position_size_risk_options_exclusive(self) -> None:
        base = ["position-size", "--instrument", "US30", "--balance", "1000",
                "--entry", "39000", "--stop", "38900"]
        with pytest.raises(SystemExit):
            build_parser().parse_args(base + ["--risk-percent", "1", "--risk-amount", "10"])
        args = build_parser().parse_args(base + ["--risk-amount", "10"])
        assert args.risk_amount == 10.0
        assert args.risk_percent is None
        assert args.leverage == 100.0


class TestParseHelpers:
    def test_parse_date(self) -> None:
        assert _parse_date("2024-06-30") == datetime(2024, 6, 30, tzinfo=UTC)

    def test_parse_date_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid date format"):
            _parse_date("30/06/2024")

    def test_parse_month(self) -> None:
        assert _parse_month("2024-06") == (2024, 6)

    def test_parse_month_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid month format"):
            _parse_month("June")


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


class TestCmdStats:
    def test_writes_outputs(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        out = tmp_path / "output"

        cmd_stats(_args(trades=str(trades), output=str(out)))

        stdout = capsys.readouterr().out
        assert "TRADING STATISTICS (ALL)" in stdout
        assert "Closed Trades:   2 (1W / 1L)" in stdout
        assert "Open Trades:     1" in stdout

        period_dir = out / "all"
        report = json.loads((period_dir / "report.json").read_text())
        assert report["metrics"]["total_pnl"] == pytest.approx(20.0)
        assert report["reference_time"].startswith("2024-06-30T23:59:59")
        for name in ("equity_curve.html", "duration_scatter.html", "weekday.html", "trades.csv"):
            assert (period_dir / name).exists()

    def test_week_period(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        cmd_stats(_args(trades=str(trades), output=str(tmp_path / "o"), period="week"))
        assert "Closed Trades:   0 (0W / 0L)" in capsys.readouterr().out

    def test_missing_file_exits(self, tmp_path: Path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            cmd_stats(_args(trades=str(tmp_path / "nope.json"), output=str(tmp_path)))
        assert exc_info.value.code == 1
        assert "Error: trade file not found" in capsys.readouterr().out

    def test_invalid_row_exits(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([{"id": "x", "status": "closed"}]))
        with pytest.raises(SystemExit):
            cmd_stats(_args(trades=str(path), output=str(tmp_path)))
        assert "Error: trade x" in capsys.readouterr().out

    def test_invalid_row_skipped(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "trades.json"
        rows = json.loads(_write_trades(path).read_text())
        rows.append({"id": "x", "status": "closed"})
        path.write_text(json.dumps(rows))

        cmd_stats(_args(trades=str(path), output=str(tmp_path / "o"), skip_invalid=True))
        assert "Closed Trades:   2" in capsys.readouterr().out

    def test_bad_as_of_exits(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        with pytest.raises(SystemExit):
            cmd_stats(_args(trades=str(trades), output=str(tmp_path), as_of="June"))
        assert "Invalid date format" in capsys.readouterr().out


class TestCmdCalendar:
    def test_prints_month(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        cmd_calendar(_args(trades=str(trades), month="2024-06"))

        stdout = capsys.readouterr().out
        assert "June 2024" in stdout
        assert "+50.00" in stdout

    def test_bad_month_exits(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        with pytest.raises(SystemExit):
            cmd_calendar(_args(trades=str(trades), month="2024-13"))
        assert "Invalid month format" in capsys.readouterr().out


class TestCmdExport:
    def test_default_name(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        out = tmp_path / "output"

        cmd_export(_args(trades=str(trades), output=str(out), out=None, period="month"))

        path = out / "trading-stats-month-2024-06-30.csv"
        with open(path, newline="") as f:
            rows = list(csv.reader(f))
        assert len(rows) == 3
        assert "Exported 2 trades" in capsys.readouterr().out

    def test_explicit_path(self, tmp_path: Path) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        target = tmp_path / "mine.csv"
        cmd_export(_args(trades=str(trades), output=str(tmp_path), out=str(target)))
        assert target.exists()

    def test_no_data(self, tmp_path: Path, capsys) -> None:
        trades = _write_trades(tmp_path / "trades.json")
        with pytest.raises(SystemExit) as exc_info:
            cmd_export(
                _args(trades=str(trades), output=str(tmp_path), out=None, period="week",
                      as_of="2025-01-31")
            )
        assert exc_info.value.code == 1
        assert "Error: No data to export" in capsys.readouterr().out


class TestCmdPositionSize:
    def _ps_args(self, **kwargs) -> argparse.Namespace:
        defaults = dict(
            instrument="EUR/USD",
            balance=10000.0,
            entry=1.0850,
            stop=1.0800,
            risk_percent=1.0,
            risk_amount=None,
            leverage=100.0,
        )
        defaults.update(kwargs)
        return argparse.Namespace(**defaults)

    def test_forex(self, capsys) -> None:
        cmd_position_size(self._ps_args())
        stdout = capsys.readouterr().out
        assert "Pip Distance:   50.00" in stdout
        assert "Lot Size:         0.20" in stdout

    def test_index(self, capsys) -> None:
        cmd_position_size(
            self._ps_args(instrument="NAS100", entry=18000.0, stop=17900.0,
                          risk_percent=None, risk_amount=200.0)
        )
        stdout = capsys.readouterr().out
        assert "Point Distance:   100.00" in stdout
        assert "Lot Size:         2.00" in stdout

    def test_invalid_balance_exits(self, capsys) -> None:
        with pytest.raises(SystemExit):
            cmd_position_size(self._ps_args(balance=0.0))
        assert "Error: account_balance must be positive" in capsys.readouterr().out
