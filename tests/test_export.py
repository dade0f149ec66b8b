"""Tests for CSV export."""

from __future__ import annotations

import csv
from datetime import UTC, datetime
from pathlib import Path

from tradestats.core.types import TradeRecord
from tradestats.export import CSV_HEADERS, default_export_name, export_trades_csv, trade_to_row


def _make_trade(
    id: str,
    timestamp: datetime,
    result: float,
    *,
    exit_price: float | None = 1.0920,
    emotion: str | None = "Confident",
) -> TradeRecord:
    return TradeRecord(
        id=id,
        instrument="EUR/USD",
        lot_size=0.5,
        entry_price=1.085,
        type="buy",
        status="closed",
        open_date=timestamp,
        timestamp=timestamp,
        result=result,
        exit_price=exit_price,
        emotion=emotion,
    )


class TestTradeToRow:
    def test_row(self) -> None:
        row = trade_to_row(_make_trade("a", datetime(2024, 6, 3, 13, 30, tzinfo=UTC), 350.456))
        assert row == ["2024-06-03", "EUR/USD", "buy", "1.085", "1.092", "0.5", "350.46", "Confident"]

    def test_missing_values(self) -> None:
        trade = _make_trade(
            "a", datetime(2024, 6, 3, tzinfo=UTC), -20.4567, exit_price=None, emotion=None
        )
        row = trade_to_row(trade)
        assert row[4] == "N/A"
        assert row[6] == "-20.46"
        assert row[7] == "N/A"


class TestExportTradesCsv:
    def test_writes_sorted_rows(self, tmp_path: Path) -> None:
        trades = [
            _make_trade("late", datetime(2024, 6, 5, tzinfo=UTC), 10.0),
            _make_trade("early", datetime(2024, 6, 1, tzinfo=UTC), -5.0),
        ]
        path = export_trades_csv(trades, tmp_path / "out" / "trades.csv")

        with open(path, newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == CSV_HEADERS
        assert [r[0] for r in rows[1:]] == ["2024-06-01", "2024-06-05"]
        assert [r[6] for r in rows[1:]] == ["-5.00", "10.00"]

    def test_empty_is_header_only(self, tmp_path: Path) -> None:
        path = export_trades_csv([], tmp_path / "trades.csv")
        with open(path, newline="") as f:
            assert list(csv.reader(f)) == [CSV_HEADERS]


class TestDefaultExportName:
    def test_name(self) -> None:
        name = default_export_name("month", datetime(2024, 6, 30, 23, 59, tzinfo=UTC))
        assert name == "trading-stats-month-2024-06-30.csv"
