"""CSV export of journal trades."""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path

from tradestats.core.types import TradeRecord

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Date", "Instrument", "Type", "Entry", "Exit", "Lot Size", "P&L", "Emotion"]


def trade_to_row(trade: TradeRecord) -> list[str]:
    """One CSV row. P&L is rounded to cents; missing exit or emotion become N/A."""
    return [
        f"{trade.timestamp:%Y-%m-%d}",
        trade.instrument,
        trade.type,
        str(trade.entry_price),
        str(trade.exit_price) if trade.exit_price is not None else "N/A",
        str(trade.lot_size),
        f"{trade.result:.2f}",
        trade.emotion or "N/A",
    ]


def export_trades_csv(trades: list[TradeRecord], output_path: str | Path) -> Path:
    """Write ``trades`` in timestamp order to a CSV file with a fixed header.

    An empty list produces a header-only file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for trade in sorted(trades, key=lambda t: t.timestamp):
            writer.writerow(trade_to_row(trade))

    logger.info("Exported %d trades to %s", len(trades), path)
    return path


def default_export_name(period: str, reference_time: datetime) -> str:
    """File name like ``trading-stats-month-2024-06-30.csv``."""
    return f"trading-stats-{period}-{reference_time:%Y-%m-%d}.csv"
