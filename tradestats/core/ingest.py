"""Ingestion boundary — turn raw trade rows into validated TradeRecords.

Rows come from JSON or CSV exports of the journal's trades table. Both the
database's snake_case columns (``lot_size``, ``open_date``) and the web
app's camelCase keys (``lotSize``, ``openDate``) are accepted.
"""

from __future__ import annotations

import csv
import json
import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from tradestats.core.types import TradeRecord

logger = logging.getLogger(__name__)

_ALIASES = {
    "lotSize": "lot_size",
    "entryPrice": "entry_price",
    "stopLoss": "stop_loss",
    "takeProfit": "take_profit",
    "exitPrice": "exit_price",
    "openDate": "open_date",
    "closeDate": "close_date",
    "mindsetBefore": "mindset_before",
    "mindsetAfter": "mindset_after",
}

_VALID_TYPES = {"buy", "sell"}
_VALID_STATUSES = {"open", "closed"}


class TradeValidationError(ValueError):
    """A raw trade row could not be turned into a TradeRecord."""

    def __init__(self, trade_id: str | None, field: str, message: str) -> None:
        self.trade_id = trade_id
        self.field = field
        super().__init__(f"trade {trade_id or '<unknown>'}: {field}: {message}")


def _ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are returned unchanged."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def _normalize_keys(row: Mapping[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in row.items()}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_float(trade_id: str | None, field: str, value: Any) -> float:
    if isinstance(value, bool):
        raise TradeValidationError(trade_id, field, f"expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise TradeValidationError(trade_id, field, f"expected a number, got {value!r}") from None
    if not math.isfinite(number):
        raise TradeValidationError(trade_id, field, f"must be finite, got {value!r}")
    return number


def _parse_datetime(trade_id: str | None, field: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return _ensure_utc(value)
    if isinstance(value, str):
        try:
            return _ensure_utc(datetime.fromisoformat(value.strip()))
        except ValueError:
            pass
    raise TradeValidationError(trade_id, field, f"expected an ISO 8601 timestamp, got {value!r}")


def _optional_price(trade_id: str | None, field: str, value: Any) -> float | None:
    """Parse an optional price level. Zero means unset."""
    if _is_blank(value):
        return None
    price = _parse_float(trade_id, field, value)
    return price if price != 0 else None


def parse_trade(row: Mapping[str, Any]) -> TradeRecord:
    """Validate a raw row and build a TradeRecord.

    Raises:
        TradeValidationError: if a required field is missing or malformed.
    """
    data = _normalize_keys(row)
    trade_id = None if _is_blank(data.get("id")) else str(data["id"])

    for required in ("id", "instrument", "lot_size", "entry_price", "type", "status",
                     "open_date", "timestamp"):
        if _is_blank(data.get(required)):
            raise TradeValidationError(trade_id, required, "missing required field")

    trade_type = str(data["type"]).strip().lower()
    if trade_type not in _VALID_TYPES:
        raise TradeValidationError(trade_id, "type", f"must be buy or sell, got {data['type']!r}")

    status = str(data["status"]).strip().lower()
    if status not in _VALID_STATUSES:
        raise TradeValidationError(
            trade_id, "status", f"must be open or closed, got {data['status']!r}"
        )

    lot_size = _parse_float(trade_id, "lot_size", data["lot_size"])
    if lot_size <= 0:
        raise TradeValidationError(trade_id, "lot_size", f"must be positive, got {lot_size}")

    if _is_blank(data.get("result")):
        if status == "closed":
            raise TradeValidationError(trade_id, "result", "closed trade has no result")
        result = 0.0
    else:
        result = _parse_float(trade_id, "result", data["result"])

    open_date = _parse_datetime(trade_id, "open_date", data["open_date"])
    close_date = None
    if not _is_blank(data.get("close_date")):
        close_date = _parse_datetime(trade_id, "close_date", data["close_date"])
        if close_date < open_date:
            raise TradeValidationError(
                trade_id, "close_date", f"{close_date.isoformat()} is before open_date"
            )

    exit_price = None
    if not _is_blank(data.get("exit_price")):
        exit_price = _parse_float(trade_id, "exit_price", data["exit_price"])

    emotion = data.get("emotion")
    emotion = None if _is_blank(emotion) else str(emotion).strip()

    return TradeRecord(
        id=trade_id or "",
        instrument=str(data["instrument"]).strip(),
        lot_size=lot_size,
        entry_price=_parse_float(trade_id, "entry_price", data["entry_price"]),
        type=trade_type,  # type: ignore[arg-type]
        status=status,  # type: ignore[arg-type]
        open_date=open_date,
        timestamp=_parse_datetime(trade_id, "timestamp", data["timestamp"]),
        result=result,
        stop_loss=_optional_price(trade_id, "stop_loss", data.get("stop_loss")),
        take_profit=_optional_price(trade_id, "take_profit", data.get("take_profit")),
        exit_price=exit_price,
        close_date=close_date,
        emotion=emotion,
        notes=str(data.get("notes") or ""),
        mindset_before=str(data.get("mindset_before") or ""),
        mindset_after=str(data.get("mindset_after") or ""),
    )


def parse_trades(rows: Iterable[Mapping[str, Any]], strict: bool = True) -> list[TradeRecord]:
    """Parse many rows.

    With ``strict=False`` malformed rows are logged and skipped instead of
    aborting the whole batch.
    """
    trades: list[TradeRecord] = []
    skipped = 0
    for row in rows:
        try:
            trades.append(parse_trade(row))
        except TradeValidationError as e:
            if strict:
                raise
            skipped += 1
            logger.warning("Skipping malformed trade row: %s", e)
    if skipped:
        logger.warning("Skipped %d malformed trade rows", skipped)
    return trades


def load_trades(path: str | Path, strict: bool = True) -> list[TradeRecord]:
    """Load trades from a ``.json`` or ``.csv`` export.

    JSON may be a list of objects or an object with a ``trades`` list.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: for unsupported file types or malformed JSON structure.
        TradeValidationError: for malformed rows when ``strict`` is True.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            payload = payload.get("trades")
        if not isinstance(payload, list):
            raise ValueError(f"{path}: expected a list of trades or an object with 'trades'")
        rows: list[Mapping[str, Any]] = payload
    elif suffix == ".csv":
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
    else:
        raise ValueError(f"Unsupported trade file type: '{path.suffix}'. Expected .json or .csv.")

    trades = parse_trades(rows, strict=strict)
    logger.info("Loaded %d trades from %s", len(trades), path)
    return trades
