"""Core data structures used throughout tradestats."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

TradeType = Literal["buy", "sell"]
TradeStatus = Literal["open", "closed"]
Period = Literal["all", "week", "month", "quarter"]

PERIODS: tuple[Period, ...] = ("all", "week", "month", "quarter")


@dataclass(frozen=True, slots=True)
class TradeRecord:
    """A journaled trade, open or closed.

    Built by ``tradestats.core.ingest`` from raw rows; the analytics
    functions never see unvalidated data. ``stop_loss`` and ``take_profit``
    are ``None`` when the trader left them unset.
    """

    id: str
    instrument: str
    lot_size: float
    entry_price: float
    type: TradeType
    status: TradeStatus
    open_date: datetime
    timestamp: datetime
    result: float = 0.0
    stop_loss: float | None = None
    take_profit: float | None = None
    exit_price: float | None = None
    close_date: datetime | None = None
    emotion: str | None = None
    notes: str = ""
    mindset_before: str = ""
    mindset_after: str = ""

    @property
    def is_closed(self) -> bool:
        return self.status == "closed"

    @property
    def is_win(self) -> bool:
        return self.result > 0

    @property
    def is_loss(self) -> bool:
        return self.result < 0

    @property
    def duration(self) -> timedelta | None:
        """Time between open and close, or None while the trade is open."""
        if self.close_date is None:
            return None
        return self.close_date - self.open_date
