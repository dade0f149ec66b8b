"""Instrument specifications and position-size math.

Price distances are converted to points (indices, metals) or pips (forex)
before they are priced, so the same formula works across asset classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

AssetClass = Literal["index", "commodity", "forex"]

# Pip value of a standard forex lot, also used for unknown symbols
DEFAULT_POINT_VALUE = 10.0


@dataclass(frozen=True, slots=True)
class InstrumentSpec:
    """Static contract details for a tradable symbol."""

    symbol: str
    asset_class: AssetClass
    point_value: float  # account currency per point (or pip) per lot
    min_move: float
    display_name: str
    decimals: int
    contract_size: float = 1.0

    @property
    def is_forex(self) -> bool:
        return self.asset_class == "forex"


INSTRUMENTS: dict[str, InstrumentSpec] = {
    "NAS100": InstrumentSpec("NAS100", "index", 1.0, 0.01, "NASDAQ 100", 2),
    "US30": InstrumentSpec("US30", "index", 1.0, 0.01, "Dow Jones 30", 2),
    "XAUUSD": InstrumentSpec("XAUUSD", "commodity", 0.01, 0.01, "Gold", 2, contract_size=100.0),
    "EUR/USD": InstrumentSpec("EUR/USD", "forex", 10.0, 0.00001, "EUR/USD", 5),
    "GBP/USD": InstrumentSpec("GBP/USD", "forex", 10.0, 0.00001, "GBP/USD", 5),
    "USD/JPY": InstrumentSpec("USD/JPY", "forex", 10.0, 0.001, "USD/JPY", 3),
}


def _canonical(symbol: str) -> str:
    return symbol.replace("/", "").replace(" ", "").upper()


_BY_CANONICAL = {_canonical(symbol): spec for symbol, spec in INSTRUMENTS.items()}


def get_instrument(symbol: str) -> InstrumentSpec | None:
    """Look up a symbol, ignoring case and the forex slash (EURUSD == EUR/USD)."""
    return _BY_CANONICAL.get(_canonical(symbol))


def point_difference(symbol: str, price_a: float, price_b: float) -> float:
    """Distance between two prices in points (indices, metals) or pips (forex).

    Unknown symbols are treated as forex pairs: 100 pips per unit for JPY
    crosses, 10000 otherwise.
    """
    diff = abs(price_a - price_b)
    spec = get_instrument(symbol)
    if spec is not None and not spec.is_forex:
        return diff
    if "JPY" in _canonical(symbol):
        return diff * 100
    return diff * 10000


def point_value(symbol: str, lot_size: float = 1.0) -> float:
    """Account-currency value of a one point (or pip) move for ``lot_size`` lots."""
    spec = get_instrument(symbol)
    if spec is None:
        return DEFAULT_POINT_VALUE * lot_size
    return spec.point_value * spec.contract_size * lot_size


def price_move_value(symbol: str, price_a: float, price_b: float, lot_size: float) -> float:
    """Money at stake between two price levels for a position of ``lot_size`` lots."""
    return point_difference(symbol, price_a, price_b) * point_value(symbol, lot_size)


@dataclass(frozen=True, slots=True)
class PositionSize:
    """Suggested position for a given risk budget."""

    instrument: str
    risk_amount: float
    risk_percent: float
    point_difference: float
    point_value: float
    lot_size: float
    margin_required: float


def position_size(
    symbol: str,
    account_balance: float,
    entry_price: float,
    stop_loss: float,
    *,
    risk_percent: float | None = None,
    risk_amount: float | None = None,
    leverage: float = 100.0,
) -> PositionSize:
    """Lot size that loses ``risk_amount`` if the stop is hit.

    Exactly one of ``risk_percent`` (of ``account_balance``) or
    ``risk_amount`` (account currency) must be given. Lot size and margin
    are rounded to 2 decimals.

    Raises:
        ValueError: on invalid balance, leverage, or risk arguments.
    """
    if account_balance <= 0:
        raise ValueError("account_balance must be positive")
    if leverage <= 0:
        raise ValueError("leverage must be positive")
    if risk_percent is not None and risk_amount is None:
        risk_amount = account_balance * risk_percent / 100
    elif risk_amount is not None and risk_percent is None:
        risk_percent = risk_amount / account_balance * 100
    else:
        raise ValueError("Specify exactly one of risk_percent or risk_amount")

    points = point_difference(symbol, entry_price, stop_loss)
    value = point_value(symbol, 1.0)
    lots = risk_amount / (points * value) if points > 0 else 0.0

    spec = get_instrument(symbol)
    contract_size = spec.contract_size if spec is not None else 1.0
    margin = entry_price * lots * contract_size / leverage

    return PositionSize(
        instrument=symbol,
        risk_amount=round(risk_amount, 2),
        risk_percent=round(risk_percent, 2),
        point_difference=points,
        point_value=value,
        lot_size=round(lots, 2),
        margin_required=round(margin, 2),
    )
