"""Planned risk:reward against realized outcome."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from tradestats.core.instruments import price_move_value
from tradestats.core.types import TradeRecord

# Ratios outside (0, MAX_PLANNED_RR) are treated as data-entry noise
MAX_PLANNED_RR = 10.0


@dataclass(frozen=True, slots=True)
class RiskRewardPoint:
    """One trade's planned R:R and what it actually returned."""

    trade_id: str
    instrument: str
    planned_rr: float
    risk_amount: float
    reward_amount: float
    actual_pnl: float
    outcome: Literal["Win", "Loss"]


def risk_reward_scatter(trades: list[TradeRecord]) -> list[RiskRewardPoint]:
    """R:R scatter rows for trades that set both a stop loss and a take profit.

    Risk and reward are priced with the instrument's point value. Trades with
    zero planned risk or an implausible ratio are left out.
    """
    points: list[RiskRewardPoint] = []
    for trade in trades:
        if trade.stop_loss is None or trade.take_profit is None:
            continue

        risk = price_move_value(trade.instrument, trade.entry_price, trade.stop_loss, trade.lot_size)
        if risk <= 0:
            continue
        reward = price_move_value(
            trade.instrument, trade.take_profit, trade.entry_price, trade.lot_size
        )
        planned_rr = reward / risk
        if not 0 < planned_rr < MAX_PLANNED_RR:
            continue

        points.append(
            RiskRewardPoint(
                trade_id=trade.id,
                instrument=trade.instrument,
                planned_rr=planned_rr,
                risk_amount=risk,
                reward_amount=reward,
                actual_pnl=trade.result,
                outcome="Win" if trade.result > 0 else "Loss",
            )
        )
    return points
