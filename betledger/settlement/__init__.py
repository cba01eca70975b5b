"""Settlement module."""

from betledger.settlement.engine import (
    bet_profit,
    calculate_leg_return,
    settle,
    settle_leg,
)

__all__ = [
    "bet_profit",
    "calculate_leg_return",
    "settle",
    "settle_leg",
]
