"""
Bet settlement.

Turns a bet and its legs into stake, return and profit figures. This
is a pure computation: no I/O, no state, and no exception for
malformed numbers (they count as zero).
"""

from typing import Optional

from betledger.models import Bet, Leg, LegSettlement, PromotionKind, Settlement, Status
from betledger.utils.numbers import optional_number, safe_number


def calculate_leg_return(stake: float, odds: float, status: Status) -> float:
    """
    Calculate the return of a leg from its status.

    Args:
        stake: Amount staked
        odds: Decimal odds
        status: Resolution status of the leg

    Returns:
        Amount paid back by the bookmaker, stake included
    """
    if status == Status.WON:
        return stake * odds
    if status in (Status.VOID, Status.CASHED_OUT):
        return stake
    if status == Status.HALF_WON:
        return (stake * odds) / 2 + stake / 2
    if status == Status.HALF_LOST:
        return stake / 2
    # Lost, pending and unrecognised statuses pay nothing
    return 0.0


def settle_leg(leg: Leg, bonus_funded: bool = False) -> LegSettlement:
    """
    Settle a single leg.

    Args:
        leg: The leg to settle
        bonus_funded: The stake came from bonus balance and is not returned

    Returns:
        LegSettlement; profit is measured against the recorded stake
    """
    stake = safe_number(leg.stake)
    odds = safe_number(leg.odds)
    status = Status.parse(leg.status)
    manual_return: Optional[float] = optional_number(leg.manual_return)

    if manual_return is not None:
        returned = manual_return
    elif status == Status.LOST:
        returned = 0.0
    else:
        returned = calculate_leg_return(stake, odds, status)
        if bonus_funded and returned > 0:
            returned -= stake

    return LegSettlement(
        stake=stake,
        returned=returned,
        profit=returned - stake,
        resolved=status.is_resolved,
        counted_stake=0.0 if bonus_funded else stake,
    )


def settle(bet: Bet) -> Settlement:
    """
    Settle a bet from its legs.

    For a free-bet conversion the first leg in list order is funded by
    bonus balance: its stake is left out of the total stake and, when it
    pays out, its stake is taken off the return.

    The bet's extra adjustment is not included; aggregations add it.

    Args:
        bet: The bet to settle

    Returns:
        Settlement with totals, per-leg figures and the double-win flag
    """
    legs = bet.legs if isinstance(bet.legs, list) else []
    is_conversion = bet.promotion_kind == PromotionKind.FREEBET_CONVERSION

    settled = tuple(
        settle_leg(leg, bonus_funded=is_conversion and index == 0)
        for index, leg in enumerate(legs)
    )

    total_stake = sum(leg.counted_stake for leg in settled)
    total_return = sum(leg.returned for leg in settled)

    resolved = [leg for leg in settled if leg.resolved]
    is_double_win = len(resolved) >= 2 and all(leg.profit >= 0 for leg in resolved)

    return Settlement(
        total_stake=total_stake,
        total_return=total_return,
        profit=total_return - total_stake,
        legs=settled,
        is_double_win=is_double_win,
    )


def bet_profit(bet: Bet, settlement: Optional[Settlement] = None) -> float:
    """
    Profit of a bet including its extra adjustment.

    Args:
        bet: The bet
        settlement: Result of settle(bet), when the caller already has it
    """
    if settlement is None:
        settlement = settle(bet)
    return settlement.profit + bet.extra_amount
