"""
Monthly history.

Breaks one year down into its twelve months. Settled bets and counted
extra gains each add one operation.
"""

from typing import Iterable

from config.logging_config import get_logger
from betledger.models import Bet, ExtraGain, MonthSummary, YearSummary
from betledger.settlement import bet_profit, settle

logger = get_logger(__name__)


def yearly_breakdown(
    bets: Iterable[Bet],
    gains: Iterable[ExtraGain],
    year: int,
) -> YearSummary:
    """
    Build the month-by-month history of a year.

    Args:
        bets: All bets; pending and draft bets are ignored
        gains: All extra gains; pending and cancelled gains are ignored
        year: Calendar year to report on

    Returns:
        YearSummary with all twelve months, empty months included
    """
    months = {month: MonthSummary(month=month) for month in range(1, 13)}

    for bet in bets:
        if bet.date is None or bet.date.year != year or not bet.is_settled:
            continue

        result = settle(bet)
        stats = months[bet.date.month]
        stats.operations += 1
        stats.staked += result.total_stake
        stats.returned += result.total_return
        stats.net_profit += bet_profit(bet, result)

    for gain in gains:
        if gain.date is None or gain.date.year != year or not gain.counts:
            continue

        stats = months[gain.date.month]
        stats.operations += 1
        stats.returned += gain.amount
        stats.net_profit += gain.amount

    summary = YearSummary(year=year, months=list(months.values()))

    logger.debug(
        "Yearly breakdown built",
        year=year,
        operations=summary.operations,
        net_profit=round(summary.net_profit, 2),
    )

    return summary
