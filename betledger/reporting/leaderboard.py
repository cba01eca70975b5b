"""
Bookmaker and month leaderboards.

Attributes the profit of settled bets to the bookmakers responsible
for it and ranks bookmakers and calendar months by profit.

Attribution rules for one bet:

- If any leg lost money on its own, the hedge cost belongs to the main
  bookmaker's strategy and the whole net profit goes to the main
  bookmaker.
- Otherwise every leg paid (a double win) and each leg's profit goes to
  the leg's own bookmaker.
- The extra adjustment always goes to the main bookmaker.
"""

from collections import defaultdict
from typing import Iterable, Mapping, Optional

from config.logging_config import get_logger
from betledger.models import (
    Bet,
    BookmakerAttribution,
    MonthProfit,
    PromotionProfit,
)
from betledger.settlement import bet_profit, settle
from betledger.utils.dates import month_key

logger = get_logger(__name__)

# Promotion label for profit that did not come through a promotion
NO_PROMOTION = "None"


def attribute_profits(bets: Iterable[Bet]) -> dict[str, dict[str, float]]:
    """
    Attribute the profit of settled bets to bookmakers.

    Args:
        bets: Bets to attribute; pending and draft bets are skipped

    Returns:
        Mapping of bookmaker id -> promotion label -> profit
    """
    buckets: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))

    for bet in bets:
        if not bet.is_settled:
            continue

        result = settle(bet)
        main = bet.main_bookmaker_id
        label = (bet.promotion_type or "").strip() or NO_PROMOTION

        if any(leg.profit < 0 for leg in result.legs):
            buckets[main][label] += result.profit
        else:
            for leg, leg_result in zip(bet.legs, result.legs):
                if leg.bookmaker_id == main:
                    buckets[main][label] += leg_result.profit
                else:
                    buckets[leg.bookmaker_id][NO_PROMOTION] += leg_result.profit

        if bet.extra_gain is not None:
            buckets[main][label] += bet.extra_amount

    return {bookmaker: dict(by_promo) for bookmaker, by_promo in buckets.items()}


def rank_bookmakers(
    bets: Iterable[Bet],
    top_n: int = 3,
    promotions_top_n: int = 3,
    bookmaker_names: Optional[Mapping[str, str]] = None,
) -> list[BookmakerAttribution]:
    """
    Rank bookmakers by attributed profit.

    Args:
        bets: Bets in scope (usually the filtered period)
        top_n: Number of bookmakers to return
        promotions_top_n: Number of promotions listed per bookmaker
        bookmaker_names: Optional id -> display name mapping

    Returns:
        Top bookmakers sorted by total profit, highest first
    """
    names = bookmaker_names or {}
    ranking = []

    for bookmaker_id, by_promo in attribute_profits(bets).items():
        promotions = sorted(
            (PromotionProfit(promotion=label, profit=profit) for label, profit in by_promo.items()),
            key=lambda p: p.profit,
            reverse=True,
        )
        ranking.append(
            BookmakerAttribution(
                bookmaker_id=bookmaker_id,
                name=names.get(bookmaker_id, bookmaker_id),
                total_profit=sum(by_promo.values()),
                promotions=promotions[:promotions_top_n],
            )
        )

    ranking.sort(key=lambda b: b.total_profit, reverse=True)
    return ranking[:top_n]


def rank_months(bets: Iterable[Bet], top_n: int = 3) -> list[MonthProfit]:
    """
    Rank calendar months by total profit.

    This ranking is global: pass every bet, not a filtered period.

    Args:
        bets: All bets; pending, draft and undated bets are skipped
        top_n: Number of months to return

    Returns:
        Top months sorted by profit, highest first
    """
    by_month: dict[str, float] = defaultdict(float)

    for bet in bets:
        if not bet.is_settled or bet.date is None:
            continue
        by_month[month_key(bet.date)] += bet_profit(bet)

    ranking = sorted(
        (MonthProfit(month=month, profit=profit) for month, profit in by_month.items()),
        key=lambda m: m.profit,
        reverse=True,
    )

    logger.debug("Months ranked", months=len(ranking), top=top_n)
    return ranking[:top_n]
