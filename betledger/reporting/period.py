"""
Period aggregation.

Filters bets to a calendar window and rolls the settled ones into
stake, return, profit, ROI and a cumulative profit series.
"""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Iterable, Optional

from config.logging_config import get_logger
from betledger.models import (
    Bet,
    CumulativePoint,
    ExtraGain,
    PeriodSummary,
    PeriodWindow,
)
from betledger.settlement import bet_profit, settle

logger = get_logger(__name__)


class Period(str, Enum):
    """Dashboard period presets."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"
    ALL = "all"


def window_for_period(
    period: Period,
    today: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> PeriodWindow:
    """
    Build the window of a period preset.

    Args:
        period: Preset to build
        today: Reference day (default: today's local date)
        start: First day of a custom window, open when None
        end: Last day of a custom window, open when None

    Returns:
        Inclusive PeriodWindow
    """
    today = today or date.today()
    period = Period(period)

    if period == Period.TODAY:
        return PeriodWindow(today, today)
    if period == Period.WEEK:
        return PeriodWindow(today - timedelta(days=7), today)
    if period == Period.MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return PeriodWindow(today.replace(day=1), today.replace(day=last_day))
    if period == Period.CUSTOM:
        return PeriodWindow(start, end)
    return PeriodWindow()


def filter_bets(bets: Iterable[Bet], window: PeriodWindow) -> list[Bet]:
    """Bets whose calendar date falls in the window, in input order."""
    return [bet for bet in bets if window.contains(bet.date)]


def summarize(
    bets: Iterable[Bet],
    window: Optional[PeriodWindow] = None,
    gains: Iterable[ExtraGain] = (),
) -> PeriodSummary:
    """
    Summarize the bets of a window.

    Pending and draft bets are left out of every profit figure but still
    count towards total_staked_in_period, which covers every bet in the
    window.

    Args:
        bets: All candidate bets
        window: Calendar window (default: unbounded)
        gains: Extra gains, totalled separately for the same window

    Returns:
        PeriodSummary for the window
    """
    window = window or PeriodWindow()
    in_window = filter_bets(bets, window)

    summary = PeriodSummary(window=window)

    settled_bets = []
    for bet in in_window:
        result = settle(bet)
        summary.total_staked_in_period += result.total_stake
        if bet.is_settled:
            settled_bets.append((bet, result))

    # Stable sort: bets on the same day keep their input order
    settled_bets.sort(key=lambda pair: pair[0].date or date.min)

    cumulative = 0.0
    for bet, result in settled_bets:
        profit = bet_profit(bet, result)
        cumulative += profit

        summary.operations += 1
        summary.total_staked += result.total_stake
        summary.total_returned += result.total_return
        summary.series.append(
            CumulativePoint(
                date=bet.date,
                bet_id=bet.id,
                profit=profit,
                cumulative_profit=cumulative,
            )
        )

    summary.net_profit = cumulative
    summary.roi = (
        (summary.net_profit / summary.total_staked * 100)
        if summary.total_staked > 0
        else 0.0
    )
    summary.extra_gains_total = sum(
        gain.amount for gain in gains if gain.counts and window.contains(gain.date)
    )

    logger.debug(
        "Period summarized",
        start=window.start.isoformat() if window.start else None,
        end=window.end.isoformat() if window.end else None,
        operations=summary.operations,
        net_profit=round(summary.net_profit, 2),
    )

    return summary
