"""Reporting module."""

from betledger.reporting.dashboard import (
    DashboardReport,
    DashboardReportGenerator,
    report_generator,
)
from betledger.reporting.leaderboard import (
    NO_PROMOTION,
    attribute_profits,
    rank_bookmakers,
    rank_months,
)
from betledger.reporting.monthly import yearly_breakdown
from betledger.reporting.period import (
    Period,
    filter_bets,
    summarize,
    window_for_period,
)

__all__ = [
    "DashboardReport",
    "DashboardReportGenerator",
    "report_generator",
    "NO_PROMOTION",
    "attribute_profits",
    "rank_bookmakers",
    "rank_months",
    "yearly_breakdown",
    "Period",
    "filter_bets",
    "summarize",
    "window_for_period",
]
