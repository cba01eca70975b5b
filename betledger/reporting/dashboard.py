"""
Dashboard Report Generator.

Bundles the period summary, leaderboards and yearly history into one
report and formats it as plain text.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from config import settings
from config.logging_config import get_logger
from betledger.models import (
    Bet,
    BookmakerAttribution,
    ExtraGain,
    MonthProfit,
    PeriodSummary,
    PeriodWindow,
    YearSummary,
)
from betledger.reporting.leaderboard import rank_bookmakers, rank_months
from betledger.reporting.monthly import yearly_breakdown
from betledger.reporting.period import summarize

logger = get_logger(__name__)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass
class DashboardReport:
    """Everything the overview screen shows for one window."""

    summary: PeriodSummary
    top_bookmakers: list[BookmakerAttribution]
    top_months: list[MonthProfit]
    year: Optional[YearSummary] = None
    generated_at: datetime = field(default_factory=datetime.now)


class DashboardReportGenerator:
    """
    Generates dashboard reports.

    Bookmaker rankings follow the selected window; month rankings always
    cover every bet.
    """

    def __init__(
        self,
        leaderboard_size: Optional[int] = None,
        promotions_per_bookmaker: Optional[int] = None,
        currency_symbol: Optional[str] = None,
    ) -> None:
        self.leaderboard_size = leaderboard_size or settings.reporting.leaderboard_size
        self.promotions_per_bookmaker = (
            promotions_per_bookmaker or settings.reporting.promotions_per_bookmaker
        )
        self.currency_symbol = currency_symbol or settings.reporting.currency_symbol

    def generate(
        self,
        bets: Iterable[Bet],
        gains: Iterable[ExtraGain] = (),
        window: Optional[PeriodWindow] = None,
        year: Optional[int] = None,
        bookmaker_names: Optional[Mapping[str, str]] = None,
    ) -> DashboardReport:
        """
        Generate a dashboard report.

        Args:
            bets: Every bet in the store
            gains: Every extra gain in the store
            window: Period to summarize (default: all time)
            year: Include the monthly history of this year
            bookmaker_names: Optional id -> display name mapping

        Returns:
            DashboardReport with all sections populated
        """
        all_bets = list(bets)
        all_gains = list(gains)
        window = window or PeriodWindow()

        logger.info(
            "Generating dashboard report",
            start=window.start.isoformat() if window.start else None,
            end=window.end.isoformat() if window.end else None,
            bets=len(all_bets),
        )

        summary = summarize(all_bets, window, all_gains)
        in_window = [bet for bet in all_bets if window.contains(bet.date)]

        return DashboardReport(
            summary=summary,
            top_bookmakers=rank_bookmakers(
                in_window,
                top_n=self.leaderboard_size,
                promotions_top_n=self.promotions_per_bookmaker,
                bookmaker_names=bookmaker_names,
            ),
            top_months=rank_months(all_bets, top_n=self.leaderboard_size),
            year=yearly_breakdown(all_bets, all_gains, year) if year is not None else None,
        )

    def _money(self, value: float, signed: bool = False) -> str:
        amount = f"{value:+,.2f}" if signed else f"{value:,.2f}"
        return f"{self.currency_symbol} {amount}"

    @staticmethod
    def _window_label(window: PeriodWindow) -> str:
        start = window.start.isoformat() if window.start else "beginning"
        end = window.end.isoformat() if window.end else "today"
        return f"{start} to {end}"

    def format_file(self, report: DashboardReport) -> str:
        """Format report for file output (plain text)."""
        s = report.summary
        lines = [
            "=" * 60,
            "BET LEDGER REPORT",
            f"Period: {self._window_label(s.window)}",
            "=" * 60,
            "",
            "SUMMARY",
            "-" * 40,
            f"  Operations:       {s.operations:>12}",
            f"  Staked:           {self._money(s.total_staked):>12}",
            f"  Returned:         {self._money(s.total_returned):>12}",
            f"  Net Profit:       {self._money(s.net_profit, signed=True):>12}",
            f"  ROI:              {s.roi:>+11.1f}%",
            f"  Staked (pending): {self._money(s.total_staked_in_period):>12}",
            f"  Extra Gains:      {self._money(s.extra_gains_total):>12}",
            "",
            "TOP BOOKMAKERS",
            "-" * 40,
        ]

        if not report.top_bookmakers:
            lines.append("  No settled bets")
        for position, bookmaker in enumerate(report.top_bookmakers, start=1):
            lines.append(
                f"  {position}. {bookmaker.name}: {self._money(bookmaker.total_profit, signed=True)}"
            )
            for promo in bookmaker.promotions:
                lines.append(f"       {promo.promotion}: {self._money(promo.profit, signed=True)}")

        lines.extend(["", "BEST MONTHS", "-" * 40])
        if not report.top_months:
            lines.append("  No settled bets")
        for position, month in enumerate(report.top_months, start=1):
            lines.append(f"  {position}. {month.month}: {self._money(month.profit, signed=True)}")

        if report.year is not None:
            y = report.year
            lines.extend(["", f"MONTHLY HISTORY {y.year}", "-" * 40])
            for m in y.months:
                if m.operations == 0:
                    continue
                lines.append(
                    f"  {MONTH_NAMES[m.month - 1]:<10} {m.operations:>4} ops  "
                    f"{self._money(m.net_profit, signed=True):>14}  ROI {m.roi:+.1f}%"
                )
            lines.append(
                f"  {'Total':<10} {y.operations:>4} ops  "
                f"{self._money(y.net_profit, signed=True):>14}  ROI {y.roi:+.1f}%"
            )

        lines.extend([
            "",
            "=" * 60,
            f"Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M')}",
        ])

        return "\n".join(lines)


# Global generator instance
report_generator = DashboardReportGenerator()
