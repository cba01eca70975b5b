"""
Settlement and performance data models.

These models are derived on demand from bets and are never stored.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class LegSettlement:
    """Settled figures of a single leg."""

    stake: float  # Stake as recorded
    returned: float
    profit: float  # Return minus recorded stake
    resolved: bool
    counted_stake: float = 0.0  # Stake in the bet total, 0 for a bonus-funded leg

    @property
    def net_profit(self) -> float:
        """Return minus counted stake; these sum to the bet profit."""
        return self.returned - self.counted_stake


@dataclass(frozen=True)
class Settlement:
    """Stake, return and profit of a bet, excluding its extra adjustment."""

    total_stake: float
    total_return: float
    profit: float
    legs: tuple[LegSettlement, ...] = ()
    is_double_win: bool = False

    @property
    def per_leg_profit(self) -> list[float]:
        """Profit of each leg in leg order."""
        return [leg.profit for leg in self.legs]


@dataclass(frozen=True)
class PeriodWindow:
    """Inclusive calendar-day window; an open bound is None."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_unbounded(self) -> bool:
        """True when neither bound is set."""
        return self.start is None and self.end is None

    def contains(self, day: Optional[date]) -> bool:
        """Check if a calendar day falls in the window."""
        if day is None:
            return self.is_unbounded
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class CumulativePoint:
    """One point of the cumulative profit series."""

    date: Optional[date]
    bet_id: str
    profit: float
    cumulative_profit: float


@dataclass
class PeriodSummary:
    """Aggregate over the settled bets of one window."""

    window: PeriodWindow
    operations: int = 0
    total_staked: float = 0.0
    total_returned: float = 0.0
    net_profit: float = 0.0
    roi: float = 0.0
    total_staked_in_period: float = 0.0  # Every bet in the window, pending and drafts included
    extra_gains_total: float = 0.0
    series: list[CumulativePoint] = field(default_factory=list)


@dataclass
class PromotionProfit:
    """Profit attributed to one promotion label."""

    promotion: str
    profit: float


@dataclass
class BookmakerAttribution:
    """Profit attributed to one bookmaker."""

    bookmaker_id: str
    name: str
    total_profit: float = 0.0
    promotions: list[PromotionProfit] = field(default_factory=list)


@dataclass(frozen=True)
class MonthProfit:
    """Total profit of one calendar month."""

    month: str  # YYYY-MM
    profit: float


@dataclass
class MonthSummary:
    """One month of the yearly history."""

    month: int  # 1-12
    operations: int = 0
    staked: float = 0.0
    returned: float = 0.0
    net_profit: float = 0.0

    @property
    def roi(self) -> float:
        """ROI based on total staked."""
        if self.staked == 0:
            return 0.0
        return (self.net_profit / self.staked) * 100


@dataclass
class YearSummary:
    """Month-by-month history of one year."""

    year: int
    months: list[MonthSummary] = field(default_factory=list)

    @property
    def operations(self) -> int:
        return sum(m.operations for m in self.months)

    @property
    def staked(self) -> float:
        return sum(m.staked for m in self.months)

    @property
    def returned(self) -> float:
        return sum(m.returned for m in self.months)

    @property
    def net_profit(self) -> float:
        return sum(m.net_profit for m in self.months)

    @property
    def roi(self) -> float:
        """ROI based on total staked."""
        if self.staked == 0:
            return 0.0
        return (self.net_profit / self.staked) * 100
