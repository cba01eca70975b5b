"""Data models for the bet ledger."""

from betledger.models.bet import (
    Bet,
    ExtraGain,
    GainStatus,
    Leg,
    PromotionKind,
    Status,
)
from betledger.models.extraction import (
    AnalysisResult,
    AnalysisSource,
    AnalysisType,
    BetDraft,
    ExtractedFields,
    LegDraft,
)
from betledger.models.stats import (
    BookmakerAttribution,
    CumulativePoint,
    LegSettlement,
    MonthProfit,
    MonthSummary,
    PeriodSummary,
    PeriodWindow,
    PromotionProfit,
    Settlement,
    YearSummary,
)

__all__ = [
    # Bet models
    "Bet",
    "ExtraGain",
    "GainStatus",
    "Leg",
    "PromotionKind",
    "Status",
    # Extraction models
    "AnalysisResult",
    "AnalysisSource",
    "AnalysisType",
    "BetDraft",
    "ExtractedFields",
    "LegDraft",
    # Stats models
    "BookmakerAttribution",
    "CumulativePoint",
    "LegSettlement",
    "MonthProfit",
    "MonthSummary",
    "PeriodSummary",
    "PeriodWindow",
    "PromotionProfit",
    "Settlement",
    "YearSummary",
]
