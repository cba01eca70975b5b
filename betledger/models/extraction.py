"""
Extraction result data models.

ExtractedFields is what the rule engine or the AI fallback read from a
screenshot; AnalysisResult wraps it with the confidence and advisory
messages shown to the user; BetDraft is the prefilled form.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from betledger.models.bet import Status
from betledger.utils.numbers import optional_number


class AnalysisType(str, Enum):
    """What kind of record a screenshot shows."""

    BET = "bet"
    GAIN = "gain"
    UNKNOWN = "unknown"


class AnalysisSource(str, Enum):
    """Which path of the orchestrator produced a result."""

    LOCAL = "local"
    CACHE = "cache"
    REMOTE = "remote"
    PARTIAL = "partial"
    NONE = "none"


# Placeholder values of a blank scaffold
PLACEHOLDER_EVENT = "Unknown event"
PLACEHOLDER_MARKET = "Default market"
PLACEHOLDER_ODDS = 1.0


@dataclass
class ExtractedFields:
    """Best-effort structured record; every field is optional."""

    bookmaker: Optional[str] = None
    stake: Optional[float] = None
    odds: Optional[float] = None
    market: Optional[str] = None
    event: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    promotion: Optional[str] = None
    status: Optional[str] = None  # Free-text status keyword
    confidence: float = 0.0
    layout: str = "generic"

    @property
    def has_stake_and_odds(self) -> bool:
        """Stake and odds are the signals that make a local read trustworthy."""
        return self.stake is not None and self.odds is not None

    @property
    def has_any_data(self) -> bool:
        return self.stake is not None or self.odds is not None or bool(self.market)

    def with_confidence(self, confidence: float) -> "ExtractedFields":
        """Copy with a different confidence."""
        return replace(self, confidence=confidence)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], layout: str = "remote") -> "ExtractedFields":
        """
        Read the "data" object returned by the AI fallback.

        Accepts the fallback's own keys ("value" for the stake, "match" or
        "description" for the event) next to the local field names.
        """
        event = payload.get("event") or payload.get("match") or payload.get("description")
        return cls(
            bookmaker=_text(payload.get("bookmaker")),
            stake=optional_number(payload.get("stake", payload.get("value"))),
            odds=optional_number(payload.get("odds")),
            market=_text(payload.get("market")),
            event=_text(event),
            date=_text(payload.get("date")),
            promotion=_text(payload.get("promotion")),
            status=_text(payload.get("status")),
            layout=layout,
        )


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class AnalysisResult:
    """Outcome of analyzing one image."""

    type: AnalysisType
    confidence: float
    data: ExtractedFields
    source: AnalysisSource
    raw_text: Optional[str] = None
    suggestions: list[str] = field(default_factory=list)


@dataclass
class LegDraft:
    """Prefilled values of one leg."""

    bookmaker: Optional[str]
    market: str
    odds: float
    stake: float
    status: Status = Status.PENDING


@dataclass
class BetDraft:
    """Prefilled bet built from one or more screenshots."""

    event: str
    date: Optional[str]
    main_bookmaker: Optional[str]
    legs: list[LegDraft] = field(default_factory=list)
    status: Status = Status.PENDING
    confidence: float = 0.0  # Lowest confidence across images
    suggestions: list[str] = field(default_factory=list)
    results: list[AnalysisResult] = field(default_factory=list)
