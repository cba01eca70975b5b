"""
Bet, coverage and extra gain data models.

These models mirror the records kept by the bet store. Numeric fields
are coerced on load so that a malformed historical record never breaks
aggregate views.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

from betledger.utils.dates import parse_calendar_date
from betledger.utils.numbers import optional_number, safe_number


class Status(str, Enum):
    """Resolution status of a leg or bet, stored under its original label."""

    PENDING = "Pendente"
    WON = "Green"
    LOST = "Red"
    VOID = "Anulada"
    HALF_WON = "Meio Green"
    HALF_LOST = "Meio Red"
    CASHED_OUT = "Cashout"
    DRAFT = "Rascunho"  # Bet-level only
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "Status":
        """
        Parse a stored label or an English member name.

        Matching is case-insensitive. Anything unrecognised is UNKNOWN.
        """
        if isinstance(value, Status):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN

        key = value.strip().lower()
        for member in cls:
            if key == member.value.lower() or key == member.name.lower():
                return member
        return _STATUS_ALIASES.get(key, cls.UNKNOWN)

    @property
    def is_resolved(self) -> bool:
        """Whether a leg with this status has a settled outcome."""
        return self not in (Status.PENDING, Status.DRAFT, Status.UNKNOWN)


_STATUS_ALIASES = {
    "pending": Status.PENDING,
    "won": Status.WON,
    "lost": Status.LOST,
    "void": Status.VOID,
    "halfwon": Status.HALF_WON,
    "half won": Status.HALF_WON,
    "halflost": Status.HALF_LOST,
    "half lost": Status.HALF_LOST,
    "cashedout": Status.CASHED_OUT,
    "cashed out": Status.CASHED_OUT,
    "draft": Status.DRAFT,
}


class PromotionKind(str, Enum):
    """Classification of a free-text promotion label."""

    NONE = "none"
    FREEBET_CONVERSION = "freebet_conversion"
    FREEBET = "freebet"
    BOOSTED_ODDS = "boosted_odds"
    REFUND = "refund"
    MISSION = "mission"
    OTHER = "other"

    @classmethod
    def classify(cls, label: Optional[str]) -> "PromotionKind":
        """
        Classify a promotion label.

        This is the only place that inspects the label text; settlement
        and attribution both work from the returned kind.
        """
        if not label or not label.strip():
            return cls.NONE

        text = label.strip().lower()
        for needles, kind in _PROMOTION_RULES:
            if any(needle in text for needle in needles):
                return kind
        return cls.OTHER


# Order matters: "conversão freebet" must win over plain "freebet"
_PROMOTION_RULES: tuple[tuple[tuple[str, ...], PromotionKind], ...] = (
    (("nenhuma", "none"), PromotionKind.NONE),
    (("conversão freebet", "conversao freebet"), PromotionKind.FREEBET_CONVERSION),
    (("freebet", "free bet", "aposta grátis"), PromotionKind.FREEBET),
    (("super odds", "odds aumentadas", "odd aumentada", "boost"), PromotionKind.BOOSTED_ODDS),
    (("reembolso", "refund", "cashback"), PromotionKind.REFUND),
    (("missão", "missao", "mission"), PromotionKind.MISSION),
)


class GainStatus(str, Enum):
    """Status of an extra gain."""

    RECEIVED = "Recebido"
    PENDING = "Pendente"
    CONFIRMED = "Confirmado"
    CANCELLED = "Cancelado"

    @classmethod
    def parse(cls, value: Any) -> "GainStatus":
        """Parse a stored label; unknown labels count as received."""
        if isinstance(value, GainStatus):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value.lower(), member.name.lower()):
                    return member
        return cls.RECEIVED


@dataclass
class Leg:
    """One stake at one bookmaker on one market (a coverage)."""

    id: str
    bookmaker_id: str
    market: str = ""
    odds: float = 0.0  # Decimal odds
    stake: float = 0.0
    status: Status = Status.PENDING
    manual_return: Optional[float] = None  # Overrides the computed return

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Leg":
        """Build a leg from a stored coverage record."""
        return cls(
            id=str(data.get("id", "")),
            bookmaker_id=str(data.get("bookmakerId", data.get("bookmaker_id", ""))),
            market=str(data.get("market") or ""),
            odds=safe_number(data.get("odd", data.get("odds"))),
            stake=safe_number(data.get("stake")),
            status=Status.parse(data.get("status")),
            manual_return=optional_number(data.get("manualReturn", data.get("manual_return"))),
        )


@dataclass
class Bet:
    """A betting operation made of one or more legs."""

    id: str
    date: Optional[date]
    event: str
    main_bookmaker_id: str
    status: Status = Status.PENDING
    legs: list[Leg] = field(default_factory=list)
    promotion_type: Optional[str] = None  # Free text, e.g. "Conversão Freebet"
    extra_gain: Optional[float] = None  # Bonus, cashback or fee added to profit
    notes: str = ""

    @property
    def promotion_kind(self) -> PromotionKind:
        """Classified promotion of this bet."""
        return PromotionKind.classify(self.promotion_type)

    @property
    def is_settled(self) -> bool:
        """Settled bets feed profit, ROI and rankings."""
        return self.status not in (Status.PENDING, Status.DRAFT)

    @property
    def extra_amount(self) -> float:
        """Extra adjustment as a number, 0 when absent."""
        return safe_number(self.extra_gain)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bet":
        """
        Build a bet from a stored record.

        A missing or malformed coverages list becomes an empty list and
        coverage entries that are not objects are dropped.
        """
        raw_legs = data.get("coverages", data.get("legs"))
        if not isinstance(raw_legs, list):
            raw_legs = []

        promotion = data.get("promotionType", data.get("promotion_type"))

        return cls(
            id=str(data.get("id", "")),
            date=parse_calendar_date(data.get("date")),
            event=str(data.get("event") or ""),
            main_bookmaker_id=str(data.get("mainBookmakerId", data.get("main_bookmaker_id", ""))),
            status=Status.parse(data.get("status")),
            legs=[Leg.from_dict(item) for item in raw_legs if isinstance(item, dict)],
            promotion_type=str(promotion) if promotion else None,
            extra_gain=optional_number(data.get("extraGain", data.get("extra_gain"))),
            notes=str(data.get("notes") or ""),
        )


@dataclass
class ExtraGain:
    """A standalone gain not tied to a bet (bonus, cashback, free spins)."""

    id: str
    date: Optional[date]
    amount: float
    origin: str = ""
    bookmaker_id: str = ""
    status: GainStatus = GainStatus.RECEIVED
    notes: str = ""

    @property
    def counts(self) -> bool:
        """Pending and cancelled gains are ignored by summaries."""
        return self.status not in (GainStatus.PENDING, GainStatus.CANCELLED)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtraGain":
        """Build a gain from a stored record."""
        return cls(
            id=str(data.get("id", "")),
            date=parse_calendar_date(data.get("date")),
            amount=safe_number(data.get("amount")),
            origin=str(data.get("origin") or ""),
            bookmaker_id=str(data.get("bookmakerId", data.get("bookmaker_id", ""))),
            status=GainStatus.parse(data.get("status")),
            notes=str(data.get("notes") or ""),
        )
