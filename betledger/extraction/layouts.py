"""
Layout rule table for field extraction.

Each layout lists the anchor phrases that identify a bookmaker's bet
slip and the rules that read its fields. Adding a bookmaker means
adding a Layout here; the extractor's control flow does not change.

All patterns run against lower-cased text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RuleKind(str, Enum):
    """How a rule turns text into a field value."""

    NUMBER = "number"  # First decimal number in the match
    DATE = "date"  # Date token, normalized to YYYY-MM-DD
    TEXT = "text"  # Matched text, original casing
    KEYWORD = "keyword"  # First keyword present maps to a fixed value
    MARKET = "market"  # Multi-line market keyword scan


@dataclass(frozen=True)
class FieldRule:
    """
    One field rule.

    A NUMBER rule without a field is a generic amount: it fills the
    stake first and the odds second.
    """

    field: Optional[str]
    kind: RuleKind
    pattern: Optional[str] = None
    anchor: Optional[str] = None  # Search only after this phrase, when present
    keywords: tuple[tuple[str, str], ...] = ()  # (needle, value) for KEYWORD rules


@dataclass(frozen=True)
class Layout:
    """Bet slip layout of one bookmaker, or the generic fallback."""

    id: str
    bookmaker: Optional[str]
    anchors: tuple[str, ...]
    rules: tuple[FieldRule, ...]

    def matches(self, text: str) -> bool:
        """Check if any anchor phrase appears in lower-cased text."""
        return any(anchor in text for anchor in self.anchors)


MARKET_KEYWORDS = (
    "resultado",
    "ambas",
    "gols",
    "escanteios",
    "vencedor",
    "mais de",
    "menos de",
    "empate",
    "vence",
    "handicap",
    "dupla chance",
    "cartões",
)

KNOWN_BOOKMAKERS = (
    ("betano", "Betano"),
    ("bet365", "Bet365"),
    ("br4", "BR4Bet"),
    ("nacional", "Nacional"),
    ("sportingbet", "Sportingbet"),
    ("kto", "KTO"),
    ("novibet", "Novibet"),
    ("pixbet", "Pixbet"),
    ("estrela", "EstrelaBet"),
    ("pinnacle", "Pinnacle"),
    ("betesporte", "Betesporte"),
)

PROMOTION_KEYWORDS = (
    ("conversão freebet", "Conversão Freebet"),
    ("conversao freebet", "Conversão Freebet"),
    ("freebet", "Freebet"),
    ("aposta grátis", "Freebet"),
    ("super odds", "Super Odds"),
    ("odds aumentadas", "Super Odds"),
    ("reembolso", "Reembolso"),
    ("missão", "Missão"),
)

# Stake amount; "1.234,56" keeps its thousands separator
AMOUNT_PATTERN = r"(\d{1,3}(?:\.\d{3})+,\d{2}|\d+[.,]\d{2})"
DATE_PATTERN = r"\b\d{1,2}/\d{1,2}(?:/\d{2,4})?\b|\bhoje\b|\bontem\b|\btoday\b|\byesterday\b"
EVENT_PATTERN = r"^[ \t]*([^\n]{2,60}?\S[ \t]+(?:x|vs\.?|v)[ \t]+\S[^\n]{0,60}?)[ \t]*$"

# Shared rules
DATE_RULE = FieldRule(field="date", kind=RuleKind.DATE, pattern=DATE_PATTERN)
MARKET_RULE = FieldRule(field="market", kind=RuleKind.MARKET)
EVENT_RULE = FieldRule(field="event", kind=RuleKind.TEXT, pattern=EVENT_PATTERN)
PROMOTION_RULE = FieldRule(field="promotion", kind=RuleKind.KEYWORD, keywords=PROMOTION_KEYWORDS)

COMMON_RULES = (MARKET_RULE, EVENT_RULE, DATE_RULE, PROMOTION_RULE)

GENERIC_LAYOUT = Layout(
    id="generic",
    bookmaker=None,
    anchors=(),
    rules=(
        FieldRule(field="bookmaker", kind=RuleKind.KEYWORD, keywords=KNOWN_BOOKMAKERS),
        FieldRule(
            field=None,
            kind=RuleKind.NUMBER,
            pattern=r"(?:r\$|\$|valor|aposta|total)[:\s]*" + AMOUNT_PATTERN,
        ),
        FieldRule(
            field=None,
            kind=RuleKind.NUMBER,
            pattern=r"(?:@|odds?|cota[çtc][aã]o|multiplicador)[:\s]*(\d+[.,]\d{2,3})",
        ),
    ) + COMMON_RULES,
)

LAYOUTS: tuple[Layout, ...] = (
    Layout(
        id="betano",
        bookmaker="Betano",
        anchors=("betano",),
        rules=(
            FieldRule(
                field="stake",
                kind=RuleKind.NUMBER,
                anchor="valor da aposta",
                pattern=r"(?:r\$)?\s*" + AMOUNT_PATTERN,
            ),
            FieldRule(
                field="odds",
                kind=RuleKind.NUMBER,
                pattern=r"(?:odds?|cota[çc][ãa]o)[:\s]*(\d+[.,]\d{2,3})",
            ),
        ) + COMMON_RULES,
    ),
    Layout(
        id="bet365",
        bookmaker="Bet365",
        anchors=("bet365",),
        rules=(
            FieldRule(
                field="stake",
                kind=RuleKind.NUMBER,
                pattern=r"(?:aposta|stake)[:\s]*(?:r\$\s*)?" + AMOUNT_PATTERN,
            ),
            FieldRule(
                field="odds",
                kind=RuleKind.NUMBER,
                pattern=r"(?:@|odds?)[:\s]*(\d+[.,]\d{2,3})",
            ),
        ) + COMMON_RULES,
    ),
    Layout(
        id="sportingbet",
        bookmaker="Sportingbet",
        anchors=("sportingbet",),
        rules=(
            FieldRule(
                field="stake",
                kind=RuleKind.NUMBER,
                anchor="valor apostado",
                pattern=r"(?:r\$)?\s*" + AMOUNT_PATTERN,
            ),
            FieldRule(
                field="odds",
                kind=RuleKind.NUMBER,
                anchor="cotação",
                pattern=r"(\d+[.,]\d{2,3})",
            ),
        ) + COMMON_RULES,
    ),
    Layout(
        id="kto",
        bookmaker="KTO",
        anchors=("kto.com", "kto "),
        rules=(
            FieldRule(
                field="stake",
                kind=RuleKind.NUMBER,
                anchor="aposta total",
                pattern=r"(?:r\$)?\s*" + AMOUNT_PATTERN,
            ),
            FieldRule(
                field="odds",
                kind=RuleKind.NUMBER,
                anchor="odds totais",
                pattern=r"(\d+[.,]\d{2,3})",
            ),
        ) + COMMON_RULES,
    ),
    Layout(
        id="pixbet",
        bookmaker="Pixbet",
        anchors=("pixbet",),
        rules=(
            FieldRule(
                field="stake",
                kind=RuleKind.NUMBER,
                pattern=r"(?:valor|aposta)[:\s]*(?:r\$\s*)?" + AMOUNT_PATTERN,
            ),
            FieldRule(
                field="odds",
                kind=RuleKind.NUMBER,
                pattern=r"(?:cota[çc][ãa]o|odds?)[:\s]*(\d+[.,]\d{2,3})",
            ),
        ) + COMMON_RULES,
    ),
)


def select_layout(text: str, layouts: tuple[Layout, ...] = LAYOUTS) -> Layout:
    """First layout whose anchor appears in lower-cased text, else generic."""
    for layout in layouts:
        if layout.matches(text):
            return layout
    return GENERIC_LAYOUT
