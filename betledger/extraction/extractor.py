"""
Deterministic field extraction from recognized text.

Picks a layout from the rule table, applies its field rules and scores
the result by completeness. Holds no state between calls.
"""

import re
from datetime import date
from typing import Optional

from config.logging_config import get_logger
from betledger.extraction.layouts import (
    LAYOUTS,
    MARKET_KEYWORDS,
    FieldRule,
    Layout,
    RuleKind,
    select_layout,
)
from betledger.models import ExtractedFields
from betledger.utils.dates import normalize_date_token
from betledger.utils.numbers import find_decimals, parse_decimal

logger = get_logger(__name__)

MIN_TEXT_LENGTH = 10

# Completeness weights, summing to 1.0
FIELD_WEIGHTS = {
    "stake": 0.25,
    "odds": 0.25,
    "market": 0.15,
    "event": 0.10,
    "date": 0.10,
    "bookmaker": 0.10,
    "promotion": 0.05,
}

# Plausible decimal odds for the fallback hunt
MIN_ODDS = 1.01
MAX_ODDS = 100.0


class FieldExtractor:
    """
    Rule-based extractor for bet slip text.

    Usage:
        fields = field_extractor.extract(text)
        if fields is None:
            ...  # nothing extracted
    """

    def __init__(self, layouts: tuple[Layout, ...] = LAYOUTS) -> None:
        self.layouts = layouts

    def extract(self, text: Optional[str], today: Optional[date] = None) -> Optional[ExtractedFields]:
        """
        Extract bet fields from recognized text.

        Args:
            text: Raw recognized text
            today: Reference day for relative dates (default: today)

        Returns:
            ExtractedFields, or None when nothing useful was found
        """
        try:
            return self._extract(text, today or date.today())
        except Exception as e:
            logger.error("Field extraction failed", error=str(e))
            return None

    def _extract(self, text: Optional[str], today: date) -> Optional[ExtractedFields]:
        if not text or len(text.strip()) < MIN_TEXT_LENGTH:
            logger.debug("Not enough text to extract from")
            return None

        lowered = text.lower()
        layout = select_layout(lowered, self.layouts)
        fields = ExtractedFields(bookmaker=layout.bookmaker, layout=layout.id)

        for rule in layout.rules:
            self._apply_rule(rule, text, lowered, today, fields)

        if fields.odds is None:
            fields.odds = self._hunt_odds(lowered, fields.stake)

        if not fields.has_any_data:
            logger.debug("No meaningful fields found", layout=layout.id)
            return None

        fields.confidence = self._score(fields)
        logger.debug(
            "Fields extracted",
            layout=layout.id,
            confidence=fields.confidence,
            stake=fields.stake,
            odds=fields.odds,
        )
        return fields

    def _apply_rule(
        self,
        rule: FieldRule,
        text: str,
        lowered: str,
        today: date,
        fields: ExtractedFields,
    ) -> None:
        """Apply one rule, leaving fields that are already set alone."""
        if rule.field is not None and getattr(fields, rule.field) is not None:
            return

        if rule.kind == RuleKind.MARKET:
            fields.market = self._scan_market(text)
            return

        if rule.kind == RuleKind.KEYWORD:
            for needle, value in rule.keywords:
                if needle in lowered:
                    setattr(fields, rule.field, value)
                    return
            return

        offset, match = self._search(rule, lowered)
        if match is None:
            return

        token = match.group(1) if match.groups() and match.group(1) else match.group(0)

        if rule.kind == RuleKind.NUMBER:
            number = parse_decimal(token)
            if number is None:
                return
            if rule.field is not None:
                setattr(fields, rule.field, number)
            elif fields.stake is None:
                fields.stake = number
            elif fields.odds is None:
                fields.odds = number

        elif rule.kind == RuleKind.DATE:
            setattr(fields, rule.field, normalize_date_token(token, today))

        elif rule.kind == RuleKind.TEXT:
            span = match.span(1) if match.groups() else match.span(0)
            setattr(fields, rule.field, self._original_slice(text, lowered, span, offset).strip())

    @staticmethod
    def _search(rule: FieldRule, lowered: str) -> tuple[int, Optional[re.Match]]:
        """Search a rule's pattern, after its anchor when the anchor is present."""
        offset = 0
        if rule.anchor:
            position = lowered.find(rule.anchor)
            if position >= 0:
                offset = position + len(rule.anchor)

        return offset, re.search(rule.pattern, lowered[offset:], re.MULTILINE)

    @staticmethod
    def _original_slice(text: str, lowered: str, span: tuple[int, int], offset: int) -> str:
        """Cut a match out of the original text to keep its casing."""
        start, end = span[0] + offset, span[1] + offset
        source = text if len(text) == len(lowered) else lowered
        return source[start:end]

    @staticmethod
    def _scan_market(text: str) -> Optional[str]:
        """Join every line that mentions a market keyword."""
        found: list[str] = []
        seen: set[str] = set()

        for line in text.splitlines():
            stripped = line.strip()
            key = stripped.lower()
            if len(stripped) <= 5 or key in seen:
                continue
            if any(keyword in key for keyword in MARKET_KEYWORDS):
                seen.add(key)
                found.append(stripped)

        return " + ".join(found) if found else None

    @staticmethod
    def _hunt_odds(lowered: str, stake: Optional[float]) -> Optional[float]:
        """First plausible odds value that is not the stake."""
        for number in find_decimals(lowered):
            if MIN_ODDS < number < MAX_ODDS and number != stake:
                return number
        return None

    @staticmethod
    def _score(fields: ExtractedFields) -> float:
        """Weighted share of the fields that were found."""
        score = sum(
            weight for name, weight in FIELD_WEIGHTS.items() if getattr(fields, name) not in (None, "")
        )
        return round(min(score, 1.0), 2)


# Global extractor instance
field_extractor = FieldExtractor()
