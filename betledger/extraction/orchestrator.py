"""
Extraction orchestrator.

Reads bet screenshots with the local rule engine first and only calls
the AI fallback when the local read is incomplete. Every path ends in
a usable result:

    local (stake + odds) -> cache -> remote fallback
        -> partial local data -> blank scaffold
"""

from dataclasses import replace
from datetime import date
from typing import Any, Awaitable, Callable, Iterable, Optional

from config import settings
from config.logging_config import bind_context, clear_context, get_logger
from betledger.exceptions import FallbackError, RateLimitError
from betledger.extraction.cache import AnalysisCache
from betledger.extraction.clients import AnalysisContext, FallbackClient, TextRecognizer
from betledger.extraction.extractor import FieldExtractor, field_extractor
from betledger.models import (
    AnalysisResult,
    AnalysisSource,
    AnalysisType,
    BetDraft,
    ExtractedFields,
    LegDraft,
    Status,
)
from betledger.models.extraction import (
    PLACEHOLDER_EVENT,
    PLACEHOLDER_MARKET,
    PLACEHOLDER_ODDS,
)
from betledger.utils.numbers import optional_number
from betledger.utils.retries import PacedSequence, retry_async

logger = get_logger(__name__)

LOCAL_CONFIDENCE = 1.0
REMOTE_CONFIDENCE = 0.95
PARTIAL_CONFIDENCE = 0.5

LOCAL_NOTE = "Processed locally and instantly; no AI call needed."
PARTIAL_WARNING = "AI analysis unavailable; showing a partial local read. Review before saving."
MANUAL_SUGGESTION = "Could not read this image. Fill in the fields manually."

# Checked in order: half results before full ones
STATUS_KEYWORDS: tuple[tuple[tuple[str, ...], Status], ...] = (
    (("meio green", "half won", "half-won", "meio ganho"), Status.HALF_WON),
    (("meio red", "half lost", "half-lost", "meio perdido"), Status.HALF_LOST),
    (("cashout", "cash out", "encerrad"), Status.CASHED_OUT),
    (("anulad", "void", "devolvid", "reembolsad"), Status.VOID),
    (("green", "won", "ganhou", "ganha", "vencedora", "win"), Status.WON),
    (("red", "lost", "perdeu", "perdida", "lose", "loss"), Status.LOST),
    (("pendente", "pending", "aberta", "open", "yellow"), Status.PENDING),
)


def map_status(text: Optional[str]) -> Status:
    """
    Map a free-text status keyword to the status vocabulary.

    Matching is by case-insensitive substring; no match means pending.
    """
    if not text:
        return Status.PENDING
    lowered = text.lower()
    for needles, status in STATUS_KEYWORDS:
        if any(needle in lowered for needle in needles):
            return status
    return Status.PENDING


def blank_fields(today: Optional[date] = None) -> ExtractedFields:
    """Scaffold with placeholder values for manual entry."""
    return ExtractedFields(
        bookmaker=None,
        stake=0.0,
        odds=PLACEHOLDER_ODDS,
        market=PLACEHOLDER_MARKET,
        event=PLACEHOLDER_EVENT,
        date=(today or date.today()).isoformat(),
        confidence=0.0,
        layout="blank",
    )


class ExtractionOrchestrator:
    """
    Turns screenshots into prefilled bet data.

    Collaborators are injected so tests can swap the recognizer, the
    fallback, the cache and the sleep function.
    """

    def __init__(
        self,
        recognizer: TextRecognizer,
        fallback: Optional[FallbackClient] = None,
        cache: Optional[AnalysisCache] = None,
        extractor: Optional[FieldExtractor] = None,
        rate_limit_backoff: Optional[float] = None,
        inter_image_delay: Optional[float] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            recognizer: Text recognition collaborator
            fallback: AI fallback collaborator, None to stay local
            cache: Result cache (default: new cache sized from settings)
            extractor: Field extractor (default: global instance)
            rate_limit_backoff: Wait before the single rate-limit retry
            inter_image_delay: Wait between images of one batch
            sleep: Awaitable sleep for image pacing and the rate-limit backoff
        """
        self.recognizer = recognizer
        self.fallback = fallback
        self.cache = cache if cache is not None else AnalysisCache(settings.extraction.cache_capacity)
        self.extractor = extractor or field_extractor
        self.rate_limit_backoff = (
            settings.extraction.rate_limit_backoff if rate_limit_backoff is None else rate_limit_backoff
        )
        self.inter_image_delay = (
            settings.extraction.inter_image_delay if inter_image_delay is None else inter_image_delay
        )
        self._sleep = sleep

    async def analyze(
        self,
        image: bytes,
        context: Optional[AnalysisContext] = None,
        today: Optional[date] = None,
    ) -> AnalysisResult:
        """
        Analyze one image.

        Never raises: failures degrade to partial data or a blank
        scaffold with an advisory suggestion.
        """
        raw_text, local = await self._read_locally(image, today)

        if local is not None and local.has_stake_and_odds:
            logger.info("Local extraction complete", layout=local.layout)
            return AnalysisResult(
                type=AnalysisType.BET,
                confidence=LOCAL_CONFIDENCE,
                data=local.with_confidence(LOCAL_CONFIDENCE),
                source=AnalysisSource.LOCAL,
                raw_text=raw_text,
                suggestions=[LOCAL_NOTE],
            )

        cached = self.cache.get(image)
        if cached is not None:
            logger.info("Analysis served from cache")
            return AnalysisResult(
                type=cached.type,
                confidence=cached.confidence,
                data=cached.data.with_confidence(cached.confidence),
                source=AnalysisSource.CACHE,
                raw_text=cached.raw_text,
                suggestions=list(cached.suggestions),
            )

        try:
            result = await self._call_fallback(image, context, raw_text)
        except FallbackError as e:
            logger.warning("AI fallback failed", error=str(e), has_partial=local is not None)
        except Exception as e:
            logger.error("Unexpected AI fallback error", error=str(e))
        else:
            self.cache.put(image, replace(result, data=replace(result.data)))
            return result

        if local is not None:
            return AnalysisResult(
                type=AnalysisType.BET,
                confidence=PARTIAL_CONFIDENCE,
                data=local.with_confidence(PARTIAL_CONFIDENCE),
                source=AnalysisSource.PARTIAL,
                raw_text=raw_text,
                suggestions=[PARTIAL_WARNING],
            )

        return AnalysisResult(
            type=AnalysisType.UNKNOWN,
            confidence=0.0,
            data=blank_fields(today),
            source=AnalysisSource.NONE,
            raw_text=raw_text,
            suggestions=[MANUAL_SUGGESTION],
        )

    async def analyze_many(
        self,
        images: Iterable[bytes],
        context: Optional[AnalysisContext] = None,
        today: Optional[date] = None,
    ) -> BetDraft:
        """
        Analyze several screenshots of one operation into a bet draft.

        Images are processed one at a time with a fixed delay between
        them. The first image supplies event, date and main bookmaker;
        every image supplies one leg.
        """
        images = list(images)
        sequence = PacedSequence(self.inter_image_delay, sleep=self._sleep)

        async def step(index: int, image: bytes) -> AnalysisResult:
            bind_context(batch_size=len(images), image_index=index)
            try:
                return await self.analyze(image, context, today)
            finally:
                clear_context()

        results = await sequence.run(step, images)
        return self._build_draft(results, today)

    async def _read_locally(
        self, image: bytes, today: Optional[date]
    ) -> tuple[Optional[str], Optional[ExtractedFields]]:
        try:
            text = await self.recognizer.recognize(image)
        except Exception as e:
            logger.warning("Text recognition failed", error=str(e))
            return None, None
        return text, self.extractor.extract(text, today)

    async def _call_fallback(
        self,
        image: bytes,
        context: Optional[AnalysisContext],
        raw_text: Optional[str],
    ) -> AnalysisResult:
        if self.fallback is None:
            raise FallbackError("No AI fallback configured")

        payload = await retry_async(
            self.fallback.analyze,
            image,
            context,
            max_attempts=2,
            wait_seconds=self.rate_limit_backoff,
            exceptions=(RateLimitError,),
            sleep=self._sleep,
        )
        return self._result_from_payload(payload, raw_text)

    @staticmethod
    def _result_from_payload(payload: dict[str, Any], raw_text: Optional[str]) -> AnalysisResult:
        data = payload.get("data", payload)
        if not isinstance(data, dict):
            raise FallbackError("AI fallback returned no data object")

        fields = ExtractedFields.from_payload(data).with_confidence(REMOTE_CONFIDENCE)
        try:
            kind = AnalysisType(str(payload.get("type", "bet")).lower())
        except ValueError:
            kind = AnalysisType.UNKNOWN

        logger.info("AI fallback analysis complete", type=kind.value)
        return AnalysisResult(
            type=kind,
            confidence=REMOTE_CONFIDENCE,
            data=fields,
            source=AnalysisSource.REMOTE,
            raw_text=payload.get("rawText") or raw_text,
        )

    @staticmethod
    def _build_draft(results: list[AnalysisResult], today: Optional[date]) -> BetDraft:
        if not results:
            scaffold = blank_fields(today)
            return BetDraft(
                event=scaffold.event,
                date=scaffold.date,
                main_bookmaker=None,
                suggestions=[MANUAL_SUGGESTION],
            )

        first = results[0].data
        legs = [
            LegDraft(
                bookmaker=result.data.bookmaker,
                market=result.data.market or PLACEHOLDER_MARKET,
                odds=optional_number(result.data.odds) or PLACEHOLDER_ODDS,
                stake=optional_number(result.data.stake) or 0.0,
                status=map_status(result.data.status),
            )
            for result in results
        ]

        suggestions: list[str] = []
        for result in results:
            for suggestion in result.suggestions:
                if suggestion not in suggestions:
                    suggestions.append(suggestion)

        return BetDraft(
            event=first.event or PLACEHOLDER_EVENT,
            date=first.date or (today or date.today()).isoformat(),
            main_bookmaker=first.bookmaker,
            legs=legs,
            confidence=min(result.confidence for result in results),
            suggestions=suggestions,
            results=results,
        )
