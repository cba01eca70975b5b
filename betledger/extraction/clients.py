"""
Clients for the text recognition service and the AI fallback.

Both are thin httpx wrappers. The orchestrator only depends on the
TextRecognizer and FallbackClient protocols, so tests and other
deployments can pass their own implementations.
"""

import base64
import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import httpx

from config import settings
from config.logging_config import get_logger
from betledger.exceptions import FallbackError, RateLimitError, RecognitionError
from betledger.models import Bet
from betledger.utils.retries import with_async_retry

logger = get_logger(__name__)

JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

# Recent bets sent along as context for the fallback
MAX_CONTEXT_BETS = 5


@dataclass
class AnalysisContext:
    """Hints that help the fallback name bookmakers and events."""

    recent_bets: list[Bet] = field(default_factory=list)
    bookmaker_names: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON-serialisable form of the context."""
        return {
            "bookmakers": list(self.bookmaker_names),
            "recentBets": [
                {
                    "event": bet.event,
                    "date": bet.date.isoformat() if bet.date else None,
                    "mainBookmakerId": bet.main_bookmaker_id,
                    "markets": [leg.market for leg in bet.legs],
                }
                for bet in self.recent_bets[:MAX_CONTEXT_BETS]
            ],
        }


class TextRecognizer(Protocol):
    """Anything that turns an image into free text."""

    async def recognize(self, image: bytes) -> str:
        ...


class FallbackClient(Protocol):
    """Anything that guesses bet fields from an image."""

    async def analyze(self, image: bytes, context: Optional[AnalysisContext] = None) -> dict[str, Any]:
        ...


class HttpTextRecognizer:
    """
    Client for an OCR microservice.

    Posts the raw image and expects a JSON body with a "text" field.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url or settings.extraction.ocr_url
        self._client = client or httpx.AsyncClient(
            timeout=timeout or settings.extraction.request_timeout
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def recognize(self, image: bytes) -> str:
        """
        Recognize the text of an image.

        Raises:
            RecognitionError: If the service fails or answers without text
        """
        try:
            response = await self._post(image)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise RecognitionError(f"Text recognition failed: {e}") from e
        except ValueError as e:
            raise RecognitionError("Text recognition returned invalid JSON") from e

        text = payload.get("text") if isinstance(payload, dict) else None
        if not isinstance(text, str):
            raise RecognitionError("Text recognition returned no text")

        logger.debug("Text recognized", characters=len(text))
        return text

    @with_async_retry(max_attempts=2, wait_seconds=0.5, exceptions=(httpx.TransportError,))
    async def _post(self, image: bytes) -> httpx.Response:
        return await self._client.post(
            self.url,
            files={"file": ("image", image, "application/octet-stream")},
        )


class HttpFallbackClient:
    """
    Client for the AI fallback endpoint.

    Posts the base64 image with context and reads a JSON answer of the
    form {"type": ..., "confidence": ..., "data": {...}, "rawText": ...}.
    The JSON may be wrapped in prose; the first object found is used.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url or settings.extraction.fallback_url
        self.api_key = api_key if api_key is not None else settings.extraction.fallback_api_key
        self._client = client or httpx.AsyncClient(
            timeout=timeout or settings.extraction.request_timeout
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def analyze(self, image: bytes, context: Optional[AnalysisContext] = None) -> dict[str, Any]:
        """
        Ask the fallback to read an image.

        Raises:
            RateLimitError: On HTTP 429
            FallbackError: On any other failure or an unreadable answer
        """
        if not self.url:
            raise FallbackError("AI fallback is not configured")

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        body = {
            "image": base64.b64encode(image).decode("ascii"),
            "context": (context or AnalysisContext()).to_payload(),
        }

        try:
            response = await self._client.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise FallbackError(f"AI fallback request failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError("AI fallback is rate limited")
        if response.status_code >= 400:
            raise FallbackError(f"AI fallback failed ({response.status_code}): {response.text[:200]}")

        return self._parse(response.text)

    @staticmethod
    def _parse(body: str) -> dict[str, Any]:
        match = JSON_OBJECT.search(body or "")
        if not match:
            raise FallbackError("AI fallback did not return JSON")
        try:
            payload = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise FallbackError("AI fallback returned malformed JSON") from e
        if not isinstance(payload, dict):
            raise FallbackError("AI fallback returned an unexpected shape")
        return payload
