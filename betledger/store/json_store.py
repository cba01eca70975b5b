"""
JSON export repository.

Reads bets, extra gains and bookmaker names from an export file shaped
like the application's stored records:

    {"bets": [...], "gains": [...], "bookmakers": [{"id": ..., "name": ...}]}
"""

import json
from pathlib import Path
from typing import Any, Optional

from config import settings
from config.logging_config import get_logger
from betledger.exceptions import StoreError
from betledger.models import Bet, ExtraGain

logger = get_logger(__name__)


class JsonBetStore:
    """Read-only repository over a JSON export."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or settings.data_file)
        self._document: Optional[dict[str, Any]] = None

    def _load(self) -> dict[str, Any]:
        """Read the export once and keep it."""
        if self._document is not None:
            return self._document

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise StoreError(f"Export file not found: {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read export {self.path}: {e}") from e

        if not isinstance(document, dict):
            raise StoreError(f"Export {self.path} must contain a JSON object")

        self._document = document
        logger.info(
            "Export loaded",
            path=str(self.path),
            bets=len(document.get("bets") or []),
            gains=len(document.get("gains") or []),
        )
        return document

    def _records(self, key: str) -> list[dict[str, Any]]:
        raw = self._load().get(key) or []
        if not isinstance(raw, list):
            logger.warning("Export section is not a list", section=key)
            return []

        records = []
        for index, item in enumerate(raw):
            if isinstance(item, dict):
                records.append(item)
            else:
                logger.warning("Skipping malformed record", section=key, index=index)
        return records

    def load_bets(self) -> list[Bet]:
        """All bets in the export, in file order."""
        return [Bet.from_dict(record) for record in self._records("bets")]

    def load_gains(self) -> list[ExtraGain]:
        """All extra gains in the export, in file order."""
        return [ExtraGain.from_dict(record) for record in self._records("gains")]

    def load_bookmaker_names(self) -> dict[str, str]:
        """Bookmaker id -> display name."""
        return {
            str(record.get("id", "")): str(record.get("name") or record.get("id", ""))
            for record in self._records("bookmakers")
        }
