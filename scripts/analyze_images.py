#!/usr/bin/env python3
"""
Analyze Images Script.

Reads one or more bet slip screenshots and prints the prefilled bet
draft. Uses the OCR service first and the AI fallback when configured.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse

from config import settings
from config.logging_config import setup_logging, get_logger
from betledger.extraction import (
    AnalysisContext,
    ExtractionOrchestrator,
    HttpFallbackClient,
    HttpTextRecognizer,
)

logger = get_logger(__name__)


async def main(paths: list[Path], bookmakers: list[str]) -> None:
    """
    Analyze screenshots and print the bet draft.

    Args:
        paths: Image files, first one is the main bet slip
        bookmakers: Known bookmaker names passed as context
    """
    setup_logging(log_level=settings.log_level, json_format=settings.log_json)

    recognizer = HttpTextRecognizer()
    fallback = HttpFallbackClient() if settings.extraction.is_fallback_configured() else None
    orchestrator = ExtractionOrchestrator(recognizer, fallback)

    try:
        images = [path.read_bytes() for path in paths]
        draft = await orchestrator.analyze_many(
            images,
            AnalysisContext(bookmaker_names=bookmakers),
        )
    finally:
        await recognizer.close()
        if fallback is not None:
            await fallback.close()

    print(f"Event:     {draft.event}")
    print(f"Date:      {draft.date}")
    print(f"Bookmaker: {draft.main_bookmaker or '-'}")
    print(f"Confidence: {draft.confidence:.0%}")
    for index, leg in enumerate(draft.legs, start=1):
        print(
            f"  Leg {index}: {leg.bookmaker or '-'} | {leg.market} | "
            f"@{leg.odds:.2f} | stake {leg.stake:.2f} | {leg.status.value}"
        )
    for suggestion in draft.suggestions:
        print(f"  * {suggestion}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Prefill a bet from screenshots")

    parser.add_argument("images", nargs="+", type=Path, help="Screenshot files")
    parser.add_argument(
        "--bookmaker",
        action="append",
        default=[],
        help="Known bookmaker name (repeatable)",
    )

    args = parser.parse_args()

    asyncio.run(main(args.images, args.bookmaker))
