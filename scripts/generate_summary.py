#!/usr/bin/env python3
"""
Generate Summary Script.

Prints a dashboard report (period summary, bookmaker and month
leaderboards, optional monthly history) from a JSON export.
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse

from config import settings
from config.logging_config import setup_logging, get_logger
from betledger.exceptions import StoreError
from betledger.reporting import Period, report_generator, window_for_period
from betledger.store import JsonBetStore

logger = get_logger(__name__)


def main(
    data_file: Path,
    period: Period,
    start: date | None = None,
    end: date | None = None,
    year: int | None = None,
    output_file: str | None = None,
) -> int:
    """
    Generate and print a dashboard report.

    Args:
        data_file: JSON export to read
        period: Period preset to summarize
        start: First day of a custom period
        end: Last day of a custom period
        year: Include the monthly history of this year
        output_file: Optional file path to save report

    Returns:
        Process exit code
    """
    setup_logging(log_level=settings.log_level, log_file=settings.log_file, json_format=settings.log_json)

    store = JsonBetStore(data_file)
    try:
        bets = store.load_bets()
        gains = store.load_gains()
        names = store.load_bookmaker_names()
    except StoreError as e:
        logger.error("Could not load export", error=str(e))
        return 1

    report = report_generator.generate(
        bets,
        gains,
        window=window_for_period(period, start=start, end=end),
        year=year,
        bookmaker_names=names,
    )
    text = report_generator.format_file(report)

    print("\n" + text + "\n")

    if output_file:
        output_path = Path(output_file)
        output_path.write_text(text, encoding="utf-8")
        logger.info("Report saved to file", path=str(output_path))

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a bet ledger report")

    parser.add_argument(
        "--data",
        type=Path,
        default=settings.data_file,
        help="JSON export with bets, gains and bookmakers",
    )

    parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=Period.MONTH.value,
        help="Period to summarize (default: month)",
    )

    parser.add_argument("--start", type=str, help="Custom period start (YYYY-MM-DD)")
    parser.add_argument("--end", type=str, help="Custom period end (YYYY-MM-DD)")

    parser.add_argument(
        "--year",
        type=int,
        help="Include the monthly history of this year",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Save report to file",
    )

    args = parser.parse_args()

    sys.exit(
        main(
            data_file=args.data,
            period=Period(args.period),
            start=date.fromisoformat(args.start) if args.start else None,
            end=date.fromisoformat(args.end) if args.end else None,
            year=args.year,
            output_file=args.output,
        )
    )
