"""Utility functions."""

from betledger.utils.dates import (
    month_key,
    normalize_date_token,
    parse_calendar_date,
)
from betledger.utils.numbers import (
    find_decimals,
    optional_number,
    parse_decimal,
    safe_number,
)
from betledger.utils.retries import (
    PacedSequence,
    retry_async,
    with_async_retry,
)

__all__ = [
    # Date utilities
    "month_key",
    "normalize_date_token",
    "parse_calendar_date",
    # Number utilities
    "find_decimals",
    "optional_number",
    "parse_decimal",
    "safe_number",
    # Retry utilities
    "PacedSequence",
    "retry_async",
    "with_async_retry",
]
