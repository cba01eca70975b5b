"""
Calendar date helpers.

Bet dates are calendar days. They are read from the date part of the
stored value and never go through a timezone conversion, so a bet
recorded at 23:30 local time stays on its own day.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?$")

TODAY_KEYWORDS = ("hoje", "today")
YESTERDAY_KEYWORDS = ("ontem", "yesterday")


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Parse a stored bet date as a calendar date.

    Args:
        value: date, datetime, "YYYY-MM-DD" or an ISO timestamp string

    Returns:
        The calendar date, or None if the value cannot be read
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    match = ISO_DATE.match(value.strip())
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def normalize_date_token(token: str, today: date) -> Optional[str]:
    """
    Turn a date token found in recognized text into an ISO string.

    Args:
        token: "hoje"/"today", "ontem"/"yesterday" or DD/MM[/YY[YY]]
        today: Reference date for relative keywords and missing years

    Returns:
        "YYYY-MM-DD", or None for impossible dates
    """
    text = token.strip().lower()
    if text in TODAY_KEYWORDS:
        return today.isoformat()
    if text in YESTERDAY_KEYWORDS:
        return (today - timedelta(days=1)).isoformat()

    match = SLASH_DATE.match(text)
    if not match:
        return None

    day, month, year = match.groups()
    if year is None:
        year = str(today.year)
    elif len(year) == 2:
        year = "20" + year
    elif len(year) == 3:
        return None

    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def month_key(day: date) -> str:
    """Year-month key used for month rankings, e.g. "2024-03"."""
    return f"{day.year:04d}-{day.month:02d}"
