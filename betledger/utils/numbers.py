"""
Number coercion helpers.

Stored records and OCR text both carry numbers in loose shapes
(strings, decimal commas, None, NaN). These helpers turn them into
floats without raising.
"""

import math
import re
from typing import Any, Optional

# Brazilian amount with thousands dots, as in "1.234,56"
BRL_AMOUNT = r"\d{1,3}(?:\.\d{3})+,\d{2}"
DECIMAL_NUMBER = re.compile(BRL_AMOUNT + r"|\d+(?:[.,]\d+)?")


def optional_number(value: Any) -> Optional[float]:
    """
    Coerce a value to a finite float.

    Args:
        value: Number, numeric string (dot or comma decimal) or anything else

    Returns:
        The float, or None when the value is missing or not numeric
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if "." in text and text.rfind(",") > text.rfind("."):
            text = text.replace(".", "")
        text = text.replace(",", ".")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def safe_number(value: Any) -> float:
    """Coerce a value to a finite float, 0.0 when it is not numeric."""
    number = optional_number(value)
    return 0.0 if number is None else number


def parse_decimal(text: str) -> Optional[float]:
    """
    Parse the first decimal number in a piece of text.

    Both "12,50" and "12.50" read as 12.5, and "1.234,56" as 1234.56.
    """
    match = DECIMAL_NUMBER.search(text or "")
    if not match:
        return None
    return optional_number(match.group(0))


def find_decimals(text: str) -> list[float]:
    """All decimal numbers with a fractional part, in order of appearance."""
    numbers = []
    for token in re.findall(BRL_AMOUNT + r"|\d+[.,]\d{2,3}", text or ""):
        number = optional_number(token)
        if number is not None:
            numbers.append(number)
    return numbers
