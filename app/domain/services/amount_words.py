# app/domain/services/amount_words.py
"""
Amount-in-words for invoice PDFs, Indian numbering system.

    17835660   -> "Rupees One Crore Seventy Eight Lakh Thirty Five Thousand Six Hundred Sixty Only"
    1234.50    -> "Rupees One Thousand Two Hundred Thirty Four and Fifty Paise Only"
    0          -> "Zero Rupees Only"

Grouping is crore (10^7), lakh (10^5), thousand (10^3), then hundreds.
The crore count is converted with the same decomposition, so amounts of
100 crore and above read "One Hundred Crore", "Ten Thousand Crore", etc.

Amounts are rounded to the nearest paise with ROUND_HALF_UP before
conversion. Negative amounts are rejected.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

logger = logging.getLogger("amount_words")

PAISE = Decimal("0.01")

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


class InvalidAmount(ValueError):
    """Raised when an amount is not a finite, non-negative number."""
    pass


def to_amount(value) -> Decimal:
    """Coerce ``value`` (int, float, Decimal or numeric str) to a Decimal.

    Raises InvalidAmount for booleans, non-numeric strings, NaN, infinities
    and negative values.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmount(f"Amount must be a number, got {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            # str() keeps floats like 1234.505 at their printed value
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmount(f"Amount is not numeric: {value!r}")
    else:
        raise InvalidAmount(f"Unsupported amount type: {type(value).__name__}")

    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    if amount < 0:
        raise InvalidAmount(f"Amount must not be negative, got {value!r}")
    return amount


def round_to_paise(value) -> Decimal:
    """Validate and round to 2 decimal places, half-up."""
    return to_amount(value).quantize(PAISE, rounding=ROUND_HALF_UP)


def convert_below_thousand(n: int) -> str:
    """Words for 0 <= n <= 999. Zero gives an empty string."""
    if n < 0 or n > 999:
        raise ValueError(f"convert_below_thousand expects 0..999, got {n}")

    parts: list[str] = []
    if n >= 100:
        parts.append(f"{ONES[n // 100]} Hundred")
        n %= 100

    if n >= 20:
        parts.append(TENS[n // 10])
        if n % 10:
            parts.append(ONES[n % 10])
    elif n >= 10:
        parts.append(TEENS[n - 10])
    elif n > 0:
        parts.append(ONES[n])

    return " ".join(parts)


def _integer_words(n: int) -> str:
    """Words for a non-negative integer using Indian grouping."""
    if n == 0:
        return ""

    crores = n // CRORE
    lakhs = (n % CRORE) // LAKH
    thousands = (n % LAKH) // THOUSAND
    remainder = n % THOUSAND

    parts: list[str] = []
    if crores:
        # Above 99 crore the count itself needs full grouping
        parts.append(f"{_integer_words(crores)} Crore")
    if lakhs:
        parts.append(f"{convert_below_thousand(lakhs)} Lakh")
    if thousands:
        parts.append(f"{convert_below_thousand(thousands)} Thousand")
    if remainder:
        parts.append(convert_below_thousand(remainder))

    return " ".join(parts)


def amount_to_words(amount) -> str:
    """Convert a rupee amount to Indian-English words for invoices."""
    value = round_to_paise(amount)

    rupees = int(value)
    paise = int((value - rupees) * 100)

    if rupees == 0 and paise == 0:
        return "Zero Rupees Only"

    words = ""
    rupee_words = _integer_words(rupees)
    if rupee_words:
        words = f"Rupees {rupee_words}"

    if paise:
        paise_words = f"{convert_below_thousand(paise)} Paise"
        words = f"{words} and {paise_words}" if words else paise_words

    return f"{words} Only"
