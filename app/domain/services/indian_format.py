# app/domain/services/indian_format.py
"""Indian-style number formatting: ₹1,78,35,660.00 grouping and percentages."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from app.domain.services.amount_words import InvalidAmount, to_amount

D = lambda x: Decimal(str(x)) if x else Decimal("0")  # noqa: E731


def group_indian(integer_digits: str) -> str:
    """Insert lakh/crore commas: last three digits, then pairs."""
    if len(integer_digits) <= 3:
        return integer_digits
    head, last_three = integer_digits[:-3], integer_digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + last_three


def format_indian_currency(amount, symbol: str = "₹") -> str:
    """Format an amount as ₹ with Indian digit grouping and 2 decimals.

    ``None`` formats as ``₹0.00``; negatives keep a leading ``-``.
    PDFs pass ``symbol="Rs. "`` since the base fonts have no ₹ glyph.
    """
    if amount is None:
        return f"{symbol}0.00"

    if isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be a number, got {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidAmount(f"Amount is not numeric: {amount!r}")
    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")

    sign = "-" if value < 0 else ""
    fixed = f"{abs(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"
    integer_part, decimal_part = fixed.split(".")
    return f"{sign}{symbol}{group_indian(integer_part)}.{decimal_part}"


def format_rupees(amount, symbol: str = "₹") -> str:
    """Like format_indian_currency but rejects negatives (invoice totals)."""
    return format_indian_currency(to_amount(amount), symbol)


def calculate_percentage(completed, total) -> Decimal:
    """``completed / total * 100`` to 2 decimals; 0 when total is 0 or missing."""
    total_d = D(total)
    if total_d == 0:
        return Decimal("0")
    pct = D(completed) / total_d * 100
    return pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_percentage(percentage) -> str:
    return f"{D(percentage).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}%"
