# app/domain/services/gst_split.py
"""
CGST/SGST split for contractor invoices.

Two separate calculations, each used where its input is actually known:

  - split_from_base   (proforma invoices): tax is added on top of the
                      billed work value.
                      cgst = base × cgst%, sgst = base × sgst%,
                      total = base + cgst + sgst
  - split_from_total  (tax invoices): the payment received is
                      GST-inclusive, so the base is reverse-derived.
                      base = total / (1 + (cgst% + sgst%) / 100)

Results keep full Decimal precision so chained calls do not compound
rounding; use ``GstSplit.rounded()`` / ``to_dict()`` for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP

from app.domain.services.amount_words import InvalidAmount, to_amount

logger = logging.getLogger("gst_split")

_HUNDRED = Decimal("100")
_CENT = Decimal("0.01")


class DivisionByZero(ArithmeticError):
    """Raised when the combined GST multiplier is zero."""
    pass


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def _non_negative(value, name: str) -> Decimal:
    try:
        return to_amount(value)
    except InvalidAmount as exc:
        raise InvalidAmount(f"{name}: {exc}")


@dataclass(frozen=True)
class GstSplit:
    """Base amount, CGST, SGST and GST-inclusive total of one invoice."""
    base_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    total_amount: Decimal
    cgst_rate: Decimal
    sgst_rate: Decimal

    @property
    def tax_amount(self) -> Decimal:
        return self.cgst_amount + self.sgst_amount

    def rounded(self) -> "GstSplit":
        """Copy with every amount rounded half-up to 2 decimals."""
        return replace(
            self,
            base_amount=_money(self.base_amount),
            cgst_amount=_money(self.cgst_amount),
            sgst_amount=_money(self.sgst_amount),
            total_amount=_money(self.total_amount),
        )

    def to_dict(self) -> dict:
        r = self.rounded()
        return {
            "base_amount": r.base_amount,
            "cgst_rate": self.cgst_rate,
            "cgst_amount": r.cgst_amount,
            "sgst_rate": self.sgst_rate,
            "sgst_amount": r.sgst_amount,
            "tax_amount": _money(self.tax_amount),
            "total_amount": r.total_amount,
        }


def split_from_base(base_amount, cgst_rate, sgst_rate) -> GstSplit:
    """Tax on top of a known base amount (proforma invoices)."""
    base = _non_negative(base_amount, "base_amount")
    cgst_pct = _non_negative(cgst_rate, "cgst_rate")
    sgst_pct = _non_negative(sgst_rate, "sgst_rate")

    cgst = base * cgst_pct / _HUNDRED
    sgst = base * sgst_pct / _HUNDRED
    return GstSplit(
        base_amount=base,
        cgst_amount=cgst,
        sgst_amount=sgst,
        total_amount=base + cgst + sgst,
        cgst_rate=cgst_pct,
        sgst_rate=sgst_pct,
    )


def split_from_total(total_amount, cgst_rate, sgst_rate) -> GstSplit:
    """Reverse-derive the base from a GST-inclusive total (tax invoices)."""
    total = _non_negative(total_amount, "total_amount")
    cgst_pct = _non_negative(cgst_rate, "cgst_rate")
    sgst_pct = _non_negative(sgst_rate, "sgst_rate")

    multiplier = 1 + (cgst_pct + sgst_pct) / _HUNDRED
    if multiplier == 0:
        raise DivisionByZero(
            f"GST multiplier is zero for cgst={cgst_pct}% sgst={sgst_pct}%"
        )

    base = total / multiplier
    return GstSplit(
        base_amount=base,
        cgst_amount=base * cgst_pct / _HUNDRED,
        sgst_amount=base * sgst_pct / _HUNDRED,
        total_amount=total,
        cgst_rate=cgst_pct,
        sgst_rate=sgst_pct,
    )


def contract_value(area_sqft, rate_per_sqft, cgst_rate, sgst_rate) -> GstSplit:
    """Project contract value: area × rate, with GST on top."""
    area = _non_negative(area_sqft, "area_sqft")
    rate = _non_negative(rate_per_sqft, "rate_per_sqft")
    split = split_from_base(area * rate, cgst_rate, sgst_rate)
    logger.debug(
        "Contract value %s sqft @ %s = base %s, total %s",
        area, rate, split.base_amount, split.total_amount,
    )
    return split
