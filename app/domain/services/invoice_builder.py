# app/domain/services/invoice_builder.py
"""
Build proforma and tax invoice drafts from site progress.

Proforma invoices bill completed work: for each selected work item the
completed quantity across flats × the item's rate, with GST added on top.
Tax invoices acknowledge a GST-inclusive payment, so the base amount is
reverse-derived from what was received.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from app.core.config import settings
from app.domain.models.invoice import InvoiceItem, ProformaInvoice, TaxInvoice
from app.domain.models.site import ProgressEntry, WorkItem
from app.domain.services.gst_split import split_from_base, split_from_total

logger = logging.getLogger("invoice_builder")

# Fixed-quantity items (bathrooms, kitchens, lofts...) never change once set up.
LOCKED_WORK_ITEMS = frozenset({"C", "D", "E", "F", "G"})
# Measured items stay editable until the first proforma is raised.
EDITABLE_WORK_ITEMS = frozenset({"A", "B", "H", "I"})

_CENT = Decimal("0.01")
_NUMBER_RE = re.compile(r"^\s*([A-Za-z]+)-(\d+)\s*$")


class InvalidInvoiceNumber(ValueError):
    """Raised when a stored invoice number does not look like PREFIX-0001."""
    pass


def _money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass
class CompletedWork:
    work_item_id: str
    work_item_code: str
    completed_quantity: Decimal = Decimal("0")
    flats: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "work_item_id": self.work_item_id,
            "work_item_code": self.work_item_code,
            "completed_quantity": self.completed_quantity,
            "flats_count": len(self.flats),
        }


def completed_work_summary(
    work_items: Iterable[WorkItem],
    entries: Iterable[ProgressEntry],
    include_billed: bool = False,
) -> dict[str, CompletedWork]:
    """
    Completed quantity per work item code.

    Each flat counts once per work item. A recorded quantity of zero counts
    as one unit; joint refuge bathrooms carry their 0.5 through.
    """
    by_id = {w.id: w for w in work_items}
    summary: dict[str, CompletedWork] = {}

    for entry in entries:
        if entry.is_billed and not include_billed:
            continue
        item = by_id.get(entry.work_item_id)
        if item is None:
            continue

        work = summary.setdefault(item.code, CompletedWork(item.id, item.code))
        if entry.flat_id in work.flats:
            continue
        work.flats.append(entry.flat_id)
        work.completed_quantity += entry.quantity_completed or Decimal("1")

    return summary


@dataclass
class ProformaDraft:
    invoice: ProformaInvoice
    items: list[InvoiceItem]

    def to_dict(self) -> dict:
        return {
            "invoice": self.invoice.model_dump(),
            "items": [i.model_dump() for i in self.items],
        }


def build_proforma(
    work_items: list[WorkItem],
    completed_work: dict[str, CompletedWork],
    selected_codes: Iterable[str],
    cgst_rate=None,
    sgst_rate=None,
    invoice_number: str = "",
    invoice_date: Optional[date] = None,
    remarks: Optional[str] = None,
) -> ProformaDraft:
    """Bill the selected work items at completed quantity × rate, GST on top."""
    cgst = settings.DEFAULT_CGST_RATE if cgst_rate is None else cgst_rate
    sgst = settings.DEFAULT_SGST_RATE if sgst_rate is None else sgst_rate
    wanted = {c.upper() for c in selected_codes}

    items: list[InvoiceItem] = []
    base = Decimal("0")
    for wi in sorted(work_items, key=lambda w: w.code):
        if wi.code.upper() not in wanted:
            continue
        work = completed_work.get(wi.code)
        qty = work.completed_quantity if work else Decimal("0")
        if qty <= 0:
            continue

        amount = qty * wi.rate_per_unit
        base += amount
        items.append(InvoiceItem(
            work_item_id=wi.id,
            work_item_code=wi.code,
            work_item_name=wi.name,
            unit=wi.unit,
            quantity=qty,
            quantity_billed=int(qty.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
            rate=wi.rate_per_unit,
            amount=_money(amount),
        ))

    split = split_from_base(base, cgst, sgst).rounded()
    invoice = ProformaInvoice(
        invoice_number=invoice_number or next_invoice_number(settings.PROFORMA_PREFIX, None),
        invoice_date=invoice_date or date.today(),
        base_amount=split.base_amount,
        cgst_rate=split.cgst_rate,
        sgst_rate=split.sgst_rate,
        cgst_amount=split.cgst_amount,
        sgst_amount=split.sgst_amount,
        total_amount=split.total_amount,
        remarks=remarks or None,
    )
    logger.info(
        "Proforma %s: %d items, base %s, total %s",
        invoice.invoice_number, len(items), invoice.base_amount, invoice.total_amount,
    )
    return ProformaDraft(invoice=invoice, items=items)


def build_tax_invoice(
    payment_amount,
    cgst_rate=None,
    sgst_rate=None,
    invoice_number: str = "",
    invoice_date: Optional[date] = None,
    proforma_number: Optional[str] = None,
    payment_date: Optional[date] = None,
    payment_mode: Optional[str] = None,
    payment_reference: Optional[str] = None,
    remarks: Optional[str] = None,
) -> TaxInvoice:
    """Tax invoice for a GST-inclusive payment received against a proforma."""
    cgst = settings.DEFAULT_CGST_RATE if cgst_rate is None else cgst_rate
    sgst = settings.DEFAULT_SGST_RATE if sgst_rate is None else sgst_rate
    split = split_from_total(payment_amount, cgst, sgst).rounded()

    today = date.today()
    return TaxInvoice(
        invoice_number=invoice_number or next_invoice_number(settings.TAX_INVOICE_PREFIX, None),
        invoice_date=invoice_date or today,
        proforma_number=proforma_number,
        payment_date=payment_date or invoice_date or today,
        payment_mode=payment_mode,
        payment_reference=payment_reference or None,
        base_amount_received=split.base_amount,
        cgst_rate=split.cgst_rate,
        sgst_rate=split.sgst_rate,
        cgst_amount_received=split.cgst_amount,
        sgst_amount_received=split.sgst_amount,
        total_amount_received=split.total_amount,
        remarks=remarks or None,
    )


def next_invoice_number(prefix: str, last_number: Optional[str]) -> str:
    """
    Next number in a PREFIX-0001 sequence.

    >>> next_invoice_number("PI", "PI-0041")
    'PI-0042'
    >>> next_invoice_number("TI", None)
    'TI-0001'
    """
    if not last_number:
        return f"{prefix}-{1:04d}"

    m = _NUMBER_RE.match(last_number)
    if not m:
        raise InvalidInvoiceNumber(f"Cannot parse invoice number {last_number!r}")
    return f"{prefix}-{int(m.group(2)) + 1:04d}"


def is_quantity_editable(work_item_code: str, has_proforma: bool) -> bool:
    code = (work_item_code or "").upper()
    if code in LOCKED_WORK_ITEMS:
        return False
    if code in EDITABLE_WORK_ITEMS:
        return not has_proforma
    return False
