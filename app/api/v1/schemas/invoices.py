# app/api/v1/schemas/invoices.py
"""Request schemas for proforma and tax invoice endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from app.domain.models.invoice import InvoiceItem, ProformaInvoice, TaxInvoice
from app.domain.models.site import ProgressEntry, WorkItem


class ProformaRequest(BaseModel):
    """Bill completed, unbilled work for the selected work items."""

    work_items: list[WorkItem] = Field(default_factory=list)
    entries: list[ProgressEntry] = Field(default_factory=list)
    selected_codes: list[str] = Field(min_length=1)
    cgst_rate: Decimal | None = None
    sgst_rate: Decimal | None = None
    last_invoice_number: str | None = Field(
        default=None, description="Most recent proforma number, e.g. PI-0007"
    )
    invoice_date: date | None = None
    remarks: str | None = Field(default=None, max_length=1000)


class TaxInvoiceRequest(BaseModel):
    """Acknowledge a GST-inclusive payment against a proforma."""

    payment_amount: Decimal
    cgst_rate: Decimal | None = None
    sgst_rate: Decimal | None = None
    last_invoice_number: str | None = None
    invoice_date: date | None = None
    proforma_number: str | None = None
    payment_date: date | None = None
    payment_mode: str | None = None
    payment_reference: str | None = Field(default=None, max_length=100)
    remarks: str | None = Field(default=None, max_length=1000)


class ProformaPdfRequest(BaseModel):
    invoice: ProformaInvoice
    items: list[InvoiceItem] = Field(default_factory=list)
    project_name: str = ""


class TaxInvoicePdfRequest(BaseModel):
    invoice: TaxInvoice
    items: list[InvoiceItem] = Field(default_factory=list)
    project_name: str = ""
    proforma_number: str | None = None
