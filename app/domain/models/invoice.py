# app/domain/models/invoice.py
"""Proforma and tax invoices as stored alongside the project."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ProformaStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"


class InvoiceItem(BaseModel):
    """One billed work item line."""
    work_item_id: Optional[str] = None
    work_item_code: str
    work_item_name: str = ""
    unit: Optional[str] = None
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    quantity_billed: int = 0
    rate: Decimal = Field(default=Decimal("0"), ge=0)
    amount: Decimal = Field(default=Decimal("0"), ge=0)


class ProformaInvoice(BaseModel):
    invoice_number: str
    invoice_date: date
    status: ProformaStatus = ProformaStatus.DRAFT
    base_amount: Decimal
    cgst_rate: Decimal
    sgst_rate: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    total_amount: Decimal
    remarks: Optional[str] = None


class TaxInvoice(BaseModel):
    invoice_number: str
    invoice_date: date
    proforma_number: Optional[str] = None
    payment_date: Optional[date] = None
    payment_mode: Optional[str] = None
    payment_reference: Optional[str] = None
    base_amount_received: Decimal
    cgst_rate: Decimal
    sgst_rate: Decimal
    cgst_amount_received: Decimal
    sgst_amount_received: Decimal
    total_amount_received: Decimal
    status: str = "issued"
    remarks: Optional[str] = None
