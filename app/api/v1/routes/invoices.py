# app/api/v1/routes/invoices.py
"""
Proforma and tax invoice drafts, and their PDF downloads.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.api.v1.envelope import ok
from app.api.v1.schemas.invoices import (
    ProformaPdfRequest,
    ProformaRequest,
    TaxInvoicePdfRequest,
    TaxInvoiceRequest,
)
from app.core.config import settings
from app.domain.services.invoice_builder import (
    build_proforma,
    build_tax_invoice,
    completed_work_summary,
    next_invoice_number,
)
from app.domain.services.invoice_pdf import generate_proforma_pdf, generate_tax_invoice_pdf

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _pdf_response(pdf_bytes: bytes, invoice_number: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="invoice_{invoice_number}.pdf"'
        },
    )


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------

@router.post("/proforma", response_model=dict)
async def create_proforma(body: ProformaRequest):
    """Draft a proforma for completed, unbilled work of the selected items."""
    completed = completed_work_summary(body.work_items, body.entries)
    draft = build_proforma(
        body.work_items,
        completed,
        body.selected_codes,
        cgst_rate=body.cgst_rate,
        sgst_rate=body.sgst_rate,
        invoice_number=next_invoice_number(settings.PROFORMA_PREFIX, body.last_invoice_number),
        invoice_date=body.invoice_date,
        remarks=body.remarks,
    )
    data = draft.to_dict()
    data["completed_work"] = [w.to_dict() for w in completed.values()]
    return ok(data=data)


@router.post("/tax", response_model=dict)
async def create_tax_invoice(body: TaxInvoiceRequest):
    invoice = build_tax_invoice(
        body.payment_amount,
        cgst_rate=body.cgst_rate,
        sgst_rate=body.sgst_rate,
        invoice_number=next_invoice_number(settings.TAX_INVOICE_PREFIX, body.last_invoice_number),
        invoice_date=body.invoice_date,
        proforma_number=body.proforma_number,
        payment_date=body.payment_date,
        payment_mode=body.payment_mode,
        payment_reference=body.payment_reference,
        remarks=body.remarks,
    )
    return ok(data=invoice.model_dump())


# ---------------------------------------------------------------------------
# PDF downloads
# ---------------------------------------------------------------------------

@router.post("/proforma/pdf")
async def download_proforma_pdf(body: ProformaPdfRequest):
    pdf_bytes = generate_proforma_pdf(body.invoice, body.items, body.project_name)
    return _pdf_response(pdf_bytes, body.invoice.invoice_number)


@router.post("/tax/pdf")
async def download_tax_invoice_pdf(body: TaxInvoicePdfRequest):
    pdf_bytes = generate_tax_invoice_pdf(
        body.invoice, body.items, body.project_name, body.proforma_number,
    )
    return _pdf_response(pdf_bytes, body.invoice.invoice_number)
