# app/domain/services/invoice_pdf.py
"""
Proforma and tax invoice PDFs on the contractor's letterhead.
Uses ReportLab for PDF generation.
"""

from __future__ import annotations

import io
import logging
from datetime import date
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from app.core.config import settings
from app.domain.models.invoice import InvoiceItem, ProformaInvoice, TaxInvoice
from app.domain.services.amount_words import amount_to_words
from app.domain.services.indian_format import format_indian_currency

logger = logging.getLogger("invoice_pdf")

_BRAND = colors.Color(0.2, 0.3, 0.5)
_LIGHT = colors.Color(0.95, 0.95, 0.95)
_GRID = colors.Color(0.8, 0.8, 0.8)


def _rs(value) -> str:
    return format_indian_currency(value, symbol="Rs. ")


def _fmt_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else "N/A"


def _fmt_rate(value) -> str:
    return f"{value.normalize():f}" if value is not None else "0"


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "company": ParagraphStyle(
            "Company", parent=base["Heading1"], fontSize=18,
            alignment=1, textColor=_BRAND, spaceAfter=2,
        ),
        "letterhead": ParagraphStyle(
            "Letterhead", parent=base["Normal"], fontSize=9, alignment=1, leading=12,
        ),
        "title": ParagraphStyle(
            "InvoiceTitle", parent=base["Heading2"], fontSize=14,
            alignment=1, spaceBefore=8, spaceAfter=10,
        ),
        "label": ParagraphStyle(
            "Label", parent=base["Normal"], fontSize=9, fontName="Helvetica-Bold",
        ),
        "value": ParagraphStyle(
            "Value", parent=base["Normal"], fontSize=10, leading=14,
        ),
        "footer": ParagraphStyle(
            "Footer", parent=base["Normal"], fontSize=8,
            textColor=colors.grey, alignment=1,
        ),
        "signature": ParagraphStyle(
            "Signature", parent=base["Normal"], fontSize=9, alignment=2,
        ),
    }


def _letterhead(styles: dict[str, ParagraphStyle], title: str) -> list:
    ids = []
    if settings.CONTRACTOR_GSTIN:
        ids.append(f"GST: {settings.CONTRACTOR_GSTIN}")
    if settings.CONTRACTOR_PAN:
        ids.append(f"PAN: {settings.CONTRACTOR_PAN}")
    contact = []
    if settings.CONTRACTOR_PHONE:
        contact.append(f"Contact: {settings.CONTRACTOR_PHONE}")
    if settings.CONTRACTOR_EMAIL:
        contact.append(f"Email: {settings.CONTRACTOR_EMAIL}")

    elements = [
        Paragraph(escape(settings.CONTRACTOR_NAME), styles["company"]),
        Paragraph(escape(settings.CONTRACTOR_TAGLINE), styles["letterhead"]),
    ]
    for line in (ids, contact):
        if line:
            elements.append(Paragraph(escape(" | ".join(line)), styles["letterhead"]))
    elements.append(Spacer(1, 6))
    elements.append(Paragraph(title, styles["title"]))
    return elements


def _details_table(rows: list[list[str]]) -> Table:
    table = Table(rows, colWidths=[90, 140, 90, 140])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), _LIGHT),
                ("BACKGROUND", (2, 0), (2, -1), _LIGHT),
                ("TEXTCOLOR", (0, 0), (0, -1), colors.grey),
                ("TEXTCOLOR", (2, 0), (2, -1), colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def _items_table(items: list[InvoiceItem], styles: dict[str, ParagraphStyle]) -> Table:
    rows: list[list] = [["Code", "Work Item", "Quantity", "Rate", "Amount"]]
    for item in items:
        rows.append([
            item.work_item_code or "N/A",
            Paragraph(escape(item.work_item_name or "N/A"), styles["value"]),
            str(item.quantity_billed),
            _rs(item.rate),
            _rs(item.amount),
        ])

    table = Table(rows, colWidths=[40, 190, 60, 80, 100], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), _BRAND),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, _GRID),
                ("ALIGN", (0, 0), (0, -1), "CENTER"),
                ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def _summary_table(rows: list[list[str]]) -> Table:
    table = Table(rows, colWidths=[160, 120], hAlign="RIGHT")
    table.setStyle(
        TableStyle(
            [
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("LINEABOVE", (0, -1), (-1, -1), 0.8, _BRAND),
                ("BACKGROUND", (0, -1), (-1, -1), colors.Color(0.9, 0.95, 1.0)),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("TOPPADDING", (0, 0), (-1, -1), 5),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
            ]
        )
    )
    return table


def _labelled(elements: list, styles, label: str, text: str) -> None:
    elements.append(Spacer(1, 8))
    elements.append(Paragraph(label, styles["label"]))
    elements.append(Paragraph(escape(text), styles["value"]))


def _closing(elements: list, styles, footer_lines: list[str]) -> None:
    elements.append(Spacer(1, 30))
    elements.append(Paragraph(f"For {escape(settings.CONTRACTOR_NAME)}", styles["signature"]))
    elements.append(Spacer(1, 24))
    elements.append(Paragraph("Authorized Signatory", styles["signature"]))
    elements.append(Spacer(1, 20))
    for line in footer_lines:
        elements.append(Paragraph(line, styles["footer"]))


def _build(elements: list) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
    )
    doc.build(elements)
    return buf.getvalue()


def generate_proforma_pdf(
    invoice: ProformaInvoice,
    items: list[InvoiceItem],
    project_name: str,
) -> bytes:
    """
    Render a proforma invoice.

    Args:
        invoice: Proforma header with base, CGST/SGST and total amounts.
        items: Billed work item lines.
        project_name: Shown in the details block.

    Returns:
        PDF file as bytes.
    """
    styles = _styles()
    elements = _letterhead(styles, "PROFORMA INVOICE")

    status = invoice.status.value.upper() if invoice.status else "N/A"
    elements.append(_details_table([
        ["Invoice No", invoice.invoice_number, "Project", project_name or "N/A"],
        ["Date", _fmt_date(invoice.invoice_date), "Status", status],
    ]))
    elements.append(Spacer(1, 12))
    elements.append(_items_table(items, styles))
    elements.append(Spacer(1, 10))
    elements.append(_summary_table([
        ["Base Amount:", _rs(invoice.base_amount)],
        [f"CGST ({_fmt_rate(invoice.cgst_rate)}%):", _rs(invoice.cgst_amount)],
        [f"SGST ({_fmt_rate(invoice.sgst_rate)}%):", _rs(invoice.sgst_amount)],
        ["Total Amount:", _rs(invoice.total_amount)],
    ]))

    _labelled(elements, styles, "Amount in Words:", amount_to_words(invoice.total_amount))
    if invoice.remarks:
        _labelled(elements, styles, "Remarks:", invoice.remarks)

    _closing(elements, styles, [
        "This is a computer generated proforma invoice and does not require signature.",
        "For any queries, please contact us at the above mentioned details.",
    ])

    pdf = _build(elements)
    logger.info("Rendered proforma %s (%d bytes)", invoice.invoice_number, len(pdf))
    return pdf


def generate_tax_invoice_pdf(
    invoice: TaxInvoice,
    items: list[InvoiceItem],
    project_name: str,
    proforma_number: Optional[str] = None,
) -> bytes:
    """Render a tax invoice for a payment received against a proforma."""
    styles = _styles()
    elements = _letterhead(styles, "TAX INVOICE")

    proforma_ref = proforma_number or invoice.proforma_number or "N/A"
    elements.append(_details_table([
        ["Tax Invoice No", invoice.invoice_number, "Project", project_name or "N/A"],
        ["Date", _fmt_date(invoice.invoice_date), "Payment Date", _fmt_date(invoice.payment_date)],
        ["Proforma Ref", proforma_ref, "", ""],
    ]))
    elements.append(Spacer(1, 12))
    if items:
        elements.append(_items_table(items, styles))
        elements.append(Spacer(1, 10))
    elements.append(_summary_table([
        ["Base Amount:", _rs(invoice.base_amount_received)],
        [f"CGST ({_fmt_rate(invoice.cgst_rate)}%):", _rs(invoice.cgst_amount_received)],
        [f"SGST ({_fmt_rate(invoice.sgst_rate)}%):", _rs(invoice.sgst_amount_received)],
        ["Total Received:", _rs(invoice.total_amount_received)],
    ]))

    _labelled(elements, styles, "Amount in Words:", amount_to_words(invoice.total_amount_received))
    if invoice.payment_reference:
        _labelled(elements, styles, "Payment Reference:", invoice.payment_reference)
    if invoice.remarks:
        _labelled(elements, styles, "Remarks:", invoice.remarks)

    _closing(elements, styles, [
        "This is a computer generated tax invoice and does not require signature.",
        f"Payment received with thanks. Subject to {escape(settings.INVOICE_JURISDICTION)} jurisdiction.",
    ])

    pdf = _build(elements)
    logger.info("Rendered tax invoice %s (%d bytes)", invoice.invoice_number, len(pdf))
    return pdf
