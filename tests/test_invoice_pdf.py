# tests/test_invoice_pdf.py
"""
Tests for invoice_pdf.py (generate_proforma_pdf, generate_tax_invoice_pdf).
Text is read back with pdfplumber.
"""

import io

import pdfplumber
import pytest

from app.core.config import settings
from app.domain.services.invoice_pdf import generate_proforma_pdf, generate_tax_invoice_pdf


def _text(pdf_bytes: bytes) -> str:
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


# ---------------------------------------------------------------------------
# Proforma
# ---------------------------------------------------------------------------

class TestProformaPdf:

    @pytest.fixture
    def pdf_bytes(self, proforma_invoice, invoice_items):
        return generate_proforma_pdf(proforma_invoice, invoice_items, "Sunrise Heights")

    def test_pdf_header(self, pdf_bytes):
        assert isinstance(pdf_bytes, bytes)
        assert pdf_bytes[:5] == b"%PDF-"

    def test_pdf_non_empty(self, pdf_bytes):
        assert len(pdf_bytes) > 1024

    def test_letterhead_and_title(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert settings.CONTRACTOR_NAME in text
        assert "PROFORMA INVOICE" in text
        assert "PI-0001" in text
        assert "Sunrise Heights" in text

    def test_items_and_summary(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert "Flooring" in text
        assert "Bathroom Tiling" in text
        assert "CGST (9%):" in text
        assert "Rs. 31,860.00" in text
        assert "Total Amount:" in text

    def test_amount_in_words(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert "Amount in Words:" in text
        assert "Rupees Thirty One Thousand Eight Hundred Sixty Only" in text

    def test_remarks_and_footer(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert "Running bill for March" in text
        assert "Authorized Signatory" in text
        assert "does not require signature" in text

    def test_no_items(self, proforma_invoice):
        pdf_bytes = generate_proforma_pdf(proforma_invoice, [], "")
        assert pdf_bytes[:5] == b"%PDF-"

    def test_markup_in_remarks_is_escaped(self, proforma_invoice, invoice_items):
        invoice = proforma_invoice.model_copy(update={"remarks": "Tiles <b>& grout"})
        text = _text(generate_proforma_pdf(invoice, invoice_items, "Tower <1>"))
        assert "Tiles <b>& grout" in text


# ---------------------------------------------------------------------------
# Tax invoice
# ---------------------------------------------------------------------------

class TestTaxInvoicePdf:

    @pytest.fixture
    def pdf_bytes(self, tax_invoice, invoice_items):
        return generate_tax_invoice_pdf(tax_invoice, invoice_items, "Sunrise Heights", "PI-0001")

    def test_pdf_header(self, pdf_bytes):
        assert pdf_bytes[:5] == b"%PDF-"
        assert len(pdf_bytes) > 1024

    def test_title_and_reference(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert "TAX INVOICE" in text
        assert "TI-0001" in text
        assert "PI-0001" in text
        assert "08/04/2025" in text

    def test_received_summary(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert "Total Received:" in text
        assert "Rs. 1,18,000.00" in text
        assert "Rupees One Lakh Eighteen Thousand Only" in text

    def test_payment_reference_and_jurisdiction(self, pdf_bytes):
        text = _text(pdf_bytes)
        assert "Payment Reference:" in text
        assert "UTR 1234567890" in text
        assert f"Subject to {settings.INVOICE_JURISDICTION} jurisdiction." in text

    def test_proforma_from_invoice(self, tax_invoice):
        text = _text(generate_tax_invoice_pdf(tax_invoice, [], "Sunrise Heights"))
        assert "PI-0001" in text
        assert "Rs. 1,00,000.00" in text
