# tests/test_invoice_builder.py
"""
Tests for invoice_builder.py: completed-work summary, proforma and tax
invoice drafts, invoice numbering and quantity locks.
"""

from datetime import date
from decimal import Decimal

import pytest

from app.domain.models.site import ProgressEntry
from app.domain.services.invoice_builder import (
    InvalidInvoiceNumber,
    build_proforma,
    build_tax_invoice,
    completed_work_summary,
    is_quantity_editable,
    next_invoice_number,
)


# ---------------------------------------------------------------------------
# Completed work
# ---------------------------------------------------------------------------

class TestCompletedWorkSummary:

    def test_unbilled_only(self, work_items, entries):
        summary = completed_work_summary(work_items, entries)
        assert set(summary) == {"A", "D"}
        assert summary["A"].completed_quantity == Decimal("50")
        assert len(summary["A"].flats) == 2

    def test_joint_refuge_half_unit(self, work_items, entries):
        summary = completed_work_summary(work_items, entries)
        assert summary["D"].completed_quantity == Decimal("1.5")

    def test_include_billed(self, work_items, entries):
        summary = completed_work_summary(work_items, entries, include_billed=True)
        assert summary["A"].completed_quantity == Decimal("60")

    def test_flat_counted_once(self, work_items, entries):
        extra = entries + [
            ProgressEntry(flat_id="a101", work_item_id="wi-a", quantity_completed=Decimal("5")),
        ]
        assert completed_work_summary(work_items, extra)["A"].completed_quantity == Decimal("50")

    def test_zero_quantity_counts_as_one(self, work_items):
        zero = [ProgressEntry(flat_id="a202", work_item_id="wi-h", quantity_completed=0)]
        assert completed_work_summary(work_items, zero)["H"].completed_quantity == Decimal("1")

    def test_unknown_work_item_skipped(self, work_items):
        stray = [ProgressEntry(flat_id="a202", work_item_id="nope", quantity_completed=1)]
        assert completed_work_summary(work_items, stray) == {}


# ---------------------------------------------------------------------------
# Proforma
# ---------------------------------------------------------------------------

class TestBuildProforma:

    def test_amounts(self, work_items, entries):
        completed = completed_work_summary(work_items, entries)
        draft = build_proforma(
            work_items, completed, ["A", "D"],
            invoice_number="PI-0003", invoice_date=date(2025, 3, 31),
        )
        inv = draft.invoice
        assert inv.invoice_number == "PI-0003"
        assert inv.base_amount == Decimal("27000.00")
        assert inv.cgst_amount == Decimal("2430.00")
        assert inv.sgst_amount == Decimal("2430.00")
        assert inv.total_amount == Decimal("31860.00")
        assert inv.cgst_rate == Decimal("9")

    def test_line_items(self, work_items, entries):
        completed = completed_work_summary(work_items, entries)
        items = build_proforma(work_items, completed, ["d", "a"]).items
        assert [i.work_item_code for i in items] == ["A", "D"]
        assert items[0].amount == Decimal("4500.00")
        assert items[1].quantity == Decimal("1.5")
        # 1.5 rounds half-up
        assert items[1].quantity_billed == 2

    def test_unselected_and_empty_items_skipped(self, work_items, entries):
        completed = completed_work_summary(work_items, entries)
        draft = build_proforma(work_items, completed, ["H"])
        assert draft.items == []
        assert draft.invoice.total_amount == Decimal("0.00")

    def test_custom_rates(self, work_items, entries):
        completed = completed_work_summary(work_items, entries)
        inv = build_proforma(work_items, completed, ["A"], cgst_rate=6, sgst_rate=6).invoice
        assert inv.total_amount == Decimal("5040.00")

    def test_default_number(self, work_items, entries):
        completed = completed_work_summary(work_items, entries)
        assert build_proforma(work_items, completed, ["A"]).invoice.invoice_number == "PI-0001"

    def test_to_dict(self, work_items, entries):
        completed = completed_work_summary(work_items, entries)
        d = build_proforma(work_items, completed, ["A"]).to_dict()
        assert d["invoice"]["base_amount"] == Decimal("4500.00")
        assert d["items"][0]["work_item_code"] == "A"


# ---------------------------------------------------------------------------
# Tax invoice
# ---------------------------------------------------------------------------

class TestBuildTaxInvoice:

    def test_reverse_derived_base(self):
        inv = build_tax_invoice(118000, proforma_number="PI-0001", invoice_date=date(2025, 4, 10))
        assert inv.base_amount_received == Decimal("100000.00")
        assert inv.cgst_amount_received == Decimal("9000.00")
        assert inv.sgst_amount_received == Decimal("9000.00")
        assert inv.total_amount_received == Decimal("118000.00")
        assert inv.invoice_number == "TI-0001"
        assert inv.payment_date == date(2025, 4, 10)

    def test_rounded_components(self):
        inv = build_tax_invoice("100000")
        assert inv.base_amount_received == Decimal("84745.76")
        assert inv.cgst_amount_received == Decimal("7627.12")


# ---------------------------------------------------------------------------
# Numbering and locks
# ---------------------------------------------------------------------------

class TestInvoiceNumbering:

    def test_first(self):
        assert next_invoice_number("PI", None) == "PI-0001"

    def test_increment(self):
        assert next_invoice_number("PI", "PI-0041") == "PI-0042"
        assert next_invoice_number("TI", "TI-0009") == "TI-0010"

    def test_beyond_four_digits(self):
        assert next_invoice_number("PI", "PI-9999") == "PI-10000"

    @pytest.mark.parametrize("bad", ["garbage", "PI0001", "PI-", "-0001"])
    def test_invalid(self, bad):
        with pytest.raises(InvalidInvoiceNumber):
            next_invoice_number("PI", bad)


class TestQuantityLocks:

    @pytest.mark.parametrize("code", ["C", "D", "E", "F", "G"])
    def test_always_locked(self, code):
        assert is_quantity_editable(code, has_proforma=False) is False

    @pytest.mark.parametrize("code", ["A", "B", "H", "I"])
    def test_editable_until_first_proforma(self, code):
        assert is_quantity_editable(code, has_proforma=False) is True
        assert is_quantity_editable(code, has_proforma=True) is False

    def test_case_insensitive(self):
        assert is_quantity_editable("a", has_proforma=False) is True
