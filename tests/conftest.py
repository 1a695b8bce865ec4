"""Shared test fixtures for the SiteLedger test suite."""

from datetime import date
from decimal import Decimal

import pytest

from app.domain.models.invoice import InvoiceItem, ProformaInvoice, TaxInvoice
from app.domain.models.labour import AttendanceRecord, AttendanceType, Worker
from app.domain.models.site import (
    DetailCheck,
    DetailConfig,
    Flat,
    ProgressEntry,
    WorkItem,
)
from app.domain.services.payroll import build_attendance_record


# ---------------------------------------------------------------------------
# Site structure
# ---------------------------------------------------------------------------

@pytest.fixture
def flats() -> list[Flat]:
    """Wing A: two floors of two flats. Wing B: one refuge floor."""
    return [
        Flat(id="a101", wing_code="A", floor_number=1, flat_number="101", bhk_type="1BHK"),
        Flat(id="a102", wing_code="A", floor_number=1, flat_number="102", bhk_type="2BHK"),
        Flat(id="a201", wing_code="A", floor_number=2, flat_number="201", bhk_type="1BHK"),
        Flat(id="a202", wing_code="A", floor_number=2, flat_number="202", bhk_type="2BHK"),
        Flat(id="b701", wing_code="B", floor_number=7, flat_number="701",
             bhk_type="2BHK", is_refuge=True),
        Flat(id="b702", wing_code="B", floor_number=7, flat_number="702",
             bhk_type="2BHK", is_refuge=True, is_joint_refuge=True),
    ]


@pytest.fixture
def work_items() -> list[WorkItem]:
    return [
        WorkItem(id="wi-a", code="A", name="Flooring", total_quantity=Decimal("100"),
                 rate_per_unit=Decimal("90"), unit="sqft"),
        WorkItem(id="wi-d", code="D", name="Bathroom Tiling", total_quantity=Decimal("10"),
                 rate_per_unit=Decimal("15000"), unit="nos"),
        WorkItem(id="wi-h", code="H", name="Skirting", total_quantity=Decimal("0"),
                 rate_per_unit=Decimal("40"), unit="rft"),
    ]


@pytest.fixture
def entries() -> list[ProgressEntry]:
    return [
        ProgressEntry(flat_id="a101", work_item_id="wi-a", quantity_completed=Decimal("20")),
        ProgressEntry(flat_id="a102", work_item_id="wi-a", quantity_completed=Decimal("30")),
        ProgressEntry(flat_id="a101", work_item_id="wi-d", quantity_completed=Decimal("1")),
        ProgressEntry(flat_id="b702", work_item_id="wi-d", quantity_completed=Decimal("0.5")),
        ProgressEntry(flat_id="a201", work_item_id="wi-a", quantity_completed=Decimal("10"),
                      is_billed=True),
    ]


@pytest.fixture
def detail_configs() -> list[DetailConfig]:
    return [
        DetailConfig(id="d-common", work_item_code="D", detail_name="Common Bathroom"),
        DetailConfig(id="d-master", work_item_code="D", detail_name="Master Bathroom",
                     requires_bhk_type="2BHK"),
        DetailConfig(id="d-old", work_item_code="D", detail_name="Retired Check",
                     is_active=False),
    ]


@pytest.fixture
def detail_checks() -> list[DetailCheck]:
    return [
        DetailCheck(flat_id="a102", detail_config_id="d-common", is_completed=True),
        DetailCheck(flat_id="a102", detail_config_id="d-master", is_completed=False),
        DetailCheck(flat_id="b701", detail_config_id="d-common", is_completed=True),
    ]


# ---------------------------------------------------------------------------
# Labour
# ---------------------------------------------------------------------------

@pytest.fixture
def worker() -> Worker:
    return Worker(id="w1", full_name="Ramesh Kumar", base_daily_wage=Decimal("800"))


@pytest.fixture
def march_records(worker) -> list[AttendanceRecord]:
    """Four marks in March 2025 and one in April."""
    return [
        build_attendance_record(worker, date(2025, 3, 1), AttendanceType.PRESENT),
        build_attendance_record(worker, date(2025, 3, 2), AttendanceType.HALF_DAY,
                                kharci_amount=200),
        build_attendance_record(worker, date(2025, 3, 3), AttendanceType.PRESENT_HALF),
        build_attendance_record(worker, date(2025, 3, 4), AttendanceType.ABSENT),
        build_attendance_record(worker, date(2025, 4, 1), AttendanceType.DOUBLE,
                                kharci_amount=500),
    ]


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------

@pytest.fixture
def invoice_items() -> list[InvoiceItem]:
    return [
        InvoiceItem(work_item_code="A", work_item_name="Flooring", quantity=Decimal("50"),
                    quantity_billed=50, rate=Decimal("90"), amount=Decimal("4500.00")),
        InvoiceItem(work_item_code="D", work_item_name="Bathroom Tiling", quantity=Decimal("1.5"),
                    quantity_billed=2, rate=Decimal("15000"), amount=Decimal("22500.00")),
    ]


@pytest.fixture
def proforma_invoice() -> ProformaInvoice:
    return ProformaInvoice(
        invoice_number="PI-0001",
        invoice_date=date(2025, 3, 31),
        base_amount=Decimal("27000.00"),
        cgst_rate=Decimal("9"),
        sgst_rate=Decimal("9"),
        cgst_amount=Decimal("2430.00"),
        sgst_amount=Decimal("2430.00"),
        total_amount=Decimal("31860.00"),
        remarks="Running bill for March",
    )


@pytest.fixture
def tax_invoice() -> TaxInvoice:
    return TaxInvoice(
        invoice_number="TI-0001",
        invoice_date=date(2025, 4, 10),
        proforma_number="PI-0001",
        payment_date=date(2025, 4, 8),
        payment_reference="UTR 1234567890",
        base_amount_received=Decimal("100000.00"),
        cgst_rate=Decimal("9"),
        sgst_rate=Decimal("9"),
        cgst_amount_received=Decimal("9000.00"),
        sgst_amount_received=Decimal("9000.00"),
        total_amount_received=Decimal("118000.00"),
    )
