# app/api/v1/schemas/labour.py
"""Request schemas for payroll endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from app.domain.models.labour import AttendanceRecord, PaymentMode, WorkerBalance


class MonthlySummaryRequest(BaseModel):
    year: int = Field(ge=2000, le=2100)
    month: int
    worker_id: str | None = Field(default=None, description="Only count this worker's marks")
    records: list[AttendanceRecord] = Field(default_factory=list)
    include_calendar: bool = False


class SettlementRequest(BaseModel):
    worker_id: str
    year: int = Field(ge=2000, le=2100)
    month: int
    records: list[AttendanceRecord] = Field(default_factory=list)
    amount_paid: Decimal | None = Field(default=None, description="Defaults to net payable, zero if that is negative")
    payment_mode: PaymentMode = PaymentMode.CASH
    payment_date: date | None = None
    remarks: str | None = None


class LabourReportRequest(BaseModel):
    balances: list[WorkerBalance] = Field(default_factory=list)
