# app/domain/models/labour.py
"""Workers, daily attendance and settlements."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AttendanceType(str, Enum):
    """Attendance marks used on the muster roll, with their hajari multiplier."""
    PRESENT = "P"
    HALF_DAY = "½"
    PRESENT_QUARTER = "P+¼"
    PRESENT_HALF = "P+½"
    DOUBLE = "P+P"
    ABSENT = "A"

    @property
    def multiplier(self) -> Decimal:
        return ATTENDANCE_MULTIPLIERS[self]


ATTENDANCE_MULTIPLIERS: dict[AttendanceType, Decimal] = {
    AttendanceType.PRESENT: Decimal("1.0"),
    AttendanceType.HALF_DAY: Decimal("0.5"),
    AttendanceType.PRESENT_QUARTER: Decimal("1.25"),
    AttendanceType.PRESENT_HALF: Decimal("1.5"),
    AttendanceType.DOUBLE: Decimal("2.0"),
    AttendanceType.ABSENT: Decimal("0"),
}


class PaymentMode(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CHEQUE = "cheque"


class Worker(BaseModel):
    id: str
    full_name: str
    base_daily_wage: Decimal = Field(ge=0)
    travel_allowance: Decimal = Field(default=Decimal("0"), ge=0)


class AttendanceRecord(BaseModel):
    worker_id: str
    attendance_date: date
    attendance_type: AttendanceType
    attendance_multiplier: Decimal = Field(default=Decimal("0"), ge=0)
    base_wage_used: Decimal = Field(default=Decimal("0"), ge=0)
    travel_allowance_used: Decimal = Field(default=Decimal("0"), ge=0)
    daily_pay: Decimal = Field(default=Decimal("0"), ge=0)
    kharci_amount: Decimal = Field(default=Decimal("0"), ge=0)
    remarks: Optional[str] = None


class WorkerBalance(BaseModel):
    """Row of the unpaid-balance view, plus this month's earnings."""
    worker_id: str
    full_name: str = ""
    unpaid_balance: Decimal = Decimal("0")
    month_earned: Decimal = Decimal("0")
    month_kharci: Decimal = Decimal("0")
