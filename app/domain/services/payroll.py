# app/domain/services/payroll.py
"""
Labour payroll: daily hajari, monthly totals and settlements.

  daily pay      = attendance multiplier × base daily wage
  days worked    = Σ multipliers for the month (hajari)
  net payable    = Σ daily pay − Σ kharci (advances taken during the month)
  balance        = net payable − amount paid at settlement
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Optional

from app.domain.models.labour import (
    AttendanceRecord,
    AttendanceType,
    PaymentMode,
    Worker,
    WorkerBalance,
)

logger = logging.getLogger("payroll")

_ZERO = Decimal("0")


class SettlementError(ValueError):
    """Raised for an invalid settlement (bad month, negative payment)."""
    pass


def daily_pay(attendance_type: AttendanceType | str, base_daily_wage) -> Decimal:
    return AttendanceType(attendance_type).multiplier * Decimal(str(base_daily_wage))


def build_attendance_record(
    worker: Worker,
    attendance_date: date,
    attendance_type: AttendanceType | str,
    kharci_amount=0,
    remarks: Optional[str] = None,
) -> AttendanceRecord:
    """Stamp the multiplier, wage used and daily pay onto a new mark."""
    att = AttendanceType(attendance_type)
    return AttendanceRecord(
        worker_id=worker.id,
        attendance_date=attendance_date,
        attendance_type=att,
        attendance_multiplier=att.multiplier,
        base_wage_used=worker.base_daily_wage,
        travel_allowance_used=worker.travel_allowance,
        daily_pay=daily_pay(att, worker.base_daily_wage),
        kharci_amount=Decimal(str(kharci_amount or 0)),
        remarks=remarks or None,
    )


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise SettlementError(f"Month must be 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def _in_month(records: Iterable[AttendanceRecord], year: int, month: int) -> list[AttendanceRecord]:
    start, end = month_bounds(year, month)
    return [r for r in records if start <= r.attendance_date <= end]


def _for_worker(records: Iterable[AttendanceRecord], worker_id: Optional[str]) -> list[AttendanceRecord]:
    if worker_id is None:
        return list(records)
    return [r for r in records if r.worker_id == worker_id]


def month_calendar(
    records: Iterable[AttendanceRecord],
    year: int,
    month: int,
    worker_id: Optional[str] = None,
) -> list[dict[str, Any]]:
    """One row per calendar day: date, weekday, hajari and payment."""
    start, end = month_bounds(year, month)
    by_date = {r.attendance_date: r for r in _for_worker(records, worker_id)}

    rows = []
    day = start
    while day <= end:
        rec = by_date.get(day)
        rows.append({
            "date": day.isoformat(),
            "day_name": day.strftime("%a"),
            "day_num": day.strftime("%d"),
            "attendance_type": rec.attendance_type.value if rec else None,
            "hajari": rec.attendance_multiplier if rec else _ZERO,
            "payment": rec.daily_pay if rec else _ZERO,
            "kharci": rec.kharci_amount if rec else _ZERO,
        })
        day += timedelta(days=1)
    return rows


@dataclass
class MonthlySummary:
    year: int
    month: int
    total_days_worked: Decimal = _ZERO
    total_earned: Decimal = _ZERO
    total_kharci: Decimal = _ZERO
    attendance_breakdown: dict[str, int] = field(default_factory=dict)

    @property
    def net_payable(self) -> Decimal:
        return self.total_earned - self.total_kharci

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "total_days_worked": self.total_days_worked,
            "total_earned": self.total_earned,
            "total_kharci": self.total_kharci,
            "net_payable": self.net_payable,
            "attendance_breakdown": self.attendance_breakdown,
        }


def monthly_summary(
    records: Iterable[AttendanceRecord],
    year: int,
    month: int,
    worker_id: Optional[str] = None,
) -> MonthlySummary:
    """Totals for the attendance marks that fall inside ``year``/``month``."""
    summary = MonthlySummary(year=year, month=month)
    for rec in _in_month(_for_worker(records, worker_id), year, month):
        summary.total_days_worked += rec.attendance_multiplier
        summary.total_earned += rec.daily_pay
        summary.total_kharci += rec.kharci_amount
        key = rec.attendance_type.value
        summary.attendance_breakdown[key] = summary.attendance_breakdown.get(key, 0) + 1
    return summary


@dataclass
class SettlementDraft:
    worker_id: str
    year: int
    month: int
    period_start: date
    period_end: date
    total_days_worked: Decimal
    attendance_breakdown: dict[str, int]
    total_earned: Decimal
    total_kharci: Decimal
    net_payable: Decimal
    amount_paid: Decimal

    def to_dict(self) -> dict:
        return {
            "worker_id": self.worker_id,
            "settlement_year": self.year,
            "settlement_month": self.month,
            "period_start_date": self.period_start.isoformat(),
            "period_end_date": self.period_end.isoformat(),
            "total_days_worked": self.total_days_worked,
            "attendance_breakdown": self.attendance_breakdown,
            "total_earned": self.total_earned,
            "total_kharci": self.total_kharci,
            "net_payable": self.net_payable,
            "amount_paid": self.amount_paid,
        }


def prepare_settlement(
    worker_id: str,
    records: Iterable[AttendanceRecord],
    year: int,
    month: int,
) -> SettlementDraft:
    """
    Monthly settlement for one worker.

    Amount paid defaults to the net payable. When kharci exceeds earnings the
    net is negative and nothing is paid out.
    """
    start, end = month_bounds(year, month)
    summary = monthly_summary(records, year, month, worker_id=worker_id)
    return SettlementDraft(
        worker_id=worker_id,
        year=year,
        month=month,
        period_start=start,
        period_end=end,
        total_days_worked=summary.total_days_worked,
        attendance_breakdown=summary.attendance_breakdown,
        total_earned=summary.total_earned,
        total_kharci=summary.total_kharci,
        net_payable=summary.net_payable,
        amount_paid=max(summary.net_payable, _ZERO),
    )


@dataclass
class Settlement:
    draft: SettlementDraft
    amount_paid: Decimal
    balance_remaining: Decimal
    payment_mode: PaymentMode
    payment_date: date
    settlement_type: str = "monthly"
    remarks: Optional[str] = None

    def to_dict(self) -> dict:
        d = self.draft.to_dict()
        d.update({
            "settlement_type": self.settlement_type,
            "settlement_date": self.payment_date.isoformat(),
            "payment_date": self.payment_date.isoformat(),
            "payment_mode": self.payment_mode.value,
            "amount_paid": self.amount_paid,
            "balance_remaining": self.balance_remaining,
            "remarks": self.remarks,
        })
        return d


def settle(
    draft: SettlementDraft,
    amount_paid=None,
    payment_mode: PaymentMode | str = PaymentMode.CASH,
    payment_date: Optional[date] = None,
    remarks: Optional[str] = None,
) -> Settlement:
    """Finalise a draft. Paying less than net payable leaves a balance."""
    paid = draft.amount_paid if amount_paid is None else Decimal(str(amount_paid))
    if paid < 0:
        raise SettlementError(f"Amount paid must not be negative, got {paid}")

    balance = draft.net_payable - paid
    if balance > 0:
        logger.info(
            "Partial settlement for worker %s %04d-%02d: balance ₹%s remaining",
            draft.worker_id, draft.year, draft.month, balance,
        )
    return Settlement(
        draft=draft,
        amount_paid=paid,
        balance_remaining=balance,
        payment_mode=PaymentMode(payment_mode),
        payment_date=payment_date or date.today(),
        remarks=remarks or None,
    )


def carry_forward(unpaid_balance, total_earned, total_paid, total_kharci) -> Decimal:
    """Balance brought into the month, before this month's work."""
    D = lambda x: Decimal(str(x)) if x else _ZERO  # noqa: E731
    return D(unpaid_balance) - (D(total_earned) - D(total_paid) - D(total_kharci))


def settlement_candidates(balances: Iterable[WorkerBalance]) -> list[WorkerBalance]:
    """Workers with an unpaid balance or earnings in the selected month."""
    return [b for b in balances if b.unpaid_balance > 0 or b.month_earned > 0]


@dataclass
class LabourReport:
    total_unpaid: Decimal
    workers_with_balance: int
    current_month_kharci: Decimal
    worker_count: int

    def to_dict(self) -> dict:
        return {
            "total_unpaid": self.total_unpaid,
            "workers_with_balance": self.workers_with_balance,
            "current_month_kharci": self.current_month_kharci,
            "worker_count": self.worker_count,
        }


def labour_report(balances: list[WorkerBalance]) -> LabourReport:
    return LabourReport(
        total_unpaid=sum((b.unpaid_balance for b in balances), _ZERO),
        workers_with_balance=sum(1 for b in balances if b.unpaid_balance > 0),
        current_month_kharci=sum((b.month_kharci for b in balances), _ZERO),
        worker_count=len(balances),
    )
