# app/api/v1/routes/labour.py
"""Labour payroll: monthly hajari totals, settlements and the unpaid report."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.api.v1.envelope import ok
from app.api.v1.schemas.labour import (
    LabourReportRequest,
    MonthlySummaryRequest,
    SettlementRequest,
)
from app.domain.services.payroll import (
    labour_report,
    month_calendar,
    monthly_summary,
    prepare_settlement,
    settle,
    settlement_candidates,
)

logger = logging.getLogger("api.v1.labour")

router = APIRouter(prefix="/labour", tags=["Labour"])


@router.post("/monthly-summary", response_model=dict)
async def labour_monthly_summary(body: MonthlySummaryRequest):
    summary = monthly_summary(body.records, body.year, body.month, worker_id=body.worker_id)
    data = summary.to_dict()
    if body.include_calendar:
        data["calendar"] = month_calendar(
            body.records, body.year, body.month, worker_id=body.worker_id,
        )
    return ok(data=data)


@router.post("/settlement", response_model=dict)
async def labour_settlement(body: SettlementRequest):
    """Settle one worker's month. Unpaid remainder is carried as balance."""
    draft = prepare_settlement(body.worker_id, body.records, body.year, body.month)
    settlement = settle(
        draft,
        amount_paid=body.amount_paid,
        payment_mode=body.payment_mode,
        payment_date=body.payment_date,
        remarks=body.remarks,
    )
    logger.info(
        "Settlement %s %04d-%02d: paid %s of %s",
        body.worker_id, body.year, body.month, settlement.amount_paid, draft.net_payable,
    )
    return ok(data=settlement.to_dict())


@router.post("/report", response_model=dict)
async def labour_unpaid_report(body: LabourReportRequest):
    report = labour_report(body.balances)
    return ok(data={
        **report.to_dict(),
        "candidates": [b.model_dump() for b in settlement_candidates(body.balances)],
    })
