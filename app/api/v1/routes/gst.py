# app/api/v1/routes/gst.py
"""CGST/SGST split endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.envelope import ok
from app.api.v1.schemas.gst import (
    ContractValueRequest,
    SplitFromBaseRequest,
    SplitFromTotalRequest,
)
from app.core.config import settings
from app.domain.services.gst_split import contract_value, split_from_base, split_from_total

router = APIRouter(prefix="/gst", tags=["GST"])


def _rates(cgst, sgst) -> tuple:
    return (
        settings.DEFAULT_CGST_RATE if cgst is None else cgst,
        settings.DEFAULT_SGST_RATE if sgst is None else sgst,
    )


@router.post("/split-from-base", response_model=dict)
async def gst_split_from_base(body: SplitFromBaseRequest):
    """Add CGST and SGST on top of a base amount."""
    split = split_from_base(body.base_amount, *_rates(body.cgst_rate, body.sgst_rate))
    return ok(data=split.to_dict())


@router.post("/split-from-total", response_model=dict)
async def gst_split_from_total(body: SplitFromTotalRequest):
    """Reverse-derive base, CGST and SGST from a GST-inclusive total."""
    split = split_from_total(body.total_amount, *_rates(body.cgst_rate, body.sgst_rate))
    return ok(data=split.to_dict())


@router.post("/contract-value", response_model=dict)
async def gst_contract_value(body: ContractValueRequest):
    split = contract_value(
        body.area_sqft, body.rate_per_sqft, *_rates(body.cgst_rate, body.sgst_rate)
    )
    return ok(data=split.to_dict())
