# app/api/v1/schemas/gst.py
"""Request schemas for the CGST/SGST split endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class SplitFromBaseRequest(BaseModel):
    base_amount: Decimal
    cgst_rate: Decimal | None = Field(default=None, description="Defaults to DEFAULT_CGST_RATE")
    sgst_rate: Decimal | None = Field(default=None, description="Defaults to DEFAULT_SGST_RATE")


class SplitFromTotalRequest(BaseModel):
    total_amount: Decimal
    cgst_rate: Decimal | None = None
    sgst_rate: Decimal | None = None


class ContractValueRequest(BaseModel):
    area_sqft: Decimal
    rate_per_sqft: Decimal
    cgst_rate: Decimal | None = None
    sgst_rate: Decimal | None = None
