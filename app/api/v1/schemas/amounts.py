# app/api/v1/schemas/amounts.py
"""Request and response schemas for amount formatting endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class AmountWordsRequest(BaseModel):
    """Amount in rupees; validated by the converter, not here."""

    amount: Decimal | int | str


class AmountWordsResponse(BaseModel):
    amount: Decimal
    words: str
    formatted: str
