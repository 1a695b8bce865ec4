# app/api/v1/routes/amounts.py
"""Amount to words and Indian currency formatting."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1.envelope import ok
from app.api.v1.schemas.amounts import AmountWordsRequest, AmountWordsResponse
from app.domain.services.amount_words import amount_to_words, round_to_paise
from app.domain.services.indian_format import format_rupees

router = APIRouter(prefix="/amounts", tags=["Amounts"])


@router.post("/words", response_model=dict)
async def amount_words(body: AmountWordsRequest):
    """Spell out an invoice amount in the Indian numbering system."""
    words = amount_to_words(body.amount)
    return ok(data=AmountWordsResponse(
        amount=round_to_paise(body.amount),
        words=words,
        formatted=format_rupees(body.amount),
    ).model_dump())
