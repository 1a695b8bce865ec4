# app/domain/models/site.py
"""Site structure and progress records as fetched from the hosted database."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class Flat(BaseModel):
    id: str
    wing_code: str
    floor_number: int
    flat_number: str
    bhk_type: Optional[str] = None  # "1BHK" / "2BHK"
    is_refuge: bool = False
    is_joint_refuge: bool = False


class WorkItem(BaseModel):
    id: str
    code: str  # "A".."I"
    name: str = ""
    total_quantity: Decimal = Field(default=Decimal("0"), ge=0)
    rate_per_unit: Decimal = Field(default=Decimal("0"), ge=0)
    unit: Optional[str] = None


class ProgressEntry(BaseModel):
    flat_id: str
    work_item_id: str
    quantity_completed: Decimal = Field(default=Decimal("0"), ge=0)
    is_billed: bool = False
    entry_date: Optional[date] = None


class DetailConfig(BaseModel):
    """One sub-check of a work item, e.g. a single bathroom of item D."""
    id: str
    work_item_code: str
    detail_name: str
    category: Optional[str] = None
    requires_bhk_type: Optional[str] = None
    is_active: bool = True


class DetailCheck(BaseModel):
    flat_id: str
    detail_config_id: str
    is_completed: bool = False
