# app/api/v1/schemas/progress.py
"""
Progress snapshots posted by the client.

The hosted database owns flats, work items and entries; endpoints receive
the rows they need and return computed rollups.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.models.site import (
    DetailCheck,
    DetailConfig,
    Flat,
    ProgressEntry,
    WorkItem,
)


class ProgressSnapshot(BaseModel):
    flats: list[Flat] = Field(default_factory=list)
    work_items: list[WorkItem] = Field(default_factory=list)
    entries: list[ProgressEntry] = Field(default_factory=list)
    detail_configs: list[DetailConfig] = Field(default_factory=list)
    detail_checks: list[DetailCheck] = Field(default_factory=list)


class ProgressSummaryRequest(ProgressSnapshot):
    work_item_code: str | None = Field(
        default=None, description="Restrict wing/floor rollups to one work item"
    )
    by_floor: bool = False


class FlatProgressRequest(ProgressSnapshot):
    flat_id: str


class ChecklistRequest(ProgressSnapshot):
    flat_id: str
    work_item_code: str
