# app/api/v1/routes/progress.py
"""Progress rollups over a posted site snapshot."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from app.api.v1.envelope import ok
from app.api.v1.schemas.progress import (
    ChecklistRequest,
    FlatProgressRequest,
    ProgressSnapshot,
    ProgressSummaryRequest,
)
from app.domain.models.site import Flat, WorkItem
from app.domain.services.progress_rollup import (
    applicable_detail_configs,
    checklist_completion_ratio,
    dashboard_stats,
    flat_overall_completion,
    flat_work_item_completion,
    floor_coverage,
    progress_status,
    project_coverage,
    round_percent,
    wing_coverage,
    work_item_summary,
)

logger = logging.getLogger("api.v1.progress")

router = APIRouter(prefix="/progress", tags=["Progress"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _find_flat(body: ProgressSnapshot, flat_id: str) -> Flat:
    for flat in body.flats:
        if flat.id == flat_id:
            return flat
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Flat {flat_id} not found")


def _find_work_item(body: ProgressSnapshot, code: str) -> WorkItem:
    for wi in body.work_items:
        if wi.code.upper() == code.upper():
            return wi
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Work item {code} not found")


# ---------------------------------------------------------------------------
# Project summary
# ---------------------------------------------------------------------------

@router.post("/summary", response_model=dict)
async def progress_summary(body: ProgressSummaryRequest):
    """Work-item summary, wing (or floor) rollups and the dashboard figures."""
    work_item = _find_work_item(body, body.work_item_code) if body.work_item_code else None
    rollup = floor_coverage if body.by_floor else wing_coverage
    groups = rollup(
        body.flats,
        body.entries,
        body.detail_configs,
        body.detail_checks,
        work_item=work_item,
    )
    return ok(data={
        "work_items": [r.to_dict() for r in work_item_summary(body.work_items, body.entries)],
        "groups": [g.to_dict() for g in groups],
        "project": project_coverage(
            body.flats,
            body.entries,
            body.detail_configs,
            body.detail_checks,
            work_item=work_item,
        ).to_dict(),
        "stats": dashboard_stats(body.flats, body.work_items, body.entries).to_dict(),
    })


# ---------------------------------------------------------------------------
# One flat
# ---------------------------------------------------------------------------

@router.post("/flat", response_model=dict)
async def flat_progress(body: FlatProgressRequest):
    flat = _find_flat(body, body.flat_id)
    items = []
    for wi in sorted(body.work_items, key=lambda w: w.code):
        pct = round_percent(flat_work_item_completion(
            flat, wi, body.detail_configs, body.detail_checks, body.entries,
        ))
        items.append({
            "code": wi.code,
            "name": wi.name,
            "percentage": pct,
            "status": progress_status(pct).value,
        })
    return ok(data={
        "flat_id": flat.id,
        "overall": flat_overall_completion(
            flat, body.work_items, body.detail_configs, body.detail_checks, body.entries,
        ),
        "work_items": items,
    })


@router.post("/checklist", response_model=dict)
async def flat_checklist(body: ChecklistRequest):
    """Checklist completion for one flat and work item, with the applicable checks."""
    flat = _find_flat(body, body.flat_id)
    configs = applicable_detail_configs(body.detail_configs, flat, body.work_item_code)
    ids = [c.id for c in configs]
    own_checks = [c for c in body.detail_checks if c.flat_id == flat.id]
    pct = checklist_completion_ratio(own_checks, ids)
    done = {c.detail_config_id for c in own_checks if c.is_completed}
    return ok(data={
        "flat_id": flat.id,
        "work_item_code": body.work_item_code,
        "completion": pct,
        "percentage": round_percent(pct),
        "checks": [
            {"id": c.id, "detail_name": c.detail_name, "is_completed": c.id in done}
            for c in configs
        ],
    })
