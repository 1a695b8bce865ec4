# app/domain/services/progress_rollup.py
"""
Progress rollups: flat → work item → floor → wing → project.

Two floor/wing percentages exist and they are NOT interchangeable:

  flat_coverage         share of applicable flats with any recorded
                        progress (entry with quantity > 0). A ratio of
                        flats, never an average of percentages.
  checklist_completion  completed sub-checks over applicable sub-checks
                        (bathrooms, balconies, ... per work item).

Work-item percentage for one flat is completed / total × 100 clamped to
[0, 100]. Project-wide there are likewise two numbers:
overall_completion_by_items (mean of item percentages) and
overall_completion_by_quantity (Σ completed / Σ expected).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional

from app.domain.models.site import (
    DetailCheck,
    DetailConfig,
    Flat,
    ProgressEntry,
    WorkItem,
)

logger = logging.getLogger("progress_rollup")

BATHROOM_WORK_ITEM = "D"
COMMON_BATHROOM = "Common Bathroom"

_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


class ProgressStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    COMPLETE = "complete"
    NOT_APPLICABLE = "not_applicable"


def round_percent(value: Decimal) -> int:
    """Whole-number percentage, half-up."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _clamp(pct: Decimal) -> Decimal:
    return max(_ZERO, min(_HUNDRED, pct))


def progress_status(percentage) -> ProgressStatus:
    if percentage is None:
        return ProgressStatus.NOT_APPLICABLE
    if percentage <= 0:
        return ProgressStatus.PENDING
    if percentage < 100:
        return ProgressStatus.PARTIAL
    return ProgressStatus.COMPLETE


# ---------------------------------------------------------------------------
# Flat-level
# ---------------------------------------------------------------------------

def work_item_percentage(completed_quantity, total_quantity) -> Decimal:
    """completed / total × 100, clamped to [0, 100]; 0 when total <= 0."""
    total = Decimal(str(total_quantity or 0))
    if total <= 0:
        return _ZERO
    completed = Decimal(str(completed_quantity or 0))
    return _clamp(completed / total * _HUNDRED)


def applicable_detail_configs(
    configs: Iterable[DetailConfig],
    flat: Flat,
    work_item_code: str,
) -> list[DetailConfig]:
    """Sub-checks that apply to ``flat`` for one work item.

    Configs with ``requires_bhk_type`` only apply to flats of that type.
    A refuge flat that is not a joint refuge only has the common bathroom
    for the bathroom work item.
    """
    candidates = [
        c for c in configs
        if c.work_item_code == work_item_code and c.is_active
    ]
    if work_item_code == BATHROOM_WORK_ITEM and flat.is_refuge and not flat.is_joint_refuge:
        return [c for c in candidates if c.detail_name == COMMON_BATHROOM]
    return [
        c for c in candidates
        if not c.requires_bhk_type or c.requires_bhk_type == flat.bhk_type
    ]


def checklist_completion_ratio(
    checks: Iterable[DetailCheck],
    applicable_config_ids: Iterable[str],
) -> Decimal:
    """Completed sub-checks / applicable sub-checks × 100.

    Checks for configs outside the applicable set are ignored; each config
    counts once however many check rows exist for it.
    """
    applicable = set(applicable_config_ids)
    if not applicable:
        return _ZERO
    completed = {
        c.detail_config_id
        for c in checks
        if c.is_completed and c.detail_config_id in applicable
    }
    return Decimal(len(completed)) / Decimal(len(applicable)) * _HUNDRED


def _flats_with_progress(entries: Iterable[ProgressEntry]) -> set[str]:
    return {e.flat_id for e in entries if e.quantity_completed > 0}


def flat_work_item_completion(
    flat: Flat,
    work_item: WorkItem,
    configs: Iterable[DetailConfig],
    checks: Iterable[DetailCheck],
    entries: Iterable[ProgressEntry],
) -> Decimal:
    """Completion of one work item in one flat.

    Uses the checklist ratio when the item has applicable sub-checks and the
    flat has check rows for them; otherwise 100 if the flat has a progress
    entry for the item, else 0.
    """
    config_ids = [c.id for c in applicable_detail_configs(configs, flat, work_item.code)]
    if config_ids:
        id_set = set(config_ids)
        flat_checks = [
            c for c in checks
            if c.flat_id == flat.id and c.detail_config_id in id_set
        ]
        if flat_checks:
            return checklist_completion_ratio(flat_checks, config_ids)

    has_entry = any(
        e.flat_id == flat.id and e.work_item_id == work_item.id and e.quantity_completed > 0
        for e in entries
    )
    return _HUNDRED if has_entry else _ZERO


def flat_overall_completion(
    flat: Flat,
    work_items: list[WorkItem],
    configs: list[DetailConfig],
    checks: list[DetailCheck],
    entries: list[ProgressEntry],
) -> int:
    """Mean of the flat's work-item completions, rounded and capped at 100."""
    if not work_items:
        return 0
    total = sum(
        (flat_work_item_completion(flat, wi, configs, checks, entries) for wi in work_items),
        _ZERO,
    )
    return min(100, round_percent(total / len(work_items)))


# ---------------------------------------------------------------------------
# Floor / wing rollups
# ---------------------------------------------------------------------------

def flat_coverage_ratio(
    flat_ids: Iterable[str],
    entries: Iterable[ProgressEntry],
) -> Decimal:
    """Share of ``flat_ids`` with any progress, as a percentage."""
    ids = set(flat_ids)
    if not ids:
        return _ZERO
    covered = ids & _flats_with_progress(entries)
    return Decimal(len(covered)) / Decimal(len(ids)) * _HUNDRED


def group_checklist_ratio(
    flats: Iterable[Flat],
    configs: list[DetailConfig],
    checks: list[DetailCheck],
    work_item_code: Optional[str] = None,
) -> Optional[Decimal]:
    """Completed / applicable sub-checks summed over a group of flats.

    Returns None when no sub-check applies to any flat in the group.
    """
    codes = (
        [work_item_code] if work_item_code
        else sorted({c.work_item_code for c in configs})
    )
    completed_by_flat: dict[str, set[str]] = defaultdict(set)
    for chk in checks:
        if chk.is_completed:
            completed_by_flat[chk.flat_id].add(chk.detail_config_id)

    applicable_total = 0
    completed_total = 0
    for flat in flats:
        done = completed_by_flat.get(flat.id, set())
        for code in codes:
            ids = {c.id for c in applicable_detail_configs(configs, flat, code)}
            applicable_total += len(ids)
            completed_total += len(ids & done)

    if applicable_total == 0:
        return None
    return Decimal(completed_total) / Decimal(applicable_total) * _HUNDRED


@dataclass
class GroupProgress:
    """Rollup of one floor or wing."""
    label: str
    wing_code: str
    floor_number: Optional[int]
    total_flats: int
    with_progress: int
    pending: int
    flat_coverage: int
    checklist_completion: Optional[int]

    def to_dict(self) -> dict:
        return asdict(self)


def _rollup(
    label: str,
    wing_code: str,
    floor_number: Optional[int],
    flats: list[Flat],
    entries: list[ProgressEntry],
    configs: list[DetailConfig],
    checks: list[DetailCheck],
    work_item: Optional[WorkItem],
) -> GroupProgress:
    ids = {f.id for f in flats}
    if work_item is not None:
        entries = [e for e in entries if e.work_item_id == work_item.id]
    with_progress = len(ids & _flats_with_progress(entries))
    checklist = group_checklist_ratio(
        flats, configs, checks, work_item.code if work_item else None,
    )
    return GroupProgress(
        label=label,
        wing_code=wing_code,
        floor_number=floor_number,
        total_flats=len(ids),
        with_progress=with_progress,
        pending=len(ids) - with_progress,
        flat_coverage=round_percent(flat_coverage_ratio(ids, entries)),
        checklist_completion=None if checklist is None else round_percent(checklist),
    )


def wing_coverage(
    flats: list[Flat],
    entries: list[ProgressEntry],
    configs: Optional[list[DetailConfig]] = None,
    checks: Optional[list[DetailCheck]] = None,
    work_item: Optional[WorkItem] = None,
) -> list[GroupProgress]:
    """Per-wing rollup, wings in code order. Pass ``work_item`` to restrict
    both modes to a single item."""
    by_wing: dict[str, list[Flat]] = defaultdict(list)
    for f in flats:
        by_wing[f.wing_code].append(f)
    return [
        _rollup(f"Wing {code}", code, None, by_wing[code], entries,
                configs or [], checks or [], work_item)
        for code in sorted(by_wing)
    ]


def floor_coverage(
    flats: list[Flat],
    entries: list[ProgressEntry],
    configs: Optional[list[DetailConfig]] = None,
    checks: Optional[list[DetailCheck]] = None,
    work_item: Optional[WorkItem] = None,
) -> list[GroupProgress]:
    """Per-floor rollup, ordered by wing then floor number."""
    by_floor: dict[tuple[str, int], list[Flat]] = defaultdict(list)
    for f in flats:
        by_floor[(f.wing_code, f.floor_number)].append(f)
    return [
        _rollup(f"Wing {wing} Floor {floor}", wing, floor, by_floor[(wing, floor)],
                entries, configs or [], checks or [], work_item)
        for wing, floor in sorted(by_floor)
    ]


def project_coverage(
    flats: list[Flat],
    entries: list[ProgressEntry],
    configs: Optional[list[DetailConfig]] = None,
    checks: Optional[list[DetailCheck]] = None,
    work_item: Optional[WorkItem] = None,
) -> GroupProgress:
    return _rollup("Project", "", None, list(flats), entries,
                   configs or [], checks or [], work_item)


# ---------------------------------------------------------------------------
# Work-item / project rollups
# ---------------------------------------------------------------------------

@dataclass
class WorkItemProgress:
    code: str
    name: str
    completed: Decimal
    total: Decimal
    percentage: int
    remaining: Decimal
    status: ProgressStatus

    def to_dict(self) -> dict:
        d = asdict(self)
        d["status"] = self.status.value
        return d


def work_item_summary(
    work_items: list[WorkItem],
    entries: list[ProgressEntry],
) -> list[WorkItemProgress]:
    """Completed vs total quantity per work item, in code order."""
    completed_by_item: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for e in entries:
        completed_by_item[e.work_item_id] += e.quantity_completed

    rows = []
    for wi in sorted(work_items, key=lambda w: w.code):
        completed = completed_by_item.get(wi.id, _ZERO)
        pct = round_percent(work_item_percentage(completed, wi.total_quantity))
        rows.append(WorkItemProgress(
            code=wi.code,
            name=wi.name,
            completed=completed,
            total=wi.total_quantity,
            percentage=pct,
            remaining=max(_ZERO, wi.total_quantity - completed),
            status=progress_status(pct),
        ))
    return rows


def overall_completion_by_items(summary: list[WorkItemProgress]) -> int:
    """Mean of the work-item percentages."""
    if not summary:
        return 0
    return round_percent(Decimal(sum(r.percentage for r in summary)) / len(summary))


def overall_completion_by_quantity(
    work_items: list[WorkItem],
    entries: list[ProgressEntry],
) -> Decimal:
    """Σ completed / Σ expected across active work items, 2 decimals."""
    item_ids = {wi.id for wi in work_items}
    expected = sum((wi.total_quantity for wi in work_items), _ZERO)
    if expected <= 0:
        return _ZERO
    completed = sum(
        (e.quantity_completed for e in entries if e.work_item_id in item_ids),
        _ZERO,
    )
    pct = completed / expected * _HUNDRED
    return pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass
class CompletionCheck:
    total_quantity: Decimal
    completed_quantity: Decimal
    remaining_quantity: Decimal
    is_fully_completed: bool

    def to_dict(self) -> dict:
        return asdict(self)


def completion_check(total_quantity, entries: Iterable[ProgressEntry]) -> CompletionCheck:
    """Guard against recording the same flat/work item twice.

    ``entries`` are the existing entries of one flat for one work item.
    """
    total = Decimal(str(total_quantity or 0))
    completed = sum((e.quantity_completed for e in entries), _ZERO)
    return CompletionCheck(
        total_quantity=total,
        completed_quantity=completed,
        remaining_quantity=total - completed,
        is_fully_completed=completed >= total,
    )


@dataclass
class DashboardStats:
    total_flats: int
    flats_in_progress: int
    total_entries: int
    unbilled_entries: int
    overall_completion_by_items: int
    overall_completion_by_quantity: Decimal

    def to_dict(self) -> dict:
        return asdict(self)


def dashboard_stats(
    flats: list[Flat],
    work_items: list[WorkItem],
    entries: list[ProgressEntry],
) -> DashboardStats:
    summary = work_item_summary(work_items, entries)
    flat_ids = {f.id for f in flats}
    stats = DashboardStats(
        total_flats=len(flat_ids),
        flats_in_progress=len(flat_ids & _flats_with_progress(entries)),
        total_entries=len(entries),
        unbilled_entries=sum(1 for e in entries if not e.is_billed),
        overall_completion_by_items=overall_completion_by_items(summary),
        overall_completion_by_quantity=overall_completion_by_quantity(work_items, entries),
    )
    logger.info(
        "Dashboard rollup: %d flats, %d in progress, %d%% by items",
        stats.total_flats, stats.flats_in_progress, stats.overall_completion_by_items,
    )
    return stats
