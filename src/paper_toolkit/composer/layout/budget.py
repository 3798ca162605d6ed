"""
Module: composer.layout.budget

Purpose:
    Layout budget resolution. Clamps the requested per-type counts so the
    paper fits the chosen layout before any question is selected.

Key Functions:
    - resolve_budgets(): Clamp a criteria map to a layout profile
    - allocate_proportionally(): Largest-remainder scaling of counts

Key Classes:
    - Adjustment: One changed field, reported back to the caller
    - BudgetResolution: Clamped criteria plus the adjustments made

Algorithm:
    1. mcq: total clamped to mcq_max, attempt clamped to the new total
    2. Non-mcq types share subjective_max. When their totals sum above
       it, each type gets count / sum * max, floored; the leftover units
       go to the largest fractional parts (ties in declaration order)
    3. When the cap allows it, every requested type keeps at least one
       question; the unit comes from the largest allocation
    4. Attempts are clamped to the new totals

Used By:
    - composer.controller: Before selection
    - composer.layout.caps: Post-hoc truncation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence

from paper_toolkit.core.models import MCQ, LayoutProfile, SelectionCriteria

logger = logging.getLogger(__name__)

MCQ_CAP_REASON = "mcq layout cap"
SUBJECTIVE_CAP_REASON = "subjective layout cap"
ATTEMPT_REASON = "attempt clamped to total"


@dataclass(frozen=True)
class Adjustment:
    """A field the resolver changed (immutable)."""

    question_type: str
    field: str
    old: int
    new: int
    reason: str

    def to_dict(self) -> dict:
        return {
            "question_type": self.question_type,
            "field": self.field,
            "old": self.old,
            "new": self.new,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class BudgetResolution:
    """
    Result of budget resolution (immutable).

    Attributes:
        criteria: Clamped criteria, same keys and order as the input
        adjustments: Changes made, in type order
        mcq_max: Effective mcq cap
        subjective_max: Effective subjective cap (bonus applied)
    """

    criteria: Dict[str, SelectionCriteria]
    adjustments: tuple[Adjustment, ...]
    mcq_max: int
    subjective_max: int

    @property
    def adjusted(self) -> bool:
        return bool(self.adjustments)

    @property
    def subjective_total(self) -> int:
        return sum(
            c.requested_total for t, c in self.criteria.items() if t != MCQ
        )


def allocate_proportionally(counts: Sequence[int], maximum: int) -> list[int]:
    """
    Scale counts down so they sum to at most ``maximum``.

    Largest-remainder method on exact integer quotas. Counts already
    within the cap come back unchanged; no allocation ever exceeds its
    count.

    Example:
        >>> allocate_proportionally([10, 10, 1], 15)
        [7, 7, 1]
    """
    total = sum(counts)
    if total <= maximum:
        return list(counts)
    if maximum <= 0:
        return [0] * len(counts)

    floors = [count * maximum // total for count in counts]
    remainders = [count * maximum % total for count in counts]
    leftover = maximum - sum(floors)

    by_remainder = sorted(range(len(counts)), key=lambda i: (-remainders[i], i))
    for index in by_remainder[:leftover]:
        floors[index] += 1

    requested = [i for i, count in enumerate(counts) if count > 0]
    if maximum >= len(requested):
        for index in requested:
            if floors[index] == 0:
                donor = max(range(len(floors)), key=lambda i: (floors[i], -i))
                floors[donor] -= 1
                floors[index] = 1
    return floors


def resolve_budgets(
    criteria_map: Mapping[str, SelectionCriteria],
    profile: LayoutProfile,
    subject_category: Optional[str] = None,
) -> BudgetResolution:
    """
    Clamp requested criteria to a layout profile's caps.

    Args:
        criteria_map: Requested criteria by question type
        profile: Layout to fit
        subject_category: Normalized subject category (decides the bonus)

    Returns:
        BudgetResolution with mcq total <= mcq_max, non-mcq totals summing
        to <= subjective_max, and every attempt <= its total

    Example:
        >>> r = resolve_budgets({"mcq": SelectionCriteria.create(20)}, COMBINED)
        >>> r.criteria["mcq"].requested_total
        5
    """
    mcq_max = profile.mcq_max
    subjective_max = profile.subjective_max(subject_category)

    resolved: Dict[str, SelectionCriteria] = dict(criteria_map)
    adjustments: list[Adjustment] = []

    mcq = resolved.get(MCQ)
    if mcq is not None and mcq.requested_total > mcq_max:
        resolved[MCQ] = mcq.with_total(mcq_max)
        adjustments.extend(_diff(MCQ, mcq, resolved[MCQ], MCQ_CAP_REASON))

    subjective_types = [t for t in resolved if t != MCQ]
    counts = [resolved[t].requested_total for t in subjective_types]
    allocation = allocate_proportionally(counts, subjective_max)

    for question_type, count, new_total in zip(subjective_types, counts, allocation):
        if new_total == count:
            continue
        before = resolved[question_type]
        resolved[question_type] = before.with_total(new_total)
        adjustments.extend(
            _diff(question_type, before, resolved[question_type], SUBJECTIVE_CAP_REASON)
        )

    if adjustments:
        logger.info(
            f"Layout {profile.name}: {len(adjustments)} adjustments "
            f"(mcq_max={mcq_max}, subjective_max={subjective_max})"
        )

    return BudgetResolution(
        criteria=resolved,
        adjustments=tuple(adjustments),
        mcq_max=mcq_max,
        subjective_max=subjective_max,
    )


def _diff(
    question_type: str,
    before: SelectionCriteria,
    after: SelectionCriteria,
    reason: str,
) -> list[Adjustment]:
    changes = []
    if before.requested_total != after.requested_total:
        changes.append(Adjustment(
            question_type, "total", before.requested_total, after.requested_total, reason
        ))
    if before.requested_attempt != after.requested_attempt:
        changes.append(Adjustment(
            question_type, "attempt", before.requested_attempt, after.requested_attempt,
            ATTEMPT_REASON,
        ))
    return changes
