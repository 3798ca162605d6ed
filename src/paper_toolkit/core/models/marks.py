"""
Module: marks

Purpose:
    Attempt-based mark calculation - the single source of truth for
    section and paper totals.

    Only the first ``attempt`` questions of a section count. Questions
    beyond the attempt prefix are optional extras and contribute zero,
    whatever their overrides say. Totals are always recomputed from the
    ordered question list, never patched after a reorder.

Key Functions:
    - resolve_marks(): override ?? default for one question
    - section_marks(): Sum over the attempt prefix of an id list
    - attempted_marks(): Same, over already-resolved SelectedQuestions
    - paper_total(): Sum of section marks

Used By:
    - core.models.composed: ComposedSection.section_marks
    - composer.controller: SelectedQuestion construction
    - composer.session: Recalculation after every edit
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Sequence

from ..errors import ValidationError

if TYPE_CHECKING:
    from .composed import ComposedSection, SelectedQuestion


MarkOverrides = Mapping[str, int]


def validate_overrides(overrides: Optional[MarkOverrides]) -> None:
    """
    Reject negative per-question overrides.

    Raises:
        ValidationError: If any override is negative
    """
    for qid, value in (overrides or {}).items():
        if value < 0:
            raise ValidationError(
                f"Mark override for {qid} cannot be negative: {value}",
                path=f"mark_overrides.{qid}",
            )


def resolve_marks(
    question_id: str,
    default_marks: int,
    overrides: Optional[MarkOverrides] = None,
) -> int:
    """
    Marks for one question.

    An override is present when its key exists, so an explicit 0 is
    honoured rather than falling back to the default.
    """
    if overrides and question_id in overrides:
        return overrides[question_id]
    return default_marks


def section_marks(
    question_ids: Sequence[str],
    attempt: int,
    default_marks: int,
    overrides: Optional[MarkOverrides] = None,
) -> int:
    """
    Sum marks over the first ``attempt`` questions in order.

    Args:
        question_ids: Section questions in presentation order
        attempt: Number the student must answer
        default_marks: Marks per question without an override
        overrides: Optional question id -> marks map

    Returns:
        Section marks

    Example:
        >>> section_marks([str(i) for i in range(10)], 3, 2, {"9": 50})
        6
    """
    if attempt < 0:
        raise ValidationError(f"attempt cannot be negative: {attempt}", path="attempt")
    return sum(
        resolve_marks(qid, default_marks, overrides)
        for qid in question_ids[:attempt]
    )


def attempted_marks(questions: Sequence[SelectedQuestion], attempt: int) -> int:
    """Sum the resolved marks of the attempt prefix."""
    return sum(q.marks for q in questions[:attempt])


def paper_total(sections: Iterable[ComposedSection]) -> int:
    """Total paper marks: sum of every section's attempt-prefix marks."""
    return sum(section.section_marks for section in sections)
