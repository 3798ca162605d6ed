"""
Module: composer.request

Purpose:
    The caller's composition request: subject, chapter scope, per-type
    criteria, layout, selection mode and mark overrides.

Key Classes:
    - SelectionMode: random (fallback + chapter balance) or manual (id lists)
    - CompositionRequest: Validated request

Key Functions:
    - CompositionRequest.from_dict(): Build from a JSON payload

Used By:
    - composer.controller: compose_paper()
    - paper_toolkit.cli: Request files
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from paper_toolkit.common.coverage import resolve_chapter_scope
from paper_toolkit.common.subjects import default_marks_for, question_types_for, subject_category
from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import MCQ, ChapterScope, LayoutProfile, SelectionCriteria
from paper_toolkit.core.models.marks import validate_overrides
from paper_toolkit.core.schemas import validate_request

from .layout import get_layout_profile

logger = logging.getLogger(__name__)


class SelectionMode(str, Enum):
    RANDOM = "random"
    MANUAL = "manual"


@dataclass(frozen=True)
class CompositionRequest:
    """
    A validated composition request (immutable).

    Attributes:
        subject_id: Subject to compose from
        scope: Chapters to draw from
        criteria: Requested criteria by question type, request order
        layout: Layout profile to fit
        subject_name: Display name, used for the type order
        subject_category: Normalized category (decides the layout bonus)
        mode: Random or manual selection
        manual_ids: Ordered question ids per type (manual mode)
        seed: Shuffle seed (None = draw one)
        mark_overrides: Question id -> marks

    Example:
        >>> request = CompositionRequest.from_dict(payload)
        >>> request.layout.name
        'combined'
    """

    subject_id: str
    scope: ChapterScope
    criteria: Dict[str, SelectionCriteria]
    layout: LayoutProfile
    subject_name: str = ""
    subject_category: Optional[str] = None
    mode: SelectionMode = SelectionMode.RANDOM
    manual_ids: Dict[str, tuple[str, ...]] = field(default_factory=dict)
    seed: Optional[int] = None
    mark_overrides: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate request on construction."""
        if not self.subject_id:
            raise ValidationError("subject_id is required", path="subject_id")
        validate_overrides(self.mark_overrides)
        if self.mode is SelectionMode.MANUAL and not any(self.manual_ids.values()):
            raise ValidationError(
                "Manual mode needs at least one question id", path="manual_ids"
            )

    @property
    def type_order(self) -> list[str]:
        """
        Section order: mcq first, then the subject's declared types, then
        any other requested type in request order.
        """
        requested = list(self.criteria)
        declared = [t for t in question_types_for(self.subject_name or self.subject_category)
                    if t in self.criteria and t != MCQ]
        rest = [t for t in requested if t != MCQ and t not in declared]
        head = [MCQ] if MCQ in self.criteria else []
        return head + declared + rest

    @property
    def requested_types(self) -> list[str]:
        """Types with a non-zero requested total, in section order."""
        return [t for t in self.type_order if self.criteria[t].is_requested]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, strict: bool = True) -> CompositionRequest:
        """
        Build a request from a JSON payload.

        Types without explicit marks use the subject catalogue default. In
        manual mode a type with ids but no criteria gets total = attempt
        = number of ids.

        Raises:
            ValidationError: On schema failure, empty scope, negative
                counts or an unknown layout
        """
        data = dict(data)
        validate_request(data, strict=strict)

        subject_name = data.get("subject_name") or ""
        category = subject_category(data.get("subject_category") or subject_name)

        if "chapters" in data:
            scope = ChapterScope.of(data["chapters"], policy="custom")
        else:
            coverage = data["coverage"]
            scope = resolve_chapter_scope(
                coverage["policy"], coverage["available"], coverage.get("selected")
            )

        try:
            mode = SelectionMode(data.get("mode", "random"))
        except ValueError:
            raise ValidationError(f"Unknown mode: {data.get('mode')!r}", path="mode") from None

        default_source = data.get("source")
        criteria: Dict[str, SelectionCriteria] = {}
        for question_type, entry in data["types"].items():
            criteria[question_type] = SelectionCriteria.create(
                total=entry["total"],
                attempt=entry.get("attempt"),
                marks=entry.get("marks", default_marks_for(question_type)),
                difficulty=entry.get("difficulty"),
                source=entry.get("source", default_source),
            )

        manual_ids: Dict[str, tuple[str, ...]] = {}
        if mode is SelectionMode.MANUAL:
            for question_type, ids in (data.get("manual_ids") or {}).items():
                manual_ids[question_type] = tuple(str(i) for i in ids)
                if question_type not in criteria:
                    criteria[question_type] = SelectionCriteria.create(
                        total=len(ids), marks=default_marks_for(question_type)
                    )
        elif data.get("manual_ids"):
            logger.warning("manual_ids ignored in random mode")

        overrides = {str(k): v for k, v in (data.get("mark_overrides") or {}).items()}

        return cls(
            subject_id=str(data["subject_id"]),
            scope=scope,
            criteria=criteria,
            layout=get_layout_profile(data["layout"]),
            subject_name=subject_name,
            subject_category=category,
            mode=mode,
            manual_ids=manual_ids,
            seed=data.get("seed"),
            mark_overrides=overrides,
        )
