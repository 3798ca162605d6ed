"""
Module: composer.layout.caps

Purpose:
    Post-hoc layout check on composed sections. Budget resolution runs
    before selection, so this only fires when a caller bypasses it (manual
    id lists). Violations are fixed by truncating sections from the end,
    never by failing.

Key Functions:
    - enforce_layout_caps(): Truncate sections to the layout caps

Key Classes:
    - LayoutTruncation: One section cut down to fit
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from paper_toolkit.core.models import ComposedSection

from .budget import allocate_proportionally

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutTruncation:
    """A section truncated after composition to respect a layout cap."""

    question_type: str
    before: int
    after: int
    cap: int

    @property
    def removed(self) -> int:
        return self.before - self.after

    def to_dict(self) -> dict:
        return {
            "question_type": self.question_type,
            "before": self.before,
            "after": self.after,
            "cap": self.cap,
        }


def enforce_layout_caps(
    sections: Sequence[ComposedSection],
    mcq_max: int,
    subjective_max: int,
) -> tuple[list[ComposedSection], list[LayoutTruncation]]:
    """
    Truncate sections so the paper fits its layout caps.

    Sections cut to zero questions are dropped.

    Args:
        sections: Composed sections in print order
        mcq_max: Effective mcq cap
        subjective_max: Effective subjective cap

    Returns:
        (sections that fit, truncations made)
    """
    subjective = [s for s in sections if not s.is_mcq]
    allocation = dict(zip(
        (s.question_type for s in subjective),
        allocate_proportionally([s.question_count for s in subjective], subjective_max),
    ))

    kept: list[ComposedSection] = []
    truncations: list[LayoutTruncation] = []

    for section in sections:
        if section.is_mcq:
            limit, cap = mcq_max, mcq_max
        else:
            limit, cap = allocation[section.question_type], subjective_max

        if section.question_count > limit:
            truncations.append(LayoutTruncation(
                section.question_type, section.question_count, limit, cap
            ))
            logger.warning(
                f"Truncated {section.question_type} from {section.question_count} "
                f"to {limit} questions to fit layout"
            )
            section = truncate_section(section, limit)

        if section.question_count:
            kept.append(section)

    return kept, truncations


def truncate_section(section: ComposedSection, limit: int) -> ComposedSection:
    """New section keeping the first ``limit`` questions, attempt clamped."""
    return replace(
        section,
        questions=section.questions[:limit],
        attempt=min(section.attempt, limit),
    )
