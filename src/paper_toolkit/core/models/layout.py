"""
Module: layout

Purpose:
    LayoutProfile - a named physical page arrangement that imposes hard
    caps on question counts and decides how many identical copies of the
    paper share one printed sheet.

Key Classes:
    - LayoutProfile: Caps, duplication and page-break rules

Used By:
    - composer.layout.profiles: Canonical profile registry
    - composer.layout.budget: Cap resolution
    - core.models.composed.ComposedPaper
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Optional

from ..errors import ValidationError


@dataclass(frozen=True)
class LayoutProfile:
    """
    Physical layout caps (immutable).

    Attributes:
        name: Canonical profile name
        mcq_max: Maximum mcq questions
        subjective_max_base: Maximum total non-mcq questions
        subjective_bonus: Added to the base for bonus subject categories
        bonus_categories: Subject categories that receive the bonus
        fixed_subjective_max: Ignore the bonus for every subject
        duplicate_count: Identical paper copies composited onto one sheet
        page_break_before_subjective: Subjective part starts on a new page
        mcq_minutes: Time allowed for the objective part (None = shared)
        subjective_minutes: Time allowed for the subjective part / whole paper

    Example:
        >>> profile.subjective_max("english")
        20
    """

    name: str
    mcq_max: int
    subjective_max_base: int
    subjective_bonus: int = 5
    bonus_categories: FrozenSet[str] = field(default_factory=frozenset)
    fixed_subjective_max: bool = False
    duplicate_count: int = 1
    page_break_before_subjective: bool = False
    mcq_minutes: Optional[int] = None
    subjective_minutes: int = 60

    def __post_init__(self) -> None:
        """Validate profile on construction."""
        if self.mcq_max < 0:
            raise ValidationError(f"mcq_max cannot be negative: {self.mcq_max}")
        if self.subjective_max_base < 0:
            raise ValidationError(
                f"subjective_max_base cannot be negative: {self.subjective_max_base}"
            )
        if self.duplicate_count < 1:
            raise ValidationError(
                f"duplicate_count must be at least 1: {self.duplicate_count}"
            )

    def subjective_max(self, subject_category: Optional[str] = None) -> int:
        """Aggregate non-mcq cap for a subject category."""
        if self.fixed_subjective_max or subject_category is None:
            return self.subjective_max_base
        if subject_category in self.bonus_categories:
            return self.subjective_max_base + self.subjective_bonus
        return self.subjective_max_base

    @property
    def is_multi_copy(self) -> bool:
        return self.duplicate_count > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "mcq_max": self.mcq_max,
            "subjective_max_base": self.subjective_max_base,
            "duplicate_count": self.duplicate_count,
            "page_break_before_subjective": self.page_break_before_subjective,
            "mcq_minutes": self.mcq_minutes,
            "subjective_minutes": self.subjective_minutes,
        }
