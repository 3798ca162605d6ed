"""
Module: criteria

Purpose:
    Per-type selection criteria and the chapter scope a composition
    request draws from.

Key Classes:
    - SelectionCriteria: Requested total/attempt/marks/filters for one type
    - ChapterScope: Non-empty ordered set of chapter ids

Invariants:
    - requested_attempt <= requested_total; attempt is clamped to total
      after any change to total, never the reverse
    - ChapterScope is never empty (fails fast)

Used By:
    - composer.layout.budget: Clamping and rebalancing
    - composer.controller: Per-type selection
    - common.coverage: Scope resolution from coverage policies
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, Optional

from ..errors import ValidationError
from .questions import Difficulty, SourceCategory


@dataclass(frozen=True)
class SelectionCriteria:
    """
    What the caller wants for one question type (immutable).

    Attributes:
        requested_total: Questions to present (>= 0)
        requested_attempt: Questions the student must answer (0..total)
        default_marks: Marks per question unless overridden (>= 1)
        difficulty: Difficulty filter (None or ANY = no filter)
        source: Source filter (None = all sources)

    Example:
        >>> c = SelectionCriteria.create(total=10, attempt=6, marks=2)
        >>> c.with_total(4).requested_attempt
        4
    """

    requested_total: int
    requested_attempt: int
    default_marks: int = 1
    difficulty: Optional[Difficulty] = None
    source: Optional[SourceCategory] = None

    def __post_init__(self) -> None:
        """Validate criteria on construction."""
        if self.requested_total < 0:
            raise ValidationError(
                f"requested_total cannot be negative: {self.requested_total}",
                path="requested_total",
            )
        if self.requested_attempt < 0:
            raise ValidationError(
                f"requested_attempt cannot be negative: {self.requested_attempt}",
                path="requested_attempt",
            )
        if self.requested_attempt > self.requested_total:
            raise ValidationError(
                f"requested_attempt ({self.requested_attempt}) exceeds "
                f"requested_total ({self.requested_total})",
                path="requested_attempt",
            )
        if self.default_marks < 1:
            raise ValidationError(
                f"default_marks must be at least 1: {self.default_marks}",
                path="default_marks",
            )

    @classmethod
    def create(
        cls,
        total: int,
        attempt: Optional[int] = None,
        marks: int = 1,
        difficulty: Optional[str | Difficulty] = None,
        source: Optional[str | SourceCategory] = None,
    ) -> SelectionCriteria:
        """
        Build criteria from loose caller input.

        A missing attempt means "attempt everything". An attempt larger
        than total is clamped to total; negative values still raise.
        """
        if attempt is None:
            attempt = total
        if attempt < 0 or total < 0:
            raise ValidationError(
                f"Counts cannot be negative (total={total}, attempt={attempt})",
                path="requested_attempt" if attempt < 0 else "requested_total",
            )
        return cls(
            requested_total=total,
            requested_attempt=min(attempt, total),
            default_marks=marks,
            difficulty=(
                difficulty if isinstance(difficulty, Difficulty) or difficulty is None
                else Difficulty.parse_filter(difficulty)
            ),
            source=(
                source if isinstance(source, SourceCategory) or source is None
                else SourceCategory.parse_filter(source)
            ),
        )

    @property
    def difficulty_filter(self) -> Optional[Difficulty]:
        """Difficulty to query by, with ANY treated as absent."""
        if self.difficulty is Difficulty.ANY:
            return None
        return self.difficulty

    @property
    def is_requested(self) -> bool:
        return self.requested_total > 0

    def with_total(self, total: int) -> SelectionCriteria:
        """New criteria with total replaced and attempt clamped to it."""
        return replace(
            self,
            requested_total=total,
            requested_attempt=min(self.requested_attempt, total),
        )

    def with_attempt(self, attempt: int) -> SelectionCriteria:
        """New criteria with attempt replaced (clamped to total)."""
        return replace(self, requested_attempt=min(attempt, self.requested_total))

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.requested_total,
            "attempt": self.requested_attempt,
            "marks": self.default_marks,
            "difficulty": self.difficulty.value if self.difficulty else "any",
            "source": self.source.value if self.source else "all",
        }


@dataclass(frozen=True)
class ChapterScope:
    """
    Ordered, de-duplicated, non-empty set of chapter ids.

    Attributes:
        chapter_ids: Chapters in coverage order
        policy: Coverage policy that produced the scope
            ("full_book", "half_book", "single_chapter", "custom")
    """

    chapter_ids: tuple[str, ...]
    policy: str = "custom"

    def __post_init__(self) -> None:
        if not self.chapter_ids:
            raise ValidationError("Chapter scope cannot be empty", path="chapters")
        if len(set(self.chapter_ids)) != len(self.chapter_ids):
            raise ValidationError(
                "Chapter scope contains duplicate ids", path="chapters"
            )

    @classmethod
    def of(cls, chapter_ids: Iterable[str], policy: str = "custom") -> ChapterScope:
        """Build a scope, dropping duplicates while keeping first-seen order."""
        ordered = tuple(dict.fromkeys(str(c) for c in chapter_ids))
        return cls(chapter_ids=ordered, policy=policy)

    def __len__(self) -> int:
        return len(self.chapter_ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.chapter_ids)

    def __contains__(self, chapter_id: object) -> bool:
        return chapter_id in self.chapter_ids

    @property
    def is_multi_chapter(self) -> bool:
        return len(self.chapter_ids) > 1
