"""
Module: composer.selection.fallback

Purpose:
    Fallback question selection. Queries the repository with the strict
    filters first and relaxes them level by level until the desired count
    is met. Fewer questions than desired is acceptable; zero after the
    last level marks the type as unsatisfiable (a value, not an error).

Key Functions:
    - select_with_fallback(): Run the cascade for one question type

Key Classes:
    - FallbackOutcome: Rows found plus which level produced them

Algorithm:
    1. Build the strict query (type + subject + chapters + source + difficulty)
    2. For each RelaxationStep in order, skipping steps that would not
       change the query, re-query the repository
    3. Merge each level's new rows after those already held, so rows
       matching stricter filters (and the chapter scope) are never
       displaced by a wider level
    4. Stop once the merged rows reach the desired count; the pool is
       capped at the fetch limit

Dependencies:
    - composer.repository: QuestionRepository, QuestionQuery
    - composer.selection.relaxation: DEFAULT_CASCADE

Used By:
    - composer.controller: Randomized selection per type
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from paper_toolkit.composer.repository import QuestionQuery, QuestionRepository
from paper_toolkit.core.models import Difficulty, Question, SourceCategory

from .relaxation import DEFAULT_CASCADE, RelaxationStep, validate_cascade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackOutcome:
    """
    Result of the fallback cascade for one type (immutable).

    Attributes:
        question_type: Type selected
        desired: Questions the caller wanted
        questions: Rows merged across levels, stricter levels first
        level: Name of the widest level queried
        level_index: Position of that level in the cascade
        levels_tried: (level name, row count) for each query run
    """

    question_type: str
    desired: int
    questions: tuple[Question, ...]
    level: str
    level_index: int
    levels_tried: tuple[tuple[str, int], ...]

    @property
    def question_ids(self) -> tuple[str, ...]:
        return tuple(q.id for q in self.questions)

    @property
    def found(self) -> int:
        return len(self.questions)

    @property
    def delivered(self) -> int:
        """Questions usable for the section (capped at desired)."""
        return min(self.found, self.desired)

    @property
    def shortfall(self) -> int:
        return self.desired - self.delivered

    @property
    def relaxed(self) -> bool:
        """True if a level past the strict query was needed."""
        return self.level_index > 0

    @property
    def fell_back(self) -> bool:
        """True if filters were relaxed or fewer than desired were found."""
        return self.relaxed or self.shortfall > 0

    @property
    def unsatisfiable(self) -> bool:
        return self.desired > 0 and self.found == 0


def select_with_fallback(
    repository: QuestionRepository,
    question_type: str,
    subject_id: str,
    chapter_ids: Sequence[str],
    *,
    desired: int,
    source: Optional[SourceCategory] = None,
    difficulty: Optional[Difficulty] = None,
    fetch_limit: Optional[int] = None,
    cascade: tuple[RelaxationStep, ...] = DEFAULT_CASCADE,
) -> FallbackOutcome:
    """
    Select up to ``desired`` questions, relaxing filters as needed.

    Args:
        repository: Question source (read-only)
        question_type: Type to select
        subject_id: Subject to select from
        chapter_ids: Chapter scope
        desired: Number of questions wanted
        source: Optional source filter
        difficulty: Optional difficulty filter (ANY is treated as absent)
        fetch_limit: Rows to fetch per level (>= desired; defaults to
            desired). Randomized selection over-fetches to have a pool.
        cascade: Relaxation steps, strict first

    Returns:
        FallbackOutcome with the merged rows

    Raises:
        RepositoryError: Propagated from the repository

    Example:
        >>> outcome = select_with_fallback(repo, "short", "bio", ["c1"], desired=5)
        >>> outcome.unsatisfiable
        False
    """
    validate_cascade(cascade)
    if desired < 0:
        raise ValueError(f"desired must be non-negative: {desired}")
    limit = max(desired, fetch_limit or 0)

    if difficulty is Difficulty.ANY:
        difficulty = None

    strict = QuestionQuery(
        question_type=question_type,
        subject_id=subject_id,
        chapter_ids=tuple(chapter_ids),
        source=source,
        difficulty=difficulty,
        limit=limit,
    )

    if desired == 0:
        return FallbackOutcome(question_type, 0, (), cascade[0].name, 0, ())

    tried: list[tuple[str, int]] = []
    previous: Optional[QuestionQuery] = None
    merged: dict[str, Question] = {}
    level_index = 0

    for index, step in enumerate(cascade):
        query = step.apply(strict)
        if query == previous:
            continue
        previous = query

        # Held rows come back again from wider levels
        rows = repository.query(replace(query, limit=limit + len(merged)))
        level_index = index
        tried.append((step.name, len(rows)))
        logger.debug(f"Fallback level {step.name}: {len(rows)} rows ({query.describe()})")

        for row in rows:
            if len(merged) >= limit:
                break
            merged.setdefault(row.id, row)

        if len(merged) >= desired:
            break

    outcome = FallbackOutcome(
        question_type=question_type,
        desired=desired,
        questions=tuple(merged.values()),
        level=cascade[level_index].name,
        level_index=level_index,
        levels_tried=tuple(tried),
    )

    if outcome.unsatisfiable:
        logger.warning(f"No {question_type} questions found at any fallback level")
    elif outcome.fell_back:
        logger.info(
            f"{question_type}: found {outcome.found}/{desired} at level "
            f"{outcome.level} after {len(tried)} queries"
        )
    return outcome
