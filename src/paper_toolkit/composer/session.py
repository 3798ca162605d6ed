"""
Module: composer.session

Purpose:
    Edit session over a composed paper. Reordering, moving, replacing
    questions and overriding marks each produce a new ComposedPaper
    snapshot; nothing is mutated in place, and marks are recalculated
    from the new order every time.

Key Classes:
    - EditSession: Current snapshot, override map and history

Example:
    >>> session = EditSession(result.paper)
    >>> session.override_marks("q7", 4)
    >>> session.move("short", 5, 1).total_marks
    30
    >>> session.undo()
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence

from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import (
    ComposedPaper,
    ComposedSection,
    Question,
    SelectedQuestion,
    resolve_marks,
)

logger = logging.getLogger(__name__)


class EditSession:
    """
    Sequence of immutable paper snapshots.

    Attributes:
        paper: Current snapshot
        overrides: Current question id -> marks overrides
        history: Earlier snapshots, oldest first
    """

    def __init__(
        self,
        paper: ComposedPaper,
        overrides: Optional[Mapping[str, int]] = None,
    ) -> None:
        if overrides is None:
            overrides = {
                q.question_id: q.marks
                for section in paper.sections
                for q in section.questions
                if q.overridden
            }
        self._paper = paper
        self._overrides: Dict[str, int] = dict(overrides)
        self._history: List[tuple[ComposedPaper, Dict[str, int]]] = []

    @property
    def paper(self) -> ComposedPaper:
        return self._paper

    @property
    def overrides(self) -> Dict[str, int]:
        return dict(self._overrides)

    @property
    def history(self) -> tuple[ComposedPaper, ...]:
        return tuple(paper for paper, _ in self._history)

    # ─────────────────────────────────────────────────────────────────────
    # Edits
    # ─────────────────────────────────────────────────────────────────────

    def reorder(self, question_type: str, question_ids: Sequence[str]) -> ComposedPaper:
        """
        Put a section's questions in a new order.

        Raises:
            ValidationError: If ids are not a permutation of the section
        """
        section = self._section(question_type)
        by_id = {q.question_id: q for q in section.questions}
        if sorted(question_ids) != sorted(by_id) or len(set(question_ids)) != len(question_ids):
            raise ValidationError(
                f"Reorder of {question_type} must list each question exactly once",
                path="question_ids",
            )
        entries = [by_id[qid] for qid in question_ids]
        return self._commit(self._rebuild(section, entries, self._overrides))

    def move(self, question_type: str, from_position: int, to_position: int) -> ComposedPaper:
        """Move one question (1-based positions) within its section."""
        section = self._section(question_type)
        count = section.question_count
        for position in (from_position, to_position):
            if not 1 <= position <= count:
                raise ValidationError(
                    f"Position {position} outside 1..{count} in {question_type}",
                    path="position",
                )
        entries = list(section.questions)
        entries.insert(to_position - 1, entries.pop(from_position - 1))
        return self._commit(self._rebuild(section, entries, self._overrides))

    def replace(self, question_type: str, old_id: str, question: Question) -> ComposedPaper:
        """
        Swap one question for another of the same type, keeping its slot.

        An override on the removed question is dropped.
        """
        section = self._section(question_type)
        if question.question_type != question_type:
            raise ValidationError(
                f"Replacement {question.id} is {question.question_type}, not {question_type}",
                path="question",
            )
        if old_id not in section.question_ids:
            raise ValidationError(f"{old_id} is not in {question_type}", path="question_id")
        if question.id in section.question_ids:
            raise ValidationError(f"{question.id} is already in {question_type}", path="question")

        entries = [
            SelectedQuestion(question.id, question_type, q.order, q.marks, question.chapter_id)
            if q.question_id == old_id else q
            for q in section.questions
        ]
        overrides = {k: v for k, v in self._overrides.items() if k != old_id}
        return self._commit(self._rebuild(section, entries, overrides), overrides)

    def set_attempt(self, question_type: str, attempt: int) -> ComposedPaper:
        section = self._section(question_type)
        return self._commit(replace(section, attempt=attempt))

    def override_marks(self, question_id: str, marks: int) -> ComposedPaper:
        """Override one question's marks (0 is a valid override)."""
        if marks < 0:
            raise ValidationError(
                f"Mark override for {question_id} cannot be negative: {marks}",
                path=f"mark_overrides.{question_id}",
            )
        section = self._section_of(question_id)
        overrides = {**self._overrides, question_id: marks}
        return self._commit(
            self._rebuild(section, list(section.questions), overrides), overrides
        )

    def clear_override(self, question_id: str) -> ComposedPaper:
        """Return a question to its section's default marks."""
        section = self._section_of(question_id)
        overrides = {k: v for k, v in self._overrides.items() if k != question_id}
        return self._commit(
            self._rebuild(section, list(section.questions), overrides), overrides
        )

    def undo(self) -> ComposedPaper:
        """Restore the previous snapshot."""
        if not self._history:
            raise ValidationError("Nothing to undo")
        self._paper, self._overrides = self._history.pop()
        return self._paper

    # ─────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────

    def _section(self, question_type: str) -> ComposedSection:
        section = self._paper.section(question_type)
        if section is None:
            raise ValidationError(f"Paper has no {question_type} section", path="question_type")
        return section

    def _section_of(self, question_id: str) -> ComposedSection:
        for section in self._paper.sections:
            if question_id in section.question_ids:
                return section
        raise ValidationError(f"{question_id} is not on the paper", path="question_id")

    @staticmethod
    def _rebuild(
        section: ComposedSection,
        entries: Sequence[SelectedQuestion],
        overrides: Mapping[str, int],
    ) -> ComposedSection:
        """Renumber entries and resolve marks from scratch."""
        questions = tuple(
            SelectedQuestion(
                question_id=entry.question_id,
                question_type=section.question_type,
                order=order,
                marks=resolve_marks(entry.question_id, section.default_marks, overrides),
                chapter_id=entry.chapter_id,
                overridden=entry.question_id in overrides,
            )
            for order, entry in enumerate(entries, 1)
        )
        return replace(section, questions=questions)

    def _commit(
        self,
        section: ComposedSection,
        overrides: Optional[Dict[str, int]] = None,
    ) -> ComposedPaper:
        paper = self._paper.with_section(section)
        self._history.append((self._paper, self._overrides))
        self._paper = paper
        if overrides is not None:
            self._overrides = overrides
        logger.debug(
            f"Edited {section.question_type}: {section.section_marks} marks, "
            f"paper total {paper.total_marks}"
        )
        return paper
