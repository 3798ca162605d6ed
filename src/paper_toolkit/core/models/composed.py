"""
Module: composed

Purpose:
    The composed paper document model: selected questions grouped into
    ordered sections, with marks always derived from the attempt prefix.

Key Classes:
    - SelectedQuestion: Lightweight view of a chosen question
    - ComposedSection: One question type's ordered questions
    - ComposedPaper: Ordered sections plus layout profile

Design:
    Every model is frozen. Edits (reordering, mark overrides) build new
    SelectedQuestion tuples and a new ComposedPaper; section_marks and
    total_marks are properties so they can never drift from the lists.

Used By:
    - composer.controller: Composition output
    - composer.session: Edit snapshots
    - composer.document: Render model
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import Optional

from ..errors import ValidationError
from .layout import LayoutProfile
from .marks import attempted_marks, paper_total
from .questions import MCQ


@dataclass(frozen=True)
class SelectedQuestion:
    """
    A question chosen for the paper (immutable).

    Attributes:
        question_id: Repository id
        question_type: Section type
        order: 1-based position inside its section
        marks: Resolved marks (override or section default)
        chapter_id: Chapter the question came from
        overridden: True if marks came from a per-question override
    """

    question_id: str
    question_type: str
    order: int
    marks: int
    chapter_id: Optional[str] = None
    overridden: bool = False

    def __post_init__(self) -> None:
        if self.order < 1:
            raise ValidationError(f"order must be 1-based: {self.order}", path="order")
        if self.marks < 0:
            raise ValidationError(
                f"Marks cannot be negative for {self.question_id}: {self.marks}",
                path="marks",
            )


@dataclass(frozen=True)
class ComposedSection:
    """
    One section of the paper (immutable).

    Attributes:
        question_type: Type shared by every question in the section
        questions: Questions in presentation order
        attempt: How many of them the student must answer
        default_marks: Marks used for questions without an override

    Invariants:
        - 0 <= attempt <= len(questions)
        - orders are 1..n in sequence
        - section_marks covers only the first ``attempt`` questions
    """

    question_type: str
    questions: tuple[SelectedQuestion, ...]
    attempt: int
    default_marks: int

    def __post_init__(self) -> None:
        """Validate section on construction."""
        if not 0 <= self.attempt <= len(self.questions):
            raise ValidationError(
                f"{self.question_type}: attempt {self.attempt} outside "
                f"0..{len(self.questions)}",
                path="attempt",
            )
        for index, question in enumerate(self.questions, 1):
            if question.order != index:
                raise ValidationError(
                    f"{self.question_type}: question {question.question_id} has "
                    f"order {question.order}, expected {index}",
                    path="questions",
                )
            if question.question_type != self.question_type:
                raise ValidationError(
                    f"Question {question.question_id} is {question.question_type}, "
                    f"not {self.question_type}",
                    path="questions",
                )

    @cached_property
    def section_marks(self) -> int:
        """Marks over the attempt prefix (NEVER stored)."""
        return attempted_marks(self.questions, self.attempt)

    @property
    def attempted(self) -> tuple[SelectedQuestion, ...]:
        return self.questions[: self.attempt]

    @property
    def optional(self) -> tuple[SelectedQuestion, ...]:
        """Extra questions beyond the attempt prefix (worth zero)."""
        return self.questions[self.attempt:]

    @property
    def question_ids(self) -> tuple[str, ...]:
        return tuple(q.question_id for q in self.questions)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def is_mcq(self) -> bool:
        return self.question_type == MCQ


@dataclass(frozen=True)
class ComposedPaper:
    """
    Final composed paper (immutable).

    Attributes:
        sections: Sections in print order (mcq first)
        layout: Layout profile the paper was composed for
        subject_id: Subject of the paper
        seed: Shuffle seed used, so the same paper can be regenerated

    Example:
        >>> paper.total_marks  # Always calculated
        32
        >>> paper.duplicate_count
        1
    """

    sections: tuple[ComposedSection, ...]
    layout: LayoutProfile
    subject_id: str = ""
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        types = [s.question_type for s in self.sections]
        if len(set(types)) != len(types):
            raise ValidationError("Paper has duplicate sections", path="sections")

    @cached_property
    def total_marks(self) -> int:
        """Sum of section marks (NEVER stored)."""
        return paper_total(self.sections)

    @property
    def duplicate_count(self) -> int:
        """Identical copies per printed sheet, copied from the layout."""
        return self.layout.duplicate_count

    @property
    def question_count(self) -> int:
        return sum(s.question_count for s in self.sections)

    @property
    def mcq_section(self) -> Optional[ComposedSection]:
        return self.section(MCQ)

    @property
    def subjective_sections(self) -> tuple[ComposedSection, ...]:
        return tuple(s for s in self.sections if not s.is_mcq)

    @property
    def mcq_marks(self) -> int:
        section = self.mcq_section
        return section.section_marks if section else 0

    @property
    def subjective_marks(self) -> int:
        return paper_total(self.subjective_sections)

    def section(self, question_type: str) -> Optional[ComposedSection]:
        for section in self.sections:
            if section.question_type == question_type:
                return section
        return None

    def with_section(self, section: ComposedSection) -> ComposedPaper:
        """New paper with one section replaced (matched by type)."""
        if self.section(section.question_type) is None:
            raise ValidationError(
                f"Paper has no {section.question_type} section", path="sections"
            )
        sections = tuple(
            section if s.question_type == section.question_type else s
            for s in self.sections
        )
        return replace(self, sections=sections)
