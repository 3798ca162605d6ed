"""
Module: composer.document

Purpose:
    Render model for a composed paper: a flat, ordered list of blocks a
    renderer walks top to bottom. Bilingual text is normalized here, per
    question. Typesetting and export are left to the renderer.

Key Functions:
    - build_document(): ComposedPaper + questions -> PaperDocument
    - document_to_dict(): JSON-ready form for renderers

Key Classes:
    - SectionHeader, QuestionBlock, PageBreak, CutLine: Blocks
    - PaperDocument: Ordered blocks for every replica on the sheet

Replication:
    A layout with duplicate_count > 1 prints identical copies of ONE
    paper on a sheet. The objective part is printed once per replica,
    copies separated by CutLines; then, after the page break, the
    subjective part is printed the same way. Numbering restarts per
    section.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from paper_toolkit.common.subjects import section_title
from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import ComposedPaper, ComposedSection, Question
from paper_toolkit.core.utils.bilingual import BilingualText


@dataclass(frozen=True)
class SectionHeader:
    replica: int
    question_type: str
    title: str
    instruction: str
    question_count: int
    attempt: int
    section_marks: int

    kind = "section_header"


@dataclass(frozen=True)
class OptionBlock:
    label: str
    text: BilingualText


@dataclass(frozen=True)
class QuestionBlock:
    """
    One printed question.

    Attributes:
        replica: Copy of the paper this block belongs to (0-based)
        number: 1-based number inside the section
        question_id: Repository id
        question_type: Section type
        marks: Resolved marks
        text: Normalized bilingual stem
        options: Normalized mcq options (empty for other types)
    """

    replica: int
    number: int
    question_id: str
    question_type: str
    marks: int
    text: BilingualText
    options: tuple[OptionBlock, ...] = ()

    kind = "question"


@dataclass(frozen=True)
class PageBreak:
    """Starts the subjective part on a new page (shared by every replica)."""

    kind = "page_break"


@dataclass(frozen=True)
class CutLine:
    """Separator printed between two replicas on one sheet."""

    after_replica: int

    kind = "cut_line"


Block = Union[SectionHeader, QuestionBlock, PageBreak, CutLine]


@dataclass(frozen=True)
class PaperDocument:
    """
    Ordered blocks for the whole sheet (immutable).

    Attributes:
        blocks: Blocks in print order, every replica included
        layout: Layout profile name
        duplicate_count: Replicas on the sheet
        total_marks: Marks of one replica
        mcq_minutes: Objective part time (None when time is shared)
        subjective_minutes: Subjective part / whole paper time
    """

    blocks: tuple[Block, ...]
    layout: str
    duplicate_count: int
    total_marks: int
    mcq_minutes: Optional[int] = None
    subjective_minutes: int = 60

    @property
    def question_blocks(self) -> tuple[QuestionBlock, ...]:
        return tuple(b for b in self.blocks if isinstance(b, QuestionBlock))

    def replica(self, index: int) -> tuple[Block, ...]:
        """Blocks of one replica, separators excluded."""
        return tuple(
            b for b in self.blocks
            if isinstance(b, (SectionHeader, QuestionBlock)) and b.replica == index
        )


def build_document(
    paper: ComposedPaper,
    questions: Union[Mapping[str, Question], Iterable[Question]],
) -> PaperDocument:
    """
    Build the render model for a paper.

    Args:
        paper: Composed paper
        questions: The paper's questions, by id or as an iterable

    Returns:
        PaperDocument with duplicate_count replicas

    Raises:
        ValidationError: If a paper question is missing from ``questions``

    Example:
        >>> doc = build_document(paper, repository.get_many(ids))
        >>> sum(isinstance(b, CutLine) for b in doc.blocks)
        2  # paired_sheet: one cut in each part
    """
    if not isinstance(questions, Mapping):
        questions = {q.id: q for q in questions}

    missing = [
        qid for section in paper.sections for qid in section.question_ids
        if qid not in questions
    ]
    if missing:
        raise ValidationError(
            f"Questions missing for document: {missing}", path="questions"
        )

    layout = paper.layout
    has_mcq = paper.mcq_section is not None and paper.mcq_section.question_count > 0
    break_before_subjective = layout.page_break_before_subjective and has_mcq

    objective = [s for s in paper.sections if s.is_mcq]
    subjective = [s for s in paper.sections if not s.is_mcq]

    blocks: list[Block] = []
    blocks.extend(_replicated(objective, questions, paper.duplicate_count))
    if break_before_subjective and subjective:
        blocks.append(PageBreak())
    blocks.extend(_replicated(subjective, questions, paper.duplicate_count))

    return PaperDocument(
        blocks=tuple(blocks),
        layout=layout.name,
        duplicate_count=paper.duplicate_count,
        total_marks=paper.total_marks,
        mcq_minutes=layout.mcq_minutes,
        subjective_minutes=layout.subjective_minutes,
    )


def _replicated(
    sections: list[ComposedSection],
    questions: Mapping[str, Question],
    copies: int,
) -> list[Block]:
    """One part of the paper, once per replica with CutLines in between."""
    blocks: list[Block] = []
    if not sections:
        return blocks
    for replica in range(copies):
        if replica:
            blocks.append(CutLine(after_replica=replica - 1))
        for section in sections:
            blocks.extend(_section_blocks(section, questions, replica))
    return blocks


def _section_blocks(
    section: ComposedSection,
    questions: Mapping[str, Question],
    replica: int,
) -> list[Block]:
    blocks: list[Block] = [SectionHeader(
        replica=replica,
        question_type=section.question_type,
        title=section_title(section.question_type),
        instruction=_instruction(section),
        question_count=section.question_count,
        attempt=section.attempt,
        section_marks=section.section_marks,
    )]

    for selected in section.questions:
        question = questions[selected.question_id]
        blocks.append(QuestionBlock(
            replica=replica,
            number=selected.order,
            question_id=selected.question_id,
            question_type=section.question_type,
            marks=selected.marks,
            text=question.bilingual,
            options=tuple(
                OptionBlock(option.label, option.bilingual) for option in question.options
            ),
        ))
    return blocks


def _instruction(section: ComposedSection) -> str:
    if section.attempt < section.question_count:
        return f"Attempt any {section.attempt} question(s)."
    return "Attempt all questions."


def document_to_dict(document: PaperDocument) -> dict[str, Any]:
    """Serialize a document for a renderer."""

    def text(value: BilingualText) -> dict[str, str]:
        return {"primary": value.primary, "secondary": value.secondary}

    def block(b: Block) -> dict[str, Any]:
        if isinstance(b, SectionHeader):
            return {
                "kind": b.kind,
                "replica": b.replica,
                "question_type": b.question_type,
                "title": b.title,
                "instruction": b.instruction,
                "question_count": b.question_count,
                "attempt": b.attempt,
                "section_marks": b.section_marks,
            }
        if isinstance(b, QuestionBlock):
            return {
                "kind": b.kind,
                "replica": b.replica,
                "number": b.number,
                "question_id": b.question_id,
                "question_type": b.question_type,
                "marks": b.marks,
                "text": text(b.text),
                "options": [{"label": o.label, "text": text(o.text)} for o in b.options],
            }
        if isinstance(b, PageBreak):
            return {"kind": b.kind}
        return {"kind": b.kind, "after_replica": b.after_replica}

    return {
        "layout": document.layout,
        "duplicate_count": document.duplicate_count,
        "total_marks": document.total_marks,
        "mcq_minutes": document.mcq_minutes,
        "subjective_minutes": document.subjective_minutes,
        "blocks": [block(b) for b in document.blocks],
    }
