"""
Module: composer.answer_key

Purpose:
    MCQ answer key for a composed paper: question number -> correct
    option letter and its text, in the order the mcq section prints.

Key Functions:
    - build_answer_key(): Key entries for the paper's mcq section
    - answer_key_to_dict(): JSON-ready form
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import ComposedPaper, Question

logger = logging.getLogger(__name__)

UNKNOWN_OPTION = "?"


@dataclass(frozen=True)
class AnswerKeyEntry:
    number: int
    question_id: str
    option: str
    answer: str = ""

    @property
    def known(self) -> bool:
        return self.option != UNKNOWN_OPTION


def build_answer_key(
    paper: ComposedPaper,
    questions: Union[Mapping[str, Question], Iterable[Question]],
) -> list[AnswerKeyEntry]:
    """
    Build the answer key for the paper's mcq section.

    Questions without a recorded correct option get "?" so the key still
    lines up with the printed numbering.

    Returns:
        Entries in print order (empty when the paper has no mcq section)

    Raises:
        ValidationError: If an mcq on the paper is missing from ``questions``
    """
    if not isinstance(questions, Mapping):
        questions = {q.id: q for q in questions}

    section = paper.mcq_section
    if section is None:
        return []

    entries = []
    for selected in section.questions:
        question = questions.get(selected.question_id)
        if question is None:
            raise ValidationError(
                f"Question {selected.question_id} missing for answer key",
                path="questions",
            )
        option, answer = _correct(question)
        if option == UNKNOWN_OPTION:
            logger.warning(f"MCQ {question.id} has no correct option recorded")
        entries.append(AnswerKeyEntry(selected.order, question.id, option, answer))
    return entries


def _correct(question: Question) -> tuple[str, str]:
    label: Optional[str] = question.correct_option
    if not label:
        return UNKNOWN_OPTION, ""
    for option in question.options:
        if option.label == label:
            return label.upper(), option.text
    return label.upper(), ""


def answer_key_to_dict(entries: Iterable[AnswerKeyEntry]) -> list[dict[str, Any]]:
    return [
        {"number": e.number, "question_id": e.question_id, "option": e.option, "answer": e.answer}
        for e in entries
    ]
