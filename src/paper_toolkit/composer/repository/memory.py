"""
Module: composer.repository.memory

Purpose:
    In-memory QuestionRepository over a fixed list of questions, with an
    optional JSONL loader. Used by the CLI and tests, and as the reference
    for the ordering and filtering contract.

Key Classes:
    - InMemoryQuestionRepository: List-backed repository
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from paper_toolkit.core.models import Question
from paper_toolkit.core.utils.serialization import load_questions_jsonl

from .base import QuestionQuery, QuestionRepository, SortOrder

logger = logging.getLogger(__name__)


def _id_sort_key(question_id: str) -> tuple[int, int, str]:
    """Numeric ids sort numerically, others lexically after them."""
    if question_id.isdigit():
        return (1, int(question_id), "")
    return (2, 0, question_id)


class InMemoryQuestionRepository(QuestionRepository):
    """
    Read-only repository over an in-memory question list.

    Attributes:
        queries: Every query run, in order (for diagnostics)

    Example:
        >>> repo = InMemoryQuestionRepository(questions)
        >>> repo.query(QuestionQuery("mcq", "bio", limit=5))
    """

    def __init__(self, questions: Iterable[Question]):
        self._questions: dict[str, Question] = {}
        for question in questions:
            if question.id in self._questions:
                logger.warning(f"Duplicate question id {question.id}; keeping the first")
                continue
            self._questions[question.id] = question
        self.queries: list[QuestionQuery] = []

    @classmethod
    def from_jsonl(cls, path: Path, *, strict: bool = False) -> InMemoryQuestionRepository:
        questions = load_questions_jsonl(path, strict=strict)
        logger.info(f"Loaded {len(questions)} questions from {path}")
        return cls(questions)

    def __len__(self) -> int:
        return len(self._questions)

    def query(self, query: QuestionQuery) -> Sequence[Question]:
        self.queries.append(query)
        chapters = set(query.chapter_ids) if query.chapter_ids is not None else None

        rows = [
            q for q in self._questions.values()
            if q.question_type == query.question_type
            and q.subject_id == query.subject_id
            and (chapters is None or q.chapter_id in chapters)
            and (query.source is None or q.source == query.source)
            and (query.difficulty is None or q.difficulty == query.difficulty)
        ]
        rows.sort(
            key=lambda q: _id_sort_key(q.id),
            reverse=query.order is SortOrder.ID_DESC,
        )
        if query.limit is not None:
            rows = rows[: query.limit]
        return rows

    def get_many(self, question_ids: Sequence[str]) -> Sequence[Question]:
        return [self._questions[qid] for qid in question_ids if qid in self._questions]
