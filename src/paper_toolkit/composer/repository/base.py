"""
Module: composer.repository.base

Purpose:
    Abstract interface to the question repository. The composer only
    reads through this interface; storage and query mechanics belong to
    the implementation.

Key Classes:
    - QuestionQuery: One repository query (filters, limit, ordering)
    - QuestionRepository: Abstract base class for question access
    - RepositoryError: Retriable failure surfaced by an implementation

Used By:
    - composer.selection.fallback: Relaxation cascade queries
    - composer.controller: Manual id verification
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from paper_toolkit.core.errors import ComposeError
from paper_toolkit.core.models import Difficulty, Question, SourceCategory


class RepositoryError(ComposeError):
    """
    Repository failure (timeout, connection loss).

    Implementations apply their own timeouts and raise this; the composer
    reports it on the result instead of composing a partial paper.
    """

    def __init__(self, message: str, *, retriable: bool = True):
        super().__init__(message)
        self.retriable = retriable


class SortOrder(str, Enum):
    ID_DESC = "id_desc"
    ID_ASC = "id_asc"


@dataclass(frozen=True)
class QuestionQuery:
    """
    Repository query (immutable).

    Attributes:
        question_type: Required type
        subject_id: Required subject
        chapter_ids: Chapters to restrict to (None = any chapter)
        source: Source filter (None = all sources)
        difficulty: Difficulty filter (None = any difficulty)
        limit: Maximum rows (None = unlimited)
        order: Result ordering (default id descending)
    """

    question_type: str
    subject_id: str
    chapter_ids: Optional[tuple[str, ...]] = None
    source: Optional[SourceCategory] = None
    difficulty: Optional[Difficulty] = None
    limit: Optional[int] = None
    order: SortOrder = SortOrder.ID_DESC

    def __post_init__(self) -> None:
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be non-negative: {self.limit}")

    def describe(self) -> str:
        """Short human-readable summary for logs."""
        chapters = "any" if self.chapter_ids is None else str(len(self.chapter_ids))
        source = self.source.value if self.source else "all"
        difficulty = self.difficulty.value if self.difficulty else "any"
        return (
            f"type={self.question_type} subject={self.subject_id} chapters={chapters} "
            f"source={source} difficulty={difficulty} limit={self.limit}"
        )


class QuestionRepository(ABC):
    """
    Abstract read-only access to the question bank.

    Implementations must return rows in the requested order and never
    more than ``limit`` rows.
    """

    @abstractmethod
    def query(self, query: QuestionQuery) -> Sequence[Question]:
        """
        Run a filtered query.

        Raises:
            RepositoryError: On storage failure
        """

    @abstractmethod
    def get_many(self, question_ids: Sequence[str]) -> Sequence[Question]:
        """
        Fetch questions by id (unknown ids are silently absent).

        Raises:
            RepositoryError: On storage failure
        """
