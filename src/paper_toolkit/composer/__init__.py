"""
Module: composer

Purpose:
    The paper composition engine.
    Request -> Budget -> Select -> Truncate -> Marks -> ComposedPaper

Key Functions:
    - compose_paper(): Main entry point
    - build_document(): Render model for a composed paper
    - build_answer_key(): MCQ answer key

Key Classes:
    - CompositionRequest: Validated caller input
    - ComposeConfig: Pipeline tuning
    - ComposeResult: Paper plus adjustments, truncations and warnings
    - EditSession: Immutable snapshots for manual edits
"""

from .config import ComposeConfig
from .request import CompositionRequest, SelectionMode
from .results import ComposeResult, EmptyPaperError, TypeReport, UnsatisfiableTypeWarning
from .controller import compose_paper
from .document import (
    CutLine,
    PageBreak,
    PaperDocument,
    QuestionBlock,
    SectionHeader,
    build_document,
    document_to_dict,
)
from .session import EditSession
from .answer_key import AnswerKeyEntry, answer_key_to_dict, build_answer_key
from .repository import InMemoryQuestionRepository, QuestionRepository, RepositoryError

__all__ = [
    # Config / request
    "ComposeConfig",
    "CompositionRequest",
    "SelectionMode",
    # Results
    "ComposeResult",
    "EmptyPaperError",
    "TypeReport",
    "UnsatisfiableTypeWarning",
    # Entry points
    "compose_paper",
    "build_document",
    "document_to_dict",
    "build_answer_key",
    "answer_key_to_dict",
    # Document blocks
    "CutLine",
    "PageBreak",
    "PaperDocument",
    "QuestionBlock",
    "SectionHeader",
    "AnswerKeyEntry",
    # Editing
    "EditSession",
    # Repository
    "InMemoryQuestionRepository",
    "QuestionRepository",
    "RepositoryError",
]
