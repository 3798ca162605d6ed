"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .subjects import (
    BONUS_SUBJECT_CATEGORIES,
    DEFAULT_MARKS,
    default_marks_for,
    question_types_for,
    receives_subjective_bonus,
    section_title,
    subject_category,
)
from .coverage import CoveragePolicy, resolve_chapter_scope

__all__ = [
    # subjects
    "BONUS_SUBJECT_CATEGORIES",
    "DEFAULT_MARKS",
    "default_marks_for",
    "question_types_for",
    "receives_subjective_bonus",
    "section_title",
    "subject_category",
    # coverage
    "CoveragePolicy",
    "resolve_chapter_scope",
]
