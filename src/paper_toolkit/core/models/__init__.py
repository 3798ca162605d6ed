"""
Core Models Package

Immutable, validated data models that serve as the single source of truth.

All models in this package are frozen dataclasses. Derived values
(section marks, paper totals, bilingual text) are computed from the
stored fields and never stored themselves, so an edited paper is always
a new object whose totals reconcile with its question lists.
"""

from .questions import MCQ, Difficulty, SourceCategory, McqOption, Question
from .criteria import SelectionCriteria, ChapterScope
from .layout import LayoutProfile
from .composed import SelectedQuestion, ComposedSection, ComposedPaper
from .marks import resolve_marks, section_marks, paper_total

__all__ = [
    "MCQ",
    "Difficulty",
    "SourceCategory",
    "McqOption",
    "Question",
    "SelectionCriteria",
    "ChapterScope",
    "LayoutProfile",
    "SelectedQuestion",
    "ComposedSection",
    "ComposedPaper",
    "resolve_marks",
    "section_marks",
    "paper_total",
]
