"""
Core Package

Shared data models and utilities for the composition engine.

1. **Immutable Data Models**
   Frozen dataclasses; new instances are created for any change.

2. **Calculated Marks (Never Stored)**
   Section and paper marks are always calculated from the attempt prefix.

3. **Fail-fast Validation**
   Structurally impossible input raises ValidationError on construction.
"""

from .errors import ComposeError, ValidationError
from .models import (
    Question,
    SelectionCriteria,
    ChapterScope,
    LayoutProfile,
    SelectedQuestion,
    ComposedSection,
    ComposedPaper,
)

__all__ = [
    "ComposeError",
    "ValidationError",
    "Question",
    "SelectionCriteria",
    "ChapterScope",
    "LayoutProfile",
    "SelectedQuestion",
    "ComposedSection",
    "ComposedPaper",
]
