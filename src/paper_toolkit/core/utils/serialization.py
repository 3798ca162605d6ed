"""
Serialization Utilities

Provides to/from JSON utilities for the core models.

- Question banks are stored as JSONL (one question record per line)
- Composed papers serialize with derived totals included for renderers,
  but those totals are never read back; marks are always recalculated
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ValidationError
from ..models.composed import ComposedPaper, ComposedSection
from ..models.questions import Question
from ..schemas.validator import validate_question


# ─────────────────────────────────────────────────────────────────────────────
# Question Serialization
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_question(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Question:
    """
    Deserialize a Question from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against schema first
        strict: Use full jsonschema validation

    Raises:
        ValidationError: If data is invalid
    """
    if validate:
        validate_question(data, strict=strict)
    try:
        return Question.from_dict(data)
    except (KeyError, ValueError) as e:
        raise ValidationError(
            f"Cannot parse question {data.get('id')!r}: {e}", errors=[str(e)]
        ) from e


def load_questions_jsonl(
    path: Path,
    *,
    validate: bool = True,
    strict: bool = False,
) -> list[Question]:
    """
    Load questions from a JSONL file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If any question is invalid (with its line number)
    """
    if not path.exists():
        raise FileNotFoundError(f"Questions file not found: {path}")

    questions = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
                questions.append(deserialize_question(data, validate=validate, strict=strict))
            except (json.JSONDecodeError, ValidationError) as e:
                raise ValidationError(
                    f"Error parsing line {line_no}: {e}",
                    path=str(path),
                    errors=[str(e)],
                ) from e
    return questions


def save_questions_jsonl(questions: list[Question], path: Path) -> None:
    """Save questions to a JSONL file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for question in questions:
            f.write(json.dumps(question.to_dict(), ensure_ascii=False))
            f.write("\n")


# ─────────────────────────────────────────────────────────────────────────────
# Paper Serialization
# ─────────────────────────────────────────────────────────────────────────────

def section_to_dict(section: ComposedSection) -> dict[str, Any]:
    return {
        "question_type": section.question_type,
        "attempt": section.attempt,
        "default_marks": section.default_marks,
        "section_marks": section.section_marks,
        "questions": [
            {
                "question_id": q.question_id,
                "order": q.order,
                "marks": q.marks,
                "chapter_id": q.chapter_id,
                "overridden": q.overridden,
            }
            for q in section.questions
        ],
    }


def paper_to_dict(paper: ComposedPaper) -> dict[str, Any]:
    """
    Serialize a ComposedPaper for a rendering backend.

    Note:
        section_marks and total_marks are included for display only.
    """
    return {
        "subject_id": paper.subject_id,
        "seed": paper.seed,
        "layout": paper.layout.to_dict(),
        "duplicate_count": paper.duplicate_count,
        "total_marks": paper.total_marks,
        "sections": [section_to_dict(s) for s in paper.sections],
    }
