"""
Module: questions

Purpose:
    Provides the Question dataclass - the immutable repository record the
    composer selects from - together with the difficulty and source
    enumerations used to filter it.

Key Classes:
    - Difficulty: easy / medium / hard / any
    - SourceCategory: book / past_paper / model_paper / custom
    - McqOption: One lettered option of a multiple choice question
    - Question: Repository record (owned by the repository, never copied)

Dependencies:
    - dataclasses (std)
    - enum (std)
    - core.utils.bilingual: Primary/secondary text split

Used By:
    - composer.repository: Query results
    - composer.selection: Fallback selection and chapter balancing
    - composer.document: Render-time bilingual text
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Optional

from ..errors import ValidationError
from ..utils.bilingual import BilingualText, normalize_bilingual


MCQ = "mcq"
OPTION_LABELS = ("a", "b", "c", "d")


class Difficulty(str, Enum):
    """Question difficulty. ``ANY`` as a filter means "no filter"."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    ANY = "any"

    @classmethod
    def parse_filter(cls, value: Optional[str]) -> Optional[Difficulty]:
        """
        Parse a difficulty filter, mapping "any" and empty values to None.

        Raises:
            ValidationError: If value is not a known difficulty
        """
        if value is None or value == "":
            return None
        try:
            parsed = cls(str(value).lower())
        except ValueError:
            raise ValidationError(
                f"Unknown difficulty: {value!r}", path="difficulty"
            ) from None
        return None if parsed is cls.ANY else parsed


class SourceCategory(str, Enum):
    """Where a question originally came from."""

    BOOK = "book"
    PAST_PAPER = "past_paper"
    MODEL_PAPER = "model_paper"
    CUSTOM = "custom"

    @classmethod
    def parse_filter(cls, value: Optional[str]) -> Optional[SourceCategory]:
        """
        Parse a source filter, accepting the short form-field aliases.

        "all" and empty values mean no filter.

        Raises:
            ValidationError: If value is not a known source
        """
        if value is None or value == "":
            return None
        key = str(value).lower()
        if key == "all":
            return None
        key = _SOURCE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValidationError(
                f"Unknown source filter: {value!r}", path="source"
            ) from None


_SOURCE_ALIASES = {
    "model": "model_paper",
    "past": "past_paper",
}


@dataclass(frozen=True)
class McqOption:
    """
    One option of a multiple choice question.

    Attributes:
        label: Option letter, one of a-d
        text: Primary-language option text
        text_secondary: Optional secondary-language option text
    """

    label: str
    text: str
    text_secondary: Optional[str] = None

    def __post_init__(self) -> None:
        if self.label not in OPTION_LABELS:
            raise ValidationError(f"Invalid option label: {self.label!r}", path="options")

    @property
    def bilingual(self) -> BilingualText:
        return normalize_bilingual(self.text, self.text_secondary)


@dataclass(frozen=True)
class Question:
    """
    Complete question record (immutable).

    Questions are owned by the repository; the composer only references
    them until selection is finalized, at which point a lightweight
    SelectedQuestion view is created.

    Attributes:
        id: Repository identifier
        question_type: "mcq", "short", "long" or a subject-specific variant
        subject_id: Subject the question belongs to
        chapter_id: Chapter the question belongs to
        text: Primary-language stem (may hold both languages concatenated)
        text_secondary: Optional secondary-language stem
        difficulty: Difficulty rating
        source: Source category
        options: Up to four options (mcq only)
        correct_option: Correct option label (mcq only)
        answer: Model answer text (non-mcq only)

    Invariants:
        - id and question_type are non-empty
        - at most four options, with unique labels
        - correct_option, if set, names one of the options

    Example:
        >>> q = Question(id="42", question_type="short", subject_id="bio",
        ...              chapter_id="ch1", text="Define osmosis.")
        >>> q.is_mcq
        False
    """

    id: str
    question_type: str
    subject_id: str
    chapter_id: str
    text: str
    text_secondary: Optional[str] = None
    difficulty: Difficulty = Difficulty.ANY
    source: SourceCategory = SourceCategory.BOOK
    options: tuple[McqOption, ...] = ()
    correct_option: Optional[str] = None
    answer: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not self.id:
            raise ValidationError("Question id must be non-empty", path="id")
        if not self.question_type:
            raise ValidationError(
                f"Question {self.id} has no type", path="question_type"
            )
        if len(self.options) > len(OPTION_LABELS):
            raise ValidationError(
                f"Question {self.id} has {len(self.options)} options (max 4)",
                path="options",
            )
        labels = [o.label for o in self.options]
        if len(set(labels)) != len(labels):
            raise ValidationError(
                f"Question {self.id} has duplicate option labels", path="options"
            )
        if self.correct_option is not None and self.correct_option not in labels:
            raise ValidationError(
                f"Question {self.id} correct option {self.correct_option!r} "
                f"is not one of {labels}",
                path="correct_option",
            )

    @property
    def is_mcq(self) -> bool:
        return self.question_type == MCQ

    @cached_property
    def bilingual(self) -> BilingualText:
        """Normalized primary/secondary stem, derived on every fetch."""
        return normalize_bilingual(self.text, self.text_secondary)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (question.schema.json)."""
        data: dict[str, Any] = {
            "id": self.id,
            "question_type": self.question_type,
            "subject_id": self.subject_id,
            "chapter_id": self.chapter_id,
            "text": self.text,
            "difficulty": self.difficulty.value,
            "source": self.source.value,
        }
        if self.text_secondary:
            data["text_secondary"] = self.text_secondary
        if self.options:
            data["options"] = [
                {"label": o.label, "text": o.text, "text_secondary": o.text_secondary}
                for o in self.options
            ]
        if self.correct_option is not None:
            data["correct_option"] = self.correct_option
        if self.answer is not None:
            data["answer"] = self.answer
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        """Deserialize from a dict produced by to_dict()."""
        options = tuple(
            McqOption(
                label=str(o["label"]).lower(),
                text=o.get("text", ""),
                text_secondary=o.get("text_secondary"),
            )
            for o in data.get("options", [])
        )
        correct = data.get("correct_option")
        return cls(
            id=str(data["id"]),
            question_type=data["question_type"],
            subject_id=str(data["subject_id"]),
            chapter_id=str(data["chapter_id"]),
            text=data.get("text", ""),
            text_secondary=data.get("text_secondary"),
            difficulty=Difficulty(data.get("difficulty", "any")),
            source=SourceCategory(data.get("source", "book")),
            options=options,
            correct_option=str(correct).lower() if correct else None,
            answer=data.get("answer"),
        )
