"""
Module: common.subjects

Purpose:
    Subject catalogue: which question types a subject offers, the default
    marks per type, and which subject categories receive the subjective
    layout bonus.

Key Functions:
    - subject_category(): Normalize a subject name to its category key
    - question_types_for(): Ordered question types offered by a subject
    - default_marks_for(): Default marks per question of a type
    - receives_subjective_bonus(): Bonus category membership

Used By:
    - composer.layout.profiles: Bonus categories
    - composer.request: Default marks and section order
    - composer.document: Section titles
"""

from __future__ import annotations

from typing import Optional


# Default marks per question, by type
DEFAULT_MARKS: dict[str, int] = {
    "mcq": 1,
    "short": 2,
    "long": 5,
    "translate_urdu": 4,
    "translate_english": 5,
    "idiom_phrases": 1,
    "poetry_explanation": 2,
    "prose_explanation": 5,
    "passage": 10,
    "sentence_correction": 1,
    "sentence_completion": 1,
    "activePassive": 1,
    "directInDirect": 1,
}

# Unknown types are marked like short questions
FALLBACK_MARKS_TYPE = "short"

DEFAULT_QUESTION_TYPES: tuple[str, ...] = ("mcq", "short", "long")

SUBJECT_QUESTION_TYPES: dict[str, tuple[str, ...]] = {
    "english": (
        "mcq",
        "short",
        "translate_urdu",
        "long",
        "idiom_phrases",
        "translate_english",
        "passage",
        "directInDirect",
        "activePassive",
    ),
    "urdu": (
        "mcq",
        "poetry_explanation",
        "prose_explanation",
        "short",
        "long",
        "sentence_correction",
        "sentence_completion",
    ),
}

# Language and religious-studies subjects get a larger subjective budget
BONUS_SUBJECT_CATEGORIES: frozenset[str] = frozenset({
    "urdu",
    "english",
    "islamiyat",
    "islamiat",
    "tarjuma tul quran",
    "pakistan study",
})


def subject_category(subject_name: Optional[str]) -> Optional[str]:
    """
    Normalize a subject name to its category key.

    Example:
        >>> subject_category("  Pakistan   Study ")
        'pakistan study'
    """
    if subject_name is None:
        return None
    key = " ".join(subject_name.lower().split())
    return key or None


def question_types_for(subject_name: Optional[str]) -> tuple[str, ...]:
    """Ordered question types offered by a subject."""
    category = subject_category(subject_name) or ""
    for language, types in SUBJECT_QUESTION_TYPES.items():
        if language in category:
            return types
    return DEFAULT_QUESTION_TYPES


def default_marks_for(question_type: str) -> int:
    return DEFAULT_MARKS.get(question_type, DEFAULT_MARKS[FALLBACK_MARKS_TYPE])


def receives_subjective_bonus(category: Optional[str]) -> bool:
    return category is not None and category in BONUS_SUBJECT_CATEGORIES


SECTION_TITLES: dict[str, str] = {
    "mcq": "Multiple Choice Questions",
    "short": "Short Questions",
    "long": "Long Questions",
    "translate_urdu": "Translate into Urdu",
    "translate_english": "Translate into English",
    "idiom_phrases": "Idioms and Phrases",
    "activePassive": "Active and Passive Voice",
    "directInDirect": "Direct and Indirect Narration",
}


def section_title(question_type: str) -> str:
    """
    Heading printed above a section.

    Example:
        >>> section_title("poetry_explanation")
        'Poetry Explanation'
    """
    title = SECTION_TITLES.get(question_type)
    if title is None:
        title = question_type.replace("_", " ").title()
    return title
