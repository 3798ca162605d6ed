"""
Module: composer.layout.profiles

Purpose:
    Registry of the canonical layout profiles and the legacy names that
    resolve to them.

Key Functions:
    - get_layout_profile(): Look up a profile by canonical name or alias
    - available_layouts(): Canonical names

Profiles:
    - separate: mcq 15, subjective 30 (+5 bonus), mcq part on its own page
    - combined: mcq 5, subjective 15 (+5 bonus), one page
    - paired_sheet: mcq 5, subjective 10 (+5 bonus), two copies of each part
    - tripled_sheet: mcq 5, subjective 15 (never a bonus), three copies
    Multi-copy sheets also start the subjective part on a new page.
"""

from __future__ import annotations

from typing import Dict

from paper_toolkit.common.subjects import BONUS_SUBJECT_CATEGORIES
from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import LayoutProfile

SEPARATE = LayoutProfile(
    name="separate",
    mcq_max=15,
    subjective_max_base=30,
    bonus_categories=BONUS_SUBJECT_CATEGORIES,
    page_break_before_subjective=True,
    mcq_minutes=15,
    subjective_minutes=45,
)

COMBINED = LayoutProfile(
    name="combined",
    mcq_max=5,
    subjective_max_base=15,
    bonus_categories=BONUS_SUBJECT_CATEGORIES,
)

PAIRED_SHEET = LayoutProfile(
    name="paired_sheet",
    mcq_max=5,
    subjective_max_base=10,
    bonus_categories=BONUS_SUBJECT_CATEGORIES,
    page_break_before_subjective=True,
    duplicate_count=2,
)

TRIPLED_SHEET = LayoutProfile(
    name="tripled_sheet",
    mcq_max=5,
    subjective_max_base=15,
    fixed_subjective_max=True,
    page_break_before_subjective=True,
    duplicate_count=3,
)

LAYOUT_PROFILES: Dict[str, LayoutProfile] = {
    profile.name: profile
    for profile in (SEPARATE, COMBINED, PAIRED_SHEET, TRIPLED_SHEET)
}

# Names used by older paper requests
LAYOUT_ALIASES: Dict[str, str] = {
    "same_page": "combined",
    "single_page": "combined",
    "two_papers": "paired_sheet",
    "three_papers": "tripled_sheet",
}


def available_layouts() -> list[str]:
    return list(LAYOUT_PROFILES)


def get_layout_profile(name: str) -> LayoutProfile:
    """
    Look up a layout profile.

    Args:
        name: Canonical name or alias (case-insensitive)

    Returns:
        The canonical LayoutProfile

    Raises:
        ValidationError: If the name is unknown

    Example:
        >>> get_layout_profile("two_papers").duplicate_count
        2
    """
    key = (name or "").strip().lower()
    key = LAYOUT_ALIASES.get(key, key)
    profile = LAYOUT_PROFILES.get(key)
    if profile is None:
        raise ValidationError(
            f"Unknown layout {name!r}; expected one of {available_layouts()}",
            path="layout",
        )
    return profile
