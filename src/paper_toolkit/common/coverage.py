"""
Module: common.coverage

Purpose:
    Resolve a chapter coverage policy into a ChapterScope.

Policies:
    - full_book: every available chapter
    - half_book: the first ceil(n / 2) chapters
    - single_chapter: exactly one selected chapter
    - custom: the selected chapters, in selection order

Used By:
    - composer.request: Requests that carry a coverage block
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Sequence

from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models.criteria import ChapterScope


class CoveragePolicy(str, Enum):
    FULL_BOOK = "full_book"
    HALF_BOOK = "half_book"
    SINGLE_CHAPTER = "single_chapter"
    CUSTOM = "custom"


def resolve_chapter_scope(
    policy: CoveragePolicy | str,
    available: Sequence[str],
    selected: Optional[Sequence[str]] = None,
) -> ChapterScope:
    """
    Resolve a coverage policy to a chapter scope.

    Args:
        policy: Coverage policy
        available: Chapters of the subject in book order
        selected: Chapters picked by the user (single/custom only)

    Returns:
        Non-empty ChapterScope

    Raises:
        ValidationError: If the policy yields no chapters, or a selected
            chapter is not available

    Example:
        >>> resolve_chapter_scope("half_book", ["c1", "c2", "c3"]).chapter_ids
        ('c1', 'c2')
    """
    try:
        policy = CoveragePolicy(policy)
    except ValueError:
        raise ValidationError(f"Unknown coverage policy: {policy!r}", path="coverage.policy") from None

    available = [str(c) for c in available]
    picked = [str(c) for c in (selected or [])]

    unknown = [c for c in picked if c not in available]
    if unknown:
        raise ValidationError(
            f"Selected chapters not available for this subject: {unknown}",
            path="coverage.selected",
        )

    if policy is CoveragePolicy.FULL_BOOK:
        chapters = available
    elif policy is CoveragePolicy.HALF_BOOK:
        chapters = available[: math.ceil(len(available) / 2)]
    elif policy is CoveragePolicy.SINGLE_CHAPTER:
        if len(picked) != 1:
            raise ValidationError(
                f"single_chapter needs exactly one chapter, got {len(picked)}",
                path="coverage.selected",
            )
        chapters = picked
    else:
        chapters = picked

    return ChapterScope.of(chapters, policy=policy.value)
