"""
Module: composer.selection.distributor

Purpose:
    Chapter-balanced distribution for randomized selection across a
    multi-chapter scope, so a shuffled pool does not collapse onto one
    chapter.

Key Functions:
    - shuffled(): Deterministic shuffle of a candidate pool
    - type_rng(): Per-type random stream derived from the request seed
    - distribute_by_chapter(): Round-robin draw across chapter buckets
    - in_scope_first(): Stable reorder putting in-scope rows ahead

Algorithm:
    1. Bucket candidates by chapter, keeping pool order inside buckets
    2. Take the head of each bucket in chapter order, round after round,
       until the desired count is reached or buckets run dry
    3. Backfill from the rest of the pool (any chapter, e.g. rows from
       outside the scope found by the widest fallback level)

Guarantee:
    If every chapter has at least ceil(desired / chapters) candidates,
    every chapter in the scope is represented.

Used By:
    - composer.controller: Randomized selection per type
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence, TypeVar

from paper_toolkit.core.models import Question

T = TypeVar("T")


def type_rng(seed: int, question_type: str) -> random.Random:
    """Random stream for one type; types never share a stream."""
    return random.Random(f"{seed}:{question_type}")


def shuffled(pool: Sequence[T], rng: random.Random) -> List[T]:
    """Return a shuffled copy of pool."""
    items = list(pool)
    rng.shuffle(items)
    return items


def in_scope_first(pool: Sequence[Question], chapter_ids: Sequence[str]) -> List[Question]:
    """Rows from the scope chapters first, then the rest; order kept within each."""
    scope = set(chapter_ids)
    inside = [q for q in pool if q.chapter_id in scope]
    outside = [q for q in pool if q.chapter_id not in scope]
    return inside + outside


def distribute_by_chapter(
    pool: Sequence[Question],
    desired: int,
    chapter_order: Optional[Sequence[str]] = None,
) -> List[Question]:
    """
    Draw up to ``desired`` questions round-robin across chapters.

    Args:
        pool: Candidate questions (already shuffled in randomized mode)
        desired: Number of questions wanted
        chapter_order: Chapter scope order. Only these chapters get
            buckets; other chapters are backfill. None buckets every
            chapter in first-seen order.

    Returns:
        Selected questions in draw order

    Example:
        >>> picked = distribute_by_chapter(pool, 9, ["c1", "c2", "c3"])
        >>> Counter(q.chapter_id for q in picked)
        Counter({'c1': 3, 'c2': 3, 'c3': 3})
    """
    if desired <= 0:
        return []

    buckets: Dict[str, Deque[Question]] = {}
    if chapter_order is not None:
        for chapter in chapter_order:
            buckets.setdefault(chapter, deque())
    for question in pool:
        bucket = buckets.get(question.chapter_id)
        if bucket is None and chapter_order is None:
            bucket = buckets.setdefault(question.chapter_id, deque())
        if bucket is not None:
            bucket.append(question)

    result: List[Question] = []
    taken: set[str] = set()
    active = [chapter for chapter, bucket in buckets.items() if bucket]

    while active and len(result) < desired:
        for chapter in active:
            question = buckets[chapter].popleft()
            result.append(question)
            taken.add(question.id)
            if len(result) >= desired:
                break
        active = [chapter for chapter in active if buckets[chapter]]

    if len(result) < desired:
        for question in pool:
            if question.id in taken:
                continue
            result.append(question)
            taken.add(question.id)
            if len(result) >= desired:
                break

    return result
