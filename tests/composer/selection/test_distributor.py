"""
Unit tests for chapter-balanced distribution.
"""

import random
from collections import Counter

from paper_toolkit.composer.selection import distribute_by_chapter, shuffled, type_rng


def _chapters(questions):
    return Counter(q.chapter_id for q in questions)


class TestDistributeByChapter:

    def test_distribute_when_three_chapters_four_each_then_three_each(self, bank_factory):
        # Arrange
        pool = bank_factory({("short", "c1"): 4, ("short", "c2"): 4, ("short", "c3"): 4})

        # Act
        picked = distribute_by_chapter(pool, 9, ["c1", "c2", "c3"])

        # Assert
        assert len(picked) == 9
        assert _chapters(picked) == Counter({"c1": 3, "c2": 3, "c3": 3})

    def test_distribute_when_shuffled_pool_then_still_balanced(self, bank_factory):
        pool = bank_factory({("short", "c1"): 12, ("short", "c2"): 5, ("short", "c3"): 4})
        pool = shuffled(pool, random.Random(3))

        picked = distribute_by_chapter(pool, 9, ["c1", "c2", "c3"])

        assert _chapters(picked) == Counter({"c1": 3, "c2": 3, "c3": 3})

    def test_distribute_when_chapter_runs_dry_then_others_fill(self, bank_factory):
        pool = bank_factory({("short", "c1"): 1, ("short", "c2"): 6})

        picked = distribute_by_chapter(pool, 5, ["c1", "c2"])

        assert _chapters(picked) == Counter({"c1": 1, "c2": 4})

    def test_distribute_when_round_robin_then_order_alternates(self, bank_factory):
        pool = bank_factory({("short", "c1"): 2, ("short", "c2"): 2})

        picked = distribute_by_chapter(pool, 4, ["c2", "c1"])

        assert [q.chapter_id for q in picked] == ["c2", "c1", "c2", "c1"]

    def test_distribute_when_out_of_scope_rows_then_used_as_backfill(self, bank_factory):
        """Rows from chapters outside the scope only fill the remainder."""
        pool = bank_factory({("short", "x9"): 5, ("short", "c1"): 2})

        picked = distribute_by_chapter(pool, 4, ["c1"])

        assert [q.chapter_id for q in picked[:2]] == ["c1", "c1"]
        assert _chapters(picked) == Counter({"c1": 2, "x9": 2})

    def test_distribute_when_pool_smaller_than_desired_then_whole_pool(self, bank_factory):
        pool = bank_factory({("short", "c1"): 2, ("short", "c2"): 1})

        picked = distribute_by_chapter(pool, 10, ["c1", "c2"])

        assert sorted(q.id for q in picked) == sorted(q.id for q in pool)

    def test_distribute_when_no_order_then_first_seen_chapters(self, bank_factory):
        pool = bank_factory({("short", "c2"): 2, ("short", "c1"): 2})

        picked = distribute_by_chapter(pool, 2)

        assert [q.chapter_id for q in picked] == ["c2", "c1"]

    def test_distribute_when_desired_zero_then_empty(self, bank_factory):
        pool = bank_factory({("short", "c1"): 2})

        assert distribute_by_chapter(pool, 0, ["c1"]) == []


class TestRandomStreams:

    def test_type_rng_when_same_seed_and_type_then_same_stream(self):
        assert type_rng(7, "short").random() == type_rng(7, "short").random()

    def test_type_rng_when_types_differ_then_streams_differ(self):
        assert type_rng(7, "short").random() != type_rng(7, "long").random()

    def test_shuffled_when_called_then_input_untouched(self):
        items = list(range(20))

        result = shuffled(items, random.Random(1))

        assert items == list(range(20))
        assert sorted(result) == items
