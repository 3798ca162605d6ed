"""
Unit tests for SelectionCriteria and ChapterScope.
"""

import pytest

from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import ChapterScope, Difficulty, SelectionCriteria, SourceCategory


class TestSelectionCriteria:

    def test_init_when_negative_total_then_raises(self):
        with pytest.raises(ValidationError, match="requested_total cannot be negative"):
            SelectionCriteria(requested_total=-1, requested_attempt=0)

    def test_init_when_attempt_exceeds_total_then_raises(self):
        with pytest.raises(ValidationError, match="exceeds"):
            SelectionCriteria(requested_total=3, requested_attempt=4)

    def test_init_when_zero_marks_then_raises(self):
        with pytest.raises(ValidationError, match="default_marks"):
            SelectionCriteria(requested_total=3, requested_attempt=3, default_marks=0)

    def test_create_when_attempt_missing_then_attempt_equals_total(self):
        c = SelectionCriteria.create(total=8)

        assert c.requested_attempt == 8

    def test_create_when_attempt_exceeds_total_then_clamped(self):
        c = SelectionCriteria.create(total=5, attempt=9)

        assert c.requested_attempt == 5

    def test_create_when_negative_attempt_then_raises(self):
        with pytest.raises(ValidationError):
            SelectionCriteria.create(total=5, attempt=-1)

    def test_create_when_string_filters_then_parsed(self):
        c = SelectionCriteria.create(total=5, difficulty="any", source="past")

        assert c.difficulty is None
        assert c.source is SourceCategory.PAST_PAPER

    def test_difficulty_filter_when_any_then_none(self):
        c = SelectionCriteria(5, 5, difficulty=Difficulty.ANY)

        assert c.difficulty_filter is None

    def test_with_total_when_lowered_then_attempt_clamped_after(self):
        # Arrange
        c = SelectionCriteria.create(total=10, attempt=6, marks=2)

        # Act
        lowered = c.with_total(4)

        # Assert
        assert lowered.requested_total == 4
        assert lowered.requested_attempt == 4
        assert c.requested_total == 10

    def test_with_total_when_raised_then_attempt_kept(self):
        c = SelectionCriteria.create(total=4, attempt=2)

        assert c.with_total(10).requested_attempt == 2

    def test_is_requested_when_zero_total_then_false(self):
        assert not SelectionCriteria.create(total=0).is_requested


class TestChapterScope:

    def test_init_when_empty_then_raises(self):
        with pytest.raises(ValidationError, match="empty"):
            ChapterScope(())

    def test_of_when_duplicates_then_deduplicated_in_order(self):
        scope = ChapterScope.of(["c2", "c1", "c2", 3])

        assert scope.chapter_ids == ("c2", "c1", "3")

    def test_is_multi_chapter_when_one_chapter_then_false(self):
        assert not ChapterScope.of(["c1"]).is_multi_chapter

    def test_contains_when_member_then_true(self):
        scope = ChapterScope.of(["c1", "c2"])

        assert "c2" in scope
        assert len(scope) == 2
        assert list(scope) == ["c1", "c2"]
