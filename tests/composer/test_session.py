"""
Tests for edit sessions over composed papers.
"""

import pytest

from paper_toolkit.composer import EditSession
from paper_toolkit.composer.layout import COMBINED
from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import ComposedPaper, ComposedSection, SelectedQuestion


@pytest.fixture
def paper():
    short = ComposedSection(
        "short",
        tuple(SelectedQuestion(f"s{i}", "short", i, 2) for i in range(1, 6)),
        attempt=3,
        default_marks=2,
    )
    long_ = ComposedSection(
        "long",
        (
            SelectedQuestion("l1", "long", 1, 5),
            SelectedQuestion("l2", "long", 2, 8, overridden=True),
        ),
        attempt=2,
        default_marks=5,
    )
    return ComposedPaper((short, long_), COMBINED)


class TestEditSession:

    def test_init_when_paper_has_overridden_marks_then_overrides_recovered(self, paper):
        session = EditSession(paper)

        assert session.overrides == {"l2": 8}

    def test_override_when_inside_attempt_then_total_changes(self, paper):
        # Arrange
        session = EditSession(paper)

        # Act
        edited = session.override_marks("s1", 6)

        # Assert
        assert edited.section("short").section_marks == 6 + 2 + 2
        assert edited.total_marks == 10 + 13
        assert paper.total_marks == 6 + 13
        assert session.paper is edited

    def test_override_when_beyond_attempt_then_total_unchanged(self, paper):
        session = EditSession(paper)

        edited = session.override_marks("s5", 40)

        assert edited.total_marks == paper.total_marks
        assert edited.section("short").questions[4].marks == 40

    def test_override_when_zero_then_honoured(self, paper):
        edited = EditSession(paper).override_marks("s2", 0)

        assert edited.section("short").section_marks == 4

    def test_override_when_negative_then_raises(self, paper):
        with pytest.raises(ValidationError, match="cannot be negative"):
            EditSession(paper).override_marks("s1", -1)

    def test_move_when_overridden_question_enters_prefix_then_recalculated(self, paper):
        # Arrange
        session = EditSession(paper)
        session.override_marks("s5", 10)

        # Act
        edited = session.move("short", 5, 1)

        # Assert
        short = edited.section("short")
        assert short.question_ids == ("s5", "s1", "s2", "s3", "s4")
        assert [q.order for q in short.questions] == [1, 2, 3, 4, 5]
        assert short.section_marks == 10 + 2 + 2

    def test_move_when_position_out_of_range_then_raises(self, paper):
        with pytest.raises(ValidationError, match="outside"):
            EditSession(paper).move("short", 6, 1)

    def test_reorder_when_permutation_then_applied(self, paper):
        edited = EditSession(paper).reorder("long", ["l2", "l1"])

        assert edited.section("long").question_ids == ("l2", "l1")
        assert edited.section("long").questions[0].marks == 8

    def test_reorder_when_not_permutation_then_raises(self, paper):
        with pytest.raises(ValidationError, match="exactly once"):
            EditSession(paper).reorder("long", ["l1", "l1"])

    def test_replace_when_same_type_then_slot_kept_and_override_dropped(
        self, paper, question_factory
    ):
        # Act
        edited = EditSession(paper).replace("long", "l2", question_factory("l9", "long"))

        # Assert
        long_ = edited.section("long")
        assert long_.question_ids == ("l1", "l9")
        assert long_.questions[1].marks == 5
        assert not long_.questions[1].overridden

    def test_replace_when_wrong_type_then_raises(self, paper, question_factory):
        with pytest.raises(ValidationError, match="not long"):
            EditSession(paper).replace("long", "l2", question_factory("m1", "mcq"))

    def test_replace_when_already_present_then_raises(self, paper, question_factory):
        with pytest.raises(ValidationError, match="already"):
            EditSession(paper).replace("long", "l2", question_factory("l1", "long"))

    def test_clear_override_when_overridden_then_default_restored(self, paper):
        session = EditSession(paper)

        edited = session.clear_override("l2")

        assert edited.section("long").section_marks == 10
        assert session.overrides == {}

    def test_set_attempt_when_changed_then_marks_follow(self, paper):
        edited = EditSession(paper).set_attempt("short", 5)

        assert edited.section("short").section_marks == 10

    def test_undo_when_edits_then_previous_snapshot(self, paper):
        # Arrange
        session = EditSession(paper)
        session.override_marks("s1", 9)
        session.move("short", 1, 5)

        # Act
        session.undo()
        restored = session.undo()

        # Assert
        assert restored is paper
        assert session.overrides == {"l2": 8}
        assert session.history == ()

    def test_undo_when_no_history_then_raises(self, paper):
        with pytest.raises(ValidationError, match="Nothing to undo"):
            EditSession(paper).undo()

    def test_edit_when_unknown_section_then_raises(self, paper):
        with pytest.raises(ValidationError, match="no mcq section"):
            EditSession(paper).move("mcq", 1, 2)
