"""
Unit tests for the Question model and its filter enums.
"""

import pytest

from paper_toolkit.core.errors import ValidationError
from paper_toolkit.core.models import Difficulty, McqOption, Question, SourceCategory


class TestDifficulty:

    @pytest.mark.parametrize("value", [None, "", "any", "ANY"])
    def test_parse_filter_when_any_or_empty_then_none(self, value):
        assert Difficulty.parse_filter(value) is None

    def test_parse_filter_when_known_then_enum(self):
        assert Difficulty.parse_filter("Hard") is Difficulty.HARD

    def test_parse_filter_when_unknown_then_raises(self):
        with pytest.raises(ValidationError, match="Unknown difficulty"):
            Difficulty.parse_filter("brutal")


class TestSourceCategory:

    @pytest.mark.parametrize("alias,expected", [
        ("model", SourceCategory.MODEL_PAPER),
        ("past", SourceCategory.PAST_PAPER),
        ("book", SourceCategory.BOOK),
        ("model_paper", SourceCategory.MODEL_PAPER),
    ])
    def test_parse_filter_when_alias_then_canonical(self, alias, expected):
        assert SourceCategory.parse_filter(alias) is expected

    def test_parse_filter_when_all_then_none(self):
        assert SourceCategory.parse_filter("all") is None

    def test_parse_filter_when_unknown_then_raises(self):
        with pytest.raises(ValidationError, match="Unknown source"):
            SourceCategory.parse_filter("internet")


class TestQuestion:

    def test_init_when_valid_mcq_then_creates_question(self, question_factory):
        q = question_factory("1", "mcq")

        assert q.is_mcq
        assert len(q.options) == 4
        assert q.correct_option == "b"

    def test_init_when_empty_id_then_raises(self):
        with pytest.raises(ValidationError, match="id must be non-empty"):
            Question(id="", question_type="short", subject_id="s", chapter_id="c", text="t")

    def test_init_when_five_options_then_raises(self):
        options = tuple(McqOption(label, "x") for label in "abcd") + (McqOption("a", "y"),)

        with pytest.raises(ValidationError, match="max 4"):
            Question("1", "mcq", "s", "c", "t", options=options)

    def test_init_when_duplicate_labels_then_raises(self):
        options = (McqOption("a", "x"), McqOption("a", "y"))

        with pytest.raises(ValidationError, match="duplicate option labels"):
            Question("1", "mcq", "s", "c", "t", options=options)

    def test_init_when_correct_option_missing_then_raises(self):
        options = (McqOption("a", "x"), McqOption("b", "y"))

        with pytest.raises(ValidationError, match="correct option"):
            Question("1", "mcq", "s", "c", "t", options=options, correct_option="d")

    def test_option_when_bad_label_then_raises(self):
        with pytest.raises(ValidationError, match="Invalid option label"):
            McqOption("e", "x")

    def test_init_when_frozen_then_immutable(self, question_factory):
        q = question_factory("1")

        with pytest.raises(AttributeError):
            q.text = "changed"  # type: ignore

    def test_bilingual_when_concatenated_text_then_split(self, question_factory):
        q = question_factory("1", text="Define osmosis. (اوسموسس کی تعریف کریں)")

        assert q.bilingual.primary == "Define osmosis."
        assert q.bilingual.secondary == "اوسموسس کی تعریف کریں"

    def test_to_dict_when_round_tripped_then_equal(self, question_factory):
        q = question_factory("7", "mcq", difficulty=Difficulty.HARD)

        assert Question.from_dict(q.to_dict()) == q

    def test_from_dict_when_integer_ids_and_upper_labels_then_normalized(self):
        data = {
            "id": 12,
            "question_type": "mcq",
            "subject_id": 3,
            "chapter_id": 4,
            "text": "Pick one",
            "options": [{"label": "A", "text": "x"}, {"label": "B", "text": "y"}],
            "correct_option": "B",
        }

        q = Question.from_dict(data)

        assert q.id == "12"
        assert q.subject_id == "3"
        assert [o.label for o in q.options] == ["a", "b"]
        assert q.correct_option == "b"
