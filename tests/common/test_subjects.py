"""
Unit tests for the subject catalogue.
"""

import pytest

from paper_toolkit.common.subjects import (
    DEFAULT_QUESTION_TYPES,
    default_marks_for,
    question_types_for,
    receives_subjective_bonus,
    section_title,
    subject_category,
)


class TestSubjectCategory:

    def test_subject_category_when_mixed_case_and_spaces_then_normalized(self):
        assert subject_category("  Pakistan   Study ") == "pakistan study"

    def test_subject_category_when_blank_then_none(self):
        assert subject_category("   ") is None
        assert subject_category(None) is None


class TestQuestionTypes:

    def test_question_types_for_when_english_then_english_types(self):
        types = question_types_for("English")

        assert types[0] == "mcq"
        assert "translate_urdu" in types
        assert "passage" in types

    def test_question_types_for_when_urdu_variant_then_urdu_types(self):
        assert "poetry_explanation" in question_types_for("Urdu (Compulsory)")

    def test_question_types_for_when_other_subject_then_defaults(self):
        assert question_types_for("Biology") == DEFAULT_QUESTION_TYPES


class TestDefaultMarks:

    @pytest.mark.parametrize("question_type,marks", [
        ("mcq", 1), ("short", 2), ("long", 5), ("passage", 10), ("translate_urdu", 4),
    ])
    def test_default_marks_for_when_known_then_catalogue_value(self, question_type, marks):
        assert default_marks_for(question_type) == marks

    def test_default_marks_for_when_unknown_then_short_default(self):
        assert default_marks_for("essay") == 2


class TestBonusAndTitles:

    @pytest.mark.parametrize("category", ["urdu", "english", "islamiat", "pakistan study"])
    def test_receives_bonus_when_language_or_religious_then_true(self, category):
        assert receives_subjective_bonus(category)

    def test_receives_bonus_when_science_then_false(self):
        assert not receives_subjective_bonus("biology")
        assert not receives_subjective_bonus(None)

    def test_section_title_when_unknown_type_then_title_cased(self):
        assert section_title("poetry_explanation") == "Poetry Explanation"
        assert section_title("short") == "Short Questions"
