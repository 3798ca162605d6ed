"""
Unit tests for layout profiles.
"""

import pytest

from paper_toolkit.composer.layout import available_layouts, get_layout_profile
from paper_toolkit.core.errors import ValidationError


class TestLayoutProfiles:

    @pytest.mark.parametrize("name,mcq,base,bonus_max,copies", [
        ("separate", 15, 30, 35, 1),
        ("combined", 5, 15, 20, 1),
        ("paired_sheet", 5, 10, 15, 2),
        ("tripled_sheet", 5, 15, 15, 3),
    ])
    def test_profile_when_looked_up_then_caps_match(self, name, mcq, base, bonus_max, copies):
        # Act
        profile = get_layout_profile(name)

        # Assert
        assert profile.mcq_max == mcq
        assert profile.subjective_max("biology") == base
        assert profile.subjective_max("urdu") == bonus_max
        assert profile.duplicate_count == copies

    @pytest.mark.parametrize("alias,name", [
        ("same_page", "combined"),
        ("single_page", "combined"),
        ("two_papers", "paired_sheet"),
        ("three_papers", "tripled_sheet"),
        ("  Separate ", "separate"),
    ])
    def test_get_layout_profile_when_alias_then_canonical(self, alias, name):
        assert get_layout_profile(alias).name == name

    def test_get_layout_profile_when_unknown_then_raises(self):
        with pytest.raises(ValidationError, match="Unknown layout") as exc:
            get_layout_profile("four_papers")
        assert exc.value.path == "layout"

    def test_separate_when_checked_then_page_break_and_split_times(self):
        profile = get_layout_profile("separate")

        assert profile.page_break_before_subjective
        assert (profile.mcq_minutes, profile.subjective_minutes) == (15, 45)

    @pytest.mark.parametrize("name", ["paired_sheet", "tripled_sheet"])
    def test_multi_copy_when_checked_then_page_break_before_subjective(self, name):
        assert get_layout_profile(name).page_break_before_subjective

    def test_combined_when_checked_then_no_page_break(self):
        assert not get_layout_profile("combined").page_break_before_subjective

    def test_combined_when_checked_then_shared_time(self):
        profile = get_layout_profile("combined")

        assert profile.mcq_minutes is None
        assert profile.subjective_minutes == 60

    def test_available_layouts_when_listed_then_canonical_only(self):
        assert available_layouts() == ["separate", "combined", "paired_sheet", "tripled_sheet"]
