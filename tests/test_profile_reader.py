"""Tests for building PatientProfile objects from raw form values."""

import pytest

from screening_src.models import RiskFactor, Sex, SmokingStatus
from screening_src.profile_reader import read_profile, visible_smoking_fields


class TestAge:
    """Test age parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("42", 42),
        (" 42 ", 42),
        ("42.9", 42),
        ("42 years", 42),
        (42, 42),
        (42.9, 42),
        ("0", 0),
    ])
    def test_numeric_age(self, raw, expected):
        assert read_profile({"age": raw, "sex": "male"}).age == expected

    @pytest.mark.parametrize("raw", ["", "abc", None, float("nan")])
    def test_unusable_age_is_unknown(self, raw):
        assert read_profile({"age": raw, "sex": "male"}).age is None

    def test_missing_age_is_unknown(self):
        assert read_profile({"sex": "male"}).age is None

    def test_negative_age_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            read_profile({"age": "-3", "sex": "male"})


class TestSex:
    """Test sex parsing."""

    def test_values(self):
        assert read_profile({"age": "30", "sex": "female"}).sex == Sex.FEMALE
        assert read_profile({"age": "30", "sex": "Male"}).sex == Sex.MALE
        assert read_profile({"age": "30", "sex": Sex.FEMALE}).sex == Sex.FEMALE

    def test_missing_sex_rejected(self):
        with pytest.raises(ValueError, match="Sex is required"):
            read_profile({"age": "30"})

    def test_blank_sex_rejected(self):
        with pytest.raises(ValueError, match="Sex is required"):
            read_profile({"age": "30", "sex": "  "})

    def test_unknown_sex_rejected(self):
        with pytest.raises(ValueError, match="Unknown sex"):
            read_profile({"age": "30", "sex": "other"})


class TestPregnancy:
    """Test pregnancy flag parsing."""

    @pytest.mark.parametrize("raw,expected", [
        ("yes", True),
        ("YES", True),
        ("true", True),
        ("on", True),
        (True, True),
        ("no", False),
        ("", False),
        (None, False),
        (False, False),
    ])
    def test_flag_values(self, raw, expected):
        profile = read_profile({"age": "30", "sex": "female", "pregnant": raw})
        assert profile.pregnant is expected

    def test_default_not_pregnant(self):
        assert read_profile({"age": "30", "sex": "female"}).pregnant is False

    def test_unrecognized_flag_rejected(self):
        with pytest.raises(ValueError, match="pregnant"):
            read_profile({"age": "30", "sex": "female", "pregnant": "maybe"})


class TestSmoking:
    """Test smoking status and quantities."""

    def test_default_never(self):
        assert read_profile({"age": "30", "sex": "male"}).smoking_status == SmokingStatus.NEVER

    def test_form_field_names(self):
        profile = read_profile({
            "age": "60",
            "sex": "male",
            "smoking-status": "former",
            "cigs-per-day": "20",
            "years-smoked": "25",
            "quit-years": "8",
        })
        assert profile.smoking_status == SmokingStatus.FORMER
        assert profile.cigarettes_per_day == 20
        assert profile.years_smoked == 25
        assert profile.years_since_quit == 8

    def test_profile_field_names(self):
        profile = read_profile({
            "age": 60,
            "sex": "male",
            "smoking_status": "current",
            "cigarettes_per_day": 10,
            "years_smoked": 12.5,
        })
        assert profile.smoking_status == SmokingStatus.CURRENT
        assert profile.cigarettes_per_day == 10
        assert profile.years_smoked == 12.5
        assert profile.years_since_quit == 0

    @pytest.mark.parametrize("raw,expected", [
        ("", 0),
        ("abc", 0),
        ("12abc", 12),
        (".5", 0.5),
        ("-10", 0),
        ("1e400", 0),
        (None, 0),
        (-3, 0),
    ])
    def test_quantity_defaults(self, raw, expected):
        profile = read_profile({"age": "60", "sex": "male", "cigarettes_per_day": raw})
        assert profile.cigarettes_per_day == expected

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError, match="smoking status"):
            read_profile({"age": "60", "sex": "male", "smoking_status": "occasional"})

    def test_visible_fields(self):
        assert visible_smoking_fields("never") == ()
        assert visible_smoking_fields(None) == ()
        assert visible_smoking_fields("current") == ("cigarettes_per_day", "years_smoked")
        assert visible_smoking_fields(SmokingStatus.FORMER) == (
            "cigarettes_per_day", "years_smoked", "years_since_quit",
        )

    def test_hidden_fields_still_read(self):
        """Quantities are read regardless of which fields the form shows."""
        profile = read_profile({
            "age": "60", "sex": "male", "smoking_status": "never",
            "cigarettes_per_day": "20", "years_smoked": "10",
        })
        assert profile.cigarettes_per_day == 20
        assert profile.years_smoked == 10


class TestConditions:
    """Test risk-factor tag parsing."""

    def test_list(self):
        profile = read_profile({
            "age": "30", "sex": "male", "conditions": ["hiv-risk", "tb-risk"],
        })
        assert profile.conditions == frozenset({"hiv-risk", "tb-risk"})
        assert profile.has_condition(RiskFactor.HIV_RISK)

    def test_comma_separated(self):
        profile = read_profile({
            "age": "30", "sex": "male", "conditions": "overweight, STI-risk,,",
        })
        assert profile.conditions == frozenset({"overweight", "sti-risk"})

    def test_enum_members(self):
        profile = read_profile({
            "age": "30", "sex": "male", "conditions": [RiskFactor.OVERWEIGHT],
        })
        assert profile.conditions == frozenset({"overweight"})

    def test_unknown_tags_kept(self):
        profile = read_profile({
            "age": "30", "sex": "male", "conditions": ["future-risk"],
        })
        assert profile.conditions == frozenset({"future-risk"})

    def test_missing_conditions(self):
        assert read_profile({"age": "30", "sex": "male"}).conditions == frozenset()

    def test_tuple_and_set(self):
        assert read_profile({
            "age": "30", "sex": "male", "conditions": ("tb-risk",),
        }).conditions == frozenset({"tb-risk"})
        assert read_profile({
            "age": "30", "sex": "male", "conditions": {"hiv-risk"},
        }).conditions == frozenset({"hiv-risk"})

    @pytest.mark.parametrize("raw", [5, 2.5, True, {"hiv-risk": True}])
    def test_malformed_conditions_rejected(self, raw):
        with pytest.raises(ValueError, match="conditions must be a list"):
            read_profile({"age": "30", "sex": "male", "conditions": raw})
