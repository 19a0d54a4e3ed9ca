"""
Unit Tests for Tip Parsing

Tests validation of model-generated tips and age bands.
"""

import json

import pytest

from senali.domain.enums.content import TipCategory, TipDifficulty
from senali.domain.models.tip import GeneratedTip, TipPreferences, age_range


def tip_json(**overrides) -> str:
    data = {
        "title": "Visual morning checklist",
        "content": "Put a picture checklist by the door.",
        "category": "adhd",
        "difficulty": "beginner",
        "targetAge": "7-12",
        "estimatedTime": "10 minutes",
        "tags": ["routines", "mornings"],
    }
    data.update(overrides)
    return json.dumps(data)


class TestGeneratedTip:

    def test_valid_tip(self):
        tip = GeneratedTip.from_llm_content(tip_json())

        assert tip.title == "Visual morning checklist"
        assert tip.category == TipCategory.ADHD
        assert tip.difficulty == TipDifficulty.BEGINNER
        assert tip.target_age == "7-12"
        assert tip.estimated_time == "10 minutes"
        assert tip.tags == ["routines", "mornings"]

    def test_unknown_category_falls_back_to_general(self):
        tip = GeneratedTip.from_llm_content(tip_json(category="sleep"))
        assert tip.category == TipCategory.GENERAL

    def test_unknown_difficulty_falls_back_to_beginner(self):
        tip = GeneratedTip.from_llm_content(tip_json(difficulty="expert"))
        assert tip.difficulty == TipDifficulty.BEGINNER

    def test_category_is_case_insensitive(self):
        tip = GeneratedTip.from_llm_content(tip_json(category="Autism"))
        assert tip.category == TipCategory.AUTISM

    @pytest.mark.parametrize("missing", ["title", "content", "category"])
    def test_missing_required_field(self, missing):
        data = json.loads(tip_json())
        del data[missing]
        with pytest.raises(ValueError):
            GeneratedTip.from_llm_content(json.dumps(data))

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            GeneratedTip.from_llm_content("Here is a tip: be patient")

    def test_json_array_rejected(self):
        with pytest.raises(ValueError):
            GeneratedTip.from_llm_content("[1, 2]")

    def test_numeric_age_and_time_become_text(self):
        tip = GeneratedTip.from_llm_content(tip_json(targetAge=7, estimatedTime=10))

        assert tip.target_age == "7"
        assert tip.estimated_time == "10"

    def test_missing_age_and_time_are_none(self):
        tip = GeneratedTip.from_llm_content(tip_json(targetAge=None, estimatedTime=""))

        assert tip.target_age is None
        assert tip.estimated_time is None

    def test_long_age_truncated_to_column(self):
        tip = GeneratedTip.from_llm_content(tip_json(targetAge="x" * 80))
        assert len(tip.target_age) == 30


class TestAgeRange:

    @pytest.mark.parametrize("age,expected", [
        (0, "0-3"),
        (3, "0-3"),
        (4, "3-6"),
        (6, "3-6"),
        (7, "7-12"),
        (12, "7-12"),
        (13, "13-18"),
        (18, "13-18"),
        (19, "adult"),
    ])
    def test_bands(self, age, expected):
        assert age_range(age) == expected


class TestTipPreferences:

    def test_empty(self):
        assert TipPreferences().is_empty

    def test_age_only_is_not_empty(self):
        assert not TipPreferences(child_age=0).is_empty
