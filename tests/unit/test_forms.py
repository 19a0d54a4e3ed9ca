"""
Unit Tests for Assessment Forms

Tests rating validation and merging.
"""

import pytest

from senali.domain.enums.screening import AssessmentForm
from senali.services.errors import InvalidAnswerError
from senali.services.screening.forms import merge_assessment, validate_form_ratings


class TestValidateFormRatings:

    def test_adhd_uses_frequency_scale(self):
        assert validate_form_ratings(
            AssessmentForm.ADHD, {"easily_distracted": "very_often"}
        ) == {"easily_distracted": "very_often"}

    def test_odd_accepts_sometimes(self):
        assert validate_form_ratings(
            AssessmentForm.ODD, {"often_loses_temper": "sometimes"}
        ) == {"often_loses_temper": "sometimes"}

    def test_adhd_rejects_odd_scale(self):
        with pytest.raises(InvalidAnswerError):
            validate_form_ratings(AssessmentForm.ADHD, {"easily_distracted": "sometimes"})

    def test_autism_rejects_frequency(self):
        with pytest.raises(InvalidAnswerError):
            validate_form_ratings(AssessmentForm.AUTISM, {"sensory_reactivity": "often"})

    def test_developmental_items_use_their_own_scale(self):
        assert validate_form_ratings(
            AssessmentForm.ADHD, {"academic_performance": "somewhat_of_a_problem"}
        ) == {"academic_performance": "somewhat_of_a_problem"}
        assert validate_form_ratings(
            AssessmentForm.AUTISM, {"language_development": "regression"}
        ) == {"language_development": "regression"}

    def test_developmental_item_rejects_form_scale(self):
        with pytest.raises(InvalidAnswerError):
            validate_form_ratings(AssessmentForm.ADHD, {"academic_performance": "often"})

    def test_unknown_item_rejected(self):
        with pytest.raises(InvalidAnswerError):
            validate_form_ratings(AssessmentForm.ODD, {"easily_distracted": "often"})


class TestMergeAssessment:

    def test_merge_keeps_existing_ratings(self):
        current = {"adhd": {"easily_distracted": "often"}}
        merged = merge_assessment(current, {
            AssessmentForm.ADHD: {"talks_excessively": "very_often"},
        })

        assert merged["adhd"] == {
            "easily_distracted": "often",
            "talks_excessively": "very_often",
        }
        assert merged["autism"] == {}
        assert merged["odd"] == {}

    def test_merge_does_not_mutate_input(self):
        current = {"odd": {"blames_others": "often"}}
        merge_assessment(current, {AssessmentForm.ODD: {"blames_others": "never"}})
        assert current == {"odd": {"blames_others": "often"}}
