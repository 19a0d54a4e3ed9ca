"""
Unit Tests for Checklist Scoring

Tests the rule tables and answer validation.
"""

import pytest

from senali.domain.enums.screening import Likelihood
from senali.services.errors import InvalidAnswerError
from senali.services.screening.questions import (
    ALL_QUESTIONS,
    count_yes_by_category,
    validate_answers,
)
from senali.services.screening.scoring import calculate_diagnostic_probabilities


def answers(prefix: str, yes: int, total: int) -> dict[str, str]:
    """First `yes` questions of a block answered yes, the rest no."""
    return {
        f"{prefix}{i}": "yes" if i <= yes else "no"
        for i in range(1, total + 1)
    }


def by_condition(results) -> dict[str, Likelihood]:
    return {r.condition: r.probability for r in results}


class TestQuestionBank:
    """Tests for the static question bank."""

    def test_question_counts(self):
        assert len(ALL_QUESTIONS) == 27
        ids = [q.id for q in ALL_QUESTIONS]
        assert ids[0] == "adhd_1"
        assert "adhd_h9" in ids
        assert "autism_s5" in ids
        assert ids[-1] == "autism_r4"

    def test_every_question_weighs_one(self):
        assert all(q.weight == 1 for q in ALL_QUESTIONS)

    def test_count_includes_every_category(self):
        counts = count_yes_by_category({})
        assert counts == {
            "adhd_inattentive": 0,
            "adhd_hyperactive": 0,
            "autism_social": 0,
            "autism_repetitive": 0,
        }


class TestValidateAnswers:
    """Tests for checklist answer validation."""

    def test_answers_are_normalised(self):
        assert validate_answers({"adhd_1": "YES", "adhd_2": "Unsure"}) == {
            "adhd_1": "yes",
            "adhd_2": "unsure",
        }

    def test_unknown_question_rejected(self):
        with pytest.raises(InvalidAnswerError):
            validate_answers({"adhd_99": "yes"})

    def test_unknown_answer_rejected(self):
        with pytest.raises(InvalidAnswerError):
            validate_answers({"adhd_1": "maybe"})


class TestAdhdRules:
    """Tests for ADHD thresholds."""

    def test_no_answers_no_results(self):
        assert calculate_diagnostic_probabilities({}) == []

    def test_six_inattentive_is_high(self):
        results = calculate_diagnostic_probabilities(answers("adhd_", 6, 9))
        assert by_condition(results) == {"ADHD (Inattentive Type)": Likelihood.HIGH}

    def test_four_inattentive_is_moderate(self):
        results = calculate_diagnostic_probabilities(answers("adhd_", 4, 9))
        assert by_condition(results) == {"ADHD (Inattentive Type)": Likelihood.MODERATE}

    def test_three_inattentive_is_omitted(self):
        assert calculate_diagnostic_probabilities(answers("adhd_", 3, 9)) == []

    def test_only_yes_counts(self):
        responses = {f"adhd_{i}": "unsure" for i in range(1, 10)}
        assert calculate_diagnostic_probabilities(responses) == []

    def test_hyperactive_moderate(self):
        results = calculate_diagnostic_probabilities(answers("adhd_h", 5, 9))
        assert by_condition(results) == {
            "ADHD (Hyperactive-Impulsive Type)": Likelihood.MODERATE,
        }

    def test_both_high_adds_combined(self):
        responses = {**answers("adhd_", 6, 9), **answers("adhd_h", 7, 9)}
        results = calculate_diagnostic_probabilities(responses)

        assert [r.condition for r in results] == [
            "ADHD (Inattentive Type)",
            "ADHD (Hyperactive-Impulsive Type)",
            "ADHD (Combined Type)",
        ]
        assert all(r.probability == Likelihood.HIGH for r in results)

    def test_results_carry_actions(self):
        results = calculate_diagnostic_probabilities(answers("adhd_", 9, 9))
        assert results[0].description
        assert len(results[0].recommended_actions) == 3


class TestAutismRules:
    """Tests for autism thresholds."""

    def test_social_and_repetitive_is_high(self):
        responses = {**answers("autism_s", 3, 5), **answers("autism_r", 2, 4)}
        results = calculate_diagnostic_probabilities(responses)
        assert by_condition(results) == {"Autism Spectrum Disorder": Likelihood.HIGH}

    def test_social_without_repetitive_is_moderate(self):
        results = calculate_diagnostic_probabilities(answers("autism_s", 5, 5))
        assert by_condition(results) == {"Autism Spectrum Disorder": Likelihood.MODERATE}

    def test_repetitive_alone_is_moderate(self):
        results = calculate_diagnostic_probabilities(answers("autism_r", 2, 4))
        assert by_condition(results) == {"Autism Spectrum Disorder": Likelihood.MODERATE}

    def test_single_answers_are_omitted(self):
        responses = {"autism_s1": "yes", "autism_r1": "yes"}
        assert calculate_diagnostic_probabilities(responses) == []
