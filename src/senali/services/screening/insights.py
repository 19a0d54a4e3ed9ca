"""
Assessment Insights

Summarises the frequency/severity assessment forms of a profile into
per-condition likelihoods with key indicators and recommendations.

CLINICAL_REVIEW_REQUIRED: Thresholds mirror the checklist rule tables.
"""

from typing import Any, Mapping, Sequence

from senali.domain.enums.screening import (
    AssessmentForm,
    Frequency,
    Likelihood,
    OddFrequency,
    Severity,
)
from senali.domain.models.screening import AssessmentInsights, ConditionInsight
from senali.services.screening.forms import (
    ADHD_HYPERACTIVITY_ITEMS,
    ADHD_INATTENTION_ITEMS,
    AUTISM_RESTRICTED_ITEMS,
    AUTISM_SOCIAL_ITEMS,
    ODD_ITEMS,
)

ADHD_COUNTED: frozenset[str] = frozenset({Frequency.OFTEN, Frequency.VERY_OFTEN})
AUTISM_COUNTED: frozenset[str] = frozenset({Severity.MILD, Severity.MODERATE, Severity.SEVERE})
ODD_COUNTED: frozenset[str] = frozenset({OddFrequency.OFTEN, OddFrequency.VERY_OFTEN})

GENERAL_RECOMMENDATIONS: tuple[str, ...] = (
    "Keep detailed records of behaviors and symptoms",
    "Share these observations with healthcare providers",
    "Consider behavioral strategies and environmental modifications",
)


def _counted_items(
    form: Mapping[str, Any],
    items: Sequence[str],
    levels: frozenset[str],
) -> list[str]:
    return [item for item in items if form.get(item) in levels]


def _adhd_insight(form: Mapping[str, Any]) -> ConditionInsight:
    inattention = _counted_items(form, ADHD_INATTENTION_ITEMS, ADHD_COUNTED)
    hyperactivity = _counted_items(form, ADHD_HYPERACTIVITY_ITEMS, ADHD_COUNTED)
    insight = ConditionInsight(
        scores={
            "inattention_score": len(inattention),
            "hyperactivity_score": len(hyperactivity),
        },
        key_indicators=inattention + hyperactivity,
    )

    highest = max(len(inattention), len(hyperactivity))
    if highest >= 6:
        insight.likelihood = Likelihood.HIGH
        insight.recommendations = [
            "Consider professional ADHD evaluation",
            "Discuss findings with pediatrician or child psychologist",
        ]
    elif highest >= 4:
        insight.likelihood = Likelihood.MODERATE
        insight.recommendations = ["Monitor symptoms and consider evaluation if they persist"]
    elif highest > 0:
        insight.likelihood = Likelihood.LOW
    return insight


def _autism_insight(form: Mapping[str, Any]) -> ConditionInsight:
    social = _counted_items(form, AUTISM_SOCIAL_ITEMS, AUTISM_COUNTED)
    restricted = _counted_items(form, AUTISM_RESTRICTED_ITEMS, AUTISM_COUNTED)
    insight = ConditionInsight(
        scores={
            "social_communication_concerns": len(social),
            "restricted_behaviors_concerns": len(restricted),
        },
        key_indicators=social + restricted,
    )

    # All three social areas plus two of four restricted areas
    if len(social) == len(AUTISM_SOCIAL_ITEMS) and len(restricted) >= 2:
        insight.likelihood = Likelihood.HIGH
        insight.recommendations = [
            "Consider professional autism evaluation",
            "Contact developmental pediatrician or autism specialist",
        ]
    elif len(social) >= 2 or len(restricted) >= 2:
        insight.likelihood = Likelihood.MODERATE
        insight.recommendations = ["Monitor development and consider evaluation"]
    return insight


def _odd_insight(form: Mapping[str, Any]) -> ConditionInsight:
    counted = _counted_items(form, ODD_ITEMS, ODD_COUNTED)
    insight = ConditionInsight(
        scores={"total_score": len(counted)},
        key_indicators=counted,
    )

    if len(counted) >= 4:
        insight.likelihood = Likelihood.HIGH
        insight.recommendations = [
            "Consider professional evaluation for oppositional defiant disorder"
        ]
    elif len(counted) >= 2:
        insight.likelihood = Likelihood.MODERATE
        insight.recommendations = ["Monitor behavioral patterns"]
    return insight


def generate_assessment_insights(assessment: Mapping[str, Any] | None) -> AssessmentInsights:
    """
    Build insights from a stored assessment.

    Args:
        assessment: {"adhd": {...}, "autism": {...}, "odd": {...}}; any
            form may be missing

    Returns:
        AssessmentInsights; forms without counted ratings stay at
        insufficient_data
    """
    assessment = assessment or {}
    return AssessmentInsights(
        adhd=_adhd_insight(assessment.get(AssessmentForm.ADHD.value) or {}),
        autism=_autism_insight(assessment.get(AssessmentForm.AUTISM.value) or {}),
        odd=_odd_insight(assessment.get(AssessmentForm.ODD.value) or {}),
        general_recommendations=list(GENERAL_RECOMMENDATIONS),
    )
