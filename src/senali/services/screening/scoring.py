"""
Checklist Scoring

Rule tables turning checklist answers into likelihood results.
Only "yes" answers count; "no" and "unsure" are ignored.

CLINICAL_REVIEW_REQUIRED: Thresholds follow DSM-5 symptom counts
(six of nine for ADHD presentations). Results are screening aids,
not a diagnosis.
"""

from typing import Mapping

from senali.domain.enums.screening import Likelihood, QuestionCategory
from senali.domain.models.screening import DiagnosticResult
from senali.services.screening.questions import count_yes_by_category

ADHD_HIGH_THRESHOLD = 6
ADHD_MODERATE_THRESHOLD = 4
AUTISM_SOCIAL_HIGH_THRESHOLD = 3
AUTISM_MODERATE_THRESHOLD = 2


def calculate_diagnostic_probabilities(responses: Mapping[str, str]) -> list[DiagnosticResult]:
    """
    Score checklist responses.

    Args:
        responses: Question id -> "yes" | "no" | "unsure"

    Returns:
        Results in a stable order: inattentive, hyperactive-impulsive,
        combined, autism. Conditions below threshold are omitted.
    """
    counts = count_yes_by_category(responses)
    inattentive = counts[QuestionCategory.ADHD_INATTENTIVE.value]
    hyperactive = counts[QuestionCategory.ADHD_HYPERACTIVE.value]
    social = counts[QuestionCategory.AUTISM_SOCIAL.value]
    repetitive = counts[QuestionCategory.AUTISM_REPETITIVE.value]

    results: list[DiagnosticResult] = []

    if inattentive >= ADHD_HIGH_THRESHOLD:
        results.append(DiagnosticResult(
            condition="ADHD (Inattentive Type)",
            probability=Likelihood.HIGH,
            description="Six or more inattentive symptoms present, meeting DSM-5 criteria",
            recommended_actions=[
                "Consult with pediatrician or child psychologist",
                "Consider educational accommodations",
                "Explore behavioral strategies",
            ],
        ))
    elif inattentive >= ADHD_MODERATE_THRESHOLD:
        results.append(DiagnosticResult(
            condition="ADHD (Inattentive Type)",
            probability=Likelihood.MODERATE,
            description="Some inattentive symptoms present, below diagnostic threshold",
            recommended_actions=[
                "Monitor symptoms over time",
                "Discuss with school counselor",
                "Consider organizational support",
            ],
        ))

    if hyperactive >= ADHD_HIGH_THRESHOLD:
        results.append(DiagnosticResult(
            condition="ADHD (Hyperactive-Impulsive Type)",
            probability=Likelihood.HIGH,
            description="Six or more hyperactive-impulsive symptoms present, meeting DSM-5 criteria",
            recommended_actions=[
                "Consult with pediatrician or child psychologist",
                "Consider behavioral interventions",
                "Explore physical activity outlets",
            ],
        ))
    elif hyperactive >= ADHD_MODERATE_THRESHOLD:
        results.append(DiagnosticResult(
            condition="ADHD (Hyperactive-Impulsive Type)",
            probability=Likelihood.MODERATE,
            description="Some hyperactive-impulsive symptoms present, below diagnostic threshold",
            recommended_actions=[
                "Monitor symptoms over time",
                "Increase physical activity",
                "Practice calming strategies",
            ],
        ))

    if inattentive >= ADHD_HIGH_THRESHOLD and hyperactive >= ADHD_HIGH_THRESHOLD:
        results.append(DiagnosticResult(
            condition="ADHD (Combined Type)",
            probability=Likelihood.HIGH,
            description="Both inattentive and hyperactive-impulsive criteria met",
            recommended_actions=[
                "Comprehensive evaluation recommended",
                "Consider multimodal treatment approach",
                "School-based interventions",
            ],
        ))

    if social >= AUTISM_SOCIAL_HIGH_THRESHOLD and repetitive >= AUTISM_MODERATE_THRESHOLD:
        results.append(DiagnosticResult(
            condition="Autism Spectrum Disorder",
            probability=Likelihood.HIGH,
            description="Multiple social communication and repetitive behavior criteria met",
            recommended_actions=[
                "Comprehensive autism evaluation recommended",
                "Early intervention services",
                "Social skills support",
            ],
        ))
    elif social >= AUTISM_MODERATE_THRESHOLD or repetitive >= AUTISM_MODERATE_THRESHOLD:
        results.append(DiagnosticResult(
            condition="Autism Spectrum Disorder",
            probability=Likelihood.MODERATE,
            description="Some autism spectrum characteristics present",
            recommended_actions=[
                "Monitor development over time",
                "Consider social skills support",
                "Discuss with pediatrician",
            ],
        ))

    return results
