"""
Screening Enumerations

Answer scales used by the symptom checklist and the assessment forms,
and the likelihood levels reported back to parents.

CLINICAL_REVIEW_REQUIRED: Scales mirror DSM-5 and Vanderbilt wording.
Results are screening aids only, never a diagnosis.
"""

from enum import StrEnum


class ChecklistAnswer(StrEnum):
    """Answer to a yes/no screening question."""

    YES = "yes"
    NO = "no"
    UNSURE = "unsure"


class QuestionCategory(StrEnum):
    """Symptom cluster a screening question belongs to."""

    ADHD_INATTENTIVE = "adhd_inattentive"
    ADHD_HYPERACTIVE = "adhd_hyperactive"
    AUTISM_SOCIAL = "autism_social"
    AUTISM_REPETITIVE = "autism_repetitive"


class Likelihood(StrEnum):
    """Likelihood that observations align with a condition's criteria."""

    INSUFFICIENT_DATA = "insufficient_data"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Frequency(StrEnum):
    """Vanderbilt-style frequency rating for ADHD items."""

    NEVER = "never"
    OCCASIONALLY = "occasionally"
    OFTEN = "often"
    VERY_OFTEN = "very_often"


class OddFrequency(StrEnum):
    """Frequency rating for ODD items."""

    NEVER = "never"
    SOMETIMES = "sometimes"
    OFTEN = "often"
    VERY_OFTEN = "very_often"


class Severity(StrEnum):
    """Severity rating for autism areas."""

    NOT_PRESENT = "not_present"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class AcademicPerformance(StrEnum):
    """School performance rating on the ADHD form."""

    EXCELLENT = "excellent"
    ABOVE_AVERAGE = "above_average"
    AVERAGE = "average"
    SOMEWHAT_OF_A_PROBLEM = "somewhat_of_a_problem"
    PROBLEMATIC = "problematic"


class LanguageDevelopment(StrEnum):
    """Language development rating on the autism form."""

    TYPICAL = "typical"
    DELAYED = "delayed"
    ATYPICAL = "atypical"
    REGRESSION = "regression"


class AssessmentForm(StrEnum):
    """Assessment forms stored on a family profile."""

    ADHD = "adhd"
    AUTISM = "autism"
    ODD = "odd"
