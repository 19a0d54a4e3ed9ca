"""Domain enums package."""

from senali.domain.enums.content import (
    MessageRole,
    Relationship,
    TipCategory,
    TipDifficulty,
)
from senali.domain.enums.screening import (
    AcademicPerformance,
    AssessmentForm,
    ChecklistAnswer,
    Frequency,
    Likelihood,
    LanguageDevelopment,
    OddFrequency,
    QuestionCategory,
    Severity,
)
from senali.domain.enums.subscription import (
    StorePlatform,
    SubscriptionStatus,
    SubscriptionTier,
)

__all__ = [
    "MessageRole",
    "Relationship",
    "TipCategory",
    "TipDifficulty",
    "AcademicPerformance",
    "AssessmentForm",
    "ChecklistAnswer",
    "Frequency",
    "Likelihood",
    "LanguageDevelopment",
    "OddFrequency",
    "QuestionCategory",
    "Severity",
    "StorePlatform",
    "SubscriptionStatus",
    "SubscriptionTier",
]
