"""
Senali Domain Layer

Business enums, value objects and pure rules, independent of
persistence and transport.
"""

from senali.domain.enums import (
    ChecklistAnswer,
    Likelihood,
    MessageRole,
    SubscriptionStatus,
    SubscriptionTier,
    TipCategory,
    TipDifficulty,
)
from senali.domain.models import (
    AIDiagnosticReport,
    AssessmentInsights,
    ChatReply,
    ChatTurn,
    CreditPolicy,
    DiagnosticQuestion,
    DiagnosticResult,
    FamilyMember,
    GeneratedTip,
    TipPreferences,
)

__all__ = [
    "ChecklistAnswer",
    "Likelihood",
    "MessageRole",
    "SubscriptionStatus",
    "SubscriptionTier",
    "TipCategory",
    "TipDifficulty",
    "AIDiagnosticReport",
    "AssessmentInsights",
    "ChatReply",
    "ChatTurn",
    "CreditPolicy",
    "DiagnosticQuestion",
    "DiagnosticResult",
    "FamilyMember",
    "GeneratedTip",
    "TipPreferences",
]
