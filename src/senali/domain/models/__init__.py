"""Domain models package."""

from senali.domain.models.billing import CreditPolicy
from senali.domain.models.chat import ChatReply, ChatTurn
from senali.domain.models.family import FamilyMember
from senali.domain.models.screening import (
    AIDiagnosis,
    AIDiagnosticReport,
    AssessmentInsights,
    ConditionInsight,
    DiagnosticQuestion,
    DiagnosticResult,
)
from senali.domain.models.tip import GeneratedTip, TipPreferences, age_range

__all__ = [
    "CreditPolicy",
    "ChatReply",
    "ChatTurn",
    "FamilyMember",
    "AIDiagnosis",
    "AIDiagnosticReport",
    "AssessmentInsights",
    "ConditionInsight",
    "DiagnosticQuestion",
    "DiagnosticResult",
    "GeneratedTip",
    "TipPreferences",
    "age_range",
]
