"""
Screening Domain Models

Questions, rule-table results, assessment insights and the
LLM-assisted diagnostic report.

CLINICAL_REVIEW_REQUIRED: None of these objects is a diagnosis. They
summarise parent observations so they can be discussed with a
qualified professional.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from senali.domain.enums.screening import Likelihood, QuestionCategory


@dataclass(frozen=True)
class DiagnosticQuestion:
    """A yes/no/unsure checklist question."""

    id: str
    text: str
    category: QuestionCategory
    weight: int = 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "category": self.category.value,
            "weight": self.weight,
        }


@dataclass
class DiagnosticResult:
    """Rule-table result for one condition."""

    condition: str
    probability: Likelihood
    description: str
    recommended_actions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "condition": self.condition,
            "probability": self.probability.value,
            "description": self.description,
            "recommended_actions": list(self.recommended_actions),
        }


@dataclass
class ConditionInsight:
    """Assessment-form insight for one condition."""

    scores: dict[str, int] = field(default_factory=dict)
    likelihood: Likelihood = Likelihood.INSUFFICIENT_DATA
    key_indicators: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            **self.scores,
            "likelihood": self.likelihood.value,
            "key_indicators": list(self.key_indicators),
            "recommendations": list(self.recommendations),
        }


@dataclass
class AssessmentInsights:
    """Insights across all assessment forms of a profile."""

    adhd: ConditionInsight
    autism: ConditionInsight
    odd: ConditionInsight
    general_recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "adhd": self.adhd.to_dict(),
            "autism": self.autism.to_dict(),
            "odd": self.odd.to_dict(),
            "general_recommendations": list(self.general_recommendations),
        }


@dataclass
class AIDiagnosis:
    """One condition proposed by the model."""

    condition: str
    probability: Likelihood
    confidence: int
    reasoning: str = ""
    recommended_actions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "condition": self.condition,
            "probability": self.probability.value,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "recommended_actions": list(self.recommended_actions),
        }


def _clamp_confidence(value: Any) -> int:
    """0-100; non-numeric and NaN become 0, infinities clamp to the bounds."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    except OverflowError:
        return 100 if value > 0 else 0
    if math.isnan(number):
        return 0
    return int(max(0.0, min(100.0, number)))


@dataclass
class AIDiagnosticReport:
    """Model-written summary of a profile's checklist."""

    diagnoses: list[AIDiagnosis] = field(default_factory=list)
    summary: str = ""
    overall_assessment: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AIDiagnosticReport":
        """
        Build a report from the model's JSON object.

        Entries without a condition or with a probability outside
        high/moderate/low are dropped; confidence is clamped to 0-100.
        """
        allowed = {Likelihood.HIGH, Likelihood.MODERATE, Likelihood.LOW}
        diagnoses: list[AIDiagnosis] = []

        entries = payload.get("diagnoses")
        if not isinstance(entries, list):
            entries = []

        for raw in entries:
            if not isinstance(raw, dict) or not raw.get("condition"):
                continue
            try:
                probability = Likelihood(str(raw.get("probability", "")).lower())
            except ValueError:
                continue
            if probability not in allowed:
                continue

            confidence = _clamp_confidence(raw.get("confidence", 0))

            actions = raw.get("recommended_actions", raw.get("recommendedActions")) or []
            if not isinstance(actions, list):
                actions = [actions]
            diagnoses.append(
                AIDiagnosis(
                    condition=str(raw["condition"]),
                    probability=probability,
                    confidence=confidence,
                    reasoning=str(raw.get("reasoning", "")),
                    recommended_actions=[str(a) for a in actions if a],
                )
            )

        return cls(
            diagnoses=diagnoses,
            summary=str(payload.get("summary", "")),
            overall_assessment=str(
                payload.get("overall_assessment", payload.get("overallAssessment", ""))
            ),
        )

    def to_dict(self) -> dict:
        return {
            "diagnoses": [d.to_dict() for d in self.diagnoses],
            "summary": self.summary,
            "overall_assessment": self.overall_assessment,
        }
