"""
Screening Service

Profile-level screening operations: rule-table scoring of the
checklist, assessment insights, and the paid AI diagnostic summary.

CLINICAL_REVIEW_REQUIRED: Every output here is a screening aid to be
discussed with a qualified professional.
"""

import json
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from senali.config.logging_config import get_logger
from senali.domain.models.screening import (
    AIDiagnosticReport,
    AssessmentInsights,
    DiagnosticQuestion,
    DiagnosticResult,
)
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.llm.provider import LLMProvider
from senali.infrastructure.metrics.prometheus_metrics import track_screening_results
from senali.services.billing.subscription_service import SubscriptionService
from senali.services.errors import ModelOutputError, ServiceError
from senali.services.profiles.profile_service import ProfileService, to_family_member
from senali.services.prompt.prompt_builder import PromptBuilder
from senali.services.screening.insights import generate_assessment_insights
from senali.services.screening.questions import (
    ALL_QUESTIONS,
    count_yes_by_category,
    validate_answers,
)
from senali.services.screening.scoring import calculate_diagnostic_probabilities

logger = get_logger(__name__)


class ScreeningService:
    """Screening operations on a user's family profiles."""

    def __init__(
        self,
        session: AsyncSession,
        llm: Optional[LLMProvider] = None,
        *,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        self._llm = llm
        self._billing = SubscriptionService(session)
        self._profiles = ProfileService(session, policy=self._billing.policy)
        self._prompt_builder = prompt_builder or PromptBuilder()

    @staticmethod
    def questions() -> tuple[DiagnosticQuestion, ...]:
        return ALL_QUESTIONS

    async def screen_profile(
        self,
        user: UserModel,
        profile_id: UUID,
        responses: Optional[Mapping[str, Any]] = None,
    ) -> list[DiagnosticResult]:
        """
        Score the stored checklist, or the given responses without
        storing them.

        Raises:
            NotFoundError: Missing or owned by another user
            InvalidAnswerError: Unknown question id or answer
        """
        profile = await self._profiles.get(user, profile_id)
        answers = validate_answers(responses) if responses is not None else (profile.symptoms or {})

        results = calculate_diagnostic_probabilities(answers)
        track_screening_results(results)
        return results

    async def insights(self, user: UserModel, profile_id: UUID) -> AssessmentInsights:
        """Insights from the profile's assessment forms."""
        profile = await self._profiles.get(user, profile_id)
        return generate_assessment_insights(profile.assessment)

    async def diagnostic_summary(self, user: UserModel, profile_id: UUID) -> dict[str, Any]:
        """
        Ask the model for a templated diagnostic summary (one credit).

        Returns:
            {"profile_id", "ai_analysis", "rule_based_results", "remaining_credits"}

        Raises:
            InsufficientCreditsError: Not enough credits (402)
            ServiceError: The checklist has no answers yet (400)
            ModelOutputError: Reply is empty or not a JSON object (502)
            LLMProviderError: Provider failure
        """
        if self._llm is None:
            raise RuntimeError("ScreeningService.diagnostic_summary requires an LLM provider")

        profile = await self._profiles.get(user, profile_id)
        answers = dict(profile.symptoms or {})
        if not answers:
            raise ServiceError("Complete the symptom checklist before requesting a summary")

        self._billing.ensure_can_afford(user)

        prompt = self._prompt_builder.build_diagnostic(
            to_family_member(profile),
            count_yes_by_category(answers),
            answers,
        )
        response = await self._llm.generate(prompt)

        try:
            payload = json.loads(response.content)
        except json.JSONDecodeError as e:
            raise ModelOutputError("Diagnostic summary is not valid JSON") from e
        if not isinstance(payload, dict):
            raise ModelOutputError("Diagnostic summary is not a JSON object")

        report = AIDiagnosticReport.from_payload(payload)
        rule_based = calculate_diagnostic_probabilities(answers)

        remaining = await self._billing.spend(user, feature="diagnostic_summary")

        logger.info(
            "Diagnostic summary generated",
            user_id=user.id,
            profile_id=str(profile.id),
            conditions=len(report.diagnoses),
        )
        return {
            "profile_id": profile.id,
            "ai_analysis": report,
            "rule_based_results": rule_based,
            "remaining_credits": remaining,
        }
