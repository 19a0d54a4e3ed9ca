"""
Tip Service

Daily parenting tips generated by the LLM in JSON mode, personalised
from explicit preferences or from the user's family profiles, plus
the feedback users leave on them.
"""

import re
from datetime import datetime, time, timezone
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from senali.config.logging_config import get_logger
from senali.domain.clock import utcnow
from senali.domain.enums.content import Relationship, TipCategory, TipDifficulty
from senali.domain.models.tip import GeneratedTip, TipPreferences
from senali.infrastructure.database.models.daily_tip_model import DailyTipModel
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.repositories.profile_repository import ProfileRepository
from senali.infrastructure.database.repositories.tip_repository import TipRepository
from senali.infrastructure.llm.provider import LLMProvider
from senali.infrastructure.metrics.prometheus_metrics import track_tip_generated
from senali.services.errors import ModelOutputError, NotFoundError
from senali.services.prompt.prompt_builder import PromptBuilder

logger = get_logger(__name__)

FEEDBACK_FIELDS: frozenset[str] = frozenset({
    "liked",
    "disliked",
    "bookmarked",
    "helpful",
    "tried",
    "rating",
    "comments",
})


def start_of_utc_day(now: datetime) -> datetime:
    """Midnight UTC of the day containing now."""
    return datetime.combine(now.astimezone(timezone.utc).date(), time.min, tzinfo=timezone.utc)


class TipService:
    """
    Tip generation, retrieval and feedback.

    Usage:
        service = TipService(session, llm)
        tip = await service.today(user)
    """

    def __init__(
        self,
        session: AsyncSession,
        llm: Optional[LLMProvider] = None,
        *,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        self._llm = llm
        self._tips = TipRepository(session)
        self._profiles = ProfileRepository(session)
        self._prompt_builder = prompt_builder or PromptBuilder()

    @staticmethod
    def categories() -> dict[str, list[str]]:
        return {
            "categories": [c.value for c in TipCategory],
            "difficulties": [d.value for d in TipDifficulty],
        }

    async def derive_preferences(self, user: UserModel) -> TipPreferences:
        """
        Preferences inferred from family profiles: the youngest child's
        age and every listed diagnosis as a concern.
        """
        profiles = await self._profiles.list_for_user(user.id)

        ages = [
            p.age for p in profiles
            if p.relationship == Relationship.CHILD.value and p.age is not None
        ]

        concerns: list[str] = []
        for profile in profiles:
            for diagnosis in re.split(r"[,;\n]", profile.medical_diagnoses or ""):
                diagnosis = diagnosis.strip()
                if diagnosis and diagnosis.lower() not in (c.lower() for c in concerns):
                    concerns.append(diagnosis)

        return TipPreferences(
            child_age=min(ages) if ages else None,
            primary_concerns=concerns,
        )

    async def generate(
        self,
        user: UserModel,
        preferences: Optional[TipPreferences] = None,
    ) -> DailyTipModel:
        """
        Generate and store a tip.

        Raises:
            ModelOutputError: Empty, non-JSON or incomplete tip (502)
            LLMProviderError: Provider failure
        """
        if self._llm is None:
            raise RuntimeError("TipService.generate requires an LLM provider")

        if preferences is None or preferences.is_empty:
            preferences = await self.derive_preferences(user)

        prompt = self._prompt_builder.build_tip(preferences)
        response = await self._llm.generate(prompt)

        if response.is_empty:
            raise ModelOutputError("No tip generated")

        try:
            generated = GeneratedTip.from_llm_content(response.content)
        except ValueError as e:
            logger.warning("Unusable tip from model", error=str(e))
            raise ModelOutputError("Failed to parse generated tip") from e

        tip = await self._tips.create(DailyTipModel(
            user_id=user.id,
            title=generated.title,
            content=generated.content,
            category=generated.category.value,
            difficulty=generated.difficulty.value,
            target_age=generated.target_age,
            estimated_time=generated.estimated_time,
            tags=generated.tags,
        ))

        track_tip_generated(tip.category)
        logger.info("Tip generated", user_id=user.id, tip_id=str(tip.id), category=tip.category)
        return tip

    async def today(self, user: UserModel, now: Optional[datetime] = None) -> DailyTipModel:
        """Today's tip (UTC day), generated on first request."""
        since = start_of_utc_day(now or utcnow())
        tip = await self._tips.latest_since(user.id, since)
        if tip is not None:
            return tip
        return await self.generate(user)

    async def recent(self, user: UserModel, limit: int = 10) -> Sequence[DailyTipModel]:
        return await self._tips.recent_for_user(user.id, limit)

    async def feedback(
        self,
        user: UserModel,
        tip_id: UUID,
        feedback: Mapping[str, Any],
    ) -> DailyTipModel:
        """
        Record feedback. Liking clears a dislike and vice versa.

        Raises:
            NotFoundError: Missing or owned by another user
        """
        tip = await self._tips.get_for_user(user.id, tip_id)
        if tip is None:
            raise NotFoundError("Tip not found")

        for key, value in feedback.items():
            if key in FEEDBACK_FIELDS:
                setattr(tip, key, value)

        if feedback.get("liked"):
            tip.disliked = False
        elif feedback.get("disliked"):
            tip.liked = False

        return await self._tips.update(tip)
