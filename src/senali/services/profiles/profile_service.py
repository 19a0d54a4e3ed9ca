"""
Profile Service

Family profiles (children, partner, self) with their symptom checklist
and assessment forms. Profiles are private to their owner; another
user's profile is reported as not found.
"""

from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from senali.config.logging_config import get_logger
from senali.domain.enums.content import Relationship
from senali.domain.enums.screening import AssessmentForm
from senali.domain.enums.subscription import SubscriptionTier
from senali.domain.models.billing import CreditPolicy
from senali.domain.models.family import FamilyMember
from senali.infrastructure.database.models.child_profile_model import ChildProfileModel
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.repositories.profile_repository import ProfileRepository
from senali.services.billing.subscription_service import credit_policy_from_settings
from senali.services.errors import ConflictError, NotFoundError, ProfileLimitError
from senali.services.screening.forms import merge_assessment, validate_form_ratings
from senali.services.screening.questions import validate_answers
from senali.services.screening.scoring import calculate_diagnostic_probabilities
from senali.services.screening.symptom_extractor import ExtractedSymptoms

logger = get_logger(__name__)

EDITABLE_FIELDS: frozenset[str] = frozenset({
    "name",
    "age",
    "relationship",
    "gender",
    "medical_diagnoses",
    "school_info",
    "notes",
})


class ProfileService:
    """CRUD and checklist/assessment updates for family profiles."""

    def __init__(
        self,
        session: AsyncSession,
        policy: Optional[CreditPolicy] = None,
    ) -> None:
        self._session = session
        self._profiles = ProfileRepository(session)
        self._policy = policy or credit_policy_from_settings()

    async def list_profiles(self, user: UserModel) -> Sequence[ChildProfileModel]:
        return await self._profiles.list_for_user(user.id)

    async def get(self, user: UserModel, profile_id: UUID) -> ChildProfileModel:
        """
        Raises:
            NotFoundError: Missing or owned by another user
        """
        profile = await self._profiles.get_for_user(user.id, profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    async def create(self, user: UserModel, data: Mapping[str, Any]) -> ChildProfileModel:
        """
        Create a profile.

        Raises:
            ProfileLimitError: Free tier allowance reached
            ConflictError: Name already used by this user
        """
        limit = self._policy.profile_limit(SubscriptionTier(user.subscription))
        if limit is not None and await self._profiles.count_for_user(user.id) >= limit:
            raise ProfileLimitError(limit)

        name = str(data["name"]).strip()
        if await self._profiles.get_by_name(user.id, name) is not None:
            raise ConflictError(f"A profile named '{name}' already exists")

        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        fields["name"] = name
        if "relationship" in fields and fields["relationship"] is not None:
            fields["relationship"] = Relationship(fields["relationship"]).value

        profile = ChildProfileModel(user_id=user.id, symptoms={}, assessment={}, **fields)
        try:
            profile = await self._profiles.create(profile)
        except IntegrityError:
            raise ConflictError(f"A profile named '{name}' already exists") from None

        logger.info("Profile created", user_id=user.id, profile_id=str(profile.id))
        return profile

    async def update(
        self,
        user: UserModel,
        profile_id: UUID,
        data: Mapping[str, Any],
    ) -> ChildProfileModel:
        """
        Update profile details; only keys present in data change.

        Raises:
            NotFoundError: Missing or owned by another user
            ConflictError: Renamed to another profile's name
        """
        profile = await self.get(user, profile_id)

        if "name" in data and data["name"] is not None:
            name = str(data["name"]).strip()
            existing = await self._profiles.get_by_name(user.id, name)
            if existing is not None and existing.id != profile.id:
                raise ConflictError(f"A profile named '{name}' already exists")
            profile.name = name

        for key, value in data.items():
            if key == "name" or key not in EDITABLE_FIELDS:
                continue
            if key == "relationship":
                if value is None:
                    continue
                value = Relationship(value).value
            setattr(profile, key, value)

        try:
            return await self._profiles.update(profile)
        except IntegrityError:
            raise ConflictError("A profile with this name already exists") from None

    async def delete(self, user: UserModel, profile_id: UUID) -> None:
        """
        Raises:
            NotFoundError: Missing or owned by another user
        """
        if not await self._profiles.delete_for_user(user.id, profile_id):
            raise NotFoundError("Profile not found")
        logger.info("Profile deleted", user_id=user.id, profile_id=str(profile_id))

    async def update_symptoms(
        self,
        user: UserModel,
        profile_id: UUID,
        answers: Mapping[str, Any],
    ) -> ChildProfileModel:
        """
        Merge checklist answers into the profile.

        Raises:
            InvalidAnswerError: Unknown question id or answer
        """
        validated = validate_answers(answers)
        profile = await self.get(user, profile_id)

        # JSON columns are replaced, not mutated, so the change is tracked
        profile.symptoms = {**(profile.symptoms or {}), **validated}
        return await self._profiles.update(profile)

    async def update_assessment(
        self,
        user: UserModel,
        profile_id: UUID,
        forms: Mapping[str, Optional[Mapping[str, Any]]],
    ) -> ChildProfileModel:
        """
        Merge assessment form ratings into the profile.

        Raises:
            InvalidAnswerError: Unknown form item or rating
        """
        updates = {
            AssessmentForm(form): validate_form_ratings(AssessmentForm(form), ratings)
            for form, ratings in forms.items()
            if ratings
        }
        profile = await self.get(user, profile_id)
        profile.assessment = merge_assessment(profile.assessment, updates)
        return await self._profiles.update(profile)

    async def apply_chat_findings(
        self,
        user: UserModel,
        findings: ExtractedSymptoms,
    ) -> list[str]:
        """
        Merge ratings extracted from a chat message into matching profiles.

        Findings attach to existing profiles named in the message. When no
        named profile matches and the user has exactly one child profile,
        they attach to that child. Profiles are never created here.

        Returns:
            Names of the profiles that were updated
        """
        if findings.is_empty:
            return []

        targets: list[ChildProfileModel] = []
        for name in findings.names:
            profile = await self._profiles.get_by_name(user.id, name)
            if profile is not None and profile not in targets:
                targets.append(profile)

        if not targets:
            children = [
                p for p in await self._profiles.list_for_user(user.id)
                if p.relationship == Relationship.CHILD.value
            ]
            if len(children) == 1:
                targets = children

        updates = {form: ratings for form, ratings in findings.ratings.items() if ratings}
        for profile in targets:
            profile.assessment = merge_assessment(profile.assessment, updates)
            await self._profiles.update(profile)

        if targets:
            logger.debug(
                "Chat findings merged",
                user_id=user.id,
                profiles=len(targets),
                items=sum(len(r) for r in updates.values()),
            )
        return [p.name for p in targets]

    async def family_members(self, user: UserModel) -> list[FamilyMember]:
        """Profiles as prompt-ready family members with checklist results."""
        return [to_family_member(p) for p in await self._profiles.list_for_user(user.id)]


def to_family_member(profile: ChildProfileModel) -> FamilyMember:
    """Convert a stored profile into the view used for prompts."""
    return FamilyMember(
        name=profile.name,
        age=profile.age,
        relationship=profile.relationship,
        gender=profile.gender,
        medical_diagnoses=profile.medical_diagnoses,
        school_info=profile.school_info,
        notes=profile.notes,
        screening_results=calculate_diagnostic_probabilities(profile.symptoms or {}),
    )
