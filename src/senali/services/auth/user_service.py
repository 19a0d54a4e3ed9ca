"""
User Service

Provisions and updates accounts for Firebase-authenticated principals.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from senali.config.logging_config import get_logger
from senali.domain.clock import utcnow
from senali.domain.enums.subscription import SubscriptionStatus, SubscriptionTier
from senali.domain.models.billing import CreditPolicy
from senali.infrastructure.auth.token_verifier import AuthenticatedPrincipal
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.repositories.user_repository import UserRepository
from senali.services.billing.subscription_service import credit_policy_from_settings

logger = get_logger(__name__)


class UserService:
    """Account provisioning and profile updates."""

    def __init__(
        self,
        session: AsyncSession,
        policy: Optional[CreditPolicy] = None,
    ) -> None:
        self._users = UserRepository(session)
        self._policy = policy or credit_policy_from_settings()

    async def get_or_provision(self, principal: AuthenticatedPrincipal) -> UserModel:
        """Load the principal's account, creating it on first use."""
        user = await self._users.get_by_id(principal.uid)
        if user is not None:
            return user
        user, _ = await self._provision(principal)
        return user

    async def sign_in(
        self,
        principal: AuthenticatedPrincipal,
        *,
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> tuple[UserModel, bool]:
        """
        Create or refresh the account behind a verified token.

        Returns:
            (user, created)
        """
        user = await self._users.get_by_id(principal.uid)
        if user is None:
            user, created = await self._provision(
                principal,
                display_name=display_name,
                photo_url=photo_url,
            )
            if created:
                return user, True

        if display_name:
            user.display_name = display_name
        if photo_url:
            user.photo_url = photo_url
        if principal.email and user.email != principal.email:
            user.email = principal.email
        user.last_login_at = utcnow()

        user = await self._users.update(user)
        logger.info("User signed in", user_id=user.id)
        return user, False

    async def update_profile(
        self,
        user: UserModel,
        *,
        full_name: Optional[str] = None,
        has_completed_profile: Optional[bool] = None,
    ) -> UserModel:
        """Update the account holder's own details."""
        if full_name is not None:
            user.full_name = full_name.strip() or None
        if has_completed_profile is not None:
            user.has_completed_profile = has_completed_profile
        return await self._users.update(user)

    async def _provision(
        self,
        principal: AuthenticatedPrincipal,
        *,
        display_name: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> tuple[UserModel, bool]:
        now = utcnow()
        user = UserModel(
            id=principal.uid,
            email=principal.email or "",
            display_name=display_name or principal.fallback_display_name,
            photo_url=photo_url or principal.picture,
            credits=self._policy.trial_credits,
            subscription=SubscriptionTier.FREE.value,
            subscription_status=SubscriptionStatus.INACTIVE.value,
            has_completed_profile=False,
            last_login_at=now,
        )
        user, created = await self._users.insert_or_get(user)
        if created:
            logger.info("User provisioned", user_id=user.id, credits=user.credits)
        else:
            logger.info("User provisioned concurrently", user_id=user.id)
        return user, created
