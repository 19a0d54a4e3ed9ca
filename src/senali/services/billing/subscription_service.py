"""
Subscription Service

Credit accounting and subscription lifecycle:
- Trial credits at sign-up (granted by the user service)
- One credit per AI request
- In-app credit packs
- Monthly premium subscription with refills
- Admin adjustments and statistics

Store receipts are not verified; purchase tokens are accepted as given
and never logged.
"""

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from senali.config import get_settings
from senali.config.logging_config import get_logger
from senali.config.settings import BillingSettings
from senali.domain.clock import utcnow
from senali.domain.enums.subscription import (
    StorePlatform,
    SubscriptionStatus,
    SubscriptionTier,
)
from senali.domain.models.billing import CreditPolicy
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.repositories.user_repository import UserRepository
from senali.infrastructure.metrics.prometheus_metrics import track_credit_spend
from senali.services.errors import (
    InsufficientCreditsError,
    NotFoundError,
    SubscriptionStateError,
)

logger = get_logger(__name__)


def credit_policy_from_settings(billing: Optional[BillingSettings] = None) -> CreditPolicy:
    """Build the credit policy from billing settings."""
    billing = billing or get_settings().billing
    return CreditPolicy(
        trial_credits=billing.trial_credits,
        monthly_credits=billing.monthly_credits,
        refill_interval_days=billing.refill_interval_days,
        credits_per_message=billing.credits_per_message,
        free_profile_limit=billing.free_profile_limit,
        credit_packs=dict(billing.credit_packs),
    )


class SubscriptionService:
    """
    Credit and subscription operations on a user account.

    Usage:
        service = SubscriptionService(session)
        remaining = await service.spend(user, feature="chat")
    """

    def __init__(
        self,
        session: AsyncSession,
        policy: Optional[CreditPolicy] = None,
    ) -> None:
        self._users = UserRepository(session)
        self._policy = policy or credit_policy_from_settings()

    @property
    def policy(self) -> CreditPolicy:
        return self._policy

    def status(self, user: UserModel) -> dict[str, Any]:
        """Current credit and subscription state."""
        return {
            "credits": user.credits,
            "subscription": user.subscription,
            "subscription_status": user.subscription_status,
            "subscription_platform": user.subscription_platform,
            "last_credit_refill": user.last_credit_refill,
            "credit_packs": dict(self._policy.credit_packs),
        }

    def ensure_can_afford(self, user: UserModel, cost: Optional[int] = None) -> None:
        """
        Raises:
            InsufficientCreditsError: If the balance does not cover the cost
        """
        required = cost if cost is not None else self._policy.credits_per_message
        if not self._policy.can_afford(user.credits, required):
            raise InsufficientCreditsError(credits=user.credits, required=required)

    async def spend(
        self,
        user: UserModel,
        *,
        feature: str,
        cost: Optional[int] = None,
    ) -> int:
        """
        Charge an AI request.

        Returns:
            Remaining credits

        Raises:
            InsufficientCreditsError: If the balance no longer covers the cost
        """
        required = cost if cost is not None else self._policy.credits_per_message
        if not await self._users.spend_credits(user, required):
            raise InsufficientCreditsError(credits=user.credits, required=required)

        track_credit_spend(feature, required)
        logger.debug("Credits spent", feature=feature, cost=required, remaining=user.credits)
        return user.credits

    async def purchase_credits(
        self,
        user: UserModel,
        *,
        purchase_token: str,
        platform: StorePlatform,
        pack: Optional[str] = None,
        credits: Optional[int] = None,
    ) -> int:
        """
        Add purchased credits.

        Either a named pack or an explicit positive credit amount.

        Returns:
            New credit balance

        Raises:
            SubscriptionStateError: Unknown pack or no positive amount
        """
        if pack is not None:
            try:
                amount = self._policy.credits_for_pack(pack)
            except KeyError:
                raise SubscriptionStateError(f"Unknown credit pack: {pack}") from None
        elif credits is not None and credits > 0:
            amount = credits
        else:
            raise SubscriptionStateError("A credit pack or a positive credit amount is required")

        new_balance = await self._users.add_credits(user, amount)

        logger.info(
            "Credits purchased",
            user_id=user.id,
            credits_added=amount,
            platform=platform.value,
        )
        return new_balance

    async def activate(
        self,
        user: UserModel,
        *,
        subscription_id: str,
        platform: StorePlatform,
        now: Optional[datetime] = None,
    ) -> UserModel:
        """Start a premium subscription and grant the monthly allowance."""
        user.subscription = SubscriptionTier.PREMIUM.value
        user.subscription_status = SubscriptionStatus.ACTIVE.value
        user.subscription_platform = platform.value
        user.subscription_id = subscription_id
        user.last_credit_refill = now or utcnow()

        await self._users.add_credits(user, self._policy.monthly_credits)

        logger.info("Subscription activated", user_id=user.id, platform=platform.value)
        return user

    async def cancel(self, user: UserModel) -> UserModel:
        """Cancel the subscription; remaining credits are kept."""
        user.subscription = SubscriptionTier.FREE.value
        user.subscription_status = SubscriptionStatus.CANCELLED.value
        user.subscription_platform = None
        user.subscription_id = None

        user = await self._users.update(user)
        logger.info("Subscription cancelled", user_id=user.id)
        return user

    async def refill(self, user: UserModel, now: Optional[datetime] = None) -> UserModel:
        """
        Reset a premium subscriber's balance to the monthly allowance.

        Raises:
            SubscriptionStateError: Not an active premium subscriber, or
                the refill interval has not elapsed
        """
        if not self._policy.is_active_premium(user.subscription, user.subscription_status):
            raise SubscriptionStateError("An active premium subscription is required")

        now = now or utcnow()
        if not self._policy.refill_due(user.last_credit_refill, now):
            raise SubscriptionStateError(
                f"Credits can be refilled once every {self._policy.refill_interval_days} days"
            )

        user.credits = self._policy.monthly_credits
        user.last_credit_refill = now
        user = await self._users.update(user)

        logger.info("Credits refilled", user_id=user.id, credits=user.credits)
        return user

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    async def admin_adjust(self, user_id: str, credit_change: int) -> UserModel:
        """
        Add or remove credits from any account, never below zero.

        Raises:
            NotFoundError: Unknown user
        """
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        previous = user.credits
        user.credits = self._policy.adjusted(previous, credit_change)
        user = await self._users.update(user)

        logger.info(
            "Credits adjusted by admin",
            user_id=user_id,
            previous=previous,
            credits=user.credits,
        )
        return user

    async def list_users(self, *, skip: int = 0, limit: int = 100) -> Sequence[UserModel]:
        return await self._users.list_users(skip=skip, limit=limit)

    async def stats(self) -> dict[str, int]:
        return await self._users.subscription_stats()
