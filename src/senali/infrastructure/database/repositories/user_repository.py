"""
User Repository

Data access layer for user accounts and billing aggregates.
"""

from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from senali.domain.enums.subscription import SubscriptionTier
from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserModel]):
    """
    Repository for user data access.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(UserModel, session)

    async def insert_or_get(self, user: UserModel) -> tuple[UserModel, bool]:
        """
        Insert a new account unless a row with its uid already exists.

        The insert runs in a savepoint so a concurrent first request for
        the same uid leaves this session usable.

        Returns:
            (stored user, whether this call inserted it)
        """
        try:
            async with self._session.begin_nested():
                self._session.add(user)
        except IntegrityError:
            existing = await self.get_by_id(user.id)
            if existing is None:
                raise
            return existing, False

        await self._session.refresh(user)
        return user, True

    async def list_users(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
    ) -> Sequence[UserModel]:
        """List users in sign-up order."""
        result = await self._session.execute(
            select(UserModel)
            .order_by(UserModel.created_at)
            .offset(skip)
            .limit(limit)
        )
        return result.scalars().all()

    async def subscription_stats(self) -> dict[str, int]:
        """
        Aggregate user counts and outstanding credits.

        Returns:
            Dict with total_users, premium_users, free_users, total_credits
        """
        result = await self._session.execute(
            select(
                func.count(UserModel.id),
                func.coalesce(func.sum(UserModel.credits), 0),
            )
        )
        total_users, total_credits = result.one()

        result = await self._session.execute(
            select(func.count(UserModel.id)).where(
                UserModel.subscription == SubscriptionTier.PREMIUM.value
            )
        )
        premium_users = result.scalar_one()

        return {
            "total_users": int(total_users),
            "premium_users": int(premium_users),
            "free_users": int(total_users) - int(premium_users),
            "total_credits": int(total_credits),
        }

    async def spend_credits(self, user: UserModel, cost: int) -> bool:
        """
        Atomically deduct credits if the balance covers the cost.

        Returns:
            True if credits were deducted; the entity is refreshed
        """
        await self._session.flush()
        result = await self._session.execute(
            update(UserModel)
            .where(UserModel.id == user.id, UserModel.credits >= cost)
            .values(credits=UserModel.credits - cost)
            .execution_options(synchronize_session=False)
        )
        await self._session.refresh(user)
        return result.rowcount > 0

    async def add_credits(self, user: UserModel, amount: int) -> int:
        """Atomically add credits; returns the new balance."""
        await self._session.flush()
        await self._session.execute(
            update(UserModel)
            .where(UserModel.id == user.id)
            .values(credits=UserModel.credits + amount)
            .execution_options(synchronize_session=False)
        )
        await self._session.refresh(user)
        return user.credits
