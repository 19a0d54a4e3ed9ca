"""
Family Profile Repository

Profiles are always scoped to their owner: lookups take the uid so a
profile belonging to another account is indistinguishable from a
missing one.
"""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from senali.infrastructure.database.models.child_profile_model import ChildProfileModel
from senali.infrastructure.database.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[ChildProfileModel]):
    """Repository for family profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ChildProfileModel, session)

    async def list_for_user(self, user_id: str) -> Sequence[ChildProfileModel]:
        """All profiles of a user, oldest first."""
        result = await self._session.execute(
            select(ChildProfileModel)
            .where(ChildProfileModel.user_id == user_id)
            .order_by(ChildProfileModel.created_at)
        )
        return result.scalars().all()

    async def get_for_user(self, user_id: str, profile_id: UUID) -> Optional[ChildProfileModel]:
        """Get a profile by id if it belongs to the user."""
        result = await self._session.execute(
            select(ChildProfileModel).where(
                ChildProfileModel.id == profile_id,
                ChildProfileModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, user_id: str, name: str) -> Optional[ChildProfileModel]:
        """Get a profile by name (case-insensitive)."""
        result = await self._session.execute(
            select(ChildProfileModel).where(
                ChildProfileModel.user_id == user_id,
                func.lower(ChildProfileModel.name) == name.strip().lower(),
            )
        )
        return result.scalars().first()

    async def count_for_user(self, user_id: str) -> int:
        """Number of profiles a user holds."""
        result = await self._session.execute(
            select(func.count(ChildProfileModel.id)).where(
                ChildProfileModel.user_id == user_id
            )
        )
        return result.scalar_one()

    async def delete_for_user(self, user_id: str, profile_id: UUID) -> bool:
        """Delete a profile if it belongs to the user."""
        result = await self._session.execute(
            delete(ChildProfileModel).where(
                ChildProfileModel.id == profile_id,
                ChildProfileModel.user_id == user_id,
            )
        )
        return result.rowcount > 0
