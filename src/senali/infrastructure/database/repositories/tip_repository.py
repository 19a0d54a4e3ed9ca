"""
Daily Tip Repository
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from senali.infrastructure.database.models.daily_tip_model import DailyTipModel
from senali.infrastructure.database.repositories.base import BaseRepository


class TipRepository(BaseRepository[DailyTipModel]):
    """Repository for generated tips and their feedback."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(DailyTipModel, session)

    async def get_for_user(self, user_id: str, tip_id: UUID) -> Optional[DailyTipModel]:
        """Get a tip if it belongs to the user."""
        result = await self._session.execute(
            select(DailyTipModel).where(
                DailyTipModel.id == tip_id,
                DailyTipModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def latest_since(self, user_id: str, since: datetime) -> Optional[DailyTipModel]:
        """Most recent tip created at or after a point in time."""
        result = await self._session.execute(
            select(DailyTipModel)
            .where(
                DailyTipModel.user_id == user_id,
                DailyTipModel.created_at >= since,
            )
            .order_by(DailyTipModel.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def recent_for_user(self, user_id: str, limit: int = 10) -> Sequence[DailyTipModel]:
        """Latest tips, newest first."""
        result = await self._session.execute(
            select(DailyTipModel)
            .where(DailyTipModel.user_id == user_id)
            .order_by(DailyTipModel.created_at.desc())
            .limit(limit)
        )
        return result.scalars().all()
