"""
Chat Message Repository
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from senali.infrastructure.database.models.chat_message_model import ChatMessageModel
from senali.infrastructure.database.repositories.base import BaseRepository


class ChatMessageRepository(BaseRepository[ChatMessageModel]):
    """Repository for stored conversation history."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(ChatMessageModel, session)

    async def recent_for_user(self, user_id: str, limit: int = 50) -> Sequence[ChatMessageModel]:
        """
        The latest messages of a user in chronological order.

        Args:
            user_id: Owner uid
            limit: Maximum messages to return
        """
        if limit <= 0:
            return []

        result = await self._session.execute(
            select(ChatMessageModel)
            .where(ChatMessageModel.user_id == user_id)
            .order_by(ChatMessageModel.created_at.desc())
            .limit(limit)
        )
        return list(reversed(result.scalars().all()))

    async def delete_for_user(self, user_id: str) -> int:
        """Delete a user's whole history; returns rows removed."""
        result = await self._session.execute(
            delete(ChatMessageModel).where(ChatMessageModel.user_id == user_id)
        )
        return result.rowcount or 0
