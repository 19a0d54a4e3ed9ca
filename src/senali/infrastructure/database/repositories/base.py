"""
Repository base class.

Repositories never commit; the request's session scope does. Writes are
flushed and refreshed so server defaults are visible to the caller.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from senali.infrastructure.database.connection import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Primary-key lookup and add/flush for one mapped class."""

    def __init__(self, model: Type[ModelT], session: AsyncSession) -> None:
        self._model = model
        self._session = session

    async def get_by_id(self, id: Any) -> Optional[ModelT]:
        return await self._session.get(self._model, id)

    async def create(self, entity: ModelT) -> ModelT:
        self._session.add(entity)
        return await self._flush(entity)

    async def update(self, entity: ModelT) -> ModelT:
        """Persist changes made to an entity loaded through this session."""
        return await self._flush(entity)

    async def _flush(self, entity: ModelT) -> ModelT:
        await self._session.flush()
        await self._session.refresh(entity)
        return entity
