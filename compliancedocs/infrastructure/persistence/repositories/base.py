"""Base repository: generic ORM lookups and create/update/delete with flush."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from compliancedocs.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Base repository over one model.

    Works on ORM instances; subclasses expose DTO-returning methods and keep
    the ORM-level helpers (prefixed _orm) for internal use.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _orm_get(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _orm_create(self, obj: ModelType) -> ModelType:
        """Persist a new record (flush + refresh for server defaults)."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _orm_save(self, obj: ModelType) -> ModelType:
        """Flush changes on an attached instance and reload server-side values."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _orm_delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()

    async def _count(self, *criteria: Any) -> int:
        model: Any = self.model
        result = await self.db.execute(
            select(func.count(model.id)).where(*criteria)
        )
        return result.scalar() or 0
