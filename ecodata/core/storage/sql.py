"""SQLAlchemy async repository implementation.

This module provides the database-backed implementation of
``ecodata.core.storage.interfaces.EntityRepository``.

Transaction model
-----------------

Each repository method opens an ``AsyncSession``, performs its operation and
commits. This keeps persistence boundaries simple for the route layer and
guarantees every write is durable when the method returns. Sessions are
created with ``expire_on_commit=False`` so returned entities stay readable
after the session closes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Sequence, Type

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..database.base import utc_now
from .interfaces import EntityType, active_filters


@dataclass(frozen=True)
class SqlRepository(Generic[EntityType]):
    """SQL implementation of ``EntityRepository`` for one entity class."""

    session_factory: async_sessionmaker[AsyncSession]
    model: Type[EntityType]

    async def create(self, entity: EntityType) -> EntityType:
        async with self.session_factory() as s:
            s.add(entity)
            await s.commit()
            await s.refresh(entity)
            return entity

    async def get(self, entity_id: int) -> Optional[EntityType]:
        async with self.session_factory() as s:
            return await s.get(self.model, entity_id)

    async def find_one(self, **criteria: Any) -> Optional[EntityType]:
        matches = await self.list(filters=criteria, limit=1)
        return matches[0] if matches else None

    async def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = ("id",),
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[EntityType]:
        stmt = select(self.model)
        for column, value in active_filters(filters).items():
            stmt = stmt.where(getattr(self.model, column) == value)
        columns = [getattr(self.model, column) for column in order_by]
        stmt = stmt.order_by(*[column.desc() if descending else column.asc() for column in columns])
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self.session_factory() as s:
            result = await s.execute(stmt)
            return list(result.scalars().all())

    async def update(self, entity_id: int, changes: Dict[str, Any]) -> Optional[EntityType]:
        async with self.session_factory() as s:
            row = await s.get(self.model, entity_id)
            if row is None:
                return None
            for column, value in changes.items():
                setattr(row, column, value)
            if "updated_at" in self.model.model_fields and "updated_at" not in changes:
                row.updated_at = utc_now()
            s.add(row)
            await s.commit()
            await s.refresh(row)
            return row

    async def delete(self, entity_id: int) -> bool:
        async with self.session_factory() as s:
            row = await s.get(self.model, entity_id)
            if row is None:
                return False
            await s.delete(row)
            await s.commit()
            return True

    async def count(self) -> int:
        async with self.session_factory() as s:
            result = await s.execute(select(func.count()).select_from(self.model))
            return int(result.scalar_one())
