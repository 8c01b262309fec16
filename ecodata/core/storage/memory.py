"""In-memory repository implementation.

Used for local development, demos and as the last step of the storage
fallback chain. Rows live in a dict keyed by id; ids come from a per-table
counter starting at 1. Entities are copied on the way in and out so callers
can never mutate stored state by accident.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type

from ..database.base import utc_now
from .interfaces import EntityType, active_filters


def _clone(entity: EntityType) -> EntityType:
    return type(entity).model_validate(entity.model_dump())


class InMemoryRepository(Generic[EntityType]):
    """Dict-backed implementation of ``EntityRepository``."""

    def __init__(self, model: Type[EntityType]) -> None:
        self.model = model
        self._rows: Dict[int, EntityType] = {}
        self._next_id = 1

    async def create(self, entity: EntityType) -> EntityType:
        stored = _clone(entity)
        stored.id = self._next_id
        self._next_id += 1
        self._rows[stored.id] = stored
        return _clone(stored)

    async def get(self, entity_id: int) -> Optional[EntityType]:
        row = self._rows.get(entity_id)
        return _clone(row) if row is not None else None

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
        criteria = active_filters(filters)
        rows = [
            row
            for row in self._rows.values()
            if all(getattr(row, column) == value for column, value in criteria.items())
        ]
        rows.sort(key=lambda row: tuple(getattr(row, column) for column in order_by), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [_clone(row) for row in rows]

    async def update(self, entity_id: int, changes: Dict[str, Any]) -> Optional[EntityType]:
        row = self._rows.get(entity_id)
        if row is None:
            return None
        updated = _clone(row)
        for column, value in changes.items():
            setattr(updated, column, value)
        if "updated_at" in self.model.model_fields and "updated_at" not in changes:
            updated.updated_at = utc_now()
        self._rows[entity_id] = updated
        return _clone(updated)

    async def delete(self, entity_id: int) -> bool:
        return self._rows.pop(entity_id, None) is not None

    async def count(self) -> int:
        return len(self._rows)
