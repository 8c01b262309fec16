"""Repository interface contract.

The ``Storage`` facade depends on this Protocol instead of a concrete
persistence implementation, so the same domain operations run unchanged on
the in-memory backend and on a SQL database.

Contract guidelines
-------------------

- All methods are async.
- Implementations never leak sessions: returned entities are detached
  snapshots, and mutating one does not change the stored row until it is
  passed back through ``update``.
- ``update`` and ``delete`` on an unknown id are no-ops that report the miss
  (``None`` / ``False``).
- ``update`` refreshes ``updated_at`` when the entity has that column.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, TypeVar

from sqlmodel import SQLModel

EntityType = TypeVar("EntityType", bound=SQLModel)


class EntityRepository(Protocol[EntityType]):
    """Persist and query one table."""

    async def create(self, entity: EntityType) -> EntityType:
        """
        Insert a new row.

        Args:
            entity: Entity without an id; the id is assigned by the backend.

        Returns:
            The stored entity with its id populated.
        """
        ...

    async def get(self, entity_id: int) -> Optional[EntityType]:
        """Return the row with the given primary key, or None."""
        ...

    async def find_one(self, **criteria: Any) -> Optional[EntityType]:
        """Return the first row whose columns equal every given value."""
        ...

    async def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = ("id",),
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[EntityType]:
        """
        List rows.

        Args:
            filters: Column equality filters; ``None`` values are ignored.
            order_by: Non-nullable columns to sort on.
            descending: Reverse the sort order.
            limit: Maximum number of rows to return.
        """
        ...

    async def update(self, entity_id: int, changes: Dict[str, Any]) -> Optional[EntityType]:
        """Apply ``changes`` to a row and return the updated entity, or None when missing."""
        ...

    async def delete(self, entity_id: int) -> bool:
        """Delete a row; True if it existed."""
        ...

    async def count(self) -> int:
        """Number of rows in the table."""
        ...


def active_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop filters whose value is None."""
    return {key: value for key, value in (filters or {}).items() if value is not None}
