"""
Generic admin CRUD routes.

``CrudResource`` describes one content table (its repository on ``Storage``,
its I/O models and optional write checks) and ``build_crud_router`` turns it
into list, get, create, update and delete endpoints. Every write is recorded
in the activity log.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from fastapi import APIRouter, status
from sqlmodel import SQLModel

from ecodata.core.exceptions import NotFoundError
from ecodata.core.logging_config import get_logger
from ecodata.core.models.io import ApiModel, MessageResponse, PartialUpdate
from ecodata.core.security import TokenClaims
from ecodata.core.storage import EntityRepository, Storage

from ..deps import AdminDep, StorageDep

logger = get_logger(__name__)

# (storage, changes, admin claims, id being updated or None on create)
WriteCheck = Callable[[Storage, Dict[str, Any], TokenClaims, Optional[int]], Awaitable[None]]
Lister = Callable[[Storage], Awaitable[List[Any]]]


@dataclass(frozen=True)
class CrudResource:
    """One admin-managed table."""

    path: str
    label: str
    plural: str
    entity_type: str
    repository: str
    entity: Type[SQLModel]
    create_model: Type[ApiModel]
    update_model: Type[PartialUpdate]
    read_model: Type[ApiModel]
    before_write: Optional[WriteCheck] = None
    lister: Optional[Lister] = None

    def repo(self, storage: Storage) -> EntityRepository:
        return getattr(storage, self.repository)


def build_crud_router(resource: CrudResource) -> APIRouter:
    router = APIRouter(prefix=resource.path)
    create_model = resource.create_model
    update_model = resource.update_model
    read_model = resource.read_model

    async def _get_or_404(storage: Storage, entity_id: int):
        row = await resource.repo(storage).get(entity_id)
        if row is None:
            raise NotFoundError(f"{resource.label} not found")
        return row

    @router.get("", response_model=List[read_model], summary=f"List {resource.plural}")
    async def list_items(storage: StorageDep, admin: AdminDep):
        if resource.lister is not None:
            return await resource.lister(storage)
        return await resource.repo(storage).list()

    @router.get(
        "/{entity_id}",
        response_model=read_model,
        summary=f"Get {resource.label}",
        responses={404: {"description": f"{resource.label} not found"}},
    )
    async def get_item(entity_id: int, storage: StorageDep, admin: AdminDep):
        return await _get_or_404(storage, entity_id)

    @router.post(
        "",
        response_model=read_model,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {resource.label}",
        responses={400: {"description": "Invalid data"}},
    )
    async def create_item(body: create_model, storage: StorageDep, admin: AdminDep):
        data = body.model_dump()
        if resource.before_write is not None:
            await resource.before_write(storage, data, admin, None)
        row = await resource.repo(storage).create(resource.entity(**data))
        await storage.log_activity(admin.user_id, "create", resource.entity_type, row.id)
        logger.info(f"{resource.label} {row.id} created by user {admin.user_id}")
        return row

    @router.api_route(
        "/{entity_id}",
        methods=["PUT", "PATCH"],
        response_model=read_model,
        summary=f"Update {resource.label}",
        description="Partial update: only the fields sent are changed.",
        responses={404: {"description": f"{resource.label} not found"}},
    )
    async def update_item(entity_id: int, body: update_model, storage: StorageDep, admin: AdminDep):
        existing = await _get_or_404(storage, entity_id)
        changes = body.changes()
        if not changes:
            return existing
        if resource.before_write is not None:
            await resource.before_write(storage, changes, admin, entity_id)
        row = await resource.repo(storage).update(entity_id, changes)
        await storage.log_activity(
            admin.user_id, "update", resource.entity_type, entity_id, {"fields": sorted(changes)}
        )
        return row

    @router.delete(
        "/{entity_id}",
        response_model=MessageResponse,
        summary=f"Delete {resource.label}",
        responses={404: {"description": f"{resource.label} not found"}},
    )
    async def delete_item(entity_id: int, storage: StorageDep, admin: AdminDep):
        if not await resource.repo(storage).delete(entity_id):
            raise NotFoundError(f"{resource.label} not found")
        await storage.log_activity(admin.user_id, "delete", resource.entity_type, entity_id)
        logger.info(f"{resource.label} {entity_id} deleted by user {admin.user_id}")
        return MessageResponse(message=f"{resource.label} deleted successfully")

    return router
