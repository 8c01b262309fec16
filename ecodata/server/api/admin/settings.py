"""
Admin site settings.
"""

from typing import List

from fastapi import APIRouter, Response, status

from ecodata.core.models.io.content import SettingRead, SettingUpsert

from ..deps import AdminDep, StorageDep

router = APIRouter()


@router.get("/settings", response_model=List[SettingRead], summary="List Site Settings")
async def list_settings(storage: StorageDep, admin: AdminDep):
    return await storage.list_settings()


@router.post(
    "/settings",
    response_model=SettingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create or Update Setting",
    description="Upsert the value stored under (section, key). Returns 201 when created and 200 when updated.",
    responses={200: {"description": "Existing setting updated"}, 201: {"description": "Setting created"}},
)
async def upsert_setting(body: SettingUpsert, response: Response, storage: StorageDep, admin: AdminDep):
    setting, created = await storage.upsert_setting(body.section, body.key, body.value)
    if not created:
        response.status_code = status.HTTP_200_OK
    await storage.log_activity(
        admin.user_id,
        "create" if created else "update",
        "setting",
        setting.id,
        {"section": body.section, "key": body.key},
    )
    return setting
