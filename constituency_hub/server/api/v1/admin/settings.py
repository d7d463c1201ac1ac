"""Site settings administration."""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.settings import (
    SettingBulkResult,
    SettingBulkUpdate,
    SettingCreate,
    SettingRead,
    SettingUpdate,
)
from constituency_hub.server.services.deps import SessionDep, StaffUser
from constituency_hub.server.services.site_settings import SiteSettingsService

router = APIRouter()


@router.get("", response_model=Envelope[List[SettingRead]], summary="List Settings")
async def list_settings(
    session: SessionDep,
    category: Optional[str] = Query(None),
    subcategory: Optional[str] = Query(None),
    active_only: bool = Query(False),
) -> Envelope[List[SettingRead]]:
    return ok(await SiteSettingsService(session).list_all(category, subcategory, active_only))


@router.post(
    "",
    response_model=Envelope[SettingRead],
    status_code=201,
    summary="Create Setting",
    responses={409: {"description": "Setting key already exists"}},
)
async def create_setting(data: SettingCreate, session: SessionDep, user: StaffUser) -> Envelope[SettingRead]:
    return ok(await SiteSettingsService(session).create(data, user))


@router.put("/bulk", response_model=Envelope[SettingBulkResult], summary="Bulk Update Settings")
async def bulk_update_settings(
    data: SettingBulkUpdate, session: SessionDep, user: StaffUser
) -> Envelope[SettingBulkResult]:
    """
    Update several setting values at once.

    Unknown keys are skipped and reported under ``missing``.
    """
    return ok(await SiteSettingsService(session).bulk_update(data, user))


@router.get("/{key}", response_model=Envelope[SettingRead], summary="Get Setting")
async def get_setting(key: str, session: SessionDep) -> Envelope[SettingRead]:
    return ok(await SiteSettingsService(session).get(key))


@router.put("/{key}", response_model=Envelope[SettingRead], summary="Update Setting")
async def update_setting(key: str, data: SettingUpdate, session: SessionDep, user: StaffUser) -> Envelope[SettingRead]:
    return ok(await SiteSettingsService(session).update(key, data, user))


@router.delete("/{key}", response_model=Envelope[Deleted], summary="Delete Setting")
async def delete_setting(key: str, session: SessionDep) -> Envelope[Deleted]:
    await SiteSettingsService(session).delete(key)
    return ok(Deleted(id=key))
