"""
Public Site Settings Endpoint.

Header, hero and leader blocks of the public site, with their translations.
"""

from typing import List

from fastapi import APIRouter

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.settings import SettingRead
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.site_settings import SiteSettingsService

router = APIRouter()


@router.get(
    "/{category}",
    response_model=Envelope[List[SettingRead]],
    summary="Settings by Category",
    responses={404: {"description": "Unknown or non-public category"}},
)
async def settings_by_category(category: str, session: SessionDep) -> Envelope[List[SettingRead]]:
    return ok(await SiteSettingsService(session).public_category(category))
