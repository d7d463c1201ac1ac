"""
Site settings service.

Settings are keyed values grouped by category. Only a few categories are
readable without authentication; everything else is back-office only.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.settings import SettingTranslation, SiteSetting
from constituency_hub.core.database.entities.users import User
from constituency_hub.core.database.utils import utc_now_naive
from constituency_hub.core.exceptions import ConflictError, NotFoundError
from constituency_hub.core.models.io.settings import (
    SettingBulkResult,
    SettingBulkUpdate,
    SettingCreate,
    SettingRead,
    SettingUpdate,
)

logger = logging.getLogger(__name__)

PUBLIC_SETTING_CATEGORIES = ("header", "hero", "leaders")


class SiteSettingsService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _translations(self, setting_ids: List[str]) -> Dict[str, Dict[str, str]]:
        if not setting_ids:
            return {}
        result = await self.session.execute(
            select(SettingTranslation).where(SettingTranslation.setting_id.in_(setting_ids))
        )
        grouped: Dict[str, Dict[str, str]] = {}
        for row in result.scalars().all():
            grouped.setdefault(row.setting_id, {})[row.language_code] = row.translated_value
        return grouped

    async def _to_reads(self, settings: List[SiteSetting]) -> List[SettingRead]:
        translations = await self._translations([s.id for s in settings])
        reads = []
        for setting in settings:
            read = SettingRead.model_validate(setting)
            read.translations = translations.get(setting.id, {})
            reads.append(read)
        return reads

    async def _replace_translations(self, setting_id: str, translations: Dict[str, str]) -> None:
        await self.session.execute(delete(SettingTranslation).where(SettingTranslation.setting_id == setting_id))
        for language_code, value in translations.items():
            self.session.add(
                SettingTranslation(setting_id=setting_id, language_code=language_code, translated_value=value)
            )

    async def _by_key(self, key: str) -> SiteSetting:
        result = await self.session.execute(select(SiteSetting).where(SiteSetting.setting_key == key))
        setting = result.scalars().first()
        if setting is None:
            raise NotFoundError(f"Setting not found: {key}")
        return setting

    async def public_category(self, category: str) -> List[SettingRead]:
        if category not in PUBLIC_SETTING_CATEGORIES:
            raise NotFoundError(f"Settings category not found: {category}")
        return await self.list_all(category=category, active_only=True)

    async def list_all(
        self,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        active_only: bool = False,
    ) -> List[SettingRead]:
        query = select(SiteSetting)
        if category:
            query = query.where(SiteSetting.category == category)
        if subcategory:
            query = query.where(SiteSetting.subcategory == subcategory)
        if active_only:
            query = query.where(SiteSetting.is_active == True)  # noqa: E712
        result = await self.session.execute(query.order_by(SiteSetting.category, SiteSetting.display_order))
        return await self._to_reads(list(result.scalars().all()))

    async def get(self, key: str) -> SettingRead:
        return (await self._to_reads([await self._by_key(key)]))[0]

    async def create(self, data: SettingCreate, user: User) -> SettingRead:
        exists = await self.session.execute(select(SiteSetting.id).where(SiteSetting.setting_key == data.setting_key))
        if exists.first() is not None:
            raise ConflictError(f"Setting already exists: {data.setting_key}")
        setting = SiteSetting(updated_by=user.id, **data.model_dump(exclude={"translations"}))
        self.session.add(setting)
        await self.session.flush()
        await self._replace_translations(setting.id, data.translations)
        await self.session.commit()
        await self.session.refresh(setting)
        return await self.get(setting.setting_key)

    async def update(self, key: str, data: SettingUpdate, user: User) -> SettingRead:
        """Update one setting. A non-empty ``translations`` map replaces the stored ones."""
        setting = await self._by_key(key)
        for field, value in data.model_dump(exclude_unset=True, exclude={"translations"}).items():
            setattr(setting, field, value)
        if data.translations:
            await self._replace_translations(setting.id, data.translations)
        setting.updated_by = user.id
        setting.updated_at = utc_now_naive()
        self.session.add(setting)
        await self.session.commit()
        logger.info(f"Setting {key} updated by {user.email}")
        return await self.get(key)

    async def bulk_update(self, data: SettingBulkUpdate, user: User) -> SettingBulkResult:
        """Apply several value changes in one transaction, reporting keys that do not exist."""
        updated: List[str] = []
        missing: List[str] = []
        for item in data.settings:
            result = await self.session.execute(select(SiteSetting).where(SiteSetting.setting_key == item.setting_key))
            setting = result.scalars().first()
            if setting is None:
                missing.append(item.setting_key)
                continue
            setting.setting_value = item.setting_value
            setting.updated_by = user.id
            setting.updated_at = utc_now_naive()
            self.session.add(setting)
            if item.translations:
                await self._replace_translations(setting.id, item.translations)
            updated.append(item.setting_key)
        await self.session.commit()
        logger.info(f"Bulk settings update by {user.email}: {len(updated)} updated, {len(missing)} missing")
        return SettingBulkResult(updated=updated, missing=missing)

    async def delete(self, key: str) -> None:
        setting = await self._by_key(key)
        await self.session.execute(delete(SettingTranslation).where(SettingTranslation.setting_id == setting.id))
        await self.session.delete(setting)
        await self.session.commit()
