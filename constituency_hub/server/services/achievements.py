"""Achievements showcase: filtered listing and aggregate impact statistics."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.achievements import Achievement, AchievementCategory
from constituency_hub.core.database.utils import utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.achievements import (
    AchievementCategoryRead,
    AchievementCreate,
    AchievementRead,
    AchievementStats,
    AchievementUpdate,
)
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.server.core.config import settings

from .pagination import paginate

logger = logging.getLogger(__name__)


def _metric(metrics: Dict[str, Any], key: str) -> float:
    value = (metrics or {}).get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value) if value is not None else 0
    except (TypeError, ValueError):
        return 0


def summarize(achievements: List[Achievement], current_year: int, start_year: int) -> AchievementStats:
    """Sum ``people_helped`` and ``investment`` across ``impact_metrics``; every achievement counts as a project."""
    return AchievementStats(
        total_projects=len(achievements),
        total_people_helped=int(sum(_metric(a.impact_metrics, "people_helped") for a in achievements)),
        total_investment=float(sum(_metric(a.impact_metrics, "investment") for a in achievements)),
        years_of_service=max(0, current_year - start_year),
    )


class AchievementService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _with_categories(self, achievements: List[Achievement]) -> List[AchievementRead]:
        ids = {a.category_id for a in achievements if a.category_id}
        categories: Dict[str, AchievementCategory] = {}
        if ids:
            result = await self.session.execute(select(AchievementCategory).where(AchievementCategory.id.in_(ids)))
            categories = {c.id: c for c in result.scalars().all()}
        reads = []
        for achievement in achievements:
            read = AchievementRead.model_validate(achievement)
            if achievement.category_id in categories:
                read.category = AchievementCategoryRead.model_validate(categories[achievement.category_id])
            reads.append(read)
        return reads

    async def list_active(
        self,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        year_from: Optional[int] = None,
        year_to: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[AchievementRead], Pagination]:
        query = select(Achievement).where(Achievement.is_active == True)  # noqa: E712
        if category and category != "all":
            row = (
                await self.session.execute(select(AchievementCategory).where(AchievementCategory.slug == category))
            ).scalars().first()
            if row is None:
                return [], Pagination.build(page=max(1, page), limit=max(1, limit), total=0)
            query = query.where(Achievement.category_id == row.id)
        if featured is not None:
            query = query.where(Achievement.is_featured == featured)
        if year_from is not None:
            query = query.where(Achievement.achievement_date >= date(year_from, 1, 1))
        if year_to is not None:
            query = query.where(Achievement.achievement_date <= date(year_to, 12, 31))
        query = query.order_by(Achievement.display_order.asc(), Achievement.achievement_date.desc())
        achievements, pagination = await paginate(self.session, query, page=page, limit=limit)
        return await self._with_categories(achievements), pagination

    async def stats(self) -> AchievementStats:
        result = await self.session.execute(select(Achievement).where(Achievement.is_active == True))  # noqa: E712
        return summarize(list(result.scalars().all()), utc_now_naive().year, settings.site.service_start_year)

    async def list_categories(self, active_only: bool = True) -> List[AchievementCategory]:
        query = select(AchievementCategory)
        if active_only:
            query = query.where(AchievementCategory.is_active == True)  # noqa: E712
        result = await self.session.execute(query.order_by(AchievementCategory.display_order))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def list_admin(self, page: int = 1, limit: int = 50) -> Tuple[List[AchievementRead], Pagination]:
        query = select(Achievement).order_by(Achievement.display_order.asc(), Achievement.created_at.desc())
        achievements, pagination = await paginate(self.session, query, page=page, limit=limit)
        return await self._with_categories(achievements), pagination

    async def _check_category(self, category_id: Optional[str]) -> None:
        if category_id and await self.session.get(AchievementCategory, category_id) is None:
            raise BadRequestError("Unknown achievement category")

    async def create(self, data: AchievementCreate) -> AchievementRead:
        await self._check_category(data.category_id)
        achievement = Achievement(**data.model_dump())
        self.session.add(achievement)
        await self.session.commit()
        await self.session.refresh(achievement)
        logger.info(f"Achievement {achievement.id} created: {achievement.title_en}")
        return (await self._with_categories([achievement]))[0]

    async def update(self, achievement_id: str, data: AchievementUpdate) -> AchievementRead:
        achievement = await self.session.get(Achievement, achievement_id)
        if achievement is None:
            raise NotFoundError("Achievement not found")
        update = data.model_dump(exclude_unset=True)
        if "title_en" in update and not (update["title_en"] or "").strip():
            raise BadRequestError("English title is required")
        if "category_id" in update:
            await self._check_category(update["category_id"])
        for key, value in update.items():
            setattr(achievement, key, value)
        achievement.updated_at = utc_now_naive()
        self.session.add(achievement)
        await self.session.commit()
        await self.session.refresh(achievement)
        return (await self._with_categories([achievement]))[0]

    async def delete(self, achievement_id: str) -> None:
        achievement = await self.session.get(Achievement, achievement_id)
        if achievement is None:
            raise NotFoundError("Achievement not found")
        await self.session.delete(achievement)
        await self.session.commit()
