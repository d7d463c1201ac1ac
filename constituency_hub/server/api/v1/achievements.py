"""
Achievement Endpoints.

The public showcase of completed projects and the headline figures summed
from their impact metrics.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.achievements import (
    AchievementCategoryRead,
    AchievementRead,
    AchievementStats,
)
from constituency_hub.server.services.achievements import AchievementService
from constituency_hub.server.services.deps import SessionDep

router = APIRouter()


@router.get(
    "",
    response_model=Envelope[List[AchievementRead]],
    summary="List Achievements",
    description="Active achievements ordered for display, newest first within the same order.",
)
async def list_achievements(
    session: SessionDep,
    category: Optional[str] = Query(None, description="Category slug, 'all' for every category"),
    featured: Optional[bool] = Query(None),
    year_from: Optional[int] = Query(None, ge=1900, le=2100),
    year_to: Optional[int] = Query(None, ge=1900, le=2100),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[AchievementRead]]:
    """
    List achievements.

    - **category**: Category slug
    - **featured**: Filter on the featured flag
    - **year_from** / **year_to**: Inclusive range on the achievement year
    """
    achievements, pagination = await AchievementService(session).list_active(
        category, featured, year_from, year_to, page, limit
    )
    return ok(achievements, pagination)


@router.get(
    "/stats",
    response_model=Envelope[AchievementStats],
    summary="Achievement Statistics",
)
async def achievement_stats(session: SessionDep) -> Envelope[AchievementStats]:
    return ok(await AchievementService(session).stats())


@router.get(
    "/categories",
    response_model=Envelope[List[AchievementCategoryRead]],
    summary="List Achievement Categories",
)
async def list_achievement_categories(session: SessionDep) -> Envelope[List[AchievementCategoryRead]]:
    categories = await AchievementService(session).list_categories()
    return ok([AchievementCategoryRead.model_validate(c) for c in categories])
