"""Achievement and achievement category administration."""

from typing import List

from fastapi import APIRouter, Query
from sqlalchemy import select

from constituency_hub.core.database.entities.achievements import Achievement, AchievementCategory
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.achievements import (
    AchievementCategoryCreate,
    AchievementCategoryRead,
    AchievementCategoryUpdate,
    AchievementCreate,
    AchievementRead,
    AchievementUpdate,
)
from constituency_hub.server.services.achievements import AchievementService
from constituency_hub.server.services.content import resolve_slug
from constituency_hub.server.services.deps import SessionDep

router = APIRouter()


@router.get("/categories", response_model=Envelope[List[AchievementCategoryRead]], summary="List All Categories")
async def list_categories(session: SessionDep) -> Envelope[List[AchievementCategoryRead]]:
    categories = await AchievementService(session).list_categories(active_only=False)
    return ok([AchievementCategoryRead.model_validate(c) for c in categories])


@router.post(
    "/categories",
    response_model=Envelope[AchievementCategoryRead],
    status_code=201,
    summary="Create Category",
)
async def create_category(data: AchievementCategoryCreate, session: SessionDep) -> Envelope[AchievementCategoryRead]:
    payload = data.model_dump()
    payload["slug"] = await resolve_slug(session, AchievementCategory, data.slug, data.name_en)
    category = AchievementCategory(**payload)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return ok(AchievementCategoryRead.model_validate(category))


@router.put("/categories/{category_id}", response_model=Envelope[AchievementCategoryRead], summary="Update Category")
async def update_category(
    category_id: str, data: AchievementCategoryUpdate, session: SessionDep
) -> Envelope[AchievementCategoryRead]:
    category = await session.get(AchievementCategory, category_id)
    if category is None:
        raise NotFoundError("Achievement category not found")
    update = data.model_dump(exclude_unset=True)
    if "slug" in update:
        update["slug"] = await resolve_slug(
            session,
            AchievementCategory,
            update["slug"],
            update.get("name_en") or category.name_en,
            exclude_id=category.id,
        )
    for key, value in update.items():
        setattr(category, key, value)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return ok(AchievementCategoryRead.model_validate(category))


@router.delete("/categories/{category_id}", response_model=Envelope[Deleted], summary="Delete Category")
async def delete_category(category_id: str, session: SessionDep) -> Envelope[Deleted]:
    category = await session.get(AchievementCategory, category_id)
    if category is None:
        raise NotFoundError("Achievement category not found")
    in_use = await session.execute(select(Achievement.id).where(Achievement.category_id == category.id).limit(1))
    if in_use.first() is not None:
        raise BadRequestError("Category is still used by achievements")
    await session.delete(category)
    await session.commit()
    return ok(Deleted(id=category_id))


@router.get("", response_model=Envelope[List[AchievementRead]], summary="List All Achievements")
async def list_achievements(
    session: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
) -> Envelope[List[AchievementRead]]:
    achievements, pagination = await AchievementService(session).list_admin(page, limit)
    return ok(achievements, pagination)


@router.post(
    "",
    response_model=Envelope[AchievementRead],
    status_code=201,
    summary="Create Achievement",
    responses={400: {"description": "Missing English title or unknown category"}},
)
async def create_achievement(data: AchievementCreate, session: SessionDep) -> Envelope[AchievementRead]:
    return ok(await AchievementService(session).create(data))


@router.put("/{achievement_id}", response_model=Envelope[AchievementRead], summary="Update Achievement")
async def update_achievement(
    achievement_id: str, data: AchievementUpdate, session: SessionDep
) -> Envelope[AchievementRead]:
    return ok(await AchievementService(session).update(achievement_id, data))


@router.delete("/{achievement_id}", response_model=Envelope[Deleted], summary="Delete Achievement")
async def delete_achievement(achievement_id: str, session: SessionDep) -> Envelope[Deleted]:
    await AchievementService(session).delete(achievement_id)
    return ok(Deleted(id=achievement_id))
