"""
Content category administration.

Categories group news articles and events. A category still referenced by a
news article cannot be deleted.
"""

from typing import List, Optional

from fastapi import APIRouter, Query
from sqlalchemy import select

from constituency_hub.core.database.entities.content import Category, ContentType, News
from constituency_hub.core.database.utils import plain_values
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.logging_config import get_logger
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.content import CategoryCreate, CategoryRead, CategoryUpdate
from constituency_hub.server.services.content import resolve_slug
from constituency_hub.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


async def _get_category(session, category_id: str) -> Category:
    category = await session.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


@router.get("", response_model=Envelope[List[CategoryRead]], summary="List All Categories")
async def list_categories(
    session: SessionDep,
    content_type: Optional[ContentType] = Query(None),
) -> Envelope[List[CategoryRead]]:
    query = select(Category)
    if content_type:
        query = query.where(Category.content_type == content_type.value)
    result = await session.execute(query.order_by(Category.display_order, Category.name_en))
    return ok([CategoryRead.model_validate(c) for c in result.scalars().all()])


@router.post(
    "",
    response_model=Envelope[CategoryRead],
    status_code=201,
    summary="Create Category",
    responses={400: {"description": "Invalid or duplicate slug"}},
)
async def create_category(data: CategoryCreate, session: SessionDep) -> Envelope[CategoryRead]:
    payload = plain_values(data.model_dump())
    payload["slug"] = await resolve_slug(session, Category, data.slug, data.name_en)
    category = Category(**payload)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    logger.info(f"Created category {category.slug}")
    return ok(CategoryRead.model_validate(category))


@router.put("/{category_id}", response_model=Envelope[CategoryRead], summary="Update Category")
async def update_category(category_id: str, data: CategoryUpdate, session: SessionDep) -> Envelope[CategoryRead]:
    category = await _get_category(session, category_id)
    update = plain_values(data.model_dump(exclude_unset=True))
    if "slug" in update:
        update["slug"] = await resolve_slug(
            session, Category, update["slug"], update.get("name_en") or category.name_en, exclude_id=category.id
        )
    for key, value in update.items():
        setattr(category, key, value)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return ok(CategoryRead.model_validate(category))


@router.delete(
    "/{category_id}",
    response_model=Envelope[Deleted],
    summary="Delete Category",
    responses={400: {"description": "Category still has news articles"}},
)
async def delete_category(category_id: str, session: SessionDep) -> Envelope[Deleted]:
    category = await _get_category(session, category_id)
    in_use = await session.execute(select(News.id).where(News.category_id == category.id).limit(1))
    if in_use.first() is not None:
        raise BadRequestError("Category is still used by news articles")
    await session.delete(category)
    await session.commit()
    return ok(Deleted(id=category_id))
