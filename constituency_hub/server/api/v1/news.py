"""
News Endpoints.

Public listing and detail of published news articles, and the content
categories used to group news and events.
"""

from typing import List, Optional

from fastapi import APIRouter, Query
from sqlalchemy import select

from constituency_hub.core.database.entities.content import Category, ContentType
from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.content import CategoryRead, NewsRead
from constituency_hub.server.services.content import NewsService
from constituency_hub.server.services.deps import SessionDep

router = APIRouter()


@router.get(
    "/news",
    response_model=Envelope[List[NewsRead]],
    summary="List News",
    description="Published news articles, newest first.",
)
async def list_news(
    session: SessionDep,
    category_slug: Optional[str] = Query(None, description="Only articles in this category"),
    featured: Optional[bool] = Query(None, description="Only featured (or non-featured) articles"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
) -> Envelope[List[NewsRead]]:
    """
    List published news.

    - **category_slug**: Filter by category slug
    - **featured**: Filter on the featured flag
    - **page** / **limit**: Pagination, at most 100 per page
    """
    articles, pagination = await NewsService(session).list_published(category_slug, featured, page, limit)
    return ok(articles, pagination)


@router.get(
    "/news/{slug}",
    response_model=Envelope[NewsRead],
    summary="Get News Article",
    responses={404: {"description": "News article not found"}},
)
async def get_news(slug: str, session: SessionDep) -> Envelope[NewsRead]:
    return ok(await NewsService(session).get_published(slug))


@router.get(
    "/categories",
    response_model=Envelope[List[CategoryRead]],
    summary="List Categories",
    description="Active content categories ordered for display.",
)
async def list_categories(
    session: SessionDep,
    content_type: Optional[ContentType] = Query(None, description="news or events"),
) -> Envelope[List[CategoryRead]]:
    query = select(Category).where(Category.is_active == True)  # noqa: E712
    if content_type:
        query = query.where(Category.content_type == content_type.value)
    result = await session.execute(query.order_by(Category.display_order, Category.name_en))
    return ok([CategoryRead.model_validate(c) for c in result.scalars().all()])
