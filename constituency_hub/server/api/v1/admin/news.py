"""
News administration.

Create, edit, publish and delete news articles. Publishing stamps
``published_at`` the first time an article goes live.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.database.entities.content import PublishStatus
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.content import NewsCreate, NewsRead, NewsUpdate
from constituency_hub.server.services.content import NewsService
from constituency_hub.server.services.deps import SessionDep, StaffUser

router = APIRouter()


@router.get("", response_model=Envelope[List[NewsRead]], summary="List All News")
async def list_news(
    session: SessionDep,
    status: Optional[PublishStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[NewsRead]]:
    articles, pagination = await NewsService(session).list_admin(status.value if status else None, page, limit)
    return ok(articles, pagination)


@router.get("/{news_id}", response_model=Envelope[NewsRead], summary="Get News Article")
async def get_news(news_id: str, session: SessionDep) -> Envelope[NewsRead]:
    return ok(NewsRead.model_validate(await NewsService(session).get(news_id)))


@router.post(
    "",
    response_model=Envelope[NewsRead],
    status_code=201,
    summary="Create News Article",
    responses={400: {"description": "Invalid or duplicate slug"}},
)
async def create_news(data: NewsCreate, session: SessionDep, user: StaffUser) -> Envelope[NewsRead]:
    """
    Create a news article.

    The slug is derived from ``title_en`` when omitted and the read time is
    computed from the English content.
    """
    return ok(await NewsService(session).create(data, user))


@router.put("/{news_id}", response_model=Envelope[NewsRead], summary="Update News Article")
async def update_news(news_id: str, data: NewsUpdate, session: SessionDep) -> Envelope[NewsRead]:
    return ok(await NewsService(session).update(news_id, data))


@router.delete("/{news_id}", response_model=Envelope[Deleted], summary="Delete News Article")
async def delete_news(news_id: str, session: SessionDep) -> Envelope[Deleted]:
    await NewsService(session).delete(news_id)
    return ok(Deleted(id=news_id))
