"""
News and events service.

Slugs are unique per table: an explicit clashing slug is refused, a derived
one is made unique. Publishing a news article stamps ``published_at`` the
first time.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core import calendar_grid
from constituency_hub.core.database.entities.content import Category, Event, News, PublishStatus
from constituency_hub.core.database.entities.users import User
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.models.io.content import (
    CalendarDayRead,
    CalendarMonthRead,
    CategoryRead,
    EventCreate,
    EventRead,
    EventUpdate,
    NewsCreate,
    NewsRead,
    NewsUpdate,
)
from constituency_hub.core.text import calculate_read_time, is_valid_slug, slugify
from constituency_hub.server.core.config import settings

from .pagination import paginate

logger = logging.getLogger(__name__)


async def slug_taken(session: AsyncSession, model, slug: str, exclude_id: Optional[str] = None) -> bool:
    query = select(model.id).where(model.slug == slug)
    if exclude_id:
        query = query.where(model.id != exclude_id)
    return (await session.execute(query)).first() is not None


async def resolve_slug(
    session: AsyncSession,
    model,
    explicit: Optional[str],
    source: str,
    exclude_id: Optional[str] = None,
) -> str:
    """
    Pick the slug for a row.

    An explicit slug must be well formed and free. A slug derived from
    ``source`` gets a numeric suffix until it is free.
    """
    if explicit:
        slug = explicit.strip().lower()
        if not is_valid_slug(slug):
            raise BadRequestError("Slug may only contain lowercase letters, digits and single hyphens")
        if await slug_taken(session, model, slug, exclude_id):
            raise BadRequestError(f"Slug already in use: {slug}")
        return slug

    base = slugify(source) or "item"
    slug, counter = base, 2
    while await slug_taken(session, model, slug, exclude_id):
        slug = f"{base}-{counter}"
        counter += 1
    return slug


class NewsService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _with_categories(self, articles: List[News]) -> List[NewsRead]:
        ids = {a.category_id for a in articles if a.category_id}
        categories: Dict[str, Category] = {}
        if ids:
            result = await self.session.execute(select(Category).where(Category.id.in_(ids)))
            categories = {c.id: c for c in result.scalars().all()}
        reads = []
        for article in articles:
            read = NewsRead.model_validate(article)
            if article.category_id in categories:
                read.category = CategoryRead.model_validate(categories[article.category_id])
            reads.append(read)
        return reads

    async def list_published(
        self,
        category_slug: Optional[str] = None,
        featured: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[NewsRead], Pagination]:
        query = select(News).where(News.status == PublishStatus.PUBLISHED.value)
        if category_slug:
            category = (
                await self.session.execute(select(Category).where(Category.slug == category_slug))
            ).scalars().first()
            if category is None:
                return [], Pagination.build(page=max(1, page), limit=max(1, limit), total=0)
            query = query.where(News.category_id == category.id)
        if featured is not None:
            query = query.where(News.is_featured == featured)
        query = query.order_by(News.published_at.desc(), News.created_at.desc())
        articles, pagination = await paginate(self.session, query, page=page, limit=limit)
        return await self._with_categories(articles), pagination

    async def get_published(self, slug: str) -> NewsRead:
        result = await self.session.execute(
            select(News).where(News.slug == slug, News.status == PublishStatus.PUBLISHED.value)
        )
        article = result.scalars().first()
        if article is None:
            raise NotFoundError("News article not found")
        return (await self._with_categories([article]))[0]

    async def list_admin(
        self, status: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[NewsRead], Pagination]:
        query = select(News)
        if status:
            query = query.where(News.status == status)
        articles, pagination = await paginate(self.session, query.order_by(News.created_at.desc()), page, limit)
        return await self._with_categories(articles), pagination

    async def get(self, news_id: str) -> News:
        article = await self.session.get(News, news_id)
        if article is None:
            raise NotFoundError("News article not found")
        return article

    async def create(self, data: NewsCreate, author: User) -> NewsRead:
        payload = plain_values(data.model_dump())
        payload["slug"] = await resolve_slug(self.session, News, data.slug, data.title_en)
        payload["read_time"] = data.read_time or calculate_read_time(data.content_en or data.content_bn or "")
        article = News(**payload, author_id=author.id)
        if article.status == PublishStatus.PUBLISHED.value:
            article.published_at = utc_now_naive()
        self.session.add(article)
        await self.session.commit()
        await self.session.refresh(article)
        logger.info(f"News {article.slug} created by {author.email} as {article.status}")
        return (await self._with_categories([article]))[0]

    async def update(self, news_id: str, data: NewsUpdate) -> NewsRead:
        article = await self.get(news_id)
        update = plain_values(data.model_dump(exclude_unset=True))
        if "slug" in update:
            update["slug"] = await resolve_slug(
                self.session, News, update["slug"], update.get("title_en") or article.title_en, exclude_id=article.id
            )
        if "read_time" not in update and ("content_en" in update or "content_bn" in update):
            update["read_time"] = calculate_read_time(
                update.get("content_en") or article.content_en or update.get("content_bn") or ""
            )
        for key, value in update.items():
            setattr(article, key, value)
        if article.status == PublishStatus.PUBLISHED.value and article.published_at is None:
            article.published_at = utc_now_naive()
        article.updated_at = utc_now_naive()
        self.session.add(article)
        await self.session.commit()
        await self.session.refresh(article)
        return (await self._with_categories([article]))[0]

    async def delete(self, news_id: str) -> None:
        article = await self.get(news_id)
        await self.session.delete(article)
        await self.session.commit()


class EventService:
    def __init__(self, session: AsyncSession, now=utc_now_naive):
        self.session = session
        self._now = now

    async def list_published(
        self,
        when: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Event], Pagination]:
        """
        Published events. ``when=upcoming`` lists future events soonest first,
        ``when=past`` lists earlier ones most recent first.
        """
        now = self._now()
        query = select(Event).where(Event.status == PublishStatus.PUBLISHED.value)
        if category:
            query = query.where(Event.category == category)
        if when == "upcoming":
            query = query.where(Event.event_date >= now).order_by(Event.event_date.asc())
        elif when == "past":
            query = query.where(Event.event_date < now).order_by(Event.event_date.desc())
        else:
            query = query.order_by(Event.event_date.desc())
        return await paginate(self.session, query, page=page, limit=limit)

    async def get_published(self, slug: str) -> Event:
        result = await self.session.execute(
            select(Event).where(Event.slug == slug, Event.status == PublishStatus.PUBLISHED.value)
        )
        event = result.scalars().first()
        if event is None:
            raise NotFoundError("Event not found")
        return event

    async def calendar(self, year: int, month: int, today: Optional[date] = None) -> CalendarMonthRead:
        """
        Month grid for the public calendar.

        Events are fetched with a one-day margin on both sides so that events
        near midnight UTC land on the right local day.
        """
        if not 1 <= month <= 12:
            raise BadRequestError("Month must be between 1 and 12")
        tz = ZoneInfo(settings.site.timezone)
        start = datetime(year, month, 1)
        end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
        query = (
            select(Event)
            .where(Event.status == PublishStatus.PUBLISHED.value)
            .where(Event.event_date >= start - timedelta(days=1))
            .where(Event.event_date < end + timedelta(days=1))
            .order_by(Event.event_date.asc())
        )
        events = list((await self.session.execute(query)).scalars().all())

        if today is None:
            today = datetime.now(tz).date()
        grid = calendar_grid.build_month_grid(year, month, events, today=today, tz=tz)
        return CalendarMonthRead(
            year=year,
            month=month,
            month_name_en=calendar_grid.month_name(month, "en"),
            month_name_bn=calendar_grid.month_name(month, "bn"),
            leading_blanks=grid.leading_blanks,
            day_names_en=calendar_grid.day_names("en"),
            day_names_bn=calendar_grid.day_names("bn"),
            days=[
                CalendarDayRead(
                    day=cell.day,
                    date_key=cell.date_key,
                    is_today=cell.is_today,
                    events=[EventRead.model_validate(e) for e in cell.events],
                )
                for cell in grid.cells
            ],
            year_options=calendar_grid.year_options(today.year),
        )

    async def get(self, event_id: str) -> Event:
        event = await self.session.get(Event, event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    async def list_admin(
        self, status: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[Event], Pagination]:
        query = select(Event)
        if status:
            query = query.where(Event.status == status)
        return await paginate(self.session, query.order_by(Event.event_date.desc()), page, limit)

    async def create(self, data: EventCreate) -> Event:
        if data.event_end_date and data.event_end_date < data.event_date:
            raise BadRequestError("Event end must not be before its start")
        payload = plain_values(data.model_dump())
        payload["slug"] = await resolve_slug(self.session, Event, data.slug, data.title_en)
        event = Event(**payload)
        self.session.add(event)
        await self.session.commit()
        await self.session.refresh(event)
        logger.info(f"Event {event.slug} created for {event.event_date:%Y-%m-%d}")
        return event

    async def update(self, event_id: str, data: EventUpdate) -> Event:
        event = await self.get(event_id)
        update = plain_values(data.model_dump(exclude_unset=True))
        if "slug" in update:
            update["slug"] = await resolve_slug(
                self.session, Event, update["slug"], update.get("title_en") or event.title_en, exclude_id=event.id
            )
        for key, value in update.items():
            setattr(event, key, value)
        if event.event_end_date and event.event_end_date < event.event_date:
            raise BadRequestError("Event end must not be before its start")
        event.updated_at = utc_now_naive()
        self.session.add(event)
        await self.session.commit()
        await self.session.refresh(event)
        return event

    async def delete(self, event_id: str) -> None:
        event = await self.get(event_id)
        await self.session.delete(event)
        await self.session.commit()
