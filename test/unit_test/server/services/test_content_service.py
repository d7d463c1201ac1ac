"""Unit tests for the news and events services."""

from datetime import date, datetime, timedelta

import pytest

from constituency_hub.core.database.entities.content import Category, Event, News, PublishStatus
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.content import EventCreate, EventUpdate, NewsCreate, NewsUpdate
from constituency_hub.server.services.content import EventService, NewsService, resolve_slug

NOW = datetime(2025, 3, 10, 6, 0)


@pytest.fixture
def news_service(session):
    return NewsService(session)


@pytest.fixture
def event_service(session):
    return EventService(session, now=lambda: NOW)


@pytest.fixture
async def category(session):
    category = Category(name_en="Development", slug="development")
    session.add(category)
    await session.commit()
    return category


class TestResolveSlug:
    async def test_derived_slug_gets_suffix(self, session, news_service, moderator):
        await news_service.create(NewsCreate(title_en="Bridge Opened"), moderator)
        await news_service.create(NewsCreate(title_en="Bridge Opened"), moderator)

        assert await resolve_slug(session, News, None, "Bridge Opened") == "bridge-opened-3"

    async def test_explicit_slug_must_be_free(self, session, news_service, moderator):
        await news_service.create(NewsCreate(title_en="Bridge", slug="bridge"), moderator)

        with pytest.raises(BadRequestError, match="already in use"):
            await resolve_slug(session, News, "bridge", "ignored")

    async def test_explicit_slug_must_be_well_formed(self, session):
        with pytest.raises(BadRequestError):
            await resolve_slug(session, News, "not a slug", "ignored")

    async def test_title_without_ascii_falls_back(self, session):
        assert await resolve_slug(session, News, None, "নতুন সেতু") == "item"


class TestNews:
    async def test_create_draft_then_publish(self, news_service, moderator):
        article = await news_service.create(
            NewsCreate(title_en="Road repair", content_en=" ".join(["word"] * 450)), moderator
        )

        assert article.status == "draft"
        assert article.published_at is None
        assert article.read_time == 3

        published = await news_service.update(article.id, NewsUpdate(status=PublishStatus.PUBLISHED))
        assert published.published_at is not None

        stamped = published.published_at
        republished = await news_service.update(article.id, NewsUpdate(title_en="Road repair done"))
        assert republished.published_at == stamped

    async def test_public_listing_only_published(self, news_service, moderator, category):
        await news_service.create(NewsCreate(title_en="Draft"), moderator)
        published = await news_service.create(
            NewsCreate(title_en="Live", status=PublishStatus.PUBLISHED, category_id=category.id, is_featured=True),
            moderator,
        )

        articles, pagination = await news_service.list_published()
        by_category, _ = await news_service.list_published(category_slug="development")
        unknown, unknown_pagination = await news_service.list_published(category_slug="missing")
        featured, _ = await news_service.list_published(featured=True)

        assert [a.id for a in articles] == [published.id]
        assert pagination.total == 1
        assert by_category[0].category.slug == "development"
        assert unknown == []
        assert unknown_pagination.total == 0
        assert [a.id for a in featured] == [published.id]

    async def test_get_published_by_slug(self, news_service, moderator):
        await news_service.create(NewsCreate(title_en="Hidden draft"), moderator)
        await news_service.create(NewsCreate(title_en="Live news", status=PublishStatus.PUBLISHED), moderator)

        assert (await news_service.get_published("live-news")).title_en == "Live news"
        with pytest.raises(NotFoundError):
            await news_service.get_published("hidden-draft")

    async def test_update_content_recomputes_read_time(self, news_service, moderator):
        article = await news_service.create(NewsCreate(title_en="Short"), moderator)

        updated = await news_service.update(article.id, NewsUpdate(content_en=" ".join(["w"] * 401)))

        assert updated.read_time == 3

    async def test_delete(self, news_service, moderator):
        article = await news_service.create(NewsCreate(title_en="Gone"), moderator)

        await news_service.delete(article.id)

        with pytest.raises(NotFoundError):
            await news_service.get(article.id)


async def _event(event_service, title, when, **fields) -> Event:
    return await event_service.create(
        EventCreate(title_en=title, event_date=when, status=PublishStatus.PUBLISHED, **fields)
    )


class TestEvents:
    async def test_upcoming_and_past(self, event_service):
        soon = await _event(event_service, "Soon", NOW + timedelta(days=1))
        later = await _event(event_service, "Later", NOW + timedelta(days=5))
        earlier = await _event(event_service, "Earlier", NOW - timedelta(days=5))
        await event_service.create(EventCreate(title_en="Draft", event_date=NOW + timedelta(days=2)))

        upcoming, _ = await event_service.list_published(when="upcoming")
        past, _ = await event_service.list_published(when="past")
        everything, pagination = await event_service.list_published()

        assert [e.id for e in upcoming] == [soon.id, later.id]
        assert [e.id for e in past] == [earlier.id]
        assert pagination.total == 3
        assert everything[0].id == later.id

    async def test_end_before_start_rejected(self, event_service):
        with pytest.raises(BadRequestError):
            await event_service.create(
                EventCreate(title_en="Bad", event_date=NOW, event_end_date=NOW - timedelta(hours=1))
            )

        event = await _event(event_service, "Fine", NOW)
        with pytest.raises(BadRequestError):
            await event_service.update(event.id, EventUpdate(event_end_date=NOW - timedelta(days=1)))

    async def test_category_filter(self, event_service):
        rally = await _event(event_service, "Rally", NOW, category="rally")
        await _event(event_service, "Camp", NOW, category="health")

        rallies, _ = await event_service.list_published(category="rally")

        assert [e.id for e in rallies] == [rally.id]

    async def test_calendar_buckets_in_local_time(self, event_service):
        # 20:00 UTC on 14 March is 02:00 on 15 March in Dhaka
        late = await _event(event_service, "Late meeting", datetime(2025, 3, 14, 20, 0))
        # last evening of February UTC falls on 1 March locally
        edge = await _event(event_service, "Edge", datetime(2025, 2, 28, 19, 0))

        month = await event_service.calendar(2025, 3, today=date(2025, 3, 10))

        days = {d.date_key: d for d in month.days}
        assert len(month.days) == 31
        assert month.leading_blanks == 6
        assert month.month_name_en == "March"
        assert [e.id for e in days["2025-03-15"].events] == [late.id]
        assert [e.id for e in days["2025-03-01"].events] == [edge.id]
        assert days["2025-03-14"].events == []
        assert days["2025-03-10"].is_today is True
        assert month.year_options[0] == 1975

    async def test_calendar_rejects_bad_month(self, event_service):
        with pytest.raises(BadRequestError):
            await event_service.calendar(2025, 13)

    async def test_get_published_hides_drafts(self, event_service):
        draft = await event_service.create(EventCreate(title_en="Draft event", event_date=NOW))

        with pytest.raises(NotFoundError):
            await event_service.get_published(draft.slug)
