"""Unit tests for the achievements service."""

from datetime import date

import pytest

from constituency_hub.core.database.entities.achievements import Achievement, AchievementCategory
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.achievements import AchievementCreate, AchievementUpdate
from constituency_hub.server.services.achievements import AchievementService, _metric, summarize


@pytest.fixture
def service(session):
    return AchievementService(session)


@pytest.fixture
async def roads(session):
    category = AchievementCategory(name_en="Roads", slug="roads", display_order=1)
    session.add(category)
    session.add(AchievementCategory(name_en="Retired", slug="retired", is_active=False, display_order=2))
    await session.commit()
    return category


class TestSummarize:
    def test_metric_accepts_numbers_and_numeric_strings(self):
        metrics = {"people_helped": "1200", "investment": 2.5, "flag": True, "bad": "lots"}

        assert _metric(metrics, "people_helped") == 1200
        assert _metric(metrics, "investment") == 2.5
        assert _metric(metrics, "flag") == 0
        assert _metric(metrics, "bad") == 0
        assert _metric(metrics, "missing") == 0
        assert _metric(None, "missing") == 0

    def test_totals(self):
        achievements = [
            Achievement(title_en="Bridge", impact_metrics={"people_helped": 500, "investment": 1000000}),
            Achievement(title_en="School", impact_metrics={"people_helped": "250"}),
            Achievement(title_en="Award"),
        ]

        stats = summarize(achievements, current_year=2025, start_year=2018)

        assert stats.total_projects == 3
        assert stats.total_people_helped == 750
        assert stats.total_investment == 1000000.0
        assert stats.years_of_service == 7

    def test_years_never_negative(self):
        assert summarize([], current_year=2010, start_year=2018).years_of_service == 0


class TestAchievementService:
    async def test_create_attaches_category(self, service, roads):
        created = await service.create(
            AchievementCreate(title_en="  New road  ", category_id=roads.id, impact_metrics={"people_helped": 10})
        )

        assert created.title_en == "New road"
        assert created.category.slug == "roads"

    async def test_create_with_unknown_category(self, service):
        with pytest.raises(BadRequestError):
            await service.create(AchievementCreate(title_en="Orphan", category_id="missing"))

    def test_blank_title_rejected_by_schema(self):
        with pytest.raises(ValueError):
            AchievementCreate(title_en="   ")

    async def test_list_active_filters(self, service, roads):
        await service.create(
            AchievementCreate(title_en="Old road", category_id=roads.id, achievement_date=date(2019, 5, 1))
        )
        recent = await service.create(
            AchievementCreate(
                title_en="Clinic", achievement_date=date(2023, 2, 1), is_featured=True, display_order=1
            )
        )
        await service.create(AchievementCreate(title_en="Hidden", is_active=False))

        everything, pagination = await service.list_active()
        by_category, _ = await service.list_active(category="roads")
        all_categories, _ = await service.list_active(category="all")
        unknown, unknown_pagination = await service.list_active(category="nope")
        featured, _ = await service.list_active(featured=True)
        since_2020, _ = await service.list_active(year_from=2020)
        until_2020, _ = await service.list_active(year_to=2020)

        assert pagination.total == 2
        assert len(all_categories) == 2
        assert [a.title_en for a in by_category] == ["Old road"]
        assert unknown == [] and unknown_pagination.total == 0
        assert [a.id for a in featured] == [recent.id]
        assert [a.id for a in since_2020] == [recent.id]
        assert [a.title_en for a in until_2020] == ["Old road"]

    async def test_stats_counts_active_only(self, service):
        await service.create(AchievementCreate(title_en="A", impact_metrics={"people_helped": 5, "investment": 10}))
        await service.create(AchievementCreate(title_en="B", impact_metrics={"people_helped": 7}))
        await service.create(AchievementCreate(title_en="C", is_active=False, impact_metrics={"people_helped": 99}))

        stats = await service.stats()

        assert stats.total_projects == 2
        assert stats.total_people_helped == 12
        assert stats.total_investment == 10.0

    async def test_list_categories(self, service, roads):
        assert [c.slug for c in await service.list_categories()] == ["roads"]
        assert [c.slug for c in await service.list_categories(active_only=False)] == ["roads", "retired"]

    async def test_update(self, service):
        created = await service.create(AchievementCreate(title_en="Draft"))

        updated = await service.update(created.id, AchievementUpdate(is_featured=True, impact_metrics={"investment": 3}))

        assert updated.is_featured is True
        assert updated.impact_metrics == {"investment": 3}

        with pytest.raises(BadRequestError):
            await service.update(created.id, AchievementUpdate(title_en=" "))
        with pytest.raises(BadRequestError):
            await service.update(created.id, AchievementUpdate(category_id="missing"))

    async def test_delete(self, service):
        created = await service.create(AchievementCreate(title_en="Temporary"))

        await service.delete(created.id)

        with pytest.raises(NotFoundError):
            await service.delete(created.id)
        with pytest.raises(NotFoundError):
            await service.update("missing", AchievementUpdate(is_featured=True))
