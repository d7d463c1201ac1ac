"""Site settings, achievements and SMS endpoints."""

import pytest
from httpx import AsyncClient

from constituency_hub.server.services.sms import INVALID_PHONE_MESSAGE, NOT_CONFIGURED_MESSAGE

pytestmark = pytest.mark.asyncio


class TestSettings:
    async def test_public_categories(self, client: AsyncClient, staff_headers):
        for key, category in [("hero_title", "hero"), ("sms_footer", "sms")]:
            response = await client.post(
                "/api/v1/admin/settings",
                json={"setting_key": key, "setting_value": "x", "category": category, "translations": {"bn": "য"}},
                headers=staff_headers,
            )
            assert response.status_code == 201

        hero = await client.get("/api/v1/settings/hero")
        private = await client.get("/api/v1/settings/sms")

        assert [s["setting_key"] for s in hero.json()["data"]] == ["hero_title"]
        assert hero.json()["data"][0]["translations"] == {"bn": "য"}
        assert private.status_code == 404

    async def test_bulk_update(self, client: AsyncClient, staff_headers):
        await client.post(
            "/api/v1/admin/settings",
            json={"setting_key": "header_logo", "category": "header"},
            headers=staff_headers,
        )

        response = await client.put(
            "/api/v1/admin/settings/bulk",
            json={"settings": [{"setting_key": "header_logo", "setting_value": "/logo.png"}, {"setting_key": "gone"}]},
            headers=staff_headers,
        )

        assert response.json()["data"] == {"updated": ["header_logo"], "missing": ["gone"]}
        setting = await client.get("/api/v1/admin/settings/header_logo", headers=staff_headers)
        assert setting.json()["data"]["setting_value"] == "/logo.png"


class TestAchievements:
    async def test_listing_and_stats(self, client: AsyncClient, staff_headers):
        category = await client.post(
            "/api/v1/admin/achievements/categories", json={"name_en": "Roads"}, headers=staff_headers
        )
        assert category.status_code == 201
        created = await client.post(
            "/api/v1/admin/achievements",
            json={
                "title_en": "Highway link",
                "category_id": category.json()["data"]["id"],
                "impact_metrics": {"people_helped": 1500, "investment": 2500000},
            },
            headers=staff_headers,
        )
        assert created.status_code == 201

        listing = await client.get("/api/v1/achievements", params={"category": "roads"})
        stats = await client.get("/api/v1/achievements/stats")

        assert [a["title_en"] for a in listing.json()["data"]] == ["Highway link"]
        assert stats.json()["data"]["total_projects"] == 1
        assert stats.json()["data"]["total_people_helped"] == 1500

    async def test_blank_title(self, client: AsyncClient, staff_headers):
        response = await client.post("/api/v1/admin/achievements", json={"title_en": " "}, headers=staff_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "English title is required"


class TestSms:
    async def test_invalid_phone(self, client: AsyncClient):
        response = await client.post("/api/v1/sms/send", json={"phone": "123", "message": "hi"})

        assert response.status_code == 400
        assert response.json()["error"] == INVALID_PHONE_MESSAGE

    async def test_gateway_not_configured(self, client: AsyncClient):
        response = await client.post("/api/v1/sms/send", json={"phone": "01712345678", "message": "hi"})

        assert response.status_code == 503
        assert response.json()["error"] == NOT_CONFIGURED_MESSAGE
