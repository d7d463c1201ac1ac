"""Sign-in and back-office access control."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestLogin:
    async def test_login_and_me(self, client: AsyncClient, moderator):
        response = await client.post(
            "/api/v1/auth/login", json={"email": "moderator@example.org", "password": "moderator-pass"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["error"] is None
        token = body["data"]["access_token"]
        assert body["data"]["user"]["role"] == "moderator"

        me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["data"]["email"] == "moderator@example.org"

    async def test_bad_credentials(self, client: AsyncClient, moderator):
        response = await client.post("/api/v1/auth/login", json={"email": "moderator@example.org", "password": "x"})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "data": None,
            "error": "Invalid email or password",
            "pagination": None,
        }

    async def test_validation_error_is_400(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/login", json={"email": "someone@example.org"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "password" in body["error"]
        assert body["data"]["errors"]

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["error"] == "Not authenticated"


class TestAdminAccess:
    @pytest.mark.parametrize(
        "path",
        ["/api/v1/admin/news", "/api/v1/admin/polls", "/api/v1/admin/emergency/requests", "/api/v1/admin/settings"],
    )
    async def test_staff_routes_require_token(self, client: AsyncClient, path):
        response = await client.get(path)

        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_plain_user_forbidden(self, client: AsyncClient, user_headers):
        response = await client.get("/api/v1/admin/news", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Admin or moderator access required"

    async def test_moderator_allowed_on_staff_routes(self, client: AsyncClient, staff_headers):
        response = await client.get("/api/v1/admin/news", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["pagination"]["total"] == 0

    async def test_user_management_is_admin_only(self, client: AsyncClient, staff_headers, admin_headers):
        forbidden = await client.get("/api/v1/admin/users", headers=staff_headers)
        allowed = await client.get("/api/v1/admin/users", headers=admin_headers)

        assert forbidden.status_code == 403
        assert forbidden.json()["error"] == "Admin access required"
        assert allowed.status_code == 200

    async def test_admin_creates_and_updates_user(self, client: AsyncClient, admin_headers):
        created = await client.post(
            "/api/v1/admin/users",
            json={"email": "editor@example.org", "password": "editor-pass", "full_name": "Editor"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        user = created.json()["data"]
        assert user["role"] == "moderator"
        assert "password_hash" not in user

        updated = await client.patch(
            f"/api/v1/admin/users/{user['id']}", json={"is_active": False}, headers=admin_headers
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["is_active"] is False

        duplicate = await client.post(
            "/api/v1/admin/users",
            json={"email": "editor@example.org", "password": "editor-pass"},
            headers=admin_headers,
        )
        assert duplicate.status_code == 409
