"""Unit tests for the shared FastAPI dependencies."""

from datetime import timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from constituency_hub.core.exceptions import AuthenticationError, PermissionDeniedError
from constituency_hub.server.services.deps import (
    MAX_USER_AGENT_LENGTH,
    UNKNOWN_IP,
    get_client_ip,
    get_current_user,
    get_user_agent,
    require_admin,
    require_staff,
)
from constituency_hub.server.services.security import create_access_token


def _request(headers=None, client=("10.0.0.9", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "client": client,
    }
    return Request(scope)


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestClientIdentity:
    def test_forwarded_for_first_hop(self):
        request = _request({"X-Forwarded-For": "203.0.113.5, 10.0.0.1", "X-Real-IP": "198.51.100.1"})

        assert get_client_ip(request) == "203.0.113.5"

    def test_real_ip(self):
        assert get_client_ip(_request({"X-Real-IP": " 198.51.100.1 "})) == "198.51.100.1"

    def test_socket_peer(self):
        assert get_client_ip(_request()) == "10.0.0.9"

    def test_unknown(self):
        assert get_client_ip(_request(client=None)) == UNKNOWN_IP

    def test_user_agent_truncated(self):
        request = _request({"User-Agent": "x" * (MAX_USER_AGENT_LENGTH + 50)})

        assert len(get_user_agent(request)) == MAX_USER_AGENT_LENGTH
        assert get_user_agent(_request()) is None


class TestCurrentUser:
    async def test_valid_token(self, session, moderator):
        user = await get_current_user(session, _bearer(create_access_token(moderator.id, moderator.role)))

        assert user.id == moderator.id

    async def test_missing_credentials(self, session):
        with pytest.raises(AuthenticationError, match="Not authenticated"):
            await get_current_user(session, None)

    async def test_garbage_token(self, session):
        with pytest.raises(AuthenticationError):
            await get_current_user(session, _bearer("not-a-jwt"))

    async def test_expired_token(self, session, moderator):
        token = create_access_token(moderator.id, moderator.role, expires_delta=timedelta(minutes=-1))

        with pytest.raises(AuthenticationError):
            await get_current_user(session, _bearer(token))

    async def test_unknown_or_inactive_user(self, session, moderator):
        with pytest.raises(AuthenticationError):
            await get_current_user(session, _bearer(create_access_token("missing", "admin")))

        moderator.is_active = False
        session.add(moderator)
        await session.commit()
        with pytest.raises(AuthenticationError):
            await get_current_user(session, _bearer(create_access_token(moderator.id, moderator.role)))


class TestRoles:
    async def test_staff(self, moderator, admin, plain_user):
        assert await require_staff(moderator) is moderator
        assert await require_staff(admin) is admin
        with pytest.raises(PermissionDeniedError):
            await require_staff(plain_user)

    async def test_admin(self, moderator, admin):
        assert await require_admin(admin) is admin
        with pytest.raises(PermissionDeniedError):
            await require_admin(moderator)
