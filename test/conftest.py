from __future__ import annotations

import os
from typing import AsyncGenerator, Iterable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.pool import StaticPool

# Use in-memory SQLite for testing.
# Set before importing the app so the module-level settings pick it up.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ALERTS_RELIEFWEB_URL"] = "http://mock-reliefweb/v1/disasters"
os.environ["ALERTS_GDACS_URL"] = "http://mock-gdacs/events"
os.environ["SITE_BASE_URL"] = "http://localhost:3000"
for _name in ("SMS_API_KEY", "SMS_SENDER_ID", "SMS_API_URL", "ADMIN_EMAIL", "ADMIN_PASSWORD"):
    os.environ.pop(_name, None)

from constituency_hub.core.database import entities  # noqa: E402,F401
from constituency_hub.core.database.entities.users import User, UserRole  # noqa: E402
from constituency_hub.server.services.security import create_access_token, get_password_hash  # noqa: E402

STAFF_PASSWORD = "moderator-pass"
ADMIN_PASSWORD = "admin-pass-123"


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://test",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(self._merge_url(url))
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(self._merge_url(url))
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)


@pytest_asyncio.fixture
async def test_engine():
    """A fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app with the test session injected.

    ASGITransport does not run the lifespan, so no startup database work happens.
    """
    from constituency_hub.core.database import get_session
    from constituency_hub.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, email: str, password: str, role: UserRole, **extra) -> User:
    user = User(email=email, password_hash=get_password_hash(password), role=role.value, **extra)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def moderator(session: AsyncSession) -> User:
    return await _make_user(session, "moderator@example.org", STAFF_PASSWORD, UserRole.MODERATOR)


@pytest_asyncio.fixture
async def admin(session: AsyncSession) -> User:
    return await _make_user(session, "admin@example.org", ADMIN_PASSWORD, UserRole.ADMIN, full_name="Site Admin")


@pytest_asyncio.fixture
async def plain_user(session: AsyncSession) -> User:
    return await _make_user(session, "citizen@example.org", "citizen-pass", UserRole.USER)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def staff_headers(moderator: User) -> dict:
    return auth_headers(moderator)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return auth_headers(admin)


@pytest.fixture
def user_headers(plain_user: User) -> dict:
    return auth_headers(plain_user)
