"""Back-office accounts: sign-in, bootstrap admin and user management."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.users import User, UserRole
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import AuthenticationError, BadRequestError, ConflictError, NotFoundError
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.models.io.users import LoginRequest, TokenResponse, UserCreate, UserRead, UserUpdate
from constituency_hub.server.core.config import settings

from .pagination import paginate
from .security import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _by_email(self, email: str):
        result = await self.session.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalars().first()

    async def login(self, data: LoginRequest) -> TokenResponse:
        user = await self._by_email(data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning(f"Failed sign-in attempt for {data.email}")
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is disabled")

        user.last_login_at = utc_now_naive()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        minutes = settings.security.access_token_expire_minutes
        token = create_access_token(user.id, user.role, expires_delta=timedelta(minutes=minutes))
        logger.info(f"User {user.email} signed in")
        return TokenResponse(access_token=token, expires_in=minutes * 60, user=UserRead.model_validate(user))

    async def list_users(self, page: int = 1, limit: int = 50) -> Tuple[List[User], Pagination]:
        query = select(User).order_by(User.created_at.desc())
        return await paginate(self.session, query, page=page, limit=limit)

    async def create(self, data: UserCreate) -> User:
        if await self._by_email(data.email) is not None:
            raise ConflictError("A user with this email already exists")
        user = User(
            email=data.email,
            full_name=data.full_name,
            password_hash=get_password_hash(data.password),
            role=data.role.value,
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info(f"User {user.email} created with role {user.role}")
        return user

    async def update(self, user_id: str, data: UserUpdate, acting_user: User) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        update = plain_values(data.model_dump(exclude_unset=True))
        if user.id == acting_user.id and (
            update.get("is_active") is False or update.get("role", user.role) != user.role
        ):
            raise BadRequestError("You cannot change your own role or deactivate yourself")
        for key, value in update.items():
            setattr(user, key, value)
        user.updated_at = utc_now_naive()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info(f"User {user.email} updated by {acting_user.email}: role={user.role}, active={user.is_active}")
        return user


async def ensure_admin_user(session: AsyncSession) -> bool:
    """
    Create the bootstrap admin from ``ADMIN_EMAIL``/``ADMIN_PASSWORD`` when missing.

    Returns:
        True when an account was created.
    """
    security = settings.security
    if not security.admin_email or not security.admin_password:
        logger.debug("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin bootstrap")
        return False

    service = UserService(session)
    if await service._by_email(security.admin_email) is not None:
        return False

    await service.create(
        UserCreate(email=security.admin_email, password=security.admin_password, role=UserRole.ADMIN)
    )
    logger.info(f"Bootstrap admin account {security.admin_email} created")
    return True
