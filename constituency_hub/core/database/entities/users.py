"""
User entity models.

Back-office accounts. Public visitors never authenticate; staff sign in with
email and password and receive a bearer token.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import TimestampedTable


class UserRole(str, Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


class User(TimestampedTable, table=True):
    """
    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    email: str = Field(index=True, unique=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)
    password_hash: str
    role: str = Field(default=UserRole.USER.value, max_length=20)
    is_active: bool = Field(default=True)
    last_login_at: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)

    @property
    def is_staff(self) -> bool:
        return self.role in (UserRole.ADMIN.value, UserRole.MODERATOR.value)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"
