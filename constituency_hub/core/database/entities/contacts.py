"""Contact form submission entity."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import TimestampedTable


class ContactStatus(str, Enum):
    PENDING = "pending"
    READ = "read"
    RESPONDED = "responded"
    ARCHIVED = "archived"


class ContactSubmission(TimestampedTable, table=True):
    """
    Table: contact_submissions
    """

    __tablename__ = "contact_submissions"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(max_length=200)
    email: str = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=20)
    subject: str = Field(max_length=300)
    message: str
    status: str = Field(default=ContactStatus.PENDING.value, index=True, max_length=20)
    admin_notes: Optional[str] = Field(default=None)
    responded_at: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)
