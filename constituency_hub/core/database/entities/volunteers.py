"""
Volunteer registry entity model.

Each volunteer receives a random public 8-digit ``volunteer_id`` that is
printed on the ID card and used for public lookup.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import NaiveDatetime
from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field

from ..base import TimestampedTable


class VolunteerStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class Volunteer(TimestampedTable, table=True):
    """
    Table: volunteers
    """

    __tablename__ = "volunteers"
    __table_args__ = ({"extend_existing": True},)

    volunteer_id: str = Field(index=True, unique=True, max_length=8)
    name: str = Field(max_length=200)
    name_bn: Optional[str] = Field(default=None, max_length=200)
    phone: str = Field(index=True, unique=True, max_length=20)
    email: Optional[str] = Field(default=None, max_length=255)
    age: int
    gender: str = Field(max_length=10)
    thana: str = Field(index=True, max_length=50)
    ward: str = Field(index=True, max_length=50)
    address: str
    categories: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    skills: Optional[str] = Field(default=None)
    availability: Optional[str] = Field(default=None, max_length=100)
    why_join: str
    photo_url: Optional[str] = Field(default=None)
    status: str = Field(default=VolunteerStatus.PENDING.value, index=True, max_length=20)
    is_active: bool = Field(default=True)
    badges: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    verified_at: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)
    verified_by: Optional[str] = Field(default=None, foreign_key="users.id")
    admin_notes: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"Volunteer(volunteer_id={self.volunteer_id}, status={self.status})"
