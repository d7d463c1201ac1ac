"""
Emergency service entity models: SOS requests, hotline contacts and
resource listings (shelters, hospitals, relief points).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import TimestampedTable


class EmergencyStatus(str, Enum):
    PENDING = "pending"
    ACKNOWLEDGED = "acknowledged"
    RESPONDING = "responding"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


class EmergencyPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EmergencyRequest(TimestampedTable, table=True):
    """
    Table: emergency_requests
    """

    __tablename__ = "emergency_requests"
    __table_args__ = ({"extend_existing": True},)

    name: str = Field(default="Anonymous", max_length=200)
    phone: str = Field(max_length=20)
    message: Optional[str] = Field(default=None)
    request_type: str = Field(default="general", index=True, max_length=50)
    priority: str = Field(default=EmergencyPriority.HIGH.value, index=True, max_length=20)
    status: str = Field(default=EmergencyStatus.PENDING.value, index=True, max_length=20)
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)
    address: Optional[str] = Field(default=None)
    ward: Optional[str] = Field(default=None, max_length=50)
    audio_url: Optional[str] = Field(default=None)
    audio_duration: Optional[int] = Field(default=None)
    admin_notes: Optional[str] = Field(default=None)
    assigned_to: Optional[str] = Field(default=None, max_length=200)
    response_time: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)
    resolved_at: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"EmergencyRequest(id={self.id}, status={self.status}, priority={self.priority})"


class EmergencyContact(TimestampedTable, table=True):
    """
    Table: emergency_contacts
    """

    __tablename__ = "emergency_contacts"
    __table_args__ = ({"extend_existing": True},)

    name_en: str = Field(max_length=200)
    name_bn: Optional[str] = Field(default=None, max_length=200)
    phone: str = Field(max_length=50)
    category: Optional[str] = Field(default=None, max_length=50)
    description_en: Optional[str] = Field(default=None)
    description_bn: Optional[str] = Field(default=None)
    is_24_7: bool = Field(default=False)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class EmergencyResource(TimestampedTable, table=True):
    """
    Table: emergency_resources
    """

    __tablename__ = "emergency_resources"
    __table_args__ = ({"extend_existing": True},)

    name_en: str = Field(max_length=200)
    name_bn: Optional[str] = Field(default=None, max_length=200)
    resource_type: str = Field(default="shelter", index=True, max_length=50)
    address_en: Optional[str] = Field(default=None)
    address_bn: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None, max_length=50)
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)
    capacity: Optional[int] = Field(default=None)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)
