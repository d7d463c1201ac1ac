"""Emergency service schemas: SOS requests, contacts, resources and alerts."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from constituency_hub.core.database.entities.emergency import EmergencyPriority, EmergencyStatus


class SOSCreate(BaseModel):
    phone: str = Field(default="", validate_default=True, description="Caller phone number")
    name: Optional[str] = None
    message: Optional[str] = None
    request_type: str = "general"
    priority: EmergencyPriority = EmergencyPriority.HIGH
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address: Optional[str] = None
    ward: Optional[str] = None
    audio_url: Optional[str] = None
    audio_duration: Optional[int] = Field(default=None, ge=0)

    @field_validator("phone")
    @classmethod
    def _phone_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Phone number is required")
        return value


class EmergencyRequestRead(BaseModel):
    id: str
    name: str
    phone: str
    message: Optional[str] = None
    request_type: str
    priority: str
    status: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = None
    ward: Optional[str] = None
    audio_url: Optional[str] = None
    audio_duration: Optional[int] = None
    admin_notes: Optional[str] = None
    assigned_to: Optional[str] = None
    response_time: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EmergencyRequestUpdate(BaseModel):
    status: Optional[EmergencyStatus] = None
    priority: Optional[EmergencyPriority] = None
    admin_notes: Optional[str] = None
    assigned_to: Optional[str] = None


class EmergencyContactRead(BaseModel):
    id: str
    name_en: str
    name_bn: Optional[str] = None
    phone: str
    category: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    is_24_7: bool
    display_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class EmergencyContactCreate(BaseModel):
    name_en: str = Field(..., min_length=1)
    name_bn: Optional[str] = None
    phone: str = Field(..., min_length=1)
    category: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    is_24_7: bool = False
    display_order: int = 0
    is_active: bool = True


class EmergencyContactUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    phone: Optional[str] = None
    category: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    is_24_7: Optional[bool] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class EmergencyResourceRead(BaseModel):
    id: str
    name_en: str
    name_bn: Optional[str] = None
    resource_type: str
    address_en: Optional[str] = None
    address_bn: Optional[str] = None
    phone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    capacity: Optional[int] = None
    display_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class EmergencyResourceCreate(BaseModel):
    name_en: str = Field(..., min_length=1)
    name_bn: Optional[str] = None
    resource_type: str = "shelter"
    address_en: Optional[str] = None
    address_bn: Optional[str] = None
    phone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    display_order: int = 0
    is_active: bool = True


class EmergencyResourceUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    resource_type: Optional[str] = None
    address_en: Optional[str] = None
    address_bn: Optional[str] = None
    phone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class DisasterAlert(BaseModel):
    id: str
    event: str
    severity: str = Field(description="extreme, severe, moderate or minor")
    headline: str
    description: str = ""
    effective: Optional[str] = Field(default=None, description="ISO timestamp the alert takes effect")
    expires: Optional[str] = Field(default=None, description="ISO timestamp the alert lapses")
    areas: List[str] = Field(default_factory=list)
    source: str = Field(description="reliefweb, gdacs or seasonal")


class AlertFeed(BaseModel):
    alerts: List[DisasterAlert]
    source: str = Field(description="'api' when any feed answered with alerts, otherwise 'none'")
    fetched_at: datetime
