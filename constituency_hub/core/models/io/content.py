"""Schemas for categories, news articles, events and the events calendar."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from constituency_hub.core.database.entities.content import ContentType, PublishStatus
from constituency_hub.core.database.utils import to_naive_utc


class CategoryRead(BaseModel):
    id: str
    name_en: str
    name_bn: Optional[str] = None
    slug: str
    content_type: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    name_en: str = Field(..., min_length=1, description="English name")
    name_bn: Optional[str] = Field(default=None, description="Bengali name")
    slug: Optional[str] = Field(default=None, description="URL slug, derived from name_en when omitted")
    content_type: ContentType = ContentType.NEWS
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class CategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    content_type: Optional[ContentType] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class NewsRead(BaseModel):
    id: str
    title_en: str
    title_bn: Optional[str] = None
    slug: str
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content_en: Optional[str] = None
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[CategoryRead] = None
    status: str
    is_featured: bool
    published_at: Optional[datetime] = None
    read_time: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class NewsCreate(BaseModel):
    title_en: str = Field(..., min_length=1)
    title_bn: Optional[str] = None
    slug: Optional[str] = Field(default=None, description="URL slug, derived from title_en when omitted")
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content_en: Optional[str] = None
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    category_id: Optional[str] = None
    status: PublishStatus = PublishStatus.DRAFT
    is_featured: bool = False
    read_time: Optional[int] = Field(default=None, ge=1)


class NewsUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    slug: Optional[str] = None
    excerpt_en: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content_en: Optional[str] = None
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    category_id: Optional[str] = None
    status: Optional[PublishStatus] = None
    is_featured: Optional[bool] = None
    read_time: Optional[int] = Field(default=None, ge=1)


class EventRead(BaseModel):
    id: str
    title_en: str
    title_bn: Optional[str] = None
    slug: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    event_date: datetime
    event_end_date: Optional[datetime] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    category: Optional[str] = None
    featured_image: Optional[str] = None
    status: str
    is_featured: bool

    model_config = ConfigDict(from_attributes=True)


class EventCreate(BaseModel):
    title_en: str = Field(..., min_length=1)
    title_bn: Optional[str] = None
    slug: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    event_date: datetime
    event_end_date: Optional[datetime] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    category: Optional[str] = None
    featured_image: Optional[str] = None
    status: PublishStatus = PublishStatus.DRAFT
    is_featured: bool = False

    @field_validator("event_date", "event_end_date")
    @classmethod
    def _as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class EventUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    slug: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    event_date: Optional[datetime] = None
    event_end_date: Optional[datetime] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    category: Optional[str] = None
    featured_image: Optional[str] = None
    status: Optional[PublishStatus] = None
    is_featured: Optional[bool] = None

    @field_validator("event_date", "event_end_date")
    @classmethod
    def _as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class CalendarDayRead(BaseModel):
    day: int
    date_key: str
    is_today: bool
    events: List[EventRead]


class CalendarMonthRead(BaseModel):
    year: int
    month: int
    month_name_en: str
    month_name_bn: str
    leading_blanks: int = Field(description="Empty cells before day 1 in a Sunday-first grid")
    day_names_en: List[str]
    day_names_bn: List[str]
    days: List[CalendarDayRead]
    year_options: List[int]
