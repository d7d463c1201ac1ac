"""
Editorial content entities: categories, news articles and events.

Every text field comes as an ``_en``/``_bn`` pair. Only ``published`` rows are
visible on public endpoints.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import TimestampedTable


class PublishStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class ContentType(str, Enum):
    NEWS = "news"
    EVENTS = "events"


class Category(TimestampedTable, table=True):
    """
    Shared category list for news and events.

    Table: categories
    """

    __tablename__ = "categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str = Field(max_length=200)
    name_bn: Optional[str] = Field(default=None, max_length=200)
    slug: str = Field(index=True, max_length=200)
    content_type: str = Field(default=ContentType.NEWS.value, index=True, max_length=20)
    description_en: Optional[str] = Field(default=None)
    description_bn: Optional[str] = Field(default=None)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)

    def __repr__(self) -> str:
        return f"Category(id={self.id}, slug={self.slug}, type={self.content_type})"


class News(TimestampedTable, table=True):
    """
    Table: news
    """

    __tablename__ = "news"
    __table_args__ = ({"extend_existing": True},)

    title_en: str = Field(max_length=500)
    title_bn: Optional[str] = Field(default=None, max_length=500)
    slug: str = Field(index=True, unique=True, max_length=500)
    excerpt_en: Optional[str] = Field(default=None)
    excerpt_bn: Optional[str] = Field(default=None)
    content_en: Optional[str] = Field(default=None)
    content_bn: Optional[str] = Field(default=None)
    featured_image: Optional[str] = Field(default=None)
    category_id: Optional[str] = Field(default=None, foreign_key="categories.id", index=True)
    status: str = Field(default=PublishStatus.DRAFT.value, index=True, max_length=20)
    is_featured: bool = Field(default=False)
    published_at: Optional[NaiveDatetime] = Field(default=None, index=True, sa_type=DateTime)
    read_time: int = Field(default=1)
    author_id: Optional[str] = Field(default=None, foreign_key="users.id")

    def __repr__(self) -> str:
        return f"News(id={self.id}, slug={self.slug}, status={self.status})"


class Event(TimestampedTable, table=True):
    """
    Table: events
    """

    __tablename__ = "events"
    __table_args__ = ({"extend_existing": True},)

    title_en: str = Field(max_length=500)
    title_bn: Optional[str] = Field(default=None, max_length=500)
    slug: str = Field(index=True, unique=True, max_length=500)
    description_en: Optional[str] = Field(default=None)
    description_bn: Optional[str] = Field(default=None)
    event_date: NaiveDatetime = Field(index=True, sa_type=DateTime)
    event_end_date: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)
    location_en: Optional[str] = Field(default=None, max_length=500)
    location_bn: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = Field(default=None, index=True, max_length=100)
    featured_image: Optional[str] = Field(default=None)
    status: str = Field(default=PublishStatus.DRAFT.value, index=True, max_length=20)
    is_featured: bool = Field(default=False)

    def __repr__(self) -> str:
        return f"Event(id={self.id}, slug={self.slug}, date={self.event_date})"
