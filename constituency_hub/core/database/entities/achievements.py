"""
Achievement entity models.

Achievements showcase completed projects. ``impact_metrics`` is a free-form
JSON map; the statistics endpoint reads ``projects``, ``people_helped`` and
``investment`` from it.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field

from ..base import TimestampedTable


class AchievementCategory(TimestampedTable, table=True):
    """
    Table: achievement_categories
    """

    __tablename__ = "achievement_categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str = Field(max_length=200)
    name_bn: Optional[str] = Field(default=None, max_length=200)
    slug: str = Field(index=True, unique=True, max_length=200)
    icon: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=50)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class Achievement(TimestampedTable, table=True):
    """
    Table: achievements
    """

    __tablename__ = "achievements"
    __table_args__ = ({"extend_existing": True},)

    category_id: Optional[str] = Field(default=None, foreign_key="achievement_categories.id", index=True)
    title_en: str = Field(max_length=500)
    title_bn: Optional[str] = Field(default=None, max_length=500)
    description_en: Optional[str] = Field(default=None)
    description_bn: Optional[str] = Field(default=None)
    achievement_date: Optional[date] = Field(default=None, index=True)
    location_en: Optional[str] = Field(default=None, max_length=500)
    location_bn: Optional[str] = Field(default=None, max_length=500)
    impact_metrics: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    featured_image: Optional[str] = Field(default=None)
    images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    videos: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    news_links: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_featured: bool = Field(default=False)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)

    def __repr__(self) -> str:
        return f"Achievement(id={self.id}, title={self.title_en})"
