"""Achievement schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AchievementCategoryRead(BaseModel):
    id: str
    name_en: str
    name_bn: Optional[str] = None
    slug: str
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class AchievementCategoryCreate(BaseModel):
    name_en: str = Field(..., min_length=1)
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class AchievementCategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class AchievementRead(BaseModel):
    id: str
    category_id: Optional[str] = None
    category: Optional[AchievementCategoryRead] = None
    title_en: str
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    achievement_date: Optional[date] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    impact_metrics: Dict[str, Any] = Field(default_factory=dict)
    featured_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    news_links: List[str] = Field(default_factory=list)
    is_featured: bool
    display_order: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AchievementCreate(BaseModel):
    title_en: str = Field(..., description="English title")
    title_bn: Optional[str] = None
    category_id: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    achievement_date: Optional[date] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    impact_metrics: Dict[str, Any] = Field(default_factory=dict)
    featured_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    news_links: List[str] = Field(default_factory=list)
    is_featured: bool = False
    display_order: int = 0
    is_active: bool = True

    @field_validator("title_en")
    @classmethod
    def _title_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("English title is required")
        return value.strip()


class AchievementUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    category_id: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    achievement_date: Optional[date] = None
    location_en: Optional[str] = None
    location_bn: Optional[str] = None
    impact_metrics: Optional[Dict[str, Any]] = None
    featured_image: Optional[str] = None
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    news_links: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class AchievementStats(BaseModel):
    total_projects: int
    total_people_helped: int
    total_investment: float
    years_of_service: int
