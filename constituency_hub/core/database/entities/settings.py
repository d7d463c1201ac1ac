"""
Site settings entity models.

A setting is a keyed value grouped by ``category`` (header, hero, leaders,
footer...). Multilingual settings carry one translation row per language code.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field

from ..base import TimestampedTable


class SiteSetting(TimestampedTable, table=True):
    """
    Table: settings
    """

    __tablename__ = "settings"
    __table_args__ = ({"extend_existing": True},)

    setting_key: str = Field(index=True, unique=True, max_length=200)
    setting_value: Optional[str] = Field(default=None)
    setting_type: str = Field(default="text", max_length=20)
    category: str = Field(index=True, max_length=50)
    subcategory: Optional[str] = Field(default=None, max_length=50)
    is_multilingual: bool = Field(default=False)
    default_value: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    validation_rules: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)
    updated_by: Optional[str] = Field(default=None, foreign_key="users.id")

    def __repr__(self) -> str:
        return f"SiteSetting(key={self.setting_key}, category={self.category})"


class SettingTranslation(TimestampedTable, table=True):
    """
    Table: setting_translations
    """

    __tablename__ = "setting_translations"
    __table_args__ = (
        UniqueConstraint("setting_id", "language_code", name="uq_setting_translation_language"),
        {"extend_existing": True},
    )

    setting_id: str = Field(foreign_key="settings.id", index=True)
    language_code: str = Field(max_length=10)
    translated_value: str
