"""Site settings schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SettingRead(BaseModel):
    id: str
    setting_key: str
    setting_value: Optional[str] = None
    setting_type: str
    category: str
    subcategory: Optional[str] = None
    is_multilingual: bool
    default_value: Optional[str] = None
    description: Optional[str] = None
    validation_rules: Dict[str, Any] = Field(default_factory=dict)
    display_order: int
    is_active: bool
    updated_at: Optional[datetime] = None
    translations: Dict[str, str] = Field(default_factory=dict, description="Language code to translated value")

    model_config = ConfigDict(from_attributes=True)


class SettingCreate(BaseModel):
    setting_key: str = Field(..., min_length=1)
    setting_value: Optional[str] = None
    setting_type: str = "text"
    category: str = Field(..., min_length=1)
    subcategory: Optional[str] = None
    is_multilingual: bool = False
    default_value: Optional[str] = None
    description: Optional[str] = None
    validation_rules: Dict[str, Any] = Field(default_factory=dict)
    display_order: int = 0
    translations: Dict[str, str] = Field(default_factory=dict)


class SettingUpdate(BaseModel):
    setting_value: Optional[str] = None
    setting_type: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    is_multilingual: Optional[bool] = None
    default_value: Optional[str] = None
    description: Optional[str] = None
    validation_rules: Optional[Dict[str, Any]] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None
    translations: Optional[Dict[str, str]] = Field(
        default=None, description="When non-empty, replaces every existing translation"
    )


class SettingBulkItem(BaseModel):
    setting_key: str
    setting_value: Optional[str] = None
    translations: Optional[Dict[str, str]] = None


class SettingBulkUpdate(BaseModel):
    settings: List[SettingBulkItem] = Field(..., min_length=1)


class SettingBulkResult(BaseModel):
    updated: List[str]
    missing: List[str]
