"""
Volunteer registry schemas and the fixed catalogue of thanas, categories and
genders offered on the registration form.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constituency_hub.core.database.entities.volunteers import VolunteerStatus
from constituency_hub.core.phone import BD_MOBILE_PATTERN

from .common import Label

THANA_LABELS: Dict[str, Label] = {
    "uttara_east": Label(en="Uttara East", bn="উত্তরা পূর্ব"),
    "uttara_west": Label(en="Uttara West", bn="উত্তরা পশ্চিম"),
    "turag": Label(en="Turag", bn="তুরাগ"),
    "dakshinkhan": Label(en="Dakshinkhan", bn="দক্ষিণখান"),
    "uttarkhan": Label(en="Uttarkhan", bn="উত্তরখান"),
    "khilkhet": Label(en="Khilkhet", bn="খিলক্ষেত"),
    "airport": Label(en="Airport", bn="বিমানবন্দর"),
    "vatara": Label(en="Vatara", bn="ভাটারা"),
}

CATEGORY_LABELS: Dict[str, Label] = {
    "socialActivism": Label(en="Social Activism", bn="সামাজিক সক্রিয়তা"),
    "disasterManagement": Label(en="Disaster Management", bn="দুর্যোগ ব্যবস্থাপনা"),
    "socialMediaActivism": Label(en="Social Media Activism", bn="সোশ্যাল মিডিয়া সক্রিয়তা"),
    "creativeWriting": Label(en="Creative Writing", bn="সৃজনশীল লেখালেখি"),
    "itSupport": Label(en="IT Support", bn="আইটি সহায়তা"),
    "healthcareSupport": Label(en="Healthcare Support", bn="স্বাস্থ্যসেবা সহায়তা"),
    "educationTutoring": Label(en="Education & Tutoring", bn="শিক্ষা ও টিউটরিং"),
    "legalAid": Label(en="Legal Aid", bn="আইনি সহায়তা"),
    "eventManagement": Label(en="Event Management", bn="ইভেন্ট ম্যানেজমেন্ট"),
    "securityDiscipline": Label(en="Security & Discipline", bn="নিরাপত্তা ও শৃঙ্খলা"),
    "transportationLogistics": Label(en="Transportation & Logistics", bn="পরিবহন ও লজিস্টিক্স"),
    "mediaPhotography": Label(en="Media & Photography", bn="মিডিয়া ও ফটোগ্রাফি"),
    "financeAccounting": Label(en="Finance & Accounting", bn="অর্থ ও হিসাব"),
    "womensAffairs": Label(en="Women's Affairs", bn="নারী বিষয়ক"),
    "youthMobilization": Label(en="Youth Mobilization", bn="যুব সংগঠন"),
}

GENDER_LABELS: Dict[str, Label] = {
    "male": Label(en="Male", bn="পুরুষ"),
    "female": Label(en="Female", bn="মহিলা"),
    "other": Label(en="Other", bn="অন্যান্য"),
}

MIN_NAME_LENGTH = 3
MIN_AGE = 16
MAX_AGE = 100
MIN_MOTIVATION_LENGTH = 20


def label_for(labels: Dict[str, Label], key: str) -> Label:
    return labels.get(key) or Label(en=key, bn=key)


def clean_phone(phone: str) -> str:
    return re.sub(r"[\s-]", "", phone)


class VolunteerRegister(BaseModel):
    """
    Registration form.

    Checks run in form order so the first failing field produces the message.
    Phone uniqueness is checked by the registration service.
    """

    name: Optional[str] = None
    name_bn: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    thana: Optional[str] = None
    ward: Optional[str] = None
    address: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    skills: Optional[str] = None
    availability: Optional[str] = None
    why_join: Optional[str] = None
    photo_url: Optional[str] = None

    @model_validator(mode="after")
    def _check_form(self) -> "VolunteerRegister":
        required = (self.name, self.phone, self.age, self.gender, self.thana, self.address, self.why_join)
        if any(value in (None, "") for value in required):
            raise ValueError("All required fields must be provided")
        self.name = self.name.strip()
        if len(self.name) < MIN_NAME_LENGTH:
            raise ValueError("Name must be at least 3 characters")
        self.phone = clean_phone(self.phone)
        if not BD_MOBILE_PATTERN.match(self.phone):
            raise ValueError("Please enter a valid Bangladesh phone number (01XXXXXXXXX)")
        if not MIN_AGE <= self.age <= MAX_AGE:
            raise ValueError("Age must be between 16 and 100")
        if self.gender not in GENDER_LABELS:
            raise ValueError("Please select a valid gender")
        if self.thana not in THANA_LABELS:
            raise ValueError("Please select a valid thana")
        if not (self.ward or "").strip():
            raise ValueError("Ward is required")
        self.ward = self.ward.strip()
        if not self.categories:
            raise ValueError("Please select at least one category")
        for category in self.categories:
            if category not in CATEGORY_LABELS:
                raise ValueError(f"Invalid category: {category}")
        self.why_join = self.why_join.strip()
        if len(self.why_join) < MIN_MOTIVATION_LENGTH:
            raise ValueError("Please write at least 20 characters about why you want to join")
        self.address = self.address.strip()
        return self


class RegistrationReceipt(BaseModel):
    volunteer_id: str
    name: str
    thana: str
    ward: str
    categories: List[str]
    status: str


class KeyedLabel(BaseModel):
    key: str
    label: Label


class VolunteerPublic(BaseModel):
    """What a public ID lookup reveals."""

    volunteer_id: str
    name: str
    name_bn: Optional[str] = None
    gender: Optional[KeyedLabel] = None
    thana: KeyedLabel
    ward: str
    categories: List[KeyedLabel]
    badges: List[str]
    status: str
    photo_url: Optional[str] = None
    profile_url: str
    joined_at: datetime


class VolunteerRead(BaseModel):
    id: str
    volunteer_id: str
    name: str
    name_bn: Optional[str] = None
    phone: str
    email: Optional[str] = None
    age: int
    gender: str
    thana: str
    ward: str
    address: str
    categories: List[str]
    skills: Optional[str] = None
    availability: Optional[str] = None
    why_join: str
    photo_url: Optional[str] = None
    status: str
    is_active: bool
    badges: List[str]
    verified_at: Optional[datetime] = None
    admin_notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VolunteerAdminUpdate(BaseModel):
    status: Optional[VolunteerStatus] = None
    is_active: Optional[bool] = None
    badges: Optional[List[str]] = None
    admin_notes: Optional[str] = None
    photo_url: Optional[str] = None


class ThanaCount(BaseModel):
    key: str
    label: Label
    total: int
    verified: int


class WardCount(BaseModel):
    ward: str
    count: int


class CategoryCount(BaseModel):
    key: str
    label: Label
    count: int


class VolunteerStats(BaseModel):
    total: int
    verified: int
    pending: int
    active_thanas: int
    by_thana: List[ThanaCount]
    by_ward: List[WardCount]
    by_category: List[CategoryCount]
