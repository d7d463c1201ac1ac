"""Contact form schemas."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from constituency_hub.core.database.entities.contacts import ContactStatus

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ContactCreate(BaseModel):
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    subject: str = ""
    message: str = ""

    @model_validator(mode="after")
    def _check_form(self) -> "ContactCreate":
        if not all(value.strip() for value in (self.name, self.email, self.subject, self.message)):
            raise ValueError("Name, email, subject and message are required")
        self.email = self.email.strip()
        if not EMAIL_PATTERN.match(self.email):
            raise ValueError("Invalid email address")
        return self


class ContactRead(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    status: str
    admin_notes: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactUpdate(BaseModel):
    status: Optional[ContactStatus] = None
    admin_notes: Optional[str] = None
