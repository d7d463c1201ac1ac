"""SMS sending schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class SmsSendRequest(BaseModel):
    phone: str = Field(..., description="Bangladesh mobile number")
    message: str = Field(..., min_length=1, max_length=1000)


class SmsSendResult(BaseModel):
    to: str = Field(description="Recipient in international form (8801XXXXXXXXX)")
    provider_status: Optional[str] = None
