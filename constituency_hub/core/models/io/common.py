"""
Response envelope and pagination models.

Every endpoint answers ``{success, data, error, pagination}``. List endpoints
fill ``pagination``; errors set ``success`` to false and put the message in
``error``.
"""

from __future__ import annotations

import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

MAX_PAGE_SIZE = 100


class Pagination(BaseModel):
    page: int = Field(description="Current page, starting at 1")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total number of matching items")
    total_pages: int = Field(description="Number of pages for the given limit")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit) if limit else 0)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class Envelope(BaseModel, Generic[T]):
    """Uniform response wrapper."""

    success: bool = Field(default=True, description="False when the request failed")
    data: Optional[T] = Field(default=None, description="Response payload")
    error: Optional[str] = Field(default=None, description="Human readable error message")
    pagination: Optional[Pagination] = Field(default=None, description="Paging information for list responses")


class Label(BaseModel):
    """A bilingual display label."""

    en: str
    bn: str


def ok(data: T, pagination: Optional[Pagination] = None) -> Envelope[T]:
    return Envelope(success=True, data=data, pagination=pagination)


class Deleted(BaseModel):
    """Acknowledges a delete."""

    id: str
