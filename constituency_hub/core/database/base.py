"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from pydantic import ConfigDict, NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .utils import utc_now_naive


def new_id() -> str:
    return str(uuid4())


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


class TimestampedTable(Base):
    """Columns shared by every table: a UUID primary key and audit timestamps."""

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    created_at: NaiveDatetime = Field(default_factory=utc_now_naive, index=True, sa_type=DateTime)
    updated_at: Optional[NaiveDatetime] = Field(
        default=None, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now_naive}
    )
