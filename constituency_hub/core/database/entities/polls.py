"""
Poll entity models.

A poll runs between ``start_datetime`` and ``end_datetime`` (naive UTC). Its
stored ``status`` is editorial (draft, active, archived); whether it is
upcoming, open or closed is computed from the time window. Each voter, known
only by the SHA-256 of their phone number, may vote once per poll.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import TimestampedTable


class PollStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class PollPhase(str, Enum):
    """Status derived from the voting window."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    CLOSED = "closed"


HIDDEN_POLL_STATUSES = (PollStatus.DRAFT.value, PollStatus.ARCHIVED.value)


class Poll(TimestampedTable, table=True):
    """
    Table: polls
    """

    __tablename__ = "polls"
    __table_args__ = ({"extend_existing": True},)

    title_en: str = Field(max_length=500)
    title_bn: str = Field(max_length=500)
    description_en: Optional[str] = Field(default=None)
    description_bn: Optional[str] = Field(default=None)
    start_datetime: NaiveDatetime = Field(index=True, sa_type=DateTime)
    end_datetime: NaiveDatetime = Field(index=True, sa_type=DateTime)
    timezone: str = Field(default="Asia/Dhaka", max_length=64)
    status: str = Field(default=PollStatus.DRAFT.value, index=True, max_length=20)
    allow_multiple_votes: bool = Field(default=False)
    show_results_before_end: bool = Field(default=False)
    require_verification: bool = Field(default=True)
    featured_image: Optional[str] = Field(default=None)
    created_by: Optional[str] = Field(default=None, foreign_key="users.id")

    def __repr__(self) -> str:
        return f"Poll(id={self.id}, status={self.status})"


class PollOption(TimestampedTable, table=True):
    """
    Table: poll_options
    """

    __tablename__ = "poll_options"
    __table_args__ = ({"extend_existing": True},)

    poll_id: str = Field(foreign_key="polls.id", index=True)
    option_en: str = Field(max_length=500)
    option_bn: str = Field(max_length=500)
    display_order: int = Field(default=0)


class PollVote(TimestampedTable, table=True):
    """
    Table: poll_votes
    """

    __tablename__ = "poll_votes"
    __table_args__ = (
        UniqueConstraint("poll_id", "voter_phone_hash", name="uq_poll_vote_voter"),
        {"extend_existing": True},
    )

    poll_id: str = Field(foreign_key="polls.id", index=True)
    option_id: str = Field(foreign_key="poll_options.id", index=True)
    voter_phone_hash: str = Field(max_length=64, index=True)
    voter_ip: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=500)
