"""Poll schemas, public and admin."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from constituency_hub.core.database.entities.polls import PollStatus
from constituency_hub.core.database.utils import to_naive_utc

MIN_POLL_OPTIONS = 2


class PollOptionRead(BaseModel):
    id: str
    option_en: str
    option_bn: str
    display_order: int
    vote_count: Optional[int] = Field(default=None, description="Null while results are hidden")
    percentage: Optional[int] = Field(default=None, description="Null while results are hidden")
    is_voted: bool = False


class PollRead(BaseModel):
    id: str
    title_en: str
    title_bn: str
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    start_datetime: datetime
    end_datetime: datetime
    timezone: str
    status: str
    computed_status: str = Field(description="upcoming, active or closed, derived from the voting window")
    featured_image: Optional[str] = None
    require_verification: bool
    show_results_before_end: bool
    allow_multiple_votes: bool
    show_results: bool
    total_votes: int
    has_voted: bool = False
    voted_option_id: Optional[str] = None
    can_vote: bool
    options: List[PollOptionRead]


class PollAdminRead(PollRead):
    admin_status: str = Field(description="Stored status, or 'scheduled' for an active poll that has not started")
    created_at: datetime


class PollVoteRequest(BaseModel):
    option_id: Optional[str] = None
    voter_phone_hash: Optional[str] = None


class PollVoteOutcome(BaseModel):
    voted_option_id: str
    total_votes: int
    options: List[PollOptionRead]


class PollVoteStatus(BaseModel):
    has_voted: bool
    voted_option_id: Optional[str] = None
    voted_at: Optional[datetime] = None


class PollOptionInput(BaseModel):
    option_en: str = ""
    option_bn: str = ""


class PollCreate(BaseModel):
    title_en: str = ""
    title_bn: str = ""
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    start_datetime: datetime
    end_datetime: datetime
    timezone: str = "Asia/Dhaka"
    status: PollStatus = PollStatus.DRAFT
    allow_multiple_votes: bool = False
    show_results_before_end: bool = False
    require_verification: bool = True
    featured_image: Optional[str] = None
    options: List[PollOptionInput] = Field(default_factory=list)

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def _as_naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _check_poll(self) -> "PollCreate":
        if not self.title_en.strip() or not self.title_bn.strip():
            raise ValueError("Title is required in both English and Bengali")
        if self.end_datetime <= self.start_datetime:
            raise ValueError("End time must be after start time")
        complete = [o for o in self.options if o.option_en.strip() and o.option_bn.strip()]
        if len(complete) < MIN_POLL_OPTIONS or len(complete) != len(self.options):
            raise ValueError("At least 2 options with both English and Bengali text are required")
        return self


class PollUpdate(BaseModel):
    title_en: Optional[str] = None
    title_bn: Optional[str] = None
    description_en: Optional[str] = None
    description_bn: Optional[str] = None
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    timezone: Optional[str] = None
    status: Optional[PollStatus] = None
    allow_multiple_votes: Optional[bool] = None
    show_results_before_end: Optional[bool] = None
    require_verification: Optional[bool] = None
    featured_image: Optional[str] = None
    options: Optional[List[PollOptionInput]] = None

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def _as_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _check_options(self) -> "PollUpdate":
        if self.options is not None:
            complete = [o for o in self.options if o.option_en.strip() and o.option_bn.strip()]
            if len(complete) < MIN_POLL_OPTIONS or len(complete) != len(self.options):
                raise ValueError("At least 2 options with both English and Bengali text are required")
        return self
