"""Schemas for the "ask me anything" board."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constituency_hub.core.database.entities.ama import QuestionStatus, VoteTarget, VoteType

MAX_QUESTION_LENGTH = 2000


class AMACategoryRead(BaseModel):
    id: str
    name_en: str
    name_bn: Optional[str] = None
    slug: str
    display_order: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class AMACategoryCreate(BaseModel):
    name_en: str = Field(..., min_length=1)
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    display_order: int = 0
    is_active: bool = True


class AMACategoryUpdate(BaseModel):
    name_en: Optional[str] = None
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class QuestionPublic(BaseModel):
    """A published question as visitors see it. Submitter fields are blank for anonymous questions."""

    id: str
    category_id: Optional[str] = None
    category: Optional[AMACategoryRead] = None
    submitter_name_en: Optional[str] = None
    submitter_name_bn: Optional[str] = None
    submitter_address_en: Optional[str] = None
    submitter_address_bn: Optional[str] = None
    is_anonymous: bool
    question_en: str
    question_bn: Optional[str] = None
    answer_en: Optional[str] = None
    answer_bn: Optional[str] = None
    answered_at: Optional[datetime] = None
    status: str
    upvotes: int
    downvotes: int
    answer_upvotes: int
    answer_downvotes: int
    is_featured: bool
    created_at: datetime
    user_vote: Optional[str] = Field(default=None, description="Caller's vote on the question")
    user_answer_vote: Optional[str] = Field(default=None, description="Caller's vote on the answer")

    model_config = ConfigDict(from_attributes=True)


class QuestionAdminRead(QuestionPublic):
    submitter_ip: Optional[str] = None
    answered_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class QuestionSubmit(BaseModel):
    question: str = Field(default="", description="Question text")
    submitter_name: Optional[str] = Field(default=None, description="Required unless anonymous")
    submitter_address: Optional[str] = None
    category_id: Optional[str] = None
    is_anonymous: bool = False

    @model_validator(mode="after")
    def _check_required(self) -> "QuestionSubmit":
        self.question = self.question.strip()
        if not self.question:
            raise ValueError("Question is required")
        if len(self.question) > MAX_QUESTION_LENGTH:
            raise ValueError(f"Question must be at most {MAX_QUESTION_LENGTH} characters")
        if not self.is_anonymous and not (self.submitter_name or "").strip():
            raise ValueError("Name is required unless submitting anonymously")
        return self


class VoteRequest(BaseModel):
    question_id: str
    vote_type: VoteType
    vote_target: VoteTarget = VoteTarget.QUESTION


class VoteResult(BaseModel):
    action: Literal["added", "removed", "changed"]
    vote_target: str
    user_vote: Optional[str] = None
    upvotes: int
    downvotes: int


class QuestionAdminUpdate(BaseModel):
    question_en: Optional[str] = None
    question_bn: Optional[str] = None
    answer_en: Optional[str] = None
    answer_bn: Optional[str] = None
    status: Optional[QuestionStatus] = None
    category_id: Optional[str] = None
    is_featured: Optional[bool] = None
