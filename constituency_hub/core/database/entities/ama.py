"""
"Ask me anything" entity models.

Questions enter as ``pending``, become public once ``approved`` and are
``answered`` when staff publish a reply. Votes are keyed by voter IP, one per
question and target (the question itself or its answer).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field

from ..base import TimestampedTable


class QuestionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    ANSWERED = "answered"
    REJECTED = "rejected"


PUBLIC_QUESTION_STATUSES = (QuestionStatus.APPROVED.value, QuestionStatus.ANSWERED.value)


class VoteType(str, Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class VoteTarget(str, Enum):
    QUESTION = "question"
    ANSWER = "answer"


class AMACategory(TimestampedTable, table=True):
    """
    Table: ama_categories
    """

    __tablename__ = "ama_categories"
    __table_args__ = ({"extend_existing": True},)

    name_en: str = Field(max_length=200)
    name_bn: Optional[str] = Field(default=None, max_length=200)
    slug: str = Field(index=True, unique=True, max_length=200)
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)


class AMAQuestion(TimestampedTable, table=True):
    """
    Table: ama_questions
    """

    __tablename__ = "ama_questions"
    __table_args__ = ({"extend_existing": True},)

    category_id: Optional[str] = Field(default=None, foreign_key="ama_categories.id", index=True)
    submitter_name_en: Optional[str] = Field(default=None, max_length=200)
    submitter_name_bn: Optional[str] = Field(default=None, max_length=200)
    submitter_address_en: Optional[str] = Field(default=None, max_length=500)
    submitter_address_bn: Optional[str] = Field(default=None, max_length=500)
    submitter_ip: Optional[str] = Field(default=None, max_length=64)
    is_anonymous: bool = Field(default=False)
    question_en: str
    question_bn: Optional[str] = Field(default=None)
    answer_en: Optional[str] = Field(default=None)
    answer_bn: Optional[str] = Field(default=None)
    answered_at: Optional[NaiveDatetime] = Field(default=None, sa_type=DateTime)
    answered_by: Optional[str] = Field(default=None, foreign_key="users.id")
    status: str = Field(default=QuestionStatus.PENDING.value, index=True, max_length=20)
    upvotes: int = Field(default=0)
    downvotes: int = Field(default=0)
    answer_upvotes: int = Field(default=0)
    answer_downvotes: int = Field(default=0)
    is_featured: bool = Field(default=False)

    @property
    def has_answer(self) -> bool:
        return bool(self.answer_en or self.answer_bn)

    def __repr__(self) -> str:
        return f"AMAQuestion(id={self.id}, status={self.status})"


class AMAVote(TimestampedTable, table=True):
    """
    Table: ama_votes
    """

    __tablename__ = "ama_votes"
    __table_args__ = (
        UniqueConstraint("question_id", "voter_ip", "vote_target", name="uq_ama_vote_voter_target"),
        {"extend_existing": True},
    )

    question_id: str = Field(foreign_key="ama_questions.id", index=True)
    voter_ip: str = Field(max_length=64, index=True)
    vote_type: str = Field(max_length=10)
    vote_target: str = Field(default=VoteTarget.QUESTION.value, max_length=10)
