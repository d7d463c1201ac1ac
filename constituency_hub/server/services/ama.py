"""
"Ask me anything" service.

Public listing hides submitter details on anonymous questions and annotates
each question with the caller's own votes. Votes toggle: repeating a vote
removes it, voting the other way changes it.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.ama import (
    PUBLIC_QUESTION_STATUSES,
    AMACategory,
    AMAQuestion,
    AMAVote,
    QuestionStatus,
    VoteTarget,
    VoteType,
)
from constituency_hub.core.database.entities.users import User
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.ama import (
    AMACategoryRead,
    QuestionAdminRead,
    QuestionAdminUpdate,
    QuestionPublic,
    QuestionSubmit,
    VoteRequest,
    VoteResult,
)
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.monitoring import log_domain_event

from .deps import UNKNOWN_IP
from .pagination import paginate

logger = logging.getLogger(__name__)

ANONYMOUS_FIELDS = ("submitter_name_en", "submitter_name_bn", "submitter_address_en", "submitter_address_bn")


class AMAService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _categories_by_id(self, ids) -> Dict[str, AMACategory]:
        ids = {category_id for category_id in ids if category_id}
        if not ids:
            return {}
        result = await self.session.execute(select(AMACategory).where(AMACategory.id.in_(ids)))
        return {category.id: category for category in result.scalars().all()}

    async def _user_votes(self, question_ids: List[str], voter_ip: Optional[str]) -> Dict[Tuple[str, str], str]:
        if not question_ids or not voter_ip or voter_ip == UNKNOWN_IP:
            return {}
        result = await self.session.execute(
            select(AMAVote).where(AMAVote.voter_ip == voter_ip, AMAVote.question_id.in_(question_ids))
        )
        return {(vote.question_id, vote.vote_target): vote.vote_type for vote in result.scalars().all()}

    async def list_public(
        self,
        category: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
        voter_ip: Optional[str] = None,
    ) -> Tuple[List[QuestionPublic], Pagination]:
        """
        Published questions, newest first then most upvoted.

        ``status=answered`` keeps answered questions, ``status=pending`` keeps
        approved ones still waiting for an answer.
        """
        query = select(AMAQuestion).where(AMAQuestion.status.in_(PUBLIC_QUESTION_STATUSES))
        if category and category != "all":
            category_row = (
                await self.session.execute(select(AMACategory).where(AMACategory.slug == category))
            ).scalars().first()
            if category_row is not None:
                query = query.where(AMAQuestion.category_id == category_row.id)
        if status == QuestionStatus.ANSWERED.value:
            query = query.where(AMAQuestion.status == QuestionStatus.ANSWERED.value)
        elif status == QuestionStatus.PENDING.value:
            query = query.where(AMAQuestion.status == QuestionStatus.APPROVED.value)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(or_(AMAQuestion.question_en.ilike(pattern), AMAQuestion.question_bn.ilike(pattern)))
        query = query.order_by(AMAQuestion.created_at.desc(), AMAQuestion.upvotes.desc())

        questions, pagination = await paginate(self.session, query, page=page, limit=limit)
        categories = await self._categories_by_id(q.category_id for q in questions)
        votes = await self._user_votes([q.id for q in questions], voter_ip)
        reads = [self._public_read(q, categories, votes) for q in questions]
        return reads, pagination

    async def get_public(self, question_id: str, voter_ip: Optional[str] = None) -> QuestionPublic:
        question = await self._get_public_question(question_id)
        categories = await self._categories_by_id([question.category_id])
        votes = await self._user_votes([question.id], voter_ip)
        return self._public_read(question, categories, votes)

    def _public_read(
        self,
        question: AMAQuestion,
        categories: Dict[str, AMACategory],
        votes: Dict[Tuple[str, str], str],
    ) -> QuestionPublic:
        read = QuestionPublic.model_validate(question)
        if question.category_id in categories:
            read.category = AMACategoryRead.model_validate(categories[question.category_id])
        if question.is_anonymous:
            for field in ANONYMOUS_FIELDS:
                setattr(read, field, None)
        read.user_vote = votes.get((question.id, VoteTarget.QUESTION.value))
        read.user_answer_vote = votes.get((question.id, VoteTarget.ANSWER.value))
        return read

    async def submit(self, data: QuestionSubmit, submitter_ip: Optional[str] = None) -> AMAQuestion:
        if data.category_id and await self.session.get(AMACategory, data.category_id) is None:
            raise BadRequestError("Unknown category")
        question = AMAQuestion(
            category_id=data.category_id,
            submitter_name_en=None if data.is_anonymous else (data.submitter_name or "").strip(),
            submitter_address_en=None if data.is_anonymous else (data.submitter_address or "").strip() or None,
            question_en=data.question,
            is_anonymous=data.is_anonymous,
            submitter_ip=submitter_ip,
            status=QuestionStatus.PENDING.value,
        )
        self.session.add(question)
        await self.session.commit()
        await self.session.refresh(question)
        logger.info(f"AMA question {question.id} submitted, awaiting review")
        return question

    async def _get_public_question(self, question_id: str) -> AMAQuestion:
        question = await self.session.get(AMAQuestion, question_id)
        if question is None or question.status not in PUBLIC_QUESTION_STATUSES:
            raise NotFoundError("Question not found")
        return question

    async def vote(self, request: VoteRequest, voter_ip: str) -> VoteResult:
        """
        Toggle a vote on a question or on its answer.

        Returns the action taken (added, removed or changed), the caller's
        resulting vote and the updated counters for the voted target.
        """
        if not voter_ip or voter_ip == UNKNOWN_IP:
            raise BadRequestError("Could not determine voter identity")

        question = await self._get_public_question(request.question_id)
        target = request.vote_target.value
        vote_type = request.vote_type.value
        if target == VoteTarget.ANSWER.value and not question.has_answer:
            raise BadRequestError("Cannot vote on answer - no answer exists")

        existing = (
            await self.session.execute(
                select(AMAVote).where(
                    AMAVote.question_id == question.id,
                    AMAVote.voter_ip == voter_ip,
                    AMAVote.vote_target == target,
                )
            )
        ).scalars().first()

        is_answer = target == VoteTarget.ANSWER.value
        upvotes = question.answer_upvotes if is_answer else question.upvotes
        downvotes = question.answer_downvotes if is_answer else question.downvotes

        user_vote: Optional[str] = vote_type
        if existing is None:
            self.session.add(
                AMAVote(question_id=question.id, voter_ip=voter_ip, vote_type=vote_type, vote_target=target)
            )
            if vote_type == VoteType.UPVOTE.value:
                upvotes += 1
            else:
                downvotes += 1
            action = "added"
        elif existing.vote_type == vote_type:
            await self.session.delete(existing)
            if vote_type == VoteType.UPVOTE.value:
                upvotes = max(0, upvotes - 1)
            else:
                downvotes = max(0, downvotes - 1)
            action = "removed"
            user_vote = None
        else:
            existing.vote_type = vote_type
            self.session.add(existing)
            if vote_type == VoteType.UPVOTE.value:
                downvotes = max(0, downvotes - 1)
                upvotes += 1
            else:
                upvotes = max(0, upvotes - 1)
                downvotes += 1
            action = "changed"

        if is_answer:
            question.answer_upvotes, question.answer_downvotes = upvotes, downvotes
        else:
            question.upvotes, question.downvotes = upvotes, downvotes
        self.session.add(question)
        await self.session.commit()

        log_domain_event("AMA vote", question_id=question.id, action=action, target=target)
        return VoteResult(action=action, vote_target=target, user_vote=user_vote, upvotes=upvotes, downvotes=downvotes)

    async def list_categories(self, active_only: bool = True) -> List[AMACategory]:
        query = select(AMACategory)
        if active_only:
            query = query.where(AMACategory.is_active == True)  # noqa: E712
        result = await self.session.execute(query.order_by(AMACategory.display_order))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def list_admin(
        self,
        status: Optional[str] = None,
        category_id: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[QuestionAdminRead], Pagination]:
        query = select(AMAQuestion)
        if status:
            query = query.where(AMAQuestion.status == status)
        if category_id:
            query = query.where(AMAQuestion.category_id == category_id)
        query = query.order_by(AMAQuestion.created_at.desc())
        questions, pagination = await paginate(self.session, query, page=page, limit=limit)
        return [QuestionAdminRead.model_validate(q) for q in questions], pagination

    async def moderate(self, question_id: str, data: QuestionAdminUpdate, user: User) -> QuestionAdminRead:
        """
        Edit, answer or change the status of a question.

        A non-empty answer publishes it as ``answered`` and stamps who answered
        and when. Marking a question answered without any answer is refused.
        """
        question = await self.session.get(AMAQuestion, question_id)
        if question is None:
            raise NotFoundError("Question not found")

        update = plain_values(data.model_dump(exclude_unset=True))
        for key, value in update.items():
            setattr(question, key, value)

        answer_given = any((update.get(field) or "").strip() for field in ("answer_en", "answer_bn"))
        if answer_given:
            question.status = QuestionStatus.ANSWERED.value
            question.answered_at = utc_now_naive()
            question.answered_by = user.id
        elif update.get("status") == QuestionStatus.ANSWERED.value and not question.has_answer:
            raise BadRequestError("Cannot mark as answered without providing an answer")

        question.updated_at = utc_now_naive()
        self.session.add(question)
        await self.session.commit()
        await self.session.refresh(question)
        logger.info(f"AMA question {question.id} moderated by {user.email}: status={question.status}")
        return QuestionAdminRead.model_validate(question)

    async def delete(self, question_id: str) -> None:
        question = await self.session.get(AMAQuestion, question_id)
        if question is None:
            raise NotFoundError("Question not found")
        votes = await self.session.execute(select(AMAVote).where(AMAVote.question_id == question.id))
        for vote in votes.scalars().all():
            await self.session.delete(vote)
        await self.session.delete(question)
        await self.session.commit()
