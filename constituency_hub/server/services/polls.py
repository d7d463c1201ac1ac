"""
Poll service.

Holds the voting rules: which polls are visible, when results may be shown,
and the ordered checks a vote must pass before it is recorded.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.polls import (
    HIDDEN_POLL_STATUSES,
    Poll,
    PollOption,
    PollPhase,
    PollStatus,
    PollVote,
)
from constituency_hub.core.database.entities.users import User
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.models.io.polls import (
    PollAdminRead,
    PollCreate,
    PollOptionInput,
    PollOptionRead,
    PollRead,
    PollUpdate,
    PollVoteOutcome,
    PollVoteRequest,
    PollVoteStatus,
)
from constituency_hub.core.monitoring import log_domain_event

from .pagination import paginate

logger = logging.getLogger(__name__)

SCHEDULED = "scheduled"


def compute_phase(poll: Poll, now: datetime) -> str:
    if now < poll.start_datetime:
        return PollPhase.UPCOMING.value
    if now > poll.end_datetime:
        return PollPhase.CLOSED.value
    return PollPhase.ACTIVE.value


def admin_status(poll: Poll, now: datetime) -> str:
    """Stored status, refined for active polls whose window has not opened or has passed."""
    if poll.status == PollStatus.ACTIVE.value:
        phase = compute_phase(poll, now)
        if phase == PollPhase.UPCOMING.value:
            return SCHEDULED
        if phase == PollPhase.CLOSED.value:
            return PollPhase.CLOSED.value
    return poll.status


def percentage(count: int, total: int) -> int:
    """Share of ``total`` rounded half up, as the public results display it."""
    if total <= 0:
        return 0
    return math.floor(count / total * 100 + 0.5)


class PollService:
    """Poll reads, voting and administration."""

    def __init__(self, session: AsyncSession, now: Callable[[], datetime] = utc_now_naive):
        self.session = session
        self._now = now

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _get_poll(self, poll_id: str) -> Poll:
        poll = await self.session.get(Poll, poll_id)
        if poll is None:
            raise NotFoundError("Poll not found")
        return poll

    async def _options(self, poll_id: str) -> List[PollOption]:
        result = await self.session.execute(
            select(PollOption).where(PollOption.poll_id == poll_id).order_by(PollOption.display_order)
        )
        return list(result.scalars().all())

    async def _counts(self, poll_id: str) -> Dict[str, int]:
        result = await self.session.execute(
            select(PollVote.option_id, func.count(PollVote.id))
            .where(PollVote.poll_id == poll_id)
            .group_by(PollVote.option_id)
        )
        return {option_id: count for option_id, count in result.all()}

    async def _voter_vote(self, poll_id: str, voter_hash: Optional[str]) -> Optional[PollVote]:
        if not voter_hash:
            return None
        result = await self.session.execute(
            select(PollVote).where(PollVote.poll_id == poll_id, PollVote.voter_phone_hash == voter_hash)
        )
        return result.scalars().first()

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def _option_reads(
        self,
        options: List[PollOption],
        counts: Dict[str, int],
        show_results: bool,
        voted_option_id: Optional[str],
    ) -> Tuple[List[PollOptionRead], int]:
        total = sum(counts.values())
        reads = []
        for option in options:
            count = counts.get(option.id, 0)
            reads.append(
                PollOptionRead(
                    id=option.id,
                    option_en=option.option_en,
                    option_bn=option.option_bn,
                    display_order=option.display_order,
                    vote_count=count if show_results else None,
                    percentage=percentage(count, total) if show_results else None,
                    is_voted=option.id == voted_option_id,
                )
            )
        return reads, total

    async def _build(self, poll: Poll, voter_hash: Optional[str] = None, admin: bool = False) -> dict:
        now = self._now()
        options = await self._options(poll.id)
        counts = await self._counts(poll.id)
        vote = await self._voter_vote(poll.id, voter_hash)
        phase = compute_phase(poll, now)
        show_results = admin or phase == PollPhase.CLOSED.value or poll.show_results_before_end or vote is not None
        voted_option_id = vote.option_id if vote else None
        option_reads, total = self._option_reads(options, counts, show_results, voted_option_id)
        return {
            "id": poll.id,
            "title_en": poll.title_en,
            "title_bn": poll.title_bn,
            "description_en": poll.description_en,
            "description_bn": poll.description_bn,
            "start_datetime": poll.start_datetime,
            "end_datetime": poll.end_datetime,
            "timezone": poll.timezone,
            "status": poll.status,
            "computed_status": phase,
            "featured_image": poll.featured_image,
            "require_verification": poll.require_verification,
            "show_results_before_end": poll.show_results_before_end,
            "allow_multiple_votes": poll.allow_multiple_votes,
            "show_results": show_results,
            "total_votes": total if show_results else 0,
            "has_voted": vote is not None,
            "voted_option_id": voted_option_id,
            "can_vote": (
                poll.status == PollStatus.ACTIVE.value and phase == PollPhase.ACTIVE.value and vote is None
            ),
            "options": option_reads,
        }

    async def to_read(self, poll: Poll, voter_hash: Optional[str] = None) -> PollRead:
        return PollRead(**await self._build(poll, voter_hash))

    async def to_admin_read(self, poll: Poll) -> PollAdminRead:
        data = await self._build(poll, admin=True)
        return PollAdminRead(**data, admin_status=admin_status(poll, self._now()), created_at=poll.created_at)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def list_public(
        self,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
        voter_hash: Optional[str] = None,
    ) -> Tuple[List[PollRead], Pagination]:
        now = self._now()
        query = select(Poll).where(Poll.status.not_in(HIDDEN_POLL_STATUSES))
        if status == PollPhase.ACTIVE.value:
            query = query.where(and_(Poll.start_datetime <= now, Poll.end_datetime >= now))
        elif status == PollPhase.CLOSED.value:
            query = query.where(Poll.end_datetime < now)
        elif status == PollPhase.UPCOMING.value:
            query = query.where(Poll.start_datetime > now)
        query = query.order_by(Poll.start_datetime.desc())

        polls, pagination = await paginate(self.session, query, page=page, limit=limit)
        return [await self.to_read(poll, voter_hash) for poll in polls], pagination

    async def get_public(self, poll_id: str, voter_hash: Optional[str] = None) -> PollRead:
        poll = await self._get_poll(poll_id)
        if poll.status in HIDDEN_POLL_STATUSES:
            raise NotFoundError("Poll not found")
        return await self.to_read(poll, voter_hash)

    async def vote_status(self, poll_id: str, voter_hash: Optional[str]) -> PollVoteStatus:
        await self._get_poll(poll_id)
        vote = await self._voter_vote(poll_id, voter_hash)
        if vote is None:
            return PollVoteStatus(has_voted=False)
        return PollVoteStatus(has_voted=True, voted_option_id=vote.option_id, voted_at=vote.created_at)

    async def cast_vote(
        self,
        poll_id: str,
        request: PollVoteRequest,
        voter_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> PollVoteOutcome:
        """
        Record one vote.

        Checks run in a fixed order and the first failure wins: option given,
        phone hash given, poll exists, poll open for voting, window started,
        window not ended, option belongs to poll, voter has not voted yet.
        """
        if not request.option_id:
            raise BadRequestError("Option ID is required")
        if not request.voter_phone_hash:
            raise BadRequestError("Phone verification is required to vote")

        poll = await self._get_poll(poll_id)
        if poll.status in HIDDEN_POLL_STATUSES:
            raise BadRequestError("This poll is not available for voting")

        now = self._now()
        if now < poll.start_datetime:
            raise BadRequestError("Voting has not started yet")
        if now > poll.end_datetime:
            raise BadRequestError("Voting has ended for this poll")

        option = await self.session.get(PollOption, request.option_id)
        if option is None or option.poll_id != poll.id:
            raise BadRequestError("Invalid option for this poll")

        existing = await self._voter_vote(poll.id, request.voter_phone_hash)
        if existing is not None:
            raise self._already_voted(existing.option_id)

        vote = PollVote(
            poll_id=poll.id,
            option_id=option.id,
            voter_phone_hash=request.voter_phone_hash,
            voter_ip=voter_ip,
            user_agent=user_agent,
        )
        self.session.add(vote)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            existing = await self._voter_vote(poll.id, request.voter_phone_hash)
            raise self._already_voted(existing.option_id if existing else None)

        logger.info(f"Recorded vote on poll {poll.id} for option {option.id}")
        log_domain_event("Poll vote recorded", poll_id=poll.id, option_id=option.id)

        options = await self._options(poll.id)
        counts = await self._counts(poll.id)
        option_reads, total = self._option_reads(options, counts, True, option.id)
        return PollVoteOutcome(voted_option_id=option.id, total_votes=total, options=option_reads)

    @staticmethod
    def _already_voted(voted_option_id: Optional[str]) -> BadRequestError:
        return BadRequestError(
            "You have already voted in this poll",
            code="already_voted",
            details={"already_voted": True, "voted_option_id": voted_option_id},
        )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def list_admin(
        self, status: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[PollAdminRead], Pagination]:
        query = select(Poll)
        if status:
            query = query.where(Poll.status == status)
        query = query.order_by(Poll.created_at.desc())
        polls, pagination = await paginate(self.session, query, page=page, limit=limit)
        return [await self.to_admin_read(poll) for poll in polls], pagination

    async def get_admin(self, poll_id: str) -> PollAdminRead:
        return await self.to_admin_read(await self._get_poll(poll_id))

    def _add_options(self, poll_id: str, options: List[PollOptionInput]) -> None:
        for index, option in enumerate(options):
            self.session.add(
                PollOption(
                    poll_id=poll_id,
                    option_en=option.option_en.strip(),
                    option_bn=option.option_bn.strip(),
                    display_order=index,
                )
            )

    async def create(self, data: PollCreate, user: Optional[User] = None) -> PollAdminRead:
        poll = Poll(**plain_values(data.model_dump(exclude={"options"})))
        poll.created_by = user.id if user else None
        self.session.add(poll)
        await self.session.flush()
        self._add_options(poll.id, data.options)
        await self.session.commit()
        await self.session.refresh(poll)
        logger.info(f"Created poll {poll.id} with {len(data.options)} options")
        return await self.to_admin_read(poll)

    async def update(self, poll_id: str, data: PollUpdate) -> PollAdminRead:
        """
        Apply a partial update. Replacing options is refused once votes exist,
        since recorded votes reference the old options.
        """
        poll = await self._get_poll(poll_id)
        update = plain_values(data.model_dump(exclude_unset=True, exclude={"options"}))
        for key, value in update.items():
            setattr(poll, key, value)
        if poll.end_datetime <= poll.start_datetime:
            raise BadRequestError("End time must be after start time")

        if data.options is not None:
            if await self._counts(poll.id):
                raise BadRequestError("Options cannot be replaced after voting has started")
            await self.session.execute(delete(PollOption).where(PollOption.poll_id == poll.id))
            self._add_options(poll.id, data.options)

        poll.updated_at = utc_now_naive()
        self.session.add(poll)
        await self.session.commit()
        await self.session.refresh(poll)
        return await self.to_admin_read(poll)

    async def delete(self, poll_id: str) -> None:
        poll = await self._get_poll(poll_id)
        await self.session.execute(delete(PollVote).where(PollVote.poll_id == poll.id))
        await self.session.execute(delete(PollOption).where(PollOption.poll_id == poll.id))
        await self.session.delete(poll)
        await self.session.commit()
        logger.info(f"Deleted poll {poll_id}")
