"""
Poll Endpoints.

Public polls with phone-verified, one-per-voter voting. Voters are
identified by the SHA-256 hash of their normalised phone number.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.polls import (
    PollRead,
    PollVoteOutcome,
    PollVoteRequest,
    PollVoteStatus,
)
from constituency_hub.server.services.deps import ClientIP, SessionDep, UserAgent
from constituency_hub.server.services.polls import PollService

router = APIRouter()


@router.get(
    "",
    response_model=Envelope[List[PollRead]],
    summary="List Polls",
    description="Published polls, newest start first. Drafts and archived polls are never listed.",
)
async def list_polls(
    session: SessionDep,
    status: Optional[Literal["active", "closed", "upcoming"]] = Query(None, description="Phase derived from the window"),
    voter_hash: Optional[str] = Query(None, description="Marks the polls this voter has voted in"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1),
) -> Envelope[List[PollRead]]:
    polls, pagination = await PollService(session).list_public(status, page, limit, voter_hash)
    return ok(polls, pagination)


@router.get(
    "/{poll_id}",
    response_model=Envelope[PollRead],
    summary="Get Poll",
    responses={404: {"description": "Poll not found"}},
)
async def get_poll(
    poll_id: str,
    session: SessionDep,
    voter_hash: Optional[str] = Query(None),
) -> Envelope[PollRead]:
    """
    Get one poll with its options.

    Vote counts are null until the poll closes, unless the poll shows
    results early or the caller identified by ``voter_hash`` has voted.
    """
    return ok(await PollService(session).get_public(poll_id, voter_hash))


@router.post(
    "/{poll_id}/vote",
    response_model=Envelope[PollVoteOutcome],
    summary="Cast Vote",
    responses={
        400: {"description": "Vote rejected, ``data.already_voted`` is set for a repeat voter"},
        404: {"description": "Poll not found"},
    },
)
async def cast_vote(
    poll_id: str,
    request: PollVoteRequest,
    session: SessionDep,
    client_ip: ClientIP,
    user_agent: UserAgent,
) -> Envelope[PollVoteOutcome]:
    return ok(await PollService(session).cast_vote(poll_id, request, voter_ip=client_ip, user_agent=user_agent))


@router.get(
    "/{poll_id}/vote",
    response_model=Envelope[PollVoteStatus],
    summary="Vote Status",
    description="Whether the voter behind ``voter_hash`` has voted in this poll.",
)
async def vote_status(
    poll_id: str,
    session: SessionDep,
    voter_hash: Optional[str] = Query(None),
) -> Envelope[PollVoteStatus]:
    return ok(await PollService(session).vote_status(poll_id, voter_hash))
