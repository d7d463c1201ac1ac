"""Poll administration and results."""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.database.entities.polls import PollStatus
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.polls import PollAdminRead, PollCreate, PollUpdate
from constituency_hub.server.services.deps import SessionDep, StaffUser
from constituency_hub.server.services.polls import PollService

router = APIRouter()


@router.get("", response_model=Envelope[List[PollAdminRead]], summary="List All Polls")
async def list_polls(
    session: SessionDep,
    status: Optional[PollStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[PollAdminRead]]:
    polls, pagination = await PollService(session).list_admin(status.value if status else None, page, limit)
    return ok(polls, pagination)


@router.get(
    "/{poll_id}",
    response_model=Envelope[PollAdminRead],
    summary="Poll Results",
    description="A poll with full vote counts regardless of its visibility settings.",
)
async def get_poll(poll_id: str, session: SessionDep) -> Envelope[PollAdminRead]:
    return ok(await PollService(session).get_admin(poll_id))


@router.post(
    "",
    response_model=Envelope[PollAdminRead],
    status_code=201,
    summary="Create Poll",
    responses={400: {"description": "Missing titles, bad window or fewer than two options"}},
)
async def create_poll(data: PollCreate, session: SessionDep, user: StaffUser) -> Envelope[PollAdminRead]:
    """
    Create a poll.

    - **title_en** / **title_bn**: Both required
    - **start_datetime** / **end_datetime**: Start must precede end
    - **options**: At least two, each with English and Bengali text
    """
    return ok(await PollService(session).create(data, user))


@router.put("/{poll_id}", response_model=Envelope[PollAdminRead], summary="Update Poll")
async def update_poll(poll_id: str, data: PollUpdate, session: SessionDep) -> Envelope[PollAdminRead]:
    return ok(await PollService(session).update(poll_id, data))


@router.delete("/{poll_id}", response_model=Envelope[Deleted], summary="Delete Poll")
async def delete_poll(poll_id: str, session: SessionDep) -> Envelope[Deleted]:
    await PollService(session).delete(poll_id)
    return ok(Deleted(id=poll_id))
