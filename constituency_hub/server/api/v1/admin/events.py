"""Event administration."""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.database.entities.content import PublishStatus
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.content import EventCreate, EventRead, EventUpdate
from constituency_hub.server.services.content import EventService
from constituency_hub.server.services.deps import SessionDep

router = APIRouter()


@router.get("", response_model=Envelope[List[EventRead]], summary="List All Events")
async def list_events(
    session: SessionDep,
    status: Optional[PublishStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[EventRead]]:
    events, pagination = await EventService(session).list_admin(status.value if status else None, page, limit)
    return ok([EventRead.model_validate(e) for e in events], pagination)


@router.get("/{event_id}", response_model=Envelope[EventRead], summary="Get Event")
async def get_event(event_id: str, session: SessionDep) -> Envelope[EventRead]:
    return ok(EventRead.model_validate(await EventService(session).get(event_id)))


@router.post(
    "",
    response_model=Envelope[EventRead],
    status_code=201,
    summary="Create Event",
    responses={400: {"description": "Invalid slug or end before start"}},
)
async def create_event(data: EventCreate, session: SessionDep) -> Envelope[EventRead]:
    return ok(EventRead.model_validate(await EventService(session).create(data)))


@router.put("/{event_id}", response_model=Envelope[EventRead], summary="Update Event")
async def update_event(event_id: str, data: EventUpdate, session: SessionDep) -> Envelope[EventRead]:
    return ok(EventRead.model_validate(await EventService(session).update(event_id, data)))


@router.delete("/{event_id}", response_model=Envelope[Deleted], summary="Delete Event")
async def delete_event(event_id: str, session: SessionDep) -> Envelope[Deleted]:
    await EventService(session).delete(event_id)
    return ok(Deleted(id=event_id))
