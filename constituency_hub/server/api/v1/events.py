"""
Event Endpoints.

Published events, either as a list filtered to past or upcoming or laid out
on a month calendar.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.content import CalendarMonthRead, EventRead
from constituency_hub.server.services.content import EventService
from constituency_hub.server.services.deps import SessionDep

router = APIRouter()


@router.get(
    "",
    response_model=Envelope[List[EventRead]],
    summary="List Events",
    description="Published events. Upcoming events are sorted soonest first, otherwise most recent first.",
)
async def list_events(
    session: SessionDep,
    filter: Optional[Literal["past", "upcoming"]] = Query(None, description="past or upcoming"),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
) -> Envelope[List[EventRead]]:
    events, pagination = await EventService(session).list_published(filter, category, page, limit)
    return ok([EventRead.model_validate(e) for e in events], pagination)


@router.get(
    "/calendar",
    response_model=Envelope[CalendarMonthRead],
    summary="Events Calendar",
    description="A Sunday-first month grid with the published events of each day.",
    responses={400: {"description": "Month outside 1-12"}},
)
async def events_calendar(
    session: SessionDep,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., description="1-12"),
) -> Envelope[CalendarMonthRead]:
    """
    Month calendar.

    - **year**: Four digit year
    - **month**: Month number, January is 1
    """
    return ok(await EventService(session).calendar(year, month))


@router.get(
    "/{slug}",
    response_model=Envelope[EventRead],
    summary="Get Event",
    responses={404: {"description": "Event not found"}},
)
async def get_event(slug: str, session: SessionDep) -> Envelope[EventRead]:
    return ok(EventRead.model_validate(await EventService(session).get_published(slug)))
