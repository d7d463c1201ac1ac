"""
Volunteer Hub Endpoints.

Registration, public lookup by volunteer ID, aggregate statistics and the
downloadable ID card.
"""

from typing import Optional

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.volunteers import (
    RegistrationReceipt,
    VolunteerPublic,
    VolunteerRegister,
    VolunteerStats,
)
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.id_card import render_id_card
from constituency_hub.server.services.volunteers import VolunteerService, to_public

router = APIRouter()


@router.post(
    "/register",
    response_model=Envelope[RegistrationReceipt],
    status_code=201,
    summary="Register Volunteer",
    description="Register a new volunteer. The returned 8-digit ID is the volunteer's public identifier.",
    responses={400: {"description": "Invalid form or phone number already registered"}},
)
async def register_volunteer(data: VolunteerRegister, session: SessionDep) -> Envelope[RegistrationReceipt]:
    """
    Register a volunteer.

    The volunteer starts as ``pending`` until staff verify them.
    """
    return ok(await VolunteerService(session).register(data))


@router.get(
    "/search",
    response_model=Envelope[VolunteerPublic],
    summary="Find Volunteer",
    responses={400: {"description": "Malformed volunteer ID"}, 404: {"description": "No volunteer with this ID"}},
)
async def search_volunteer(
    session: SessionDep,
    volunteer_id: Optional[str] = Query(None, description="8-digit volunteer ID"),
) -> Envelope[VolunteerPublic]:
    return ok(await VolunteerService(session).search(volunteer_id))


@router.get(
    "/stats",
    response_model=Envelope[VolunteerStats],
    summary="Volunteer Statistics",
)
async def volunteer_stats(session: SessionDep) -> Envelope[VolunteerStats]:
    return ok(await VolunteerService(session).stats())


@router.get(
    "/{volunteer_id}/id-card.png",
    response_class=Response,
    summary="Volunteer ID Card",
    description="PNG identity card with a QR code linking to the volunteer's public profile.",
    responses={200: {"content": {"image/png": {}}}, 404: {"description": "No volunteer with this ID"}},
)
async def volunteer_id_card(volunteer_id: str, session: SessionDep) -> Response:
    volunteer = to_public(await VolunteerService(session).get_active(volunteer_id))
    png = await run_in_threadpool(render_id_card, volunteer)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="volunteer-{volunteer.volunteer_id}.png"'},
    )
