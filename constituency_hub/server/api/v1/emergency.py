"""
Emergency Endpoints.

SOS submission, the emergency contact directory, relief resources and
current disaster alerts for the constituency.
"""

from typing import List

from fastapi import APIRouter
from sqlalchemy import select

from constituency_hub.core.database.entities.emergency import EmergencyContact, EmergencyResource
from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.emergency import (
    AlertFeed,
    EmergencyContactRead,
    EmergencyRequestRead,
    EmergencyResourceRead,
    SOSCreate,
)
from constituency_hub.server.services.alerts import AlertService
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.emergency import EmergencyService

router = APIRouter()


@router.post(
    "/sos",
    response_model=Envelope[EmergencyRequestRead],
    status_code=201,
    summary="Send SOS",
    description="Raise an emergency request. Only the phone number is required.",
    responses={400: {"description": "Phone number missing"}},
)
async def send_sos(data: SOSCreate, session: SessionDep) -> Envelope[EmergencyRequestRead]:
    request = await EmergencyService(session).create_sos(data)
    return ok(EmergencyRequestRead.model_validate(request))


@router.get(
    "/contacts",
    response_model=Envelope[List[EmergencyContactRead]],
    summary="Emergency Contacts",
)
async def list_contacts(session: SessionDep) -> Envelope[List[EmergencyContactRead]]:
    result = await session.execute(
        select(EmergencyContact)
        .where(EmergencyContact.is_active == True)  # noqa: E712
        .order_by(EmergencyContact.display_order, EmergencyContact.name_en)
    )
    return ok([EmergencyContactRead.model_validate(c) for c in result.scalars().all()])


@router.get(
    "/resources",
    response_model=Envelope[List[EmergencyResourceRead]],
    summary="Relief Resources",
    description="Shelters, hospitals and other relief points.",
)
async def list_resources(session: SessionDep) -> Envelope[List[EmergencyResourceRead]]:
    result = await session.execute(
        select(EmergencyResource)
        .where(EmergencyResource.is_active == True)  # noqa: E712
        .order_by(EmergencyResource.display_order, EmergencyResource.name_en)
    )
    return ok([EmergencyResourceRead.model_validate(r) for r in result.scalars().all()])


@router.get(
    "/alerts",
    response_model=Envelope[AlertFeed],
    summary="Disaster Alerts",
    description="Current alerts from ReliefWeb and GDACS. Feeds that fail are skipped.",
)
async def disaster_alerts() -> Envelope[AlertFeed]:
    return ok(await AlertService().fetch())
