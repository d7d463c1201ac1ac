"""Volunteer administration: review, verification and badges."""

from typing import List, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.database.entities.volunteers import VolunteerStatus
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.volunteers import VolunteerAdminUpdate, VolunteerRead
from constituency_hub.server.services.deps import SessionDep, StaffUser
from constituency_hub.server.services.volunteers import VolunteerService

router = APIRouter()


@router.get("", response_model=Envelope[List[VolunteerRead]], summary="List Volunteers")
async def list_volunteers(
    session: SessionDep,
    status: Optional[VolunteerStatus] = Query(None),
    thana: Optional[str] = Query(None),
    ward: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches name, phone or volunteer ID"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[VolunteerRead]]:
    volunteers, pagination = await VolunteerService(session).list_admin(
        status.value if status else None, thana, ward, category, search, page, limit
    )
    return ok([VolunteerRead.model_validate(v) for v in volunteers], pagination)


@router.patch("/{id}", response_model=Envelope[VolunteerRead], summary="Update Volunteer")
async def update_volunteer(
    id: str, data: VolunteerAdminUpdate, session: SessionDep, user: StaffUser
) -> Envelope[VolunteerRead]:
    """
    Update a volunteer.

    Setting ``status`` to ``verified`` records the verifying staff member and
    the time of verification.
    """
    return ok(VolunteerRead.model_validate(await VolunteerService(session).update(id, data, user)))


@router.delete("/{id}", response_model=Envelope[Deleted], summary="Delete Volunteer")
async def delete_volunteer(id: str, session: SessionDep) -> Envelope[Deleted]:
    await VolunteerService(session).delete(id)
    return ok(Deleted(id=id))
