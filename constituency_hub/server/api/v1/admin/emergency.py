"""
Emergency administration.

SOS triage plus the contact directory and relief resources shown on the
public emergency page.
"""

from typing import List, Optional

from fastapi import APIRouter, Query
from sqlalchemy import select

from constituency_hub.core.database.entities.emergency import (
    EmergencyContact,
    EmergencyPriority,
    EmergencyResource,
    EmergencyStatus,
)
from constituency_hub.core.exceptions import NotFoundError
from constituency_hub.core.models.io import Deleted, Envelope, Pagination, ok
from constituency_hub.core.models.io.common import MAX_PAGE_SIZE
from constituency_hub.core.models.io.emergency import (
    EmergencyContactCreate,
    EmergencyContactRead,
    EmergencyContactUpdate,
    EmergencyRequestRead,
    EmergencyRequestUpdate,
    EmergencyResourceCreate,
    EmergencyResourceRead,
    EmergencyResourceUpdate,
)
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.emergency import EmergencyService

router = APIRouter()


# ----------------------------------------------------------------------
# SOS requests
# ----------------------------------------------------------------------


@router.get("/requests", response_model=Envelope[List[EmergencyRequestRead]], summary="List SOS Requests")
async def list_requests(
    session: SessionDep,
    status: Optional[EmergencyStatus] = Query(None),
    request_type: Optional[str] = Query(None, alias="type"),
    priority: Optional[EmergencyPriority] = Query(None),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
) -> Envelope[List[EmergencyRequestRead]]:
    requests, total = await EmergencyService(session).list_requests(
        status.value if status else None,
        request_type,
        priority.value if priority else None,
        limit,
        offset,
    )
    pagination = Pagination.build(page=offset // limit + 1, limit=limit, total=total)
    return ok([EmergencyRequestRead.model_validate(r) for r in requests], pagination)


@router.patch("/requests/{request_id}", response_model=Envelope[EmergencyRequestRead], summary="Update SOS Request")
async def update_request(
    request_id: str, data: EmergencyRequestUpdate, session: SessionDep
) -> Envelope[EmergencyRequestRead]:
    """
    Update an SOS request.

    The first move to ``acknowledged`` or ``responding`` stamps the response
    time. Moving to ``resolved`` stamps the resolution time.
    """
    request = await EmergencyService(session).update_request(request_id, data)
    return ok(EmergencyRequestRead.model_validate(request))


@router.delete("/requests/{request_id}", response_model=Envelope[Deleted], summary="Delete SOS Request")
async def delete_request(request_id: str, session: SessionDep) -> Envelope[Deleted]:
    await EmergencyService(session).delete_request(request_id)
    return ok(Deleted(id=request_id))


# ----------------------------------------------------------------------
# Contacts
# ----------------------------------------------------------------------


@router.get("/contacts", response_model=Envelope[List[EmergencyContactRead]], summary="List All Contacts")
async def list_contacts(session: SessionDep) -> Envelope[List[EmergencyContactRead]]:
    result = await session.execute(
        select(EmergencyContact).order_by(EmergencyContact.display_order, EmergencyContact.name_en)
    )
    return ok([EmergencyContactRead.model_validate(c) for c in result.scalars().all()])


@router.post("/contacts", response_model=Envelope[EmergencyContactRead], status_code=201, summary="Create Contact")
async def create_contact(data: EmergencyContactCreate, session: SessionDep) -> Envelope[EmergencyContactRead]:
    contact = EmergencyContact(**data.model_dump())
    session.add(contact)
    await session.commit()
    await session.refresh(contact)
    return ok(EmergencyContactRead.model_validate(contact))


@router.put("/contacts/{contact_id}", response_model=Envelope[EmergencyContactRead], summary="Update Contact")
async def update_contact(
    contact_id: str, data: EmergencyContactUpdate, session: SessionDep
) -> Envelope[EmergencyContactRead]:
    contact = await session.get(EmergencyContact, contact_id)
    if contact is None:
        raise NotFoundError("Emergency contact not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(contact, key, value)
    session.add(contact)
    await session.commit()
    await session.refresh(contact)
    return ok(EmergencyContactRead.model_validate(contact))


@router.delete("/contacts/{contact_id}", response_model=Envelope[Deleted], summary="Delete Contact")
async def delete_contact(contact_id: str, session: SessionDep) -> Envelope[Deleted]:
    contact = await session.get(EmergencyContact, contact_id)
    if contact is None:
        raise NotFoundError("Emergency contact not found")
    await session.delete(contact)
    await session.commit()
    return ok(Deleted(id=contact_id))


# ----------------------------------------------------------------------
# Resources
# ----------------------------------------------------------------------


@router.get("/resources", response_model=Envelope[List[EmergencyResourceRead]], summary="List All Resources")
async def list_resources(session: SessionDep) -> Envelope[List[EmergencyResourceRead]]:
    result = await session.execute(
        select(EmergencyResource).order_by(EmergencyResource.display_order, EmergencyResource.name_en)
    )
    return ok([EmergencyResourceRead.model_validate(r) for r in result.scalars().all()])


@router.post(
    "/resources", response_model=Envelope[EmergencyResourceRead], status_code=201, summary="Create Resource"
)
async def create_resource(data: EmergencyResourceCreate, session: SessionDep) -> Envelope[EmergencyResourceRead]:
    resource = EmergencyResource(**data.model_dump())
    session.add(resource)
    await session.commit()
    await session.refresh(resource)
    return ok(EmergencyResourceRead.model_validate(resource))


@router.put("/resources/{resource_id}", response_model=Envelope[EmergencyResourceRead], summary="Update Resource")
async def update_resource(
    resource_id: str, data: EmergencyResourceUpdate, session: SessionDep
) -> Envelope[EmergencyResourceRead]:
    resource = await session.get(EmergencyResource, resource_id)
    if resource is None:
        raise NotFoundError("Emergency resource not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(resource, key, value)
    session.add(resource)
    await session.commit()
    await session.refresh(resource)
    return ok(EmergencyResourceRead.model_validate(resource))


@router.delete("/resources/{resource_id}", response_model=Envelope[Deleted], summary="Delete Resource")
async def delete_resource(resource_id: str, session: SessionDep) -> Envelope[Deleted]:
    resource = await session.get(EmergencyResource, resource_id)
    if resource is None:
        raise NotFoundError("Emergency resource not found")
    await session.delete(resource)
    await session.commit()
    return ok(Deleted(id=resource_id))
