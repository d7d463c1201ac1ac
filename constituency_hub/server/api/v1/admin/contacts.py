"""Contact form inbox."""

from typing import List, Optional

from fastapi import APIRouter, Query
from sqlalchemy import select

from constituency_hub.core.database.entities.contacts import ContactStatus, ContactSubmission
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import NotFoundError
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.contacts import ContactRead, ContactUpdate
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.pagination import paginate

router = APIRouter()


async def _get_submission(session, contact_id: str) -> ContactSubmission:
    submission = await session.get(ContactSubmission, contact_id)
    if submission is None:
        raise NotFoundError("Contact message not found")
    return submission


@router.get("", response_model=Envelope[List[ContactRead]], summary="List Contact Messages")
async def list_contacts(
    session: SessionDep,
    status: Optional[ContactStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[ContactRead]]:
    query = select(ContactSubmission)
    if status:
        query = query.where(ContactSubmission.status == status.value)
    submissions, pagination = await paginate(session, query.order_by(ContactSubmission.created_at.desc()), page, limit)
    return ok([ContactRead.model_validate(s) for s in submissions], pagination)


@router.patch("/{contact_id}", response_model=Envelope[ContactRead], summary="Update Contact Message")
async def update_contact(contact_id: str, data: ContactUpdate, session: SessionDep) -> Envelope[ContactRead]:
    """Change the status or notes of a message. Marking it ``responded`` stamps ``responded_at``."""
    submission = await _get_submission(session, contact_id)
    update = plain_values(data.model_dump(exclude_unset=True))
    for key, value in update.items():
        setattr(submission, key, value)
    if update.get("status") == ContactStatus.RESPONDED.value:
        submission.responded_at = utc_now_naive()
    session.add(submission)
    await session.commit()
    await session.refresh(submission)
    return ok(ContactRead.model_validate(submission))


@router.delete("/{contact_id}", response_model=Envelope[Deleted], summary="Delete Contact Message")
async def delete_contact(contact_id: str, session: SessionDep) -> Envelope[Deleted]:
    submission = await _get_submission(session, contact_id)
    await session.delete(submission)
    await session.commit()
    return ok(Deleted(id=contact_id))
