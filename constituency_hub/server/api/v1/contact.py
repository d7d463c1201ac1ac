"""
Contact Form Endpoint.
"""

import logging

from fastapi import APIRouter

from constituency_hub.core.database.entities.contacts import ContactStatus, ContactSubmission
from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.contacts import ContactCreate, ContactRead
from constituency_hub.core.monitoring import log_domain_event
from constituency_hub.server.services.deps import SessionDep

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=Envelope[ContactRead],
    status_code=201,
    summary="Send Message",
    description="Submit the public contact form.",
    responses={400: {"description": "Missing field or invalid email"}},
)
async def submit_contact(data: ContactCreate, session: SessionDep) -> Envelope[ContactRead]:
    submission = ContactSubmission(
        name=data.name.strip(),
        email=data.email,
        phone=(data.phone or "").strip() or None,
        subject=data.subject.strip(),
        message=data.message.strip(),
        status=ContactStatus.PENDING.value,
    )
    session.add(submission)
    await session.commit()
    await session.refresh(submission)

    logger.info(f"Contact message {submission.id} received")
    log_domain_event("Contact message received", contact_id=submission.id)
    return ok(ContactRead.model_validate(submission))
