"""
Volunteer registry service.

Registration issues a random 8-digit public ID. Public lookups only expose
the fields printed on the ID card; phone, address and notes stay private.
"""

from __future__ import annotations

import logging
import re
import secrets
from collections import Counter
from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.users import User
from constituency_hub.core.database.entities.volunteers import Volunteer, VolunteerStatus
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, ConflictError, NotFoundError
from constituency_hub.core.models.io.common import MAX_PAGE_SIZE, Pagination
from constituency_hub.core.models.io.volunteers import (
    CATEGORY_LABELS,
    GENDER_LABELS,
    THANA_LABELS,
    CategoryCount,
    KeyedLabel,
    RegistrationReceipt,
    ThanaCount,
    VolunteerAdminUpdate,
    VolunteerPublic,
    VolunteerRegister,
    VolunteerStats,
    WardCount,
    label_for,
)
from constituency_hub.core.monitoring import log_domain_event
from constituency_hub.server.core.config import settings

from .pagination import paginate

logger = logging.getLogger(__name__)

VOLUNTEER_ID_PATTERN = re.compile(r"^\d{8}$")
MAX_ID_ATTEMPTS = 10


def generate_volunteer_id() -> str:
    """Random 8-digit ID without a leading zero."""
    return str(10_000_000 + secrets.randbelow(90_000_000))


def profile_url(volunteer_id: str) -> str:
    return f"{settings.site.base_url.rstrip('/')}/volunteer-hub/profile/{volunteer_id}"


def to_public(volunteer: Volunteer) -> VolunteerPublic:
    return VolunteerPublic(
        volunteer_id=volunteer.volunteer_id,
        name=volunteer.name,
        name_bn=volunteer.name_bn,
        gender=(
            KeyedLabel(key=volunteer.gender, label=label_for(GENDER_LABELS, volunteer.gender))
            if volunteer.gender
            else None
        ),
        thana=KeyedLabel(key=volunteer.thana, label=label_for(THANA_LABELS, volunteer.thana)),
        ward=volunteer.ward,
        categories=[KeyedLabel(key=c, label=label_for(CATEGORY_LABELS, c)) for c in volunteer.categories or []],
        badges=list(volunteer.badges or []),
        status=volunteer.status,
        photo_url=volunteer.photo_url,
        profile_url=profile_url(volunteer.volunteer_id),
        joined_at=volunteer.created_at,
    )


class VolunteerService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _unique_volunteer_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = generate_volunteer_id()
            taken = await self.session.execute(select(Volunteer.id).where(Volunteer.volunteer_id == candidate))
            if taken.first() is None:
                return candidate
        raise ConflictError("Could not allocate a volunteer ID, please try again")

    async def register(self, data: VolunteerRegister) -> RegistrationReceipt:
        existing = await self.session.execute(select(Volunteer.id).where(Volunteer.phone == data.phone))
        if existing.first() is not None:
            raise BadRequestError("This phone number is already registered", code="phone_registered")

        volunteer = Volunteer(
            volunteer_id=await self._unique_volunteer_id(),
            name=data.name,
            name_bn=(data.name_bn or "").strip() or None,
            phone=data.phone,
            email=(data.email or "").strip() or None,
            age=data.age,
            gender=data.gender,
            thana=data.thana,
            ward=data.ward,
            address=data.address,
            categories=list(data.categories),
            skills=data.skills,
            availability=data.availability,
            why_join=data.why_join,
            photo_url=data.photo_url,
            status=VolunteerStatus.PENDING.value,
        )
        self.session.add(volunteer)
        await self.session.commit()
        await self.session.refresh(volunteer)

        log_domain_event("Volunteer registered", volunteer_id=volunteer.volunteer_id, thana=volunteer.thana)
        logger.info(f"Volunteer {volunteer.volunteer_id} registered in {volunteer.thana}")
        return RegistrationReceipt(
            volunteer_id=volunteer.volunteer_id,
            name=volunteer.name,
            thana=volunteer.thana,
            ward=volunteer.ward,
            categories=volunteer.categories,
            status=volunteer.status,
        )

    async def get_active(self, volunteer_id: Optional[str]) -> Volunteer:
        """Active volunteer by public ID, validating the ID format first."""
        volunteer_id = (volunteer_id or "").strip()
        if not volunteer_id:
            raise BadRequestError("Volunteer ID is required")
        if not VOLUNTEER_ID_PATTERN.match(volunteer_id):
            raise BadRequestError("Please enter a valid 8-digit Volunteer ID")
        result = await self.session.execute(
            select(Volunteer).where(Volunteer.volunteer_id == volunteer_id, Volunteer.is_active == True)  # noqa: E712
        )
        volunteer = result.scalars().first()
        if volunteer is None:
            raise NotFoundError("No volunteer found with this ID")
        return volunteer

    async def search(self, volunteer_id: Optional[str]) -> VolunteerPublic:
        return to_public(await self.get_active(volunteer_id))

    async def stats(self) -> VolunteerStats:
        result = await self.session.execute(select(Volunteer).where(Volunteer.is_active == True))  # noqa: E712
        volunteers = list(result.scalars().all())

        by_thana = []
        for key, label in THANA_LABELS.items():
            members = [v for v in volunteers if v.thana == key]
            by_thana.append(
                ThanaCount(
                    key=key,
                    label=label,
                    total=len(members),
                    verified=sum(1 for v in members if v.status == VolunteerStatus.VERIFIED.value),
                )
            )

        wards = Counter(v.ward for v in volunteers if v.ward)
        categories = Counter(c for v in volunteers for c in v.categories or [])

        return VolunteerStats(
            total=len(volunteers),
            verified=sum(1 for v in volunteers if v.status == VolunteerStatus.VERIFIED.value),
            pending=sum(1 for v in volunteers if v.status == VolunteerStatus.PENDING.value),
            active_thanas=sum(1 for t in by_thana if t.total > 0),
            by_thana=by_thana,
            by_ward=[WardCount(ward=ward, count=count) for ward, count in wards.most_common()],
            by_category=[
                CategoryCount(key=key, label=label_for(CATEGORY_LABELS, key), count=count)
                for key, count in categories.most_common()
            ],
        )

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def list_admin(
        self,
        status: Optional[str] = None,
        thana: Optional[str] = None,
        ward: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Volunteer], Pagination]:
        query = select(Volunteer)
        if status:
            query = query.where(Volunteer.status == status)
        if thana:
            query = query.where(Volunteer.thana == thana)
        if ward:
            query = query.where(Volunteer.ward == ward)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(Volunteer.name.ilike(pattern), Volunteer.phone.ilike(pattern), Volunteer.volunteer_id.ilike(pattern))
            )
        query = query.order_by(Volunteer.created_at.desc())

        if category:
            # JSON list membership, filtered in Python
            result = await self.session.execute(query)
            matching = [v for v in result.scalars().all() if category in (v.categories or [])]
            page = max(1, page)
            limit = max(1, min(MAX_PAGE_SIZE, limit))
            start = (page - 1) * limit
            return matching[start : start + limit], Pagination.build(page=page, limit=limit, total=len(matching))

        return await paginate(self.session, query, page=page, limit=limit)

    async def update(self, id: str, data: VolunteerAdminUpdate, user: User) -> Volunteer:
        volunteer = await self.session.get(Volunteer, id)
        if volunteer is None:
            raise NotFoundError("Volunteer not found")

        update = plain_values(data.model_dump(exclude_unset=True))
        for key, value in update.items():
            setattr(volunteer, key, value)
        if update.get("status") == VolunteerStatus.VERIFIED.value:
            volunteer.verified_at = utc_now_naive()
            volunteer.verified_by = user.id

        volunteer.updated_at = utc_now_naive()
        self.session.add(volunteer)
        await self.session.commit()
        await self.session.refresh(volunteer)
        logger.info(f"Volunteer {volunteer.volunteer_id} updated by {user.email}: status={volunteer.status}")
        return volunteer

    async def delete(self, id: str) -> None:
        volunteer = await self.session.get(Volunteer, id)
        if volunteer is None:
            raise NotFoundError("Volunteer not found")
        await self.session.delete(volunteer)
        await self.session.commit()
