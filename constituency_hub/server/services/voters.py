"""
Voter roll lookup.

Public lookups need a date of birth and a ward and return at most 100
voters ordered by serial number. The back office gets a paginated free-text
search across the roll.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.bengali import format_date_bengali, parse_date_query, voter_slip_text, voter_sms_text
from constituency_hub.core.database.entities.voters import Voter, VoterMetadata
from constituency_hub.core.database.utils import utc_now_naive
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.models.io.voters import (
    VoterCreate,
    VoterMetadataCreate,
    VoterMetadataUpdate,
    VoterRead,
    VoterSearchResult,
    VoterUpdate,
    WardOption,
)

from .pagination import paginate

logger = logging.getLogger(__name__)

PUBLIC_RESULT_LIMIT = 100
LOOKUP_REQUIRED_MESSAGE = "জন্ম তারিখ এবং ওয়ার্ড নির্বাচন আবশ্যক"
INVALID_DATE_MESSAGE = "সঠিক জন্ম তারিখ দিন (দিন/মাস/বছর)"

SORTABLE_FIELDS = {
    "serial_no": Voter.serial_no,
    "voter_no": Voter.voter_no,
    "voter_name": Voter.voter_name,
    "date_of_birth": Voter.date_of_birth,
    "created_at": Voter.created_at,
}


class VoterService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _wards_by_id(self, ids) -> Dict[str, VoterMetadata]:
        ids = {i for i in ids if i}
        if not ids:
            return {}
        result = await self.session.execute(select(VoterMetadata).where(VoterMetadata.id.in_(ids)))
        return {ward.id: ward for ward in result.scalars().all()}

    async def _to_reads(self, voters: List[Voter]) -> List[VoterRead]:
        wards = await self._wards_by_id(v.voter_metadata_id for v in voters)
        reads = []
        for voter in voters:
            read = VoterRead.model_validate(voter)
            read.date_of_birth_bn = format_date_bengali(voter.date_of_birth)
            if voter.voter_metadata_id in wards:
                read.voter_metadata = WardOption.model_validate(wards[voter.voter_metadata_id])
            reads.append(read)
        return reads

    async def search(
        self,
        date_of_birth: Optional[str],
        ward_id: Optional[str],
        name: Optional[str] = None,
    ) -> VoterSearchResult:
        """
        Public lookup.

        ``date_of_birth`` may be Bengali or ASCII ``dd/mm/yyyy`` or ISO
        ``yyyy-mm-dd``. ``name`` narrows the result by case-insensitive
        substring.
        """
        if not (date_of_birth or "").strip() or not (ward_id or "").strip():
            raise BadRequestError(LOOKUP_REQUIRED_MESSAGE)
        dob = parse_date_query(date_of_birth)
        if dob is None:
            raise BadRequestError(INVALID_DATE_MESSAGE)

        conditions = [Voter.voter_metadata_id == ward_id.strip(), Voter.date_of_birth == dob]
        if name and name.strip():
            conditions.append(Voter.voter_name.ilike(f"%{name.strip()}%"))

        total = (await self.session.execute(select(func.count()).select_from(Voter).where(*conditions))).scalar() or 0
        result = await self.session.execute(
            select(Voter).where(*conditions).order_by(Voter.serial_no.asc()).limit(PUBLIC_RESULT_LIMIT)
        )
        voters = await self._to_reads(list(result.scalars().all()))
        logger.debug(f"Voter lookup in ward {ward_id}: {total} match(es)")
        return VoterSearchResult(voters=voters, total=total)

    async def wards(self) -> List[VoterMetadata]:
        result = await self.session.execute(
            select(VoterMetadata).order_by(VoterMetadata.voter_area_no.asc(), VoterMetadata.voter_area_name.asc())
        )
        return list(result.scalars().all())

    async def get(self, voter_id: str) -> Voter:
        voter = await self.session.get(Voter, voter_id)
        if voter is None:
            raise NotFoundError("Voter not found")
        return voter

    async def slip(self, voter_id: str, footer: Optional[str] = None) -> str:
        voter = await self.get(voter_id)
        ward = await self.session.get(VoterMetadata, voter.voter_metadata_id)
        return voter_slip_text(voter, ward, footer=footer)

    async def sms_text(self, voter_id: str) -> str:
        voter = await self.get(voter_id)
        ward = await self.session.get(VoterMetadata, voter.voter_metadata_id)
        return voter_sms_text(voter, ward)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def admin_search(
        self,
        search: Optional[str] = None,
        ward_id: Optional[str] = None,
        sort_by: str = "serial_no",
        sort_order: str = "asc",
        page: int = 1,
        limit: int = 50,
    ) -> Tuple[List[VoterRead], Pagination]:
        query = select(Voter)
        if ward_id:
            query = query.where(Voter.voter_metadata_id == ward_id)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Voter.voter_name.ilike(pattern),
                    Voter.voter_no.ilike(pattern),
                    Voter.father_name.ilike(pattern),
                    Voter.mother_name.ilike(pattern),
                    Voter.address.ilike(pattern),
                )
            )
        column = SORTABLE_FIELDS.get(sort_by)
        if column is None:
            raise BadRequestError(f"Cannot sort by {sort_by}")
        query = query.order_by(desc(column) if sort_order.lower() == "desc" else asc(column))
        voters, pagination = await paginate(self.session, query, page=page, limit=limit)
        return await self._to_reads(voters), pagination

    async def _check_ward(self, ward_id: str) -> None:
        if await self.session.get(VoterMetadata, ward_id) is None:
            raise BadRequestError("Unknown voter area")

    async def create(self, data: VoterCreate) -> VoterRead:
        await self._check_ward(data.voter_metadata_id)
        voter = Voter(**data.model_dump())
        self.session.add(voter)
        await self.session.commit()
        await self.session.refresh(voter)
        return (await self._to_reads([voter]))[0]

    async def update(self, voter_id: str, data: VoterUpdate) -> VoterRead:
        voter = await self.get(voter_id)
        update = data.model_dump(exclude_unset=True)
        if update.get("voter_metadata_id"):
            await self._check_ward(update["voter_metadata_id"])
        for key, value in update.items():
            setattr(voter, key, value)
        voter.updated_at = utc_now_naive()
        self.session.add(voter)
        await self.session.commit()
        await self.session.refresh(voter)
        return (await self._to_reads([voter]))[0]

    async def delete(self, voter_id: str) -> None:
        voter = await self.get(voter_id)
        await self.session.delete(voter)
        await self.session.commit()

    async def create_ward(self, data: VoterMetadataCreate) -> VoterMetadata:
        ward = VoterMetadata(**data.model_dump())
        self.session.add(ward)
        await self.session.commit()
        await self.session.refresh(ward)
        logger.info(f"Voter area {ward.voter_area_no} ({ward.voter_area_name}) created")
        return ward

    async def update_ward(self, ward_id: str, data: VoterMetadataUpdate) -> VoterMetadata:
        ward = await self.session.get(VoterMetadata, ward_id)
        if ward is None:
            raise NotFoundError("Voter area not found")
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(ward, key, value)
        ward.updated_at = utc_now_naive()
        self.session.add(ward)
        await self.session.commit()
        await self.session.refresh(ward)
        return ward

    async def delete_ward(self, ward_id: str) -> None:
        ward = await self.session.get(VoterMetadata, ward_id)
        if ward is None:
            raise NotFoundError("Voter area not found")
        in_use = await self.session.execute(select(Voter.id).where(Voter.voter_metadata_id == ward.id).limit(1))
        if in_use.first() is not None:
            raise BadRequestError("Voter area still has voters")
        await self.session.delete(ward)
        await self.session.commit()
