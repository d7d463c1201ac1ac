"""
Voter roll administration.

Searchable, sortable voter listing with CRUD, plus the voter areas
(``/metadata``) the voters belong to.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.voters import (
    VoterCreate,
    VoterMetadataCreate,
    VoterMetadataRead,
    VoterMetadataUpdate,
    VoterRead,
    VoterUpdate,
)
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.voters import VoterService

router = APIRouter()


@router.get("/metadata", response_model=Envelope[List[VoterMetadataRead]], summary="List Voter Areas")
async def list_wards(session: SessionDep) -> Envelope[List[VoterMetadataRead]]:
    wards = await VoterService(session).wards()
    return ok([VoterMetadataRead.model_validate(w) for w in wards])


@router.post("/metadata", response_model=Envelope[VoterMetadataRead], status_code=201, summary="Create Voter Area")
async def create_ward(data: VoterMetadataCreate, session: SessionDep) -> Envelope[VoterMetadataRead]:
    return ok(VoterMetadataRead.model_validate(await VoterService(session).create_ward(data)))


@router.put("/metadata/{ward_id}", response_model=Envelope[VoterMetadataRead], summary="Update Voter Area")
async def update_ward(ward_id: str, data: VoterMetadataUpdate, session: SessionDep) -> Envelope[VoterMetadataRead]:
    return ok(VoterMetadataRead.model_validate(await VoterService(session).update_ward(ward_id, data)))


@router.delete(
    "/metadata/{ward_id}",
    response_model=Envelope[Deleted],
    summary="Delete Voter Area",
    responses={400: {"description": "Voter area still has voters"}},
)
async def delete_ward(ward_id: str, session: SessionDep) -> Envelope[Deleted]:
    await VoterService(session).delete_ward(ward_id)
    return ok(Deleted(id=ward_id))


@router.get("", response_model=Envelope[List[VoterRead]], summary="Search Voter Roll")
async def search_voters(
    session: SessionDep,
    search: Optional[str] = Query(None, description="Matches name, voter number, parents and address"),
    ward_id: Optional[str] = Query(None),
    sort_by: str = Query("serial_no"),
    sort_order: Literal["asc", "desc"] = Query("asc"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
) -> Envelope[List[VoterRead]]:
    voters, pagination = await VoterService(session).admin_search(search, ward_id, sort_by, sort_order, page, limit)
    return ok(voters, pagination)


@router.post("", response_model=Envelope[VoterRead], status_code=201, summary="Create Voter")
async def create_voter(data: VoterCreate, session: SessionDep) -> Envelope[VoterRead]:
    return ok(await VoterService(session).create(data))


@router.put("/{voter_id}", response_model=Envelope[VoterRead], summary="Update Voter")
async def update_voter(voter_id: str, data: VoterUpdate, session: SessionDep) -> Envelope[VoterRead]:
    return ok(await VoterService(session).update(voter_id, data))


@router.delete("/{voter_id}", response_model=Envelope[Deleted], summary="Delete Voter")
async def delete_voter(voter_id: str, session: SessionDep) -> Envelope[Deleted]:
    await VoterService(session).delete(voter_id)
    return ok(Deleted(id=voter_id))
