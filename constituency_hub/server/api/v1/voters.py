"""
Voter Lookup Endpoints.

Citizens find their voter record by date of birth and voter area, list the
areas, and download a printable voter slip or its short SMS form.
"""

from typing import List, Optional

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.voters import VoterMetadataRead, VoterSearchResult
from constituency_hub.server.services.deps import SessionDep
from constituency_hub.server.services.voters import VoterService

router = APIRouter()


@router.get(
    "/search",
    response_model=Envelope[VoterSearchResult],
    summary="Search Voters",
    description="Voters in one area with the given date of birth, ordered by serial number, at most 100.",
    responses={400: {"description": "Date of birth or voter area missing or invalid"}},
)
async def search_voters(
    session: SessionDep,
    date_of_birth: Optional[str] = Query(None, description="dd/mm/yyyy in Bengali or ASCII digits, or yyyy-mm-dd"),
    ward_id: Optional[str] = Query(None, description="Voter area id"),
    name: Optional[str] = Query(None, description="Case-insensitive part of the voter name"),
) -> Envelope[VoterSearchResult]:
    return ok(await VoterService(session).search(date_of_birth, ward_id, name))


@router.get(
    "/wards",
    response_model=Envelope[List[VoterMetadataRead]],
    summary="List Voter Areas",
)
async def list_wards(session: SessionDep) -> Envelope[List[VoterMetadataRead]]:
    wards = await VoterService(session).wards()
    return ok([VoterMetadataRead.model_validate(w) for w in wards])


@router.get(
    "/{voter_id}/slip",
    response_class=PlainTextResponse,
    summary="Voter Slip",
    description="Printable plain-text voter slip in Bengali.",
    responses={404: {"description": "Voter not found"}},
)
async def voter_slip(voter_id: str, session: SessionDep) -> PlainTextResponse:
    slip = await VoterService(session).slip(voter_id)
    return PlainTextResponse(slip, headers={"Content-Disposition": f'inline; filename="voter-slip-{voter_id}.txt"'})


@router.get(
    "/{voter_id}/sms",
    response_class=PlainTextResponse,
    summary="Voter Slip SMS Text",
    description="The short slip text a citizen can forward by SMS.",
    responses={404: {"description": "Voter not found"}},
)
async def voter_sms_text(voter_id: str, session: SessionDep) -> PlainTextResponse:
    return PlainTextResponse(await VoterService(session).sms_text(voter_id))
