"""Voter roll schemas."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WardOption(BaseModel):
    """A voter area as offered in the lookup form's ward selector."""

    id: str
    voter_area_name: str
    voter_area_no: str
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no_for_union: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class VoterMetadataRead(WardOption):
    district: Optional[str] = None
    upazila_thana: Optional[str] = None
    cc_pourosova: Optional[str] = None
    post_office: Optional[str] = None
    postal_code: Optional[str] = None


class VoterMetadataCreate(BaseModel):
    voter_area_name: str = Field(..., min_length=1)
    voter_area_no: str = Field(..., min_length=1)
    district: Optional[str] = None
    upazila_thana: Optional[str] = None
    cc_pourosova: Optional[str] = None
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no_for_union: Optional[str] = None
    post_office: Optional[str] = None
    postal_code: Optional[str] = None


class VoterMetadataUpdate(BaseModel):
    voter_area_name: Optional[str] = None
    voter_area_no: Optional[str] = None
    district: Optional[str] = None
    upazila_thana: Optional[str] = None
    cc_pourosova: Optional[str] = None
    union_pouro_ward_cant_board: Optional[str] = None
    ward_no_for_union: Optional[str] = None
    post_office: Optional[str] = None
    postal_code: Optional[str] = None


class VoterRead(BaseModel):
    id: str
    serial_no: int
    voter_no: str
    voter_name: str
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_of_birth_bn: str = Field(default="-", description="Date of birth as Bengali dd/mm/yyyy")
    address: Optional[str] = None
    voter_metadata_id: str
    voter_metadata: Optional[WardOption] = None

    model_config = ConfigDict(from_attributes=True)


class VoterSearchResult(BaseModel):
    voters: List[VoterRead]
    total: int


class VoterCreate(BaseModel):
    voter_metadata_id: str
    serial_no: int = Field(..., ge=1)
    voter_no: str = Field(..., min_length=1)
    voter_name: str = Field(..., min_length=1)
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None


class VoterUpdate(BaseModel):
    voter_metadata_id: Optional[str] = None
    serial_no: Optional[int] = Field(default=None, ge=1)
    voter_no: Optional[str] = None
    voter_name: Optional[str] = None
    father_name: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[str] = None
