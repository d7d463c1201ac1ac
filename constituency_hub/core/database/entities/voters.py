"""
Voter roll entity models.

``VoterMetadata`` describes one voter area (a ward of the electoral roll);
each ``Voter`` belongs to exactly one area.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field

from ..base import TimestampedTable


class VoterMetadata(TimestampedTable, table=True):
    """
    Table: voter_metadata
    """

    __tablename__ = "voter_metadata"
    __table_args__ = ({"extend_existing": True},)

    district: Optional[str] = Field(default=None, max_length=200)
    upazila_thana: Optional[str] = Field(default=None, max_length=200)
    cc_pourosova: Optional[str] = Field(default=None, max_length=200)
    union_pouro_ward_cant_board: Optional[str] = Field(default=None, max_length=200)
    ward_no_for_union: Optional[str] = Field(default=None, max_length=50)
    voter_area_name: str = Field(max_length=300)
    voter_area_no: str = Field(index=True, max_length=50)
    post_office: Optional[str] = Field(default=None, max_length=200)
    postal_code: Optional[str] = Field(default=None, max_length=20)

    def __repr__(self) -> str:
        return f"VoterMetadata(id={self.id}, area={self.voter_area_no})"


class Voter(TimestampedTable, table=True):
    """
    Table: voters
    """

    __tablename__ = "voters"
    __table_args__ = ({"extend_existing": True},)

    voter_metadata_id: str = Field(foreign_key="voter_metadata.id", index=True)
    serial_no: int = Field(index=True)
    voter_no: str = Field(index=True, max_length=50)
    voter_name: str = Field(max_length=300)
    father_name: Optional[str] = Field(default=None, max_length=300)
    mother_name: Optional[str] = Field(default=None, max_length=300)
    profession: Optional[str] = Field(default=None, max_length=200)
    date_of_birth: Optional[date] = Field(default=None, index=True)
    address: Optional[str] = Field(default=None)

    def __repr__(self) -> str:
        return f"Voter(id={self.id}, voter_no={self.voter_no})"
