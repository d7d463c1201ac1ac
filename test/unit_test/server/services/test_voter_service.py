"""Unit tests for the voter roll lookup service."""

import re
from datetime import date

import pytest

from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io.voters import VoterCreate, VoterMetadataCreate, VoterMetadataUpdate, VoterUpdate
from constituency_hub.server.services.voters import (
    INVALID_DATE_MESSAGE,
    LOOKUP_REQUIRED_MESSAGE,
    VoterService,
)

DOB = date(1985, 4, 12)


@pytest.fixture
def service(session):
    return VoterService(session)


@pytest.fixture
async def ward(service):
    return await service.create_ward(
        VoterMetadataCreate(
            voter_area_name="উত্তর পাড়া", voter_area_no="0102", union_pouro_ward_cant_board="ওয়ার্ড নং ১"
        )
    )


@pytest.fixture
async def voters(service, ward):
    created = []
    for serial, (name, dob) in enumerate(
        [("Abdul Karim", DOB), ("Rahima Begum", DOB), ("Selim Reza", date(1990, 1, 1))], start=1
    ):
        created.append(
            await service.create(
                VoterCreate(
                    voter_metadata_id=ward.id,
                    serial_no=serial,
                    voter_no=f"19850000{serial}",
                    voter_name=name,
                    father_name="Father",
                    date_of_birth=dob,
                )
            )
        )
    return created


class TestPublicSearch:
    @pytest.mark.parametrize("dob,ward_id", [("", "w"), ("12/04/1985", ""), (None, None)])
    async def test_date_and_ward_required(self, service, dob, ward_id):
        with pytest.raises(BadRequestError, match=re.escape(LOOKUP_REQUIRED_MESSAGE)):
            await service.search(dob, ward_id)

    async def test_invalid_date(self, service, ward):
        with pytest.raises(BadRequestError, match=re.escape(INVALID_DATE_MESSAGE)):
            await service.search("31/02/1985", ward.id)

    @pytest.mark.parametrize("dob", ["১২/০৪/১৯৮৫", "12/04/1985", "1985-04-12"])
    async def test_matches_in_any_date_script(self, service, ward, voters, dob):
        result = await service.search(dob, ward.id)

        assert result.total == 2
        assert [v.voter_name for v in result.voters] == ["Abdul Karim", "Rahima Begum"]
        assert result.voters[0].date_of_birth_bn == "১২/০৪/১৯৮৫"
        assert result.voters[0].voter_metadata.voter_area_no == "0102"

    async def test_name_narrows(self, service, ward, voters):
        result = await service.search("12/04/1985", ward.id, name="rahima")

        assert [v.voter_name for v in result.voters] == ["Rahima Begum"]
        assert result.total == 1

    async def test_other_ward_has_no_match(self, service, voters):
        other = await service.create_ward(VoterMetadataCreate(voter_area_name="South", voter_area_no="0200"))

        result = await service.search("12/04/1985", other.id)

        assert result.total == 0
        assert result.voters == []


class TestSlip:
    async def test_slip_text(self, service, ward, voters):
        slip = await service.slip(voters[0].id, footer="Constituency Hub")

        assert "নাম: Abdul Karim" in slip
        assert "কেন্দ্র: 0102. উত্তর পাড়া" in slip
        assert slip.endswith("Constituency Hub")

    async def test_sms_text(self, service, voters):
        text = await service.sms_text(voters[1].id)

        assert "নাম: Rahima Begum" in text

    async def test_unknown_voter(self, service):
        with pytest.raises(NotFoundError):
            await service.slip("missing")


class TestAdministration:
    async def test_admin_search_and_sort(self, service, voters):
        everything, pagination = await service.admin_search(sort_by="voter_name", sort_order="desc")
        by_text, _ = await service.admin_search(search="selim")

        assert [v.voter_name for v in everything] == ["Selim Reza", "Rahima Begum", "Abdul Karim"]
        assert pagination.total == 3
        assert [v.voter_name for v in by_text] == ["Selim Reza"]

    async def test_admin_search_rejects_unknown_sort(self, service):
        with pytest.raises(BadRequestError):
            await service.admin_search(sort_by="password")

    async def test_create_requires_known_ward(self, service):
        with pytest.raises(BadRequestError, match="Unknown voter area"):
            await service.create(VoterCreate(voter_metadata_id="nope", serial_no=1, voter_no="1", voter_name="X"))

    async def test_update_voter(self, service, voters):
        updated = await service.update(voters[0].id, VoterUpdate(profession="Teacher"))

        assert updated.profession == "Teacher"
        assert updated.voter_name == "Abdul Karim"

    async def test_wards_ordered_and_updated(self, service, ward):
        await service.create_ward(VoterMetadataCreate(voter_area_name="Alpha", voter_area_no="0001"))

        await service.update_ward(ward.id, VoterMetadataUpdate(postal_code="1230"))
        wards = await service.wards()

        assert [w.voter_area_no for w in wards] == ["0001", "0102"]
        assert wards[1].postal_code == "1230"

    async def test_ward_with_voters_cannot_be_deleted(self, service, ward, voters):
        with pytest.raises(BadRequestError, match="still has voters"):
            await service.delete_ward(ward.id)

        for voter in voters:
            await service.delete(voter.id)
        await service.delete_ward(ward.id)

        assert await service.wards() == []
