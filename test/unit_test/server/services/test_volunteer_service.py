"""Unit tests for the volunteer registry service and ID card rendering."""

import io
from unittest.mock import patch

import pytest
from PIL import Image

from constituency_hub.core.database.entities.volunteers import Volunteer, VolunteerStatus
from constituency_hub.core.exceptions import BadRequestError, ConflictError, NotFoundError
from constituency_hub.core.models.io.volunteers import VolunteerAdminUpdate, VolunteerRegister
from constituency_hub.server.services.id_card import CARD_WIDTH, render_id_card
from constituency_hub.server.services.volunteers import (
    VolunteerService,
    generate_volunteer_id,
    profile_url,
    to_public,
)


def _form(**overrides) -> dict:
    form = dict(
        name="Nusrat Jahan",
        phone="017-1234-5678",
        age=24,
        gender="female",
        thana="uttara_east",
        ward="Ward 1",
        address="House 12, Road 7",
        categories=["itSupport", "disasterManagement"],
        why_join="I want to help my neighbours during floods.",
    )
    form.update(overrides)
    return form


@pytest.fixture
def service(session):
    return VolunteerService(session)


class TestRegistrationForm:
    def test_phone_cleaned(self):
        assert VolunteerRegister(**_form()).phone == "01712345678"

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"address": ""}, "All required fields"),
            ({"name": "Al"}, "at least 3 characters"),
            ({"phone": "12345"}, "valid Bangladesh phone"),
            ({"age": 15}, "between 16 and 100"),
            ({"gender": "unknown"}, "valid gender"),
            ({"thana": "mirpur"}, "valid thana"),
            ({"ward": "  "}, "Ward is required"),
            ({"categories": []}, "at least one category"),
            ({"categories": ["cooking"]}, "Invalid category: cooking"),
            ({"why_join": "Too short"}, "at least 20 characters"),
        ],
    )
    def test_first_failing_field_reported(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            VolunteerRegister(**_form(**overrides))


class TestRegistration:
    async def test_register_issues_eight_digit_id(self, service):
        receipt = await service.register(VolunteerRegister(**_form()))

        assert len(receipt.volunteer_id) == 8
        assert receipt.volunteer_id.isdigit()
        assert receipt.volunteer_id[0] != "0"
        assert receipt.status == "pending"
        assert receipt.categories == ["itSupport", "disasterManagement"]

    async def test_duplicate_phone_rejected(self, service):
        await service.register(VolunteerRegister(**_form()))

        with pytest.raises(BadRequestError) as exc_info:
            await service.register(VolunteerRegister(**_form(name="Someone Else", phone="01712345678")))

        assert exc_info.value.code == "phone_registered"

    async def test_id_collisions_retried_then_give_up(self, service, session):
        await service.register(VolunteerRegister(**_form()))
        taken = (await service.list_admin())[0][0].volunteer_id

        with patch("constituency_hub.server.services.volunteers.generate_volunteer_id", return_value=taken):
            with pytest.raises(ConflictError):
                await service.register(VolunteerRegister(**_form(phone="01812345678")))

    def test_generated_ids_in_range(self):
        for _ in range(50):
            value = int(generate_volunteer_id())
            assert 10_000_000 <= value <= 99_999_999


class TestPublicLookup:
    @pytest.mark.parametrize(
        "volunteer_id,error,message",
        [
            ("", BadRequestError, "required"),
            ("1234", BadRequestError, "valid 8-digit"),
            ("abcdefgh", BadRequestError, "valid 8-digit"),
            ("12345678", NotFoundError, "No volunteer"),
        ],
    )
    async def test_lookup_errors(self, service, volunteer_id, error, message):
        with pytest.raises(error, match=message):
            await service.search(volunteer_id)

    async def test_lookup_hides_private_fields(self, service):
        receipt = await service.register(VolunteerRegister(**_form()))

        public = await service.search(f"  {receipt.volunteer_id} ")
        dumped = public.model_dump()

        assert public.thana.label.en == "Uttara East"
        assert [c.key for c in public.categories] == ["itSupport", "disasterManagement"]
        assert public.profile_url == profile_url(receipt.volunteer_id)
        assert public.profile_url.endswith(f"/volunteer-hub/profile/{receipt.volunteer_id}")
        assert "phone" not in dumped
        assert "address" not in dumped

    async def test_inactive_volunteer_not_found(self, service, session, moderator):
        receipt = await service.register(VolunteerRegister(**_form()))
        volunteer = (await service.list_admin())[0][0]

        await service.update(volunteer.id, VolunteerAdminUpdate(is_active=False), moderator)

        with pytest.raises(NotFoundError):
            await service.search(receipt.volunteer_id)


class TestStatsAndAdmin:
    async def test_stats(self, service, moderator):
        await service.register(VolunteerRegister(**_form()))
        await service.register(
            VolunteerRegister(**_form(name="Rafiq Islam", phone="01912345678", thana="turag", categories=["itSupport"]))
        )
        volunteers, _ = await service.list_admin(thana="turag")
        await service.update(volunteers[0].id, VolunteerAdminUpdate(status=VolunteerStatus.VERIFIED), moderator)

        stats = await service.stats()

        assert stats.total == 2
        assert stats.verified == 1
        assert stats.pending == 1
        assert stats.active_thanas == 2
        assert len(stats.by_thana) == 8
        turag = next(t for t in stats.by_thana if t.key == "turag")
        assert (turag.total, turag.verified) == (1, 1)
        assert stats.by_ward[0].ward == "Ward 1"
        assert stats.by_ward[0].count == 2
        assert stats.by_category[0].key == "itSupport"
        assert stats.by_category[0].count == 2

    async def test_verify_stamps_verifier(self, service, moderator):
        await service.register(VolunteerRegister(**_form()))
        volunteer = (await service.list_admin())[0][0]

        updated = await service.update(
            volunteer.id, VolunteerAdminUpdate(status=VolunteerStatus.VERIFIED, badges=["first-responder"]), moderator
        )

        assert updated.status == "verified"
        assert updated.verified_by == moderator.id
        assert updated.verified_at is not None
        assert updated.badges == ["first-responder"]

    async def test_admin_filters(self, service):
        await service.register(VolunteerRegister(**_form()))
        await service.register(
            VolunteerRegister(**_form(name="Rafiq Islam", phone="01912345678", categories=["legalAid"]))
        )

        by_category, pagination = await service.list_admin(category="legalAid")
        by_search, _ = await service.list_admin(search="nusrat")

        assert [v.name for v in by_category] == ["Rafiq Islam"]
        assert pagination.total == 1
        assert [v.name for v in by_search] == ["Nusrat Jahan"]

    async def test_delete(self, service, session):
        await service.register(VolunteerRegister(**_form()))
        volunteer = (await service.list_admin())[0][0]

        await service.delete(volunteer.id)

        assert await session.get(Volunteer, volunteer.id) is None
        with pytest.raises(NotFoundError):
            await service.delete(volunteer.id)


class TestIdCard:
    async def test_render_png(self, service):
        receipt = await service.register(VolunteerRegister(**_form()))
        volunteer = to_public(await service.get_active(receipt.volunteer_id))

        png = render_id_card(volunteer)

        assert png.startswith(b"\x89PNG")
        image = Image.open(io.BytesIO(png))
        assert image.width == CARD_WIDTH
        assert image.height > CARD_WIDTH
