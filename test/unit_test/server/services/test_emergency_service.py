"""Unit tests for SOS request handling."""

import pytest
from pydantic import ValidationError

from constituency_hub.core.database.entities.emergency import EmergencyPriority, EmergencyStatus
from constituency_hub.core.exceptions import NotFoundError
from constituency_hub.core.models.io.emergency import EmergencyRequestUpdate, SOSCreate
from constituency_hub.server.services.emergency import EmergencyService


@pytest.fixture
def service(session):
    return EmergencyService(session)


class TestCreateSOS:
    async def test_defaults(self, service):
        request = await service.create_sos(SOSCreate(phone=" 01712345678 ", name="  ", request_type=""))

        assert request.phone == "01712345678"
        assert request.name == "Anonymous"
        assert request.request_type == "general"
        assert request.priority == "high"
        assert request.status == "pending"
        assert request.response_time is None

    def test_phone_required(self):
        with pytest.raises(ValidationError):
            SOSCreate()
        with pytest.raises(ValidationError):
            SOSCreate(phone="   ")

    def test_coordinates_bounded(self):
        with pytest.raises(ValidationError):
            SOSCreate(phone="01712345678", latitude=91)


class TestListRequests:
    async def test_filters_and_total(self, service):
        await service.create_sos(SOSCreate(phone="1", request_type="flood", priority=EmergencyPriority.CRITICAL))
        await service.create_sos(SOSCreate(phone="2", request_type="flood"))
        await service.create_sos(SOSCreate(phone="3", request_type="medical"))

        floods, flood_total = await service.list_requests(request_type="flood")
        critical, _ = await service.list_requests(priority="critical")
        first_page, total = await service.list_requests(limit=2, offset=0)
        rest, _ = await service.list_requests(limit=2, offset=2)

        assert flood_total == 2
        assert {r.phone for r in floods} == {"1", "2"}
        assert [r.phone for r in critical] == ["1"]
        assert total == 3
        assert len(first_page) == 2
        assert len(rest) == 1

    async def test_status_filter(self, service):
        request = await service.create_sos(SOSCreate(phone="1"))
        await service.create_sos(SOSCreate(phone="2"))
        await service.update_request(request.id, EmergencyRequestUpdate(status=EmergencyStatus.RESOLVED))

        resolved, total = await service.list_requests(status="resolved")

        assert total == 1
        assert resolved[0].id == request.id


class TestUpdateRequest:
    async def test_response_time_stamped_once(self, service):
        request = await service.create_sos(SOSCreate(phone="01712345678"))

        acknowledged = await service.update_request(
            request.id, EmergencyRequestUpdate(status=EmergencyStatus.ACKNOWLEDGED, assigned_to="Team A")
        )
        first_response = acknowledged.response_time
        responding = await service.update_request(request.id, EmergencyRequestUpdate(status=EmergencyStatus.RESPONDING))

        assert first_response is not None
        assert responding.response_time == first_response
        assert responding.assigned_to == "Team A"
        assert responding.resolved_at is None

    async def test_resolve_stamps_close_time(self, service):
        request = await service.create_sos(SOSCreate(phone="01712345678"))

        resolved = await service.update_request(
            request.id, EmergencyRequestUpdate(status=EmergencyStatus.RESOLVED, admin_notes="Rescued")
        )

        assert resolved.status == "resolved"
        assert resolved.resolved_at is not None
        assert resolved.response_time is None
        assert resolved.admin_notes == "Rescued"

    async def test_missing_request(self, service):
        with pytest.raises(NotFoundError):
            await service.update_request("missing", EmergencyRequestUpdate(admin_notes="x"))
        with pytest.raises(NotFoundError):
            await service.delete_request("missing")

    async def test_delete(self, service):
        request = await service.create_sos(SOSCreate(phone="01712345678"))

        await service.delete_request(request.id)

        _, total = await service.list_requests()
        assert total == 0
