"""Unit tests for the SMS gateway client."""

import json

import httpx
import pytest

from constituency_hub.core.exceptions import BadRequestError, UpstreamServiceError
from constituency_hub.server.core.config import SMSConfig
from constituency_hub.server.services.sms import (
    INVALID_PHONE_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    SEND_FAILED_MESSAGE,
    SmsService,
    gateway_accepted,
)

GATEWAY_URL = "http://mock-sms/api/send"


def _config() -> SMSConfig:
    return SMSConfig(api_key="key-123", sender_id="8809600000000", api_url=GATEWAY_URL)


def _service(handler) -> SmsService:
    return SmsService(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)), config=_config())


class TestGatewayAccepted:
    def test_success_status(self):
        assert gateway_accepted(httpx.Response(200), {"status": "success"}) is True
        assert gateway_accepted(httpx.Response(200), {"status_code": 200}) is True

    def test_rejections(self):
        assert gateway_accepted(httpx.Response(200), {"status": "error"}) is False
        assert gateway_accepted(httpx.Response(500), {"status": "success"}) is False


class TestSmsService:
    async def test_sends_unicode_message(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            captured["auth"] = request.headers["authorization"]
            return httpx.Response(200, json={"status": "success"})

        result = await _service(handler).send("০১৭১২৩৪৫৬৭৮", "আপনার ভোটার তথ্য")

        assert result.to == "8801712345678"
        assert result.provider_status == "success"
        assert captured["body"] == {
            "api_key": "key-123",
            "sender_id": "8809600000000",
            "to": "8801712345678",
            "message": "আপনার ভোটার তথ্য",
            "type": "unicode",
        }
        assert captured["auth"] == "Bearer key-123"

    async def test_invalid_phone(self):
        service = _service(lambda request: httpx.Response(200, json={"status": "success"}))

        with pytest.raises(BadRequestError, match=INVALID_PHONE_MESSAGE):
            await service.send("12345", "hello")

    async def test_not_configured(self):
        service = SmsService(config=SMSConfig())

        with pytest.raises(UpstreamServiceError) as exc_info:
            await service.send("01712345678", "hello")

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == NOT_CONFIGURED_MESSAGE

    async def test_gateway_rejection_uses_gateway_message(self):
        service = _service(lambda request: httpx.Response(200, json={"status": "error", "message": "Low balance"}))

        with pytest.raises(UpstreamServiceError) as exc_info:
            await service.send("01712345678", "hello")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Low balance"

    async def test_non_json_error_response(self):
        service = _service(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(UpstreamServiceError) as exc_info:
            await service.send("01712345678", "hello")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == SEND_FAILED_MESSAGE

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await _service(handler).send("01712345678", "hello")

        assert exc_info.value.status_code == 502
