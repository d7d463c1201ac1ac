"""SMS gateway client used to send voter slips to a phone."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from constituency_hub.core.exceptions import BadRequestError, UpstreamServiceError
from constituency_hub.core.models.io.sms import SmsSendResult
from constituency_hub.core.phone import is_valid_bd_phone, to_international
from constituency_hub.server.core.config import SMSConfig, settings

logger = logging.getLogger(__name__)

INVALID_PHONE_MESSAGE = "সঠিক বাংলাদেশী মোবাইল নম্বর দিন"
NOT_CONFIGURED_MESSAGE = "এসএমএস সার্ভিস কনফিগার করা হয়নি"
SEND_FAILED_MESSAGE = "এসএমএস পাঠাতে সমস্যা হয়েছে"


def gateway_accepted(response: httpx.Response, payload: Dict[str, Any]) -> bool:
    return response.is_success and (payload.get("status") == "success" or payload.get("status_code") == 200)


class SmsService:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, config: Optional[SMSConfig] = None):
        self._client = client
        self.config = config or settings.sms

    async def send(self, phone: str, message: str) -> SmsSendResult:
        """
        Send a unicode SMS through the configured gateway.

        Raises:
            BadRequestError: The number is not a Bangladesh mobile number.
            UpstreamServiceError: The gateway is not configured or rejected the message.
        """
        if not is_valid_bd_phone(phone):
            raise BadRequestError(INVALID_PHONE_MESSAGE)
        if not self.config.is_configured:
            logger.error("SMS credentials not configured")
            raise UpstreamServiceError(NOT_CONFIGURED_MESSAGE)

        to = to_international(phone)
        body = {
            "api_key": self.config.api_key,
            "sender_id": self.config.sender_id,
            "to": to,
            "message": message,
            "type": "unicode",
        }
        headers = {"Authorization": f"Bearer {self.config.api_key}"}

        try:
            if self._client is not None:
                response = await self._client.post(self.config.api_url, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.post(self.config.api_url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"SMS gateway request failed: {e}")
            raise UpstreamServiceError(SEND_FAILED_MESSAGE, status_code=502)

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if not gateway_accepted(response, payload):
            logger.error(f"SMS gateway rejected message: HTTP {response.status_code} {payload}")
            raise UpstreamServiceError(payload.get("message") or SEND_FAILED_MESSAGE, status_code=502)

        logger.info(f"SMS sent to {to[:5]}******")
        return SmsSendResult(to=to, provider_status=str(payload.get("status") or payload.get("status_code")))
