"""
SMS Endpoint.

Sends a unicode text message through the configured SMS gateway, used for
the voter-slip "send to phone" feature.
"""

from fastapi import APIRouter

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.sms import SmsSendRequest, SmsSendResult
from constituency_hub.server.services.sms import SmsService

router = APIRouter()


@router.post(
    "/send",
    response_model=Envelope[SmsSendResult],
    summary="Send SMS",
    responses={
        400: {"description": "Not a Bangladesh mobile number"},
        502: {"description": "Gateway rejected the message"},
        503: {"description": "Gateway not configured"},
    },
)
async def send_sms(request: SmsSendRequest) -> Envelope[SmsSendResult]:
    return ok(await SmsService().send(request.phone, request.message))
