"""
SOS requests.

Requests arrive from the public emergency page with at least a phone number.
Staff move them through acknowledged, responding and resolved; the first
acknowledgement stamps the response time and resolving stamps the close time.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from constituency_hub.core.database.entities.emergency import EmergencyRequest, EmergencyStatus
from constituency_hub.core.database.utils import plain_values, utc_now_naive
from constituency_hub.core.exceptions import NotFoundError
from constituency_hub.core.models.io.common import MAX_PAGE_SIZE
from constituency_hub.core.models.io.emergency import EmergencyRequestUpdate, SOSCreate
from constituency_hub.core.monitoring import log_domain_event

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = (EmergencyStatus.ACKNOWLEDGED.value, EmergencyStatus.RESPONDING.value)


class EmergencyService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_sos(self, data: SOSCreate) -> EmergencyRequest:
        payload = plain_values(data.model_dump())
        payload["name"] = (payload.get("name") or "").strip() or "Anonymous"
        payload["request_type"] = (payload.get("request_type") or "").strip() or "general"
        request = EmergencyRequest(**payload, status=EmergencyStatus.PENDING.value)
        self.session.add(request)
        await self.session.commit()
        await self.session.refresh(request)

        log_domain_event("SOS received", request_id=request.id, priority=request.priority, type=request.request_type)
        logger.warning(f"SOS {request.id} received: type={request.request_type}, priority={request.priority}")
        return request

    async def list_requests(
        self,
        status: Optional[str] = None,
        request_type: Optional[str] = None,
        priority: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[EmergencyRequest], int]:
        conditions = []
        if status:
            conditions.append(EmergencyRequest.status == status)
        if request_type:
            conditions.append(EmergencyRequest.request_type == request_type)
        if priority:
            conditions.append(EmergencyRequest.priority == priority)

        total = (
            await self.session.execute(select(func.count()).select_from(EmergencyRequest).where(*conditions))
        ).scalar() or 0
        result = await self.session.execute(
            select(EmergencyRequest)
            .where(*conditions)
            .order_by(EmergencyRequest.created_at.desc())
            .offset(max(0, offset))
            .limit(max(1, min(MAX_PAGE_SIZE, limit)))
        )
        return list(result.scalars().all()), total

    async def update_request(self, request_id: str, data: EmergencyRequestUpdate) -> EmergencyRequest:
        request = await self.session.get(EmergencyRequest, request_id)
        if request is None:
            raise NotFoundError("Emergency request not found")

        update = plain_values(data.model_dump(exclude_unset=True))
        for key, value in update.items():
            setattr(request, key, value)

        now = utc_now_naive()
        status = update.get("status")
        if status in RESPONSE_STATUSES and request.response_time is None:
            request.response_time = now
        if status == EmergencyStatus.RESOLVED.value:
            request.resolved_at = now

        request.updated_at = now
        self.session.add(request)
        await self.session.commit()
        await self.session.refresh(request)
        logger.info(f"SOS {request.id} updated: status={request.status}")
        return request

    async def delete_request(self, request_id: str) -> None:
        request = await self.session.get(EmergencyRequest, request_id)
        if request is None:
            raise NotFoundError("Emergency request not found")
        await self.session.delete(request)
        await self.session.commit()
