"""Constituency Hub API client

Overview
--------
Async HTTP client for the public Constituency Hub API. Every endpoint answers
the ``{success, data, error, pagination}`` envelope; the client unwraps it,
validates ``data`` into the same Pydantic schemas the server uses and raises
:class:`~constituency_hub.client.errors.ApiError` when ``success`` is false.

List endpoints return a :class:`Page` holding the items and the pagination
block. Several independent requests can be issued together with
:meth:`ConstituencyHubClient.fetch_many`, the way a page loads its sections
in parallel.

Usage
-----
>>> async with ConstituencyHubClient("http://localhost:8000") as client:
...     news, stats = await client.fetch_many(client.list_news(limit=3), client.achievement_stats())
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, Generic, List, NoReturn, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from constituency_hub.core.models.io.achievements import (
    AchievementCategoryRead,
    AchievementRead,
    AchievementStats,
)
from constituency_hub.core.models.io.ama import AMACategoryRead, QuestionPublic, QuestionSubmit, VoteRequest, VoteResult
from constituency_hub.core.models.io.common import Pagination
from constituency_hub.core.models.io.contacts import ContactCreate, ContactRead
from constituency_hub.core.models.io.content import CalendarMonthRead, CategoryRead, EventRead, NewsRead
from constituency_hub.core.models.io.emergency import (
    AlertFeed,
    EmergencyContactRead,
    EmergencyRequestRead,
    EmergencyResourceRead,
    SOSCreate,
)
from constituency_hub.core.models.io.polls import PollRead, PollVoteOutcome, PollVoteRequest, PollVoteStatus
from constituency_hub.core.models.io.settings import SettingRead
from constituency_hub.core.models.io.sms import SmsSendResult
from constituency_hub.core.models.io.store import OrderCreate, OrderRead, ProductRead
from constituency_hub.core.models.io.users import TokenResponse
from constituency_hub.core.models.io.volunteers import (
    RegistrationReceipt,
    VolunteerPublic,
    VolunteerRegister,
    VolunteerStats,
)
from constituency_hub.core.models.io.voters import VoterMetadataRead, VoterSearchResult

from .errors import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

API_PREFIX = "/api/v1"


class Page(BaseModel, Generic[T]):
    """One page of a list endpoint."""

    items: List[T]
    pagination: Optional[Pagination] = None


def _params(**values: Any) -> Dict[str, Any]:
    """Query parameters without the ones left unset."""
    params: Dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        params[key] = str(value).lower() if isinstance(value, bool) else value
    return params


class ConstituencyHubClient:
    """Async client for the public API.

    Args:
        base_url: Server root, e.g. ``http://localhost:8000``.
        timeout: Timeout of the internally created ``httpx.AsyncClient``.
        client: A preconfigured ``httpx.AsyncClient`` to use instead, e.g. one
            over ``httpx.MockTransport`` in tests. It is not closed by
            :meth:`aclose`.
        auth_token: Bearer token sent with every request, see :meth:`login`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        auth_token: Optional[str] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def __aenter__(self) -> "ConstituencyHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{API_PREFIX}{path}"
        try:
            return await self._client.request(method, url, params=params or None, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(f"Request failed: {e}") from e

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Tuple[Any, Optional[Pagination]]:
        """Send a request and unwrap the envelope into ``(data, pagination)``.

        Raises:
            ApiError: On transport failure, a non-envelope body, or ``success: false``.
        """
        response = await self._send(method, path, params=params, json=json)
        try:
            body = response.json()
        except ValueError:
            raise ApiError(
                f"Unexpected response from {path}: HTTP {response.status_code}",
                status_code=response.status_code,
                payload=response.text,
            )
        if not isinstance(body, dict) or "success" not in body:
            raise ApiError(
                f"Unexpected response from {path}: HTTP {response.status_code}",
                status_code=response.status_code,
                payload=body,
            )
        if not body["success"]:
            raise ApiError(
                body.get("error") or f"HTTP {response.status_code}",
                status_code=response.status_code,
                payload=body.get("data"),
            )
        pagination = Pagination.model_validate(body["pagination"]) if body.get("pagination") else None
        return body.get("data"), pagination

    async def _one(self, model: Type[M], method: str, path: str, **kwargs: Any) -> M:
        data, _ = await self._request(method, path, **kwargs)
        return model.model_validate(data)

    async def _list(self, model: Type[M], path: str, **kwargs: Any) -> List[M]:
        data, _ = await self._request("GET", path, **kwargs)
        return TypeAdapter(List[model]).validate_python(data or [])

    async def _page(self, model: Type[M], path: str, **kwargs: Any) -> Page[M]:
        data, pagination = await self._request("GET", path, **kwargs)
        items = TypeAdapter(List[model]).validate_python(data or [])
        return Page[model](items=items, pagination=pagination)

    @staticmethod
    async def fetch_many(*requests: Awaitable[Any]) -> List[Any]:
        """Await several requests concurrently and return their results in order.

        The first failure propagates; results of the other requests are discarded.
        """
        return list(await asyncio.gather(*requests))

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> TokenResponse:
        """Sign in and keep the token for subsequent requests."""
        token = await self._one(TokenResponse, "POST", "/auth/login", json={"email": email, "password": password})
        self.auth_token = token.access_token
        return token

    # ------------------------------------------------------------------
    # News and events
    # ------------------------------------------------------------------

    async def list_news(
        self, *, category_slug: Optional[str] = None, featured: Optional[bool] = None, page: int = 1, limit: int = 10
    ) -> Page[NewsRead]:
        return await self._page(
            NewsRead, "/news", params=_params(category_slug=category_slug, featured=featured, page=page, limit=limit)
        )

    async def get_news(self, slug: str) -> NewsRead:
        return await self._one(NewsRead, "GET", f"/news/{slug}")

    async def list_categories(self, content_type: Optional[str] = None) -> List[CategoryRead]:
        return await self._list(CategoryRead, "/categories", params=_params(content_type=content_type))

    async def list_events(
        self, *, filter: Optional[str] = None, category: Optional[str] = None, page: int = 1, limit: int = 10
    ) -> Page[EventRead]:
        return await self._page(
            EventRead, "/events", params=_params(filter=filter, category=category, page=page, limit=limit)
        )

    async def get_event(self, slug: str) -> EventRead:
        return await self._one(EventRead, "GET", f"/events/{slug}")

    async def events_calendar(self, year: int, month: int) -> CalendarMonthRead:
        return await self._one(CalendarMonthRead, "GET", "/events/calendar", params=_params(year=year, month=month))

    # ------------------------------------------------------------------
    # Achievements
    # ------------------------------------------------------------------

    async def list_achievements(
        self,
        *,
        category: Optional[str] = None,
        featured: Optional[bool] = None,
        year_from: Optional[int] = None,
        year_to: Optional[int] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[AchievementRead]:
        params = _params(
            category=category, featured=featured, year_from=year_from, year_to=year_to, page=page, limit=limit
        )
        return await self._page(AchievementRead, "/achievements", params=params)

    async def achievement_stats(self) -> AchievementStats:
        return await self._one(AchievementStats, "GET", "/achievements/stats")

    async def achievement_categories(self) -> List[AchievementCategoryRead]:
        return await self._list(AchievementCategoryRead, "/achievements/categories")

    # ------------------------------------------------------------------
    # Ask me anything
    # ------------------------------------------------------------------

    async def list_questions(
        self,
        *,
        category: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 12,
    ) -> Page[QuestionPublic]:
        params = _params(category=category, status=status, search=search, page=page, limit=limit)
        return await self._page(QuestionPublic, "/ama/questions", params=params)

    async def submit_question(self, question: QuestionSubmit) -> QuestionPublic:
        return await self._one(QuestionPublic, "POST", "/ama/questions", json=question.model_dump(mode="json"))

    async def vote_question(self, vote: VoteRequest) -> VoteResult:
        return await self._one(VoteResult, "POST", "/ama/vote", json=vote.model_dump(mode="json"))

    async def question_categories(self) -> List[AMACategoryRead]:
        return await self._list(AMACategoryRead, "/ama/categories")

    # ------------------------------------------------------------------
    # Polls
    # ------------------------------------------------------------------

    async def list_polls(
        self, *, status: Optional[str] = None, voter_hash: Optional[str] = None, page: int = 1, limit: int = 12
    ) -> Page[PollRead]:
        params = _params(status=status, voter_hash=voter_hash, page=page, limit=limit)
        return await self._page(PollRead, "/polls", params=params)

    async def get_poll(self, poll_id: str, voter_hash: Optional[str] = None) -> PollRead:
        return await self._one(PollRead, "GET", f"/polls/{poll_id}", params=_params(voter_hash=voter_hash))

    async def cast_poll_vote(self, poll_id: str, option_id: str, voter_phone_hash: Optional[str]) -> PollVoteOutcome:
        body = PollVoteRequest(option_id=option_id, voter_phone_hash=voter_phone_hash)
        return await self._one(PollVoteOutcome, "POST", f"/polls/{poll_id}/vote", json=body.model_dump())

    async def poll_vote_status(self, poll_id: str, voter_hash: str) -> PollVoteStatus:
        return await self._one(PollVoteStatus, "GET", f"/polls/{poll_id}/vote", params=_params(voter_hash=voter_hash))

    # ------------------------------------------------------------------
    # Voters
    # ------------------------------------------------------------------

    async def search_voters(self, date_of_birth: str, ward_id: str, name: Optional[str] = None) -> VoterSearchResult:
        params = _params(date_of_birth=date_of_birth, ward_id=ward_id, name=name)
        return await self._one(VoterSearchResult, "GET", "/voters/search", params=params)

    async def list_wards(self) -> List[VoterMetadataRead]:
        return await self._list(VoterMetadataRead, "/voters/wards")

    async def voter_slip(self, voter_id: str) -> str:
        """The plain-text slip. This endpoint is not enveloped."""
        response = await self._send("GET", f"/voters/{voter_id}/slip")
        if response.is_error:
            self._raise_for_envelope(response)
        return response.text

    async def voter_sms_text(self, voter_id: str) -> str:
        """The short slip text for forwarding by SMS. Not enveloped."""
        response = await self._send("GET", f"/voters/{voter_id}/sms")
        if response.is_error:
            self._raise_for_envelope(response)
        return response.text

    # ------------------------------------------------------------------
    # Volunteers
    # ------------------------------------------------------------------

    async def register_volunteer(self, registration: VolunteerRegister) -> RegistrationReceipt:
        return await self._one(
            RegistrationReceipt, "POST", "/volunteers/register", json=registration.model_dump(mode="json")
        )

    async def search_volunteer(self, volunteer_id: str) -> VolunteerPublic:
        return await self._one(
            VolunteerPublic, "GET", "/volunteers/search", params=_params(volunteer_id=volunteer_id)
        )

    async def volunteer_stats(self) -> VolunteerStats:
        return await self._one(VolunteerStats, "GET", "/volunteers/stats")

    async def volunteer_id_card(self, volunteer_id: str) -> bytes:
        """PNG bytes of the volunteer's ID card. This endpoint is not enveloped."""
        response = await self._send("GET", f"/volunteers/{volunteer_id}/id-card.png")
        if response.is_error:
            self._raise_for_envelope(response)
        return response.content

    # ------------------------------------------------------------------
    # Emergency
    # ------------------------------------------------------------------

    async def send_sos(self, request: SOSCreate) -> EmergencyRequestRead:
        return await self._one(EmergencyRequestRead, "POST", "/emergency/sos", json=request.model_dump(mode="json"))

    async def emergency_contacts(self) -> List[EmergencyContactRead]:
        return await self._list(EmergencyContactRead, "/emergency/contacts")

    async def emergency_resources(self) -> List[EmergencyResourceRead]:
        return await self._list(EmergencyResourceRead, "/emergency/resources")

    async def disaster_alerts(self) -> AlertFeed:
        return await self._one(AlertFeed, "GET", "/emergency/alerts")

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    async def list_products(self, *, featured: Optional[bool] = None, page: int = 1, limit: int = 20) -> Page[ProductRead]:
        return await self._page(ProductRead, "/store/products", params=_params(featured=featured, page=page, limit=limit))

    async def get_product(self, slug: str) -> ProductRead:
        return await self._one(ProductRead, "GET", f"/store/products/{slug}")

    async def place_order(self, order: OrderCreate) -> OrderRead:
        return await self._one(OrderRead, "POST", "/store/orders", json=order.model_dump(mode="json"))

    async def track_order(self, order_number: str, phone: str) -> OrderRead:
        params = _params(order_number=order_number, phone=phone)
        return await self._one(OrderRead, "GET", "/store/orders/track", params=params)

    # ------------------------------------------------------------------
    # Contact, settings and SMS
    # ------------------------------------------------------------------

    async def send_contact(self, message: ContactCreate) -> ContactRead:
        return await self._one(ContactRead, "POST", "/contact", json=message.model_dump(mode="json"))

    async def site_settings(self, category: str) -> List[SettingRead]:
        return await self._list(SettingRead, f"/settings/{category}")

    async def send_sms(self, phone: str, message: str) -> SmsSendResult:
        return await self._one(SmsSendResult, "POST", "/sms/send", json={"phone": phone, "message": message})

    @staticmethod
    def _raise_for_envelope(response: httpx.Response) -> NoReturn:
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("error") if isinstance(body, dict) else None
        payload = body.get("data") if isinstance(body, dict) else None
        raise ApiError(message or f"HTTP {response.status_code}", status_code=response.status_code, payload=payload)
