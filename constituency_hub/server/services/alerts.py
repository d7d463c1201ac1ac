"""
Disaster alert aggregation.

Pulls recent disasters for the configured country from ReliefWeb and GDACS.
Either feed may be down; failures are logged and that feed contributes
nothing. When both are empty during the monsoon (June to October) a seasonal
flood advisory is returned instead.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import httpx

from constituency_hub.core.models.io.emergency import AlertFeed, DisasterAlert
from constituency_hub.server.core.config import AlertsConfig, settings

logger = logging.getLogger(__name__)

MAX_ALERTS_PER_FEED = 5
GDACS_LOOKBACK_DAYS = 30
GDACS_EVENT_TYPES = "EQ,FL,TC,VO"
MONSOON_MONTHS = range(6, 11)

GDACS_SEVERITY = {
    "red": "extreme",
    "orange": "severe",
    "yellow": "moderate",
}


def gdacs_severity(alert_level: Optional[str]) -> str:
    return GDACS_SEVERITY.get((alert_level or "").lower(), "minor")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def seasonal_flood_advisory(now: datetime, country: str) -> DisasterAlert:
    return DisasterAlert(
        id="seasonal-flood-warning",
        event="Flood Advisory",
        severity="moderate",
        headline="Monsoon Season - Be Prepared for Flooding",
        description=(
            "During monsoon season, flooding is common in low-lying areas. "
            "Stay alert and follow local authority instructions."
        ),
        effective=now.isoformat(),
        expires=(now + timedelta(days=30)).isoformat(),
        areas=[f"{country} - Low-lying areas"],
        source="seasonal",
    )


class AlertService:
    """
    Fetches and normalises disaster alerts.

    Args:
        client: HTTP client to use. A short-lived client is created per call
            when omitted.
        config: Feed configuration, defaults to ``settings.alerts``.
        now: Clock, injectable for tests.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[AlertsConfig] = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        self._client = client
        self.config = config or settings.alerts
        self._now = now

    async def fetch(self) -> AlertFeed:
        now = self._now()
        if self._client is not None:
            alerts = await self._collect(self._client, now)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                alerts = await self._collect(client, now)

        if not alerts and now.month in MONSOON_MONTHS:
            alerts.append(seasonal_flood_advisory(now, self.config.country))

        return AlertFeed(alerts=alerts, source="api" if alerts else "none", fetched_at=now)

    async def _collect(self, client: httpx.AsyncClient, now: datetime) -> List[DisasterAlert]:
        alerts: List[DisasterAlert] = []
        try:
            alerts.extend(await self._fetch_reliefweb(client, now))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"ReliefWeb feed unavailable: {e}")
        try:
            alerts.extend(await self._fetch_gdacs(client, now))
        except (httpx.HTTPError, ValueError) as e:
            logger.info(f"GDACS feed unavailable, skipping: {e}")
        return alerts

    async def _fetch_reliefweb(self, client: httpx.AsyncClient, now: datetime) -> List[DisasterAlert]:
        params = {
            "appname": "constituency-hub",
            "filter[field]": "country.iso3",
            "filter[value]": self.config.country_iso3,
            "limit": MAX_ALERTS_PER_FEED,
            "fields[include][]": ["name", "description", "date", "status"],
        }
        response = await client.get(self.config.reliefweb_url, params=params)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

        alerts = []
        for disaster in payload.get("data") or []:
            if not isinstance(disaster, dict):
                continue
            fields = disaster.get("fields") or {}
            alerts.append(
                DisasterAlert(
                    id=f"reliefweb-{disaster.get('id')}",
                    event="Disaster Alert",
                    severity="severe" if fields.get("status") == "alert" else "moderate",
                    headline=fields.get("name") or "Disaster alert",
                    description=fields.get("description") or "",
                    effective=(fields.get("date") or {}).get("created") or now.isoformat(),
                    expires=(now + timedelta(days=7)).isoformat(),
                    areas=[self.config.country],
                    source="reliefweb",
                )
            )
        logger.debug(f"ReliefWeb returned {len(alerts)} alert(s)")
        return alerts

    async def _fetch_gdacs(self, client: httpx.AsyncClient, now: datetime) -> List[DisasterAlert]:
        params = {
            "eventlist": GDACS_EVENT_TYPES,
            "country": self.config.country_iso3,
            "fromDate": (now - timedelta(days=GDACS_LOOKBACK_DAYS)).date().isoformat(),
        }
        response = await client.get(self.config.gdacs_url, params=params, headers={"Accept": "application/json"})
        response.raise_for_status()
        # GDACS answers 200 with an empty body when nothing matches
        if not response.text.strip():
            return []
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

        features = payload.get("features")
        if not isinstance(features, list):
            return []

        alerts = []
        for feature in features[:MAX_ALERTS_PER_FEED]:
            if not isinstance(feature, dict):
                continue
            properties = feature.get("properties") or {}
            alerts.append(
                DisasterAlert(
                    id=f"gdacs-{properties.get('eventid')}",
                    event=properties.get("eventtype") or "Disaster",
                    severity=gdacs_severity(properties.get("alertlevel")),
                    headline=properties.get("name") or "GDACS alert",
                    description=properties.get("description") or "",
                    effective=properties.get("fromdate"),
                    expires=properties.get("todate"),
                    areas=[properties.get("country") or self.config.country],
                    source="gdacs",
                )
            )
        logger.debug(f"GDACS returned {len(alerts)} alert(s)")
        return alerts
