"""Client for the external conferencing API.

When configured, a booking's id comes from the provider's
``conference_id`` instead of being generated locally. The call is a
single request per submission with no retry; any failure surfaces as a
ProviderError and the booking is not recorded.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from typing import Any, Protocol, runtime_checkable
from zoneinfo import ZoneInfo

import httpx

from meetdesk.core.config import Settings
from meetdesk.core.metrics import (
    CONFERENCE_PROVIDER_DURATION,
    CONFERENCE_PROVIDER_REQUESTS,
)
from meetdesk.models.booking import BookingRequest
from meetdesk.services.errors import ProviderError

logger = logging.getLogger(__name__)

CREATE_PATH = "/enterprise_api/conference/create"
START_FORMAT = "%Y-%m-%d %H:%M:%S"


@runtime_checkable
class ConferenceProvider(Protocol):
    async def create_conference(self, request: BookingRequest) -> str: ...


def duration_minutes(request: BookingRequest, default_minutes: int) -> int:
    if request.start is None or request.end is None:
        return default_minutes
    minutes = (request.end - request.start).total_seconds() / 60
    # Half-minutes round up.
    return math.floor(minutes + 0.5)


def format_start(start: datetime, time_zone: str) -> str:
    """Wall-clock start in ``time_zone``, the zone the payload declares.

    Aware datetimes are converted; naive ones are taken to be in
    ``time_zone`` already.
    """
    if start.tzinfo is not None:
        start = start.astimezone(ZoneInfo(time_zone))
    return start.strftime(START_FORMAT)


def build_conference_payload(
    request: BookingRequest,
    *,
    auth_token: str,
    host_id: int,
    time_zone: str,
    default_minutes: int = 30,
) -> dict[str, Any]:
    if request.start is None:
        raise ValueError("conference requests need a start time")
    return {
        "auth_token": auth_token,
        "host_id": host_id,
        "subject": request.title.strip(),
        "start": format_start(request.start, time_zone),
        "time_zone": time_zone,
        "duration": duration_minutes(request, default_minutes),
        "auto_record": "none",
        "one_time_access_code": True,
        "secure_url": False,
        "mute_mode": "conversation",
        "participants": [
            {"email": p.email, "name": p.name or "", "phone": p.phone}
            for p in request.participants
        ],
    }


class HttpConferenceProvider:
    """ConferenceProvider backed by the provider's HTTP API.

    ``transport`` lets tests substitute an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        auth_token: str,
        host_id: int,
        time_zone: str = "US/Eastern",
        timeout: float | None = None,
        default_minutes: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth_token = auth_token
        self._host_id = host_id
        self._time_zone = time_zone
        self._timeout = timeout
        self._default_minutes = default_minutes
        self._transport = transport

    async def create_conference(self, request: BookingRequest) -> str:
        payload = build_conference_payload(
            request,
            auth_token=self._auth_token,
            host_id=self._host_id,
            time_zone=self._time_zone,
            default_minutes=self._default_minutes,
        )

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(CREATE_PATH, json=payload)
        except httpx.HTTPError as e:
            CONFERENCE_PROVIDER_REQUESTS.labels(outcome="error").inc()
            logger.warning("Conference provider unreachable: %s", e)
            raise ProviderError() from e
        finally:
            CONFERENCE_PROVIDER_DURATION.observe(time.monotonic() - start)

        try:
            data = response.json()
        except ValueError:
            data = None

        conference_id = data.get("conference_id") if isinstance(data, dict) else None
        if not response.is_success or not conference_id:
            CONFERENCE_PROVIDER_REQUESTS.labels(outcome="error").inc()
            # Never log the payload: it carries the auth token.
            logger.warning(
                "Conference provider rejected request  status=%d body=%s",
                response.status_code,
                data,
            )
            raise ProviderError()

        CONFERENCE_PROVIDER_REQUESTS.labels(outcome="ok").inc()
        logger.info("Conference created  conference_id=%s", conference_id)
        return str(conference_id)


def provider_from_settings(settings: Settings) -> HttpConferenceProvider | None:
    """Build the provider when the settings enable it, else None."""
    if not settings.conference_enabled:
        return None
    return HttpConferenceProvider(
        base_url=settings.conference_api_url,  # type: ignore[arg-type]
        auth_token=settings.conference_auth_token,  # type: ignore[arg-type]
        host_id=settings.conference_host_id,  # type: ignore[arg-type]
        time_zone=settings.conference_time_zone,
        timeout=settings.conference_timeout,
        default_minutes=settings.default_meeting_minutes,
    )
