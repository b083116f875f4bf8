from __future__ import annotations

import os
from dataclasses import replace
from datetime import datetime, timedelta

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from meetdesk.core.config import Settings, load_settings  # noqa: E402
from meetdesk.main import create_app  # noqa: E402
from meetdesk.models.booking import (  # noqa: E402
    BookingRequest,
    LocationType,
    Participant,
)
from meetdesk.models.organization import Organization, OrgUser  # noqa: E402
from meetdesk.services import admin_service, signup_service  # noqa: E402
from meetdesk.services.errors import ProviderError  # noqa: E402
from meetdesk.services.store import OrgStore  # noqa: E402

T0 = datetime(2026, 11, 2, 15, 0, 0)


@pytest.fixture
def settings() -> Settings:
    """Test settings with the conference provider switched off."""
    return replace(
        load_settings(),
        app_env="test",
        conference_api_url=None,
        conference_auth_token=None,
        conference_host_id=None,
    )


@pytest.fixture
def store() -> OrgStore:
    return OrgStore()


@pytest.fixture
def client(settings: Settings, store: OrgStore) -> TestClient:
    return TestClient(create_app(settings, store=store))


@pytest.fixture
def org_and_admin(store: OrgStore) -> tuple[Organization, OrgUser]:
    return signup_service.signup(
        store,
        org_name="Acme",
        admin_name="Alice Admin",
        admin_email="alice@acme.test",
        password="correct-horse",
    )


@pytest.fixture
def org(org_and_admin: tuple[Organization, OrgUser]) -> Organization:
    return org_and_admin[0]


@pytest.fixture
def member(store: OrgStore, org: Organization) -> OrgUser:
    """A plain org user without premium permission."""
    return admin_service.add_org_user(
        store, org.id, name="Bob User", email="bob@acme.test", plan="Basic"
    )


# ---------------------------------------------------------------------------
# Booking helpers
# ---------------------------------------------------------------------------


def make_request(**overrides) -> BookingRequest:
    """A request that passes every profile unless overridden."""
    fields: dict = {
        "title": "Sync",
        "start": T0,
        "end": T0 + timedelta(minutes=30),
        "location_type": LocationType.ONLINE,
        "physical_address": "",
        "participants": (
            Participant(email="a@x.com", name="Ann", phone="555-0100"),
        ),
        "attachments": (),
    }
    fields.update(overrides)
    return BookingRequest(**fields)


class FakeConferenceProvider:
    """Records requests; returns sequential ids or raises ProviderError."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.requests: list[BookingRequest] = []

    async def create_conference(self, request: BookingRequest) -> str:
        self.requests.append(request)
        if self.fail:
            raise ProviderError()
        return f"conf-{len(self.requests)}"
