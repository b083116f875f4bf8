from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from meetdesk.api.bookings import BookingIn
from meetdesk.core.config import Settings
from meetdesk.main import create_app
from meetdesk.models.booking import LocationType
from meetdesk.models.organization import Organization, OrgUser
from meetdesk.services.store import OrgStore
from tests.conftest import FakeConferenceProvider


def _url(org: Organization, suffix: str = "/bookings") -> str:
    return f"/v1/orgs/{org.id}{suffix}"


def _calendar_body(**overrides) -> dict:
    body = {
        "flow": "calendar",
        "title": "Sync",
        "start": "2026-11-02T15:00:00",
        "end": "2026-11-02T15:30:00",
        "location_type": "online",
        "participants": [{"name": "Ann", "email": "a@x.com", "phone": "555-0100"}],
        "attachments": [{"name": "agenda.pdf"}],
    }
    body.update(overrides)
    return body


# ---- locations ----


def test_locations_without_permission(client: TestClient, org: Organization) -> None:
    resp = client.get(_url(org, "/locations"))
    assert resp.status_code == 200
    assert resp.json() == [
        {"label": "Online Meeting", "value": "online"},
        {"label": "Physical Meeting", "value": "physical"},
    ]


def test_locations_with_explicit_permission(
    client: TestClient, org: Organization
) -> None:
    resp = client.get(_url(org, "/locations"), params={"can_book_premium": "true"})
    assert [o["value"] for o in resp.json()] == ["online", "physical", "premium"]


def test_locations_follow_user_toggle(
    client: TestClient, org: Organization, member: OrgUser
) -> None:
    params = {"user_id": str(member.id)}
    before = client.get(_url(org, "/locations"), params=params).json()
    assert "premium" not in [o["value"] for o in before]

    client.post(_url(org, f"/users/{member.id}/premium-permission"))

    after = client.get(_url(org, "/locations"), params=params).json()
    assert "premium" in [o["value"] for o in after]


def test_locations_unknown_user_is_404(client: TestClient, org: Organization) -> None:
    resp = client.get(_url(org, "/locations"), params={"user_id": str(uuid4())})
    assert resp.status_code == 404


def test_locations_reject_both_permission_shapes(
    client: TestClient, org: Organization, member: OrgUser
) -> None:
    resp = client.get(
        _url(org, "/locations"),
        params={"user_id": str(member.id), "can_book_premium": "true"},
    )
    assert resp.status_code == 422


# ---- create: success ----


def test_calendar_booking_created_and_listed(
    client: TestClient, org: Organization
) -> None:
    resp = client.post(_url(org), json=_calendar_body())
    assert resp.status_code == 201
    created = resp.json()
    assert created["title"] == "Sync"
    assert created["location_type"] == "online"
    assert created["all_day"] is False
    assert created["attachments"] == [
        {"name": "agenda.pdf", "content_type": None, "size": None}
    ]

    listed = client.get(_url(org)).json()
    assert [b["id"] for b in listed] == [created["id"]]
    one = client.get(_url(org, f"/bookings/{created['id']}"))
    assert one.json()["id"] == created["id"]


def test_simple_flow_accepts_instant_without_participants(
    client: TestClient, org: Organization
) -> None:
    resp = client.post(
        _url(org),
        json={
            "flow": "simple",
            "title": "Standup",
            "instant": "2026-11-03T09:00:00",
            "location_type": "virtual",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["location_type"] == "online"
    assert body["end"] is None
    assert body["participants"] == []


def test_premium_booking_with_granted_user(
    client: TestClient, org: Organization, member: OrgUser
) -> None:
    client.post(_url(org, f"/users/{member.id}/premium-permission"))
    resp = client.post(
        _url(org),
        json=_calendar_body(location_type="premium", user_id=str(member.id)),
    )
    assert resp.status_code == 201
    assert resp.json()["location_type"] == "premium"


def test_bookings_listed_in_submission_order(
    client: TestClient, org: Organization
) -> None:
    titles = ["first", "second", "third"]
    for title in titles:
        assert client.post(_url(org), json=_calendar_body(title=title)).status_code == 201
    assert [b["title"] for b in client.get(_url(org)).json()] == titles


def test_ledgers_are_per_organization(
    client: TestClient, store: OrgStore, org: Organization
) -> None:
    other = Organization.new(name="Other", admin_email="o@other.test")
    store.orgs.add(other)
    client.post(_url(org), json=_calendar_body())
    assert client.get(_url(other)).json() == []


# ---- create: rejections ----


def test_physical_without_address_is_422(client: TestClient, org: Organization) -> None:
    resp = client.post(
        _url(org),
        json=_calendar_body(
            location_type="physical",
            physical_address="",
            participants=[{"email": "a@x.com", "phone": "1"}],
        ),
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == {
        "code": "missing_address",
        "message": "Physical meetings require a location/address.",
    }
    assert client.get(_url(org)).json() == []


def test_premium_without_permission_is_403(
    client: TestClient, org: Organization, member: OrgUser
) -> None:
    resp = client.post(
        _url(org), json=_calendar_body(location_type="premium", user_id=str(member.id))
    )
    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "permission_denied"


def test_premium_without_any_permission_input_is_403(
    client: TestClient, org: Organization
) -> None:
    resp = client.post(_url(org), json=_calendar_body(location_type="premium"))
    assert resp.status_code == 403


def test_premium_with_explicit_permission(client: TestClient, org: Organization) -> None:
    resp = client.post(
        _url(org), json=_calendar_body(location_type="premium", can_book_premium=True)
    )
    assert resp.status_code == 201


@pytest.mark.parametrize(
    "overrides,code",
    [
        ({"title": ""}, "missing_required_field"),
        ({"end": None}, "missing_required_field"),
        ({"end": "2026-11-02T14:30:00"}, "invalid_time_range"),
        ({"end": "2026-11-02T15:30:00Z"}, "invalid_time_range"),
        ({"participants": []}, "missing_participants"),
        ({"participants": [{"email": "a@x.com"}]}, "invalid_participant"),
        ({"participants": [{"email": "", "phone": "1"}]}, "invalid_participant"),
    ],
)
def test_calendar_flow_rejections(
    client: TestClient, org: Organization, overrides: dict, code: str
) -> None:
    resp = client.post(_url(org), json=_calendar_body(**overrides))
    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == code


def test_missing_title_reported_before_bad_participant(
    client: TestClient, org: Organization
) -> None:
    resp = client.post(
        _url(org), json=_calendar_body(title="", participants=[{"email": ""}])
    )
    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == "missing_required_field"


def test_booking_body_becomes_request() -> None:
    body = BookingIn.model_validate(
        _calendar_body(
            location_type="virtual",
            attachments=[{"name": "a.pdf"}, {"name": "b.png", "size": 10}],
        )
    )
    request = body.to_request()
    assert request.location_type is LocationType.ONLINE
    assert [a.name for a in request.attachments] == ["a.pdf", "b.png"]
    assert request.attachments[1].size == 10
    assert request.participants[0].phone == "555-0100"


@pytest.mark.parametrize(
    "overrides",
    [
        {"location_type": "teleport"},
        {"flow": "weekly"},
        {"color": "blue"},
        {"participants": [{"email": "a@x.com", "phone": "1", "role": "vip"}]},
        {"instant": "2026-11-02T15:00:00"},
        {"user_id": str(uuid4()), "can_book_premium": True},
    ],
)
def test_unknown_shapes_rejected_at_boundary(
    client: TestClient, org: Organization, overrides: dict
) -> None:
    resp = client.post(_url(org), json=_calendar_body(**overrides))
    assert resp.status_code == 422


def test_unknown_user_id_is_404(client: TestClient, org: Organization) -> None:
    resp = client.post(_url(org), json=_calendar_body(user_id=str(uuid4())))
    assert resp.status_code == 404


def test_unknown_booking_is_404(client: TestClient, org: Organization) -> None:
    assert client.get(_url(org, "/bookings/nope")).status_code == 404


# ---- conference provider ----


def test_provider_id_used_when_configured(
    settings: Settings, store: OrgStore, org: Organization
) -> None:
    provider = FakeConferenceProvider()
    client = TestClient(create_app(settings, store=store, conference_provider=provider))

    resp = client.post(_url(org), json=_calendar_body())

    assert resp.status_code == 201
    assert resp.json()["id"] == "conf-1"
    assert provider.requests[0].title == "Sync"


def test_provider_failure_is_502_and_not_recorded(
    settings: Settings, store: OrgStore, org: Organization
) -> None:
    provider = FakeConferenceProvider(fail=True)
    client = TestClient(create_app(settings, store=store, conference_provider=provider))

    resp = client.post(_url(org), json=_calendar_body())

    assert resp.status_code == 502
    assert resp.json()["detail"] == {
        "code": "provider_error",
        "message": "Failed to create meeting. Please check API response.",
    }
    assert client.get(_url(org)).json() == []
