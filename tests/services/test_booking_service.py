from __future__ import annotations

import asyncio
import logging

import pytest
from prometheus_client import REGISTRY

from meetdesk.models.booking import LocationType, Participant
from meetdesk.repos.booking_ledger import InMemoryBookingLedger
from meetdesk.services.booking_service import BookingService
from meetdesk.services.booking_validator import LENIENT, STRICT
from meetdesk.services.errors import (
    MissingAddressError,
    PermissionDeniedError,
    ProviderError,
)
from tests.conftest import FakeConferenceProvider, make_request


def _sample(name: str, labels: dict[str, str]) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels)
    return value if value is not None else 0.0


@pytest.fixture
def ledger() -> InMemoryBookingLedger:
    return InMemoryBookingLedger()


def test_accepted_booking_is_appended(ledger: InMemoryBookingLedger) -> None:
    service = BookingService(ledger)
    request = make_request(
        title="Sync",
        location_type=LocationType.PREMIUM,
        participants=(Participant(email="a@x.com"),),
    )
    booking = asyncio.run(service.submit(request, True, LENIENT))
    assert booking.location_type is LocationType.PREMIUM
    assert list(ledger.list_all()) == [booking]


def test_rejected_booking_is_not_appended(ledger: InMemoryBookingLedger) -> None:
    service = BookingService(ledger)
    request = make_request(location_type=LocationType.PHYSICAL, physical_address="")
    with pytest.raises(MissingAddressError):
        asyncio.run(service.submit(request, True, STRICT))
    assert len(ledger) == 0


def test_rejection_is_not_sent_to_provider(ledger: InMemoryBookingLedger) -> None:
    provider = FakeConferenceProvider()
    service = BookingService(ledger, provider=provider)
    with pytest.raises(PermissionDeniedError):
        asyncio.run(
            service.submit(make_request(location_type=LocationType.PREMIUM), False)
        )
    assert provider.requests == []


def test_provider_id_becomes_booking_id(ledger: InMemoryBookingLedger) -> None:
    provider = FakeConferenceProvider()
    service = BookingService(ledger, provider=provider)
    booking = asyncio.run(service.submit(make_request(), True, STRICT))
    assert booking.id == "conf-1"
    assert len(provider.requests) == 1


def test_provider_failure_leaves_ledger_unchanged(
    ledger: InMemoryBookingLedger,
) -> None:
    service = BookingService(ledger, provider=FakeConferenceProvider(fail=True))
    with pytest.raises(ProviderError):
        asyncio.run(service.submit(make_request(), True, STRICT))
    assert len(ledger) == 0


def test_n_bookings_listed_in_submission_order(
    ledger: InMemoryBookingLedger,
) -> None:
    service = BookingService(ledger)
    titles = [f"Meeting {i}" for i in range(5)]
    for title in titles:
        asyncio.run(service.submit(make_request(title=title), True))
    assert [b.title for b in ledger.list_all()] == titles


def test_metrics_count_accepted_and_rejected(ledger: InMemoryBookingLedger) -> None:
    service = BookingService(ledger)
    created_before = _sample("bookings_created_total", {"location_type": "online"})
    rejected_before = _sample(
        "booking_rejections_total", {"reason": "missing_address"}
    )

    asyncio.run(service.submit(make_request(), True))
    with pytest.raises(MissingAddressError):
        asyncio.run(
            service.submit(make_request(location_type=LocationType.PHYSICAL), True)
        )

    assert (
        _sample("bookings_created_total", {"location_type": "online"})
        - created_before
        == 1
    )
    assert (
        _sample("booking_rejections_total", {"reason": "missing_address"})
        - rejected_before
        == 1
    )


def test_rejection_logged_with_reason(
    ledger: InMemoryBookingLedger, caplog: pytest.LogCaptureFixture
) -> None:
    service = BookingService(ledger)
    with caplog.at_level(logging.WARNING, logger="meetdesk.services.booking_service"):
        with pytest.raises(PermissionDeniedError):
            asyncio.run(
                service.submit(make_request(location_type=LocationType.PREMIUM), False)
            )
    assert "reason=permission_denied" in caplog.text
