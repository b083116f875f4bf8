from __future__ import annotations

import logging

from meetdesk.core.metrics import BOOKING_REJECTIONS, BOOKINGS_CREATED
from meetdesk.models.booking import Booking, BookingRequest
from meetdesk.repos.booking_ledger import BookingLedger
from meetdesk.services.booking_validator import (
    LENIENT,
    ValidationProfile,
    validate_and_create,
    validate_request,
)
from meetdesk.services.conference_provider import ConferenceProvider
from meetdesk.services.errors import BookingValidationError, ProviderError

logger = logging.getLogger(__name__)


class BookingService:
    """Validate a submission, optionally create it on the provider, record it.

    Nothing reaches the ledger unless every step succeeds.
    """

    def __init__(
        self,
        ledger: BookingLedger,
        provider: ConferenceProvider | None = None,
    ) -> None:
        self.ledger = ledger
        self.provider = provider

    async def submit(
        self,
        request: BookingRequest,
        permission: bool,
        profile: ValidationProfile = LENIENT,
    ) -> Booking:
        try:
            validate_request(request, permission, profile)
        except BookingValidationError as e:
            BOOKING_REJECTIONS.labels(reason=e.code).inc()
            logger.warning(
                "Booking rejected  reason=%s profile=%s location_type=%s",
                e.code,
                profile.name,
                request.location_type,
            )
            raise

        booking_id: str | None = None
        if self.provider is not None:
            try:
                booking_id = await self.provider.create_conference(request)
            except ProviderError as e:
                BOOKING_REJECTIONS.labels(reason=e.code).inc()
                raise

        booking = validate_and_create(
            request, permission, profile, booking_id=booking_id
        )
        self.ledger.append(booking)

        BOOKINGS_CREATED.labels(location_type=booking.location_type.value).inc()
        logger.info(
            "Booking accepted  booking_id=%s location_type=%s participants=%d",
            booking.id,
            booking.location_type,
            len(booking.participants),
        )
        return booking
