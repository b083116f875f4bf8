"""The single point where a booking request is accepted or rejected.

Rules run in a fixed order and the first failure wins, so a given
request always produces the same message:

  1. title, start (and end, when the profile asks for it), and an end
     that is not before the start
  2. address for physical meetings
  3. permission for premium rooms
  4. at least one participant, when the profile asks for it
  5. each participant: email, and phone when the profile asks for it

Two booking flows exist with different expectations. They are kept as
named profiles rather than merged:

  STRICT  - the calendar flow: end time, participants and phone numbers
            are all required.
  LENIENT - the simple flow: a single instant, participants and phone
            numbers optional.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from meetdesk.models.booking import Booking, BookingRequest, LocationType, Participant
from meetdesk.services.errors import (
    InvalidParticipantError,
    InvalidTimeRangeError,
    MissingAddressError,
    MissingParticipantsError,
    MissingRequiredFieldError,
    PermissionDeniedError,
)


@dataclass(frozen=True, slots=True)
class ValidationProfile:
    name: str
    require_end: bool
    require_participants: bool
    require_phone: bool

    @property
    def participant_error(self) -> str:
        if self.require_phone:
            return "All participants must have both email and phone."
        return "All participants must have an email."


STRICT = ValidationProfile(
    name="strict", require_end=True, require_participants=True, require_phone=True
)
LENIENT = ValidationProfile(
    name="lenient",
    require_end=False,
    require_participants=False,
    require_phone=False,
)

# Booking flows as clients name them.
FLOW_PROFILES: dict[str, ValidationProfile] = {
    "calendar": STRICT,
    "simple": LENIENT,
}


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def check_participant(participant: Participant, profile: ValidationProfile) -> None:
    if _blank(participant.email):
        raise InvalidParticipantError(profile.participant_error)
    if profile.require_phone and _blank(participant.phone):
        raise InvalidParticipantError(profile.participant_error)


def _check_time_range(start: datetime, end: datetime) -> None:
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise InvalidTimeRangeError(
            "Meeting start and end must both carry a time zone offset, or neither."
        )
    if end < start:
        raise InvalidTimeRangeError()


def validate_request(
    request: BookingRequest,
    permission: bool,
    profile: ValidationProfile = LENIENT,
) -> None:
    """Raise the first BookingValidationError for ``request``, or return None."""
    if _blank(request.title) or request.start is None:
        raise MissingRequiredFieldError()
    if profile.require_end and request.end is None:
        raise MissingRequiredFieldError()
    if request.end is not None:
        _check_time_range(request.start, request.end)

    if request.location_type is LocationType.PHYSICAL and _blank(
        request.physical_address
    ):
        raise MissingAddressError()

    # The premium option is hidden from clients without permission; this
    # catches requests that name it anyway.
    if request.location_type is LocationType.PREMIUM and not permission:
        raise PermissionDeniedError()

    if profile.require_participants and not request.participants:
        raise MissingParticipantsError()

    for p in request.participants:
        check_participant(p, profile)


def new_booking_id() -> str:
    return uuid.uuid4().hex


def validate_and_create(
    request: BookingRequest,
    permission: bool,
    profile: ValidationProfile = LENIENT,
    *,
    booking_id: str | None = None,
) -> Booking:
    """Validate ``request`` and build the immutable Booking.

    ``booking_id`` is the id handed back by an external provider; when
    absent a local id is generated.
    """
    validate_request(request, permission, profile)
    return Booking.from_request(request, booking_id=booking_id or new_booking_id())
