"""Domain errors raised by the booking and permission services.

Every error carries a stable ``code`` (used for metrics labels and API
payloads) and a user-facing message. Routers translate them to HTTP
responses; services never raise HTTPException.
"""

from __future__ import annotations


class MeetdeskError(Exception):
    code = "error"
    default_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MeetdeskError, LookupError):
    code = "not_found"
    default_message = "Not found."


class BookingValidationError(MeetdeskError, ValueError):
    """Base for the rules checked by the booking validator."""

    code = "invalid_booking"


class MissingRequiredFieldError(BookingValidationError):
    code = "missing_required_field"
    default_message = "Meeting title and time are required."


class InvalidTimeRangeError(BookingValidationError):
    code = "invalid_time_range"
    default_message = "Meeting end time must not be before its start time."


class MissingAddressError(BookingValidationError):
    code = "missing_address"
    default_message = "Physical meetings require a location/address."


class PermissionDeniedError(BookingValidationError):
    code = "permission_denied"
    default_message = "You do not have permission to book the Premium Room."


class MissingParticipantsError(BookingValidationError):
    code = "missing_participants"
    default_message = "At least one participant is required."


class InvalidParticipantError(BookingValidationError):
    code = "invalid_participant"
    default_message = "All participants must have an email."


class ProviderError(MeetdeskError):
    code = "provider_error"
    default_message = "Failed to create meeting. Please check API response."


class OrgUserValidationError(MeetdeskError, ValueError):
    code = "invalid_user"


class OrgUserAlreadyExistsError(MeetdeskError):
    code = "user_exists"
    default_message = "A user with this email already exists in the organization."


class SignupValidationError(MeetdeskError, ValueError):
    code = "missing_fields"
    default_message = "Missing fields"
