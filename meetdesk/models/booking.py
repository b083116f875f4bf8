from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


class LocationType(StrEnum):
    ONLINE = "online"
    PHYSICAL = "physical"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, raw: str) -> LocationType:
        """Parse a location kind, accepting ``virtual`` as a synonym for online."""
        value = raw.strip().lower()
        if value == "virtual":
            return cls.ONLINE
        return cls(value)


@dataclass(frozen=True, slots=True)
class Participant:
    email: str
    name: str = ""
    phone: str = ""


@dataclass(frozen=True, slots=True)
class Attachment:
    """Opaque file handle. Only the name (and optional metadata) is kept."""

    name: str
    content_type: str | None = None
    size: int | None = None


@dataclass(frozen=True, slots=True)
class BookingRequest:
    """A booking as submitted, before validation.

    The simple flow carries a single instant; it lands in ``start`` and
    ``end`` stays None.
    """

    title: str
    start: datetime | None
    location_type: LocationType
    end: datetime | None = None
    physical_address: str = ""
    participants: tuple[Participant, ...] = ()
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True, slots=True)
class Booking:
    id: str
    title: str
    start: datetime
    location_type: LocationType
    end: datetime | None = None
    physical_address: str = ""
    participants: tuple[Participant, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    all_day: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def from_request(request: BookingRequest, *, booking_id: str) -> Booking:
        if request.start is None:
            raise ValueError("cannot build a booking without a start time")
        return Booking(
            id=booking_id,
            title=request.title.strip(),
            start=request.start,
            end=request.end,
            location_type=request.location_type,
            physical_address=request.physical_address.strip(),
            participants=request.participants,
            attachments=request.attachments,
            all_day=False,
        )
