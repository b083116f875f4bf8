from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from meetdesk.models.booking import (
    Attachment,
    BookingRequest,
    LocationType,
    Participant,
)
from meetdesk.services.booking_validator import LENIENT, ValidationProfile
from meetdesk.services.errors import InvalidParticipantError


@dataclass
class BookingDraft:
    """Editable booking form state, prior to submission.

    Participants are checked as they are added, using the same profile
    the final submission will be validated under.
    """

    profile: ValidationProfile = LENIENT
    title: str = ""
    start: datetime | None = None
    end: datetime | None = None
    location_type: LocationType = LocationType.ONLINE
    physical_address: str = ""
    participants: list[Participant] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)

    def add_participant(self, participant: Participant) -> None:
        missing_phone = self.profile.require_phone and not participant.phone.strip()
        if not participant.email.strip() or missing_phone:
            if self.profile.require_phone:
                raise InvalidParticipantError(
                    "Participant must have both email and phone."
                )
            raise InvalidParticipantError("Participant must have an email.")
        self.participants.append(participant)

    def remove_participant(self, index: int) -> Participant:
        return self.participants.pop(_position(index, self.participants))

    def attach(self, *attachments: Attachment) -> None:
        self.attachments.extend(attachments)

    def remove_attachment(self, index: int) -> Attachment:
        return self.attachments.pop(_position(index, self.attachments))

    def set_location_type(self, kind: LocationType) -> None:
        # An address only makes sense for the kind it was typed for.
        self.location_type = kind
        self.physical_address = ""

    def to_request(self) -> BookingRequest:
        return BookingRequest(
            title=self.title,
            start=self.start,
            end=self.end,
            location_type=self.location_type,
            physical_address=self.physical_address,
            participants=tuple(self.participants),
            attachments=tuple(self.attachments),
        )


def _position(index: int, items: list) -> int:
    # Indexes count from the front only; -1 is out of range, not "last".
    if not 0 <= index < len(items):
        raise IndexError(f"no item at position {index}")
    return index
