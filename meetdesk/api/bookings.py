"""Meeting booking endpoints.

Requests are parsed into typed domain values here; anything with an
unknown key or location kind is rejected with 422 before the validator
sees it. Permission to book premium rooms comes either from a user id
(looked up in the permission registry) or from an explicit
``can_book_premium`` flag for callers with no user to look up.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, model_validator

from meetdesk.api.dependencies import (
    get_booking_service,
    get_registry,
    http_error,
    resolve_org,
)
from meetdesk.models.booking import (
    Attachment,
    Booking,
    BookingRequest,
    LocationType,
    Participant,
)
from meetdesk.models.organization import Organization
from meetdesk.services.booking_draft import BookingDraft
from meetdesk.services.booking_service import BookingService
from meetdesk.services.booking_validator import FLOW_PROFILES
from meetdesk.services.errors import (
    BookingValidationError,
    NotFoundError,
    PermissionDeniedError,
    ProviderError,
)
from meetdesk.services.permission_registry import PermissionRegistry
from meetdesk.services.resource_catalog import list_available_locations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/orgs/{org_id}", tags=["bookings"])


# --- Request / Response schemas -------------------------------------------


class ParticipantIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    name: str = ""
    phone: str = ""


class AttachmentIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    content_type: str | None = None
    size: int | None = None


class BookingIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    flow: Literal["calendar", "simple"] = "simple"
    title: str = ""
    start: datetime | None = None
    end: datetime | None = None
    instant: datetime | None = None
    location_type: Literal["online", "virtual", "physical", "premium"] = "online"
    physical_address: str = ""
    participants: list[ParticipantIn] = []
    attachments: list[AttachmentIn] = []
    user_id: UUID | None = None
    can_book_premium: bool | None = None

    @model_validator(mode="after")
    def _one_of_each(self) -> BookingIn:
        if self.start is not None and self.instant is not None:
            raise ValueError("give either start or instant, not both")
        if self.user_id is not None and self.can_book_premium is not None:
            raise ValueError("give either user_id or can_book_premium, not both")
        return self

    def to_request(self) -> BookingRequest:
        # Participants are not pre-checked here; the validator reports
        # them in rule order alongside the other fields.
        draft = BookingDraft(
            profile=FLOW_PROFILES[self.flow],
            title=self.title,
            start=self.start if self.start is not None else self.instant,
            end=self.end,
            location_type=LocationType.parse(self.location_type),
            physical_address=self.physical_address,
            participants=[
                Participant(email=p.email, name=p.name, phone=p.phone)
                for p in self.participants
            ],
        )
        draft.attach(
            *(
                Attachment(name=a.name, content_type=a.content_type, size=a.size)
                for a in self.attachments
            )
        )
        return draft.to_request()


class ParticipantOut(BaseModel):
    email: str
    name: str
    phone: str


class AttachmentOut(BaseModel):
    name: str
    content_type: str | None
    size: int | None


class BookingOut(BaseModel):
    id: str
    title: str
    start: datetime
    end: datetime | None
    location_type: str
    physical_address: str
    participants: list[ParticipantOut]
    attachments: list[AttachmentOut]
    all_day: bool
    created_at: datetime


class LocationOut(BaseModel):
    label: str
    value: str


def _booking_out(booking: Booking) -> BookingOut:
    return BookingOut(
        id=booking.id,
        title=booking.title,
        start=booking.start,
        end=booking.end,
        location_type=booking.location_type.value,
        physical_address=booking.physical_address,
        participants=[
            ParticipantOut(email=p.email, name=p.name, phone=p.phone)
            for p in booking.participants
        ],
        attachments=[
            AttachmentOut(name=a.name, content_type=a.content_type, size=a.size)
            for a in booking.attachments
        ],
        all_day=booking.all_day,
        created_at=booking.created_at,
    )


def _premium_permission(
    registry: PermissionRegistry,
    org: Organization,
    user_id: UUID | None,
    can_book_premium: bool | None,
) -> bool:
    if user_id is not None:
        try:
            return registry.can_book(user_id, LocationType.PREMIUM, org_id=org.id)
        except NotFoundError as e:
            logger.warning(
                "Permission lookup for unknown user  org_id=%s user_id=%s",
                org.id,
                user_id,
            )
            raise http_error(status.HTTP_404_NOT_FOUND, e) from None
    if can_book_premium is not None:
        return registry.can_book(can_book_premium, LocationType.PREMIUM)
    return False


# --- GET /v1/orgs/{org_id}/locations ----------------------------------------


@router.get("/locations", response_model=list[LocationOut])
def get_locations(
    org: Annotated[Organization, Depends(resolve_org)],
    registry: Annotated[PermissionRegistry, Depends(get_registry)],
    user_id: Annotated[UUID | None, Query()] = None,
    can_book_premium: Annotated[bool | None, Query()] = None,
) -> list[LocationOut]:
    """Location kinds the requester may pick, premium only when permitted."""
    if user_id is not None and can_book_premium is not None:
        raise HTTPException(
            status_code=422,
            detail="give either user_id or can_book_premium, not both",
        )
    permission = _premium_permission(registry, org, user_id, can_book_premium)
    return [
        LocationOut(label=o.label, value=o.value.value)
        for o in list_available_locations(permission)
    ]


# --- /v1/orgs/{org_id}/bookings ---------------------------------------------


@router.post(
    "/bookings",
    response_model=BookingOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    body: BookingIn,
    org: Annotated[Organization, Depends(resolve_org)],
    registry: Annotated[PermissionRegistry, Depends(get_registry)],
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingOut:
    permission = _premium_permission(registry, org, body.user_id, body.can_book_premium)
    profile = FLOW_PROFILES[body.flow]

    try:
        booking = await service.submit(body.to_request(), permission, profile)
    except PermissionDeniedError as e:
        raise http_error(status.HTTP_403_FORBIDDEN, e) from None
    except BookingValidationError as e:
        raise http_error(422, e) from None
    except ProviderError as e:
        raise http_error(status.HTTP_502_BAD_GATEWAY, e) from None

    return _booking_out(booking)


@router.get("/bookings", response_model=list[BookingOut])
def list_bookings(
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> list[BookingOut]:
    return [_booking_out(b) for b in service.ledger.list_all()]


@router.get("/bookings/{booking_id}", response_model=BookingOut)
def get_booking(
    booking_id: str,
    service: Annotated[BookingService, Depends(get_booking_service)],
) -> BookingOut:
    booking = service.ledger.get(booking_id)
    if booking is None:
        raise http_error(
            status.HTTP_404_NOT_FOUND, NotFoundError("Booking not found.")
        )
    return _booking_out(booking)
