"""Organization admin endpoints.

Users, their premium-room permission, and the premium rooms themselves.
No endpoint here authenticates its caller.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from meetdesk.api.dependencies import get_registry, get_store, http_error, resolve_org
from meetdesk.models.organization import Organization, OrgUser
from meetdesk.models.premium_resource import PremiumResource
from meetdesk.services import admin_service
from meetdesk.services.errors import (
    NotFoundError,
    OrgUserAlreadyExistsError,
    OrgUserValidationError,
)
from meetdesk.services.permission_registry import PermissionRegistry
from meetdesk.services.store import OrgStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/orgs", tags=["orgs"])


# --- Pydantic schemas ---


class OrgOut(BaseModel):
    id: str
    name: str
    admin_email: str
    plan: str
    created_at: datetime


class OrgUserOut(BaseModel):
    id: str
    name: str
    email: str
    plan: str
    role: str
    can_book_premium: bool


class OrgUserCreateIn(BaseModel):
    name: str
    email: str
    plan: Literal["Basic", "Plus"] = "Basic"


class PremiumRoomOut(BaseModel):
    id: str
    name: str
    contact_email: str
    created_at: datetime


class PremiumRoomCreateIn(BaseModel):
    name: str | None = None
    contact_email: str | None = None


def _user_out(user: OrgUser) -> OrgUserOut:
    return OrgUserOut(
        id=str(user.id),
        name=user.name,
        email=user.email,
        plan=user.plan,
        role=user.role,
        can_book_premium=user.can_book_premium,
    )


def _room_out(room: PremiumResource) -> PremiumRoomOut:
    return PremiumRoomOut(
        id=str(room.id),
        name=room.name,
        contact_email=room.contact_email,
        created_at=room.created_at,
    )


# --- Endpoints ---


@router.get("/{org_id}", response_model=OrgOut)
def get_org(org: Annotated[Organization, Depends(resolve_org)]) -> OrgOut:
    return OrgOut(
        id=str(org.id),
        name=org.name,
        admin_email=org.admin_email,
        plan=org.plan,
        created_at=org.created_at,
    )


@router.get("/{org_id}/users", response_model=list[OrgUserOut])
def list_users(
    org: Annotated[Organization, Depends(resolve_org)],
    store: Annotated[OrgStore, Depends(get_store)],
) -> list[OrgUserOut]:
    return [_user_out(u) for u in admin_service.list_org_users(store, org.id)]


@router.post(
    "/{org_id}/users",
    response_model=OrgUserOut,
    status_code=status.HTTP_201_CREATED,
)
def add_user(
    body: OrgUserCreateIn,
    org: Annotated[Organization, Depends(resolve_org)],
    store: Annotated[OrgStore, Depends(get_store)],
) -> OrgUserOut:
    try:
        user = admin_service.add_org_user(
            store, org.id, name=body.name, email=body.email, plan=body.plan
        )
    except OrgUserAlreadyExistsError as e:
        raise http_error(status.HTTP_409_CONFLICT, e) from None
    except OrgUserValidationError as e:
        raise http_error(422, e) from None
    return _user_out(user)


@router.post("/{org_id}/users/{user_id}/premium-permission", response_model=OrgUserOut)
def toggle_premium_permission(
    user_id: UUID,
    org: Annotated[Organization, Depends(resolve_org)],
    registry: Annotated[PermissionRegistry, Depends(get_registry)],
) -> OrgUserOut:
    """Flip the user's permission to reserve premium rooms."""
    try:
        user = registry.toggle_premium(user_id, org_id=org.id)
    except NotFoundError as e:
        raise http_error(status.HTTP_404_NOT_FOUND, e) from None
    return _user_out(user)


@router.get("/{org_id}/premium-rooms", response_model=list[PremiumRoomOut])
def list_premium_rooms(
    org: Annotated[Organization, Depends(resolve_org)],
    store: Annotated[OrgStore, Depends(get_store)],
) -> list[PremiumRoomOut]:
    return [_room_out(r) for r in admin_service.list_premium_rooms(store, org.id)]


@router.post(
    "/{org_id}/premium-rooms",
    response_model=PremiumRoomOut,
    status_code=status.HTTP_201_CREATED,
)
def add_premium_room(
    org: Annotated[Organization, Depends(resolve_org)],
    store: Annotated[OrgStore, Depends(get_store)],
    body: PremiumRoomCreateIn | None = None,
) -> PremiumRoomOut:
    body = body or PremiumRoomCreateIn()
    room = admin_service.add_premium_room(
        store, org.id, name=body.name, contact_email=body.contact_email
    )
    return _room_out(room)
