from __future__ import annotations

import logging
from uuid import UUID

from meetdesk.models.organization import PLANS, OrgUser
from meetdesk.models.premium_resource import PremiumResource
from meetdesk.services.errors import (
    NotFoundError,
    OrgUserAlreadyExistsError,
    OrgUserValidationError,
)
from meetdesk.services.store import OrgStore

logger = logging.getLogger(__name__)

DEFAULT_ROOM_NAME = "Premium Room"


def _require_org(store: OrgStore, org_id: UUID) -> None:
    if store.orgs.get_by_id(org_id) is None:
        raise NotFoundError(f"organization {org_id} not found")


def email_domain(email: str) -> str:
    _, _, domain = email.rpartition("@")
    return domain or "org.com"


def list_org_users(store: OrgStore, org_id: UUID) -> list[OrgUser]:
    _require_org(store, org_id)
    return store.users.list_by_org(org_id)


def add_org_user(
    store: OrgStore,
    org_id: UUID,
    *,
    name: str,
    email: str,
    plan: str = "Basic",
) -> OrgUser:
    _require_org(store, org_id)

    name = name.strip()
    email = email.strip().lower()
    if not name:
        logger.warning("Rejected org user with blank name  org_id=%s", org_id)
        raise OrgUserValidationError("name must be non-empty")
    if not email:
        logger.warning("Rejected org user with blank email  org_id=%s", org_id)
        raise OrgUserValidationError("email must be non-empty")
    if plan not in PLANS:
        raise OrgUserValidationError(f"plan must be one of {', '.join(PLANS)}")

    if store.users.get_by_email(org_id, email) is not None:
        logger.warning("Rejected duplicate org user  org_id=%s email=%s", org_id, email)
        raise OrgUserAlreadyExistsError()

    user = OrgUser.new(
        org_id=org_id,
        name=name,
        email=email,
        plan=plan,  # type: ignore[arg-type]
    )
    store.users.add(user)
    logger.info(
        "Org user added  org_id=%s user_id=%s email=%s plan=%s",
        org_id,
        user.id,
        email,
        plan,
    )
    return user


def list_premium_rooms(store: OrgStore, org_id: UUID) -> list[PremiumResource]:
    _require_org(store, org_id)
    return store.premium_rooms.list_by_org(org_id)


def add_premium_room(
    store: OrgStore,
    org_id: UUID,
    *,
    name: str | None = None,
    contact_email: str | None = None,
) -> PremiumResource:
    """Add a premium room, naming it after its position when no name is given.

    The first room is "Premium Room" / premium@<domain>; later ones are
    "Premium Room #N" / premiumN@<domain>.
    """
    org = store.orgs.get_by_id(org_id)
    if org is None:
        raise NotFoundError(f"organization {org_id} not found")

    n = len(store.premium_rooms.list_by_org(org_id)) + 1
    domain = email_domain(org.admin_email)
    if not name or not name.strip():
        name = DEFAULT_ROOM_NAME if n == 1 else f"{DEFAULT_ROOM_NAME} #{n}"
    if not contact_email or not contact_email.strip():
        contact_email = f"premium@{domain}" if n == 1 else f"premium{n}@{domain}"

    room = PremiumResource.new(
        org_id=org_id, name=name.strip(), contact_email=contact_email.strip()
    )
    store.premium_rooms.add(room)
    logger.info("Premium room added  org_id=%s name=%s", org_id, room.name)
    return room
