from __future__ import annotations

import logging

from meetdesk.models.organization import Organization, OrgUser
from meetdesk.services import admin_service
from meetdesk.services.errors import SignupValidationError
from meetdesk.services.password_service import hash_password
from meetdesk.services.store import OrgStore

logger = logging.getLogger(__name__)


def _required(value: str | None) -> str:
    if value is None or not value.strip():
        logger.warning("Signup rejected: missing fields")
        raise SignupValidationError()
    return value


def signup(
    store: OrgStore,
    *,
    org_name: str | None,
    admin_name: str | None,
    admin_email: str | None,
    password: str | None,
) -> tuple[Organization, OrgUser]:
    """Create an organization, its admin user and its first premium room.

    No uniqueness check is made on the organization or the admin email.
    """
    org_name = _required(org_name).strip()
    admin_name = _required(admin_name).strip()
    email = _required(admin_email).strip().lower()
    password = _required(password)

    org = Organization.new(name=org_name, admin_email=email)
    store.orgs.add(org)

    admin = OrgUser.new(
        org_id=org.id,
        name=admin_name,
        email=email,
        plan="Basic",
        role="admin",
        password_hash=hash_password(password),
    )
    store.users.add(admin)

    admin_service.add_premium_room(store, org.id)

    logger.info(
        "Organization created  org_id=%s admin_user_id=%s email=%s",
        org.id,
        admin.id,
        email,
    )
    return org, admin
