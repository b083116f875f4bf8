from __future__ import annotations

import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status

from meetdesk.models.organization import Organization
from meetdesk.services.booking_service import BookingService
from meetdesk.services.errors import MeetdeskError
from meetdesk.services.permission_registry import PermissionRegistry
from meetdesk.services.store import OrgStore

logger = logging.getLogger(__name__)


def http_error(status_code: int, err: MeetdeskError) -> HTTPException:
    """Translate a domain error into the API's ``{code, message}`` detail."""
    return HTTPException(
        status_code=status_code,
        detail={"code": err.code, "message": err.message},
    )


def get_store(request: Request) -> OrgStore:
    """The session store the application factory attached to app.state."""
    return request.app.state.store


def get_registry(
    store: Annotated[OrgStore, Depends(get_store)],
) -> PermissionRegistry:
    return PermissionRegistry(store.users)


def resolve_org(
    org_id: UUID,
    store: Annotated[OrgStore, Depends(get_store)],
) -> Organization:
    """Load the organization named in the URL path, or 404."""
    org = store.orgs.get_by_id(org_id)
    if org is None:
        logger.warning("Unknown organization requested  org_id=%s", org_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "not_found", "message": "Organization not found."},
        )
    return org


def get_booking_service(
    request: Request,
    org: Annotated[Organization, Depends(resolve_org)],
    store: Annotated[OrgStore, Depends(get_store)],
) -> BookingService:
    """A BookingService over this organization's ledger.

    The conference provider is shared app-wide and may be None.
    """
    return BookingService(
        store.ledger_for(org.id),
        provider=request.app.state.conference_provider,
    )
