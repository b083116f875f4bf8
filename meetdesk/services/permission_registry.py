from __future__ import annotations

import logging
from uuid import UUID

from meetdesk.core.metrics import PREMIUM_PERMISSION_TOGGLES
from meetdesk.models.booking import LocationType
from meetdesk.models.organization import OrgUser
from meetdesk.repos.org_user_repo import OrgUserRepo
from meetdesk.services.errors import NotFoundError
from meetdesk.services.resource_catalog import is_gated

logger = logging.getLogger(__name__)


class PermissionRegistry:
    """Authority on which organization users may book gated resources.

    ``can_book`` accepts either a user id, which is looked up, or an
    explicit bool for callers that have no logged-in user to look up.
    """

    def __init__(self, users: OrgUserRepo) -> None:
        self._users = users

    def _get_user(self, user_id: UUID, org_id: UUID | None) -> OrgUser:
        user = self._users.get_by_id(user_id)
        if user is None or (org_id is not None and user.org_id != org_id):
            raise NotFoundError(f"user {user_id} not found")
        return user

    def toggle_premium(self, user_id: UUID, *, org_id: UUID | None = None) -> OrgUser:
        user = self._get_user(user_id, org_id)
        updated = self._users.set_can_book_premium(user.id, not user.can_book_premium)
        if updated is None:
            raise NotFoundError(f"user {user_id} not found")

        PREMIUM_PERMISSION_TOGGLES.labels(
            granted=str(updated.can_book_premium).lower()
        ).inc()
        logger.info(
            "Premium permission toggled  user_id=%s org_id=%s can_book_premium=%s",
            updated.id,
            updated.org_id,
            updated.can_book_premium,
        )
        return updated

    def can_book(
        self,
        subject: UUID | bool,
        kind: LocationType,
        *,
        org_id: UUID | None = None,
    ) -> bool:
        # bool first: an explicit permission flag needs no lookup.
        if isinstance(subject, bool):
            return subject or not is_gated(kind)

        user = self._get_user(subject, org_id)
        if not is_gated(kind):
            return True
        return user.can_book_premium
