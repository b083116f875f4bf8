from __future__ import annotations

from dataclasses import replace
from typing import Protocol
from uuid import UUID

from meetdesk.models.organization import OrgUser


class OrgUserRepo(Protocol):
    def get_by_id(self, user_id: UUID) -> OrgUser | None: ...
    def get_by_email(self, org_id: UUID, email: str) -> OrgUser | None: ...
    def add(self, user: OrgUser) -> None: ...
    def set_can_book_premium(self, user_id: UUID, allowed: bool) -> OrgUser | None: ...
    def list_by_org(self, org_id: UUID) -> list[OrgUser]: ...


class InMemoryOrgUserRepo:
    def __init__(self) -> None:
        # Insertion order doubles as display order.
        self._by_id: dict[UUID, OrgUser] = {}
        self._by_email: dict[tuple[UUID, str], OrgUser] = {}

    def get_by_id(self, user_id: UUID) -> OrgUser | None:
        return self._by_id.get(user_id)

    def get_by_email(self, org_id: UUID, email: str) -> OrgUser | None:
        return self._by_email.get((org_id, email.lower()))

    def add(self, user: OrgUser) -> None:
        key = (user.org_id, user.email.lower())
        if key in self._by_email:
            raise ValueError("email already exists in organization")
        self._by_id[user.id] = user
        self._by_email[key] = user

    def set_can_book_premium(self, user_id: UUID, allowed: bool) -> OrgUser | None:
        u = self._by_id.get(user_id)
        if u is None:
            return None

        updated = replace(u, can_book_premium=allowed)
        self._by_id[user_id] = updated
        self._by_email[(updated.org_id, updated.email.lower())] = updated
        return updated

    def list_by_org(self, org_id: UUID) -> list[OrgUser]:
        return [u for u in self._by_id.values() if u.org_id == org_id]
