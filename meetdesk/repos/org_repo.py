from __future__ import annotations

from typing import Protocol
from uuid import UUID

from meetdesk.models.organization import Organization


class OrgRepo(Protocol):
    def get_by_id(self, org_id: UUID) -> Organization | None: ...
    def add(self, org: Organization) -> None: ...
    def list_all(self) -> list[Organization]: ...


class InMemoryOrgRepo:
    def __init__(self) -> None:
        self._by_id: dict[UUID, Organization] = {}

    def get_by_id(self, org_id: UUID) -> Organization | None:
        return self._by_id.get(org_id)

    def add(self, org: Organization) -> None:
        # Signup performs no uniqueness check on org names, only ids.
        if org.id in self._by_id:
            raise ValueError("organization already exists")
        self._by_id[org.id] = org

    def list_all(self) -> list[Organization]:
        return list(self._by_id.values())
