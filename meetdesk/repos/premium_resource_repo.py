from __future__ import annotations

from typing import Protocol
from uuid import UUID

from meetdesk.models.premium_resource import PremiumResource


class PremiumResourceRepo(Protocol):
    def add(self, resource: PremiumResource) -> None: ...
    def list_by_org(self, org_id: UUID) -> list[PremiumResource]: ...


class InMemoryPremiumResourceRepo:
    def __init__(self) -> None:
        self._store: list[PremiumResource] = []

    def add(self, resource: PremiumResource) -> None:
        self._store.append(resource)

    def list_by_org(self, org_id: UUID) -> list[PremiumResource]:
        return [r for r in self._store if r.org_id == org_id]
