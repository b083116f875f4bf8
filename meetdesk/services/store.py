from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from meetdesk.repos.booking_ledger import InMemoryBookingLedger
from meetdesk.repos.org_repo import InMemoryOrgRepo
from meetdesk.repos.org_user_repo import InMemoryOrgUserRepo
from meetdesk.repos.premium_resource_repo import InMemoryPremiumResourceRepo


@dataclass
class OrgStore:
    """All state for one running session.

    Created by the application factory and handed to the services that
    need it; dropped with the process. Nothing here is persisted.
    """

    orgs: InMemoryOrgRepo = field(default_factory=InMemoryOrgRepo)
    users: InMemoryOrgUserRepo = field(default_factory=InMemoryOrgUserRepo)
    premium_rooms: InMemoryPremiumResourceRepo = field(
        default_factory=InMemoryPremiumResourceRepo
    )
    ledgers: dict[UUID, InMemoryBookingLedger] = field(default_factory=dict)

    def ledger_for(self, org_id: UUID) -> InMemoryBookingLedger:
        ledger = self.ledgers.get(org_id)
        if ledger is None:
            ledger = self.ledgers[org_id] = InMemoryBookingLedger()
        return ledger
