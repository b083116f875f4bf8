from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class PremiumResource:
    """A shared premium room. Immutable once created."""

    id: UUID
    org_id: UUID
    name: str
    contact_email: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @staticmethod
    def new(*, org_id: UUID, name: str, contact_email: str) -> PremiumResource:
        return PremiumResource(
            id=uuid4(), org_id=org_id, name=name, contact_email=contact_email
        )
