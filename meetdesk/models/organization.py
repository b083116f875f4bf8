from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

Plan = Literal["Basic", "Plus"]
OrgRole = Literal["admin", "member"]

PLANS: tuple[str, ...] = ("Basic", "Plus")


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Organization:
    id: UUID
    name: str
    admin_email: str
    plan: str = "basic"
    created_at: datetime = field(default_factory=_now)

    @staticmethod
    def new(*, name: str, admin_email: str) -> Organization:
        return Organization(id=uuid4(), name=name, admin_email=admin_email)


@dataclass(frozen=True, slots=True)
class OrgUser:
    """A person inside an organization.

    ``can_book_premium`` is only ever flipped by the admin toggle in the
    permission registry; everything else is fixed at creation.
    """

    id: UUID
    org_id: UUID
    name: str
    email: str
    plan: Plan = "Basic"
    role: OrgRole = "member"
    can_book_premium: bool = False
    password_hash: str | None = None

    @staticmethod
    def new(
        *,
        org_id: UUID,
        name: str,
        email: str,
        plan: Plan = "Basic",
        role: OrgRole = "member",
        password_hash: str | None = None,
    ) -> OrgUser:
        return OrgUser(
            id=uuid4(),
            org_id=org_id,
            name=name,
            email=email,
            plan=plan,
            role=role,
            can_book_premium=False,
            password_hash=password_hash,
        )
