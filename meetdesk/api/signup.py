"""Organization signup (POST /api/signup).

Plain-text responses: 400 "Missing fields" when any field is absent or
blank, 200 "Organization and admin user created" on success.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from meetdesk.api.dependencies import get_store
from meetdesk.services import signup_service
from meetdesk.services.errors import SignupValidationError
from meetdesk.services.store import OrgStore

router = APIRouter(prefix="/api", tags=["signup"])


class SignupIn(BaseModel):
    # Optional so a missing key is a 400 from the service, not a 422.
    orgName: str | None = None
    adminName: str | None = None
    adminEmail: str | None = None
    password: str | None = None


@router.post("/signup", response_class=PlainTextResponse)
def signup(
    payload: SignupIn,
    store: Annotated[OrgStore, Depends(get_store)],
) -> PlainTextResponse:
    try:
        signup_service.signup(
            store,
            org_name=payload.orgName,
            admin_name=payload.adminName,
            admin_email=payload.adminEmail,
            password=payload.password,
        )
    except SignupValidationError as e:
        return PlainTextResponse(e.message, status_code=status.HTTP_400_BAD_REQUEST)

    return PlainTextResponse(
        "Organization and admin user created", status_code=status.HTTP_200_OK
    )
