"""Auth API: login, current account, change password.

Login maps every failure kind through the domain exception handlers: unknown
email and wrong password both return 401 "Invalid credentials"; a locked
account returns 423. Both password-checking routes use the credential-check
session, so a failed attempt is committed together with the error response,
and both are rate limited per client address.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from fleet_access.api.v1.dependencies import (
    AuthSecurity,
    get_account_service_for_credentials,
    get_auth_security,
    get_current_account,
)
from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.services import AccountService
from fleet_access.core.limiter import limit_auth
from fleet_access.schemas.account import AccountResponse
from fleet_access.schemas.auth import ChangePasswordRequest, LoginRequest, TokenResponse

router = APIRouter()

CredentialService = Annotated[
    AccountService, Depends(get_account_service_for_credentials)
]


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    account_service: CredentialService,
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> TokenResponse:
    """Authenticate with email and password; return a bearer token and the account."""
    summary = await account_service.authenticate(body.email, body.password)
    return TokenResponse(
        access_token=auth_security.create_access_token(summary),
        account=AccountResponse.from_summary(summary),
    )


@router.get("/me", response_model=AccountResponse)
async def me(
    current: Annotated[AccountSummary, Depends(get_current_account)],
) -> AccountResponse:
    """Return the authenticated account."""
    return AccountResponse.from_summary(current)


@router.post("/change-password", status_code=204)
@limit_auth
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    current: Annotated[AccountSummary, Depends(get_current_account)],
    account_service: CredentialService,
) -> Response:
    """Change own password; the current password must verify.

    A wrong current password counts toward the account lockout.
    """
    await account_service.change_password(
        current.id, body.current_password, body.new_password
    )
    return Response(status_code=204)
