"""Auth and token dependencies (composition root)."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.services import AccountService
from fleet_access.api.v1.dependencies.services import get_account_service
from fleet_access.infrastructure.security.jwt import create_access_token, verify_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


class AuthSecurity:
    """Token creation provided via DI (no direct infra imports in routes)."""

    def create_access_token(self, summary: AccountSummary) -> str:
        return create_access_token(
            {
                "sub": summary.id,
                "role": summary.role.value,
                "company_id": summary.company_id,
                "branch_id": summary.branch_id,
            }
        )


def get_auth_security() -> AuthSecurity:
    """Bearer token creation (composition root)."""
    return AuthSecurity()


async def get_current_account_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountSummary | None:
    """Return the current account from the bearer token if present; else None.

    The account is reloaded on every request so role, permission, and
    active-flag changes take effect without re-login.
    """
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None
    account_id = payload.get("sub")
    if not account_id:
        return None
    summary = await account_service.get_summary(account_id)
    if summary is None or not summary.is_active:
        return None
    return summary


async def get_current_account(
    current: Annotated[AccountSummary | None, Depends(get_current_account_optional)],
) -> AccountSummary:
    """Return current account from the bearer token; raise 401 if missing or invalid."""
    if current is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current
