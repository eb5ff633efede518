"""Repository and service providers (composition root)."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_access.application.services import (
    AccountService,
    CompanyService,
    TenancyScopeValidator,
    TenantOnboardingService,
)
from fleet_access.infrastructure.persistence.database import (
    get_db,
    get_db_credential_check,
    get_db_transactional,
)
from fleet_access.infrastructure.persistence.repositories import (
    AccountRepository,
    BranchRepository,
    CompanyRepository,
)
from fleet_access.infrastructure.security.password import BcryptCredentialStore


@lru_cache
def get_credential_store() -> BcryptCredentialStore:
    """Process-wide bcrypt credential store (stateless apart from the dummy hash)."""
    return BcryptCredentialStore()


def get_scope_validator() -> TenancyScopeValidator:
    return TenancyScopeValidator()


def _account_service(db: AsyncSession) -> AccountService:
    return AccountService(
        account_repo=AccountRepository(db),
        company_repo=CompanyRepository(db),
        branch_repo=BranchRepository(db),
        credential_store=get_credential_store(),
    )


async def get_account_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountService:
    """Account service for read operations."""
    return _account_service(db)


async def get_account_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AccountService:
    """Account service for writes."""
    return _account_service(db)


async def get_account_service_for_credentials(
    db: Annotated[AsyncSession, Depends(get_db_credential_check)],
) -> AccountService:
    """Account service for login and change-password.

    Lockout counters written on a failed check are committed with the error.
    """
    return _account_service(db)


async def get_company_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> CompanyService:
    """Company service for writes (transactional)."""
    return CompanyService(
        company_repo=CompanyRepository(db),
        branch_repo=BranchRepository(db),
        account_repo=AccountRepository(db),
    )


async def get_onboarding_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TenantOnboardingService:
    """Onboarding service; company, branch, admin, and link share one transaction."""
    return TenantOnboardingService(
        company_service=CompanyService(
            company_repo=CompanyRepository(db),
            branch_repo=BranchRepository(db),
            account_repo=AccountRepository(db),
        ),
        account_service=_account_service(db),
    )
