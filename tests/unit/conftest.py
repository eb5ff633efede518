"""Fixtures wiring the application services over in-memory repositories."""

from collections.abc import Awaitable, Callable

import pytest

from fleet_access.application.dtos.account import AccountCreate
from fleet_access.application.services import (
    AccountService,
    CompanyService,
    TenantOnboardingService,
)
from fleet_access.core.config import Settings
from fleet_access.domain.entities import AccountEntity, BranchEntity, CompanyEntity
from tests.fakes import (
    PASSWORD,
    CountingCredentialStore,
    FakeClock,
    InMemoryAccountRepository,
    InMemoryBranchRepository,
    InMemoryCompanyRepository,
    make_branch,
    make_company,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(debug=True, bcrypt_rounds=4, max_active_accounts_per_company=50)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def account_repo() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def company_repo() -> InMemoryCompanyRepository:
    return InMemoryCompanyRepository()


@pytest.fixture
def branch_repo() -> InMemoryBranchRepository:
    return InMemoryBranchRepository()


@pytest.fixture
def credentials(settings: Settings) -> CountingCredentialStore:
    return CountingCredentialStore(settings)


@pytest.fixture
def account_service(
    account_repo, company_repo, branch_repo, credentials, settings, clock
) -> AccountService:
    return AccountService(
        account_repo,
        company_repo,
        branch_repo,
        credentials,
        settings=settings,
        clock=clock,
    )


@pytest.fixture
def company_service(company_repo, branch_repo, account_repo) -> CompanyService:
    return CompanyService(company_repo, branch_repo, account_repo)


@pytest.fixture
def onboarding_service(company_service, account_service, settings) -> TenantOnboardingService:
    return TenantOnboardingService(company_service, account_service, settings=settings)


@pytest.fixture
async def tenant(company_repo, branch_repo) -> tuple[CompanyEntity, BranchEntity]:
    """An active company with a MAIN branch."""
    company = await company_repo.add(make_company())
    branch = await branch_repo.add(make_branch(company.id))
    return company, branch


@pytest.fixture
def create_account(
    account_service: AccountService, tenant
) -> Callable[..., Awaitable[AccountEntity]]:
    """Factory: create an account in the tenant fixture (trusted, no actor)."""
    company, branch = tenant
    counter = {"n": 0}

    async def _create(
        role: str = "operator",
        email: str | None = None,
        password: str = PASSWORD,
        **kwargs,
    ) -> AccountEntity:
        counter["n"] += 1
        data = {
            "first_name": "Test",
            "last_name": f"User{counter['n']}",
            "email": email or f"user{counter['n']}@acme.test",
            "password": password,
            "role": role,
            "company_id": company.id,
            "branch_id": branch.id,
        }
        if role == "super_admin":
            data["company_id"] = None
            data["branch_id"] = None
        data.update(kwargs)
        return await account_service.create_account(AccountCreate(**data))

    return _create
