"""API test fixtures: the app's service providers overridden with in-memory services."""

from dataclasses import dataclass

import pytest
from httpx import AsyncClient

from fleet_access.api.v1.dependencies import (
    get_account_service,
    get_account_service_for_credentials,
    get_account_service_for_write,
    get_company_service_for_write,
    get_onboarding_service,
)
from fleet_access.application.dtos.account import AccountCreate
from fleet_access.application.services import (
    AccountService,
    CompanyService,
    TenantOnboardingService,
)
from fleet_access.core.config import Settings
from fleet_access.domain.entities import AccountEntity, BranchEntity, CompanyEntity
from fleet_access.main import app
from tests.fakes import (
    PASSWORD,
    CountingCredentialStore,
    InMemoryAccountRepository,
    InMemoryBranchRepository,
    InMemoryCompanyRepository,
    make_branch,
    make_company,
)


@dataclass
class SeededApi:
    account_service: AccountService
    company: CompanyEntity
    branch: BranchEntity
    root: AccountEntity
    admin: AccountEntity


@pytest.fixture
async def seeded(client: AsyncClient) -> SeededApi:
    """One company with a MAIN branch, a super_admin, and its company_admin.

    Every account uses the shared test PASSWORD.
    """
    settings = Settings(debug=True, bcrypt_rounds=4)
    account_repo = InMemoryAccountRepository()
    company_repo = InMemoryCompanyRepository()
    branch_repo = InMemoryBranchRepository()
    account_service = AccountService(
        account_repo,
        company_repo,
        branch_repo,
        CountingCredentialStore(settings),
        settings=settings,
    )
    company_service = CompanyService(company_repo, branch_repo, account_repo)
    onboarding_service = TenantOnboardingService(
        company_service, account_service, settings=settings
    )

    company = await company_repo.add(
        make_company(admin_email="admin@acme-logistics.com")
    )
    branch = await branch_repo.add(make_branch(company.id))
    root = await account_service.bootstrap_super_admin(
        "Root", "Admin", "root@fleet-ops.com", PASSWORD
    )
    admin = await account_service.create_account(
        AccountCreate(
            first_name="Ada",
            last_name="Admin",
            email="admin@acme-logistics.com",
            password=PASSWORD,
            role="company_admin",
            company_id=company.id,
            branch_id=branch.id,
        )
    )

    app.dependency_overrides[get_account_service] = lambda: account_service
    app.dependency_overrides[get_account_service_for_write] = lambda: account_service
    app.dependency_overrides[get_account_service_for_credentials] = lambda: account_service
    app.dependency_overrides[get_company_service_for_write] = lambda: company_service
    app.dependency_overrides[get_onboarding_service] = lambda: onboarding_service
    return SeededApi(
        account_service=account_service,
        company=company,
        branch=branch,
        root=root,
        admin=admin,
    )


@pytest.fixture
def login(client: AsyncClient):
    """Factory: log in and return Authorization headers."""

    async def _login(email: str, password: str = PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
