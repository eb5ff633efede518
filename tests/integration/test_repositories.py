"""Repository integration tests. Require Postgres; session is rolled back after each test."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from fleet_access.application.dtos.account import LoginState
from fleet_access.application.services import PermissionMatrixBuilder
from fleet_access.domain.entities import AccountEntity
from fleet_access.domain.enums import Role, VehicleType
from fleet_access.domain.exceptions import DuplicateEmailException
from fleet_access.domain.value_objects import EmailAddress
from fleet_access.infrastructure.persistence.repositories import (
    AccountRepository,
    BranchRepository,
    CompanyRepository,
)
from fleet_access.shared.utils.generators import generate_cuid
from tests.fakes import make_branch, make_company


async def _seed_account(db_session, role: Role = Role.OPERATOR) -> AccountEntity:
    suffix = uuid.uuid4().hex[:10]
    company = await CompanyRepository(db_session).add(
        make_company(tax_id=f"T-{suffix}", admin_email=f"admin-{suffix}@acme.com")
    )
    branch = await BranchRepository(db_session).add(make_branch(company.id))
    return await AccountRepository(db_session).add(
        AccountEntity(
            id=generate_cuid(),
            first_name="Repo",
            last_name="Test",
            email=EmailAddress(f"repo-{suffix}@acme.com"),
            hashed_password="$2b$04$not-verified-here",
            role=role,
            permissions=PermissionMatrixBuilder.build(role),
            vehicle_type_access=PermissionMatrixBuilder.default_vehicle_types(role),
            company_id=company.id,
            branch_id=branch.id,
        )
    )


@pytest.mark.requires_db
async def test_account_round_trip(db_session) -> None:
    created = await _seed_account(db_session)
    repo = AccountRepository(db_session)

    found = await repo.get_by_email(created.email.value.upper())
    assert found is not None
    assert found.id == created.id
    assert found.role is Role.OPERATOR
    assert found.permissions == PermissionMatrixBuilder.build(Role.OPERATOR)
    assert found.vehicle_type_access == (VehicleType.CAR, VehicleType.MOTORCYCLE)
    assert found.version == 1
    assert await repo.get_by_id("missing-id") is None


@pytest.mark.requires_db
async def test_duplicate_email_raises(db_session) -> None:
    created = await _seed_account(db_session)
    clone = AccountEntity(
        id=generate_cuid(),
        first_name="Clone",
        last_name="Test",
        email=created.email,
        hashed_password="$2b$04$x",
        role=Role.SUPER_ADMIN,
        permissions=PermissionMatrixBuilder.build(Role.SUPER_ADMIN),
    )
    with pytest.raises(DuplicateEmailException):
        await AccountRepository(db_session).add(clone)


@pytest.mark.requires_db
async def test_save_login_state_is_compare_and_swap(db_session) -> None:
    created = await _seed_account(db_session)
    repo = AccountRepository(db_session)
    lock = datetime.now(UTC) + timedelta(hours=2)

    assert await repo.save_login_state(created.id, 1, LoginState(1, None)) is True
    assert await repo.save_login_state(created.id, 1, LoginState(9, None)) is False
    assert await repo.save_login_state(created.id, 2, LoginState(5, lock)) is True

    stored = await repo.get_by_id(created.id)
    assert stored.failed_attempts == 5
    assert stored.lock_expires_at == lock
    assert stored.version == 3


@pytest.mark.requires_db
async def test_profile_update_keeps_counters(db_session) -> None:
    created = await _seed_account(db_session)
    repo = AccountRepository(db_session)
    await repo.save_login_state(created.id, 1, LoginState(3, None))

    created.first_name = "Renamed"
    updated = await repo.update(created)
    assert updated.first_name == "Renamed"
    assert updated.failed_attempts == 3
    assert updated.version == 2


@pytest.mark.requires_db
async def test_count_active_by_company(db_session) -> None:
    created = await _seed_account(db_session)
    repo = AccountRepository(db_session)
    assert await repo.count_active_by_company(created.company_id) == 1
    created.is_active = False
    await repo.update(created)
    assert await repo.count_active_by_company(created.company_id) == 0


@pytest.mark.requires_db
async def test_company_and_branch_lookups(db_session) -> None:
    suffix = uuid.uuid4().hex[:10]
    companies = CompanyRepository(db_session)
    branches = BranchRepository(db_session)
    company = await companies.add(
        make_company(tax_id=f"t-{suffix}", admin_email=f"a-{suffix}@acme.com")
    )
    branch = await branches.add(make_branch(company.id, code="north"))

    assert (await companies.get_by_tax_id(f"T-{suffix}")).id == company.id
    assert (await branches.get_by_code(company.id, "NORTH")).id == branch.id
    assert await branches.get_by_code(company.id, "SOUTH") is None


@pytest.mark.requires_db
async def test_list_accounts_filters_and_counts(db_session) -> None:
    created = await _seed_account(db_session)
    repo = AccountRepository(db_session)

    accounts, total = await repo.list_accounts(company_id=created.company_id)
    assert total == 1
    assert [a.id for a in accounts] == [created.id]

    by_search, _ = await repo.list_accounts(
        company_id=created.company_id, search=created.email.value[:8].upper()
    )
    assert [a.id for a in by_search] == [created.id]

    _, none = await repo.list_accounts(
        company_id=created.company_id, role=Role.VIEWER, is_active=True
    )
    assert none == 0

    page, page_total = await repo.list_accounts(
        company_id=created.company_id, skip=1, limit=10
    )
    assert (page, page_total) == ([], 1)
