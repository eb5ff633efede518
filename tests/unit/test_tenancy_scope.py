"""Unit tests for TenancyScopeValidator check order and scope filters."""

from datetime import UTC, datetime, timedelta

import pytest

from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.dtos.authorization import ResourceDescriptor
from fleet_access.application.services import PermissionMatrixBuilder, TenancyScopeValidator
from fleet_access.domain.enums import Role, VehicleType
from fleet_access.domain.exceptions import (
    AccountInactiveError,
    AccountLockedError,
    BranchMismatchError,
    PermissionDeniedError,
    TenantMismatchError,
    ValidationException,
    VehicleTypeDeniedError,
)

NOW = datetime(2026, 3, 2, 8, 0, tzinfo=UTC)


def _summary(
    role: str,
    company_id: str | None = "co-1",
    branch_id: str | None = "br-1",
    vehicle_types: tuple[VehicleType, ...] | None = None,
    **kwargs,
) -> AccountSummary:
    parsed = Role(role)
    return AccountSummary(
        id=f"{role}-id",
        email=f"{role}@acme.test",
        first_name="Test",
        last_name="User",
        role=parsed,
        permissions=PermissionMatrixBuilder.build(parsed),
        vehicle_type_access=(
            vehicle_types
            if vehicle_types is not None
            else PermissionMatrixBuilder.default_vehicle_types(parsed)
        ),
        company_id=None if parsed is Role.SUPER_ADMIN else company_id,
        branch_id=None if parsed is Role.SUPER_ADMIN else branch_id,
        **kwargs,
    )


def _vehicle(
    company_id: str | None = "co-1",
    branch_id: str | None = "br-1",
    vehicle_type: str | None = "Car",
) -> ResourceDescriptor:
    return ResourceDescriptor(
        category="vehicles",
        company_id=company_id,
        branch_id=branch_id,
        vehicle_type=vehicle_type,
    )


@pytest.fixture
def validator() -> TenancyScopeValidator:
    return TenancyScopeValidator()


def test_inactive_account_fails_first(validator: TenancyScopeValidator) -> None:
    account = _summary("super_admin", is_active=False)
    assert isinstance(validator.check(account, _vehicle(), "read", NOW), AccountInactiveError)


def test_locked_account_fails(validator: TenancyScopeValidator) -> None:
    account = _summary("operator", lock_expires_at=NOW + timedelta(minutes=5))
    failure = validator.check(account, _vehicle(), "read", NOW)
    assert isinstance(failure, AccountLockedError)
    assert validator.check(
        _summary("operator", lock_expires_at=NOW - timedelta(minutes=5)),
        _vehicle(),
        "read",
        NOW,
    ) is None


def test_unknown_category_or_action_is_validation_failure(
    validator: TenancyScopeValidator,
) -> None:
    account = _summary("company_admin")
    bad_category = ResourceDescriptor(category="trips", company_id="co-1")
    assert isinstance(validator.check(account, bad_category, "read", NOW), ValidationException)
    assert isinstance(validator.check(account, _vehicle(), "drive", NOW), ValidationException)
    assert isinstance(
        validator.check(account, _vehicle(vehicle_type="Spaceship"), "read", NOW),
        ValidationException,
    )


def test_missing_action_flag_is_permission_denied(validator: TenancyScopeValidator) -> None:
    failure = validator.check(_summary("viewer"), _vehicle(), "create", NOW)
    assert isinstance(failure, PermissionDeniedError)
    assert failure.details == {"resource": "vehicles", "action": "create"}


def test_action_not_carried_by_category_is_denied(validator: TenancyScopeValidator) -> None:
    account = _summary("super_admin")
    assert isinstance(validator.check(account, _vehicle(), "export", NOW), PermissionDeniedError)
    reports = ResourceDescriptor(category="reports")
    assert isinstance(validator.check(account, reports, "delete", NOW), PermissionDeniedError)


def test_permission_checked_before_tenancy(validator: TenancyScopeValidator) -> None:
    failure = validator.check(
        _summary("viewer"), _vehicle(company_id="co-2"), "delete", NOW
    )
    assert isinstance(failure, PermissionDeniedError)


def test_super_admin_has_global_scope(validator: TenancyScopeValidator) -> None:
    account = _summary("super_admin")
    assert validator.check(account, _vehicle(company_id="any", branch_id="any"), "delete", NOW) is None
    assert validator.check(account, ResourceDescriptor(category="companies"), "create", NOW) is None


def test_other_company_is_tenant_mismatch(validator: TenancyScopeValidator) -> None:
    """Full CRUD on companies does not reach another company."""
    account = _summary("company_admin")
    failure = validator.check(
        account, ResourceDescriptor(category="companies", company_id="co-2"), "update", NOW
    )
    assert isinstance(failure, TenantMismatchError)
    assert isinstance(
        validator.check(account, _vehicle(company_id=None), "read", NOW), TenantMismatchError
    )


def test_company_admin_spans_branches(validator: TenancyScopeValidator) -> None:
    account = _summary("company_admin")
    assert validator.check(account, _vehicle(branch_id="br-2"), "update", NOW) is None


@pytest.mark.parametrize("role", ["branch_manager", "mechanic", "operator", "viewer"])
def test_roles_below_company_admin_are_branch_scoped(
    validator: TenancyScopeValidator, role: str
) -> None:
    account = _summary(role)
    failure = validator.check(account, _vehicle(branch_id="br-2"), "read", NOW)
    assert isinstance(failure, BranchMismatchError)
    assert validator.check(account, _vehicle(branch_id=None), "read", NOW) is None


def test_vehicle_type_outside_list_is_denied(validator: TenancyScopeValidator) -> None:
    account = _summary("operator")
    failure = validator.check(account, _vehicle(vehicle_type="Truck"), "read", NOW)
    assert isinstance(failure, VehicleTypeDeniedError)
    assert failure.details == {"vehicle_type": "Truck"}
    assert validator.check(account, _vehicle(vehicle_type="Car"), "read", NOW) is None
    assert validator.check(account, _vehicle(vehicle_type=None), "read", NOW) is None


def test_empty_vehicle_type_list_means_all(validator: TenancyScopeValidator) -> None:
    account = _summary("operator", vehicle_types=())
    assert validator.check(account, _vehicle(vehicle_type="Tractor"), "read", NOW) is None


def test_branch_manager_default_vehicle_types(validator: TenancyScopeValidator) -> None:
    manager = _summary("branch_manager")
    failure = validator.check(manager, _vehicle(vehicle_type="Tractor"), "update", NOW)
    assert isinstance(failure, VehicleTypeDeniedError)
    assert failure.details == {"vehicle_type": "Tractor"}
    for allowed in ("Car", "Motorcycle", "Van", "Truck"):
        assert validator.check(manager, _vehicle(vehicle_type=allowed), "update", NOW) is None


def test_mechanic_cannot_delete_maintenance_even_with_all_vehicle_types(
    validator: TenancyScopeValidator,
) -> None:
    mechanic = _summary("mechanic", vehicle_types=())
    maintenance = ResourceDescriptor(
        category="maintenance", company_id="co-1", branch_id="br-1", vehicle_type="Truck"
    )
    failure = validator.check(mechanic, maintenance, "delete", NOW)
    assert isinstance(failure, PermissionDeniedError)
    assert failure.details == {"resource": "maintenance", "action": "delete"}
    assert validator.check(mechanic, maintenance, "update", NOW) is None


def test_require_raises_the_failure(validator: TenancyScopeValidator) -> None:
    with pytest.raises(BranchMismatchError):
        validator.require(_summary("mechanic"), _vehicle(branch_id="br-9"), "read", NOW)
    validator.require(_summary("mechanic"), _vehicle(), "update", NOW)
    assert validator.is_allowed(_summary("mechanic"), _vehicle(), "read", NOW)


def test_accessible_vehicle_types() -> None:
    assert TenancyScopeValidator.accessible_vehicle_types(_summary("operator")) == (
        VehicleType.CAR,
        VehicleType.MOTORCYCLE,
    )
    assert TenancyScopeValidator.accessible_vehicle_types(
        _summary("operator", vehicle_types=())
    ) == tuple(VehicleType)


def test_scope_filter() -> None:
    manager = TenancyScopeValidator.scope_filter(_summary("branch_manager"))
    assert manager.company_id == "co-1"
    assert manager.branch_id == "br-1"
    assert VehicleType.TRUCK in manager.vehicle_types

    admin = TenancyScopeValidator.scope_filter(_summary("company_admin", vehicle_types=()))
    assert (admin.company_id, admin.branch_id, admin.vehicle_types) == ("co-1", None, None)

    root = TenancyScopeValidator.scope_filter(_summary("super_admin"))
    assert (root.company_id, root.branch_id, root.vehicle_types) == (None, None, None)
