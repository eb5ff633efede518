"""Unit tests for domain exceptions (error codes, details, to_dict)."""

from datetime import UTC, datetime

from fleet_access.domain.exceptions import (
    AccountLockedError,
    AccountNotFoundError,
    FleetAccessException,
    InvalidCredentialsError,
    PermissionDeniedError,
    ResourceNotFoundException,
    TenantInactiveError,
    ValidationException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = FleetAccessException("boom")
    assert exc.error_code == "FleetAccessException"
    assert exc.details == {}
    assert str(exc) == "boom"


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("Branch is required", field="branch_id")
    assert exc.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "Branch is required",
        "details": {"field": "branch_id"},
    }


def test_not_found_and_invalid_credentials_are_indistinguishable() -> None:
    a = AccountNotFoundError()
    b = InvalidCredentialsError()
    assert a.to_dict() == b.to_dict()
    assert str(a) == str(b) == "Invalid credentials"
    assert a.error_code == "AUTHENTICATION_FAILED"


def test_account_locked_details() -> None:
    until = datetime(2026, 3, 2, 10, 0, tzinfo=UTC)
    exc = AccountLockedError(until)
    assert exc.error_code == "ACCOUNT_LOCKED"
    assert exc.locked_until == until
    assert exc.details["locked_until"] == until.isoformat()
    assert AccountLockedError().details == {}


def test_permission_denied_message() -> None:
    exc = PermissionDeniedError("vehicles", "delete")
    assert exc.message == "Permission denied: delete on vehicles"
    assert exc.details == {"resource": "vehicles", "action": "delete"}
    assert PermissionDeniedError().message == "Permission denied"


def test_resource_not_found_details() -> None:
    exc = ResourceNotFoundException("company", "co-1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details["resource_type"] == "company"
    assert exc.details["resource_id"] == "co-1"


def test_tenant_inactive_details() -> None:
    assert TenantInactiveError("co-1").details == {"company_id": "co-1"}
    assert TenantInactiveError().details == {}
