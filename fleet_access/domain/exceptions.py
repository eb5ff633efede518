"""Domain exceptions for fleet access.

Defines domain-level exceptions that represent business rule violations
(authentication failures, lockout, tenancy scope, validation). These are
independent of infrastructure concerns; the presentation layer maps
error_code to HTTP responses in core.exception_handlers.
"""

from datetime import datetime
from typing import Any

# Shared by unknown-email and wrong-secret failures so callers cannot tell them apart.
AUTHENTICATION_FAILED_MESSAGE = "Invalid credentials"
AUTHENTICATION_FAILED_CODE = "AUTHENTICATION_FAILED"


class FleetAccessException(Exception):
    """Base exception for all fleet access errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details (see to_dict).

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FleetAccessException):
    """Raised when input validation fails (e.g. missing company or branch)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidSecretException(FleetAccessException):
    """Raised when a secret is empty or shorter than the configured minimum."""

    def __init__(self, min_length: int) -> None:
        super().__init__(
            f"Password must be at least {min_length} characters",
            "INVALID_SECRET",
            {"min_length": min_length},
        )


class InvalidRoleException(FleetAccessException):
    """Raised when a role value is not one of the fixed roles."""

    def __init__(self, role: str) -> None:
        super().__init__(
            f"Invalid role: {role}",
            "INVALID_ROLE",
            {"role": role},
        )


class AuthenticationFailedException(FleetAccessException):
    """Base for authentication failures that must look identical to callers.

    Subclasses exist only so services and logs can tell "no such account"
    from "wrong secret"; message, error_code, and details are the same.
    """

    def __init__(self) -> None:
        super().__init__(AUTHENTICATION_FAILED_MESSAGE, AUTHENTICATION_FAILED_CODE)


class AccountNotFoundError(AuthenticationFailedException):
    """No account exists for the supplied email."""


class InvalidCredentialsError(AuthenticationFailedException):
    """The account exists but the secret did not verify."""


class AccountLockedError(FleetAccessException):
    """Raised when the account is locked after repeated failed logins."""

    def __init__(self, locked_until: datetime | None = None) -> None:
        """Initialize with the lock expiry.

        Args:
            locked_until: When the lock expires; exposed so clients can say
                "try again later". Never reveals whether the secret was correct.
        """
        details: dict[str, Any] = {}
        if locked_until is not None:
            details["locked_until"] = locked_until.isoformat()
        super().__init__(
            "Account is temporarily locked due to too many failed login attempts",
            "ACCOUNT_LOCKED",
            details,
        )
        self.locked_until = locked_until


class AccountInactiveError(FleetAccessException):
    """Raised when an inactive (soft-deleted) account tries to authenticate or act."""

    def __init__(self) -> None:
        super().__init__("Account is inactive", "ACCOUNT_INACTIVE")


class TenantInactiveError(FleetAccessException):
    """Raised when the account's company is inactive."""

    def __init__(self, company_id: str | None = None) -> None:
        details = {"company_id": company_id} if company_id else {}
        super().__init__("Company is inactive", "TENANT_INACTIVE", details)


class PermissionDeniedError(FleetAccessException):
    """Raised when the permission matrix does not grant the action on the category."""

    def __init__(self, resource: str | None = None, action: str | None = None) -> None:
        """Initialize with optional resource category and action.

        Args:
            resource: Resource category (e.g. 'vehicles', 'maintenance').
            action: Action that was attempted (e.g. 'delete').
        """
        message = "Permission denied"
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class TenantMismatchError(FleetAccessException):
    """Raised when the resource belongs to a different company than the account."""

    def __init__(self) -> None:
        super().__init__(
            "Resource belongs to a different company", "TENANT_MISMATCH"
        )


class BranchMismatchError(FleetAccessException):
    """Raised when a branch-scoped account acts on another branch's resource."""

    def __init__(self) -> None:
        super().__init__(
            "Resource belongs to a different branch", "BRANCH_MISMATCH"
        )


class VehicleTypeDeniedError(FleetAccessException):
    """Raised when the vehicle type is outside the account's vehicle-type access list."""

    def __init__(self, vehicle_type: str) -> None:
        super().__init__(
            f"No access to vehicle type: {vehicle_type}",
            "VEHICLE_TYPE_DENIED",
            {"vehicle_type": vehicle_type},
        )


class ResourceNotFoundException(FleetAccessException):
    """Raised when a requested resource (account, company, branch) is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'account', 'company').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateEmailException(FleetAccessException):
    """Raised when an email is already registered (emails are globally unique)."""

    def __init__(self) -> None:
        super().__init__(
            "Email is already registered",
            "EMAIL_ALREADY_EXISTS",
            {},
        )


class CompanyAlreadyExistsException(FleetAccessException):
    """Raised when creating a company whose tax identifier already exists."""

    def __init__(self, tax_id: str) -> None:
        super().__init__(
            f"Company with tax id '{tax_id}' already exists",
            "COMPANY_ALREADY_EXISTS",
            {"tax_id": tax_id},
        )


class DuplicateBranchCodeException(FleetAccessException):
    """Raised when a branch code is already used within the company."""

    def __init__(self, company_id: str, code: str) -> None:
        super().__init__(
            f"Branch code '{code}' already exists in this company",
            "BRANCH_ALREADY_EXISTS",
            {"company_id": company_id, "code": code},
        )


class AccountLimitExceededException(FleetAccessException):
    """Raised when a company already has the maximum number of active accounts."""

    def __init__(self, company_id: str, limit: int) -> None:
        super().__init__(
            f"Company has reached the limit of {limit} active accounts",
            "ACCOUNT_LIMIT_EXCEEDED",
            {"company_id": company_id, "limit": limit},
        )


class LockoutConflictException(FleetAccessException):
    """Raised when the lockout counter update kept losing the compare-and-swap race.

    Internal error: fatal to the request, not a business outcome.
    """

    def __init__(self, account_id: str, attempts: int) -> None:
        super().__init__(
            "Login state was updated by concurrent requests; retry.",
            "LOCKOUT_CONFLICT",
            {"account_id": account_id, "attempts": attempts},
        )


class SqlNotConfiguredException(FleetAccessException):
    """Raised when an operation requires SQL but DATABASE_URL is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
