"""Account domain entity.

Represents a login identity: credentials, role, permission matrix,
vehicle-type access, tenancy scope, and lockout counters. Independent of
persistence; repositories map ORM rows to and from this type.
"""

from dataclasses import dataclass, field
from datetime import datetime

from fleet_access.domain.enums import Role, VehicleType
from fleet_access.domain.exceptions import ValidationException
from fleet_access.domain.value_objects import EmailAddress, PermissionMatrix


@dataclass
class AccountEntity:
    """Domain entity for an account.

    Validation runs on construction. Every role except super_admin must
    carry both company_id and branch_id. An empty vehicle_type_access means
    unrestricted. version is the compare-and-swap token for login-state
    writes.
    """

    id: str
    first_name: str
    last_name: str
    email: EmailAddress
    hashed_password: str
    role: Role
    permissions: PermissionMatrix
    vehicle_type_access: tuple[VehicleType, ...] = ()
    company_id: str | None = None
    branch_id: str | None = None
    phone: str | None = None
    is_active: bool = True
    last_login_at: datetime | None = None
    failed_attempts: int = 0
    lock_expires_at: datetime | None = None
    created_by: str | None = None
    version: int = 1
    created_at: datetime | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate account business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Account ID is required", field="id")
        if not self.first_name or not self.first_name.strip():
            raise ValidationException("First name is required", field="first_name")
        if not self.last_name or not self.last_name.strip():
            raise ValidationException("Last name is required", field="last_name")
        if not self.hashed_password:
            raise ValidationException(
                "Password hash is required", field="hashed_password"
            )
        if self.role.requires_tenant:
            if not self.company_id:
                raise ValidationException(
                    f"Company is required for role {self.role.value}",
                    field="company_id",
                )
            if not self.branch_id:
                raise ValidationException(
                    f"Branch is required for role {self.role.value}",
                    field="branch_id",
                )
        if self.failed_attempts < 0:
            raise ValidationException(
                "Failed attempts cannot be negative", field="failed_attempts"
            )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_locked(self, now: datetime) -> bool:
        """Return True while lock_expires_at is in the future."""
        return self.lock_expires_at is not None and self.lock_expires_at > now
