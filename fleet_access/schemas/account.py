"""Account API schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from fleet_access.application.dtos.account import AccountSummary
from fleet_access.domain.entities import AccountEntity


class AccountCreateRequest(BaseModel):
    """Request body for creating an account.

    permissions and vehicle_type_access override the role defaults when given.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    role: str = Field(..., min_length=1)
    company_id: str | None = None
    branch_id: str | None = None
    phone: str | None = Field(default=None, max_length=32)
    permissions: dict[str, dict[str, bool]] | None = None
    vehicle_type_access: list[str] | None = None


class RoleChangeRequest(BaseModel):
    role: str = Field(..., min_length=1)


class VehicleTypesRequest(BaseModel):
    """Explicit vehicle-type list; empty list means all types."""

    vehicle_types: list[str]


class PermissionsOverrideRequest(BaseModel):
    permissions: dict[str, dict[str, bool]]


class ActiveRequest(BaseModel):
    is_active: bool


class PasswordResetRequest(BaseModel):
    new_password: str = Field(..., min_length=6, description="New password (min 6 characters)")


class AssignableRolesResponse(BaseModel):
    roles: list[str]


class AccountResponse(BaseModel):
    """Account response (no password, no lockout counters)."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    permissions: dict[str, dict[str, bool]]
    vehicle_type_access: list[str]
    company_id: str | None
    branch_id: str | None
    is_active: bool
    last_login_at: datetime | None = None
    locked_until: datetime | None = None

    @classmethod
    def from_summary(cls, summary: AccountSummary) -> "AccountResponse":
        return cls(
            id=summary.id,
            email=summary.email,
            first_name=summary.first_name,
            last_name=summary.last_name,
            role=summary.role.value,
            permissions=summary.permissions.to_dict(),
            vehicle_type_access=[vt.value for vt in summary.vehicle_type_access],
            company_id=summary.company_id,
            branch_id=summary.branch_id,
            is_active=summary.is_active,
            last_login_at=summary.last_login_at,
            locked_until=summary.lock_expires_at,
        )

    @classmethod
    def from_entity(cls, account: AccountEntity) -> "AccountResponse":
        return cls.from_summary(AccountSummary.from_entity(account))


class AccountListResponse(BaseModel):
    """One page of accounts in the caller's scope."""

    items: list[AccountResponse]
    total: int
    skip: int
    limit: int
