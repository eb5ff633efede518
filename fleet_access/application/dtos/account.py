"""DTOs for account use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from fleet_access.domain.entities import AccountEntity
from fleet_access.domain.enums import Role, VehicleType
from fleet_access.domain.value_objects import PermissionMatrix


@dataclass(frozen=True)
class AccountSummary:
    """Account read-model returned by authenticate and used by authorize. No password."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    permissions: PermissionMatrix
    vehicle_type_access: tuple[VehicleType, ...]
    company_id: str | None
    branch_id: str | None
    is_active: bool = True
    lock_expires_at: datetime | None = None
    last_login_at: datetime | None = None

    @classmethod
    def from_entity(cls, account: AccountEntity) -> "AccountSummary":
        return cls(
            id=account.id,
            email=account.email.value,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role,
            permissions=account.permissions,
            vehicle_type_access=account.vehicle_type_access,
            company_id=account.company_id,
            branch_id=account.branch_id,
            is_active=account.is_active,
            lock_expires_at=account.lock_expires_at,
            last_login_at=account.last_login_at,
        )


@dataclass(frozen=True)
class AccountCreate:
    """Input for AccountService.create_account.

    permissions and vehicle_type_access are optional explicit overrides;
    when omitted the role defaults are applied.
    """

    first_name: str
    last_name: str
    email: str
    password: str
    role: str
    company_id: str | None = None
    branch_id: str | None = None
    phone: str | None = None
    permissions: dict | None = None
    vehicle_type_access: tuple[str, ...] | None = None


@dataclass(frozen=True)
class LoginState:
    """Lockout counters of an account: the values the lockout policy transitions."""

    failed_attempts: int = 0
    lock_expires_at: datetime | None = None


@dataclass(frozen=True)
class AccountListQuery:
    """Optional filters and paging for AccountService.list_accounts.

    company_id and branch_id narrow the caller's scope; they never widen it.
    search matches first name, last name, email, or phone (case-insensitive).
    """

    search: str | None = None
    role: str | None = None
    company_id: str | None = None
    branch_id: str | None = None
    is_active: bool | None = None
    skip: int = 0
    limit: int = 20
