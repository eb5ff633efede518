"""Domain enumerations for fleet access.

Enums represent the closed sets the core reasons about: roles, resource
categories, actions, vehicle types, and lockout states.
"""

from enum import Enum

from fleet_access.domain.exceptions import InvalidRoleException, ValidationException


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """Account role, from the top-level administrator down to read-only viewers.

    Order of declaration is the privilege order; rank() exposes it so scope
    checks can ask "is this role below company_admin".
    """

    SUPER_ADMIN = "super_admin"
    COMPANY_ADMIN = "company_admin"
    BRANCH_MANAGER = "branch_manager"
    MECHANIC = "mechanic"
    OPERATOR = "operator"
    VIEWER = "viewer"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Return the Role for value; raise InvalidRoleException when unknown."""
        if isinstance(value, Role):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidRoleException(str(value)) from None

    @property
    def rank(self) -> int:
        """Privilege rank; 0 is the most privileged."""
        return list(Role).index(self)

    def is_below(self, other: "Role") -> bool:
        """Return True if this role is strictly less privileged than other."""
        return self.rank > other.rank

    @property
    def requires_tenant(self) -> bool:
        """Every role except super_admin must belong to a company and branch."""
        return self is not Role.SUPER_ADMIN


class ResourceCategory(_ValuesMixin, str, Enum):
    """Resource categories covered by the permission matrix."""

    COMPANIES = "companies"
    BRANCHES = "branches"
    VEHICLES = "vehicles"
    MAINTENANCE = "maintenance"
    USERS = "users"
    REPORTS = "reports"

    @classmethod
    def parse(cls, value: "str | ResourceCategory") -> "ResourceCategory":
        if isinstance(value, ResourceCategory):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationException(
                f"Unknown resource category: {value}", field="category"
            ) from None


class Action(_ValuesMixin, str, Enum):
    """Actions on a resource. Reports use EXPORT in place of DELETE."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    EXPORT = "export"

    @classmethod
    def parse(cls, value: "str | Action") -> "Action":
        if isinstance(value, Action):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationException(
                f"Unknown action: {value}", field="action"
            ) from None


class VehicleType(_ValuesMixin, str, Enum):
    """Closed set of vehicle types an account may be restricted to."""

    TRACTOR = "Tractor"
    TRUCK = "Truck"
    VAN = "Van"
    CAR = "Car"
    MOTORCYCLE = "Motorcycle"
    TRAILER = "Trailer"
    HEAVY_MACHINERY = "HeavyMachinery"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | VehicleType") -> "VehicleType":
        if isinstance(value, VehicleType):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationException(
                f"Unknown vehicle type: {value}", field="vehicle_type"
            ) from None

    @classmethod
    def parse_list(cls, values: "list[str] | tuple[str, ...]") -> "tuple[VehicleType, ...]":
        """Parse an ordered list, dropping duplicates but keeping first-seen order."""
        seen: dict[VehicleType, None] = {}
        for value in values:
            seen.setdefault(cls.parse(value), None)
        return tuple(seen)


class LockoutState(_ValuesMixin, str, Enum):
    """Lockout state of an account at a given instant.

    OPEN: below threshold and no active lock.
    LOCKED: lock expiry is in the future.
    HALF_OPEN: lock expiry has passed but the failure counter is non-zero.
    """

    OPEN = "open"
    LOCKED = "locked"
    HALF_OPEN = "half_open"
