"""Permission matrix builder: role -> default capabilities and vehicle types.

Pure and deterministic. Defaults are declared as a table of compact CRUD
letters per category so the role grid reads like a permissions chart.
An unknown role raises InvalidRoleException; there is no permissive fallback.
"""

from __future__ import annotations

from fleet_access.domain.enums import ResourceCategory, Role, VehicleType
from fleet_access.domain.value_objects import CrudFlags, PermissionMatrix, ReportFlags

_READ_ONLY_ROW = {
    ResourceCategory.COMPANIES: "R",
    ResourceCategory.BRANCHES: "R",
    ResourceCategory.VEHICLES: "R",
    ResourceCategory.MAINTENANCE: "R",
    ResourceCategory.USERS: "",
}

# Category -> CRUD letters per role. Reports are in _REPORT_DEFAULTS.
_CRUD_DEFAULTS: dict[Role, dict[ResourceCategory, str]] = {
    Role.SUPER_ADMIN: {
        ResourceCategory.COMPANIES: "CRUD",
        ResourceCategory.BRANCHES: "CRUD",
        ResourceCategory.VEHICLES: "CRUD",
        ResourceCategory.MAINTENANCE: "CRUD",
        ResourceCategory.USERS: "CRUD",
    },
    Role.COMPANY_ADMIN: {
        ResourceCategory.COMPANIES: "RU",
        ResourceCategory.BRANCHES: "CRUD",
        ResourceCategory.VEHICLES: "CRUD",
        ResourceCategory.MAINTENANCE: "CRUD",
        ResourceCategory.USERS: "CRUD",
    },
    Role.BRANCH_MANAGER: {
        ResourceCategory.COMPANIES: "R",
        ResourceCategory.BRANCHES: "RU",
        ResourceCategory.VEHICLES: "CRU",
        ResourceCategory.MAINTENANCE: "CRU",
        ResourceCategory.USERS: "CRU",
    },
    Role.MECHANIC: {
        ResourceCategory.COMPANIES: "R",
        ResourceCategory.BRANCHES: "R",
        ResourceCategory.VEHICLES: "RU",
        ResourceCategory.MAINTENANCE: "CRU",
        ResourceCategory.USERS: "",
    },
    Role.OPERATOR: _READ_ONLY_ROW,
    Role.VIEWER: _READ_ONLY_ROW,
}

_REPORT_DEFAULTS: dict[Role, ReportFlags] = {
    Role.SUPER_ADMIN: ReportFlags(read=True, export=True),
    Role.COMPANY_ADMIN: ReportFlags(read=True, export=True),
    Role.BRANCH_MANAGER: ReportFlags(read=True, export=True),
    Role.MECHANIC: ReportFlags(read=True),
    Role.OPERATOR: ReportFlags(read=True),
    Role.VIEWER: ReportFlags(read=True),
}

ALL_VEHICLE_TYPES: tuple[VehicleType, ...] = tuple(VehicleType)

_VEHICLE_TYPE_DEFAULTS: dict[Role, tuple[VehicleType, ...]] = {
    Role.SUPER_ADMIN: ALL_VEHICLE_TYPES,
    Role.COMPANY_ADMIN: ALL_VEHICLE_TYPES,
    Role.BRANCH_MANAGER: (
        VehicleType.CAR,
        VehicleType.MOTORCYCLE,
        VehicleType.VAN,
        VehicleType.TRUCK,
    ),
    Role.MECHANIC: (VehicleType.CAR, VehicleType.MOTORCYCLE, VehicleType.VAN),
    Role.OPERATOR: (VehicleType.CAR, VehicleType.MOTORCYCLE),
    Role.VIEWER: (VehicleType.CAR, VehicleType.MOTORCYCLE),
}


class PermissionMatrixBuilder:
    """Builds default permission matrices and vehicle-type lists per role."""

    @staticmethod
    def build(role: Role | str) -> PermissionMatrix:
        """Return the default permission matrix for role.

        Raises:
            InvalidRoleException: If role is not a known role value.
        """
        parsed = Role.parse(role)
        row = _CRUD_DEFAULTS[parsed]
        return PermissionMatrix(
            companies=CrudFlags.from_letters(row[ResourceCategory.COMPANIES]),
            branches=CrudFlags.from_letters(row[ResourceCategory.BRANCHES]),
            vehicles=CrudFlags.from_letters(row[ResourceCategory.VEHICLES]),
            maintenance=CrudFlags.from_letters(row[ResourceCategory.MAINTENANCE]),
            users=CrudFlags.from_letters(row[ResourceCategory.USERS]),
            reports=_REPORT_DEFAULTS[parsed],
        )

    @staticmethod
    def default_vehicle_types(role: Role | str) -> tuple[VehicleType, ...]:
        """Return the default vehicle-type access list for role (ordered)."""
        return _VEHICLE_TYPE_DEFAULTS[Role.parse(role)]

    @classmethod
    def resolve_vehicle_types(
        cls,
        role: Role | str,
        explicit: tuple[VehicleType, ...] | None,
    ) -> tuple[VehicleType, ...]:
        """Return explicit when it is non-empty, else the role default."""
        if explicit:
            return explicit
        return cls.default_vehicle_types(role)
