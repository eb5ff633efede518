"""DTOs for authorization checks."""

from dataclasses import dataclass

from fleet_access.domain.enums import VehicleType


@dataclass(frozen=True)
class ResourceDescriptor:
    """Target of an authorize call.

    category and vehicle_type are raw strings so unknown values surface as
    validation failures from the scope validator rather than at construction.
    """

    category: str
    company_id: str | None = None
    branch_id: str | None = None
    vehicle_type: str | None = None


@dataclass(frozen=True)
class ScopeFilter:
    """Filter a host applies to list queries. None means unrestricted."""

    company_id: str | None
    branch_id: str | None
    vehicle_types: tuple[VehicleType, ...] | None
