"""Permission matrix value objects.

The matrix is one boolean flag per (resource category, action). Five
categories carry create/read/update/delete; reports carry read/export.
Every flag defaults to False. Shapes are typed so an invalid matrix
cannot be constructed.
"""

from dataclasses import dataclass, fields
from typing import Any

from fleet_access.domain.enums import Action, ResourceCategory


@dataclass(frozen=True)
class CrudFlags:
    """create/read/update/delete flags for a CRUD category."""

    create: bool = False
    read: bool = False
    update: bool = False
    delete: bool = False

    @classmethod
    def from_letters(cls, letters: str) -> "CrudFlags":
        """Build from compact letters such as "CRUD", "RU", or "" (no access)."""
        upper = letters.upper()
        unknown = set(upper) - set("CRUD")
        if unknown:
            raise ValueError(f"Unknown CRUD letters: {''.join(sorted(unknown))}")
        return cls(
            create="C" in upper,
            read="R" in upper,
            update="U" in upper,
            delete="D" in upper,
        )


@dataclass(frozen=True)
class ReportFlags:
    """read/export flags for the reports category (no create/update/delete)."""

    read: bool = False
    export: bool = False


_CRUD_CATEGORIES = (
    ResourceCategory.COMPANIES,
    ResourceCategory.BRANCHES,
    ResourceCategory.VEHICLES,
    ResourceCategory.MAINTENANCE,
    ResourceCategory.USERS,
)


@dataclass(frozen=True)
class PermissionMatrix:
    """Capability matrix for an account, independent of tenancy scope."""

    companies: CrudFlags = CrudFlags()
    branches: CrudFlags = CrudFlags()
    vehicles: CrudFlags = CrudFlags()
    maintenance: CrudFlags = CrudFlags()
    users: CrudFlags = CrudFlags()
    reports: ReportFlags = ReportFlags()

    def flags_for(self, category: ResourceCategory) -> CrudFlags | ReportFlags:
        return getattr(self, category.value)

    def allows(self, category: ResourceCategory, action: Action) -> bool:
        """Return True if the action flag is set for the category.

        An action the category does not carry (delete on reports, export on
        vehicles) is never allowed.
        """
        return bool(getattr(self.flags_for(category), action.value, False))

    def to_dict(self) -> dict[str, dict[str, bool]]:
        """Serialize to {category: {action: bool}} (persisted as JSON)."""
        result: dict[str, dict[str, bool]] = {}
        for category in ResourceCategory:
            flags = self.flags_for(category)
            result[category.value] = {
                f.name: getattr(flags, f.name) for f in fields(flags)
            }
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermissionMatrix":
        """Build from {category: {action: bool}}.

        Missing categories and actions default to False. Unknown categories
        or actions raise ValueError rather than being ignored.
        """
        unknown = set(data) - set(ResourceCategory.values())
        if unknown:
            raise ValueError(f"Unknown permission categories: {sorted(unknown)}")
        kwargs: dict[str, CrudFlags | ReportFlags] = {}
        for category in ResourceCategory:
            raw = data.get(category.value) or {}
            if not isinstance(raw, dict):
                raise ValueError(f"Permissions for {category.value} must be an object")
            flag_cls = CrudFlags if category in _CRUD_CATEGORIES else ReportFlags
            allowed = {f.name for f in fields(flag_cls)}
            bad = set(raw) - allowed
            if bad:
                raise ValueError(
                    f"Unknown actions for {category.value}: {sorted(bad)}"
                )
            kwargs[category.value] = flag_cls(**{k: bool(v) for k, v in raw.items()})
        return cls(**kwargs)
