"""Domain value objects and shared value types."""

from fleet_access.domain.value_objects.core import (
    BranchCode,
    CompanyAdministrator,
    ContactInfo,
    EmailAddress,
    TaxId,
)
from fleet_access.domain.value_objects.permissions import (
    CrudFlags,
    PermissionMatrix,
    ReportFlags,
)

__all__ = [
    "BranchCode",
    "CompanyAdministrator",
    "ContactInfo",
    "CrudFlags",
    "EmailAddress",
    "PermissionMatrix",
    "ReportFlags",
    "TaxId",
]
