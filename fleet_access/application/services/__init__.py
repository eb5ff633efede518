"""Application services (use-case orchestration over domain and ports)."""

from fleet_access.application.services.account_service import (
    ASSIGNABLE_ROLES,
    AccountService,
)
from fleet_access.application.services.company_service import CompanyService
from fleet_access.application.services.lockout_policy import LockoutPolicy
from fleet_access.application.services.permission_matrix import (
    ALL_VEHICLE_TYPES,
    PermissionMatrixBuilder,
)
from fleet_access.application.services.tenancy_scope import TenancyScopeValidator
from fleet_access.application.services.tenant_onboarding_service import (
    TenantOnboardingService,
)

__all__ = [
    "ALL_VEHICLE_TYPES",
    "ASSIGNABLE_ROLES",
    "AccountService",
    "CompanyService",
    "LockoutPolicy",
    "PermissionMatrixBuilder",
    "TenancyScopeValidator",
    "TenantOnboardingService",
]
