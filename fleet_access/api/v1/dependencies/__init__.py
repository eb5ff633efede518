"""FastAPI dependencies (composition root).

Routes depend on these providers only; tests override them with
app.dependency_overrides.
"""

from fleet_access.api.v1.dependencies.auth import (
    AuthSecurity,
    get_auth_security,
    get_current_account,
    get_current_account_optional,
)
from fleet_access.api.v1.dependencies.services import (
    get_account_service,
    get_account_service_for_credentials,
    get_account_service_for_write,
    get_company_service_for_write,
    get_credential_store,
    get_onboarding_service,
    get_scope_validator,
)

__all__ = [
    "AuthSecurity",
    "get_account_service",
    "get_account_service_for_credentials",
    "get_account_service_for_write",
    "get_auth_security",
    "get_company_service_for_write",
    "get_credential_store",
    "get_current_account",
    "get_current_account_optional",
    "get_onboarding_service",
    "get_scope_validator",
]
