"""Application DTOs (no ORM dependency)."""

from fleet_access.application.dtos.account import (
    AccountCreate,
    AccountListQuery,
    AccountSummary,
    LoginState,
)
from fleet_access.application.dtos.authorization import ResourceDescriptor, ScopeFilter
from fleet_access.application.dtos.company import (
    BranchCreate,
    CompanyCreate,
    OnboardingRequest,
    OnboardingResult,
)

__all__ = [
    "AccountCreate",
    "AccountListQuery",
    "AccountSummary",
    "BranchCreate",
    "CompanyCreate",
    "LoginState",
    "OnboardingRequest",
    "OnboardingResult",
    "ResourceDescriptor",
    "ScopeFilter",
]
