"""Pydantic request/response schemas for the API."""

from fleet_access.schemas.account import AccountCreateRequest, AccountResponse
from fleet_access.schemas.auth import LoginRequest, TokenResponse
from fleet_access.schemas.authorization import AuthorizeRequest, AuthorizeResponse
from fleet_access.schemas.company import (
    BranchResponse,
    CompanyOnboardRequest,
    CompanyResponse,
    OnboardingResponse,
)
from fleet_access.schemas.health import HealthResponse

__all__ = [
    "AccountCreateRequest",
    "AccountResponse",
    "AuthorizeRequest",
    "AuthorizeResponse",
    "BranchResponse",
    "CompanyOnboardRequest",
    "CompanyResponse",
    "HealthResponse",
    "LoginRequest",
    "OnboardingResponse",
    "TokenResponse",
]
