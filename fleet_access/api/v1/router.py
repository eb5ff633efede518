"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from fleet_access.api.v1.dependencies (no manual
repo/service construction).
"""

from fastapi import APIRouter

from fleet_access.api.v1.endpoints import accounts, auth, authorization, companies, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(
    authorization.router, prefix="/authorize", tags=["authorization"]
)
