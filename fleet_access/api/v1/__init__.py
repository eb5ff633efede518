"""API v1."""

from fleet_access.api.v1.router import api_router

__all__ = ["api_router"]
