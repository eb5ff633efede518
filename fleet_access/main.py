"""FastAPI application factory.

Only wiring lives here: lifespan, error handlers, rate limiter, CORS and
routers. Settings are read inside create_app() so tests can set the
environment first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fleet_access.api.v1 import api_router
from fleet_access.core.config import Settings, get_settings
from fleet_access.core.exception_handlers import register_exception_handlers
from fleet_access.core.lifespan import create_lifespan
from fleet_access.core.limiter import limiter


def _cors_origins(settings: Settings) -> list[str]:
    return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]


def create_app() -> FastAPI:
    """Build the API app; routes are mounted under /api/v1."""
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    limiter.enabled = settings.rate_limit_enabled
    application.state.limiter = limiter
    register_exception_handlers(application)
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )
    application.include_router(api_router, prefix="/api/v1")
    return application


app = create_app()
