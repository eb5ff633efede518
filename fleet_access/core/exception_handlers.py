"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Both authentication failures (unknown email,
wrong password) share one error code and therefore one status and body.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleet_access.core.config import get_settings
from fleet_access.domain.exceptions import FleetAccessException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_FAILED": 401,
    "ACCOUNT_LOCKED": 423,
    "ACCOUNT_INACTIVE": 403,
    "TENANT_INACTIVE": 403,
    "INVALID_ROLE": 400,
    "INVALID_SECRET": 400,
    "VALIDATION_ERROR": 400,
    "PERMISSION_DENIED": 403,
    "TENANT_MISMATCH": 403,
    "BRANCH_MISMATCH": 403,
    "VEHICLE_TYPE_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "EMAIL_ALREADY_EXISTS": 409,
    "COMPANY_ALREADY_EXISTS": 409,
    "BRANCH_ALREADY_EXISTS": 409,
    "ACCOUNT_LIMIT_EXCEEDED": 409,
    "LOCKOUT_CONFLICT": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: FleetAccessException) -> int:
    """HTTP status for a domain exception (400 when the code is unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _error(
    status_code: int,
    error: str,
    message: Any,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _domain_error(request: Request, exc: FleetAccessException) -> JSONResponse:
    """Body is exc.to_dict(); status comes from the error code table."""
    status = status_for(exc)
    if status >= 500:
        logger.error(
            "%s on %s %s: %s %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error(422, "VALIDATION_ERROR", "Request validation failed", exc.errors())


def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework errors (401 from the bearer dependency, 404 routes, 405)."""
    return _error(
        exc.status_code, "HTTP_ERROR", exc.detail, headers=getattr(exc, "headers", None)
    )


def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app (call once from create_app)."""
    app.add_exception_handler(FleetAccessException, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)
