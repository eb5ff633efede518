"""Signed bearer tokens (python-jose) for the HTTP layer.

The token subject is the account id; role and tenancy claims are
informational only, since the current account is reloaded on every request.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from fleet_access.core.config import get_settings
from fleet_access.shared.utils.datetime import utc_now


def create_access_token(
    claims: dict[str, Any], expires_delta: timedelta | None = None
) -> str:
    """Encode claims plus an exp claim.

    Args:
        claims: Token claims; must include sub.
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {**claims, "exp": utc_now() + lifetime}
    return str(
        jwt.encode(
            payload, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
        )
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode and validate a token; raise ValueError when it is unusable."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token has no subject")
    return payload
