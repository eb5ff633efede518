"""Auth API schemas."""

from pydantic import BaseModel, Field

from fleet_access.schemas.account import AccountResponse


class LoginRequest(BaseModel):
    """Request body for login.

    email is a plain string so a malformed address fails like an unknown
    one (401), not with a distinguishable 422.
    """

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=1024)


class TokenResponse(BaseModel):
    """JWT token response with the authenticated account summary."""

    access_token: str
    token_type: str = "bearer"
    account: AccountResponse


class ChangePasswordRequest(BaseModel):
    """Request body for POST /auth/change-password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, description="New password (min 6 characters)")
