"""Authorization check API schemas."""

from pydantic import BaseModel, Field


class AuthorizeRequest(BaseModel):
    """Resource descriptor and action to evaluate for the current account."""

    category: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)
    company_id: str | None = None
    branch_id: str | None = None
    vehicle_type: str | None = None


class AuthorizeResponse(BaseModel):
    """allowed is False with the failure code and message when denied."""

    allowed: bool
    error: str | None = None
    message: str | None = None
