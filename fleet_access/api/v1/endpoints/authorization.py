"""Authorization API: evaluate a resource descriptor for the current account.

Hosts call this (or the TenancyScopeValidator directly) before acting on
vehicles, maintenance records, and other resources outside this service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from fleet_access.api.v1.dependencies import get_current_account, get_scope_validator
from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.dtos.authorization import ResourceDescriptor
from fleet_access.application.services import TenancyScopeValidator
from fleet_access.schemas.authorization import AuthorizeRequest, AuthorizeResponse

router = APIRouter()


@router.post("", response_model=AuthorizeResponse)
async def authorize(
    body: AuthorizeRequest,
    current: Annotated[AccountSummary, Depends(get_current_account)],
    validator: Annotated[TenancyScopeValidator, Depends(get_scope_validator)],
) -> AuthorizeResponse:
    """Return whether the caller may perform action on the described resource.

    Always 200; a denial carries the specific failure code (PERMISSION_DENIED,
    TENANT_MISMATCH, BRANCH_MISMATCH, VEHICLE_TYPE_DENIED, ...).
    """
    failure = validator.check(
        current,
        ResourceDescriptor(
            category=body.category,
            company_id=body.company_id,
            branch_id=body.branch_id,
            vehicle_type=body.vehicle_type,
        ),
        body.action,
    )
    if failure is None:
        return AuthorizeResponse(allowed=True)
    return AuthorizeResponse(
        allowed=False, error=failure.error_code, message=failure.message
    )
