"""Accounts API: create and administer accounts within the caller's scope."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from fleet_access.api.v1.dependencies import (
    get_account_service,
    get_account_service_for_write,
    get_current_account,
)
from fleet_access.application.dtos.account import (
    AccountCreate,
    AccountListQuery,
    AccountSummary,
)
from fleet_access.application.services import AccountService
from fleet_access.schemas.account import (
    AccountCreateRequest,
    AccountListResponse,
    AccountResponse,
    ActiveRequest,
    AssignableRolesResponse,
    PasswordResetRequest,
    PermissionsOverrideRequest,
    RoleChangeRequest,
    VehicleTypesRequest,
)

router = APIRouter()

CurrentAccount = Annotated[AccountSummary, Depends(get_current_account)]
WriteService = Annotated[AccountService, Depends(get_account_service_for_write)]


@router.get("/roles/assignable", response_model=AssignableRolesResponse)
async def assignable_roles(current: CurrentAccount) -> AssignableRolesResponse:
    """Roles the caller may assign to other accounts."""
    return AssignableRolesResponse(
        roles=[r.value for r in AccountService.assignable_roles(current.role)]
    )


@router.get("", response_model=AccountListResponse)
async def list_accounts(
    current: CurrentAccount,
    account_service: Annotated[AccountService, Depends(get_account_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    search: str | None = None,
    role: str | None = None,
    company_id: str | None = None,
    branch_id: str | None = None,
    is_active: bool | None = None,
) -> AccountListResponse:
    """List accounts in the caller's scope (company, and branch below company_admin)."""
    accounts, total = await account_service.list_accounts(
        current,
        AccountListQuery(
            search=search,
            role=role,
            company_id=company_id,
            branch_id=branch_id,
            is_active=is_active,
            skip=skip,
            limit=limit,
        ),
    )
    return AccountListResponse(
        items=[AccountResponse.from_entity(a) for a in accounts],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(
    body: AccountCreateRequest,
    current: CurrentAccount,
    account_service: WriteService,
) -> AccountResponse:
    """Create an account in the caller's company (and branch, for branch managers)."""
    account = await account_service.create_account(
        AccountCreate(
            first_name=body.first_name,
            last_name=body.last_name,
            email=str(body.email),
            password=body.password,
            role=body.role,
            company_id=body.company_id,
            branch_id=body.branch_id,
            phone=body.phone,
            permissions=body.permissions,
            vehicle_type_access=(
                tuple(body.vehicle_type_access)
                if body.vehicle_type_access is not None
                else None
            ),
        ),
        actor=current,
    )
    return AccountResponse.from_entity(account)


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: str,
    current: CurrentAccount,
    account_service: Annotated[AccountService, Depends(get_account_service)],
) -> AccountResponse:
    account = await account_service.get_account(account_id, actor=current)
    return AccountResponse.from_entity(account)


@router.put("/{account_id}/role", response_model=AccountResponse)
async def change_role(
    account_id: str,
    body: RoleChangeRequest,
    current: CurrentAccount,
    account_service: WriteService,
) -> AccountResponse:
    """Change role; permissions are re-derived, custom vehicle types survive."""
    account = await account_service.change_role(account_id, body.role, actor=current)
    return AccountResponse.from_entity(account)


@router.put("/{account_id}/vehicle-types", response_model=AccountResponse)
async def set_vehicle_types(
    account_id: str,
    body: VehicleTypesRequest,
    current: CurrentAccount,
    account_service: WriteService,
) -> AccountResponse:
    account = await account_service.set_vehicle_type_access(
        account_id, body.vehicle_types, actor=current
    )
    return AccountResponse.from_entity(account)


@router.put("/{account_id}/permissions", response_model=AccountResponse)
async def override_permissions(
    account_id: str,
    body: PermissionsOverrideRequest,
    current: CurrentAccount,
    account_service: WriteService,
) -> AccountResponse:
    account = await account_service.override_permissions(
        account_id, body.permissions, actor=current
    )
    return AccountResponse.from_entity(account)


@router.put("/{account_id}/active", response_model=AccountResponse)
async def set_active(
    account_id: str,
    body: ActiveRequest,
    current: CurrentAccount,
    account_service: WriteService,
) -> AccountResponse:
    """Activate or deactivate (soft delete). Callers cannot deactivate themselves."""
    account = await account_service.set_active(
        account_id, body.is_active, actor=current
    )
    return AccountResponse.from_entity(account)


@router.put("/{account_id}/password", status_code=204)
async def reset_password(
    account_id: str,
    body: PasswordResetRequest,
    current: CurrentAccount,
    account_service: WriteService,
) -> Response:
    """Administrative password reset; also clears any lockout."""
    await account_service.reset_password(account_id, body.new_password, actor=current)
    return Response(status_code=204)
