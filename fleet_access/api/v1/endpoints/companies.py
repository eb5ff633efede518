"""Companies API: onboarding, administrator link, active flag, branches."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fleet_access.api.v1.dependencies import (
    get_company_service_for_write,
    get_current_account,
    get_onboarding_service,
)
from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.dtos.company import (
    BranchCreate,
    CompanyCreate,
    OnboardingRequest,
)
from fleet_access.application.services import CompanyService, TenantOnboardingService
from fleet_access.schemas.account import AccountResponse, ActiveRequest
from fleet_access.schemas.company import (
    BranchCreateRequest,
    BranchResponse,
    CompanyOnboardRequest,
    CompanyResponse,
    LinkAdministratorRequest,
    OnboardingResponse,
)

router = APIRouter()

CurrentAccount = Annotated[AccountSummary, Depends(get_current_account)]
CompanyWriteService = Annotated[CompanyService, Depends(get_company_service_for_write)]


@router.post("/onboard", response_model=OnboardingResponse, status_code=201)
async def onboard_company(
    body: CompanyOnboardRequest,
    current: CurrentAccount,
    onboarding: Annotated[TenantOnboardingService, Depends(get_onboarding_service)],
) -> OnboardingResponse:
    """Create company, main branch, and company_admin, then link them.

    Safe to retry: an already-onboarded company is returned unchanged.
    """
    result = await onboarding.onboard(
        OnboardingRequest(
            company=CompanyCreate(
                tax_id=body.tax_id,
                name=body.name,
                administrator_first_name=body.administrator.first_name,
                administrator_last_name=body.administrator.last_name,
                administrator_email=str(body.administrator.email),
                administrator_phone=body.administrator.phone,
                contact=body.contact.model_dump(mode="json") if body.contact else None,
            ),
            admin_password=body.admin_password,
            branch_name=body.branch_name,
            branch_code=body.branch_code,
        ),
        actor=current,
    )
    return OnboardingResponse(
        company=CompanyResponse.from_entity(result.company),
        branch=BranchResponse.from_entity(result.branch),
        administrator=AccountResponse.from_entity(result.administrator),
        created=list(result.created),
    )


@router.post("/{company_id}/administrator", response_model=CompanyResponse)
async def link_administrator(
    company_id: str,
    body: LinkAdministratorRequest,
    current: CurrentAccount,
    company_service: CompanyWriteService,
) -> CompanyResponse:
    """Second bootstrap phase: link the company to its administrator account (idempotent)."""
    linked = await company_service.link_administrator(
        company_id, body.account_id, actor=current
    )
    return CompanyResponse.from_entity(linked)


@router.put("/{company_id}/active", response_model=CompanyResponse)
async def set_company_active(
    company_id: str,
    body: ActiveRequest,
    current: CurrentAccount,
    company_service: CompanyWriteService,
) -> CompanyResponse:
    company = await company_service.set_company_active(
        company_id, body.is_active, actor=current
    )
    return CompanyResponse.from_entity(company)


@router.post("/{company_id}/branches", response_model=BranchResponse, status_code=201)
async def create_branch(
    company_id: str,
    body: BranchCreateRequest,
    current: CurrentAccount,
    company_service: CompanyWriteService,
) -> BranchResponse:
    branch = await company_service.create_branch(
        BranchCreate(
            company_id=company_id,
            name=body.name,
            code=body.code,
            contact=body.contact.model_dump(mode="json") if body.contact else None,
        ),
        actor=current,
    )
    return BranchResponse.from_entity(branch)
