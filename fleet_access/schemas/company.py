"""Company, branch, and onboarding API schemas."""

from pydantic import BaseModel, EmailStr, Field

from fleet_access.domain.entities import BranchEntity, CompanyEntity
from fleet_access.schemas.account import AccountResponse


class ContactSchema(BaseModel):
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = Field(default=None, max_length=16)
    country: str | None = None


class AdministratorSchema(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=32)


class CompanyOnboardRequest(BaseModel):
    """Request body for POST /companies/onboard (company + main branch + admin)."""

    tax_id: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=200)
    contact: ContactSchema | None = None
    administrator: AdministratorSchema
    admin_password: str = Field(..., min_length=6, description="Initial admin password")
    branch_name: str | None = Field(default=None, max_length=200)
    branch_code: str | None = Field(default=None, min_length=1, max_length=10)


class LinkAdministratorRequest(BaseModel):
    account_id: str = Field(..., min_length=1)


class BranchCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=1, max_length=10)
    contact: ContactSchema | None = None


class CompanyResponse(BaseModel):
    id: str
    tax_id: str
    name: str
    is_active: bool
    contact: dict
    administrator: dict | None = None

    @classmethod
    def from_entity(cls, company: CompanyEntity) -> "CompanyResponse":
        return cls(
            id=company.id,
            tax_id=company.tax_id.value,
            name=company.name,
            is_active=company.is_active,
            contact=company.contact.to_dict(),
            administrator=(
                company.administrator.to_dict() if company.administrator else None
            ),
        )


class BranchResponse(BaseModel):
    id: str
    company_id: str
    name: str
    code: str
    is_active: bool

    @classmethod
    def from_entity(cls, branch: BranchEntity) -> "BranchResponse":
        return cls(
            id=branch.id,
            company_id=branch.company_id,
            name=branch.name,
            code=branch.code.value,
            is_active=branch.is_active,
        )


class OnboardingResponse(BaseModel):
    """Onboarding result; created is empty when the call was a full re-entry."""

    company: CompanyResponse
    branch: BranchResponse
    administrator: AccountResponse
    created: list[str]
