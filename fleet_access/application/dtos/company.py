"""DTOs for company, branch, and tenant onboarding use cases."""

from dataclasses import dataclass, field

from fleet_access.domain.entities import AccountEntity, BranchEntity, CompanyEntity


@dataclass(frozen=True)
class CompanyCreate:
    """Input for CompanyService.create_company. administrator_* describe the future admin."""

    tax_id: str
    name: str
    administrator_first_name: str
    administrator_last_name: str
    administrator_email: str
    administrator_phone: str | None = None
    contact: dict | None = None


@dataclass(frozen=True)
class BranchCreate:
    """Input for CompanyService.create_branch."""

    company_id: str
    name: str
    code: str
    contact: dict | None = None


@dataclass(frozen=True)
class OnboardingRequest:
    """Input for TenantOnboardingService.onboard (company + main branch + admin)."""

    company: CompanyCreate
    admin_password: str
    branch_name: str | None = None
    branch_code: str | None = None


@dataclass(frozen=True)
class OnboardingResult:
    """Result of onboarding. created lists what this call created (empty on full re-entry)."""

    company: CompanyEntity
    branch: BranchEntity
    administrator: AccountEntity
    created: tuple[str, ...] = field(default_factory=tuple)
