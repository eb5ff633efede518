"""Tenant onboarding: company + main branch + company_admin account, then link.

Every step is find-or-create, so a run that failed halfway (or a client
retry) can be repeated: an already-onboarded company returns the existing
company, branch, and administrator and links nothing new.
"""

from __future__ import annotations

import logging

from fleet_access.application.dtos.account import AccountCreate, AccountSummary
from fleet_access.application.dtos.authorization import ResourceDescriptor
from fleet_access.application.dtos.company import (
    BranchCreate,
    OnboardingRequest,
    OnboardingResult,
)
from fleet_access.application.services.account_service import AccountService
from fleet_access.application.services.company_service import CompanyService
from fleet_access.core.config import Settings, get_settings
from fleet_access.domain.entities import AccountEntity, CompanyEntity
from fleet_access.domain.enums import Action, ResourceCategory, Role
from fleet_access.domain.exceptions import (
    CompanyAlreadyExistsException,
    DuplicateEmailException,
    ValidationException,
)
from fleet_access.domain.value_objects import BranchCode, EmailAddress, TaxId

logger = logging.getLogger(__name__)


class TenantOnboardingService:
    """Creates a company with its main branch and first company_admin (re-entrant)."""

    def __init__(
        self,
        company_service: CompanyService,
        account_service: AccountService,
        settings: Settings | None = None,
    ) -> None:
        self.company_service = company_service
        self.account_service = account_service
        self._settings = settings or get_settings()

    async def onboard(
        self, request: OnboardingRequest, actor: AccountSummary | None = None
    ) -> OnboardingResult:
        """Run the two-phase bootstrap.

        Caller must run this within a single DB transaction (transactional
        session dependency) so a failure leaves no partial tenant; re-running
        after a committed partial run resumes where it stopped.

        Raises:
            CompanyAlreadyExistsException: Tax id belongs to a company with a
                different administrator email.
            DuplicateEmailException: Admin email belongs to an account outside
                this company or with another role.
        """
        try:
            tax_id = TaxId(request.company.tax_id)
            admin_email = EmailAddress(request.company.administrator_email)
            branch_code = BranchCode(
                request.branch_code or self._settings.main_branch_code
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e

        created: list[str] = []
        company = await self.company_service.company_repo.get_by_tax_id(tax_id.value)
        if company is None:
            company = await self.company_service.create_company(request.company, actor)
            created.append("company")
        else:
            self._ensure_same_onboarding(company, admin_email)
            if actor is not None:
                self.company_service.scope.require(
                    actor,
                    ResourceDescriptor(
                        category=ResourceCategory.COMPANIES.value,
                        company_id=company.id,
                    ),
                    Action.UPDATE,
                )

        branch = await self.company_service.branch_repo.get_by_code(
            company.id, branch_code.value
        )
        if branch is None:
            branch = await self.company_service.create_branch(
                BranchCreate(
                    company_id=company.id,
                    name=request.branch_name or self._settings.main_branch_name,
                    code=branch_code.value,
                )
            )
            created.append("branch")

        admin = await self.account_service.account_repo.get_by_email(admin_email.value)
        if admin is None:
            admin = await self.account_service.create_account(
                AccountCreate(
                    first_name=request.company.administrator_first_name,
                    last_name=request.company.administrator_last_name,
                    email=admin_email.value,
                    password=request.admin_password,
                    role=Role.COMPANY_ADMIN.value,
                    company_id=company.id,
                    branch_id=branch.id,
                    phone=request.company.administrator_phone,
                )
            )
            created.append("administrator")
        else:
            self._ensure_reusable_admin(admin, company)

        linked = await self.company_service.link_administrator(company.id, admin.id)
        if created:
            logger.info(
                "Onboarded company %s (created: %s)", linked.id, ", ".join(created)
            )
        else:
            logger.info("Onboarding re-run for company %s was a no-op", linked.id)
        return OnboardingResult(
            company=linked,
            branch=branch,
            administrator=admin,
            created=tuple(created),
        )

    @staticmethod
    def _ensure_same_onboarding(company: CompanyEntity, admin_email: EmailAddress) -> None:
        descriptor = company.administrator
        if descriptor is not None and descriptor.email != admin_email:
            raise CompanyAlreadyExistsException(company.tax_id.value)

    @staticmethod
    def _ensure_reusable_admin(admin: AccountEntity, company: CompanyEntity) -> None:
        if admin.company_id != company.id or admin.role is not Role.COMPANY_ADMIN:
            raise DuplicateEmailException()
