"""Company and branch application service.

Company creation is phase one of the bootstrap protocol: the company is
stored with an administrator descriptor whose account back-reference is
empty. link_administrator is phase two and is idempotent.
"""

from __future__ import annotations

import logging

from fleet_access.application.dtos.account import AccountSummary
from fleet_access.application.dtos.authorization import ResourceDescriptor
from fleet_access.application.dtos.company import BranchCreate, CompanyCreate
from fleet_access.application.interfaces import (
    IAccountRepository,
    IBranchRepository,
    ICompanyRepository,
)
from fleet_access.application.services.tenancy_scope import TenancyScopeValidator
from fleet_access.domain.entities import BranchEntity, CompanyEntity
from fleet_access.domain.enums import Action, ResourceCategory, Role
from fleet_access.domain.exceptions import (
    CompanyAlreadyExistsException,
    DuplicateBranchCodeException,
    PermissionDeniedError,
    ResourceNotFoundException,
    ValidationException,
)
from fleet_access.domain.value_objects import (
    BranchCode,
    CompanyAdministrator,
    ContactInfo,
    EmailAddress,
    TaxId,
)
from fleet_access.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class CompanyService:
    """Create companies and branches, link administrators, toggle active flags."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        branch_repo: IBranchRepository,
        account_repo: IAccountRepository,
        scope_validator: TenancyScopeValidator | None = None,
    ) -> None:
        self.company_repo = company_repo
        self.branch_repo = branch_repo
        self.account_repo = account_repo
        self.scope = scope_validator or TenancyScopeValidator()

    def _authorize(
        self,
        actor: AccountSummary | None,
        category: ResourceCategory,
        action: Action,
        company_id: str | None,
        branch_id: str | None = None,
    ) -> None:
        if actor is None:
            return
        self.scope.require(
            actor,
            ResourceDescriptor(
                category=category.value, company_id=company_id, branch_id=branch_id
            ),
            action,
        )

    async def get_company(self, company_id: str) -> CompanyEntity:
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise ResourceNotFoundException("company", company_id)
        return company

    async def get_branch(self, branch_id: str) -> BranchEntity:
        branch = await self.branch_repo.get_by_id(branch_id)
        if branch is None:
            raise ResourceNotFoundException("branch", branch_id)
        return branch

    async def create_company(
        self, data: CompanyCreate, actor: AccountSummary | None = None
    ) -> CompanyEntity:
        """Create a company with an unlinked administrator descriptor.

        Only super_admin passes the scope check (a new company belongs to
        no account's tenant yet).

        Raises:
            ValidationException: Invalid tax id or administrator fields.
            CompanyAlreadyExistsException: Tax id already registered.
        """
        self._authorize(actor, ResourceCategory.COMPANIES, Action.CREATE, None)
        try:
            tax_id = TaxId(data.tax_id)
            administrator = CompanyAdministrator(
                first_name=data.administrator_first_name,
                last_name=data.administrator_last_name,
                email=EmailAddress(data.administrator_email),
                phone=data.administrator_phone,
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e
        if await self.company_repo.get_by_tax_id(tax_id.value) is not None:
            raise CompanyAlreadyExistsException(tax_id.value)
        company = CompanyEntity(
            id=generate_cuid(),
            tax_id=tax_id,
            name=data.name.strip(),
            contact=ContactInfo.from_dict(data.contact),
            administrator=administrator,
        )
        created = await self.company_repo.add(company)
        logger.info("Created company %s (tax id %s)", created.id, tax_id.value)
        return created

    async def link_administrator(
        self,
        company_id: str,
        account_id: str,
        actor: AccountSummary | None = None,
    ) -> CompanyEntity:
        """Phase two of bootstrap: point the company administrator at account_id.

        Re-linking the same account is a no-op.

        Raises:
            ResourceNotFoundException: Company or account missing.
            ValidationException: Account belongs to another company, or the
                company is already linked to a different account.
        """
        company = await self.get_company(company_id)
        self._authorize(actor, ResourceCategory.COMPANIES, Action.UPDATE, company.id)
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise ResourceNotFoundException("account", account_id)
        if account.company_id != company.id:
            raise ValidationException(
                "Administrator account must belong to the company",
                field="account_id",
            )
        try:
            changed = company.link_administrator(account_id)
        except ValueError as e:
            raise ValidationException(str(e), field="account_id") from e
        if not changed:
            logger.debug(
                "Company %s already linked to administrator %s", company.id, account_id
            )
            return company
        updated = await self.company_repo.update(company)
        logger.info("Linked company %s administrator to account %s", company.id, account_id)
        return updated

    async def set_company_active(
        self, company_id: str, is_active: bool, actor: AccountSummary | None = None
    ) -> CompanyEntity:
        """Activate or deactivate a company. Accounts are not cascaded.

        Only super_admin may toggle a tenant: companies:update lets a
        company_admin edit its company, not switch it off or back on.
        """
        company = await self.get_company(company_id)
        self._authorize(actor, ResourceCategory.COMPANIES, Action.UPDATE, company.id)
        if actor is not None and actor.role is not Role.SUPER_ADMIN:
            raise PermissionDeniedError(
                ResourceCategory.COMPANIES.value, "activate/deactivate"
            )
        if company.is_active == is_active:
            return company
        if is_active:
            company.activate()
        else:
            company.deactivate()
        updated = await self.company_repo.update(company)
        logger.info(
            "Company %s %s", company.id, "activated" if is_active else "deactivated"
        )
        return updated

    async def create_branch(
        self, data: BranchCreate, actor: AccountSummary | None = None
    ) -> BranchEntity:
        """Create a branch; code is upper-cased and unique within the company."""
        company = await self.get_company(data.company_id)
        self._authorize(actor, ResourceCategory.BRANCHES, Action.CREATE, company.id)
        try:
            code = BranchCode(data.code)
        except ValueError as e:
            raise ValidationException(str(e), field="code") from e
        if await self.branch_repo.get_by_code(company.id, code.value) is not None:
            raise DuplicateBranchCodeException(company.id, code.value)
        branch = BranchEntity(
            id=generate_cuid(),
            company_id=company.id,
            name=data.name.strip(),
            code=code,
            contact=ContactInfo.from_dict(data.contact),
        )
        created = await self.branch_repo.add(branch)
        logger.info(
            "Created branch %s (%s) in company %s", created.id, code.value, company.id
        )
        return created

    async def set_branch_active(
        self, branch_id: str, is_active: bool, actor: AccountSummary | None = None
    ) -> BranchEntity:
        """Activate or deactivate a branch."""
        branch = await self.get_branch(branch_id)
        self._authorize(
            actor, ResourceCategory.BRANCHES, Action.UPDATE, branch.company_id, branch.id
        )
        if branch.is_active == is_active:
            return branch
        if is_active:
            branch.activate()
        else:
            branch.deactivate()
        return await self.branch_repo.update(branch)
