"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fleet_access.application.dtos.account import LoginState
    from fleet_access.domain.entities import AccountEntity, BranchEntity, CompanyEntity
    from fleet_access.domain.enums import Role


# Account repository interface
class IAccountRepository(Protocol):
    """Protocol for account repository (DIP)."""

    async def get_by_id(self, account_id: str) -> AccountEntity | None:
        """Return account by id, or None."""

    async def get_by_email(self, email: str) -> AccountEntity | None:
        """Return account by normalized (lower-case) email, or None."""

    async def add(self, account: AccountEntity) -> AccountEntity:
        """Insert a new account. Raises DuplicateEmailException if the email exists."""

    async def update(self, account: AccountEntity) -> AccountEntity:
        """Persist profile fields (role, permissions, vehicle types, password, active, names).

        Does not write failed_attempts, lock_expires_at, last_login_at, or
        version; those change only through save_login_state.
        """

    async def save_login_state(
        self,
        account_id: str,
        expected_version: int,
        state: LoginState,
        last_login_at: datetime | None = None,
    ) -> bool:
        """Compare-and-swap the lockout counters.

        Writes state (and last_login_at when given) and increments version only
        if the stored version equals expected_version.

        Returns:
            True if the row was updated; False if another writer won the race.
        """

    async def count_active_by_company(self, company_id: str) -> int:
        """Return the number of active accounts in the company."""

    async def list_accounts(
        self,
        *,
        company_id: str | None = None,
        branch_id: str | None = None,
        role: Role | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[AccountEntity], int]:
        """Return one page of matching accounts (newest first) and the total match count.

        None filters are not applied.
        """


# Company repository interface
class ICompanyRepository(Protocol):
    """Protocol for company repository (DIP)."""

    async def get_by_id(self, company_id: str) -> CompanyEntity | None:
        """Return company by id, or None."""

    async def get_by_tax_id(self, tax_id: str) -> CompanyEntity | None:
        """Return company by normalized (upper-case) tax id, or None."""

    async def add(self, company: CompanyEntity) -> CompanyEntity:
        """Insert a company. Raises CompanyAlreadyExistsException on duplicate tax id."""

    async def update(self, company: CompanyEntity) -> CompanyEntity:
        """Persist name, contact, active flag, and administrator descriptor."""


# Branch repository interface
class IBranchRepository(Protocol):
    """Protocol for branch repository (DIP)."""

    async def get_by_id(self, branch_id: str) -> BranchEntity | None:
        """Return branch by id, or None."""

    async def get_by_code(self, company_id: str, code: str) -> BranchEntity | None:
        """Return the branch with code (upper-case) in the company, or None."""

    async def add(self, branch: BranchEntity) -> BranchEntity:
        """Insert a branch. Raises DuplicateBranchCodeException on duplicate (company, code)."""

    async def update(self, branch: BranchEntity) -> BranchEntity:
        """Persist name, contact, and active flag."""
