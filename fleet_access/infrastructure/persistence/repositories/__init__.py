"""SQLAlchemy repository implementations of the application ports."""

from fleet_access.infrastructure.persistence.repositories.account_repo import (
    AccountRepository,
)
from fleet_access.infrastructure.persistence.repositories.branch_repo import (
    BranchRepository,
)
from fleet_access.infrastructure.persistence.repositories.company_repo import (
    CompanyRepository,
)

__all__ = ["AccountRepository", "BranchRepository", "CompanyRepository"]
