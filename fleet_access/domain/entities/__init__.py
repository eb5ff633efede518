"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from fleet_access.domain.entities.account import AccountEntity
from fleet_access.domain.entities.branch import BranchEntity
from fleet_access.domain.entities.company import CompanyEntity

__all__ = [
    "AccountEntity",
    "BranchEntity",
    "CompanyEntity",
]
