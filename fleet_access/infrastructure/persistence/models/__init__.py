"""ORM models. Import here so Base.metadata sees every table."""

from fleet_access.infrastructure.persistence.models.account import Account
from fleet_access.infrastructure.persistence.models.branch import Branch
from fleet_access.infrastructure.persistence.models.company import Company

__all__ = ["Account", "Branch", "Company"]
