"""Application interfaces (ports). Infrastructure implements these (DIP)."""

from fleet_access.application.interfaces.repositories import (
    IAccountRepository,
    IBranchRepository,
    ICompanyRepository,
)
from fleet_access.application.interfaces.services import ICredentialStore

__all__ = [
    "IAccountRepository",
    "IBranchRepository",
    "ICompanyRepository",
    "ICredentialStore",
]
