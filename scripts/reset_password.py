"""Reset an account's password and clear its lockout counters.

Usage:
    python -m scripts.reset_password <account_id> <new_password>
"""

import asyncio
import sys

from fleet_access.application.services import AccountService
from fleet_access.domain.exceptions import FleetAccessException
from fleet_access.infrastructure.persistence import database
from fleet_access.infrastructure.persistence.repositories import (
    AccountRepository,
    BranchRepository,
    CompanyRepository,
)
from fleet_access.infrastructure.security.password import BcryptCredentialStore
from fleet_access.shared.telemetry import setup_logging


async def main() -> None:
    """Reset password for account_id."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.reset_password <account_id> <new_password>",
            file=sys.stderr,
        )
        sys.exit(1)
    account_id = sys.argv[1]
    new_password = sys.argv[2]

    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL is not set", file=sys.stderr)
        sys.exit(1)

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                service = AccountService(
                    account_repo=AccountRepository(session),
                    company_repo=CompanyRepository(session),
                    branch_repo=BranchRepository(session),
                    credential_store=BcryptCredentialStore(),
                )
                await service.reset_password(account_id, new_password)
    except FleetAccessException as e:
        print(f"Password reset failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()
    print(f"Password reset for account {account_id}")


if __name__ == "__main__":
    asyncio.run(main())
