"""Create the first super_admin account (no company or branch).

Usage:
    python -m scripts.seed_super_admin <email> <first_name> <last_name> [password]
When password is omitted a random one is generated and printed once.
Requires DATABASE_URL; tables are created if missing.
"""

import asyncio
import secrets
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
    """Create a super_admin from argv."""
    if len(sys.argv) < 4:
        print(
            "Usage: python -m scripts.seed_super_admin "
            "<email> <first_name> <last_name> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, first_name, last_name = sys.argv[1:4]
    generated = len(sys.argv) < 5
    password = secrets.token_urlsafe(16) if generated else sys.argv[4]

    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL is not set", file=sys.stderr)
        sys.exit(1)
    await database.init_models()

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                service = AccountService(
                    account_repo=AccountRepository(session),
                    company_repo=CompanyRepository(session),
                    branch_repo=BranchRepository(session),
                    credential_store=BcryptCredentialStore(),
                )
                account = await service.bootstrap_super_admin(
                    first_name, last_name, email, password
                )
    except FleetAccessException as e:
        print(f"Could not create super_admin: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()

    print(f"Created super_admin {account.id} ({account.email.value})")
    if generated:
        print(f"Generated password (shown once): {password}")


if __name__ == "__main__":
    asyncio.run(main())
