"""Create the fleet access tables in the configured database.

Usage:
    python -m scripts.init_db
Requires DATABASE_URL (postgresql+asyncpg://...).
"""

import asyncio
import sys

from fleet_access.domain.exceptions import SqlNotConfiguredException
from fleet_access.infrastructure.persistence.database import dispose_engine, init_models
from fleet_access.shared.telemetry import setup_logging


async def main() -> None:
    setup_logging()
    try:
        await init_models()
    except SqlNotConfiguredException:
        print("DATABASE_URL is not set", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()
    print("Schema created")


if __name__ == "__main__":
    asyncio.run(main())
