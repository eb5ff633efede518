"""Process-wide logging configuration (stdlib logging to stdout)."""

import logging
import sys

from fleet_access.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure the root logger once at startup.

    DEBUG when settings.debug is set, INFO otherwise. SQLAlchemy engine
    logging follows DATABASE_ECHO. Account ids and emails are logged;
    secrets and digests never are.
    """
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
