"""Plays table provisioning.

Creates the `plays` table in the configured store when it does not exist yet.
Safe to run repeatedly: an existing table is left untouched. The API server
calls `ensure_table` on startup (unless `CREATE_TABLE_ON_STARTUP=false`), and
the `playbook-provision` command runs it on its own for deployments that
provision the store ahead of time.
"""

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from .db import build_engine
from .logging_config import configure_logging
from .models import Base, PlayRecord
from .settings import get_settings

logger = logging.getLogger(__name__)


def ensure_table(engine: Engine) -> bool:
    """Create the plays table if it is missing.

    Args:
        engine: Engine bound to the play store.

    Returns:
        bool: True if the table was created, False if it already existed.
    """
    table_name = PlayRecord.__tablename__
    if inspect(engine).has_table(table_name):
        logger.info("Table %s already exists, continuing...", table_name)
        return False

    Base.metadata.create_all(engine, tables=[PlayRecord.__table__])
    logger.info("Successfully created %s table", table_name)
    return True


def main() -> int:
    """Provision the plays table using settings from the environment."""
    settings = get_settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings)
    try:
        ensure_table(engine)
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
