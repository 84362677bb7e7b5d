"""Database connectivity and Alembic migration helpers."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from petfeeder.extensions import db

logger = logging.getLogger(__name__)

# Migrations live next to the package (alembic/ at the project root)
_MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "alembic"


def _alembic_config() -> Config:
    """Build an Alembic config pointing at the project migrations."""
    config = Config()
    config.set_main_option("script_location", str(_MIGRATIONS_DIR))
    return config


def check_db_connection() -> bool:
    """Check whether the database accepts connections.

    Must be called inside an application context.

    Returns:
        True if a trivial query succeeds, False otherwise
    """
    try:
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection check failed: %s", e)
        return False


def get_current_revision() -> str | None:
    """Return the revision the database is currently at, or None."""
    with db.engine.connect() as connection:
        context = MigrationContext.configure(connection)
        return context.get_current_revision()


def get_pending_migrations() -> list[str]:
    """Return revisions not yet applied, oldest first."""
    script = ScriptDirectory.from_config(_alembic_config())
    current = get_current_revision()

    pending = []
    for revision in script.walk_revisions(base="base", head="heads"):
        if revision.revision == current:
            break
        pending.append(revision.revision)

    pending.reverse()
    return pending


def upgrade_database(recreate: bool = False) -> list[tuple[str, str]]:
    """Apply all pending migrations.

    Args:
        recreate: Drop all tables (including the Alembic version table) first

    Returns:
        List of (revision, description) tuples that were applied
    """
    if recreate:
        logger.warning("Dropping all tables before migrating")
        db.drop_all()
        with db.engine.begin() as connection:
            connection.execute(text("DROP TABLE IF EXISTS alembic_version"))

    config = _alembic_config()
    script = ScriptDirectory.from_config(config)
    pending = get_pending_migrations()

    command.upgrade(config, "head")

    applied = []
    for rev in pending:
        revision = script.get_revision(rev)
        description = (revision.doc or "").strip() if revision else ""
        applied.append((rev, description))
        logger.info("Applied migration %s: %s", rev, description)

    return applied
