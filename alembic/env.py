"""Alembic environment.

Migrations always run inside a Flask application context (see
petfeeder.database.upgrade_database), so the engine is taken from
Flask-SQLAlchemy rather than from an alembic.ini URL.
"""

from alembic import context

from petfeeder.extensions import db

target_metadata = db.metadata


def run_migrations_online() -> None:
    """Run migrations against the application's engine."""
    connectable = db.engine

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    raise RuntimeError("Offline migrations are not supported")

run_migrations_online()
