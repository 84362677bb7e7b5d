"""Seed default settings and the admin account.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

Settings rows are updated in place afterwards and never deleted, so every
known key must exist from the start.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from werkzeug.security import generate_password_hash

from alembic import op
from petfeeder.consts import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from petfeeder.services.device_state import DeviceState

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

settings_table = sa.table(
    "settings",
    sa.column("key", sa.String),
    sa.column("value", sa.Text),
)

users_table = sa.table(
    "users",
    sa.column("username", sa.String),
    sa.column("password_hash", sa.String),
)


def upgrade() -> None:
    op.bulk_insert(
        settings_table,
        [
            {"key": key, "value": value}
            for key, value in DeviceState.defaults().to_settings().items()
        ],
    )
    op.bulk_insert(
        users_table,
        [
            {
                "username": DEFAULT_ADMIN_USERNAME,
                "password_hash": generate_password_hash(DEFAULT_ADMIN_PASSWORD),
            }
        ],
    )


def downgrade() -> None:
    op.execute(
        users_table.delete().where(users_table.c.username == DEFAULT_ADMIN_USERNAME)
    )
    op.execute(settings_table.delete())
