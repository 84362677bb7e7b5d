"""Tests for migrations and database helpers."""

from flask import Flask
from sqlalchemy import inspect, select

from petfeeder.consts import DEFAULT_ADMIN_USERNAME
from petfeeder.database import (
    check_db_connection,
    get_current_revision,
    get_pending_migrations,
)
from petfeeder.extensions import db
from petfeeder.models.user import User
from petfeeder.services.container import ServiceContainer
from petfeeder.services.device_state import DeviceState


class TestMigrations:
    """Tests for the migrated schema and seed data."""

    def test_tables_exist(self, app: Flask) -> None:
        with app.app_context():
            tables = set(inspect(db.engine).get_table_names())

        assert {"users", "settings", "schedules", "history", "alerts"} <= tables

    def test_at_head(self, app: Flask) -> None:
        with app.app_context():
            assert get_current_revision() == "002"
            assert get_pending_migrations() == []

    def test_seeds_default_state(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            assert container.settings_service().load_state() == DeviceState.defaults()

    def test_seeds_admin(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            users = container.db_session().scalars(select(User)).all()

        assert [u.username for u in users] == [DEFAULT_ADMIN_USERNAME]


class TestConnectionCheck:
    """Tests for check_db_connection."""

    def test_connected(self, app: Flask) -> None:
        with app.app_context():
            assert check_db_connection() is True
