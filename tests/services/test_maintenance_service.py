"""Tests for MaintenanceService factory reset."""

from flask import Flask
from sqlalchemy import func, select

from petfeeder.consts import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from petfeeder.models.alert import Alert
from petfeeder.models.history import HistoryEntry
from petfeeder.models.schedule import Schedule
from petfeeder.models.user import User
from petfeeder.services.container import ServiceContainer
from petfeeder.services.device_state import DeviceState


def _count(container: ServiceContainer, model: type) -> int:
    session = container.db_session()
    return session.scalar(select(func.count()).select_from(model)) or 0


class TestFactoryReset:
    """Tests for restoring the freshly installed state."""

    def test_clears_data_and_restores_defaults(
        self, app: Flask, container: ServiceContainer
    ) -> None:
        with app.app_context():
            container.schedule_service().create_schedule("2h", "06:00", 1, "daily")
            container.settings_service().set("CURRENT_WEIGHT", "1000")
            container.feed_service().dispense(2, "Manual", 20)
            container.hardware_service().ingest(battery=40)
            container.feed_service().recalibrate()

            container.maintenance_service().factory_reset()

            assert _count(container, Schedule) == 0
            assert _count(container, HistoryEntry) == 0
            assert _count(container, Alert) == 0
            assert container.settings_service().load_state() == DeviceState.defaults()

    def test_restores_admin_password(self, app: Flask, container: ServiceContainer) -> None:
        with app.app_context():
            auth = container.auth_service()
            admin_id = container.db_session().scalars(select(User.id)).one()
            auth.change_password(admin_id, DEFAULT_ADMIN_PASSWORD, "Feeder2026")

            container.maintenance_service().factory_reset()

            assert auth.authenticate(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)
            assert _count(container, User) == 1
