"""Tests for HardwareService telemetry ingest."""

from datetime import UTC, datetime, timedelta

from flask import Flask
from sqlalchemy import select

from petfeeder.models.alert import Alert
from petfeeder.models.history import HistoryEntry
from petfeeder.services.container import ServiceContainer
from petfeeder.services.device_state import (
    KEY_BATTERY_LEVEL,
    KEY_CURRENT_WEIGHT,
    KEY_IS_CONNECTED,
    KEY_LAST_HEARTBEAT,
    parse_timestamp,
)


class TestHardwareServiceIngest:
    """Tests for applying device reports."""

    def test_weight_and_battery(self, app: Flask, container: ServiceContainer) -> None:
        """Both readings are stored and reported in order."""
        with app.app_context():
            updated = container.hardware_service().ingest(weight=850, battery=64)

            settings = container.settings_service()
            assert updated == ["weight", "battery"]
            assert settings.get(KEY_CURRENT_WEIGHT) == "850"
            assert settings.get(KEY_BATTERY_LEVEL) == "64"

    def test_empty_report_is_still_a_heartbeat(
        self, app: Flask, container: ServiceContainer
    ) -> None:
        """A report without readings marks the device connected and fresh."""
        with app.app_context():
            before = datetime.now(UTC).replace(microsecond=0)

            updated = container.hardware_service().ingest()

            settings = container.settings_service()
            heartbeat = parse_timestamp(settings.get(KEY_LAST_HEARTBEAT))
            assert updated == []
            assert settings.get(KEY_IS_CONNECTED) == "1"
            assert settings.get(KEY_CURRENT_WEIGHT) == "0"
            assert heartbeat is not None
            assert before <= heartbeat <= datetime.now(UTC) + timedelta(seconds=1)

    def test_dispensed_records_history_and_alert(
        self, app: Flask, container: ServiceContainer
    ) -> None:
        """Device-initiated feeds are logged as successful scheduled feeds."""
        with app.app_context():
            container.hardware_service().ingest(dispensed=3)

            session = container.db_session()
            history = session.scalars(select(HistoryEntry)).all()
            alerts = session.scalars(select(Alert)).all()

            assert [(h.rounds, h.type, h.status) for h in history] == [
                (3, "Scheduled", "Success")
            ]
            assert [(a.alert_type, a.message) for a in alerts] == [
                ("Info", "Device dispensed 3 rounds automatically.")
            ]

    def test_dispensed_with_explicit_type(
        self, app: Flask, container: ServiceContainer
    ) -> None:
        """An explicit feed type is stored on the history row."""
        with app.app_context():
            container.hardware_service().ingest(dispensed=1, feed_type="Manual")

            entry = container.db_session().scalars(select(HistoryEntry)).one()
            assert entry.type == "Manual"

    def test_weight_is_not_checked_against_dispensed(
        self, app: Flask, container: ServiceContainer
    ) -> None:
        """Measured weight replaces the stored value as reported."""
        with app.app_context():
            container.settings_service().set(KEY_CURRENT_WEIGHT, "10")

            container.hardware_service().ingest(weight=900, dispensed=2)

            assert container.settings_service().get(KEY_CURRENT_WEIGHT) == "900"
