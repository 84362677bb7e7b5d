"""Tests for SettingsService."""

from datetime import UTC, datetime

from flask import Flask

from petfeeder.services.container import ServiceContainer
from petfeeder.services.device_state import (
    KEY_BATTERY_LEVEL,
    KEY_CURRENT_WEIGHT,
    KEY_IS_CONNECTED,
    KEY_LAST_HEARTBEAT,
    KEY_WIFI_SSID,
    DeviceState,
)


class TestSettingsServiceGetSet:
    """Tests for plain key-value access."""

    def test_seeded_defaults_present(self, app: Flask, container: ServiceContainer) -> None:
        """A fresh database carries the default settings rows."""
        with app.app_context():
            service = container.settings_service()

            assert service.get(KEY_CURRENT_WEIGHT) == "0"
            assert service.get(KEY_BATTERY_LEVEL) == "0"
            assert service.get(KEY_IS_CONNECTED) == "0"
            assert service.get(KEY_LAST_HEARTBEAT) == ""
            assert service.get(KEY_WIFI_SSID) == "Not Set"

    def test_get_missing_returns_default(self, app: Flask, container: ServiceContainer) -> None:
        """Unknown keys fall back to the given default."""
        with app.app_context():
            service = container.settings_service()

            assert service.get("NO_SUCH_KEY") is None
            assert service.get("NO_SUCH_KEY", "fallback") == "fallback"

    def test_set_creates_and_updates(self, app: Flask, container: ServiceContainer) -> None:
        """Set inserts a new row and overwrites an existing one."""
        with app.app_context():
            service = container.settings_service()

            service.set("FEEDER_NAME", "kitchen")
            assert service.get("FEEDER_NAME") == "kitchen"

            service.set("FEEDER_NAME", "hallway")
            assert service.get("FEEDER_NAME") == "hallway"

    def test_keys_are_case_insensitive(self, app: Flask, container: ServiceContainer) -> None:
        """Keys are normalized to uppercase on read and write."""
        with app.app_context():
            service = container.settings_service()

            service.set("current_weight", "321")

            assert service.get(KEY_CURRENT_WEIGHT) == "321"
            assert service.get("Current_Weight") == "321"

    def test_delete(self, app: Flask, container: ServiceContainer) -> None:
        """Delete removes the row and reports whether it existed."""
        with app.app_context():
            service = container.settings_service()
            service.set("TEMP", "x")

            assert service.delete("TEMP") is True
            assert service.get("TEMP") is None
            assert service.delete("TEMP") is False

    def test_get_all_is_sorted_by_key(self, app: Flask, container: ServiceContainer) -> None:
        """get_all returns every row ordered by key."""
        with app.app_context():
            values = container.settings_service().get_all()

            assert list(values) == sorted(values)
            assert KEY_CURRENT_WEIGHT in values


class TestSettingsServiceState:
    """Tests for typed DeviceState access."""

    def test_load_default_state(self, app: Flask, container: ServiceContainer) -> None:
        """Seeded rows load as the default state."""
        with app.app_context():
            state = container.settings_service().load_state()

            assert state == DeviceState.defaults()

    def test_save_and_load_state(self, app: Flask, container: ServiceContainer) -> None:
        """Saved state is read back field by field."""
        with app.app_context():
            service = container.settings_service()
            heartbeat = datetime(2026, 10, 19, 8, 30, 0, tzinfo=UTC)

            service.save_state(
                DeviceState(
                    weight=640,
                    battery=72,
                    connected=True,
                    last_heartbeat=heartbeat,
                    wifi_ssid="home",
                )
            )
            state = service.load_state()

            assert state.weight == 640
            assert state.battery == 72
            assert state.connected is True
            assert state.last_heartbeat == heartbeat
            assert state.last_calibration is None
            assert state.wifi_ssid == "home"
            assert service.get(KEY_LAST_HEARTBEAT) == "2026-10-19 08:30:00"
