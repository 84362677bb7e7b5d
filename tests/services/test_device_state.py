"""Tests for the typed device state and status derivation."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from petfeeder.services.device_state import (
    DeviceState,
    derive_status,
    format_timestamp,
    parse_int,
    parse_timestamp,
)

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)
WINDOW = timedelta(seconds=30)


class TestParsing:
    """Tests for the storage parsers."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("42", 42), (" 7 ", 7), ("-3", -3), ("", 0), ("abc", 0), ("12.5", 0), (None, 0)],
    )
    def test_parse_int_falls_back_to_zero(self, raw, expected):
        assert parse_int(raw) == expected

    def test_timestamp_round_trip(self):
        value = datetime(2026, 10, 19, 8, 30, 15, tzinfo=UTC)
        assert format_timestamp(value) == "2026-10-19 08:30:15"
        assert parse_timestamp("2026-10-19 08:30:15") == value

    def test_format_converts_to_utc(self):
        plus_two = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(plus_two) == "2026-10-19 10:00:00"

    def test_format_none_is_empty(self):
        assert format_timestamp(None) == ""

    @pytest.mark.parametrize("raw", [None, "", "yesterday", "2026-13-01 00:00:00"])
    def test_parse_timestamp_rejects_garbage(self, raw):
        assert parse_timestamp(raw) is None


class TestDeviceState:
    """Tests for DeviceState serialization."""

    def test_defaults_serialize_to_seed_values(self):
        assert DeviceState.defaults().to_settings() == {
            "CURRENT_WEIGHT": "0",
            "BATTERY_LEVEL": "0",
            "IS_CONNECTED": "0",
            "LAST_HEARTBEAT": "",
            "LAST_CALIBRATION": "",
            "WIFI_SSID": "Not Set",
        }

    def test_from_settings_parses_typed_values(self):
        state = DeviceState.from_settings(
            {
                "CURRENT_WEIGHT": "850",
                "BATTERY_LEVEL": "76",
                "IS_CONNECTED": "1",
                "LAST_HEARTBEAT": "2026-10-19 11:59:50",
                "WIFI_SSID": "HomeNet",
            }
        )

        assert state.weight == 850
        assert state.battery == 76
        assert state.connected is True
        assert state.last_heartbeat == datetime(2026, 10, 19, 11, 59, 50, tzinfo=UTC)
        assert state.last_calibration is None
        assert state.wifi_ssid == "HomeNet"

    def test_from_settings_tolerates_bad_values(self):
        state = DeviceState.from_settings(
            {"CURRENT_WEIGHT": "lots", "BATTERY_LEVEL": "", "IS_CONNECTED": "yes"}
        )

        assert state.weight == 0
        assert state.battery == 0
        assert state.connected is False
        assert state.wifi_ssid == "Not Set"


class TestDeriveStatus:
    """Tests for the online/offline rule."""

    def _state(self, connected: bool, age: timedelta | None) -> DeviceState:
        return DeviceState(
            weight=500,
            battery=80,
            connected=connected,
            last_heartbeat=None if age is None else NOW - age,
        )

    @pytest.mark.parametrize("age_seconds", [0, 1, 29, 30])
    def test_online_when_connected_and_fresh(self, age_seconds):
        status = derive_status(self._state(True, timedelta(seconds=age_seconds)), NOW, WINDOW)
        assert status.online is True

    @pytest.mark.parametrize("age_seconds", [31, 300, 86400])
    def test_offline_when_heartbeat_stale(self, age_seconds):
        status = derive_status(self._state(True, timedelta(seconds=age_seconds)), NOW, WINDOW)
        assert status.online is False

    def test_offline_when_flag_cleared_even_if_fresh(self):
        status = derive_status(self._state(False, timedelta(seconds=1)), NOW, WINDOW)
        assert status.online is False

    def test_offline_without_heartbeat(self):
        status = derive_status(self._state(True, None), NOW, WINDOW)
        assert status.online is False
        assert status.last_heartbeat is None

    def test_carries_weight_and_battery(self):
        status = derive_status(self._state(False, None), NOW, WINDOW)
        assert status.weight == 500
        assert status.battery == 80
