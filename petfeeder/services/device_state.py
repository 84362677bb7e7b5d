"""Typed view over the key-value settings rows.

The settings table stores every value as text. DeviceState gives those rows
named, typed fields and owns the conversion in both directions, so callers
never parse raw strings themselves.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

logger = logging.getLogger(__name__)

# Storage keys
KEY_CURRENT_WEIGHT = "CURRENT_WEIGHT"
KEY_BATTERY_LEVEL = "BATTERY_LEVEL"
KEY_IS_CONNECTED = "IS_CONNECTED"
KEY_LAST_HEARTBEAT = "LAST_HEARTBEAT"
KEY_LAST_CALIBRATION = "LAST_CALIBRATION"
KEY_WIFI_SSID = "WIFI_SSID"

DEFAULT_WIFI_SSID = "Not Set"

# Timestamps are stored as naive UTC text
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def format_timestamp(value: datetime | None) -> str:
    """Serialize a datetime to the stored UTC text form ('' for None)."""
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp, returning None when absent or malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        logger.debug("Ignoring malformed timestamp %r", value)
        return None


def parse_int(value: str | None) -> int:
    """Parse a stored integer, falling back to 0 on anything unparsable."""
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        logger.debug("Ignoring non-integer setting value %r", value)
        return 0


@dataclass
class DeviceState:
    """Feeder state as stored in the settings table."""

    weight: int = 0
    battery: int = 0
    connected: bool = False
    last_heartbeat: datetime | None = None
    last_calibration: datetime | None = None
    wifi_ssid: str = DEFAULT_WIFI_SSID

    @classmethod
    def defaults(cls) -> "DeviceState":
        """State written on first install and by factory reset."""
        return cls()

    @classmethod
    def from_settings(cls, values: dict[str, str]) -> "DeviceState":
        """Build a state from raw settings, tolerating missing or bad values."""
        return cls(
            weight=parse_int(values.get(KEY_CURRENT_WEIGHT)),
            battery=parse_int(values.get(KEY_BATTERY_LEVEL)),
            connected=parse_int(values.get(KEY_IS_CONNECTED)) == 1,
            last_heartbeat=parse_timestamp(values.get(KEY_LAST_HEARTBEAT)),
            last_calibration=parse_timestamp(values.get(KEY_LAST_CALIBRATION)),
            wifi_ssid=values.get(KEY_WIFI_SSID) or DEFAULT_WIFI_SSID,
        )

    def to_settings(self) -> dict[str, str]:
        """Serialize every field to its storage key and text value."""
        return {
            KEY_CURRENT_WEIGHT: str(self.weight),
            KEY_BATTERY_LEVEL: str(self.battery),
            KEY_IS_CONNECTED: "1" if self.connected else "0",
            KEY_LAST_HEARTBEAT: format_timestamp(self.last_heartbeat),
            KEY_LAST_CALIBRATION: format_timestamp(self.last_calibration),
            KEY_WIFI_SSID: self.wifi_ssid,
        }


@dataclass
class DeviceStatus:
    """Status snapshot shown in the dashboard."""

    online: bool
    weight: int
    battery: int
    last_heartbeat: datetime | None


def derive_status(
    state: DeviceState, now: datetime, staleness_window: timedelta
) -> DeviceStatus:
    """Reduce stored state to a status snapshot.

    The connected flag is only a hint: the device counts as online when the
    flag is set and the last heartbeat is no older than the staleness window.
    A missing heartbeat always means offline.

    Args:
        state: Current device state
        now: Aware reference time
        staleness_window: Maximum heartbeat age for the device to be online

    Returns:
        DeviceStatus snapshot
    """
    online = False
    if state.connected and state.last_heartbeat is not None:
        online = now - state.last_heartbeat <= staleness_window

    return DeviceStatus(
        online=online,
        weight=state.weight,
        battery=state.battery,
        last_heartbeat=state.last_heartbeat,
    )
