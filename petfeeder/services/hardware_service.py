"""Hardware ingest: applies telemetry reported by the feeder."""

import logging

from petfeeder.models.alert import AlertType
from petfeeder.models.history import FeedStatus, FeedType
from petfeeder.services.alert_service import AlertService
from petfeeder.services.device_state import (
    KEY_BATTERY_LEVEL,
    KEY_CURRENT_WEIGHT,
    KEY_IS_CONNECTED,
    KEY_LAST_HEARTBEAT,
    format_timestamp,
    utcnow,
)
from petfeeder.services.history_service import HistoryService
from petfeeder.services.settings_service import SettingsService

logger = logging.getLogger(__name__)


class HardwareService:
    """Applies device reports to settings, history and alerts.

    This is the device-initiated counterpart of a manual dispense: the
    feeder reports what it measured and what it fed on its own.
    """

    def __init__(
        self,
        settings_service: SettingsService,
        history_service: HistoryService,
        alert_service: AlertService,
    ) -> None:
        self.settings_service = settings_service
        self.history_service = history_service
        self.alert_service = alert_service

    def ingest(
        self,
        weight: int | None = None,
        battery: int | None = None,
        dispensed: int | None = None,
        feed_type: str | None = None,
    ) -> list[str]:
        """Apply a telemetry report.

        Every report marks the device connected and refreshes the heartbeat,
        whichever optional fields it carries.

        Args:
            weight: Measured hopper weight in grams
            battery: Battery level in percent
            dispensed: Rounds the device fed on its own
            feed_type: History type for the dispensed rounds (default Scheduled)

        Returns:
            Names of the readings applied, in the order weight, battery
        """
        updated: list[str] = []

        if weight is not None:
            self.settings_service.set(KEY_CURRENT_WEIGHT, str(weight))
            updated.append("weight")

        if battery is not None:
            self.settings_service.set(KEY_BATTERY_LEVEL, str(battery))
            updated.append("battery")

        self.settings_service.set(KEY_IS_CONNECTED, "1")
        self.settings_service.set(KEY_LAST_HEARTBEAT, format_timestamp(utcnow()))

        if dispensed is not None:
            self.history_service.record(
                dispensed, feed_type or FeedType.SCHEDULED, FeedStatus.SUCCESS
            )
            self.alert_service.create_alert(
                AlertType.INFO, f"Device dispensed {dispensed} rounds automatically."
            )

        logger.info(
            "Hardware update: updated=%s dispensed=%s", updated, dispensed
        )
        return updated
