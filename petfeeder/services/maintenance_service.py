"""Factory reset of the feeder's stored data."""

import logging

from sqlalchemy import delete
from sqlalchemy.orm import Session

from petfeeder.models.alert import Alert
from petfeeder.models.history import HistoryEntry
from petfeeder.models.schedule import Schedule
from petfeeder.services.auth_service import AuthService
from petfeeder.services.device_state import DeviceState
from petfeeder.services.settings_service import SettingsService

logger = logging.getLogger(__name__)


class MaintenanceService:
    """Destructive maintenance operations shared by the API and the CLI."""

    def __init__(
        self,
        db: Session,
        settings_service: SettingsService,
        auth_service: AuthService,
    ) -> None:
        self.db = db
        self.settings_service = settings_service
        self.auth_service = auth_service

    def factory_reset(self) -> None:
        """Return the feeder to its freshly installed state.

        Clears schedules, history and alerts, writes default values to every
        setting (rows are kept) and restores the administrator password.
        """
        for model in (Schedule, HistoryEntry, Alert):
            result = self.db.execute(delete(model))
            logger.debug("Deleted %d rows from %s", result.rowcount, model.__tablename__)

        self.settings_service.save_state(DeviceState.defaults())
        self.auth_service.reset_admin_password()

        logger.warning("Factory reset complete")
