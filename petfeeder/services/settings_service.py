"""Settings service for persistent key-value device state."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from petfeeder.models.setting import Setting
from petfeeder.services.device_state import DeviceState

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for the feeder's key-value settings.

    Provides a simple get/set interface over the settings table plus typed
    access through DeviceState. Keys are uppercase like environment variables.
    Reads always select the value column so they see the latest committed
    data rather than a stale identity-map object.
    """

    def __init__(self, db: Session) -> None:
        """Initialize settings service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a setting value.

        Args:
            key: Setting key (will be uppercased)
            default: Default value if setting doesn't exist

        Returns:
            Setting value or default
        """
        key = key.upper()
        stmt = select(Setting.value).where(Setting.key == key)
        value = self.db.scalars(stmt).first()

        if value is None:
            return default

        return value

    def set(self, key: str, value: str) -> None:
        """Set a setting value.

        Creates the setting if it doesn't exist, updates if it does.

        Args:
            key: Setting key (will be uppercased)
            value: Setting value
        """
        key = key.upper()
        stmt = select(Setting).where(Setting.key == key)
        setting = self.db.scalars(stmt).first()

        if setting is None:
            setting = Setting(key=key, value=value)
            self.db.add(setting)
            logger.debug("Created setting %s", key)
        else:
            setting.value = value
            logger.debug("Updated setting %s", key)

        self.db.flush()

    def set_many(self, values: dict[str, str]) -> None:
        """Set several settings in one flush."""
        for key, value in values.items():
            self.set(key, value)

    def delete(self, key: str) -> bool:
        """Delete a setting.

        Args:
            key: Setting key (will be uppercased)

        Returns:
            True if setting was deleted, False if it didn't exist
        """
        key = key.upper()
        stmt = select(Setting).where(Setting.key == key)
        setting = self.db.scalars(stmt).first()

        if setting is None:
            return False

        self.db.delete(setting)
        self.db.flush()
        logger.debug("Deleted setting %s", key)
        return True

    def get_all(self) -> dict[str, str]:
        """Return every stored setting as a key to value mapping."""
        stmt = select(Setting.key, Setting.value).order_by(Setting.key)
        return {key: value for key, value in self.db.execute(stmt).all()}

    def load_state(self) -> DeviceState:
        """Read the typed device state."""
        return DeviceState.from_settings(self.get_all())

    def save_state(self, state: DeviceState) -> None:
        """Write every field of the device state."""
        self.set_many(state.to_settings())
