"""Setting model for persistent key-value device state."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from petfeeder.extensions import db


class Setting(db.Model):  # type: ignore[name-defined]
    """Key-value setting storage for feeder state.

    Holds the hopper weight, battery level, connection flag and heartbeat
    reported by the device. Keys are uppercase like environment variables
    (e.g., CURRENT_WEIGHT). Values are stored as text; callers go through
    DeviceState for typed access.
    """

    __tablename__ = "settings"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Setting key={self.key}>"
