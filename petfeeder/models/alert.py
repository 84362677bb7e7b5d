"""Alert model for dashboard notices."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Boolean, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from petfeeder.extensions import db


class AlertType(StrEnum):
    """Severity of an alert."""

    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


class Alert(db.Model):  # type: ignore[name-defined]
    """Append-only notice shown in the dashboard alert feed."""

    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    alert_type: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    def __repr__(self) -> str:
        """Return string representation of Alert."""
        return f"<Alert(id={self.id}, type='{self.alert_type}')>"
