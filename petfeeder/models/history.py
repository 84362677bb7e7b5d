"""History model for the append-only feeding ledger."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from petfeeder.extensions import db


class FeedType(StrEnum):
    """Conventional values for HistoryEntry.type."""

    MANUAL = "Manual"
    SCHEDULED = "Scheduled"
    RECALIBRATE = "Recalibrate"


class FeedStatus(StrEnum):
    """Conventional values for HistoryEntry.status."""

    SUCCESS = "Success"
    FAILED_LOW_FEED = "Failed (Low Feed)"


class HistoryEntry(db.Model):  # type: ignore[name-defined]
    """One feed event: manual, scheduled, or a recalibration.

    Date and time are stored as text (YYYY-MM-DD, HH:MM:SS) so the dashboard
    search can substring-match them on any backend.
    """

    __tablename__ = "history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    feed_date: Mapped[str] = mapped_column(String(10), nullable=False)
    feed_time: Mapped[str] = mapped_column(String(8), nullable=False)
    rounds: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), index=True
    )

    def __repr__(self) -> str:
        """Return string representation of HistoryEntry."""
        return (
            f"<HistoryEntry(id={self.id}, {self.feed_date} {self.feed_time}, "
            f"type='{self.type}', status='{self.status}')>"
        )
