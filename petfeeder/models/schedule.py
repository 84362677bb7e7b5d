"""Schedule model for recurring feeding rules."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from petfeeder.extensions import db


class Frequency(StrEnum):
    """Day rule deciding on which weekdays a schedule applies."""

    DAILY = "daily"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    CUSTOM = "custom"


class Interval(StrEnum):
    """Advisory interval label shown in the dashboard.

    Not used when deciding whether a schedule is due.
    """

    H2 = "2h"
    H3 = "3h"
    H4 = "4h"
    H6 = "6h"
    H8 = "8h"
    H10 = "10h"
    H12 = "12h"
    FREE = "free"


class Schedule(db.Model):  # type: ignore[name-defined]
    """SQLAlchemy model for a recurring feed rule.

    The device polls for the schedules that apply today and compares
    start_time against its own clock.
    """

    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    interval_type: Mapped[str] = mapped_column(String(10), nullable=False)

    # Time of day, HH:MM
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)

    # -1 means "free feed"; stored as given
    rounds: Mapped[int] = mapped_column(Integer, nullable=False)

    frequency: Mapped[str] = mapped_column(String(20), nullable=False)

    # Comma-separated weekday abbreviations (Mon,Wed,Fri), only used for custom
    custom_days: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        """Return string representation of Schedule."""
        return (
            f"<Schedule(id={self.id}, start_time='{self.start_time}', "
            f"frequency='{self.frequency}', rounds={self.rounds})>"
        )
