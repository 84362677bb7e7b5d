"""Schedule service for recurring feed rules."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from petfeeder.exceptions import RecordNotFoundException
from petfeeder.models.schedule import Schedule
from petfeeder.utils.activation import select_due_schedules

logger = logging.getLogger(__name__)


class ScheduleService:
    """Service for managing feeding schedules.

    Handles CRUD for schedules and exposes the day-rule filter the device
    polls to learn what to feed today.
    """

    def __init__(self, db: Session) -> None:
        """Initialize service with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def list_schedules(self, include_inactive: bool = False) -> list[Schedule]:
        """List schedules, newest first.

        Args:
            include_inactive: Also return schedules with is_active=False

        Returns:
            List of Schedule instances
        """
        stmt = select(Schedule)
        if not include_inactive:
            stmt = stmt.where(Schedule.is_active.is_(True))
        stmt = stmt.order_by(Schedule.created_at.desc(), Schedule.id.desc())
        return list(self.db.scalars(stmt).all())

    def get_schedule(self, schedule_id: int) -> Schedule:
        """Get a schedule by ID.

        Raises:
            RecordNotFoundException: If schedule doesn't exist
        """
        stmt = select(Schedule).where(Schedule.id == schedule_id)
        schedule = self.db.scalars(stmt).one_or_none()

        if schedule is None:
            raise RecordNotFoundException("Schedule", str(schedule_id))

        return schedule

    def create_schedule(
        self,
        interval: str,
        start_time: str,
        rounds: int,
        frequency: str,
        custom_days: str | None = None,
        is_active: bool = True,
    ) -> Schedule:
        """Create a new schedule.

        Args:
            interval: Advisory interval label (2h..12h, free)
            start_time: Time of day, HH:MM
            rounds: Rounds to feed; -1 is stored as given
            frequency: daily, weekdays, weekends or custom
            custom_days: Comma-separated weekday abbreviations
            is_active: Whether the schedule is returned to the device

        Returns:
            Created Schedule instance
        """
        schedule = Schedule(
            interval_type=interval,
            start_time=start_time,
            rounds=rounds,
            frequency=frequency,
            custom_days=custom_days or "",
            is_active=is_active,
        )
        self.db.add(schedule)
        self.db.flush()

        logger.info(
            "Created schedule %d: %s %s rounds=%d",
            schedule.id,
            frequency,
            start_time,
            rounds,
        )
        return schedule

    def update_schedule(
        self,
        schedule_id: int,
        interval: str,
        start_time: str,
        rounds: int,
        frequency: str,
        custom_days: str | None = None,
        is_active: bool | None = None,
    ) -> Schedule:
        """Replace the fields of a schedule.

        The active flag is left as it was when ``is_active`` is None.

        Raises:
            RecordNotFoundException: If schedule doesn't exist
        """
        schedule = self.get_schedule(schedule_id)

        schedule.interval_type = interval
        schedule.start_time = start_time
        schedule.rounds = rounds
        schedule.frequency = frequency
        schedule.custom_days = custom_days or ""
        if is_active is not None:
            schedule.is_active = is_active

        self.db.flush()
        logger.info("Updated schedule %d", schedule_id)
        return schedule

    def delete_schedule(self, schedule_id: int) -> None:
        """Delete a schedule.

        Raises:
            RecordNotFoundException: If schedule doesn't exist
        """
        schedule = self.get_schedule(schedule_id)
        self.db.delete(schedule)
        self.db.flush()
        logger.info("Deleted schedule %d", schedule_id)

    def get_due_schedules(self, now: datetime | None = None) -> list[Schedule]:
        """Return active schedules whose day rule matches today.

        Schedules come back in creation order.

        Args:
            now: Local reference time, defaults to now

        Returns:
            List of due Schedule instances
        """
        now = now or datetime.now()
        stmt = (
            select(Schedule)
            .where(Schedule.is_active.is_(True))
            .order_by(Schedule.id)
        )
        return select_due_schedules(self.db.scalars(stmt).all(), now)
