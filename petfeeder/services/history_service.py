"""History service for the append-only feeding ledger."""

import logging
from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from petfeeder.models.history import FeedStatus, HistoryEntry

logger = logging.getLogger(__name__)


class HistoryService:
    """Records feed events and searches the ledger."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def record(
        self,
        rounds: int,
        feed_type: str,
        status: FeedStatus,
        when: datetime | None = None,
    ) -> HistoryEntry:
        """Append a feed event.

        Date and time are taken from the server's local clock, matching what
        the dashboard shows the user.

        Args:
            rounds: Number of rounds fed (0 for a recalibration)
            feed_type: Manual, Scheduled or Recalibrate
            status: Outcome of the feed
            when: Event time, defaults to now

        Returns:
            The created HistoryEntry
        """
        when = when or datetime.now()
        entry = HistoryEntry(
            feed_date=when.strftime("%Y-%m-%d"),
            feed_time=when.strftime("%H:%M:%S"),
            rounds=rounds,
            type=feed_type,
            status=status.value,
            created_at=when,
        )
        self.db.add(entry)
        self.db.flush()
        logger.debug(
            "Recorded history: %s rounds=%d status=%s", feed_type, rounds, status.value
        )
        return entry

    def list_history(
        self, search: str | None = None, limit: int | None = None
    ) -> list[HistoryEntry]:
        """List feed events, newest first.

        Args:
            search: Optional substring matched case-insensitively against
                date, time, type and status
            limit: Optional maximum number of rows

        Returns:
            List of HistoryEntry instances
        """
        stmt = select(HistoryEntry)

        if search:
            stmt = stmt.where(
                or_(
                    HistoryEntry.feed_date.icontains(search, autoescape=True),
                    HistoryEntry.feed_time.icontains(search, autoescape=True),
                    HistoryEntry.type.icontains(search, autoescape=True),
                    HistoryEntry.status.icontains(search, autoescape=True),
                )
            )

        stmt = stmt.order_by(HistoryEntry.created_at.desc(), HistoryEntry.id.desc())

        if limit is not None:
            stmt = stmt.limit(limit)

        return list(self.db.scalars(stmt).all())
