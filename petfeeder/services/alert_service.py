"""Alert service for the append-only notice log."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from petfeeder.models.alert import Alert, AlertType

logger = logging.getLogger(__name__)


class AlertService:
    """Appends and lists dashboard alerts."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_alert(
        self, alert_type: AlertType, message: str, when: datetime | None = None
    ) -> Alert:
        """Append an alert.

        The timestamp comes from the server's local clock, the same one the
        feeding history uses.

        Args:
            alert_type: Severity of the alert
            message: Text shown in the dashboard
            when: Alert time, defaults to now

        Returns:
            The created Alert
        """
        alert = Alert(
            alert_type=alert_type.value,
            message=message,
            is_read=False,
            created_at=when or datetime.now(),
        )
        self.db.add(alert)
        self.db.flush()
        logger.debug("Created %s alert: %s", alert_type.value, message)
        return alert

    def list_recent(self, limit: int) -> list[Alert]:
        """Return the most recent alerts, newest first."""
        stmt = (
            select(Alert)
            .order_by(Alert.created_at.desc(), Alert.id.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt).all())
