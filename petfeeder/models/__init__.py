"""SQLAlchemy models for the pet feeder backend."""

from petfeeder.models.alert import Alert, AlertType
from petfeeder.models.history import FeedStatus, FeedType, HistoryEntry
from petfeeder.models.schedule import Frequency, Interval, Schedule
from petfeeder.models.setting import Setting
from petfeeder.models.user import User

__all__ = [
    "Alert",
    "AlertType",
    "FeedStatus",
    "FeedType",
    "Frequency",
    "HistoryEntry",
    "Interval",
    "Schedule",
    "Setting",
    "User",
]
