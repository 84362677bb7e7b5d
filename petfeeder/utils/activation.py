"""Day-rule filter deciding which feeding schedules apply today.

The server only filters by day. The device receives every schedule due today
and compares start_time against its own clock.
"""

from collections.abc import Iterable
from datetime import datetime

from petfeeder.models.schedule import Frequency, Schedule

# Indexed by datetime.weekday(); fixed so results never depend on the locale
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
WEEKEND_DAYS = frozenset({"Sat", "Sun"})


def weekday_abbreviation(moment: datetime) -> str:
    """Return the three-letter English weekday of a datetime."""
    return WEEKDAYS[moment.weekday()]


def parse_custom_days(custom_days: str | None) -> set[str]:
    """Split a comma-separated day list into normalized abbreviations.

    Whitespace around entries and letter case are ignored; empty entries
    are dropped.
    """
    if not custom_days:
        return set()
    return {
        day.strip().lower() for day in custom_days.split(",") if day.strip()
    }


def is_due(frequency: str, custom_days: str | None, weekday: str) -> bool:
    """Check whether a frequency rule matches the given weekday.

    Args:
        frequency: daily, weekdays, weekends or custom
        custom_days: Comma-separated day list, only read for custom
        weekday: Three-letter weekday abbreviation (Mon..Sun)

    Returns:
        True if the rule applies on that day. Unknown frequencies never match.
    """
    match frequency:
        case Frequency.DAILY:
            return True
        case Frequency.WEEKDAYS:
            return weekday not in WEEKEND_DAYS
        case Frequency.WEEKENDS:
            return weekday in WEEKEND_DAYS
        case Frequency.CUSTOM:
            return weekday.lower() in parse_custom_days(custom_days)
        case _:
            return False


def select_due_schedules(
    schedules: Iterable[Schedule], now: datetime
) -> list[Schedule]:
    """Return the active schedules whose day rule matches ``now``.

    Input order is preserved.
    """
    weekday = weekday_abbreviation(now)
    return [
        schedule
        for schedule in schedules
        if schedule.is_active and is_due(schedule.frequency, schedule.custom_days, weekday)
    ]
