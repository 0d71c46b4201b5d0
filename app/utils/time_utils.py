from datetime import date, datetime, timedelta
from typing import Union


def add_minutes(moment: datetime, minutes: int) -> datetime:
    return moment + timedelta(minutes=minutes)


def add_hours(moment: datetime, hours: int) -> datetime:
    return moment + timedelta(hours=hours)


def minutes_between(start: datetime, end: datetime) -> int:
    """Signed whole minutes from ``start`` to ``end`` (truncated toward zero)."""
    return int((end - start).total_seconds() / 60)


def day_key(moment: Union[date, datetime]) -> date:
    """Calendar day of a moment, read from its own wall clock."""
    if isinstance(moment, datetime):
        return moment.date()
    return moment


def is_same_day(a: Union[date, datetime], b: Union[date, datetime]) -> bool:
    return day_key(a) == day_key(b)


def at_hour(day: Union[date, datetime], hour: int, tzinfo=None) -> datetime:
    """``day`` at ``hour``:00:00, keeping the tzinfo of a datetime input."""
    if isinstance(day, datetime):
        return day.replace(hour=hour, minute=0, second=0, microsecond=0)
    return datetime(day.year, day.month, day.day, hour, tzinfo=tzinfo)
