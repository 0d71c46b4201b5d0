"""
Free-slot search within a single working day.

Walks the day's bookings in start order with a cursor that starts at the
opening hour and never moves backwards, so overlapping bookings are absorbed.

Complexity: O(n log n) for the sort, O(n) for the walk.
"""

from datetime import date, datetime
from typing import List, Sequence, Union

from app.engine.calendar import WorkingCalendar
from app.models.entities import Task, TimeSlot
from app.utils.time_utils import at_hour, is_same_day, minutes_between


def available_slots(
    calendar: WorkingCalendar,
    day: Union[date, datetime],
    existing_tasks: Sequence[Task] = (),
) -> List[TimeSlot]:
    """
    Free windows of at least ``time_slot_duration`` minutes on ``day``.

    Args:
        calendar: Working calendar supplying hours and slot granularity
        day: The date to inspect (a datetime is reduced to its calendar day)
        existing_tasks: Bookings; only those starting on ``day`` are considered

    Returns:
        Slots in chronological order
    """
    day_tasks = sorted(
        (t for t in existing_tasks if is_same_day(t.start_time, day)),
        key=lambda t: t.start_time,
    )

    tz = day_tasks[0].start_time.tzinfo if day_tasks else None
    day_start = at_hour(day, calendar.work_start, tzinfo=tz)
    day_end = at_hour(day, calendar.work_end, tzinfo=tz)
    min_duration = calendar.options.time_slot_duration

    slots: List[TimeSlot] = []

    def emit(start: datetime, end: datetime) -> None:
        duration = minutes_between(start, end)
        if duration >= min_duration:
            slots.append(TimeSlot(start=start, end=end, duration_minutes=duration))

    cursor = day_start
    for task in day_tasks:
        if task.start_time > cursor:
            emit(cursor, min(task.start_time, day_end))
        # an inverted booking counts as zero-length at its start
        cursor = max(cursor, task.start_time, task.end_time)

    if cursor < day_end:
        emit(cursor, day_end)

    return slots
