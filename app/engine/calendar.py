"""
Working-calendar arithmetic.

Every hour-of-day and day-of-week decision is read from the wall clock of the
datetime being examined. Callers that mix timezones must normalise first
(the API layer converts into the configured business timezone).
"""

from datetime import date, datetime
from typing import Dict, Iterable, List

from app.models.constraints import SchedulingOptions
from app.models.entities import Task
from app.utils.time_utils import add_hours, at_hour, day_key, minutes_between

SATURDAY = 5
SUNDAY = 6


class WorkingCalendar:
    def __init__(self, options: SchedulingOptions):
        self.options = options

    @property
    def work_start(self) -> int:
        return self.options.working_hours.start

    @property
    def work_end(self) -> int:
        return self.options.working_hours.end

    def is_weekend(self, moment: datetime) -> bool:
        return moment.weekday() in (SATURDAY, SUNDAY)

    def is_within_working_hours(self, moment: datetime) -> bool:
        return self.work_start <= moment.hour < self.work_end

    def task_duration(self, task: Task) -> int:
        """
        Intended duration of a task in minutes.

        An estimated duration in the metadata wins over the booked interval;
        inverted or empty intervals fall back to the configured default.
        """
        estimated = task.metadata.estimated_duration if task.metadata else None
        if estimated and estimated > 0:
            return estimated
        current = minutes_between(task.start_time, task.end_time)
        return current if current > 0 else self.options.default_task_duration

    def next_available_slot(self, from_time: datetime) -> datetime:
        """
        Earliest moment at or after ``from_time`` inside working hours.

        Weekends are skipped a whole day at a time when configured. Other
        tasks are not consulted; collision avoidance is the caller's job.
        """
        slot = from_time
        while True:
            if self.options.respect_weekends:
                while self.is_weekend(slot):
                    slot = at_hour(add_hours(slot, 24), self.work_start)

            if slot.hour < self.work_start:
                return at_hour(slot, self.work_start)
            if slot.hour >= self.work_end:
                # next morning, then re-check the weekend rule
                slot = at_hour(add_hours(slot, 24), self.work_start)
                continue
            return slot


def group_tasks_by_day(tasks: Iterable[Task]) -> Dict[date, List[Task]]:
    """Bucket tasks by the calendar day they start on, in first-seen order."""
    daily: Dict[date, List[Task]] = {}
    for task in tasks:
        daily.setdefault(day_key(task.start_time), []).append(task)
    return daily
