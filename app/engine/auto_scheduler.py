"""
Greedy priority-first auto-scheduler.

Algorithm:
1. Order tasks by priority (high first), then by creation time (early first)
2. Open a cursor at the first working moment at or after the anchor date
3. Place each upcoming task at the cursor, then move the cursor past the
   task plus the configured break, snapping back into working hours

A single calendar is packed sequentially, so two tasks are never run in
parallel and the result is not globally optimal.

Complexity: O(n log n) for the sort, O(n) placements.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Sequence

from app.engine.calendar import WorkingCalendar
from app.engine.errors import SchedulingError
from app.models.entities import Task, TaskStatus
from app.utils.time_utils import add_minutes

logger = logging.getLogger(__name__)


def check_timestamps(task: Task) -> None:
    for name in ("start_time", "end_time", "created_at"):
        if not isinstance(getattr(task, name), datetime):
            raise SchedulingError(f"task {task.id} has a malformed {name}: {getattr(task, name)!r}")


def schedule_task(task: Task, start: datetime, duration: int, now: datetime) -> Task:
    return replace(task, start_time=start, end_time=add_minutes(start, duration), updated_at=now)


def auto_schedule_tasks(
    calendar: WorkingCalendar,
    tasks: Sequence[Task],
    start_date: datetime,
    clock: Callable[[], datetime] = datetime.now,
) -> List[Task]:
    """
    Place every upcoming task into the calendar.

    Non-upcoming tasks are returned untouched. If anything goes wrong the
    original tasks are returned unchanged; the result is never partial.

    Args:
        calendar: Working calendar (hours, weekends, break length)
        tasks: Tasks to schedule; never mutated
        start_date: Earliest moment the first task may start
        clock: Source of ``updated_at`` for rescheduled copies

    Returns:
        New list with the same number of tasks, in scheduling order
    """
    try:
        for task in tasks:
            check_timestamps(task)
        ordered = sorted(tasks, key=lambda t: (-t.priority, t.created_at))
        now = clock()
        cursor = calendar.next_available_slot(start_date)
        break_minutes = calendar.options.break_duration

        scheduled: List[Task] = []
        for task in ordered:
            if task.status != TaskStatus.UPCOMING:
                scheduled.append(task)
                continue

            placed = schedule_task(task, cursor, calendar.task_duration(task), now)
            scheduled.append(placed)
            cursor = calendar.next_available_slot(add_minutes(placed.end_time, break_minutes))

        return scheduled
    except Exception:
        logger.warning("Auto-scheduling failed; returning tasks unchanged", exc_info=True)
        return list(tasks)
