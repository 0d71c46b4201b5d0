from typing import List, Sequence

from app.engine.calendar import group_tasks_by_day
from app.models.entities import Task

MORNING_HOURS = range(9, 12)
AFTERNOON_HOURS = range(14, 17)


def time_of_day_bonus(task: Task) -> int:
    hour = task.start_time.hour
    if hour in MORNING_HOURS:
        return 5
    if hour in AFTERNOON_HOURS:
        return 2
    return 0


def task_score(task: Task) -> int:
    return task.priority * 10 + time_of_day_bonus(task)


def optimize_task_order(tasks: Sequence[Task]) -> List[Task]:
    """Reorder tasks day by day, best score first; times are left alone."""
    ordered: List[Task] = []
    for day_tasks in group_tasks_by_day(tasks).values():
        ordered.extend(sorted(day_tasks, key=lambda t: (-task_score(t), t.start_time)))
    return ordered
