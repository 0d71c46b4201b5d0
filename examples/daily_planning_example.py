"""
Example: planning a day with the scheduling engine

Shows the usual loop of an orchestration layer: detect conflicts, surface
suggestions, then auto-schedule whatever is still open.
"""

from datetime import datetime, timedelta

from app.engine.scheduler import TaskScheduler
from app.models.constraints import SchedulingOptions, WorkingHours
from app.models.entities import Task, TaskMetadata, TaskStatus


def make_task(task_id: str, title: str, start: datetime, minutes: int, priority: int, **kwargs) -> Task:
    created = datetime(2025, 1, 10, 9, 0)
    return Task(
        id=task_id,
        title=title,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        priority=priority,
        created_at=created,
        updated_at=created,
        **kwargs,
    )


monday = datetime(2025, 1, 13)
tasks = [
    make_task("1", "Sprint planning", monday.replace(hour=10), 60, priority=5),
    make_task("2", "Code review", monday.replace(hour=10, minute=30), 45, priority=2),
    make_task("3", "Gym", monday.replace(hour=18), 60, priority=1),
    make_task(
        "4", "Write report", monday.replace(hour=9), 30, priority=4,
        metadata=TaskMetadata(original_input="write the Q1 report, ~2h", estimated_duration=120),
    ),
    make_task("5", "Inbox zero", monday.replace(hour=8), 20, priority=3, status=TaskStatus.COMPLETED),
]

scheduler = TaskScheduler(SchedulingOptions(working_hours=WorkingHours(8, 18), break_duration=10))

print("Conflicts:")
for conflict in scheduler.find_conflicts(tasks):
    print(f"  {conflict.task1.title} / {conflict.task2.title}: "
          f"{conflict.overlap_minutes} min ({conflict.severity.value})")

print("\nSuggestions:")
for suggestion in scheduler.generate_suggestions(tasks):
    when = suggestion.suggested_time
    print(f"  [{suggestion.type.value}] {suggestion.task.title} -> "
          f"{when.start_time:%a %H:%M}-{when.end_time:%H:%M}: {suggestion.reason}")

print("\nFree slots on Monday:")
for slot in scheduler.get_available_slots(monday, tasks):
    print(f"  {slot.start:%H:%M}-{slot.end:%H:%M} ({slot.duration_minutes} min)")

print("\nAuto-scheduled:")
for task in scheduler.auto_schedule_tasks(tasks, monday.replace(hour=8)):
    print(f"  P{task.priority} {task.title:<16} {task.start_time:%a %H:%M}-{task.end_time:%H:%M} [{task.status.value}]")
