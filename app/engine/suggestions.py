"""
Suggestion generation.

Three independent passes, emitted in this order:
1. Conflict resolution: move the lower-priority side of each overlap
2. Overload: defer the lowest-priority task of each overloaded day
3. Working hours: pull out-of-hours tasks back into the working day

Suggestions are advisory; no input task is modified.
"""

from typing import List, Optional, Sequence, Set

from app.engine.calendar import WorkingCalendar, group_tasks_by_day
from app.graph.conflict_graph import find_conflicts
from app.models.entities import (
    SchedulingConflict,
    SchedulingSuggestion,
    SuggestedTime,
    SuggestionType,
    Task,
)
from app.utils.time_utils import add_hours, add_minutes, at_hour


def _proposal(calendar: WorkingCalendar, task: Task, from_time) -> SuggestedTime:
    start = calendar.next_available_slot(from_time)
    return SuggestedTime(start_time=start, end_time=add_minutes(start, calendar.task_duration(task)))


def resolve_conflict(calendar: WorkingCalendar, conflict: SchedulingConflict) -> SchedulingSuggestion:
    """Move the lower-priority task past its own end; ties move task2."""
    t1, t2 = conflict.task1, conflict.task2
    mover, other = (t2, t1) if t1.priority >= t2.priority else (t1, t2)
    return SchedulingSuggestion(
        type=SuggestionType.RESCHEDULE,
        task=mover,
        suggested_time=_proposal(calendar, mover, mover.end_time),
        reason=f'Conflicts with "{other.title}" ({conflict.overlap_minutes} min overlap)',
    )


def handle_overloaded_day(calendar: WorkingCalendar, day_tasks: Sequence[Task]) -> SchedulingSuggestion:
    """Defer the single lowest-priority task (first found) to the next working day."""
    lowest = min(day_tasks, key=lambda t: t.priority)
    next_day = at_hour(add_hours(lowest.start_time, 24), 0)
    return SchedulingSuggestion(
        type=SuggestionType.DEFER,
        task=lowest,
        suggested_time=_proposal(calendar, lowest, next_day),
        reason=f"Day is overloaded with {len(day_tasks)} tasks",
    )


def reschedule_to_working_hours(calendar: WorkingCalendar, task: Task) -> Optional[SchedulingSuggestion]:
    if calendar.is_within_working_hours(task.start_time) and calendar.is_within_working_hours(task.end_time):
        return None
    return SchedulingSuggestion(
        type=SuggestionType.RESCHEDULE,
        task=task,
        suggested_time=_proposal(calendar, task, task.start_time),
        reason="Task is scheduled outside working hours",
    )


def generate_suggestions(calendar: WorkingCalendar, tasks: Sequence[Task]) -> List[SchedulingSuggestion]:
    suggestions: List[SchedulingSuggestion] = []

    moved: Set[str] = set()
    for conflict in find_conflicts(tasks):
        suggestion = resolve_conflict(calendar, conflict)
        if suggestion.task.id in moved:
            continue
        moved.add(suggestion.task.id)
        suggestions.append(suggestion)

    limit = calendar.options.max_tasks_per_day
    for day_tasks in group_tasks_by_day(tasks).values():
        if len(day_tasks) > limit:
            suggestions.append(handle_overloaded_day(calendar, day_tasks))

    for task in tasks:
        suggestion = reschedule_to_working_hours(calendar, task)
        if suggestion:
            suggestions.append(suggestion)

    return suggestions
