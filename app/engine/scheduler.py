"""
TaskScheduler: the engine's public entry point.

A stateless value built from SchedulingOptions; every method is a pure
function of its arguments and the options, so one instance can be shared
freely (including across threads).
"""

from datetime import date, datetime
from typing import Callable, List, Optional, Sequence, Union

from app.engine.auto_scheduler import auto_schedule_tasks
from app.engine.calendar import WorkingCalendar
from app.engine.slots import available_slots
from app.engine.suggestions import generate_suggestions
from app.graph.conflict_graph import find_conflicts
from app.models.constraints import SchedulingOptions
from app.models.entities import SchedulingConflict, SchedulingSuggestion, Task, TimeSlot
from app.utils.scoring import optimize_task_order


class TaskScheduler:
    def __init__(
        self,
        options: Optional[SchedulingOptions] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.options = options or SchedulingOptions()
        self.calendar = WorkingCalendar(self.options)
        self._clock = clock

    def auto_schedule_tasks(self, tasks: Sequence[Task], start_date: Optional[datetime] = None) -> List[Task]:
        start = start_date if start_date is not None else self._clock()
        return auto_schedule_tasks(self.calendar, tasks, start, clock=self._clock)

    def find_conflicts(self, tasks: Sequence[Task]) -> List[SchedulingConflict]:
        return find_conflicts(tasks)

    def generate_suggestions(self, tasks: Sequence[Task]) -> List[SchedulingSuggestion]:
        return generate_suggestions(self.calendar, tasks)

    def get_available_slots(self, day: Union[date, datetime], existing_tasks: Sequence[Task] = ()) -> List[TimeSlot]:
        return available_slots(self.calendar, day, existing_tasks)

    def next_available_slot(self, from_time: datetime) -> datetime:
        return self.calendar.next_available_slot(from_time)

    def optimize_task_order(self, tasks: Sequence[Task]) -> List[Task]:
        return optimize_task_order(tasks)
