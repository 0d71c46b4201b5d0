from dataclasses import dataclass, field
from typing import Optional

from app.config.settings import Settings, get_settings
from app.engine.errors import InvalidOptionsError


@dataclass(frozen=True)
class WorkingHours:
    start: int = 9  # hour of day, 24h
    end: int = 17

    def __post_init__(self):
        if not (0 <= self.start <= 23 and 0 <= self.end <= 23):
            raise InvalidOptionsError("working hours must be within 0..23")
        if self.start >= self.end:
            raise InvalidOptionsError("working hours start must be before end")


@dataclass(frozen=True)
class SchedulingOptions:
    """Working-calendar model shared by every scheduling operation."""

    working_hours: WorkingHours = field(default_factory=WorkingHours)
    break_duration: int = 5  # minutes between auto-scheduled tasks
    max_tasks_per_day: int = 20
    respect_weekends: bool = True
    time_slot_duration: int = 15  # shortest gap that counts as a free slot
    default_task_duration: int = 30

    def __post_init__(self):
        if self.break_duration < 0:
            raise InvalidOptionsError("break_duration must be >= 0")
        if self.max_tasks_per_day < 1:
            raise InvalidOptionsError("max_tasks_per_day must be >= 1")
        if self.time_slot_duration < 1:
            raise InvalidOptionsError("time_slot_duration must be >= 1")
        if self.default_task_duration < 1:
            raise InvalidOptionsError("default_task_duration must be >= 1")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SchedulingOptions":
        settings = settings or get_settings()
        return cls(
            working_hours=WorkingHours(settings.working_hours_start, settings.working_hours_end),
            break_duration=settings.break_duration_minutes,
            max_tasks_per_day=settings.max_tasks_per_day,
            respect_weekends=settings.respect_weekends,
            time_slot_duration=settings.time_slot_duration_minutes,
            default_task_duration=settings.default_task_duration_minutes,
        )
