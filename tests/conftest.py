from datetime import datetime, timedelta

import pytest

from app.engine.calendar import WorkingCalendar
from app.engine.scheduler import TaskScheduler
from app.models.constraints import SchedulingOptions
from app.models.entities import Task, TaskMetadata, TaskStatus

# 2025-01-13 is a Monday
MONDAY = datetime(2025, 1, 13)
FIXED_NOW = datetime(2025, 1, 10, 12, 0)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def at():
    """Build a timestamp relative to the reference Monday."""
    def _at(hour: int, minute: int = 0, day_offset: int = 0) -> datetime:
        return MONDAY + timedelta(days=day_offset, hours=hour, minutes=minute)
    return _at


@pytest.fixture
def make_task():
    """Factory for tasks; creation order follows call order unless given."""
    created = iter(range(10_000))

    def _make(
        task_id: str,
        start: datetime,
        end: datetime,
        priority: int = 3,
        status: TaskStatus = TaskStatus.UPCOMING,
        estimated_duration: int = None,
        created_at: datetime = None,
        title: str = None,
    ) -> Task:
        created_at = created_at or FIXED_NOW - timedelta(days=1) + timedelta(minutes=next(created))
        return Task(
            id=task_id,
            title=title or task_id.title(),
            start_time=start,
            end_time=end,
            priority=priority,
            status=status,
            created_at=created_at,
            updated_at=created_at,
            metadata=TaskMetadata(estimated_duration=estimated_duration),
        )
    return _make


@pytest.fixture
def options():
    return SchedulingOptions()


@pytest.fixture
def calendar(options):
    return WorkingCalendar(options)


@pytest.fixture
def scheduler(options):
    """Scheduler with default options and a frozen clock."""
    return TaskScheduler(options, clock=lambda: FIXED_NOW)
