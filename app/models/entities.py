from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    UPCOMING = "upcoming"
    RECENTLY_COMPLETED = "recently_completed"
    COMPLETED = "completed"


class ConflictSeverity(str, Enum):
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class SuggestionType(str, Enum):
    RESCHEDULE = "reschedule"
    # split and prioritize have no producer yet
    SPLIT = "split"
    PRIORITIZE = "prioritize"
    DEFER = "defer"


@dataclass(frozen=True)
class TaskMetadata:
    original_input: Optional[str] = None
    llm_response: Optional[str] = None
    estimated_duration: Optional[int] = None  # minutes


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    start_time: datetime
    end_time: datetime
    priority: int  # 1 (lowest) .. 5 (highest)
    created_at: datetime
    updated_at: datetime
    status: TaskStatus = TaskStatus.UPCOMING
    description: str = ""
    metadata: TaskMetadata = field(default_factory=TaskMetadata)


@dataclass(frozen=True)
class TimeSlot:
    start: datetime
    end: datetime
    duration_minutes: int


@dataclass(frozen=True)
class SchedulingConflict:
    task1: Task
    task2: Task
    overlap_minutes: int
    severity: ConflictSeverity


@dataclass(frozen=True)
class SuggestedTime:
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class SchedulingSuggestion:
    type: SuggestionType
    task: Task
    reason: str
    suggested_time: Optional[SuggestedTime] = None
