from datetime import date, datetime, tzinfo
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from app.config.settings import get_settings
from app.engine.errors import InvalidOptionsError
from app.engine.scheduler import TaskScheduler
from app.graph.conflict_graph import graph_from_conflicts
from app.models.constraints import SchedulingOptions, WorkingHours
from app.models.entities import (
    ConflictSeverity,
    SchedulingConflict,
    SchedulingSuggestion,
    SuggestionType,
    Task,
    TaskMetadata,
    TaskStatus,
    TimeSlot,
)

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


def business_timezone() -> Optional[tzinfo]:
    return ZoneInfo(settings.timezone) if settings.timezone else None


def normalize(moment: datetime, tz: Optional[tzinfo]) -> datetime:
    """Express a timestamp in the business timezone; naive input is read as local to it."""
    if tz is None:
        return moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


class TaskMetadataDTO(BaseModel):
    original_input: Optional[str] = None
    llm_response: Optional[str] = None
    estimated_duration: Optional[int] = Field(None, ge=1, le=1440)


class TaskDTO(BaseModel):
    id: str
    title: str
    description: str = ""
    start_time: datetime
    end_time: datetime
    status: TaskStatus = TaskStatus.UPCOMING
    priority: int = Field(3, ge=1, le=5)
    created_at: datetime
    updated_at: Optional[datetime] = None
    metadata: TaskMetadataDTO = Field(default_factory=TaskMetadataDTO)

    @field_validator("end_time")
    @classmethod
    def validate_interval(cls, v: datetime, info: ValidationInfo):
        """Reject bookings that end before they start."""
        start = info.data.get("start_time")
        if start is not None and v <= start:
            raise ValueError("end_time must be after start_time")
        return v

    def to_domain(self, tz: Optional[tzinfo] = None) -> Task:
        created_at = normalize(self.created_at, tz)
        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            start_time=normalize(self.start_time, tz),
            end_time=normalize(self.end_time, tz),
            status=self.status,
            priority=self.priority,
            created_at=created_at,
            updated_at=normalize(self.updated_at, tz) if self.updated_at else created_at,
            metadata=TaskMetadata(**self.metadata.model_dump()),
        )

    @classmethod
    def from_domain(cls, task: Task) -> "TaskDTO":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            start_time=task.start_time,
            end_time=task.end_time,
            status=task.status,
            priority=task.priority,
            created_at=task.created_at,
            updated_at=task.updated_at,
            metadata=TaskMetadataDTO(
                original_input=task.metadata.original_input,
                llm_response=task.metadata.llm_response,
                estimated_duration=task.metadata.estimated_duration,
            ),
        )


def _pick(value, default):
    return default if value is None else value


class OptionsDTO(BaseModel):
    """Per-request overrides; unset fields fall back to settings."""

    working_hours_start: Optional[int] = Field(None, ge=0, le=23)
    working_hours_end: Optional[int] = Field(None, ge=0, le=23)
    break_duration: Optional[int] = Field(None, ge=0)
    max_tasks_per_day: Optional[int] = Field(None, ge=1)
    respect_weekends: Optional[bool] = None
    time_slot_duration: Optional[int] = Field(None, ge=1)

    def to_domain(self) -> SchedulingOptions:
        base = SchedulingOptions.from_settings(settings)
        return SchedulingOptions(
            working_hours=WorkingHours(
                _pick(self.working_hours_start, base.working_hours.start),
                _pick(self.working_hours_end, base.working_hours.end),
            ),
            break_duration=_pick(self.break_duration, base.break_duration),
            max_tasks_per_day=_pick(self.max_tasks_per_day, base.max_tasks_per_day),
            respect_weekends=_pick(self.respect_weekends, base.respect_weekends),
            time_slot_duration=_pick(self.time_slot_duration, base.time_slot_duration),
            default_task_duration=base.default_task_duration,
        )


class TasksRequest(BaseModel):
    tasks: List[TaskDTO]
    options: Optional[OptionsDTO] = None


class AutoScheduleRequest(TasksRequest):
    start_date: Optional[datetime] = None


class SlotsRequest(TasksRequest):
    day: date


class TaskListResponse(BaseModel):
    tasks: List[TaskDTO]


class ConflictDTO(BaseModel):
    task1_id: str
    task2_id: str
    overlap_minutes: int
    severity: ConflictSeverity

    @classmethod
    def from_domain(cls, c: SchedulingConflict) -> "ConflictDTO":
        return cls(task1_id=c.task1.id, task2_id=c.task2.id, overlap_minutes=c.overlap_minutes, severity=c.severity)


class ConflictsResponse(BaseModel):
    conflicts: List[ConflictDTO]
    conflict_degree: Dict[str, int]


class SuggestionDTO(BaseModel):
    type: SuggestionType
    task_id: str
    reason: str
    suggested_start: Optional[datetime] = None
    suggested_end: Optional[datetime] = None

    @classmethod
    def from_domain(cls, s: SchedulingSuggestion) -> "SuggestionDTO":
        return cls(
            type=s.type,
            task_id=s.task.id,
            reason=s.reason,
            suggested_start=s.suggested_time.start_time if s.suggested_time else None,
            suggested_end=s.suggested_time.end_time if s.suggested_time else None,
        )


class SuggestionsResponse(BaseModel):
    suggestions: List[SuggestionDTO]


class SlotDTO(BaseModel):
    start: datetime
    end: datetime
    duration_minutes: int

    @classmethod
    def from_domain(cls, slot: TimeSlot) -> "SlotDTO":
        return cls(start=slot.start, end=slot.end, duration_minutes=slot.duration_minutes)


class SlotsResponse(BaseModel):
    day: date
    slots: List[SlotDTO]


def build_scheduler(options: Optional[OptionsDTO]) -> TaskScheduler:
    try:
        return TaskScheduler((options or OptionsDTO()).to_domain())
    except InvalidOptionsError as e:
        logger.warning(f"Rejected scheduling options: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/schedule/auto", response_model=TaskListResponse, summary="Auto-schedule upcoming tasks")
def auto_schedule(req: AutoScheduleRequest):
    """
    Place every upcoming task into the next free working time, highest
    priority first.

    **Behaviour:**
    - Completed tasks are returned with their times untouched
    - Consecutive tasks are separated by the configured break
    - Weekends are skipped when `respect_weekends` is set
    - If scheduling fails the original tasks are returned unchanged
    """
    logger.info(f"Auto-schedule request: {len(req.tasks)} tasks")
    scheduler = build_scheduler(req.options)
    tz = business_timezone()
    tasks = [t.to_domain(tz) for t in req.tasks]
    start = normalize(req.start_date, tz) if req.start_date else datetime.now(tz)

    result = scheduler.auto_schedule_tasks(tasks, start)
    logger.info(f"Auto-schedule complete: {len(result)} tasks returned")
    return {"tasks": [TaskDTO.from_domain(t) for t in result]}


@router.post("/schedule/conflicts", response_model=ConflictsResponse, summary="Detect overlapping tasks")
def conflicts(req: TasksRequest):
    """
    List every pair of overlapping tasks, largest overlap first.

    **Severity:** `minor` up to 15 min, `major` up to 60 min, `critical` beyond.
    `conflict_degree` counts how many other tasks each task collides with.
    """
    logger.info(f"Conflict request: {len(req.tasks)} tasks")
    scheduler = build_scheduler(req.options)
    tz = business_timezone()
    tasks = [t.to_domain(tz) for t in req.tasks]

    found = scheduler.find_conflicts(tasks)
    degree = {tid: len(others) for tid, others in graph_from_conflicts(found).items()}
    logger.info(f"Found {len(found)} conflicts")
    return {"conflicts": [ConflictDTO.from_domain(c) for c in found], "conflict_degree": degree}


@router.post("/schedule/suggestions", response_model=SuggestionsResponse, summary="Suggest schedule fixes")
def suggestions(req: TasksRequest):
    """
    Advisory reschedule/defer proposals, in order: conflicts, overloaded
    days, out-of-hours tasks. Nothing is applied.
    """
    logger.info(f"Suggestion request: {len(req.tasks)} tasks")
    scheduler = build_scheduler(req.options)
    tz = business_timezone()
    result = scheduler.generate_suggestions([t.to_domain(tz) for t in req.tasks])
    logger.info(f"Generated {len(result)} suggestions")
    return {"suggestions": [SuggestionDTO.from_domain(s) for s in result]}


@router.post("/schedule/slots", response_model=SlotsResponse, summary="Free slots for a day")
def slots(req: SlotsRequest):
    scheduler = build_scheduler(req.options)
    tz = business_timezone()
    tasks = [t.to_domain(tz) for t in req.tasks]
    # without a business timezone the bookings' own tzinfo frames the day
    day = datetime(req.day.year, req.day.month, req.day.day, tzinfo=tz) if tz else req.day

    result = scheduler.get_available_slots(day, tasks)
    logger.debug(f"{len(result)} free slots on {req.day}")
    return {"day": req.day, "slots": [SlotDTO.from_domain(s) for s in result]}


@router.post("/schedule/optimize-order", response_model=TaskListResponse, summary="Reorder tasks by score")
def optimize_order(req: TasksRequest):
    """Reorder tasks within each day by priority and time-of-day preference; times are unchanged."""
    scheduler = build_scheduler(req.options)
    tz = business_timezone()
    result = scheduler.optimize_task_order([t.to_domain(tz) for t in req.tasks])
    return {"tasks": [TaskDTO.from_domain(t) for t in result]}
