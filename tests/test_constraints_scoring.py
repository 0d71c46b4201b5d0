import pytest

from app.config.settings import Settings
from app.engine.calendar import WorkingCalendar, group_tasks_by_day
from app.engine.errors import InvalidOptionsError, SchedulingError
from app.models.constraints import SchedulingOptions, WorkingHours
from app.utils.scoring import optimize_task_order, task_score, time_of_day_bonus


class TestSchedulingOptions:
    """Validation and defaults of the working-calendar model."""

    def test_defaults(self):
        options = SchedulingOptions()
        assert (options.working_hours.start, options.working_hours.end) == (9, 17)
        assert options.break_duration == 5
        assert options.max_tasks_per_day == 20
        assert options.respect_weekends is True
        assert options.time_slot_duration == 15
        assert options.default_task_duration == 30

    @pytest.mark.parametrize("start, end", [(17, 9), (9, 9), (-1, 17), (9, 24)])
    def test_invalid_working_hours(self, start, end):
        with pytest.raises(InvalidOptionsError):
            WorkingHours(start, end)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"break_duration": -1},
            {"max_tasks_per_day": 0},
            {"time_slot_duration": 0},
            {"default_task_duration": 0},
        ],
    )
    def test_invalid_options(self, kwargs):
        with pytest.raises(InvalidOptionsError):
            SchedulingOptions(**kwargs)

    def test_error_hierarchy(self):
        assert issubclass(InvalidOptionsError, SchedulingError)
        assert issubclass(InvalidOptionsError, ValueError)

    def test_from_settings(self):
        settings = Settings(
            working_hours_start=8,
            working_hours_end=18,
            break_duration_minutes=10,
            max_tasks_per_day=5,
            respect_weekends=False,
            time_slot_duration_minutes=30,
            default_task_duration_minutes=45,
        )

        options = SchedulingOptions.from_settings(settings)

        assert options.working_hours == WorkingHours(8, 18)
        assert options.break_duration == 10
        assert options.max_tasks_per_day == 5
        assert options.respect_weekends is False
        assert options.time_slot_duration == 30
        assert options.default_task_duration == 45


class TestTaskDuration:
    def test_interval_length(self, calendar, make_task, at):
        assert calendar.task_duration(make_task("t", at(9), at(10, 15))) == 75

    def test_estimate_wins(self, calendar, make_task, at):
        assert calendar.task_duration(make_task("t", at(9), at(10), estimated_duration=20)) == 20

    def test_zero_estimate_is_ignored(self, calendar, make_task, at):
        assert calendar.task_duration(make_task("t", at(9), at(10), estimated_duration=0)) == 60

    def test_inverted_interval_uses_default(self, calendar, make_task, at):
        assert calendar.task_duration(make_task("t", at(10), at(9))) == 30

    def test_configured_default(self, make_task, at):
        calendar = WorkingCalendar(SchedulingOptions(default_task_duration=50))
        assert calendar.task_duration(make_task("t", at(10), at(10))) == 50


class TestWorkingHours:
    def test_bounds(self, calendar, at):
        assert calendar.is_within_working_hours(at(9))
        assert calendar.is_within_working_hours(at(16, 59))
        assert not calendar.is_within_working_hours(at(8, 59))
        assert not calendar.is_within_working_hours(at(17))

    def test_closing_instant_is_outside(self, calendar, at):
        assert not calendar.is_within_working_hours(at(17))
        assert not calendar.is_within_working_hours(at(17, 1))


class TestScoring:
    """Time-of-day scoring and per-day reordering."""

    @pytest.mark.parametrize(
        "hour, bonus",
        [(8, 0), (9, 5), (11, 5), (12, 0), (13, 0), (14, 2), (16, 2), (17, 0)],
    )
    def test_time_of_day_bonus(self, make_task, at, hour, bonus):
        assert time_of_day_bonus(make_task("t", at(hour), at(hour, 30))) == bonus

    def test_task_score(self, make_task, at):
        assert task_score(make_task("t", at(10), at(11), priority=3)) == 35
        assert task_score(make_task("t", at(15), at(16), priority=3)) == 32
        assert task_score(make_task("t", at(13), at(14), priority=4)) == 40

    def test_optimize_order_groups_by_day(self, make_task, at):
        tuesday = make_task("tuesday", at(9, day_offset=1), at(10, day_offset=1), priority=5)
        lunch = make_task("lunch", at(13), at(14), priority=3)
        early = make_task("early", at(9), at(10), priority=2)
        morning = make_task("morning", at(10), at(11), priority=3)
        noon = make_task("noon", at(12), at(13), priority=3)

        result = optimize_task_order([tuesday, lunch, early, morning, noon])

        assert [t.id for t in result] == ["tuesday", "morning", "noon", "lunch", "early"]

    def test_optimize_order_keeps_times(self, make_task, at):
        tasks = [make_task("a", at(15), at(16), priority=1), make_task("b", at(9), at(10), priority=5)]
        result = optimize_task_order(tasks)
        assert {(t.id, t.start_time) for t in result} == {(t.id, t.start_time) for t in tasks}

    def test_group_tasks_by_day(self, make_task, at):
        tasks = [
            make_task("a", at(9, day_offset=2), at(10, day_offset=2)),
            make_task("b", at(9), at(10)),
            make_task("c", at(23), at(23, 30, day_offset=0)),
        ]
        groups = group_tasks_by_day(tasks)
        assert [[t.id for t in day] for day in groups.values()] == [["a"], ["b", "c"]]
