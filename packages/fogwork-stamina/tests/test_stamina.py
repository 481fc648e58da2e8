"""Tests for stamina, phase balance and the derived rates."""
from datetime import date, datetime, timedelta

import pytest

from fogwork_stamina import (
    gather_rate,
    phase_balance,
    phase_factor,
    scout_speed,
    stamina,
    stamina_breakdown,
    structure_progress,
    task_time_energy,
)
from fogwork_store import Milestone, Task

NOW = datetime(2026, 3, 1, 12, 0, 0)


def _overdue(days: int, pc: float = 0, discovery: float = 40, tid: str = "t") -> Task:
    return Task(tid, "p", discovery_percent=discovery, percent_complete=pc,
                expected_date=(NOW - timedelta(days=days)).date())


class TestStamina:
    def test_empty_is_full(self):
        assert stamina([], NOW) == 1.0

    def test_on_time_ideal_balance_is_full(self):
        task = Task("t", "p", discovery_percent=40, expected_date=date(2026, 4, 1))
        assert stamina([task], NOW) == pytest.approx(1.0)

    def test_undated_task_has_full_time_energy(self):
        assert task_time_energy(Task("t", "p"), NOW) == 1.0

    def test_overdue_scenario_drops_below_threshold(self):
        task = _overdue(20, pc=10, discovery=50)
        assert stamina([task], NOW) < 0.8

    @pytest.mark.parametrize("days", [0, 1, 5, 30, 100, 1000])
    @pytest.mark.parametrize("discovery", [0, 40, 100])
    def test_bounded(self, days, discovery):
        value = stamina([_overdue(days, discovery=discovery)], NOW)
        assert 0.0 <= value <= 1.0

    def test_monotonic_in_days_overdue(self):
        values = [stamina([_overdue(d)], NOW) for d in range(0, 60, 3)]
        assert values == sorted(values, reverse=True)

    def test_completion_softens_decay(self):
        assert stamina([_overdue(10, pc=80)], NOW) > stamina([_overdue(10, pc=0)], NOW)

    def test_time_energy_floors_at_zero(self):
        assert task_time_energy(_overdue(500), NOW) == 0.0

    def test_due_today_after_midnight_counts_partial_day(self):
        task = Task("t", "p", expected_date=NOW.date())
        assert task_time_energy(task, NOW) == pytest.approx(1.0 - 0.5 * 0.03)


class TestPhaseBalance:
    def test_empty_is_neutral(self):
        assert phase_balance([]) == 0.5

    def test_weighted_by_remaining_work(self):
        tasks = [
            Task("a", "p", discovery_percent=100, percent_complete=0),
            Task("b", "p", discovery_percent=0, percent_complete=100),
        ]
        # weights 1.0 and 0.1
        assert phase_balance(tasks) == pytest.approx(1.0 / 1.1)

    def test_ideal_ratio_has_no_penalty(self):
        assert phase_factor([Task("t", "p", discovery_percent=40)]) == pytest.approx(1.0)

    def test_full_deviation_gives_max_penalty(self):
        assert phase_factor([Task("t", "p", discovery_percent=100)]) == pytest.approx(0.2)


class TestRates:
    def test_gather_rate_range(self):
        assert gather_rate(0.0) == 0.5
        assert gather_rate(1.0) == 1.0

    def test_scout_speed_range(self):
        assert scout_speed(0.0) == pytest.approx(0.6)
        assert scout_speed(1.0) == pytest.approx(1.0)


class TestStructureProgress:
    def test_mean_of_members(self):
        tasks = [Task("a", "p", percent_complete=50), Task("b", "p", percent_complete=100),
                 Task("c", "p", percent_complete=0)]
        assert structure_progress(Milestone("m", task_ids=("a", "b")), tasks) == 0.75

    def test_no_tasks_is_zero(self):
        assert structure_progress(Milestone("m"), []) == 0.0

    def test_missing_members_ignored(self):
        tasks = [Task("a", "p", percent_complete=30)]
        assert structure_progress(Milestone("m", task_ids=("a", "ghost")), tasks) == 0.3


class TestBreakdown:
    def test_per_task_entries(self):
        tasks = [_overdue(3, tid="late"), Task("free", "p", name="Free")]
        result = stamina_breakdown(tasks, NOW)
        assert [e.task_id for e in result.per_task] == ["late", "free"]
        assert result.per_task[0].days_until_due == -3
        assert result.per_task[1].days_until_due is None
        assert result.total == pytest.approx(stamina(tasks, NOW))

    def test_empty_breakdown(self):
        result = stamina_breakdown([], NOW)
        assert result.total == 1.0
        assert result.discovery_ratio == 0.5
        assert result.per_task == ()
