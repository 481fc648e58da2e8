"""Stamina - deadline pressure and discovery balance folded into one scalar.

Stamina is the product of two factors, clamped to [0, 1]:

    time factor   weighted mean of per-task "time energy", which drains by
                  DECAY_RATE per day overdue per unit of remaining work
    phase factor  quadratic penalty on how far the weighted discovery ratio
                  sits from IDEAL_DISCOVERY

Both means weight a task by its remaining work, floored at MIN_WEIGHT so a
nearly finished task still counts a little and an all-complete set never
divides by zero.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from fogwork_store import Milestone, Task

SECONDS_PER_DAY = 86400.0
DECAY_RATE = 0.03
IDEAL_DISCOVERY = 0.4
MAX_PHASE_PENALTY = 0.8
MAX_DEVIATION = 0.6
MIN_WEIGHT = 0.1
NEUTRAL_BALANCE = 0.5


@dataclass(frozen=True)
class TaskEnergy:
    task_id: str
    name: str
    time_energy: float
    percent_complete: float
    days_until_due: int | None


@dataclass(frozen=True)
class StaminaBreakdown:
    total: float
    time_factor: float
    phase_factor: float
    discovery_ratio: float
    per_task: tuple[TaskEnergy, ...]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _due(expected: date) -> datetime:
    return datetime.combine(expected, time.min)


def _weight(task: Task) -> float:
    return max(1.0 - task.percent_complete / 100.0, MIN_WEIGHT)


def _weighted_mean(pairs: Iterable[tuple[float, float]], empty: float) -> float:
    total = 0.0
    weights = 0.0
    for value, weight in pairs:
        total += value * weight
        weights += weight
    return total / weights if weights > 0 else empty


def task_time_energy(task: Task, now: datetime) -> float:
    if task.expected_date is None:
        return 1.0
    overdue_days = max(0.0, (now - _due(task.expected_date)).total_seconds() / SECONDS_PER_DAY)
    if overdue_days == 0:
        return 1.0
    remaining = 1.0 - task.percent_complete / 100.0
    return max(0.0, 1.0 - overdue_days * DECAY_RATE * remaining)


def time_factor(tasks: Sequence[Task], now: datetime) -> float:
    return _weighted_mean(((task_time_energy(t, now), _weight(t)) for t in tasks), 1.0)


def phase_balance(tasks: Sequence[Task]) -> float:
    """Weighted share of discovery work; 0.5 for an empty set."""
    return _weighted_mean(
        ((t.discovery_percent / 100.0, _weight(t)) for t in tasks), NEUTRAL_BALANCE,
    )


def phase_factor(tasks: Sequence[Task]) -> float:
    deviation = abs(phase_balance(tasks) - IDEAL_DISCOVERY) / MAX_DEVIATION
    return 1.0 - MAX_PHASE_PENALTY * deviation * deviation


def stamina(tasks: Sequence[Task], now: datetime | None = None) -> float:
    if not tasks:
        return 1.0
    if now is None:
        now = datetime.now()
    return _clamp(time_factor(tasks, now) * phase_factor(tasks), 0.0, 1.0)


def stamina_breakdown(tasks: Sequence[Task], now: datetime | None = None) -> StaminaBreakdown:
    if now is None:
        now = datetime.now()
    per_task = []
    for t in tasks:
        days = None
        if t.expected_date is not None:
            days = math.ceil((_due(t.expected_date) - now).total_seconds() / SECONDS_PER_DAY)
        per_task.append(TaskEnergy(
            task_id=t.id,
            name=t.name,
            time_energy=task_time_energy(t, now),
            percent_complete=t.percent_complete,
            days_until_due=days,
        ))
    tf = time_factor(tasks, now)
    pf = phase_factor(tasks)
    return StaminaBreakdown(
        total=stamina(tasks, now),
        time_factor=tf,
        phase_factor=pf,
        discovery_ratio=phase_balance(tasks),
        per_task=tuple(per_task),
    )


def gather_rate(stamina_value: float) -> float:
    return 0.5 + 0.5 * stamina_value


def scout_speed(stamina_value: float) -> float:
    return 0.6 + 0.4 * stamina_value


def structure_progress(milestone: Milestone, tasks: Iterable[Task]) -> float:
    """Mean completion (0..1) of the milestone's tasks; 0 when it has none."""
    ids = set(milestone.task_ids)
    members = [t for t in tasks if t.id in ids]
    if not members:
        return 0.0
    return sum(t.percent_complete for t in members) / (len(members) * 100.0)
