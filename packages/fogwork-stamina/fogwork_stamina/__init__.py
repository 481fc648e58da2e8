"""fogwork-stamina - Derived agent stamina from task deadlines and phase balance."""
from __future__ import annotations

from fogwork_stamina.stamina import (
    DECAY_RATE,
    IDEAL_DISCOVERY,
    StaminaBreakdown,
    TaskEnergy,
    gather_rate,
    phase_balance,
    phase_factor,
    scout_speed,
    stamina,
    stamina_breakdown,
    structure_progress,
    task_time_energy,
    time_factor,
)

__all__ = [
    "DECAY_RATE",
    "IDEAL_DISCOVERY",
    "StaminaBreakdown",
    "TaskEnergy",
    "gather_rate",
    "phase_balance",
    "phase_factor",
    "scout_speed",
    "stamina",
    "stamina_breakdown",
    "structure_progress",
    "task_time_energy",
    "time_factor",
]
