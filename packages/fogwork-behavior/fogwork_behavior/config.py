"""BehaviorConfig - timings, speeds and search budgets for the director."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BehaviorConfig:
    """Tuning for agent behavior.

    Durations are in seconds, speeds in tiles per second. ``scout_speed`` is
    scaled by the stamina-derived scout multiplier. ``path_search_budget``
    caps A* expansions per request; ``None`` searches exhaustively.
    """

    gather_time: float = 4.0
    build_time: float = 3.0
    deposit_time: float = 1.5
    rest_time: float = 5.0
    rest_threshold: float = 0.15
    frontier_budget: int = 200
    arrival_tolerance: float = 0.15
    resource_speed: float = 3.0
    return_speed: float = 2.5
    structure_speed: float = 2.5
    scout_speed: float = 3.0
    progress_min: float = 15.0
    progress_max: float = 25.0
    idle_reassign_rate: float = 0.5
    unreachable_cooldown: float = 10.0
    separation_radius: float = 0.8
    separation_strength: float = 2.0
    path_search_budget: int | None = None

    def __post_init__(self) -> None:
        for name in ("gather_time", "build_time", "deposit_time"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.rest_time < 0:
            raise ValueError(f"rest_time must be >= 0, got {self.rest_time}")
        if not 0.0 <= self.rest_threshold <= 1.0:
            raise ValueError(f"rest_threshold must be in [0, 1], got {self.rest_threshold}")
        if self.frontier_budget <= 0:
            raise ValueError(f"frontier_budget must be positive, got {self.frontier_budget}")
        if self.arrival_tolerance <= 0:
            raise ValueError(
                f"arrival_tolerance must be positive, got {self.arrival_tolerance}"
            )
        if not 0.0 <= self.progress_min <= self.progress_max:
            raise ValueError(
                f"progress range must satisfy 0 <= min <= max, "
                f"got [{self.progress_min}, {self.progress_max}]"
            )
        if self.unreachable_cooldown < 0:
            raise ValueError(
                f"unreachable_cooldown must be >= 0, got {self.unreachable_cooldown}"
            )
