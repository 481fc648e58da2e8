"""Fog configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FogConfig:
    """Immutable configuration for the visibility field.

    Attributes:
        explored_floor: Alpha floor of a tile once it has been seen.
        clear_rate: Smoothing rate while fog is thinning (per second).
        return_rate: Smoothing rate while fog drifts back to its floor.
        epsilon: Tiles closer than this to their target are left alone.
    """

    explored_floor: float = 0.55
    clear_rate: float = 6.0
    return_rate: float = 1.5
    epsilon: float = 0.01

    def __post_init__(self) -> None:
        if not 0.0 <= self.explored_floor <= 1.0:
            raise ValueError(f"explored_floor must be in [0, 1], got {self.explored_floor}")
        if self.clear_rate <= 0 or self.return_rate <= 0:
            raise ValueError("smoothing rates must be positive")
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {self.epsilon}")
