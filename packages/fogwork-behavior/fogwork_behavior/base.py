"""HomeBase - where agents spawn, deposit and rest."""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class HomeBase:
    col: int
    row: int
    radius: int = 3

    @property
    def center(self) -> tuple[float, float]:
        return self.col + 0.5, self.row + 0.5

    def deposit_position(self) -> tuple[float, float]:
        x, z = self.center
        return x, z + self.radius * 0.5

    def deposit_tile(self) -> tuple[int, int]:
        x, z = self.deposit_position()
        return math.floor(x), math.floor(z)

    def spawn_position(self, index: int, total: int) -> tuple[float, float]:
        """Point on an arc just outside the base, spread by ``index``."""
        angle = math.pi * 0.3 + (index / max(1, total)) * math.pi * 0.4
        r = self.radius + 1
        x, z = self.center
        return x + math.cos(angle) * r, z + math.sin(angle) * r
