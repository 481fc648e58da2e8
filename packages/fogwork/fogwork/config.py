"""World configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class WorldConfig:
    """Immutable, read-only configuration shared by the core subsystems.

    Attributes:
        map_size: Width and height of the square tile grid.
        base_radius: Radius of the cleared home base, in tiles.
        scout_sight_radius: Sight radius of an agent while scouting.
        gather_sight_radius: Sight radius of an agent in any other state.
        sync_interval: Seconds between store refreshes requested by the host.
        seed: Terrain seed and default engine seed.
    """

    map_size: int = 80
    base_radius: int = 3
    scout_sight_radius: int = 4
    gather_sight_radius: int = 1
    sync_interval: float = 60.0
    seed: int = 42

    def __post_init__(self) -> None:
        if self.map_size <= 0:
            raise ValueError(f"map_size must be positive, got {self.map_size}")
        if self.base_radius < 0:
            raise ValueError(f"base_radius must be >= 0, got {self.base_radius}")
        if self.scout_sight_radius < 0 or self.gather_sight_radius < 0:
            raise ValueError("sight radii must be >= 0")
        if self.sync_interval <= 0:
            raise ValueError(f"sync_interval must be positive, got {self.sync_interval}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> WorldConfig:
        """Build a config from plain key/value pairs such as ``MAP_SIZE``.

        Keys are matched case-insensitively against the field names; unknown
        keys are ignored so a host may pass its whole settings table.
        """
        types = {f.name: f.type for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key.lower()
            if name not in types:
                continue
            kwargs[name] = float(value) if types[name] == "float" else int(value)
        return cls(**kwargs)
