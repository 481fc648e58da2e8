"""fogwork-terrain - Seeded terrain and deterministic node/structure placement."""
from __future__ import annotations

from fogwork_terrain.generator import generate_terrain
from fogwork_terrain.noise import hex_distance, stable_hash, value_noise
from fogwork_terrain.placement import (
    ResourceNodePlacement,
    StructurePlacement,
    place_resource_nodes,
    place_structures,
)

__all__ = [
    "generate_terrain",
    "hex_distance",
    "stable_hash",
    "value_noise",
    "ResourceNodePlacement",
    "StructurePlacement",
    "place_resource_nodes",
    "place_structures",
]
