"""Deterministic placement of resource nodes and structures."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from loguru import logger

from fogwork_grid import TileType
from fogwork_terrain.noise import stable_hash

if TYPE_CHECKING:
    from fogwork.types import TileCoord
    from fogwork_grid import TileGrid
    from fogwork_store import Milestone, Task

STRUCTURE_SEED_OFFSET = 9999
DEFAULT_RESOURCE_TYPE = "Unknown"


@dataclass(frozen=True)
class ResourceNodePlacement:
    col: int
    row: int
    task_id: str
    resource_type: str
    depleted: bool


@dataclass(frozen=True)
class StructurePlacement:
    col: int
    row: int
    milestone_id: str


def _is_free(grid: TileGrid, col: int, row: int) -> bool:
    tile = grid.tile(col, row)
    return (
        tile is not None
        and grid.is_walkable(col, row)
        and tile.resource_node_id is None
        and tile.structure_id is None
    )


def _nearest_free(grid: TileGrid, col: int, row: int) -> TileCoord | None:
    """Search square rings of growing size for a free walkable tile."""
    if _is_free(grid, col, row):
        return col, row
    for r in range(1, max(grid.width, grid.height)):
        for dc in range(-r, r + 1):
            for dr in range(-r, r + 1):
                if abs(dc) != r and abs(dr) != r:
                    continue
                if _is_free(grid, col + dc, row + dr):
                    return col + dc, row + dr
    return None


def _polar(
    grid: TileGrid, rng: random.Random, min_radius: float, max_radius: float, margin: int,
) -> TileCoord:
    cx, cz = grid.width / 2, grid.height / 2
    radius = min_radius + rng.random() * (max_radius - min_radius)
    angle = rng.random() * math.pi * 2
    col = round(cx + math.cos(angle) * radius)
    row = round(cz + math.sin(angle) * radius)
    col = max(margin, min(grid.width - 1 - margin, col))
    row = max(margin, min(grid.height - 1 - margin, row))
    return col, row


def _settle(grid: TileGrid, col: int, row: int, what: str) -> TileCoord:
    found = _nearest_free(grid, col, row)
    if found is None:
        logger.warning("No free walkable tile near ({}, {}) for {}", col, row, what)
        return col, row
    return found


def place_resource_nodes(
    grid: TileGrid, tasks: Iterable[Task], base_radius: int = 3,
) -> list[ResourceNodePlacement]:
    """Place one resource node per task, farther out for discovery-heavy work.

    Each task seeds its own ``random.Random`` from ``stable_hash(task.id)``,
    so a task lands on the same tile regardless of its neighbours in the
    list, unless an earlier node already took that tile.
    """
    placements: list[ResourceNodePlacement] = []
    for task in tasks:
        rng = random.Random(stable_hash(task.id))
        weight = task.discovery_percent / 100
        min_radius = base_radius + 3 + weight * 4
        max_radius = base_radius + 6 + weight * 8
        col, row = _polar(grid, rng, min_radius, max_radius, margin=1)
        col, row = _settle(grid, col, row, f"task {task.id!r}")

        grid.set_type(col, row, TileType.GRASS)
        grid.assign_resource_node(col, row, task.id)
        placements.append(ResourceNodePlacement(
            col=col,
            row=row,
            task_id=task.id,
            resource_type=task.category or DEFAULT_RESOURCE_TYPE,
            depleted=task.is_complete,
        ))
    return placements


def place_structures(
    grid: TileGrid, milestones: Iterable[Milestone], base_radius: int = 3,
) -> list[StructurePlacement]:
    placements: list[StructurePlacement] = []
    for milestone in milestones:
        rng = random.Random(stable_hash(milestone.id) + STRUCTURE_SEED_OFFSET)
        col, row = _polar(grid, rng, base_radius + 6, base_radius + 14, margin=2)
        col, row = _settle(grid, col, row, f"milestone {milestone.id!r}")

        grid.set_type(col, row, TileType.DIRT)
        grid.assign_structure(col, row, milestone.id)
        placements.append(StructurePlacement(col=col, row=row, milestone_id=milestone.id))
    return placements
