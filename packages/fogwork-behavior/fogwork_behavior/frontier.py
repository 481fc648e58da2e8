"""Frontier search for free-exploration scouting."""
from __future__ import annotations

import random
from collections import deque
from typing import TYPE_CHECKING

from fogwork_grid import FogState

if TYPE_CHECKING:
    from fogwork_grid import TileGrid

TileCoord = tuple[int, int]


def _borders_hidden(grid: TileGrid, col: int, row: int) -> bool:
    for nc, nr in grid.neighbors(col, row):
        if grid.tile(nc, nr).visibility is FogState.HIDDEN and grid.is_walkable(nc, nr):
            return True
    return False


def find_frontier_tile(
    grid: TileGrid,
    start: TileCoord,
    budget: int = 200,
    rng: random.Random | None = None,
) -> TileCoord | None:
    """Pick a random walkable explored tile next to hidden walkable ground.

    Breadth-first from ``start``, expanding only through walkable tiles and
    stopping after ``budget`` tiles have been dequeued. Returns ``None`` when
    no frontier lies within the budget.
    """
    if rng is None:
        rng = random.Random()
    queue: deque[TileCoord] = deque([start])
    visited: set[TileCoord] = {start}
    candidates: list[TileCoord] = []
    checked = 0

    while queue and checked < budget:
        col, row = queue.popleft()
        checked += 1
        tile = grid.tile(col, row)
        if tile is None:
            continue
        # The start is expanded even when an agent stands off walkable ground.
        if not grid.is_walkable(col, row) and (col, row) != start:
            continue

        if (grid.is_walkable(col, row)
                and tile.visibility is not FogState.HIDDEN
                and _borders_hidden(grid, col, row)):
            candidates.append((col, row))

        for n in grid.neighbors(col, row):
            if n not in visited:
                visited.add(n)
                queue.append(n)

    if not candidates:
        return None
    return rng.choice(candidates)
