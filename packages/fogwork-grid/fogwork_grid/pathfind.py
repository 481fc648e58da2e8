"""A* pathfinding over a 4-connected tile grid."""
from __future__ import annotations

import heapq
from typing import TYPE_CHECKING, Callable

from fogwork.types import TileCoord

if TYPE_CHECKING:
    from fogwork_grid.grid import TileGrid


def manhattan(a: TileCoord, b: TileCoord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def pathfind(
    grid: TileGrid,
    start: TileCoord,
    goal: TileCoord,
    walkable: Callable[[TileCoord], bool] | None = None,
    max_expansions: int | None = None,
) -> list[TileCoord] | None:
    """Return a shortest start-to-goal tile list (both inclusive), or None.

    Uniform step cost with a Manhattan heuristic. ``walkable`` defaults to
    the grid's own walkability. The start tile is not required to be
    walkable so an agent nudged onto a bad tile can still leave it.
    ``max_expansions`` caps the number of tiles closed before giving up.
    """
    if walkable is None:
        walkable = lambda coord: grid.is_walkable(*coord)  # noqa: E731
    if not walkable(goal):
        return None

    open_set: list[tuple[int, int, TileCoord]] = [(manhattan(start, goal), 0, start)]
    came_from: dict[TileCoord, TileCoord] = {}
    g_score: dict[TileCoord, int] = {start: 0}
    counter = 1

    closed: set[TileCoord] = set()

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        closed.add(current)
        if current == goal:
            path: list[TileCoord] = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path
        if max_expansions is not None and len(closed) >= max_expansions:
            return None

        for neighbor in grid.neighbors(*current):
            if not walkable(neighbor):
                continue
            tentative = g_score[current] + 1
            if tentative < g_score.get(neighbor, tentative + 1):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                heapq.heappush(
                    open_set, (tentative + manhattan(neighbor, goal), counter, neighbor)
                )
                counter += 1

    return None
