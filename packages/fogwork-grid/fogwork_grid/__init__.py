"""fogwork-grid - Tile grid, walkability and A* pathfinding."""
from __future__ import annotations

from fogwork_grid.types import FogState, IMPASSABLE, Tile, TileOccupiedError, TileType
from fogwork_grid.grid import TileGrid
from fogwork_grid.pathfind import manhattan, pathfind

__all__ = [
    "FogState",
    "IMPASSABLE",
    "Tile",
    "TileOccupiedError",
    "TileType",
    "TileGrid",
    "manhattan",
    "pathfind",
]
