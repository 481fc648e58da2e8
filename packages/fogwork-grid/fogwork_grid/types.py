"""Tile types and per-tile state for fogwork-grid."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TileType(str, Enum):
    GRASS = "grass"
    DIRT = "dirt"
    STONE = "stone"
    WATER = "water"
    FOREST = "forest"
    VOID = "void"


# Tile types that can never be walked on, regardless of ``blocked``.
IMPASSABLE: frozenset[TileType] = frozenset({TileType.WATER, TileType.VOID})


class FogState(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    VISIBLE = "visible"


@dataclass
class Tile:
    """One grid cell.

    Attributes:
        type: Terrain classification.
        blocked: Explicitly non-walkable regardless of terrain.
        resource_node_id: Task whose resource node sits here, set once.
        structure_id: Milestone whose structure sits here, set once.
        visibility: Fog state, owned by the visibility field.
    """

    type: TileType = TileType.GRASS
    blocked: bool = False
    resource_node_id: str | None = None
    structure_id: str | None = None
    visibility: FogState = FogState.HIDDEN


class TileOccupiedError(ValueError):
    """Raised when a tile already holds a different node or structure id."""

    def __init__(self, col: int, row: int, message: str) -> None:
        self.col = col
        self.row = row
        super().__init__(message)
