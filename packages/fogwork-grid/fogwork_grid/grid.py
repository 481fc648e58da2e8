"""TileGrid - fixed-size tile storage with walkability and radius queries."""
from __future__ import annotations

import math
from typing import Iterator

from fogwork.types import TileCoord

from fogwork_grid.pathfind import pathfind
from fogwork_grid.types import IMPASSABLE, Tile, TileOccupiedError, TileType

_DIRS: tuple[TileCoord, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class TileGrid:
    """Row-major ``width x height`` array of tiles with origin at (0, 0).

    Dimensions are fixed at construction; tile contents are mutated in
    place. Tile centers sit at integer + 0.5 in world space.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._tiles: list[Tile] = [Tile() for _ in range(width * height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, col: int, row: int) -> int:
        return row * self._width + col

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self._width and 0 <= row < self._height

    def tile(self, col: int, row: int) -> Tile | None:
        if not self.in_bounds(col, row):
            return None
        return self._tiles[self._index(col, row)]

    def tiles(self) -> Iterator[tuple[int, int, Tile]]:
        """Yield ``(col, row, tile)`` for every tile in row-major order."""
        for i, tile in enumerate(self._tiles):
            yield i % self._width, i // self._width, tile

    # --- Mutation ---

    def set_type(self, col: int, row: int, tile_type: TileType) -> None:
        tile = self.tile(col, row)
        if tile is not None:
            tile.type = tile_type

    def set_blocked(self, col: int, row: int, blocked: bool = True) -> None:
        tile = self.tile(col, row)
        if tile is not None:
            tile.blocked = blocked

    def assign_resource_node(self, col: int, row: int, task_id: str) -> None:
        tile = self._require(col, row)
        if tile.resource_node_id is not None and tile.resource_node_id != task_id:
            raise TileOccupiedError(
                col, row,
                f"({col}, {row}) already holds resource node {tile.resource_node_id!r}",
            )
        tile.resource_node_id = task_id

    def assign_structure(self, col: int, row: int, milestone_id: str) -> None:
        tile = self._require(col, row)
        if tile.structure_id is not None and tile.structure_id != milestone_id:
            raise TileOccupiedError(
                col, row,
                f"({col}, {row}) already holds structure {tile.structure_id!r}",
            )
        tile.structure_id = milestone_id

    def _require(self, col: int, row: int) -> Tile:
        tile = self.tile(col, row)
        if tile is None:
            raise ValueError(
                f"({col}, {row}) out of bounds for {self._width}x{self._height} grid"
            )
        return tile

    # --- Coordinates ---

    def tile_to_world(self, col: int, row: int) -> tuple[float, float]:
        return col + 0.5, row + 0.5

    def world_to_tile(self, x: float, z: float) -> TileCoord:
        return math.floor(x), math.floor(z)

    # --- Queries ---

    def is_walkable(self, col: int, row: int) -> bool:
        tile = self.tile(col, row)
        if tile is None or tile.blocked:
            return False
        return tile.type not in IMPASSABLE

    def neighbors(self, col: int, row: int) -> list[TileCoord]:
        result: list[TileCoord] = []
        for dc, dr in _DIRS:
            nc, nr = col + dc, row + dr
            if self.in_bounds(nc, nr):
                result.append((nc, nr))
        return result

    def tiles_in_radius(
        self, col: int, row: int, radius: float,
    ) -> list[tuple[int, int, Tile]]:
        """Tiles whose squared distance from (col, row) is at most radius**2."""
        result: list[tuple[int, int, Tile]] = []
        r2 = radius * radius
        min_c = max(0, math.floor(col - radius))
        max_c = min(self._width - 1, math.ceil(col + radius))
        min_r = max(0, math.floor(row - radius))
        max_r = min(self._height - 1, math.ceil(row + radius))
        for r in range(min_r, max_r + 1):
            for c in range(min_c, max_c + 1):
                dc, dr = c - col, r - row
                if dc * dc + dr * dr <= r2:
                    result.append((c, r, self._tiles[self._index(c, r)]))
        return result

    def nearest_walkable_neighbor(
        self, col: int, row: int, near: TileCoord,
    ) -> TileCoord | None:
        """Walkable orthogonal neighbor of (col, row) closest to ``near``."""
        best: TileCoord | None = None
        best_dist = math.inf
        for nc, nr in self.neighbors(col, row):
            if not self.is_walkable(nc, nr):
                continue
            d = (nc - near[0]) ** 2 + (nr - near[1]) ** 2
            if d < best_dist:
                best_dist = d
                best = (nc, nr)
        return best

    def find_path(
        self,
        from_col: int,
        from_row: int,
        to_col: int,
        to_row: int,
        max_expansions: int | None = None,
    ) -> list[TileCoord] | None:
        return pathfind(
            self, (from_col, from_row), (to_col, to_row),
            max_expansions=max_expansions,
        )
