"""VisibilityField - dual-layer fog of war over a TileGrid.

Every tile carries three alphas, all starting at 1.0 (fully fogged):

    reveal_floor   the lowest alpha the tile may drift back to; only ever
                   lowered, by ``reveal_radius`` or by an agent's sight
    target_alpha   recomputed each frame from agent positions
    current_alpha  eased toward the target by ``update(dt)``

The fog state (hidden / revealed / visible) lives on the grid's tiles so
other subsystems can read it without holding a reference to the field.
Hidden tiles can become revealed or visible; visible tiles fall back to
revealed when no agent is near; nothing ever returns to hidden.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, NamedTuple

from loguru import logger

from fogwork_fog.config import FogConfig
from fogwork_grid import FogState

if TYPE_CHECKING:
    from fogwork_grid import Tile, TileGrid


class SightSource(NamedTuple):
    col: int
    row: int
    sight_radius: int


class VisibilityField:
    def __init__(self, grid: TileGrid, config: FogConfig | None = None) -> None:
        self._grid = grid
        self._config = config if config is not None else FogConfig()
        size = grid.width * grid.height
        self._floor: list[float] = [1.0] * size
        self._target: list[float] = [1.0] * size
        self._current: list[float] = [1.0] * size

    @property
    def grid(self) -> TileGrid:
        return self._grid

    @property
    def config(self) -> FogConfig:
        return self._config

    def _index(self, col: int, row: int) -> int:
        return row * self._grid.width + col

    def _lower_floor(self, idx: int, alpha: float) -> None:
        if alpha < self._floor[idx]:
            self._floor[idx] = alpha
        if self._floor[idx] < self._target[idx]:
            self._target[idx] = self._floor[idx]

    def _explore(self, col: int, row: int, tile: Tile) -> None:
        if tile.visibility is FogState.HIDDEN:
            tile.visibility = FogState.REVEALED
        self._lower_floor(self._index(col, row), self._config.explored_floor)

    # --- Permanent reveal ---

    def reveal_radius(self, col: int, row: int, radius: int) -> int:
        """Permanently thin the fog around (col, row).

        Tiles within ``radius`` drop to the explored floor; tiles within
        ``max(1, radius - 1)`` (never beyond ``radius``) are cleared completely.
        Returns the number of tiles that were hidden before the call.
        """
        newly = 0
        for c, r, tile in self._grid.tiles_in_radius(col, row, radius):
            if tile.visibility is FogState.HIDDEN:
                newly += 1
            self._explore(c, r, tile)
        inner = min(radius, max(1, radius - 1))
        for c, r, _ in self._grid.tiles_in_radius(col, row, inner):
            self._lower_floor(self._index(c, r), 0.0)
        logger.debug("Revealed {} new tiles around ({}, {}) r={}", newly, col, row, radius)
        return newly

    # --- Per-frame visibility ---

    def update_visibility(self, sources: Iterable[tuple[int, int, int]]) -> None:
        """Recompute targets from every agent's position in one batch.

        All sources are applied against the same reset state so each
        agent's sight is seen by every other agent within the same frame.
        """
        floor = self._floor
        target = self._target
        for i, (_, _, tile) in enumerate(self._grid.tiles()):
            target[i] = floor[i]
            if tile.visibility is FogState.VISIBLE:
                tile.visibility = FogState.REVEALED

        for col, row, sight in sources:
            for c, r, tile in self._grid.tiles_in_radius(col, row, sight):
                self._explore(c, r, tile)
                tile.visibility = FogState.VISIBLE
                target[self._index(c, r)] = 0.0
            # Outer ring is remembered but stays at its floor
            for c, r, tile in self._grid.tiles_in_radius(col, row, sight + 1):
                if tile.visibility is FogState.HIDDEN:
                    self._explore(c, r, tile)

    # --- Smoothing ---

    def update(self, dt: float) -> bool:
        """Ease every tile's current alpha toward its target.

        Clearing uses ``clear_rate`` and returning uses ``return_rate``.
        Returns True when any tile changed.
        """
        cfg = self._config
        clear_step = min(1.0, cfg.clear_rate * dt)
        return_step = min(1.0, cfg.return_rate * dt)
        current = self._current
        changed = False
        for i, target in enumerate(self._target):
            diff = target - current[i]
            if abs(diff) <= cfg.epsilon:
                continue
            current[i] += diff * (clear_step if diff < 0 else return_step)
            changed = True
        return changed

    # --- Queries ---

    def state(self, col: int, row: int) -> FogState | None:
        tile = self._grid.tile(col, row)
        return tile.visibility if tile is not None else None

    def is_revealed(self, col: int, row: int) -> bool:
        tile = self._grid.tile(col, row)
        return tile is not None and tile.visibility is not FogState.HIDDEN

    def is_visible(self, col: int, row: int) -> bool:
        tile = self._grid.tile(col, row)
        return tile is not None and tile.visibility is FogState.VISIBLE

    def reveal_floor(self, col: int, row: int) -> float:
        return self._floor[self._index(col, row)]

    def target_alpha(self, col: int, row: int) -> float:
        return self._target[self._index(col, row)]

    def current_alpha(self, col: int, row: int) -> float:
        return self._current[self._index(col, row)]

    def alpha_grid(self) -> list[list[float]]:
        """Current alphas as ``rows x cols`` for a renderer's fog texture."""
        w = self._grid.width
        return [self._current[r * w:(r + 1) * w] for r in range(self._grid.height)]
