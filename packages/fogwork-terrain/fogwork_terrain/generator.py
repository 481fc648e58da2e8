"""Terrain generation for a square island around the home base."""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from loguru import logger

from fogwork_grid import TileType
from fogwork_terrain.noise import hex_distance, value_noise

if TYPE_CHECKING:
    from fogwork_grid import TileGrid

HEX_RADIUS_FACTOR = 0.48
VOID_EDGE = 1.12
WATER_EDGE = 1.0
SHORE_EDGE = 0.90


def _interior_type(dist: float, combined: float, base_radius: int) -> TileType:
    if dist < base_radius + 2:
        return TileType.GRASS if combined > 0.6 else TileType.DIRT
    if combined < 0.15 and dist > 8:
        return TileType.WATER
    if combined > 0.75 and dist > 6:
        return TileType.FOREST
    if combined > 0.55 and dist > 10:
        return TileType.STONE
    return TileType.GRASS


def generate_terrain(grid: TileGrid, seed: int = 42, base_radius: int = 3) -> None:
    """Paint every tile of ``grid`` in place.

    The base disc (distance < ``base_radius`` from the center) is cleared to
    dirt. Further out, two octaves of value noise pick grass, dirt, water,
    forest or stone by distance band. A noisy hexagonal outline turns the
    rim into a dirt shore, a thin water strip and finally void.
    """
    cx, cz = grid.width / 2, grid.height / 2
    hex_radius = min(grid.width, grid.height) * HEX_RADIUS_FACTOR

    for row in range(grid.height):
        for col in range(grid.width):
            dx, dz = col - cx, row - cz
            dist = math.hypot(dx, dz)
            if dist < base_radius:
                grid.set_type(col, row, TileType.DIRT)
                continue

            combined = (value_noise(col, row, 6, seed) * 0.6
                        + value_noise(col + 100, row + 100, 3, seed) * 0.4)
            tile_type = _interior_type(dist, combined, base_radius)

            coast1 = value_noise(col * 0.3, row * 0.3, 4, seed)
            coast2 = value_noise(col * 0.7 + 50, row * 0.7 + 50, 3, seed)
            variation = ((coast1 + coast2 * 0.5) / 1.5 - 0.5) * 0.18
            edge = hex_distance(dx, dz, hex_radius) + variation
            if edge > VOID_EDGE:
                tile_type = TileType.VOID
            elif edge > WATER_EDGE:
                tile_type = TileType.WATER
            elif edge > SHORE_EDGE:
                tile_type = TileType.DIRT

            grid.set_type(col, row, tile_type)

    logger.debug("Generated {}x{} terrain (seed={})", grid.width, grid.height, seed)
