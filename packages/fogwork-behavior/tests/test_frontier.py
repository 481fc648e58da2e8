"""Tests for frontier search and HomeBase positions."""
import math
import random

import pytest

from fogwork_behavior import HomeBase, find_frontier_tile
from fogwork_grid import FogState, TileGrid, TileType

PATCH = [(9, 10), (10, 10), (11, 10)]


def _patch_grid():
    grid = TileGrid(20, 20)
    for c, r in PATCH:
        grid.tile(c, r).visibility = FogState.REVEALED
    return grid


def _has_hidden_neighbor(grid, col, row):
    return any(grid.tile(c, r).visibility is FogState.HIDDEN
               for c, r in grid.neighbors(col, row))


class TestFindFrontierTile:
    def test_patch_in_hidden_grid(self):
        grid = _patch_grid()
        for seed in range(20):
            tile = find_frontier_tile(grid, (10, 10), 200, random.Random(seed))
            assert tile in PATCH
            assert _has_hidden_neighbor(grid, *tile)

    def test_fully_revealed_returns_none(self):
        grid = TileGrid(8, 8)
        for _, _, tile in grid.tiles():
            tile.visibility = FogState.REVEALED
        assert find_frontier_tile(grid, (4, 4), 200, random.Random(0)) is None

    def test_fully_hidden_returns_none(self):
        assert find_frontier_tile(TileGrid(8, 8), (4, 4), 200, random.Random(0)) is None

    def test_hidden_water_is_not_frontier(self):
        grid = TileGrid(3, 1)
        grid.tile(0, 0).visibility = FogState.REVEALED
        grid.tile(1, 0).visibility = FogState.REVEALED
        grid.set_type(2, 0, TileType.WATER)
        assert find_frontier_tile(grid, (0, 0), 200, random.Random(0)) is None

    def test_budget_limits_search(self):
        grid = TileGrid(30, 1)
        for c in range(29):
            grid.tile(c, 0).visibility = FogState.REVEALED
        assert find_frontier_tile(grid, (0, 0), 5, random.Random(0)) is None
        assert find_frontier_tile(grid, (0, 0), 200, random.Random(0)) == (28, 0)

    def test_does_not_expand_through_walls(self):
        grid = TileGrid(5, 1)
        for c in range(4):
            grid.tile(c, 0).visibility = FogState.REVEALED
        grid.set_type(2, 0, TileType.WATER)
        assert find_frontier_tile(grid, (0, 0), 200, random.Random(0)) is None

    def test_seeded_choice_is_reproducible(self):
        grid = _patch_grid()
        a = [find_frontier_tile(grid, (10, 10), 200, random.Random(3)) for _ in range(5)]
        b = [find_frontier_tile(grid, (10, 10), 200, random.Random(3)) for _ in range(5)]
        assert a == b


class TestHomeBase:
    def test_deposit_below_center(self):
        base = HomeBase(10, 10, radius=4)
        assert base.deposit_position() == (10.5, 12.5)
        assert base.deposit_tile() == (10, 12)

    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_spawn_on_arc(self, index):
        base = HomeBase(10, 10, radius=3)
        x, z = base.spawn_position(index, 4)
        assert math.hypot(x - 10.5, z - 10.5) == pytest.approx(4.0)

    def test_spawn_spread(self):
        base = HomeBase(10, 10)
        assert base.spawn_position(0, 3) != base.spawn_position(1, 3)
