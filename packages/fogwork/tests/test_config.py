"""Tests for WorldConfig defaults, validation and key/value loading."""
from __future__ import annotations

import dataclasses

import pytest

from fogwork import WorldConfig


class TestWorldConfigDefaults:
    def test_defaults(self) -> None:
        cfg = WorldConfig()
        assert cfg.map_size == 80
        assert cfg.base_radius == 3
        assert cfg.scout_sight_radius == 4
        assert cfg.gather_sight_radius == 1
        assert cfg.sync_interval == 60.0

    def test_frozen(self) -> None:
        cfg = WorldConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.map_size = 10  # type: ignore[misc]


class TestWorldConfigValidation:
    def test_zero_map_size(self) -> None:
        with pytest.raises(ValueError, match="map_size"):
            WorldConfig(map_size=0)

    def test_negative_base_radius(self) -> None:
        with pytest.raises(ValueError, match="base_radius"):
            WorldConfig(base_radius=-1)

    def test_negative_sight(self) -> None:
        with pytest.raises(ValueError):
            WorldConfig(scout_sight_radius=-2)

    def test_non_positive_sync_interval(self) -> None:
        with pytest.raises(ValueError, match="sync_interval"):
            WorldConfig(sync_interval=0)


class TestFromMapping:
    def test_upper_case_keys(self) -> None:
        cfg = WorldConfig.from_mapping({"MAP_SIZE": 40, "BASE_RADIUS": 2})
        assert cfg.map_size == 40
        assert cfg.base_radius == 2

    def test_unknown_keys_ignored(self) -> None:
        cfg = WorldConfig.from_mapping({"EMAIL_DOMAIN": "example.com", "seed": "9"})
        assert cfg.seed == 9
        assert cfg.map_size == 80

    def test_float_field_coerced(self) -> None:
        cfg = WorldConfig.from_mapping({"SYNC_INTERVAL": "30"})
        assert cfg.sync_interval == 30.0
        assert isinstance(cfg.sync_interval, float)
