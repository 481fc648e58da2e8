"""Tests for make_fog_system."""

from fogwork import Engine
from fogwork_fog import VisibilityField, make_fog_system
from fogwork_grid import TileGrid


class TestFogSystem:
    def test_system_smooths_each_frame(self):
        field = VisibilityField(TileGrid(10, 10))
        field.reveal_radius(5, 5, 2)
        engine = Engine(seed=1)
        engine.add_system(make_fog_system(field))

        engine.step(0.1)

        assert field.current_alpha(5, 5) < 1.0

    def test_on_changed_only_when_alphas_move(self):
        field = VisibilityField(TileGrid(10, 10))
        changed = []
        engine = Engine(seed=1)
        engine.add_system(make_fog_system(field, on_changed=changed.append))

        engine.step(0.1)
        assert changed == []

        field.reveal_radius(5, 5, 2)
        engine.step(0.1)
        assert changed == [field]

    def test_zero_dt_frame_changes_nothing(self):
        field = VisibilityField(TileGrid(10, 10))
        field.reveal_radius(5, 5, 2)
        engine = Engine(seed=1)
        engine.add_system(make_fog_system(field))

        engine.step(0.0)

        assert field.current_alpha(5, 5) == 1.0
