"""Tests for ResourceNodeTracker depletion and regrowth."""
from fogwork_behavior import NodePhase, ResourceNodeTracker


class RecordingHooks:
    def __init__(self):
        self.calls = []

    def set_node_depleted(self, task_id):
        self.calls.append(("depleted", task_id))

    def set_node_available(self, task_id):
        self.calls.append(("available", task_id))

    def set_node_visible(self, task_id, visible):
        self.calls.append(("node_visible", task_id, visible))

    def set_structure_visible(self, milestone_id, visible):
        self.calls.append(("structure_visible", milestone_id, visible))


class TestResourceNodeTracker:
    def test_unknown_node_is_available(self):
        tracker = ResourceNodeTracker()
        assert tracker.is_available("t1")
        assert tracker.phase("t1") is NodePhase.AVAILABLE

    def test_full_cycle(self):
        hooks = RecordingHooks()
        tracker = ResourceNodeTracker(hooks)
        tracker.deplete("t1")
        assert tracker.phase("t1") is NodePhase.DEPLETING
        assert not tracker.is_available("t1")

        tracker.update(0.5)
        assert tracker.phase("t1") is NodePhase.DEPLETED
        tracker.update(59.0)
        assert tracker.phase("t1") is NodePhase.DEPLETED
        tracker.update(1.0)
        assert tracker.phase("t1") is NodePhase.REGROWING
        tracker.update(15.0)
        assert tracker.is_available("t1")
        assert hooks.calls == [("depleted", "t1"), ("available", "t1")]

    def test_permanent_never_regrows(self):
        tracker = ResourceNodeTracker()
        tracker.deplete("t1", permanent=True)
        for _ in range(10):
            tracker.update(100.0)
        assert tracker.phase("t1") is NodePhase.DEPLETED
        assert tracker.is_permanent("t1")

    def test_repeat_depletion_ignored(self):
        hooks = RecordingHooks()
        tracker = ResourceNodeTracker(hooks)
        tracker.deplete("t1")
        tracker.update(0.3)
        tracker.deplete("t1")
        tracker.update(0.3)
        assert tracker.phase("t1") is NodePhase.DEPLETED
        assert hooks.calls == [("depleted", "t1")]

    def test_permanent_upgrades_running_depletion(self):
        tracker = ResourceNodeTracker()
        tracker.deplete("t1")
        tracker.deplete("t1", permanent=True)
        tracker.update(0.5)
        tracker.update(500.0)
        assert tracker.phase("t1") is NodePhase.DEPLETED

    def test_mark_depleted_skips_animation(self):
        tracker = ResourceNodeTracker()
        tracker.mark_depleted("t1")
        assert tracker.phase("t1") is NodePhase.DEPLETED
        assert tracker.is_permanent("t1")

    def test_forget(self):
        tracker = ResourceNodeTracker()
        tracker.deplete("t1", permanent=True)
        tracker.forget("t1")
        assert tracker.is_available("t1")
