"""Tests for build_simulation wiring and summaries."""
from datetime import date, datetime

import pytest

from fogwork import WorldConfig
from fogwork_grid import FogState
from fogwork_sim import build_simulation
from fogwork_store import InMemoryTaskStore, Milestone, Person, Task

NOW = datetime(2026, 3, 1, 12, 0, 0)
CONFIG = WorldConfig(map_size=40, seed=7)


def _store():
    return InMemoryTaskStore(
        people=[Person("alice", "Alice"), Person("bob", "Bob")],
        tasks=[
            Task("t1", "alice", "Spec", discovery_percent=70, category="Research",
                 expected_date=date(2026, 3, 10)),
            Task("t2", "alice", "Build", discovery_percent=20, milestone_id="m1"),
            Task("t3", "bob", "Ship", discovery_percent=40, milestone_id="m1"),
        ],
        milestones=[Milestone("m1", "Launch", ("t2", "t3"))],
    )


def _sim(store=None):
    return build_simulation(store or _store(), CONFIG, clock_fn=lambda: NOW)


class TestBuild:
    def test_agents_spawned_for_people(self):
        sim = _sim()
        assert sorted(a.person_id for a in sim.director.agents()) == ["alice", "bob"]

    def test_placements_for_every_task_and_milestone(self):
        sim = _sim()
        assert [p.task_id for p in sim.node_placements] == ["t1", "t2", "t3"]
        assert [p.milestone_id for p in sim.structure_placements] == ["m1"]
        for p in sim.node_placements:
            assert sim.grid.tile(p.col, p.row).resource_node_id == p.task_id

    def test_base_revealed_and_cleared(self):
        sim = _sim()
        c = CONFIG.map_size // 2
        assert sim.fog.reveal_floor(c, c) == 0.0
        assert sim.fog.state(c + CONFIG.base_radius + 2, c) is FogState.REVEALED
        assert sim.fog.state(0, 0) is FogState.HIDDEN

    def test_placement_is_deterministic(self):
        a, b = _sim(), _sim()
        assert ([(p.col, p.row) for p in a.node_placements]
                == [(p.col, p.row) for p in b.node_placements])
        assert ([(p.col, p.row) for p in a.structure_placements]
                == [(p.col, p.row) for p in b.structure_placements])


class TestRun:
    def test_run_advances_clock_and_explores(self):
        sim = _sim()
        before = sim.summary(NOW).revealed_tiles
        sim.run(200, 0.05)
        summary = sim.summary(NOW)
        assert summary.frame == 200
        assert summary.elapsed == pytest.approx(10.0)
        assert summary.revealed_tiles >= before

    def test_summary_contents(self):
        sim = _sim()
        sim.step(0.05)
        summary = sim.summary(NOW)
        assert set(summary.agent_states) == {"alice", "bob"}
        assert summary.task_progress == {"t1": 0.0, "t2": 0.0, "t3": 0.0}
        assert summary.milestone_progress == {"m1": 0.0}
        assert all(0.0 <= s <= 1.0 for s in summary.agent_stamina.values())

    def test_task_added_later_gets_a_node(self):
        store = _store()
        sim = _sim(store)
        store.add_task(Task("t4", "bob", discovery_percent=30))
        sim.step(0.05)
        assert sim.director.node_tile("t4") is not None
        assert sim.node_placements[-1].task_id == "t4"

    def test_person_added_later_gets_an_agent(self):
        store = _store()
        sim = _sim(store)
        store.add_person(Person("carol"))
        sim.step(0.05)
        assert sim.director.agent("carol").person_id == "carol"

    def test_milestone_added_later_gets_a_structure(self):
        store = _store()
        sim = _sim(store)
        store.add_milestone(Milestone("m2", "Beta"))
        sim.step(0.05)
        assert sim.director.structure_tile("m2") is not None

    def test_milestone_removed_drops_its_structure(self):
        store = _store()
        sim = _sim(store)
        assert sim.director.structure_tile("m1") is not None
        store.remove_milestone("m1")
        sim.step(0.05)
        assert sim.director.structure_tile("m1") is None
        assert all(p.milestone_id != "m1" for p in sim.structure_placements)
        assert "m1" not in sim.summary(NOW).milestone_progress
