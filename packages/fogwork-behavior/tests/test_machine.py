"""Tests for UnitStateMachine transitions and labels."""
import pytest

from fogwork_behavior import (
    TRANSITIONS,
    Building,
    Carried,
    Depositing,
    Gathering,
    Idle,
    InvalidTransitionError,
    MovingToResource,
    MovingToStructure,
    Resting,
    ReturningToBase,
    Scouting,
    UNIT_STATE_LABELS,
    UnitStateMachine,
    UnitStates,
    can_transition,
)

CARRIED = Carried("Design", "t1")


class TestTransitions:
    def test_starts_idle_without_path(self):
        sm = UnitStateMachine("alice")
        assert sm.kind is UnitStates.IDLE
        assert sm.path is None
        assert sm.waypoint is None

    def test_full_gather_loop(self):
        sm = UnitStateMachine("alice")
        sm.transition(MovingToResource("t1", (3, 4)))
        sm.transition(Gathering("t1"))
        sm.transition(ReturningToBase("t1", CARRIED))
        sm.transition(Depositing("t1", CARRIED))
        sm.transition(Idle())
        assert sm.kind is UnitStates.IDLE

    def test_build_loop(self):
        sm = UnitStateMachine("alice")
        sm.transition(Scouting((1, 1), task_id="t1"))
        sm.transition(Gathering("t1"))
        sm.transition(MovingToStructure("t1", "m1", (5, 5), CARRIED))
        sm.transition(Building("t1", "m1", CARRIED))
        sm.transition(Idle())

    @pytest.mark.parametrize("source,target", [
        (Idle(), Gathering("t1")),
        (Idle(), Building("t1", "m1", CARRIED)),
        (MovingToResource("t1", (0, 0)), ReturningToBase("t1", CARRIED)),
    ])
    def test_invalid_transition_raises(self, source, target):
        sm = UnitStateMachine("alice")
        sm.state = source
        with pytest.raises(InvalidTransitionError) as exc:
            sm.transition(target)
        assert exc.value.source is source.kind
        assert exc.value.target is target.kind

    def test_resting_cannot_start_gathering(self):
        sm = UnitStateMachine("alice")
        sm.transition(Resting(5.0))
        with pytest.raises(InvalidTransitionError):
            sm.transition(Gathering("t1"))

    def test_every_state_may_abandon_to_idle(self):
        for kind in UnitStates:
            assert can_transition(kind, UnitStates.IDLE)

    def test_table_covers_every_state(self):
        assert set(TRANSITIONS) == set(UnitStates)

    def test_transition_clears_path(self):
        sm = UnitStateMachine("alice")
        sm.transition(MovingToResource("t1", (2, 0)))
        sm.set_path([(0, 0), (1, 0), (2, 0)])
        sm.path_index = 2
        sm.transition(Gathering("t1"))
        assert sm.path is None
        assert sm.path_index == 0

    def test_refresh_keeps_path(self):
        sm = UnitStateMachine("alice")
        sm.transition(Resting(5.0))
        sm.set_path([(0, 0), (1, 0)])
        sm.refresh(Resting(4.0))
        assert sm.state.remaining == 4.0
        assert sm.waypoint == (0, 0)

    def test_refresh_rejects_other_kind(self):
        sm = UnitStateMachine("alice")
        with pytest.raises(InvalidTransitionError):
            sm.refresh(Resting(1.0))


class TestLabels:
    def test_every_state_has_label(self):
        assert set(UNIT_STATE_LABELS) == set(UnitStates)

    def test_default_labels(self):
        sm = UnitStateMachine("alice")
        assert sm.label == "Idle"
        sm.transition(Resting(1.0))
        assert sm.label == "Resting"

    def test_scouting_for_task(self):
        sm = UnitStateMachine("alice")
        sm.transition(Scouting((1, 1)))
        assert sm.label == "Scouting"
        sm.transition(Idle())
        sm.transition(Scouting((1, 1), task_id="t1"))
        assert sm.label == "Scouting for resources"

    def test_gathering_names_resource(self):
        sm = UnitStateMachine("alice")
        sm.transition(MovingToResource("t1", (0, 0)))
        sm.transition(Gathering("t1", resource_type="Design"))
        assert sm.label == "Gathering Design"

    def test_building_label(self):
        sm = UnitStateMachine("alice")
        sm.state = MovingToStructure("t1", "m1", (0, 0), CARRIED)
        sm.transition(Building("t1", "m1", CARRIED))
        assert sm.label == "Building structure"
