"""Per-agent state machine with an explicit transition table."""
from __future__ import annotations

from loguru import logger

from fogwork_behavior.states import (
    UNIT_STATE_LABELS,
    Idle,
    TileCoord,
    UnitState,
    UnitStates,
)

S = UnitStates

TRANSITIONS: dict[UnitStates, frozenset[UnitStates]] = {
    S.IDLE: frozenset({S.SCOUTING, S.MOVING_TO_RESOURCE, S.RESTING}),
    S.SCOUTING: frozenset({S.GATHERING}),
    S.MOVING_TO_RESOURCE: frozenset({S.GATHERING}),
    S.GATHERING: frozenset({S.MOVING_TO_STRUCTURE, S.RETURNING_TO_BASE}),
    S.MOVING_TO_STRUCTURE: frozenset({S.BUILDING}),
    S.RETURNING_TO_BASE: frozenset({S.DEPOSITING}),
    S.BUILDING: frozenset(),
    S.DEPOSITING: frozenset(),
    S.RESTING: frozenset(),
}


class InvalidTransitionError(ValueError):
    """Raised when a transition is not in the table."""

    def __init__(self, source: UnitStates, target: UnitStates) -> None:
        self.source = source
        self.target = target
        super().__init__(f"invalid transition {source.value} -> {target.value}")


def can_transition(source: UnitStates, target: UnitStates) -> bool:
    # Any state may be abandoned back to Idle.
    return target is S.IDLE or target in TRANSITIONS[source]


class UnitStateMachine:
    """State, path and path cursor for one agent.

    ``transition`` swaps the variant and clears the path; callers set a new
    path afterwards with ``set_path``. ``refresh`` replaces the variant with
    an updated copy of the same kind (timers, progress) and keeps the path.
    """

    def __init__(self, person_id: str) -> None:
        self.person_id = person_id
        self.state: UnitState = Idle()
        self.path: list[TileCoord] | None = None
        self.path_index = 0

    @property
    def kind(self) -> UnitStates:
        return self.state.kind

    def transition(self, new_state: UnitState) -> None:
        if not can_transition(self.state.kind, new_state.kind):
            raise InvalidTransitionError(self.state.kind, new_state.kind)
        logger.debug("{}: {} -> {}", self.person_id, self.state.kind.value, new_state.kind.value)
        self.state = new_state
        self.path = None
        self.path_index = 0

    def refresh(self, new_state: UnitState) -> None:
        if new_state.kind is not self.state.kind:
            raise InvalidTransitionError(self.state.kind, new_state.kind)
        self.state = new_state

    def set_path(self, path: list[TileCoord] | None) -> None:
        self.path = path
        self.path_index = 0

    @property
    def waypoint(self) -> TileCoord | None:
        if self.path is None or self.path_index >= len(self.path):
            return None
        return self.path[self.path_index]

    @property
    def label(self) -> str:
        state = self.state
        if state.kind is S.SCOUTING and state.task_id is not None:
            return "Scouting for resources"
        if state.kind is S.GATHERING and state.resource_type:
            return f"Gathering {state.resource_type}"
        if state.kind is S.BUILDING:
            return "Building structure"
        return UNIT_STATE_LABELS[state.kind]
