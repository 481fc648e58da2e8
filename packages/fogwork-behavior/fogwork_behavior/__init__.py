"""fogwork-behavior - Per-agent state machines and the behavior director."""
from __future__ import annotations

from fogwork_behavior.base import HomeBase
from fogwork_behavior.config import BehaviorConfig
from fogwork_behavior.director import Agent, BehaviorDirector
from fogwork_behavior.frontier import find_frontier_tile
from fogwork_behavior.hooks import NullHooks, RenderHooks
from fogwork_behavior.machine import (
    TRANSITIONS,
    InvalidTransitionError,
    UnitStateMachine,
    can_transition,
)
from fogwork_behavior.nodes import NodePhase, ResourceNodeTracker
from fogwork_behavior.states import (
    UNIT_STATE_LABELS,
    Building,
    Carried,
    Depositing,
    Gathering,
    Idle,
    MovingToResource,
    MovingToStructure,
    Resting,
    ReturningToBase,
    Scouting,
    UnitState,
    UnitStates,
)
from fogwork_behavior.systems import make_behavior_system, make_node_system

__all__ = [
    "HomeBase",
    "BehaviorConfig",
    "Agent",
    "BehaviorDirector",
    "find_frontier_tile",
    "NullHooks",
    "RenderHooks",
    "TRANSITIONS",
    "InvalidTransitionError",
    "UnitStateMachine",
    "can_transition",
    "NodePhase",
    "ResourceNodeTracker",
    "UNIT_STATE_LABELS",
    "Building",
    "Carried",
    "Depositing",
    "Gathering",
    "Idle",
    "MovingToResource",
    "MovingToStructure",
    "Resting",
    "ReturningToBase",
    "Scouting",
    "UnitState",
    "UnitStates",
    "make_behavior_system",
    "make_node_system",
]
