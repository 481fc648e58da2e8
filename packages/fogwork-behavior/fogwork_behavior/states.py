"""Agent states as tagged variants, one frozen dataclass per state.

Each variant carries only the fields that are meaningful in that state.
Progress updates within a state build a new instance with
``dataclasses.replace``; moving between states goes through
``UnitStateMachine.transition``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

TileCoord = tuple[int, int]


class UnitStates(str, Enum):
    IDLE = "idle"
    SCOUTING = "scouting"
    MOVING_TO_RESOURCE = "moving_to_resource"
    GATHERING = "gathering"
    RETURNING_TO_BASE = "returning_to_base"
    DEPOSITING = "depositing"
    MOVING_TO_STRUCTURE = "moving_to_structure"
    BUILDING = "building"
    RESTING = "resting"


UNIT_STATE_LABELS: dict[UnitStates, str] = {
    UnitStates.IDLE: "Idle",
    UnitStates.SCOUTING: "Scouting",
    UnitStates.MOVING_TO_RESOURCE: "Moving to resource",
    UnitStates.GATHERING: "Gathering",
    UnitStates.RETURNING_TO_BASE: "Returning to base",
    UnitStates.DEPOSITING: "Depositing resources",
    UnitStates.MOVING_TO_STRUCTURE: "Moving to structure",
    UnitStates.BUILDING: "Building",
    UnitStates.RESTING: "Resting",
}


@dataclass(frozen=True)
class Carried:
    resource_type: str
    task_id: str


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[UnitStates] = UnitStates.IDLE


@dataclass(frozen=True)
class Scouting:
    """Walking toward ``target``; bound to a task when ``task_id`` is set."""

    target: TileCoord
    task_id: str | None = None
    kind: ClassVar[UnitStates] = UnitStates.SCOUTING


@dataclass(frozen=True)
class MovingToResource:
    task_id: str
    target: TileCoord
    kind: ClassVar[UnitStates] = UnitStates.MOVING_TO_RESOURCE


@dataclass(frozen=True)
class Gathering:
    task_id: str
    elapsed: float = 0.0
    progress: float = 0.0
    resource_type: str | None = None
    kind: ClassVar[UnitStates] = UnitStates.GATHERING


@dataclass(frozen=True)
class MovingToStructure:
    task_id: str
    milestone_id: str
    target: TileCoord
    carrying: Carried
    kind: ClassVar[UnitStates] = UnitStates.MOVING_TO_STRUCTURE


@dataclass(frozen=True)
class Building:
    task_id: str
    milestone_id: str
    carrying: Carried
    elapsed: float = 0.0
    progress: float = 0.0
    kind: ClassVar[UnitStates] = UnitStates.BUILDING


@dataclass(frozen=True)
class ReturningToBase:
    task_id: str
    carrying: Carried
    kind: ClassVar[UnitStates] = UnitStates.RETURNING_TO_BASE


@dataclass(frozen=True)
class Depositing:
    task_id: str
    carrying: Carried
    elapsed: float = 0.0
    kind: ClassVar[UnitStates] = UnitStates.DEPOSITING


@dataclass(frozen=True)
class Resting:
    remaining: float
    kind: ClassVar[UnitStates] = UnitStates.RESTING


UnitState = Union[
    Idle, Scouting, MovingToResource, Gathering, MovingToStructure,
    Building, ReturningToBase, Depositing, Resting,
]
