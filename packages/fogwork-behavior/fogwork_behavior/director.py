"""BehaviorDirector - turns task data into agent movement and actions."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable

from loguru import logger

from fogwork import UnknownAgentError, WorldConfig
from fogwork_fog import SightSource
from fogwork_stamina import gather_rate, scout_speed, stamina
from fogwork_behavior.base import HomeBase
from fogwork_behavior.config import BehaviorConfig
from fogwork_behavior.frontier import find_frontier_tile
from fogwork_behavior.hooks import NullHooks, RenderHooks
from fogwork_behavior.machine import UnitStateMachine
from fogwork_behavior.nodes import ResourceNodeTracker
from fogwork_behavior.states import (
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
    TileCoord,
    UnitState,
    UnitStates,
)

if TYPE_CHECKING:
    from fogwork_fog import VisibilityField
    from fogwork_grid import TileGrid
    from fogwork_store import Task, TaskStore
    from fogwork_terrain import ResourceNodePlacement, StructurePlacement

DEFAULT_RESOURCE_TYPE = "Resource"


@dataclass
class Agent:
    """One simulated person: state machine plus a continuous position."""

    person_id: str
    machine: UnitStateMachine
    x: float
    z: float
    cooldowns: dict[str, float] = field(default_factory=dict)

    @property
    def state(self) -> UnitState:
        return self.machine.state

    @property
    def kind(self) -> UnitStates:
        return self.machine.kind

    @property
    def label(self) -> str:
        return self.machine.label

    @property
    def tile(self) -> TileCoord:
        return math.floor(self.x), math.floor(self.z)


def _due_order(task: Task) -> tuple[bool, date]:
    return task.expected_date is None, task.expected_date or date.min


class BehaviorDirector:
    """Runs every agent's state machine, one tick at a time.

    Agents are updated sequentially; their sight is then folded into the
    visibility field in a single batched update so that every agent's
    contribution is seen by all the others on the next tick. The only
    shared-state writes are ``store.update_task`` at deposit/build
    completion and node depletion.
    """

    def __init__(
        self,
        grid: TileGrid,
        fog: VisibilityField,
        store: TaskStore,
        base: HomeBase,
        config: BehaviorConfig | None = None,
        world_config: WorldConfig | None = None,
        rng: random.Random | None = None,
        hooks: RenderHooks | None = None,
        nodes: ResourceNodeTracker | None = None,
    ) -> None:
        self._grid = grid
        self._fog = fog
        self._store = store
        self._base = base
        self._config = config if config is not None else BehaviorConfig()
        self._world = world_config if world_config is not None else WorldConfig()
        self._rng = rng if rng is not None else random.Random()
        self._hooks = hooks if hooks is not None else NullHooks()
        self._nodes = nodes if nodes is not None else ResourceNodeTracker(self._hooks)
        self._agents: dict[str, Agent] = {}
        self._node_tiles: dict[str, TileCoord] = {}
        self._structure_tiles: dict[str, TileCoord] = {}
        self._node_visible: dict[str, bool] = {}
        self._structure_visible: dict[str, bool] = {}
        self._discovered: set[str] = set()
        self._elapsed = 0.0

    # --- Setup ---

    @property
    def nodes(self) -> ResourceNodeTracker:
        return self._nodes

    @property
    def config(self) -> BehaviorConfig:
        return self._config

    @property
    def discovered_nodes(self) -> frozenset[str]:
        return frozenset(self._discovered)

    def set_resource_nodes(self, placements: Iterable[ResourceNodePlacement]) -> None:
        for p in placements:
            self._node_tiles[p.task_id] = (p.col, p.row)
            if p.depleted:
                self._nodes.mark_depleted(p.task_id)

    def set_structures(self, placements: Iterable[StructurePlacement]) -> None:
        self._structure_tiles = {p.milestone_id: (p.col, p.row) for p in placements}

    def remove_structure(self, milestone_id: str) -> None:
        self._structure_tiles.pop(milestone_id, None)
        self._structure_visible.pop(milestone_id, None)

    def node_tile(self, task_id: str) -> TileCoord | None:
        return self._node_tiles.get(task_id)

    def structure_tile(self, milestone_id: str) -> TileCoord | None:
        return self._structure_tiles.get(milestone_id)

    # --- Agents ---

    def spawn_agent(
        self, person_id: str, position: tuple[float, float] | None = None,
    ) -> Agent:
        if person_id in self._agents:
            return self._agents[person_id]
        if position is None:
            index = len(self._agents)
            total = max(index + 1, len(self._store.get_people()))
            position = self._base.spawn_position(index, total)
        agent = Agent(person_id, UnitStateMachine(person_id), position[0], position[1])
        self._agents[person_id] = agent
        logger.info("Spawned agent {} at ({:.2f}, {:.2f})", person_id, *position)
        return agent

    def remove_agent(self, person_id: str) -> None:
        if person_id not in self._agents:
            raise UnknownAgentError(person_id, f"Agent {person_id!r} is not simulated")
        del self._agents[person_id]
        logger.info("Removed agent {}", person_id)

    def agent(self, person_id: str) -> Agent:
        try:
            return self._agents[person_id]
        except KeyError:
            raise UnknownAgentError(
                person_id, f"Agent {person_id!r} is not simulated",
            ) from None

    def agents(self) -> list[Agent]:
        return list(self._agents.values())

    def sync_agents(self, now: datetime | None = None) -> list[str]:
        """Mirror the store's people; new agents are assigned straight away."""
        people = self._store.get_people()
        current = {p.id for p in people}
        for person_id in [pid for pid in self._agents if pid not in current]:
            self.remove_agent(person_id)
        added: list[str] = []
        for i, person in enumerate(people):
            if person.id in self._agents:
                continue
            self.spawn_agent(person.id, self._base.spawn_position(i, len(people)))
            added.append(person.id)
        for person_id in added:
            self.assign(person_id, now)
        return added

    # --- Assignment ---

    def assign(self, person_id: str, now: datetime | None = None) -> UnitState:
        """Run the assignment policy for an Idle agent.

        Agents in any other state are left alone. Returns the agent's state
        after the evaluation.
        """
        agent = self.agent(person_id)
        if agent.kind is not UnitStates.IDLE:
            return agent.state
        if self._store.get_person(person_id) is None:
            return agent.state
        if now is None:
            now = datetime.now()

        tasks = self._store.get_tasks_for_person(person_id)
        if not tasks:
            self._scout_frontier(agent)
            return agent.state

        if stamina(tasks, now) < self._config.rest_threshold:
            agent.machine.transition(Resting(self._config.rest_time))
            self._path_to(agent, self._base.deposit_tile())
            return agent.state

        candidates = [
            t for t in tasks
            if not t.is_complete
            and self._nodes.is_available(t.id)
            and agent.cooldowns.get(t.id, -math.inf) <= self._elapsed
        ]
        if not candidates:
            self._scout_frontier(agent)
            return agent.state

        candidates.sort(key=_due_order)
        task = candidates[0]
        target = self._node_tiles.get(task.id)
        if target is None:
            self._scout_frontier(agent)
            return agent.state

        if task.discovery_percent / 100 > 0.5 and not self._fog.is_revealed(*target):
            agent.machine.transition(Scouting(target=target, task_id=task.id))
        else:
            agent.machine.transition(MovingToResource(task_id=task.id, target=target))
        if not self._path_to(agent, target):
            self._give_up(agent, task.id)
        return agent.state

    def _scout_frontier(self, agent: Agent) -> None:
        target = find_frontier_tile(
            self._grid, agent.tile, self._config.frontier_budget, self._rng,
        )
        if target is None:
            logger.debug("No frontier within reach of {}", agent.person_id)
            return
        logger.debug("Frontier pick for {}: {}", agent.person_id, target)
        agent.machine.transition(Scouting(target=target))
        if not self._path_to(agent, target):
            agent.machine.transition(Idle())

    def _give_up(self, agent: Agent, task_id: str) -> None:
        logger.warning(
            "No path for {} to task {}; retrying in {}s",
            agent.person_id, task_id, self._config.unreachable_cooldown,
        )
        agent.cooldowns[task_id] = self._elapsed + self._config.unreachable_cooldown
        agent.machine.transition(Idle())

    def _abandon(self, agent: Agent, reason: str) -> None:
        logger.warning("Agent {} abandons {}: {}", agent.person_id, agent.kind.value, reason)
        agent.machine.transition(Idle())

    def _path_to(self, agent: Agent, target: TileCoord) -> bool:
        start = agent.tile
        col, row = target
        if not self._grid.is_walkable(col, row):
            near = self._grid.nearest_walkable_neighbor(col, row, start)
            if near is None:
                return False
            col, row = near
        path = self._grid.find_path(
            start[0], start[1], col, row, self._config.path_search_budget,
        )
        agent.machine.set_path(path)
        return path is not None

    # --- Tick ---

    def update(self, dt: float, now: datetime | None = None) -> None:
        if now is None:
            now = datetime.now()
        self._elapsed += dt
        snapshot = [(a.person_id, a.x, a.z) for a in self._agents.values()]

        for agent in list(self._agents.values()):
            self._tick_agent(agent, dt, now, snapshot)

        self._fog.update_visibility([self._sight(a) for a in self._agents.values()])
        self._refresh_visibility()

    def _sight(self, agent: Agent) -> SightSource:
        radius = (self._world.scout_sight_radius if agent.kind is UnitStates.SCOUTING
                  else self._world.gather_sight_radius)
        col, row = agent.tile
        return SightSource(col, row, radius)

    def _refresh_visibility(self) -> None:
        for task_id, (col, row) in self._node_tiles.items():
            visible = self._fog.is_visible(col, row)
            if visible:
                self._discovered.add(task_id)
            if self._node_visible.get(task_id) != visible:
                self._node_visible[task_id] = visible
                self._hooks.set_node_visible(task_id, visible)
        for milestone_id, (col, row) in self._structure_tiles.items():
            visible = self._fog.is_revealed(col, row)
            if self._structure_visible.get(milestone_id) != visible:
                self._structure_visible[milestone_id] = visible
                self._hooks.set_structure_visible(milestone_id, visible)

    def _tick_agent(
        self,
        agent: Agent,
        dt: float,
        now: datetime,
        snapshot: list[tuple[str, float, float]],
    ) -> None:
        state = agent.state
        kind = state.kind
        cfg = self._config
        if kind is UnitStates.IDLE:
            if self._rng.random() < dt * cfg.idle_reassign_rate:
                self.assign(agent.person_id, now)
        elif kind is UnitStates.SCOUTING:
            tasks = self._store.get_tasks_for_person(agent.person_id)
            speed = scout_speed(stamina(tasks, now)) * cfg.scout_speed
            self._move(agent, dt, speed, snapshot, now)
        elif kind is UnitStates.MOVING_TO_RESOURCE:
            self._move(agent, dt, cfg.resource_speed, snapshot, now)
        elif kind is UnitStates.MOVING_TO_STRUCTURE:
            self._move(agent, dt, cfg.structure_speed, snapshot, now)
        elif kind is UnitStates.RETURNING_TO_BASE:
            self._move(agent, dt, cfg.return_speed, snapshot, now)
        elif isinstance(state, Gathering):
            self._gather(agent, state, dt, now)
        elif isinstance(state, Depositing):
            self._deposit(agent, state, dt, now)
        elif isinstance(state, Building):
            self._build(agent, state, dt, now)
        elif isinstance(state, Resting):
            self._rest(agent, state, dt, now, snapshot)

    # --- Movement ---

    def _separation(
        self, agent: Agent, dt: float, snapshot: list[tuple[str, float, float]],
    ) -> tuple[float, float]:
        radius = self._config.separation_radius
        sx = sz = 0.0
        for other_id, ox, oz in snapshot:
            if other_id == agent.person_id:
                continue
            dx, dz = agent.x - ox, agent.z - oz
            dist = math.hypot(dx, dz)
            if 0.01 < dist < radius:
                factor = (1 - dist / radius) * self._config.separation_strength * dt
                sx += dx / dist * factor
                sz += dz / dist * factor
        return sx, sz

    def _step_along_path(
        self,
        agent: Agent,
        dt: float,
        speed: float,
        snapshot: list[tuple[str, float, float]],
    ) -> bool:
        """Advance toward the next waypoint. Returns True once the path is done."""
        machine = agent.machine
        waypoint = machine.waypoint
        if waypoint is None:
            return True
        tx, tz = self._grid.tile_to_world(*waypoint)
        dx, dz = tx - agent.x, tz - agent.z
        dist = math.hypot(dx, dz)
        if dist < self._config.arrival_tolerance:
            machine.path_index += 1
            return False
        step = min(speed * dt, dist)
        sx, sz = self._separation(agent, dt, snapshot)
        agent.x += dx / dist * step + sx
        agent.z += dz / dist * step + sz
        return False

    def _move(
        self,
        agent: Agent,
        dt: float,
        speed: float,
        snapshot: list[tuple[str, float, float]],
        now: datetime,
    ) -> None:
        if self._step_along_path(agent, dt, speed, snapshot):
            self._arrive(agent, now)

    def _arrive(self, agent: Agent, now: datetime) -> None:
        state = agent.state
        machine = agent.machine
        if isinstance(state, Scouting):
            if state.task_id is None:
                machine.transition(Idle())
                self.assign(agent.person_id, now)
                return
            self._start_gathering(agent, state.task_id)
        elif isinstance(state, MovingToResource):
            self._start_gathering(agent, state.task_id)
        elif isinstance(state, ReturningToBase):
            machine.transition(Depositing(task_id=state.task_id, carrying=state.carrying))
        elif isinstance(state, MovingToStructure):
            if self._store.get_milestone(state.milestone_id) is None:
                self._abandon(agent, f"milestone {state.milestone_id} is gone")
                return
            machine.transition(Building(
                task_id=state.task_id,
                milestone_id=state.milestone_id,
                carrying=state.carrying,
            ))
        else:
            machine.transition(Idle())

    # --- Actions ---

    def _start_gathering(self, agent: Agent, task_id: str) -> None:
        task = self._store.get_task(task_id)
        if task is None:
            self._abandon(agent, f"task {task_id} is gone")
            return
        agent.machine.transition(Gathering(
            task_id=task_id, resource_type=task.category or DEFAULT_RESOURCE_TYPE,
        ))

    def _gather(self, agent: Agent, state: Gathering, dt: float, now: datetime) -> None:
        tasks = self._store.get_tasks_for_person(agent.person_id)
        elapsed = state.elapsed + dt * gather_rate(stamina(tasks, now))
        progress = min(1.0, elapsed / self._config.gather_time)
        agent.machine.refresh(replace(state, elapsed=elapsed, progress=progress))
        if progress < 1.0:
            return

        task = self._store.get_task(state.task_id)
        if task is None:
            self._abandon(agent, f"task {state.task_id} is gone")
            return
        carried = Carried(task.category or DEFAULT_RESOURCE_TYPE, task.id)
        self._nodes.deplete(task.id, permanent=task.is_complete)

        structure = None
        if task.milestone_id and self._store.get_milestone(task.milestone_id) is not None:
            structure = self._structure_tiles.get(task.milestone_id)
        if structure is not None:
            agent.machine.transition(MovingToStructure(
                task_id=task.id,
                milestone_id=task.milestone_id,
                target=structure,
                carrying=carried,
            ))
            reached = self._path_to(agent, structure)
        else:
            agent.machine.transition(ReturningToBase(task_id=task.id, carrying=carried))
            reached = self._path_to(agent, self._base.deposit_tile())
        if not reached:
            logger.warning("Agent {} cannot deliver {}; dropping it", agent.person_id, task.id)
            agent.machine.transition(Idle())

    def _advance_task(self, task_id: str) -> None:
        task = self._store.get_task(task_id)
        if task is None:
            return
        if not task.is_complete:
            gain = self._rng.uniform(self._config.progress_min, self._config.progress_max)
            task = self._store.update_task(
                task_id, percent_complete=min(100.0, task.percent_complete + gain),
            ) or task
        if task.is_complete:
            self._nodes.deplete(task_id, permanent=True)

    def _deposit(self, agent: Agent, state: Depositing, dt: float, now: datetime) -> None:
        elapsed = state.elapsed + dt
        if elapsed < self._config.deposit_time:
            agent.machine.refresh(replace(state, elapsed=elapsed))
            return
        if self._store.get_task(state.task_id) is None:
            self._abandon(agent, f"task {state.task_id} is gone")
            return
        self._advance_task(state.task_id)
        agent.machine.transition(Idle())
        self.assign(agent.person_id, now)

    def _build(self, agent: Agent, state: Building, dt: float, now: datetime) -> None:
        elapsed = state.elapsed + dt
        progress = min(1.0, elapsed / self._config.build_time)
        if progress < 1.0:
            agent.machine.refresh(replace(state, elapsed=elapsed, progress=progress))
            return
        if self._store.get_milestone(state.milestone_id) is None:
            self._abandon(agent, f"milestone {state.milestone_id} is gone")
            return
        if self._store.get_task(state.task_id) is None:
            self._abandon(agent, f"task {state.task_id} is gone")
            return
        self._advance_task(state.task_id)
        agent.machine.transition(Idle())
        self.assign(agent.person_id, now)

    def _rest(
        self,
        agent: Agent,
        state: Resting,
        dt: float,
        now: datetime,
        snapshot: list[tuple[str, float, float]],
    ) -> None:
        self._step_along_path(agent, dt, self._config.return_speed, snapshot)
        remaining = state.remaining - dt
        if remaining > 0:
            agent.machine.refresh(replace(state, remaining=remaining))
            return
        agent.machine.transition(Idle())
        self.assign(agent.person_id, now)
