"""Build the complete simulation from a task store and a world config."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from loguru import logger

from fogwork import Engine, FrameContext, WorldConfig
from fogwork_behavior import (
    BehaviorConfig,
    BehaviorDirector,
    HomeBase,
    RenderHooks,
    ResourceNodeTracker,
    make_behavior_system,
    make_node_system,
)
from fogwork_fog import FogConfig, VisibilityField, make_fog_system
from fogwork_grid import FogState, TileGrid
from fogwork_stamina import stamina, structure_progress
from fogwork_store import InMemoryTaskStore, make_store_flush_system
from fogwork_terrain import (
    ResourceNodePlacement,
    StructurePlacement,
    generate_terrain,
    place_resource_nodes,
    place_structures,
)

# Extra tiles revealed around the base beyond its radius at startup.
BASE_REVEAL_MARGIN = 2


@dataclass(frozen=True)
class SimulationSummary:
    frame: int
    elapsed: float
    agent_states: dict[str, str]
    agent_stamina: dict[str, float]
    task_progress: dict[str, float]
    milestone_progress: dict[str, float]
    discovered_nodes: int
    revealed_tiles: int


@dataclass
class Simulation:
    """Holds every collaborator of a running simulation."""

    engine: Engine
    config: WorldConfig
    grid: TileGrid
    fog: VisibilityField
    store: InMemoryTaskStore
    base: HomeBase
    nodes: ResourceNodeTracker
    director: BehaviorDirector
    node_placements: list[ResourceNodePlacement] = field(default_factory=list)
    structure_placements: list[StructurePlacement] = field(default_factory=list)

    def step(self, dt: float) -> None:
        self.engine.step(dt)

    def run(self, frames: int, dt: float) -> None:
        self.engine.run(frames, dt)

    def place_task(self, task_id: str) -> ResourceNodePlacement | None:
        """Place a node for a task added after startup."""
        if self.director.node_tile(task_id) is not None:
            return None
        task = self.store.get_task(task_id)
        if task is None:
            return None
        (placement,) = place_resource_nodes(self.grid, [task], self.config.base_radius)
        self.node_placements.append(placement)
        self.director.set_resource_nodes([placement])
        return placement

    def place_milestone(self, milestone_id: str) -> StructurePlacement | None:
        if self.director.structure_tile(milestone_id) is not None:
            return None
        milestone = self.store.get_milestone(milestone_id)
        if milestone is None:
            return None
        (placement,) = place_structures(self.grid, [milestone], self.config.base_radius)
        self.structure_placements.append(placement)
        self.director.set_structures(self.structure_placements)
        return placement

    def forget_milestone(self, milestone_id: str) -> None:
        """Stop routing deliveries to a deleted milestone's structure."""
        self.structure_placements = [
            p for p in self.structure_placements if p.milestone_id != milestone_id
        ]
        self.director.remove_structure(milestone_id)

    def summary(self, now: datetime | None = None) -> SimulationSummary:
        if now is None:
            now = datetime.now()
        tasks = self.store.get_tasks()
        revealed = sum(
            1 for _, _, tile in self.grid.tiles() if tile.visibility is not FogState.HIDDEN
        )
        return SimulationSummary(
            frame=self.engine.clock.frame_number,
            elapsed=self.engine.clock.elapsed,
            agent_states={a.person_id: a.label for a in self.director.agents()},
            agent_stamina={
                a.person_id: stamina(self.store.get_tasks_for_person(a.person_id), now)
                for a in self.director.agents()
            },
            task_progress={t.id: t.percent_complete for t in tasks},
            milestone_progress={
                m.id: structure_progress(m, tasks) for m in self.store.get_milestones()
            },
            discovered_nodes=len(self.director.discovered_nodes),
            revealed_tiles=revealed,
        )


def make_sync_system(
    director: BehaviorDirector, interval: float,
) -> Callable[[FrameContext], None]:
    """Return a system that re-mirrors the store's people every ``interval`` s."""
    last = [0.0]

    def sync_system(ctx: FrameContext) -> None:
        if ctx.elapsed - last[0] < interval:
            return
        last[0] = ctx.elapsed
        added = director.sync_agents(ctx.now)
        if added:
            logger.info("Synced {} new agent(s)", len(added))

    return sync_system


def build_simulation(
    store: InMemoryTaskStore,
    config: WorldConfig | None = None,
    behavior: BehaviorConfig | None = None,
    fog_config: FogConfig | None = None,
    hooks: RenderHooks | None = None,
    clock_fn: Callable[[], datetime] = datetime.now,
) -> Simulation:
    """Wire up grid, terrain, fog, director and engine; return the Simulation.

    Systems run each frame in the order behavior, resource nodes, fog
    smoothing, periodic agent sync and store flush.
    """
    if config is None:
        config = WorldConfig()
    size = config.map_size
    center = size // 2

    grid = TileGrid(size, size)
    generate_terrain(grid, seed=config.seed, base_radius=config.base_radius)
    node_placements = place_resource_nodes(grid, store.get_tasks(), config.base_radius)
    structure_placements = place_structures(grid, store.get_milestones(), config.base_radius)

    fog = VisibilityField(grid, fog_config)
    fog.reveal_radius(center, center, config.base_radius + BASE_REVEAL_MARGIN)

    engine = Engine(seed=config.seed, clock_fn=clock_fn)
    base = HomeBase(center, center, config.base_radius)
    nodes = ResourceNodeTracker(hooks)
    director = BehaviorDirector(
        grid, fog, store, base,
        config=behavior,
        world_config=config,
        rng=engine.random,
        hooks=hooks,
        nodes=nodes,
    )
    director.set_resource_nodes(node_placements)
    director.set_structures(structure_placements)

    sim = Simulation(
        engine=engine,
        config=config,
        grid=grid,
        fog=fog,
        store=store,
        base=base,
        nodes=nodes,
        director=director,
        node_placements=node_placements,
        structure_placements=structure_placements,
    )

    def on_store_change(kind: str, data: dict[str, Any]) -> None:
        if kind == "task_added":
            sim.place_task(data["task_id"])
        elif kind == "task_removed":
            nodes.forget(data["task_id"])
        elif kind == "milestone_removed":
            sim.forget_milestone(data["milestone_id"])
        elif kind == "milestone_added":
            sim.place_milestone(data["milestone_id"])
        elif kind in ("person_added", "person_removed"):
            director.sync_agents(clock_fn())

    store.subscribe(on_store_change)

    engine.add_system(make_behavior_system(director))
    engine.add_system(make_node_system(nodes))
    engine.add_system(make_fog_system(fog))
    engine.add_system(make_sync_system(director, config.sync_interval))
    engine.add_system(make_store_flush_system(store))

    director.sync_agents(clock_fn())
    logger.info(
        "Built {}x{} simulation: {} agents, {} nodes, {} structures",
        size, size, len(director.agents()), len(node_placements), len(structure_placements),
    )
    return sim
