"""System factories for the behavior director and resource nodes."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from fogwork import FrameContext
    from fogwork_behavior.director import BehaviorDirector
    from fogwork_behavior.nodes import ResourceNodeTracker


def make_behavior_system(director: BehaviorDirector) -> Callable[[FrameContext], None]:
    """Return a system that advances every agent by one frame."""

    def behavior_system(ctx: FrameContext) -> None:
        director.update(ctx.dt, ctx.now)

    return behavior_system


def make_node_system(tracker: ResourceNodeTracker) -> Callable[[FrameContext], None]:
    def node_system(ctx: FrameContext) -> None:
        tracker.update(ctx.dt)

    return node_system
