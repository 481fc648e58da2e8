"""ResourceNodeTracker - depletion and regrowth timeline per resource node."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from fogwork_behavior.hooks import NullHooks, RenderHooks

DEPLETE_DURATION = 0.5
REGROW_DELAY = 60.0
REGROW_DURATION = 15.0


class NodePhase(str, Enum):
    AVAILABLE = "available"
    DEPLETING = "depleting"
    DEPLETED = "depleted"
    REGROWING = "regrowing"


@dataclass
class _NodeTimer:
    phase: NodePhase
    timer: float = 0.0
    permanent: bool = False


class ResourceNodeTracker:
    """Tracks which resource nodes can currently be gathered from.

    A node with no record is available. ``deplete`` starts the cycle
    ``depleting -> depleted -> regrowing -> available``; a permanent
    depletion stops at ``depleted`` and never regrows.
    """

    def __init__(
        self,
        hooks: RenderHooks | None = None,
        deplete_duration: float = DEPLETE_DURATION,
        regrow_delay: float = REGROW_DELAY,
        regrow_duration: float = REGROW_DURATION,
    ) -> None:
        self._hooks = hooks if hooks is not None else NullHooks()
        self._deplete_duration = deplete_duration
        self._regrow_delay = regrow_delay
        self._regrow_duration = regrow_duration
        self._nodes: dict[str, _NodeTimer] = {}

    def deplete(self, task_id: str, permanent: bool = False) -> None:
        node = self._nodes.get(task_id)
        if node is not None and node.phase is not NodePhase.AVAILABLE:
            if permanent and not node.permanent:
                node.permanent = True
                logger.debug("Node {} depletion made permanent", task_id)
            return
        self._nodes[task_id] = _NodeTimer(NodePhase.DEPLETING, permanent=permanent)
        self._hooks.set_node_depleted(task_id)

    def mark_depleted(self, task_id: str) -> None:
        """Start a node out permanently depleted, skipping the animation."""
        self._nodes[task_id] = _NodeTimer(NodePhase.DEPLETED, permanent=True)
        self._hooks.set_node_depleted(task_id)

    def forget(self, task_id: str) -> None:
        self._nodes.pop(task_id, None)

    def phase(self, task_id: str) -> NodePhase:
        node = self._nodes.get(task_id)
        return node.phase if node is not None else NodePhase.AVAILABLE

    def is_available(self, task_id: str) -> bool:
        return self.phase(task_id) is NodePhase.AVAILABLE

    def is_permanent(self, task_id: str) -> bool:
        node = self._nodes.get(task_id)
        return node is not None and node.permanent

    def update(self, dt: float) -> None:
        for task_id, node in list(self._nodes.items()):
            node.timer += dt
            if node.phase is NodePhase.DEPLETING:
                if node.timer >= self._deplete_duration:
                    node.phase = NodePhase.DEPLETED
                    node.timer = 0.0
            elif node.phase is NodePhase.DEPLETED:
                if not node.permanent and node.timer >= self._regrow_delay:
                    node.phase = NodePhase.REGROWING
                    node.timer = 0.0
            elif node.phase is NodePhase.REGROWING:
                if node.timer >= self._regrow_duration:
                    del self._nodes[task_id]
                    self._hooks.set_node_available(task_id)
                    logger.debug("Node {} regrown", task_id)
