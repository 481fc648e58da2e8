"""fogwork - A frame-driven engine for task-tracking exploration simulations."""

from fogwork.clock import Clock
from fogwork.config import WorldConfig
from fogwork.engine import Engine
from fogwork.log import configure_logging
from fogwork.types import (
    AgentId,
    FrameContext,
    MilestoneId,
    System,
    TaskId,
    TileCoord,
    UnknownAgentError,
)

__all__ = [
    "Engine",
    "Clock",
    "FrameContext",
    "WorldConfig",
    "configure_logging",
    "AgentId",
    "TaskId",
    "MilestoneId",
    "TileCoord",
    "System",
    "UnknownAgentError",
]
