"""Shared type aliases and the frame context for the fogwork engine."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

AgentId = str
TaskId = str
MilestoneId = str
TileCoord = tuple[int, int]


@dataclass(frozen=True, slots=True)
class FrameContext:
    frame_number: int
    dt: float
    elapsed: float
    now: datetime
    request_stop: Callable[[], None]
    random: _random.Random


class UnknownAgentError(KeyError):
    """Raised when operating on an agent that is not being simulated."""

    def __init__(self, agent_id: AgentId, message: str) -> None:
        self.agent_id = agent_id
        super().__init__(message)


System = Callable[[FrameContext], None]
