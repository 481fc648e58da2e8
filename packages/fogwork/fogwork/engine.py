"""Engine - frame loop driven by the host renderer, plus lifecycle hooks."""

import os
import random
from datetime import datetime
from typing import Callable

from loguru import logger

from fogwork.clock import Clock
from fogwork.types import FrameContext, System

Hook = Callable[[FrameContext], None]


class Engine:
    """Runs registered systems once per rendered frame.

    The host supplies ``dt`` for every frame; there is no internal pacing.
    Systems run sequentially in registration order and may halt the rest
    of the frame through ``ctx.request_stop``.
    """

    def __init__(
        self,
        seed: int | None = None,
        clock_fn: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._clock = Clock()
        self._clock_fn = clock_fn
        self._systems: list[System] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> FrameContext:
        return self._clock.context(self._request_stop, self._rng, self._clock_fn())

    def _frame(self, dt: float) -> None:
        self._clock.advance(dt)
        ctx = self._context()
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                logger.debug("Stop requested during frame {}", ctx.frame_number)
                break

    def step(self, dt: float) -> None:
        self._stop_requested = False
        self._frame(dt)

    def run(self, frames: int, dt: float) -> None:
        self._stop_requested = False
        ctx = self._context()
        for hook in self._start_hooks:
            hook(ctx)

        for _ in range(frames):
            self._frame(dt)
            if self._stop_requested:
                break

        ctx = self._context()
        for hook in self._stop_hooks:
            hook(ctx)
