"""Clock and FrameContext for a variable-timestep render loop."""

import random
from datetime import datetime
from typing import Callable

from fogwork.types import FrameContext


class Clock:
    def __init__(self) -> None:
        self._frame_number = 0
        self._elapsed = 0.0
        self._dt = 0.0

    @property
    def frame_number(self) -> int:
        return self._frame_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def dt(self) -> float:
        return self._dt

    def advance(self, dt: float) -> int:
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        self._frame_number += 1
        self._elapsed += dt
        self._dt = dt
        return self._frame_number

    def context(
        self,
        stop_fn: Callable[[], None],
        rng: random.Random,
        now: datetime,
    ) -> FrameContext:
        return FrameContext(
            frame_number=self._frame_number,
            dt=self._dt,
            elapsed=self._elapsed,
            now=now,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self) -> None:
        self._frame_number = 0
        self._elapsed = 0.0
        self._dt = 0.0
