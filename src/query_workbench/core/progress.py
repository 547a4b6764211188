"""Cosmetic progress simulation for a running query.

The value creeps up by a random step on a fixed interval, never past the
cap, and jumps to 100 when stopped. Nothing depends on it for correctness.
"""

from __future__ import annotations

import asyncio
import contextlib
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

PROGRESS_CAP = 98.0
PROGRESS_DONE = 100.0


class ProgressSimulator:
    def __init__(
        self,
        interval: float = 0.5,
        max_step: float = 20.0,
        cap: float = PROGRESS_CAP,
        on_change: Callable[[float], None] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if max_step < 0:
            raise ValueError(f"max_step must be >= 0, got {max_step}")
        self.interval = interval
        self.max_step = max_step
        self.cap = cap
        self.on_change = on_change
        self._rng = rng or random.Random()
        self._task: asyncio.Task[None] | None = None
        self.value = 0.0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def _set(self, value: float) -> None:
        self.value = value
        if self.on_change is not None:
            self.on_change(value)

    def tick(self) -> float:
        """Advance once by a random step in [0, max_step], capped."""
        step = self._rng.uniform(0, self.max_step)
        self._set(min(self.value + step, self.cap))
        return self.value

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick()

    def start(self) -> None:
        if self.running:
            return
        self._set(0.0)
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Release the timer task and force the value to 100."""
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._set(PROGRESS_DONE)
