"""Synthetic progress indicator for in-flight solves."""

import asyncio
from dataclasses import dataclass, field

COMPLETE = 100


@dataclass
class ProgressEstimator:
    """Cosmetic progress value driven by timers rather than the backend.

    While a solve is pending the value climbs by ``increment`` every
    ``interval`` seconds up to ``cap``. On resolution it jumps to 100 and
    drops back to 0 after ``reset_delay`` seconds.
    """

    increment: int = 10
    cap: int = 90
    interval: float = 0.5
    reset_delay: float = 1.0
    value: int = 0
    _ticker: asyncio.Task[None] | None = field(default=None, repr=False)
    _resetter: asyncio.Task[None] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.cap < COMPLETE:
            raise ValueError("Progress cap must be within [0, 100)")
        if self.increment <= 0:
            raise ValueError("Progress increment must be positive")

    @property
    def is_ticking(self) -> bool:
        """Return true while the repeating tick timer is alive."""
        return self._ticker is not None and not self._ticker.done()

    def begin(self) -> None:
        """Start ticking for a new task, dropping timers left by the last one."""
        self._cancel_timers()
        self.value = 0
        self._ticker = asyncio.get_running_loop().create_task(self._tick_loop())

    def tick(self) -> int:
        """Advance one step without ever reaching completion."""
        self.value = min(self.value + self.increment, self.cap)
        return self.value

    def finish(self) -> None:
        """Show completion, then schedule the return to zero."""
        self._cancel_timers()
        self.value = COMPLETE
        self._resetter = asyncio.get_running_loop().create_task(self._reset_later())

    def cancel(self) -> None:
        """Tear down both timers and zero the value."""
        self._cancel_timers()
        self.value = 0

    async def _tick_loop(self) -> None:
        while self.value < self.cap:
            await asyncio.sleep(self.interval)
            self.tick()

    async def _reset_later(self) -> None:
        await asyncio.sleep(self.reset_delay)
        self.value = 0

    def _cancel_timers(self) -> None:
        for task in (self._ticker, self._resetter):
            if task is not None and not task.done():
                task.cancel()
        self._ticker = None
        self._resetter = None

