"""Cancellable single-shot countdown for the booking processing step."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

log = logging.getLogger("companion.booking.timer")


class CountdownTimer:
    """Counts down one tick at a time and fires ``on_expire`` once at zero.

    Ticks come either from the owner calling :meth:`tick` or from
    :meth:`run`, which ticks every ``interval`` seconds on the event loop.
    After :meth:`cancel` (or after expiry) further ticks are no-ops.
    """

    def __init__(
        self,
        seconds: int,
        on_expire: Callable[[], None],
        on_tick: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.remaining = seconds
        self._on_expire = on_expire
        self._on_tick = on_tick
        self._cancelled = False
        self._fired = False
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def tick(self) -> None:
        if not self.active:
            return

        self.remaining -= 1
        if self._on_tick:
            self._on_tick(self.remaining)

        if self.remaining <= 0:
            self._fired = True
            self._on_expire()

    def cancel(self) -> None:
        """Stop the countdown; a pending expiry never fires."""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def start(self, interval: float) -> asyncio.Task:
        """Drive the countdown from the running event loop."""
        self._task = asyncio.get_running_loop().create_task(self.run(interval))
        return self._task

    async def run(self, interval: float) -> None:
        while self.active:
            await asyncio.sleep(interval)
            self.tick()
