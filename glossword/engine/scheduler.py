"""Cooperative single-threaded timer queue.

Nothing here runs in the background: callbacks only fire from
:meth:`Scheduler.run_ready`, each one to completion, in deadline order
(ties in scheduling order). UI adapters call ``run_ready`` from their event
loop; tests drive time explicitly through :meth:`Scheduler.advance` with a
fake clock.
"""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(order=True)
class TimerHandle:
    deadline: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Clock that only moves when told to; used by tests and the CLI."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Scheduler:
    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self.clock = clock or time.monotonic
        self._queue: List[TimerHandle] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.clock() + max(0.0, delay), next(self._counter), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def call_soon(self, callback: Callable[[], None]) -> TimerHandle:
        return self.call_later(0.0, callback)

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()

    @property
    def pending(self) -> int:
        return sum(1 for handle in self._queue if not handle.cancelled)

    def run_ready(self) -> int:
        """Run every callback whose deadline has passed; return how many ran.

        Callbacks scheduled with ``call_soon`` while running are picked up in
        the same pass.
        """

        ran = 0
        while self._queue:
            head = self._queue[0]
            if head.cancelled:
                heapq.heappop(self._queue)
                continue
            if head.deadline > self.clock():
                break
            heapq.heappop(self._queue)
            head.callback()
            ran += 1
        return ran

    def advance(self, seconds: float) -> int:
        """Move a :class:`ManualClock` forward and run whatever became due."""

        if not isinstance(self.clock, ManualClock):
            raise TypeError("advance() requires a ManualClock")
        self.clock.advance(seconds)
        return self.run_ready()
