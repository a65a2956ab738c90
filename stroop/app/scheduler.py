from __future__ import annotations
import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


class ScheduledCall:
    """Handle for a pending callback. cancel() is safe to call repeatedly."""

    def __init__(self, due_ms: float, callback: Callable[[], None], interval_ms: Optional[float] = None):
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        if self.cancelled:
            return False
        return self.interval_ms is not None or not self.fired

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """
    Cooperative timer queue. Nothing runs on its own: the host loop calls
    tick() every frame and every callback whose deadline has passed runs
    there, in deadline order, on the caller's thread.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or monotonic_ms
        self._queue: List = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self.clock()

    def _push(self, call: ScheduledCall) -> ScheduledCall:
        heapq.heappush(self._queue, (call.due_ms, next(self._seq), call))
        return call

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        return self._push(ScheduledCall(self.now() + max(0.0, delay_ms), callback))

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        return self._push(ScheduledCall(self.now() + interval_ms, callback, interval_ms))

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def cancel_all(self) -> None:
        for _, _, call in self._queue:
            call.cancel()
        self._queue.clear()

    def tick(self) -> int:
        """Run everything that is due. Returns how many callbacks ran."""
        now = self.now()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            call.fired = True
            if call.interval_ms is not None:
                next_due = call.due_ms + call.interval_ms
                # fell behind (host stalled): skip missed beats instead of bursting
                if next_due <= now:
                    next_due = now + call.interval_ms
                call.due_ms = next_due
                self._push(call)
            call.callback()
            ran += 1
        return ran
