from __future__ import annotations
import logging
from typing import Optional

from stroop.app.scheduler import ScheduledCall, Scheduler
from stroop.core.const import TIMER_FRAME_MS

logger = logging.getLogger(__name__)


class PrecisionTimer:
    """
    Reaction-time stopwatch on the scheduler's monotonic clock.

    `elapsed_time` is a display value refreshed every `frame_ms` while
    running. get_elapsed_time() reads the clock directly against the origin
    recorded by the first start() after a reset(); stop() freezes the display
    value but keeps that origin, so only reset() clears it.
    """

    def __init__(self, scheduler: Scheduler, frame_ms: float = TIMER_FRAME_MS):
        self.scheduler = scheduler
        self.frame_ms = frame_ms
        self.elapsed_time: float = 0.0
        self.is_running: bool = False
        self._start_ms: Optional[float] = None
        self._frame: Optional[ScheduledCall] = None

    def _cancel_frame(self) -> None:
        if self._frame is not None:
            self._frame.cancel()
            self._frame = None

    def _on_frame(self) -> None:
        if self._start_ms is not None:
            self.elapsed_time = self.scheduler.now() - self._start_ms

    def start(self) -> None:
        if self._start_ms is not None:
            return
        self._start_ms = self.scheduler.now()
        self.is_running = True
        self._cancel_frame()
        self._frame = self.scheduler.call_every(self.frame_ms, self._on_frame)

    def stop(self) -> None:
        self._cancel_frame()
        self.is_running = False

    def reset(self) -> None:
        self._cancel_frame()
        self._start_ms = None
        self.elapsed_time = 0.0
        self.is_running = False

    def get_elapsed_time(self) -> float:
        if self._start_ms is None:
            return 0.0
        return self.scheduler.now() - self._start_ms

    def handle_visibility_change(self, hidden: bool) -> None:
        # a backgrounded window must not keep accumulating reaction time
        if hidden and self.is_running:
            logger.debug("Host hidden; stopping timer at %.0f ms", self.get_elapsed_time())
            self.stop()
