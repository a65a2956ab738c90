from __future__ import annotations
import logging
from typing import Optional

from stroop.app.scheduler import ScheduledCall, Scheduler
from stroop.app.store import GameStore
from stroop.app.timer import PrecisionTimer
from stroop.core.const import TIME_REMAINING_POLL_MS
from stroop.core.statistics import calculate_session_stats
from stroop.core.timeout import get_timeout_config
from stroop.core.types import ColorName, GameState, GameStatus, SessionStatistics

logger = logging.getLogger(__name__)


class StroopSession:
    """
    Binds store, timer and timeout budget into the per-round protocol:

    1. entering `playing` with a fresh round_start_time resets and starts the
       timer, computes the budget from the current streak and arms a single
       deadline call plus a display poll;
    2. a color pick cancels both, reads the reaction time and submits it;
    3. the deadline submits (None, timeout_ms), forcing a timeout outcome;
    4. leaving `playing` for any reason cancels both.

    Only one of pick/deadline can land per round: whichever runs first
    cancels the other, and the store ignores anything that still gets through.
    """

    def __init__(
        self,
        store: Optional[GameStore] = None,
        timer: Optional[PrecisionTimer] = None,
        scheduler: Optional[Scheduler] = None,
        poll_ms: float = TIME_REMAINING_POLL_MS,
    ):
        if scheduler is None:
            scheduler = store.scheduler if store is not None else Scheduler()
        self.scheduler = scheduler
        self.store = store or GameStore(scheduler=scheduler)
        self.timer = timer or PrecisionTimer(scheduler)
        self.poll_ms = poll_ms

        budget = get_timeout_config(0, self.store.config.timeout_tiers)
        self.timeout_ms: int = budget.timeout_ms
        self.speed_level: str = budget.speed_level
        self.time_remaining: float = float(budget.timeout_ms)

        self._deadline: Optional[ScheduledCall] = None
        self._poll: Optional[ScheduledCall] = None
        self._hidden = False
        self._unsubscribe = self.store.subscribe(self._on_state_change)

    # ---------- Read model ----------
    @property
    def state(self) -> GameState:
        return self.store.state

    @property
    def status(self) -> GameStatus:
        return self.store.state.status

    @property
    def current_challenge(self):
        return self.store.state.current_challenge

    @property
    def current_round_number(self) -> int:
        return self.store.state.current_round_number

    @property
    def total_rounds(self) -> int:
        return self.store.state.total_rounds

    @property
    def rounds(self):
        return self.store.state.rounds

    @property
    def current_streak(self) -> int:
        return self.store.state.current_streak

    @property
    def best_streak(self) -> int:
        return self.store.state.best_streak

    @property
    def active_colors(self):
        return self.store.state.active_colors

    @property
    def button_order(self):
        return self.store.state.button_order

    @property
    def elapsed_time(self) -> float:
        return self.timer.elapsed_time

    @property
    def is_timer_running(self) -> bool:
        return self.timer.is_running

    @property
    def hidden(self) -> bool:
        return self._hidden

    @property
    def armed(self) -> bool:
        return self._deadline is not None and self._deadline.active

    @property
    def stats(self) -> SessionStatistics:
        return calculate_session_stats(self.store.state.rounds)

    # ---------- Round protocol ----------
    def _disarm(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
        if self._poll is not None:
            self._poll.cancel()
            self._poll = None

    def _arm(self) -> None:
        self._disarm()
        self.timer.reset()
        self.timer.start()

        budget = get_timeout_config(self.store.state.current_streak, self.store.config.timeout_tiers)
        self.timeout_ms = budget.timeout_ms
        self.speed_level = budget.speed_level
        self.time_remaining = float(budget.timeout_ms)

        self._deadline = self.scheduler.call_later(budget.timeout_ms, self._on_deadline)
        self._poll = self.scheduler.call_every(self.poll_ms, self._refresh_time_remaining)
        logger.debug("Round %d armed: %d ms (%s)", self.store.state.current_round_number,
                     budget.timeout_ms, budget.speed_level)

    def _refresh_time_remaining(self) -> None:
        self.time_remaining = max(0.0, self.timeout_ms - self.timer.get_elapsed_time())

    def _on_deadline(self) -> None:
        self._deadline = None
        timeout_ms = self.timeout_ms
        self.timer.stop()
        self._disarm()
        self.time_remaining = 0.0
        logger.debug("Round %d timed out after %d ms", self.store.state.current_round_number, timeout_ms)
        self.store.submit_answer(None, timeout_ms)

    def _on_state_change(self, state: GameState, prev: GameState) -> None:
        if state.status == GameStatus.PLAYING:
            if prev.status == GameStatus.PLAYING and state.round_start_time == prev.round_start_time:
                return
            if self._hidden:
                # a countdown or next_round landed in the background; hold the round
                logger.info("Round %d started while hidden; pausing", state.current_round_number)
                self._disarm()
                self.store.pause_game()
                return
            self._arm()
        elif prev.status == GameStatus.PLAYING or self._deadline is not None:
            self._disarm()
            self.timer.stop()

    # ---------- Actions ----------
    def start_game(self, total_rounds: Optional[int] = None) -> None:
        self._disarm()
        self.timer.reset()
        self.store.start_game(total_rounds)

    def select_color(self, color: ColorName) -> None:
        if self.store.state.status != GameStatus.PLAYING:
            return
        self._disarm()
        reaction_time = self.timer.get_elapsed_time()
        self.timer.stop()
        self.store.submit_answer(ColorName(color), reaction_time)

    handle_answer_selection = select_color

    def next_round(self) -> None:
        # the timer is restarted when the store enters `playing`
        self.store.next_round()

    def pause_game(self) -> None:
        self.store.pause_game()

    def resume_game(self) -> None:
        self.store.resume_game()

    def reset_game(self) -> None:
        self._disarm()
        self.timer.reset()
        self.store.reset_game()
        budget = get_timeout_config(0, self.store.config.timeout_tiers)
        self.timeout_ms = budget.timeout_ms
        self.speed_level = budget.speed_level
        self.time_remaining = float(budget.timeout_ms)

    def handle_visibility_change(self, hidden: bool) -> None:
        """
        Host went to the background (or came back). While hidden no round is
        timed: a running one is paused, and one that starts is paused at once.
        Coming back leaves the game paused until resume_game().
        """
        self._hidden = bool(hidden)
        self.timer.handle_visibility_change(hidden)
        if hidden and self.store.state.status == GameStatus.PLAYING:
            logger.info("Host hidden mid-round; pausing")
            self.store.pause_game()

    def close(self) -> None:
        """Unmount: no call scheduled by this session may fire afterwards."""
        self._disarm()
        self.timer.reset()
        self._unsubscribe()
        self.store.cancel_countdown()
