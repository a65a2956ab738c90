from __future__ import annotations
import dataclasses
import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional

from stroop.app.scheduler import ScheduledCall, Scheduler
from stroop.core.colors import shuffled
from stroop.core.config import GameConfig
from stroop.core.generator import classify, generate_challenge
from stroop.core.types import AnswerOutcome, ColorName, GameState, GameStatus, RoundResult

logger = logging.getLogger(__name__)

Listener = Callable[[GameState, GameState], None]


class GameStore:
    """
    Stroop session state machine:

        idle -> countdown -> playing <-> paused -> finished

    The read model is `state`, a frozen GameState swapped out on every
    transition. Actions that do not apply to the current status are ignored
    without raising, since timers and user input race each other.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random(self.config.seed)
        self._listeners: List[Listener] = []
        self._countdown: Optional[ScheduledCall] = None
        self.state = self._initial_state()

    # ---------- Helpers ----------
    def _initial_state(self) -> GameState:
        base = tuple(self.config.base_colors)
        return GameState(
            status=GameStatus.IDLE,
            total_rounds=self.config.total_rounds,
            active_colors=base,
            button_order=base,
        )

    def _set(self, **changes) -> None:
        prev = self.state
        self.state = dataclasses.replace(prev, **changes)
        if self.state.status != prev.status:
            logger.debug("Status %s -> %s (round %d/%d)", prev.status.value, self.state.status.value,
                         self.state.current_round_number, self.state.total_rounds)
        for listener in list(self._listeners):
            listener(self.state, prev)

    def cancel_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _unlock_for(self, streak: int) -> Optional[ColorName]:
        for milestone, color in self.config.unlock_table:
            if milestone == streak and color not in self.state.active_colors:
                return color
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(state, previous)` after every transition; returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def __getattr__(self, name: str) -> Any:
        # read-model passthrough: store.status, store.rounds, ...
        state = self.__dict__.get("state")
        if state is not None and name in GameState.__dataclass_fields__:
            return getattr(state, name)
        raise AttributeError(name)

    # ---------- Actions ----------
    def start_game(self, total_rounds: Optional[int] = None) -> None:
        total = self.config.total_rounds if total_rounds is None else int(total_rounds)
        if total < 1:
            raise ValueError(f"total_rounds must be >= 1, got {total}")

        self.cancel_countdown()
        colors = tuple(self.config.base_colors)
        first = generate_challenge(None, colors, rng=self.rng)
        logger.info("Starting Stroop session: %d rounds, %d colors", total, len(colors))
        self._set(
            status=GameStatus.COUNTDOWN,
            total_rounds=total,
            current_round_number=1,
            rounds=(),
            current_streak=0,
            best_streak=0,
            current_challenge=first,
            round_start_time=None,
            active_colors=colors,
            button_order=colors,
        )
        self._countdown = self.scheduler.call_later(self.config.countdown_ms, self._finish_countdown)

    def _finish_countdown(self) -> None:
        self._countdown = None
        if self.state.status != GameStatus.COUNTDOWN:
            return
        self._set(status=GameStatus.PLAYING, round_start_time=self.scheduler.now())

    def submit_answer(self, selected_color: Optional[ColorName], reaction_time_ms: float) -> None:
        state = self.state
        if state.status != GameStatus.PLAYING or state.current_challenge is None:
            logger.debug("Ignoring answer %s while %s", selected_color, state.status.value)
            return

        if selected_color is None:
            outcome = AnswerOutcome.TIMEOUT
        else:
            selected_color = ColorName(selected_color)
            outcome = classify(state.current_challenge, selected_color)

        result = RoundResult(
            challenge=state.current_challenge,
            selected_color=selected_color,
            outcome=outcome,
            reaction_time_ms=float(reaction_time_ms),
            timestamp=time.time(),
        )

        streak = state.current_streak + 1 if outcome == AnswerOutcome.SUCCESS else 0
        changes: Dict[str, Any] = {
            "rounds": state.rounds + (result,),
            "current_streak": streak,
            "best_streak": max(state.best_streak, streak),
        }

        if outcome == AnswerOutcome.SUCCESS:
            unlocked = self._unlock_for(streak)
            if unlocked is not None:
                active = state.active_colors + (unlocked,)
                changes["active_colors"] = active
                changes["button_order"] = shuffled(active, rng=self.rng)
                logger.info("Streak %d: unlocked %s", streak, unlocked.value)

        if state.current_round_number >= state.total_rounds:
            changes.update(status=GameStatus.FINISHED, current_challenge=None, round_start_time=None)
            logger.info("Session finished: best streak %d", changes["best_streak"])
        else:
            # feedback pause; the host calls next_round() when it is done showing it
            changes.update(status=GameStatus.PAUSED)
        self._set(**changes)

    def next_round(self) -> None:
        state = self.state
        if state.status != GameStatus.PAUSED or not state.round_answered:
            return
        if state.current_round_number >= state.total_rounds:
            return

        challenge = generate_challenge(state.current_challenge, state.active_colors, rng=self.rng)
        self._set(
            status=GameStatus.PLAYING,
            current_round_number=state.current_round_number + 1,
            current_challenge=challenge,
            round_start_time=self.scheduler.now(),
        )

    def pause_game(self) -> None:
        if self.state.status == GameStatus.PLAYING:
            self._set(status=GameStatus.PAUSED)

    def resume_game(self) -> None:
        # only a manual pause resumes; the feedback pause waits for next_round()
        state = self.state
        if state.status != GameStatus.PAUSED or state.round_answered:
            return
        # the reaction clock restarts for the interrupted round
        self._set(status=GameStatus.PLAYING, round_start_time=self.scheduler.now())

    def reset_game(self) -> None:
        self.cancel_countdown()
        fresh = self._initial_state()
        self._set(**{f.name: getattr(fresh, f.name) for f in dataclasses.fields(fresh)})

    # ---------- Persistence ----------
    def to_snapshot(self, limit: Optional[int] = None) -> Dict[str, Any]:
        """Durable part of the session only: recent rounds and the best streak."""
        limit = self.config.history_limit if limit is None else limit
        rounds = self.state.rounds[-limit:] if limit > 0 else ()
        return {
            "rounds": [r.to_dict() for r in rounds],
            "best_streak": self.state.best_streak,
        }

    def restore_snapshot(self, snapshot: Optional[Dict[str, Any]]) -> None:
        if not snapshot:
            return
        if self.state.status != GameStatus.IDLE:
            logger.debug("Ignoring snapshot restore while %s", self.state.status.value)
            return
        rounds = tuple(RoundResult.from_dict(r) for r in snapshot.get("rounds", []) or [])
        rounds = rounds[-self.config.history_limit:]
        self._set(rounds=rounds, best_streak=int(snapshot.get("best_streak", 0) or 0))
        logger.debug("Restored %d rounds (best streak %d)", len(rounds), self.state.best_streak)

    @classmethod
    def from_snapshot(cls, snapshot: Optional[Dict[str, Any]], **kwargs) -> "GameStore":
        store = cls(**kwargs)
        store.restore_snapshot(snapshot)
        return store
