from __future__ import annotations
import logging
import random
from typing import List, Optional

import pygame

from stroop.api import FrameData, Game
from stroop.app.context import Context
from stroop.app.history import HistoryStore
from stroop.app.scheduler import ScheduledCall
from stroop.app.session import StroopSession
from stroop.app.store import GameStore
from stroop.app.timer import PrecisionTimer
from stroop.core.colors import get_color
from stroop.core.config import GameConfig
from stroop.core.statistics import outcome_distribution
from stroop.core.timeout import timer_zone
from stroop.core.types import AnswerOutcome, ColorName, GameStatus
from stroop.render.shapes import draw_button, draw_text, draw_text_centered

logger = logging.getLogger(__name__)


# Layout
BUTTON_W = 130
BUTTON_H = 56
BUTTON_GAP = 14
BUTTON_ROW_Y_FROM_BOTTOM = 150
WORD_FONT_SIZE = 120
HUD_FONT_SIZE = 26
BIG_FONT_SIZE = 48

# Colors
HUD_COLOR = (230, 230, 230)
DIM_COLOR = (140, 140, 140)
ZONE_COLORS = {
    "safe": (34, 211, 238),
    "warning": (250, 204, 21),
    "danger": (248, 113, 113),
}
FEEDBACK_COLORS = {
    AnswerOutcome.SUCCESS: (34, 197, 94),
    AnswerOutcome.IMPULSE_ERROR: (234, 179, 8),
    AnswerOutcome.WRONG_CHOICE: (239, 68, 68),
    AnswerOutcome.TIMEOUT: (148, 163, 184),
}
FEEDBACK_TEXT = {
    AnswerOutcome.SUCCESS: "Correct!",
    AnswerOutcome.IMPULSE_ERROR: "Impulse! You read the word",
    AnswerOutcome.WRONG_CHOICE: "Wrong color",
    AnswerOutcome.TIMEOUT: "Too slow",
}

# keys 1..9 pick the n-th button
NUMBER_KEYS = [getattr(pygame, f"K_{i}") for i in range(1, 10)]

HIDDEN_EVENTS = (pygame.WINDOWFOCUSLOST, pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN)
SHOWN_EVENTS = (pygame.WINDOWFOCUSGAINED, pygame.WINDOWRESTORED, pygame.WINDOWSHOWN)


class StroopGame(Game):
    def on_load(self, ctx: Context, manifest):
        self.ctx = ctx
        self.manifest = manifest
        self.w, self.h = ctx.screen_size

        self.config = GameConfig.from_manifest(manifest, **ctx.overrides)
        rng = random.Random(self.config.seed)
        self.history = HistoryStore(self.config.history_profile, root=self.config.history_dir,
                                    limit=self.config.history_limit)

        store = GameStore(self.config, scheduler=ctx.scheduler, rng=rng)
        store.restore_snapshot(self.history.load())
        self.session = StroopSession(store, PrecisionTimer(ctx.scheduler), ctx.scheduler)
        store.subscribe(self._on_state_change)

        self._advance: Optional[ScheduledCall] = None
        self._advance_on_show = False
        self._countdown_started_ms: float = 0.0

    # ---------- Helpers ----------
    def _button_rects(self) -> List[pygame.Rect]:
        order = self.session.button_order
        total_w = len(order) * BUTTON_W + (len(order) - 1) * BUTTON_GAP
        x0 = (self.w - total_w) // 2
        y = self.h - BUTTON_ROW_Y_FROM_BOTTOM
        return [pygame.Rect(x0 + i * (BUTTON_W + BUTTON_GAP), y, BUTTON_W, BUTTON_H)
                for i in range(len(order))]

    def _on_state_change(self, state, prev) -> None:
        if state.status == GameStatus.COUNTDOWN and prev.status != GameStatus.COUNTDOWN:
            self._countdown_started_ms = self.ctx.scheduler.now()
        # only the post-answer pause advances on its own
        if state.status == GameStatus.PAUSED and state.round_answered and not prev.round_answered:
            self._advance = self.ctx.scheduler.call_later(self.config.feedback_ms, self._auto_advance)
        elif state.status in (GameStatus.IDLE, GameStatus.COUNTDOWN):
            self._cancel_advance()
        if state.status == GameStatus.FINISHED and prev.status != GameStatus.FINISHED:
            self._save_history()

    def _cancel_advance(self) -> None:
        if self._advance is not None:
            self._advance.cancel()
            self._advance = None
        self._advance_on_show = False

    def _auto_advance(self) -> None:
        self._advance = None
        if self.session.hidden:
            # keep the feedback up; the next round starts once the window is back
            self._advance_on_show = True
            return
        self.session.next_round()

    def _save_history(self) -> None:
        try:
            self.history.save(self.session.store.to_snapshot())
        except OSError as e:
            logger.warning("Could not save history to %s: %s", self.history.path, e)

    def _select_index(self, idx: int) -> None:
        order = self.session.button_order
        if 0 <= idx < len(order):
            self.session.select_color(order[idx])

    # ---------- Update ----------
    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        if self.session.status != GameStatus.PLAYING or not frame.clicks:
            return
        rects = self._button_rects()
        for p in frame.clicks:
            for idx, rect in enumerate(rects):
                if rect.collidepoint(p.x, p.y):
                    self._select_index(idx)
                    return

    # ---------- Draw ----------
    def on_draw(self, surface: pygame.Surface) -> None:
        status = self.session.status
        if status == GameStatus.IDLE:
            self._draw_start_screen(surface)
            return
        if status == GameStatus.FINISHED:
            self._draw_results(surface)
            return

        self._draw_hud(surface)
        if status == GameStatus.COUNTDOWN:
            self._draw_countdown(surface)
            return

        state = self.session.state
        if status == GameStatus.PAUSED and state.round_answered:
            self._draw_feedback(surface)
        elif status == GameStatus.PAUSED:
            draw_text_centered(surface, "Paused - press P to resume",
                               (self.w // 2, self.h // 2), HUD_COLOR, size=BIG_FONT_SIZE)
        else:
            self._draw_challenge(surface)
        self._draw_buttons(surface)

    def _draw_start_screen(self, surface):
        draw_text(surface, "Stroop Trainer", (20, 20), HUD_COLOR, size=40)
        draw_text(surface, "Pick the INK color, not the word.", (20, 70), DIM_COLOR, size=26)
        draw_text_centered(surface, "Press SPACE to start",
                           (self.w // 2, self.h // 2), HUD_COLOR, size=BIG_FONT_SIZE)
        best = self.session.best_streak
        if best:
            draw_text_centered(surface, f"Best streak so far: {best}",
                               (self.w // 2, self.h // 2 + 60), DIM_COLOR, size=HUD_FONT_SIZE)

    def _draw_hud(self, surface):
        s = self.session
        draw_text(surface, f"Round {s.current_round_number}/{s.total_rounds}",
                  (20, 16), HUD_COLOR, size=HUD_FONT_SIZE)
        draw_text(surface, f"Streak {s.current_streak}  Best {s.best_streak}",
                  (20, 46), HUD_COLOR, size=HUD_FONT_SIZE)
        draw_text(surface, f"Speed {s.speed_level}", (self.w - 160, 16), HUD_COLOR, size=HUD_FONT_SIZE)
        if s.status == GameStatus.PLAYING:
            zone = timer_zone(s.time_remaining, s.timeout_ms)
            draw_text(surface, f"{s.time_remaining / 1000:.1f}s", (self.w - 160, 46),
                      ZONE_COLORS[zone], size=HUD_FONT_SIZE)

    def _draw_countdown(self, surface):
        left_ms = self.config.countdown_ms - (self.ctx.scheduler.now() - self._countdown_started_ms)
        n = max(1, int(left_ms // 1000) + 1)
        draw_text_centered(surface, str(n), (self.w // 2, self.h // 2), HUD_COLOR, size=WORD_FONT_SIZE)

    def _draw_challenge(self, surface):
        ch = self.session.current_challenge
        if ch is None:
            return
        draw_text_centered(surface, get_color(ch.word).display_name.upper(),
                           (self.w // 2, self.h // 2 - 60), get_color(ch.ink_color).rgb,
                           size=WORD_FONT_SIZE)

    def _draw_feedback(self, surface):
        last = self.session.rounds[-1]
        text = FEEDBACK_TEXT[last.outcome]
        if last.outcome != AnswerOutcome.TIMEOUT:
            text += f"  ({last.reaction_time_ms:.0f} ms)"
        draw_text_centered(surface, text, (self.w // 2, self.h // 2 - 60),
                           FEEDBACK_COLORS[last.outcome], size=BIG_FONT_SIZE)

    def _draw_buttons(self, surface):
        for i, (color, rect) in enumerate(zip(self.session.button_order, self._button_rects())):
            cfg = get_color(color)
            draw_button(surface, rect, f"{i + 1} {cfg.display_name}", cfg.rgb)

    def _draw_results(self, surface):
        stats = self.session.stats
        draw_text_centered(surface, "Results", (self.w // 2, 60), HUD_COLOR, size=BIG_FONT_SIZE)
        lines = [
            f"Accuracy: {stats.accuracy_rate:.0f}%  ({stats.correct_answers}/{stats.total_rounds})",
            f"Average reaction: {stats.average_reaction_time:.0f} ms",
            f"Fastest / slowest: {stats.fastest_reaction_time:.0f} / {stats.slowest_reaction_time:.0f} ms",
            f"Longest streak: {stats.longest_streak}",
            "  ".join(f"{label}: {n}" for label, n in outcome_distribution(self.session.rounds)),
        ]
        for i, line in enumerate(lines):
            draw_text_centered(surface, line, (self.w // 2, 130 + i * 40), HUD_COLOR, size=HUD_FONT_SIZE)
        draw_text_centered(surface, "SPACE to play again, R for menu",
                           (self.w // 2, self.h - 80), DIM_COLOR, size=HUD_FONT_SIZE)

    # ---------- Events ----------
    def on_event(self, event: pygame.event.Event) -> None:
        if event.type in HIDDEN_EVENTS:
            self.session.handle_visibility_change(True)
            return
        if event.type in SHOWN_EVENTS:
            self.session.handle_visibility_change(False)
            if self._advance_on_show:
                self._advance_on_show = False
                self._advance = self.ctx.scheduler.call_later(self.config.feedback_ms, self._auto_advance)
            return
        if event.type != pygame.KEYDOWN:
            return

        status = self.session.status
        if event.key in (pygame.K_SPACE, pygame.K_RETURN):
            if status in (GameStatus.IDLE, GameStatus.FINISHED):
                self.session.start_game()
        elif event.key == pygame.K_p:
            if status == GameStatus.PLAYING:
                self.session.pause_game()
            elif status == GameStatus.PAUSED:
                self.session.resume_game()
        elif event.key == pygame.K_r:
            self.session.reset_game()
        elif event.key in NUMBER_KEYS:
            self._select_index(NUMBER_KEYS.index(event.key))

    def on_unload(self) -> None:
        self._cancel_advance()
        self.session.close()
        if self.session.rounds:
            self._save_history()


def get_game():
    return StroopGame()
