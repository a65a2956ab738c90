from __future__ import annotations
import logging
import pygame
from typing import List, Tuple

from stroop.api.config import EngineConfig
from stroop.api.frame_data import Point

logger = logging.getLogger(__name__)

_BTN_NAME = {1: "left", 2: "middle", 3: "right"}


class PointerInput:
    """
    Collects mouse presses between frames as logical screen points.
    - Only button-down counts; a press is delivered exactly once.
    - Respects --mirror by converting window coords -> logical coords.
    - With --debug, every press is logged so hit boxes can be checked.
    """

    def __init__(self, cfg: EngineConfig):
        self.mirror = cfg.mirror
        self.debug = cfg.debug
        self._clicks: List[Point] = []

    def _to_logical(self, x: int, y: int, w: int) -> Tuple[float, float]:
        if self.mirror:
            x = (w - 1) - x
        return float(x), float(y)

    def handle_pygame_event(self, event: pygame.event.Event, screen_size: Tuple[int, int]) -> None:
        if event.type != pygame.MOUSEBUTTONDOWN:
            # a press that started before focus was lost is stale
            if event.type == pygame.WINDOWFOCUSLOST:
                self._clicks.clear()
            return

        btn_name = _BTN_NAME.get(event.button)
        if btn_name is None:  # wheel
            return
        lx, ly = self._to_logical(*event.pos, screen_size[0])
        self._clicks.append(Point(lx, ly, btn_name))
        if self.debug:
            logger.debug("%s press at (%.0f, %.0f)", btn_name, lx, ly)

    def drain(self) -> List[Point]:
        """Return and forget the presses collected since the last call."""
        clicks, self._clicks = self._clicks, []
        return clicks
