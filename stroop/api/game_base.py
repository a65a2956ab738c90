from __future__ import annotations

import pygame

from stroop.app.context import Context

from .frame_data import FrameData


class Game:
    """
    Contract between the host loop and a loadable game.

    Per frame the loop ticks ctx.scheduler, forwards pygame events to
    on_event, then calls on_update and on_draw in that order.
    """

    def on_load(self, ctx: Context, manifest: dict) -> None:
        """Once, after main.py is imported; `manifest` is the parsed manifest.yaml."""
        ...

    def on_update(self, dt_ms: float, frame: FrameData) -> None:
        """Advance game logic; `frame.clicks` holds this frame's pointer presses."""
        ...

    def on_draw(self, surface: pygame.Surface) -> None:
        ...

    def on_event(self, event: pygame.event.Event) -> None:
        """Raw pygame events: keys, window focus and visibility changes."""
        ...

    def on_unload(self) -> None:
        """Last call before pygame shuts down; persist anything worth keeping."""
        ...
