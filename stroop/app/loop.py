from __future__ import annotations
import logging
import time
from pathlib import Path
from typing import Optional

import pygame

from stroop.api.config import EngineConfig
from stroop.api.frame_data import FrameData
from stroop.app.context import Context
from stroop.app.loader import GAMES_DIR, load_game_manifest, load_game_module
from stroop.app.scheduler import Scheduler
from stroop.input.pointer import PointerInput

logger = logging.getLogger(__name__)

BACKGROUND = (12, 14, 18)
FRAME_BORDER = (220, 220, 220)


def run_game(
    game_id: str,
    screen_size: tuple[int, int],
    mirror: bool = False,
    debug: bool = False,
    total_rounds: Optional[int] = None,
    games_dir: Optional[Path] = None,
    history_dir: Optional[Path] = None,
):
    game_root = (games_dir or GAMES_DIR) / game_id
    manifest = load_game_manifest(game_root)
    module = load_game_module(game_root)
    game = module.get_game()

    pygame.init()
    pygame.display.set_caption(manifest.get("title", f"Stroop Trainer - {game_id}"))
    screen = pygame.display.set_mode(screen_size)
    clock = pygame.time.Clock()

    cfg = EngineConfig(screen_size=screen_size, mirror=mirror, debug=debug)
    scheduler = Scheduler()
    pointer = PointerInput(cfg)

    # Render target: draw to off-screen if mirroring, otherwise draw directly to screen
    render_surface = screen if not mirror else pygame.Surface(screen_size).convert()

    ctx = Context(
        screen=render_surface,
        clock=clock,
        cfg=cfg,
        scheduler=scheduler,
        screen_size=screen_size,
        overrides={"total_rounds": total_rounds, "history_dir": history_dir},
    )

    game.on_load(ctx, manifest)
    logger.info("Running %s at %dx%d", game_id, *screen_size)

    running = True
    try:
        while running:
            dt = clock.tick(cfg.fps)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                pointer.handle_pygame_event(event, screen_size)
                game.on_event(event)

            # deadlines and countdowns fire here, before the game reads state
            scheduler.tick()
            frame_data = FrameData(timestamp=time.time(), clicks=pointer.drain())

            # ---- draw to render_surface ----
            render_surface.fill(BACKGROUND)
            game.on_update(dt, frame_data)
            game.on_draw(render_surface)
            pygame.draw.rect(render_surface, FRAME_BORDER,
                             (8, 8, screen_size[0] - 16, screen_size[1] - 16), 1)

            # ---- present to window ----
            if mirror:
                flipped = pygame.transform.flip(render_surface, True, False)
                screen.blit(flipped, (0, 0))

            pygame.display.flip()

    finally:
        game.on_unload()
        scheduler.cancel_all()
        pygame.quit()
