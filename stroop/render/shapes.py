import pygame
from functools import lru_cache
from typing import Tuple


@lru_cache(maxsize=16)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.SysFont(None, size)


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    surface.blit(_font(size).render(text, True, color), pos)


def draw_text_centered(surface: pygame.Surface, text: str, center: Tuple[int, int], color=(230, 230, 230), size=24):
    img = _font(size).render(text, True, color)
    surface.blit(img, img.get_rect(center=center))


def draw_button(surface: pygame.Surface, rect: pygame.Rect, label: str, fill, text_color=(15, 15, 15), size=24):
    pygame.draw.rect(surface, fill, rect, border_radius=10)
    pygame.draw.rect(surface, (235, 235, 235), rect, width=2, border_radius=10)
    draw_text_centered(surface, label, rect.center, text_color, size=size)
