from __future__ import annotations
import random
from typing import Iterable, Optional, Sequence, Tuple

from stroop.core.types import ColorConfig, ColorName


# Display name, hex value and RGB used by hosts to paint words and buttons
COLORS = {
    ColorName.RED: ColorConfig("Red", "#EF4444", (239, 68, 68)),
    ColorName.BLUE: ColorConfig("Blue", "#3B82F6", (59, 130, 246)),
    ColorName.GREEN: ColorConfig("Green", "#22C55E", (34, 197, 94)),
    ColorName.YELLOW: ColorConfig("Yellow", "#EAB308", (234, 179, 8)),
    # rendered light on the dark background, hence the label
    ColorName.BLACK: ColorConfig("White", "#F3F4F6", (243, 244, 246)),
    ColorName.PURPLE: ColorConfig("Purple", "#A855F7", (168, 85, 247)),
    ColorName.ORANGE: ColorConfig("Orange", "#F97316", (249, 115, 22)),
    ColorName.PINK: ColorConfig("Pink", "#EC4899", (236, 72, 153)),
    ColorName.CYAN: ColorConfig("Cyan", "#06B6D4", (6, 182, 212)),
}

COLOR_NAMES: Tuple[ColorName, ...] = tuple(COLORS)


def get_color(name: ColorName) -> ColorConfig:
    return COLORS[ColorName(name)]


def random_color(
    exclude: Optional[Iterable[ColorName]] = None,
    pool: Optional[Sequence[ColorName]] = None,
    rng: Optional[random.Random] = None,
) -> ColorName:
    """
    Uniform draw from `pool` (all colors by default) minus `exclude`.
    Raises ValueError when every candidate is excluded.
    """
    rng = rng or random
    candidates = list(COLOR_NAMES if pool is None else pool)
    if exclude:
        banned = set(exclude)
        candidates = [c for c in candidates if c not in banned]
    if not candidates:
        raise ValueError("No colors available to select")
    return rng.choice(candidates)


def shuffled(colors: Sequence[ColorName], rng: Optional[random.Random] = None) -> Tuple[ColorName, ...]:
    """Fisher-Yates shuffle into a new tuple; the input is left untouched."""
    rng = rng or random
    out = list(colors)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return tuple(out)
