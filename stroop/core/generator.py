from __future__ import annotations
import random
import time
import uuid
from typing import Optional, Sequence

from stroop.core.types import AnswerOutcome, ColorName, StroopChallenge
from stroop.core.colors import COLOR_NAMES, random_color


def generate_challenge(
    previous: Optional[StroopChallenge] = None,
    active_colors: Optional[Sequence[ColorName]] = None,
    rng: Optional[random.Random] = None,
) -> StroopChallenge:
    """
    Build one trial whose word and ink always conflict.

    The word avoids `previous.word`; the ink is drawn with the word excluded,
    so word != ink_color holds by construction. A pool of fewer than two
    colors cannot satisfy that and raises ValueError.
    """
    pool = tuple(COLOR_NAMES if active_colors is None else active_colors)
    if len(set(pool)) < 2:
        raise ValueError(f"Need at least 2 active colors to build a challenge, got {len(set(pool))}")

    exclude = [previous.word] if previous is not None else None
    word = random_color(exclude=exclude, pool=pool, rng=rng)
    ink_color = random_color(exclude=[word], pool=pool, rng=rng)

    return StroopChallenge(
        id=uuid.uuid4().hex,
        word=word,
        ink_color=ink_color,
        created_at=time.time(),
    )


def classify(challenge: StroopChallenge, selected: ColorName) -> AnswerOutcome:
    """Outcome of picking `selected`; a missing pick is the caller's timeout."""
    if selected == challenge.ink_color:
        return AnswerOutcome.SUCCESS
    if selected == challenge.word:
        return AnswerOutcome.IMPULSE_ERROR
    return AnswerOutcome.WRONG_CHOICE


validate_answer = classify


def is_challenge_valid(challenge: StroopChallenge) -> bool:
    return challenge.word != challenge.ink_color
