from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from stroop.core.types import ColorName
from stroop.core.const import (
    BASE_COLORS,
    COUNTDOWN_MS,
    DEFAULT_TOTAL_ROUNDS,
    FEEDBACK_MS,
    HISTORY_LIMIT,
    TIMEOUT_TIERS,
    UNLOCK_TABLE,
)
from stroop.core.timeout import validate_tiers


def validate_unlocks(unlock_table, base_colors) -> None:
    """
    Every milestone must be a distinct positive streak, and every unlock must
    add a color that is not already in play; otherwise it could never fire.
    """
    milestones = [streak for streak, _ in unlock_table]
    if any(streak < 1 for streak in milestones):
        raise ValueError(f"unlock milestones must be >= 1, got {milestones}")
    if len(set(milestones)) != len(milestones):
        raise ValueError(f"duplicate unlock milestones: {milestones}")

    colors = [color for _, color in unlock_table]
    if len(set(colors)) != len(colors):
        raise ValueError(f"a color is unlocked more than once: {[c.value for c in colors]}")
    already = set(colors) & set(base_colors)
    if already:
        raise ValueError(f"unlock colors already in base_colors: {sorted(c.value for c in already)}")


@dataclass(frozen=True)
class GameConfig:
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    countdown_ms: int = COUNTDOWN_MS
    feedback_ms: int = FEEDBACK_MS
    base_colors: Tuple[ColorName, ...] = BASE_COLORS
    unlock_table: Tuple[Tuple[int, ColorName], ...] = UNLOCK_TABLE
    timeout_tiers: Tuple[Tuple[int, int, str], ...] = TIMEOUT_TIERS
    history_limit: int = HISTORY_LIMIT
    history_profile: str = "default"
    history_dir: Optional[str] = None  # default: ~/.stroop-trainer/history
    seed: Optional[int] = None

    def __post_init__(self):
        if self.total_rounds < 1:
            raise ValueError(f"total_rounds must be >= 1, got {self.total_rounds}")
        if len(set(self.base_colors)) < 2:
            raise ValueError("base_colors needs at least 2 distinct colors")
        if self.countdown_ms < 0 or self.feedback_ms < 0:
            raise ValueError("countdown_ms and feedback_ms must be >= 0")
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be >= 1, got {self.history_limit}")
        validate_tiers(self.timeout_tiers)
        validate_unlocks(self.unlock_table, self.base_colors)

    @classmethod
    def from_manifest(cls, manifest: Optional[Dict[str, Any]], **overrides) -> "GameConfig":
        """
        Build a config from a game manifest's `options` block, e.g.:

            options:
              total_rounds: 30
              countdown_ms: 3000
              unlock_table:
                - [3, PURPLE]
                - [6, ORANGE]

        Keyword overrides that are not None win over the manifest.
        """
        opts = dict((manifest or {}).get("options", {}) or {})
        opts.update({k: v for k, v in overrides.items() if v is not None})

        kwargs: Dict[str, Any] = {}
        for key in ("total_rounds", "countdown_ms", "feedback_ms", "history_limit"):
            if key in opts:
                kwargs[key] = int(opts[key])
        if "history_profile" in opts:
            kwargs["history_profile"] = str(opts["history_profile"])
        if opts.get("history_dir") is not None:
            kwargs["history_dir"] = str(opts["history_dir"])
        if opts.get("seed") is not None:
            kwargs["seed"] = int(opts["seed"])
        if "base_colors" in opts:
            kwargs["base_colors"] = tuple(ColorName(str(c).upper()) for c in opts["base_colors"])
        if "unlock_table" in opts:
            kwargs["unlock_table"] = tuple(
                (int(streak), ColorName(str(color).upper())) for streak, color in opts["unlock_table"])
        if "timeout_tiers" in opts:
            kwargs["timeout_tiers"] = validate_tiers(
                [(s, t, label) for s, t, label in opts["timeout_tiers"]])
        return cls(**kwargs)
