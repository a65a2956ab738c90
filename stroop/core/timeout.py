from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

from stroop.core.const import DANGER_ZONE_PCT, MIN_TIMEOUT_MS, TIMEOUT_TIERS, WARNING_ZONE_PCT

Tier = Tuple[int, int, str]


@dataclass(frozen=True)
class TimeoutConfig:
    timeout_ms: int
    speed_level: str


def validate_tiers(tiers: Sequence[Tier], floor_ms: int = MIN_TIMEOUT_MS) -> Tuple[Tier, ...]:
    """
    Return the tiers sorted by streak threshold, or raise ValueError if they
    would not give a non-increasing, floored step function starting at 0.
    """
    ordered = tuple(sorted((int(s), int(t), str(label)) for s, t, label in tiers))
    if not ordered:
        raise ValueError("timeout tiers must not be empty")
    if ordered[0][0] != 0:
        raise ValueError("timeout tiers must include a tier starting at streak 0")

    thresholds = [s for s, _, _ in ordered]
    if len(set(thresholds)) != len(thresholds):
        raise ValueError(f"duplicate streak thresholds in timeout tiers: {thresholds}")

    prev_ms = None
    for streak, timeout_ms, _ in ordered:
        if timeout_ms < floor_ms:
            raise ValueError(f"tier at streak {streak} has {timeout_ms}ms, below the {floor_ms}ms floor")
        if prev_ms is not None and timeout_ms > prev_ms:
            raise ValueError(f"tier at streak {streak} raises the timeout ({prev_ms}ms -> {timeout_ms}ms)")
        prev_ms = timeout_ms
    return ordered


def get_timeout_config(streak: int, tiers: Sequence[Tier] = TIMEOUT_TIERS) -> TimeoutConfig:
    """Higher streak, shorter budget: pick the highest tier the streak has reached."""
    streak = max(0, int(streak))
    chosen = None
    for min_streak, timeout_ms, label in tiers:
        if streak >= min_streak and (chosen is None or min_streak >= chosen[0]):
            chosen = (min_streak, timeout_ms, label)
    if chosen is None:
        raise ValueError("timeout tiers must include a tier starting at streak 0")
    return TimeoutConfig(timeout_ms=chosen[1], speed_level=chosen[2])


def timer_zone(time_remaining: float, timeout_ms: float) -> str:
    """'safe', 'warning' or 'danger' depending on how much budget is left."""
    if timeout_ms <= 0:
        return "danger"
    pct = (time_remaining / timeout_ms) * 100
    if pct <= DANGER_ZONE_PCT:
        return "danger"
    if pct <= WARNING_ZONE_PCT:
        return "warning"
    return "safe"
