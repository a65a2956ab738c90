from __future__ import annotations
from typing import List, Sequence, Tuple

import numpy as np

from stroop.core.types import AnswerOutcome, RoundResult, SessionStatistics


# Reaction time buckets (lower bound inclusive), ms
RT_BUCKET_EDGES = (500, 1000, 2000)
RT_BUCKET_LABELS = ("<500ms", "500-1000ms", "1000-2000ms", ">2000ms")

OUTCOME_LABELS = (
    (AnswerOutcome.SUCCESS, "Correct"),
    (AnswerOutcome.IMPULSE_ERROR, "Impulse Error"),
    (AnswerOutcome.WRONG_CHOICE, "Wrong"),
    (AnswerOutcome.TIMEOUT, "Timeout"),
)


def _reaction_times(rounds: Sequence[RoundResult]) -> np.ndarray:
    return np.array([r.reaction_time_ms for r in rounds], dtype=np.float64)


def longest_streak(rounds: Sequence[RoundResult]) -> int:
    best = 0
    run = 0
    for r in rounds:
        if r.outcome == AnswerOutcome.SUCCESS:
            run += 1
            best = max(best, run)
        else:
            run = 0
    return best


def calculate_session_stats(rounds: Sequence[RoundResult]) -> SessionStatistics:
    if not rounds:
        return SessionStatistics()

    outcomes = [r.outcome for r in rounds]
    correct = outcomes.count(AnswerOutcome.SUCCESS)
    times = _reaction_times(rounds)

    return SessionStatistics(
        total_rounds=len(rounds),
        correct_answers=correct,
        impulse_errors=outcomes.count(AnswerOutcome.IMPULSE_ERROR),
        wrong_choices=outcomes.count(AnswerOutcome.WRONG_CHOICE),
        timeouts=outcomes.count(AnswerOutcome.TIMEOUT),
        accuracy_rate=correct / len(rounds) * 100.0,
        average_reaction_time=float(times.mean()),
        fastest_reaction_time=float(times.min()),
        slowest_reaction_time=float(times.max()),
        longest_streak=longest_streak(rounds),
    )


def reaction_time_distribution(rounds: Sequence[RoundResult]) -> List[Tuple[str, int]]:
    """Counts per bucket, every bucket listed (zeros included)."""
    counts = np.zeros(len(RT_BUCKET_LABELS), dtype=int)
    if rounds:
        idx = np.digitize(_reaction_times(rounds), RT_BUCKET_EDGES, right=False)
        counts = np.bincount(idx, minlength=len(RT_BUCKET_LABELS))
    return [(label, int(n)) for label, n in zip(RT_BUCKET_LABELS, counts)]


def reaction_time_trend(rounds: Sequence[RoundResult]) -> List[Tuple[int, float, AnswerOutcome]]:
    return [(i + 1, r.reaction_time_ms, r.outcome) for i, r in enumerate(rounds)]


def outcome_distribution(rounds: Sequence[RoundResult]) -> List[Tuple[str, int]]:
    outcomes = [r.outcome for r in rounds]
    dist = [(label, outcomes.count(outcome)) for outcome, label in OUTCOME_LABELS]
    return [(label, n) for label, n in dist if n > 0]


def average_time_by_outcome(rounds: Sequence[RoundResult]) -> List[Tuple[str, int]]:
    out = []
    for outcome, label in OUTCOME_LABELS:
        times = _reaction_times([r for r in rounds if r.outcome == outcome])
        avg = int(round(float(times.mean()))) if times.size else 0
        if avg > 0:
            out.append((label, avg))
    return out
