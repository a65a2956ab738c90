from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ColorName(str, Enum):
    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    BLACK = "BLACK"
    PURPLE = "PURPLE"
    ORANGE = "ORANGE"
    PINK = "PINK"
    CYAN = "CYAN"


class AnswerOutcome(str, Enum):
    SUCCESS = "success"
    IMPULSE_ERROR = "impulse_error"  # read the word instead of the ink
    WRONG_CHOICE = "wrong_choice"
    TIMEOUT = "timeout"


class GameStatus(str, Enum):
    IDLE = "idle"
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class ColorConfig:
    display_name: str
    hex_value: str
    rgb: Tuple[int, int, int]


@dataclass(frozen=True)
class StroopChallenge:
    id: str
    word: ColorName
    ink_color: ColorName
    created_at: float  # wall clock, seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word.value,
            "ink_color": self.ink_color.value,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StroopChallenge":
        return cls(
            id=str(data["id"]),
            word=ColorName(data["word"]),
            ink_color=ColorName(data["ink_color"]),
            created_at=float(data["created_at"]),
        )


@dataclass(frozen=True)
class RoundResult:
    challenge: StroopChallenge
    selected_color: Optional[ColorName]  # None on timeout
    outcome: AnswerOutcome
    reaction_time_ms: float
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "challenge": self.challenge.to_dict(),
            "selected_color": self.selected_color.value if self.selected_color else None,
            "outcome": self.outcome.value,
            "reaction_time_ms": float(self.reaction_time_ms),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundResult":
        selected = data.get("selected_color")
        return cls(
            challenge=StroopChallenge.from_dict(data["challenge"]),
            selected_color=ColorName(selected) if selected else None,
            outcome=AnswerOutcome(data["outcome"]),
            reaction_time_ms=float(data["reaction_time_ms"]),
            timestamp=float(data["timestamp"]),
        )


@dataclass(frozen=True)
class GameState:
    """
    Session aggregate. Never mutated in place: every transition builds a new
    instance with dataclasses.replace, so sequences are kept as tuples.
    """
    status: GameStatus = GameStatus.IDLE
    current_challenge: Optional[StroopChallenge] = None
    round_start_time: Optional[float] = None  # monotonic ms
    rounds: Tuple[RoundResult, ...] = ()
    current_streak: int = 0
    best_streak: int = 0
    total_rounds: int = 30
    current_round_number: int = 0
    active_colors: Tuple[ColorName, ...] = ()
    button_order: Tuple[ColorName, ...] = ()

    @property
    def round_answered(self) -> bool:
        """True once the current round has a RoundResult in the log."""
        return self.current_round_number > 0 and len(self.rounds) >= self.current_round_number


@dataclass
class SessionStatistics:
    total_rounds: int = 0
    correct_answers: int = 0
    impulse_errors: int = 0
    wrong_choices: int = 0
    timeouts: int = 0
    accuracy_rate: float = 0.0          # percent, 0-100
    average_reaction_time: float = 0.0  # ms
    fastest_reaction_time: float = 0.0  # ms
    slowest_reaction_time: float = 0.0  # ms
    longest_streak: int = 0
