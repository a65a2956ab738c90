import random

import pytest

from stroop.app.scheduler import Scheduler
from stroop.app.session import StroopSession
from stroop.app.store import GameStore
from stroop.app.timer import PrecisionTimer
from stroop.core.config import GameConfig


class FakeClock:
    """Monotonic milliseconds that only move when a test says so."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def advance(clock, scheduler):
    """Move the fake clock forward and run whatever became due."""
    def _advance(ms: float) -> None:
        clock.advance(ms)
        scheduler.tick()
    return _advance


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store(scheduler, rng):
    return GameStore(GameConfig(countdown_ms=3000), scheduler=scheduler, rng=rng)


@pytest.fixture
def session(store, scheduler):
    return StroopSession(store, PrecisionTimer(scheduler), scheduler)
