from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class EngineConfig:
    """Host window settings, fixed for the lifetime of a run."""
    screen_size: Tuple[int, int]
    fps: int = 60
    mirror: bool = False
    debug: bool = False  # log every pointer press
