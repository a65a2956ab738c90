from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import pygame

from stroop.api.config import EngineConfig
from stroop.app.scheduler import Scheduler


@dataclass
class Context:
    screen: pygame.Surface
    clock: pygame.time.Clock
    cfg: EngineConfig
    # ticked by the loop once per frame, before on_update
    scheduler: Scheduler
    screen_size: Tuple[int, int]
    # launcher values that win over manifest options (e.g. total_rounds)
    overrides: Dict[str, Any] = field(default_factory=dict)
