from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from stroop.core.const import HISTORY_LIMIT

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DIR = Path.home() / ".stroop-trainer" / "history"


class HistoryStore:
    """
    Durable round log for one profile, kept as YAML in <root>/<profile>.yaml.
    The root defaults to ~/.stroop-trainer/history so an installed copy
    never writes next to its own sources. Only the snapshot produced by
    GameStore.to_snapshot() goes in here: recent rounds plus best streak.
    """

    def __init__(self, profile: str = "default", root: Optional[Path] = None, limit: int = HISTORY_LIMIT):
        if root is None:
            root = DEFAULT_HISTORY_DIR
        self.root = Path(root)
        self.path = self.root / f"{profile}.yaml"
        self.limit = limit

    def load(self) -> Optional[Dict[str, Any]]:
        """Returns the stored snapshot, or None if nothing was saved yet."""
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ValueError(f"Malformed history file {self.path}: expected a mapping")
        data["rounds"] = list(data.get("rounds") or [])[-self.limit:]
        data["best_streak"] = int(data.get("best_streak") or 0)
        logger.debug("Loaded %d rounds from %s", len(data["rounds"]), self.path)
        return data

    def save(self, snapshot: Dict[str, Any]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        data = {
            "rounds": list(snapshot.get("rounds") or [])[-self.limit:],
            "best_streak": int(snapshot.get("best_streak") or 0),
        }
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        logger.info("Saved %d rounds to %s", len(data["rounds"]), self.path)
