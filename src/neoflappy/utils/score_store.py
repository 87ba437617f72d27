"""
Best-score persistence.

A tiny key/integer store. The JSON-file implementation never raises into
gameplay: unreadable or unwritable files are logged and ignored.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Protocol

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "bestScore"


class ScoreStore(Protocol):
    """Persistence collaborator used for the best score."""

    def get(self, key: str, default: int = 0) -> int: ...

    def set(self, key: str, value: int) -> None: ...


class MemoryScoreStore:
    """In-process store. Nothing survives a restart."""

    def __init__(self, initial: Dict[str, int] | None = None) -> None:
        self._values: Dict[str, int] = dict(initial or {})

    def get(self, key: str, default: int = 0) -> int:
        return self._values.get(key, default)

    def set(self, key: str, value: int) -> None:
        self._values[key] = int(value)


class JsonScoreStore:
    """Store backed by a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._values: Dict[str, int] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                for key, value in data.items():
                    try:
                        self._values[key] = int(value)
                    except (TypeError, ValueError):
                        logger.warning(f"Ignoring non-integer score entry: {key}")
            logger.info(f"Loaded scores from {self.path}")
        except Exception as e:
            logger.error(f"Failed to load scores: {e}")

    def get(self, key: str, default: int = 0) -> int:
        return self._values.get(key, default)

    def set(self, key: str, value: int) -> None:
        self._values[key] = int(value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2)
        except Exception as e:
            logger.error(f"Failed to save scores: {e}")
