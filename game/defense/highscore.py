"""
Best-effort high score persistence

Gameplay never fails because of storage: unreadable values load as 0 and
failed writes are logged and dropped.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

from . import config

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal string key/value interface"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """Key/value pairs kept in one JSON object on disk"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except ValueError:
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)


class HighScoreBook:
    """High score kept under a fixed key in a `KeyValueStore`"""

    def __init__(self, store: Optional[KeyValueStore] = None, key: str = config.HIGH_SCORE_KEY):
        self.store = store if store is not None else MemoryStore()
        self.key = key

    def load(self) -> int:
        try:
            raw = self.store.get(self.key)
            return int(raw) if raw else 0
        except (OSError, ValueError) as e:
            logger.warning("Could not read high score: %s", e)
            return 0

    def record(self, score: int, previous: int) -> int:
        """Persist `score` if it beats `previous`; returns the resulting high score"""
        if score <= previous:
            return previous
        try:
            self.store.set(self.key, str(score))
        except OSError as e:
            logger.warning("Could not save high score %d: %s", score, e)
        return score
