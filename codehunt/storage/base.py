from abc import ABC, abstractmethod
from typing import Dict, Optional

from loguru import logger

# Persisted state slices
TEAMS_KEY = "teams"
SELECTED_TEAM_KEY = "selectedTeam"
GAMES_KEY = "games"
COMPLETED_GAMES_KEY = "completedGames"

STATE_KEYS = (TEAMS_KEY, SELECTED_TEAM_KEY, GAMES_KEY, COMPLETED_GAMES_KEY)


class StorageError(Exception):
    """Raised when a state slice could not be written to the backend."""

    pass


class StateStore(ABC):
    """Durable key-value store for serialized state slices.

    Keys are scoped to a namespace so several sessions can share one backend.
    """

    def __init__(self, namespace: str = "default"):
        self.namespace = namespace

    def scoped(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the stored blob for ``key``, or None when absent or unreadable."""
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """Persist ``blob`` under ``key``."""
        pass

    def clear(self) -> None:
        """Remove every slice of this namespace."""
        for key in STATE_KEYS:
            self.delete(key)

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class MemoryStore(StateStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, namespace: str = "default", data: Optional[Dict[str, str]] = None):
        super().__init__(namespace)
        self.data: Dict[str, str] = dict(data or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(self.scoped(key))

    def save(self, key: str, blob: str) -> None:
        self.data[self.scoped(key)] = blob
        logger.trace(f"Saved slice {key!r} to memory ({len(blob)} chars)")

    def delete(self, key: str) -> None:
        self.data.pop(self.scoped(key), None)
