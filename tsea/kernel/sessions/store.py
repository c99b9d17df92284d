"""
Session store - key-value state scoped to a user's session.

Route handlers receive the store through a FastAPI dependency; the core
curriculum and assistant layers never touch it.
"""

import copy
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from tsea.config import get_settings


class SessionStore(ABC):
    """Key-value store interface for per-session state."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return a copy of the stored value, or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a key; True if it existed."""


class InMemorySessionStore(SessionStore):
    """
    Process-local store; with ttl_seconds set, entries expire that long
    after their last write.

    Values are deep-copied in and out so callers cannot mutate shared state
    without an explicit set().
    """

    def __init__(self, ttl_seconds: Optional[float] = None):
        self._data: Dict[str, Tuple[Any, float]] = {}
        self._ttl = ttl_seconds

    @property
    def ttl_seconds(self) -> Optional[float]:
        return self._ttl

    def _expired(self, touched: float) -> bool:
        return self._ttl is not None and time.monotonic() - touched > self._ttl

    def get(self, key: str) -> Optional[Any]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, touched = entry
        if self._expired(touched):
            self._data.pop(key, None)
            return None
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = (copy.deepcopy(value), time.monotonic())

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._data)


def progress_session_key(user_id: Any) -> str:
    return f"progress:{user_id}"


# Module-level store (single process); entries live as long as an access token
_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    global _store
    if _store is None:
        settings = get_settings()
        _store = InMemorySessionStore(ttl_seconds=settings.access_token_expire_minutes * 60)
    return _store
