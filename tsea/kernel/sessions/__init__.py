"""
Session state - key-value store abstraction and its in-memory implementation.
"""

from tsea.kernel.sessions.store import (
    InMemorySessionStore,
    SessionStore,
    get_session_store,
    progress_session_key,
)

__all__ = [
    "InMemorySessionStore",
    "SessionStore",
    "get_session_store",
    "progress_session_key",
]
