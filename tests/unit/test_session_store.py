"""Unit tests for the session store."""

from unittest.mock import patch

import pytest

from tsea.config import get_settings
from tsea.kernel.sessions import store as store_module
from tsea.kernel.sessions.store import (
    InMemorySessionStore,
    SessionStore,
    get_session_store,
    progress_session_key,
)


class TestInMemorySessionStore:
    def test_set_get_delete(self):
        store = InMemorySessionStore()
        store.set("k", {"a:b": True})
        assert store.get("k") == {"a:b": True}
        assert len(store) == 1
        assert store.delete("k") is True
        assert store.get("k") is None
        assert store.delete("k") is False

    def test_values_are_copied(self):
        store = InMemorySessionStore()
        value = {"m:l1": True}
        store.set("k", value)
        value["m:l2"] = True

        loaded = store.get("k")
        loaded["m:quiz"] = True
        assert store.get("k") == {"m:l1": True}

    def test_entries_expire(self):
        store = InMemorySessionStore(ttl_seconds=10)
        with patch("tsea.kernel.sessions.store.time.monotonic", return_value=100.0):
            store.set("k", 1)
        with patch("tsea.kernel.sessions.store.time.monotonic", return_value=105.0):
            assert store.get("k") == 1
        with patch("tsea.kernel.sessions.store.time.monotonic", return_value=111.0):
            assert store.get("k") is None
        assert len(store) == 0

    def test_is_a_session_store(self):
        assert isinstance(InMemorySessionStore(), SessionStore)
        with pytest.raises(TypeError):
            SessionStore()

    def test_progress_key(self):
        assert progress_session_key("abc") == "progress:abc"


class TestGetSessionStore:
    def test_entries_live_as_long_as_an_access_token(self, monkeypatch):
        monkeypatch.setattr(store_module, "_store", None)
        store = get_session_store()
        assert isinstance(store, InMemorySessionStore)
        assert store.ttl_seconds == get_settings().access_token_expire_minutes * 60
        assert get_session_store() is store
