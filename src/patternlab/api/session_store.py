"""
In-memory store of editing sessions.

Each session is one :class:`Editor` keyed by a UUID. The store is owned by the
application instance (``app.state.sessions``) rather than a module-level
singleton, so every app built by :func:`create_app` starts empty.

Note on Persistence
-------------------
This is a volatile memory store. If the server restarts, all sessions and
their histories are lost.
"""

from __future__ import annotations

import threading
import uuid

from fastapi import Request

from patternlab.core.history import Editor


class SessionStore:
    """A dictionary-backed store of Editor sessions."""

    def __init__(self) -> None:
        self._sessions: dict[str, Editor] = {}
        self._lock = threading.Lock()

    def create(self) -> tuple[str, Editor]:
        """Register a fresh editor and return its id together with the editor."""
        session_id = str(uuid.uuid4())
        editor = Editor()
        with self._lock:
            self._sessions[session_id] = editor
        return session_id, editor

    def get(self, session_id: str) -> Editor | None:
        """Return the editor for ``session_id``, or None if unknown."""
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        """Drop a session; return True if it existed."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

def get_session_store(request: Request) -> SessionStore:
    """FastAPI dependency returning the app-owned store."""
    store: SessionStore = request.app.state.sessions
    return store


__all__ = ["SessionStore", "get_session_store"]
