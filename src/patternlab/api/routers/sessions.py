"""
API routes for editing sessions with undo history.

Endpoints
---------
- `POST /sessions`: Start a new session (empty editor).
- `GET /sessions/{id}`: Current items and history depth.
- `DELETE /sessions/{id}`: Discard a session.
- `POST /sessions/{id}/items`: Append an item.
- `DELETE /sessions/{id}/items/{item}`: Remove the first matching item.
- `POST /sessions/{id}/snapshots`: Capture a snapshot.
- `GET /sessions/{id}/snapshots`: List snapshot metadata.
- `POST /sessions/{id}/undo`: Restore the most recent snapshot.

Handlers are plain ``def`` functions; FastAPI runs them in its thread pool and
the editor serializes its own history mutations.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from patternlab.api.schemas import (
    CaptureRequest,
    ItemRequest,
    SessionState,
    SnapshotModel,
    UndoResult,
)
from patternlab.api.session_store import SessionStore, get_session_store
from patternlab.core.history import Editor

router = APIRouter(prefix="/sessions", tags=["Sessions"])

Store = Annotated[SessionStore, Depends(get_session_store)]


def _require(store: SessionStore, session_id: str) -> Editor:
    editor = store.get(session_id)
    if editor is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return editor


@router.post("", response_model=SessionState, status_code=status.HTTP_201_CREATED)
def create_session(store: Store) -> SessionState:
    """Start a new editing session."""
    session_id, editor = store.create()
    return SessionState.from_editor(session_id, editor)


@router.get("/{session_id}", response_model=SessionState)
def get_session(session_id: str, store: Store) -> SessionState:
    return SessionState.from_editor(session_id, _require(store, session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, store: Store) -> None:
    if not store.delete(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )


@router.post("/{session_id}/items", response_model=SessionState)
def add_item(session_id: str, body: ItemRequest, store: Store) -> SessionState:
    editor = _require(store, session_id)
    editor.add(body.item)
    return SessionState.from_editor(session_id, editor)


@router.delete("/{session_id}/items/{item}", response_model=SessionState)
def remove_item(session_id: str, item: str, store: Store) -> SessionState:
    """Remove ``item``; a missing item surfaces as 400 via the ValueError handler."""
    editor = _require(store, session_id)
    editor.remove(item)
    return SessionState.from_editor(session_id, editor)


@router.post(
    "/{session_id}/snapshots",
    response_model=SnapshotModel,
    status_code=status.HTTP_201_CREATED,
)
def capture_snapshot(
    session_id: str, store: Store, body: CaptureRequest | None = None
) -> SnapshotModel:
    editor = _require(store, session_id)
    snap = editor.capture(body.label if body else None)
    return SnapshotModel.from_info(snap.info())


@router.get("/{session_id}/snapshots", response_model=list[SnapshotModel])
def list_snapshots(session_id: str, store: Store) -> list[SnapshotModel]:
    editor = _require(store, session_id)
    return [SnapshotModel.from_info(info) for info in editor.list_history()]


@router.post("/{session_id}/undo", response_model=UndoResult)
def undo(session_id: str, store: Store) -> UndoResult:
    """Pop the latest snapshot; an empty history returns ``restored: null``."""
    editor = _require(store, session_id)
    restored = editor.restore()
    return UndoResult(
        restored=SnapshotModel.from_info(restored.info()) if restored else None,
        state=SessionState.from_editor(session_id, editor),
    )


__all__ = ["router"]
