"""Request/response models for the PatternLab HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from patternlab.core.history import Editor, SnapshotInfo


class ItemRequest(BaseModel):
    """Body for adding an item to a session."""

    item: str = Field(min_length=1, description="Item to append, e.g. 'Circle'")


class CaptureRequest(BaseModel):
    """Body for capturing a snapshot."""

    label: str | None = Field(default=None, description="Optional history label")


class SnapshotModel(BaseModel):
    """Metadata of one snapshot; item data is never exposed."""

    sequence: int
    label: str | None
    timestamp: str
    item_count: int

    @classmethod
    def from_info(cls, info: SnapshotInfo) -> SnapshotModel:
        return cls(
            sequence=info.sequence,
            label=info.label,
            timestamp=info.timestamp,
            item_count=info.item_count,
        )


class SessionState(BaseModel):
    """Current items and history depth of an editing session."""

    session_id: str
    items: list[str] = Field(default_factory=list)
    history_length: int = 0

    @classmethod
    def from_editor(cls, session_id: str, editor: Editor) -> SessionState:
        return cls(
            session_id=session_id,
            items=[str(item) for item in editor.items],
            history_length=len(editor.list_history()),
        )


class UndoResult(BaseModel):
    """Outcome of an undo; ``restored`` is null when the history was empty."""

    restored: SnapshotModel | None = None
    state: SessionState


__all__ = ["ItemRequest", "CaptureRequest", "SnapshotModel", "SessionState", "UndoResult"]
