"""Snapshot-based undo history: editor, snapshots, caretaker and exports."""

from __future__ import annotations

from .caretaker import History
from .editor import Editor
from .snapshot import Snapshot, SnapshotInfo
from .storage import HistoryWriter

__all__ = ["Editor", "History", "HistoryWriter", "Snapshot", "SnapshotInfo"]
