"""Append-only snapshot history with tail-only undo.

The history stores :class:`Snapshot` objects without ever reading their items.
Callers that need to display it get :class:`SnapshotInfo` records instead.
"""

from __future__ import annotations

from .snapshot import Snapshot, SnapshotInfo


class History:
    """Ordered snapshot stack; only the most recent entry can be popped."""

    __slots__ = ("_snapshots",)

    def __init__(self) -> None:
        self._snapshots: list[Snapshot] = []

    def push(self, snapshot: Snapshot) -> None:
        """Append ``snapshot`` to the tail."""
        self._snapshots.append(snapshot)

    def peek(self) -> Snapshot | None:
        """Return the tail without removing it."""
        return self._snapshots[-1] if self._snapshots else None

    def pop(self) -> Snapshot | None:
        """Remove and return the tail, or ``None`` when the history is empty."""
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def infos(self) -> tuple[SnapshotInfo, ...]:
        """Return metadata for every entry, oldest first."""
        return tuple(snap.info() for snap in self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)


__all__ = ["History"]
