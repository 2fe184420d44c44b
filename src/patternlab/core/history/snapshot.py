"""
Snapshot definitions for the undo history.

A :class:`Snapshot` is the immutable record of an editor's items at one point
in time. Only the editor that produced it reads ``_items`` back; everything
else (the history, the CLI, the API) works with :class:`SnapshotInfo`, which
carries metadata only.

Design Notes
------------
- **Immutability**: both records are ``frozen=True``; items are stored as a
  tuple of deep copies taken at capture time.
- **Serialization**: timestamps are ISO-8601 strings frozen at capture time so
  the history writer and the API can emit them without conversion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def utc_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.ffffffZ``."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


@dataclass(frozen=True, slots=True)
class SnapshotInfo:
    """
    Display metadata for one history entry.

    Attributes
    ----------
    sequence : int
        Per-editor capture counter (1 for the first capture, never reused).
    label : str | None
        Optional human-readable label (e.g. 'before resize').
    timestamp : str
        UTC capture time.
    item_count : int
        Number of items held by the snapshot.
    """

    sequence: int
    label: str | None
    timestamp: str
    item_count: int


@dataclass(frozen=True, slots=True)
class Snapshot:
    """
    Immutable copy of an editor's items.

    ``owner`` identifies the editor that captured the snapshot; it is not part
    of equality so two captures of the same state compare by content.
    """

    sequence: int
    label: str | None
    timestamp: str
    _items: tuple[Any, ...] = field(default=(), repr=False)
    owner: str = field(default="", repr=False, compare=False)

    @property
    def item_count(self) -> int:
        return len(self._items)

    def info(self) -> SnapshotInfo:
        """Return the metadata view of this snapshot."""
        return SnapshotInfo(
            sequence=self.sequence,
            label=self.label,
            timestamp=self.timestamp,
            item_count=self.item_count,
        )


__all__ = ["Snapshot", "SnapshotInfo", "utc_timestamp"]
