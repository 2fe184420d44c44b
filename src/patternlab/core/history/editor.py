"""
In-memory editor with snapshot-based undo.

The editor owns a mutable list of items (shape names in the demos, but any
deep-copyable value works). It provides:

- ``add(item)`` / ``remove(item)`` / ``clear()``: mutate the items.
- ``capture(label=None)``: copy the current items into a new snapshot and push
  it onto the history.
- ``restore(snapshot=None)``: pop the most recent snapshot and roll the items
  back to it. A given ``snapshot`` must be that most recent entry.
- ``list_history()``: metadata for every snapshot still on the history.

Design Goals
------------
- **Encapsulation**: the history never reads snapshot items; only the editor
  that produced a snapshot can restore from it.
- **Isolation**: items are deep-copied on capture and on restore, so later
  edits never leak into a stored snapshot.
- **Forgiving undo**: restoring with an empty history is a silent no-op.
"""

from __future__ import annotations

import copy
import threading
import uuid
from collections.abc import Iterable
from typing import Any

from patternlab.core.settings import get_logger

from .caretaker import History
from .snapshot import Snapshot, SnapshotInfo, utc_timestamp

logger = get_logger(__name__)


class Editor:
    """
    Mutable item collection that can save and restore its own state.

    Attributes
    ----------
    _items : list[Any]
        Current items, in insertion order.
    _history : History
        Snapshots captured by this editor.
    _sequence : int
        Monotonic capture counter used to number snapshots.
    _token : str
        Identity stamped on every snapshot this editor produces.
    _lock : threading.Lock
        Serializes capture/restore so each looks atomic to a session.
    """

    __slots__ = ("_items", "_history", "_sequence", "_token", "_lock")

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: list[Any] = list(items)
        self._history = History()
        self._sequence = 0
        self._token = uuid.uuid4().hex
        self._lock = threading.Lock()

    # ------------------------------ Items API -------------------------------

    @property
    def items(self) -> list[Any]:
        """Return a copy of the current items."""
        with self._lock:
            return list(self._items)

    def add(self, item: Any) -> None:
        """Append ``item`` to the collection."""
        with self._lock:
            self._items.append(item)

    def remove(self, item: Any) -> None:
        """
        Remove the first occurrence of ``item``.

        Raises
        ------
        ValueError
            If ``item`` is not present.
        """
        with self._lock:
            try:
                self._items.remove(item)
            except ValueError:
                raise ValueError(f"Item {item!r} is not in the editor") from None

    def clear(self) -> None:
        """Drop every item."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # ----------------------------- History API ------------------------------

    def capture(self, label: str | None = None) -> Snapshot:
        """
        Push a snapshot of the current items onto the history.

        Two captures with no edit in between produce two separate snapshots
        with equal items.

        Parameters
        ----------
        label : str | None
            Optional note shown by :meth:`list_history`.

        Returns
        -------
        Snapshot
            The snapshot just pushed.
        """
        with self._lock:
            self._sequence += 1
            snap = Snapshot(
                sequence=self._sequence,
                label=label,
                timestamp=utc_timestamp(),
                _items=tuple(copy.deepcopy(self._items)),
                owner=self._token,
            )
            self._history.push(snap)
        logger.debug("capture #%d (%d items)", snap.sequence, snap.item_count)
        return snap

    def restore(self, snapshot: Snapshot | None = None) -> Snapshot | None:
        """
        Roll the items back to a snapshot.

        Pop the most recent snapshot from the history and restore it; an empty
        history leaves the editor untouched. Passing ``snapshot`` asserts which
        entry the caller expects to undo: it must be the current tail.

        Returns
        -------
        Snapshot | None
            The snapshot that was applied, or ``None`` for an empty history.

        Raises
        ------
        ValueError
            If ``snapshot`` was captured by a different editor or is not the
            most recent entry of the history.
        """
        with self._lock:
            if snapshot is not None:
                if snapshot.owner != self._token:
                    raise ValueError("Snapshot was captured by a different editor")
                if self._history.peek() is not snapshot:
                    raise ValueError("Only the most recent snapshot can be restored")
            popped = self._history.pop()
            if popped is None:
                logger.debug("restore on empty history ignored")
                return None
            self._items = list(copy.deepcopy(popped._items))
            snapshot = popped
        logger.debug("restore #%d (%d items)", snapshot.sequence, snapshot.item_count)
        return snapshot

    def list_history(self) -> tuple[SnapshotInfo, ...]:
        """Return snapshot metadata, oldest first."""
        with self._lock:
            return self._history.infos()


__all__ = ["Editor"]
