"""Unit tests for the snapshot-based editor history and the history writer."""

from __future__ import annotations

import json
import threading
from dataclasses import FrozenInstanceError
from pathlib import Path
from typing import Any

import pytest

from patternlab.core.history import Editor, History, HistoryWriter, SnapshotInfo


def test_undo_walks_back_through_edits() -> None:
    """Capture before each edit; each undo reverts one edit and a third is a no-op."""
    editor = Editor()
    editor.capture()
    assert len(editor.list_history()) == 1
    editor.add("Circle")
    editor.capture()
    assert len(editor.list_history()) == 2
    editor.add("Rectangle")

    editor.restore()
    assert editor.items == ["Circle"]
    editor.restore()
    assert editor.items == []
    assert editor.restore() is None
    assert editor.items == []


def test_capture_after_every_edit_unwinds_in_order() -> None:
    """With a capture after each edit, undo replays the captured states newest first."""
    editor = Editor()
    editor.capture("empty")
    editor.add("Circle")
    editor.capture("circle")
    editor.add("Rectangle")
    editor.capture("rectangle")

    editor.restore()
    assert editor.items == ["Circle", "Rectangle"]
    editor.restore()
    assert editor.items == ["Circle"]
    editor.restore()
    assert editor.items == []
    editor.restore()
    assert editor.items == []


def test_n_captures_then_n_restores_returns_to_start() -> None:
    """N captures followed by N restores yields the state before the first capture."""
    editor = Editor(["Square"])
    for name in ("Circle", "Line", "Arc", "Star"):
        editor.capture()
        editor.add(name)
    for _ in range(4):
        editor.restore()
    assert editor.items == ["Square"]
    assert editor.list_history() == ()


def test_restore_on_empty_history_is_silent() -> None:
    """An undo with nothing captured leaves items untouched and raises nothing."""
    editor = Editor(["Circle"])
    assert editor.restore() is None
    assert editor.items == ["Circle"]


def test_history_length_tracks_captures_minus_restores() -> None:
    """Length equals captures minus successful restores, never below zero."""
    editor = Editor()
    editor.restore()
    assert len(editor.list_history()) == 0
    editor.capture()
    editor.capture()
    editor.restore()
    editor.capture()
    assert len(editor.list_history()) == 2
    for _ in range(5):
        editor.restore()
    assert len(editor.list_history()) == 0


def test_duplicate_captures_are_kept_separately() -> None:
    """Two captures without an edit give two distinct snapshots with equal content."""
    editor = Editor(["Circle"])
    first = editor.capture()
    second = editor.capture()
    assert first is not second
    assert first.item_count == second.item_count == 1
    assert [info.sequence for info in editor.list_history()] == [1, 2]

    editor.clear()
    editor.restore()
    assert editor.items == ["Circle"]
    editor.clear()
    editor.restore()
    assert editor.items == ["Circle"]


def test_snapshot_is_isolated_from_later_edits() -> None:
    """Mutating nested items after capture or after restore never reaches a snapshot."""
    editor = Editor([{"shape": "Circle", "radius": 1}])
    editor.capture()
    editor.capture()
    editor.items[0]["radius"] = 99
    editor.clear()

    editor.restore()
    assert editor.items == [{"shape": "Circle", "radius": 1}]
    editor.items[0]["radius"] = 5

    editor.restore()
    assert editor.items == [{"shape": "Circle", "radius": 1}]


def test_snapshot_is_frozen() -> None:
    """Snapshots reject attribute assignment and keep items out of their repr."""
    snap = Editor(["Circle"]).capture()
    with pytest.raises(FrozenInstanceError):
        snap.label = "changed"  # type: ignore[misc]
    assert "Circle" not in repr(snap)


def test_list_history_exposes_metadata_only() -> None:
    """History entries carry label, timestamp and count but no items."""
    editor = Editor(["Circle", "Line"])
    editor.capture("two shapes")
    (info,) = editor.list_history()
    assert isinstance(info, SnapshotInfo)
    assert info.label == "two shapes"
    assert info.item_count == 2
    assert info.timestamp.endswith("Z")
    assert not hasattr(info, "items")


def test_restore_given_tail_snapshot_pops_it() -> None:
    """Naming the most recent snapshot undoes it like a plain restore."""
    editor = Editor()
    editor.capture()
    editor.add("Circle")
    tail = editor.capture()
    editor.add("Rectangle")

    assert editor.restore(tail) is tail
    assert editor.items == ["Circle"]
    assert len(editor.list_history()) == 1


def test_restore_rejects_non_tail_snapshot() -> None:
    """An older snapshot cannot jump the queue; history and items stay as they were."""
    editor = Editor()
    first = editor.capture()
    editor.add("Circle")
    editor.capture()

    with pytest.raises(ValueError, match="most recent"):
        editor.restore(first)
    assert editor.items == ["Circle"]
    assert len(editor.list_history()) == 2

    editor.restore()
    assert editor.restore(first) is first
    assert editor.items == []
    assert editor.list_history() == ()


def test_restore_rejects_foreign_snapshot() -> None:
    """A snapshot from another editor cannot be restored."""
    other = Editor(["Triangle"]).capture()
    editor = Editor(["Circle"])
    with pytest.raises(ValueError, match="different editor"):
        editor.restore(other)
    assert editor.items == ["Circle"]


def test_edits_wait_for_the_editor_lock() -> None:
    """Edits block while capture or restore holds the editor lock."""
    editor = Editor(["Circle"])
    editor._lock.acquire()
    try:
        workers = [
            threading.Thread(target=editor.add, args=("Line",)),
            threading.Thread(target=editor.remove, args=("Circle",)),
        ]
        for t in workers:
            t.start()
        for t in workers:
            t.join(timeout=0.2)
            assert t.is_alive()
        assert editor._items == ["Circle"]
    finally:
        editor._lock.release()
    for t in workers:
        t.join(timeout=5)
    assert not any(t.is_alive() for t in workers)
    assert sorted(editor.items) == ["Line"]


def test_remove_missing_item_raises() -> None:
    editor = Editor(["Circle"])
    with pytest.raises(ValueError, match="Rectangle"):
        editor.remove("Rectangle")


def test_history_pop_targets_tail() -> None:
    """The caretaker pops in reverse insertion order."""
    editor = Editor()
    snaps = [editor.capture(str(i)) for i in range(3)]
    history = History()
    for snap in snaps:
        history.push(snap)
    assert history.pop() is snaps[2]
    assert history.pop() is snaps[1]
    assert len(history) == 1
    assert [info.label for info in history.infos()] == ["0"]


def test_history_writer_writes_metadata(tmp_path: Path, monkeypatch: Any) -> None:
    """The writer persists history metadata under the configured directory."""
    outdir = tmp_path / "history"
    monkeypatch.setenv("PATTERNLAB_HISTORY_DIR", str(outdir))

    editor = Editor()
    editor.add("Circle")
    editor.capture("one")
    editor.add("Rectangle")
    editor.capture("two")

    path = HistoryWriter().write(editor.list_history(), name="shapes demo")
    assert path.parent == outdir
    assert path.name.endswith("_shapes_demo.json")

    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)

    assert payload["name"] == "shapes demo"
    assert payload["exported_at"].endswith("Z")
    assert [s["label"] for s in payload["snapshots"]] == ["one", "two"]
    assert [s["item_count"] for s in payload["snapshots"]] == [1, 2]
    assert all("items" not in s for s in payload["snapshots"])
