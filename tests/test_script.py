"""Unit tests for the edit-script parser and runner."""

from __future__ import annotations

from patternlab.core.history import Editor
from patternlab.core.history.script import Command, apply_command, parse_command, run_script


def test_parse_skips_blank_and_comment_lines() -> None:
    assert parse_command("   ").unwrap() is None
    assert parse_command("# a comment").unwrap() is None


def test_parse_keeps_spaces_in_item_names() -> None:
    cmd = parse_command("add  Rounded Rectangle ").unwrap()
    assert cmd == Command("add", "Rounded Rectangle")


def test_parse_rejects_bad_lines() -> None:
    """Unknown verbs and wrong arity are reported as Err values."""
    assert parse_command("resize Circle").unwrap_err() == "unknown command 'resize'"
    assert parse_command("add").unwrap_err() == "'add' needs an item"
    assert parse_command("undo now").unwrap_err() == "'undo' takes no argument"


def test_capture_label_is_optional() -> None:
    assert parse_command("capture").unwrap() == Command("capture")
    assert parse_command("CAPTURE first").unwrap() == Command("capture", "first")


def test_apply_remove_missing_item_is_err() -> None:
    editor = Editor()
    result = apply_command(editor, Command("remove", "Circle"))
    assert result.is_err()
    assert "Circle" in result.unwrap_err()


def test_run_script_continues_after_errors() -> None:
    """A failing line is reported and later lines still run."""
    editor = Editor()
    script = [
        "# shapes",
        "capture start",
        "add Circle",
        "explode",
        "capture",
        "add Rectangle",
        "undo",
        "history",
    ]
    results = run_script(editor, script)

    assert [r.is_ok() for r in results] == [True, True, False, True, True, True, True]
    assert results[2].unwrap_err() == "line 4: unknown command 'explode'"
    assert results[5].unwrap() == "restored #2 (1 items)"
    assert results[6].unwrap() == "1 snapshots"
    assert editor.items == ["Circle"]


def test_undo_with_empty_history_reports_no_op() -> None:
    editor = Editor(["Circle"])
    (result,) = run_script(editor, ["undo"])
    assert result.unwrap() == "nothing to undo"
    assert editor.items == ["Circle"]
