"""
Line-oriented edit scripts for driving an :class:`Editor`.

Grammar
-------
One command per line; blank lines and ``#`` comments are ignored::

    add <item>          append an item (the rest of the line, spaces allowed)
    remove <item>       remove the first matching item
    clear               drop every item
    capture [label]     push a snapshot, optionally labelled
    undo                pop and restore the most recent snapshot
    history             report the current history length

Every command yields a :class:`Result` so one bad line does not stop the
script; the CLI renders ``Err`` values and keeps going.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from patternlab.core.result import Result, err, ok

from .editor import Editor

_NEEDS_ARG: Final[frozenset[str]] = frozenset({"add", "remove"})
_NO_ARG: Final[frozenset[str]] = frozenset({"clear", "undo", "history"})
_OPTIONAL_ARG: Final[frozenset[str]] = frozenset({"capture"})


@dataclass(frozen=True, slots=True)
class Command:
    """A parsed script line."""

    verb: str
    arg: str | None = None


def parse_command(line: str) -> Result[Command | None, str]:
    """Parse one line; blank lines and comments parse to ``Ok(None)``."""
    text = line.strip()
    if not text or text.startswith("#"):
        return ok(None)

    verb, _, rest = text.partition(" ")
    verb = verb.lower()
    arg = rest.strip() or None

    if verb in _NEEDS_ARG:
        if arg is None:
            return err(f"'{verb}' needs an item")
        return ok(Command(verb, arg))
    if verb in _NO_ARG:
        if arg is not None:
            return err(f"'{verb}' takes no argument")
        return ok(Command(verb))
    if verb in _OPTIONAL_ARG:
        return ok(Command(verb, arg))
    return err(f"unknown command '{verb}'")


def apply_command(editor: Editor, command: Command) -> Result[str, str]:
    """Run ``command`` against ``editor`` and describe the outcome."""
    if command.verb == "add":
        editor.add(command.arg)
        return ok(f"added {command.arg}")
    if command.verb == "remove":
        try:
            editor.remove(command.arg)
        except ValueError as exc:
            return err(str(exc))
        return ok(f"removed {command.arg}")
    if command.verb == "clear":
        editor.clear()
        return ok("cleared")
    if command.verb == "capture":
        snap = editor.capture(command.arg)
        return ok(f"captured #{snap.sequence} ({snap.item_count} items)")
    if command.verb == "undo":
        restored = editor.restore()
        if restored is None:
            return ok("nothing to undo")
        return ok(f"restored #{restored.sequence} ({restored.item_count} items)")
    if command.verb == "history":
        return ok(f"{len(editor.list_history())} snapshots")
    return err(f"unknown command '{command.verb}'")


def run_script(editor: Editor, lines: Iterable[str]) -> list[Result[str, str]]:
    """Apply every line of a script, collecting one result per command."""
    results: list[Result[str, str]] = []
    for lineno, line in enumerate(lines, start=1):
        parsed = parse_command(line)
        if parsed.is_err():
            results.append(err(f"line {lineno}: {parsed.unwrap_err()}"))
            continue
        command = parsed.unwrap()
        if command is None:
            continue
        results.append(apply_command(editor, command))
    return results


__all__ = ["Command", "parse_command", "apply_command", "run_script"]
