"""Disk-backed writer for editor history metadata.

This module persists the output of :meth:`Editor.list_history` as a JSON file.
Only metadata is written; snapshot items stay inside the editor.

- Default directory: `PATTERNLAB_HISTORY_DIR` setting or `artifacts/history/`
- Filename pattern:  `YYYYmmddTHHMMSSffffffZ_{name}.json`
- Content:           `{"name": ..., "exported_at": ..., "snapshots": [...]}`

Usage
-----
>>> writer = HistoryWriter()  # uses default dir
>>> path = writer.write(editor.list_history(), name="shapes")
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path

from patternlab.core.settings import load_settings

from .snapshot import SnapshotInfo, utc_timestamp


def _default_dir() -> Path:
    """Return the default base directory for history exports."""
    root = load_settings().history_dir
    return Path(root) if root else Path("artifacts") / "history"


class HistoryWriter:
    """Persist history metadata to disk as JSON files."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir: Path = base_dir if base_dir is not None else _default_dir()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def write(self, history: Sequence[SnapshotInfo], name: str = "history") -> Path:
        """Write ``history`` to disk and return the created file path."""
        exported_at = utc_timestamp()
        safe_ts = exported_at.replace("-", "").replace(":", "").replace(".", "")
        safe_name = re.sub(r"[^A-Za-z0-9_-]+", "_", name) or "history"
        path = self.base_dir / f"{safe_ts}_{safe_name}.json"

        payload = {
            "name": name,
            "exported_at": exported_at,
            "snapshots": [asdict(info) for info in history],
        }
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
        return path


__all__ = ["HistoryWriter"]
