# src/patternlab/cli.py
"""
PatternLab Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`.

Features
--------
- **Edit Scripts**: Drive an editor from a text file and watch the undo history.
- **History Export**: Optionally save the history metadata as JSON.
- **Cache Demo**: Fetch videos through the caching proxy and report hits/misses.

Usage
-----
    # Replay an edit script
    $ patternlab edit samples/shapes.txt --export artifacts/history

    # Fetch videos 42 and 7 three times each through the cache
    $ patternlab videos 42 7 --repeat 3 --latency 0.5
"""

from __future__ import annotations

import time
import traceback
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from patternlab.core.history import Editor, HistoryWriter
from patternlab.core.history.script import run_script
from patternlab.core.settings import load_settings
from patternlab.video import (
    CachingVideoSource,
    HttpVideoSource,
    Video,
    VideoLibrary,
    VideoSource,
    VideoSourceError,
)

load_dotenv()

app = typer.Typer(
    help="PatternLab: snapshot undo history and a caching video proxy.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _render_history(editor: Editor) -> None:
    """Print the current items and the snapshot metadata table."""
    items = ", ".join(str(item) for item in editor.items) or "[dim](empty)[/dim]"
    console.print(f"[bold]Items:[/bold] {items}")

    history = editor.list_history()
    if not history:
        console.print("[dim]History is empty.[/dim]")
        return

    table = Table(title="History", show_lines=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Label")
    table.add_column("Items", justify="right")
    table.add_column("Captured (UTC)", style="dim")
    for info in history:
        table.add_row(str(info.sequence), info.label or "-", str(info.item_count), info.timestamp)
    console.print(table)


def _render_videos(videos: list[Video]) -> None:
    table = Table(title="Videos")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Channel")
    table.add_column("Views", justify="right")
    for video in videos:
        table.add_row(video.id, video.title, video.channel, f"{video.views:,}")
    console.print(table)


def _build_source(url: str | None, latency: float) -> VideoSource:
    """Pick the HTTP source when a URL is known, else the in-memory library."""
    base = url or load_settings().video_api_url
    if base:
        return HttpVideoSource(base_url=base.rstrip("/"), api_key=load_settings().video_api_key)
    return VideoLibrary(latency_seconds=latency)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def edit(
    script: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Edit script: one command per line (add/remove/clear/capture/undo/history).",
        ),
    ],
    export: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Directory to write the final history metadata to (JSON).",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print errors and the final state."),
    ] = False,
) -> None:
    """
    Run an edit script against a fresh editor.

    Each line is applied in order; a bad line is reported and skipped.
    Exits with code 1 if any line failed.
    """
    console.print(
        Panel.fit(
            f"[bold cyan]PatternLab Editor[/bold cyan]\nScript: [u]{script.name}[/u]",
            border_style="cyan",
        )
    )

    editor = Editor()
    lines = script.read_text(encoding="utf-8").splitlines()
    results = run_script(editor, lines)

    failures = 0
    for result in results:
        if result.is_err():
            failures += 1
            console.print(f"[bold red]✗[/bold red] {result.unwrap_err()}")
        elif not quiet:
            console.print(f"[green]✓[/green] {result.unwrap()}")

    console.print("")
    _render_history(editor)

    if export is not None:
        path = HistoryWriter(export).write(editor.list_history(), name=script.stem)
        console.print(f"[dim]History saved to: {path}[/dim]")

    if failures:
        console.print(f"\n[bold red]{failures} command(s) failed.[/bold red]")
        raise typer.Exit(code=1)


@app.command()  # type: ignore[misc]
def videos(
    ids: Annotated[
        list[str] | None,
        typer.Argument(help="Video ids to look up. Without ids, the full list is fetched."),
    ] = None,
    repeat: Annotated[
        int,
        typer.Option("--repeat", "-r", min=1, help="How many times to issue each request."),
    ] = 2,
    latency: Annotated[
        float,
        typer.Option("--latency", "-l", min=0.0, help="Simulated source delay in seconds."),
    ] = 0.0,
    url: Annotated[
        str | None,
        typer.Option("--url", help="Remote catalogue base URL (overrides settings)."),
    ] = None,
    max_entries: Annotated[
        int | None,
        typer.Option("--max-entries", min=1, help="Bound the cache (LRU)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Fetch videos through the caching proxy and report cache statistics.

    The first request for each key goes to the source; repeats are served
    from the cache.
    """
    source = _build_source(url, latency)
    cache = CachingVideoSource(
        source, max_entries=max_entries or load_settings().cache_max_entries
    )

    start_time = time.time()
    found: list[Video] = []
    missing: list[str] = []
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("[cyan]Fetching...", total=None)
            for round_no in range(1, repeat + 1):
                progress.update(task, description=f"[yellow]Round {round_no}/{repeat}...")
                if not ids:
                    found = cache.fetch_list()
                    continue
                found, missing = [], []
                for video_id in ids:
                    video = cache.fetch_by_id(video_id)
                    if video is None:
                        missing.append(video_id)
                    else:
                        found.append(video)
    except VideoSourceError as e:
        console.print(f"\n[bold red]❌ Source Error:[/bold red] {e}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    duration = time.time() - start_time
    _render_videos(found)
    for video_id in missing:
        console.print(f"[yellow]Not found:[/yellow] {video_id}")

    stats = cache.stats()
    console.print(
        Panel(
            f"[green]hits: {stats.hits}[/green]  [red]misses: {stats.misses}[/red]  "
            f"entries: {stats.entries}  ({duration:.2f}s)",
            title="Cache",
            border_style="green",
        )
    )


if __name__ == "__main__":
    app()
