# src/prophistory/cli.py
"""
prophistory Command Line Interface (CLI).

This module implements the terminal front-end using `typer` and `rich`.

Features
--------
- **show**: the git history of one property of one object in a YAML asset,
  one row per change (newest first).
- **objects**: the anchored objects of a file (working tree or any revision),
  to find the anchor id to pass to `show`.
- **JSON output**: `show --json` prints the timeline for scripting.

Usage
-----
    # History of a Transform's local position
    $ prophistory show Assets/Player.prefab --anchor 400000 --path m_LocalPosition

    # One element of a serialized list
    $ prophistory show Assets/Level.unity -a 114000011 -p waypoints.Array.data[2]

    # Which objects does the prefab contain?
    $ prophistory objects Assets/Player.prefab
"""

from __future__ import annotations

import json
import time
import traceback
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from prophistory.core.contracts.timeline import TimelineEntry, ValueStatus
from prophistory.history.git import GitHistory, GitHistoryError
from prophistory.pipelines.property_history import (
    PropertyHistoryResult,
    list_objects,
    run_property_history,
)

# Ensure PROPHISTORY_* overrides in .env are visible before any command runs
load_dotenv()

app = typer.Typer(
    help="prophistory: the git history of a single property in a YAML asset.",
    rich_markup_mode="markdown",
)
console = Console()

_STATUS_STYLE = {
    ValueStatus.PRESENT: "",
    ValueStatus.ABSENT: "dim",
    ValueStatus.ERROR: "bold red",
}


# --------------------------------------------------------------------------- #
# Helpers: Rendering & I/O
# --------------------------------------------------------------------------- #


def _resolve_asset(asset: Path) -> Path:
    """Prefer a path relative to the CWD when it exists; else keep it repo-relative."""
    if not asset.is_absolute() and asset.exists():
        return asset.resolve()
    return asset


def _render_timeline(result: PropertyHistoryResult) -> None:
    """Render the timeline as a table, one row per kept revision."""
    query = result["query"]
    entries = result["entries"]

    console.print(
        Panel.fit(
            f"[bold cyan]{escape(result['asset_path'])}[/bold cyan]\n"
            f"Object: [u]&{escape(query.anchor_id)}[/u]  Property: [u]{escape(query.path_text)}[/u]",
            title="Property History",
            border_style="cyan",
        )
    )

    if not entries:
        console.print("[dim]No history found for this property.[/dim]")
        return

    table = Table(show_lines=False)
    table.add_column("Commit", style="yellow", no_wrap=True)
    table.add_column("Author")
    table.add_column("Message")
    table.add_column("Value", overflow="fold")
    for entry in entries:
        table.add_row(
            entry.revision.short_id,
            escape(entry.revision.author),
            escape(entry.revision.summary),
            escape(entry.display_value),
            style=_STATUS_STYLE[entry.status],
        )
    console.print(table)
    console.print(
        f"[dim]{len(entries)} change(s) across {result['revisions_scanned']} revision(s)[/dim]"
    )


def _entry_payload(entry: TimelineEntry) -> dict[str, Any]:
    """JSON-safe view of one entry, without the raw file content."""
    return {
        "revision": entry.revision.model_dump(mode="json", exclude={"raw_content"}),
        "status": entry.status.value,
        "value": entry.formatted_value,
        "reason": entry.reason,
    }


def _timeline_payload(result: PropertyHistoryResult) -> dict[str, Any]:
    query = result["query"]
    return {
        "asset_path": result["asset_path"],
        "anchor_id": query.anchor_id,
        "field_path": query.path_text,
        "revisions_scanned": result["revisions_scanned"],
        "entries": [_entry_payload(entry) for entry in result["entries"]],
    }


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def show(
    asset: Annotated[
        Path,
        typer.Argument(help="Tracked YAML file (e.g. a .prefab, .unity or .asset)."),
    ],
    anchor: Annotated[
        str,
        typer.Option("--anchor", "-a", help="Anchor / file ID of the object in the file."),
    ],
    path: Annotated[
        str,
        typer.Option("--path", "-p", help="Property path, e.g. 'm_LocalPosition.x'."),
    ],
    repo: Annotated[
        Path | None,
        typer.Option("--repo", "-r", help="Directory inside the git repository (default: CWD)."),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=1, help="Scan at most this many revisions."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the timeline as JSON instead of a table."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Show every change of one property of one object across the file's git history.
    """
    start_time = time.time()
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
            disable=as_json,
        ) as progress:
            progress.add_task(f"[cyan]Reading history of {asset}...", total=None)
            result = run_property_history(
                _resolve_asset(asset),
                anchor,
                path,
                repo_root=repo,
                limit=limit,
            )
    except ValueError as e:
        console.print(f"[bold red]❌ Invalid query:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2) from e
    except GitHistoryError as e:
        console.print(f"[bold red]❌ History Error:[/bold red] {escape(str(e))}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(json.dumps(_timeline_payload(result), indent=2))
        return

    _render_timeline(result)
    console.print(f"[dim](took {time.time() - start_time:.1f}s)[/dim]")


@app.command()  # type: ignore[misc]
def objects(
    file: Annotated[
        Path,
        typer.Argument(help="YAML file to inspect."),
    ],
    rev: Annotated[
        str | None,
        typer.Option("--rev", help="Read the file at this git revision instead of from disk."),
    ] = None,
    repo: Annotated[
        Path | None,
        typer.Option("--repo", "-r", help="Directory inside the git repository (default: CWD)."),
    ] = None,
) -> None:
    """
    List the anchored objects (anchor id and type) of a file.
    """
    raw: str | bytes
    try:
        if rev is not None:
            git = GitHistory.discover(repo)
            raw = git.read_content(rev, git.repo_relative(_resolve_asset(file)))
        else:
            if not file.is_file():
                console.print(f"[bold red]❌ File not found:[/bold red] {escape(str(file))}")
                raise typer.Exit(code=1)
            raw = file.read_bytes()
    except GitHistoryError as e:
        console.print(f"[bold red]❌ History Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    listed = list_objects(raw)
    if listed.is_err():
        failure = listed.unwrap_err()
        console.print(f"[bold red]❌ Cannot read objects:[/bold red] {escape(str(failure))}")
        raise typer.Exit(code=1)

    summaries = listed.unwrap()
    if not summaries:
        console.print("[dim]No anchored objects found.[/dim]")
        return

    table = Table(title=escape(str(file)) + (f" @ {escape(rev)}" if rev else ""))
    table.add_column("Anchor", style="yellow", no_wrap=True)
    table.add_column("Type")
    for summary in summaries:
        table.add_row(escape(summary.anchor_id), escape(summary.type_name or "?"))
    console.print(table)


if __name__ == "__main__":
    app()
