# src/chronolens/cli.py
"""
Chronolens Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`. Every
command ingests the given pipe-delimited file into a fresh in-memory store
and then runs one query against it, so the CLI needs no server or database.

Usage
-----
    $ chronolens ingest samples/events.txt
    $ chronolens timeline samples/events.txt evt-1
    $ chronolens overlaps samples/events.txt
    $ chronolens gaps samples/events.txt --start 1900-01-01 --end 2000-01-01
    $ chronolens influence samples/events.txt --from evt-1 --to evt-9
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from chronolens.analytics.gaps import find_largest_gap
from chronolens.analytics.influence import find_influence_path
from chronolens.analytics.overlaps import find_overlapping_events
from chronolens.analytics.timeline import build_timeline
from chronolens.core.contracts.event import Event, TimelineNode
from chronolens.core.contracts.job import IngestionJob, JobStatus
from chronolens.core.errors import CycleDetectedError
from chronolens.ingestion.jobs import JobStore
from chronolens.ingestion.runner import iter_file_lines, run_ingestion
from chronolens.store.memory import InMemoryEventStore

load_dotenv()

app = typer.Typer(
    help="Chronolens: ingest historical event files and explore their timelines.",
    rich_markup_mode="markdown",
)
console = Console()

EventFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Pipe-delimited event file whose first non-blank line is the header.",
    ),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load(file: Path) -> tuple[InMemoryEventStore, IngestionJob]:
    """Ingest ``file`` into a new store and return it with the finished job."""
    store = InMemoryEventStore()
    jobs = JobStore()
    job_id = jobs.create_job()
    asyncio.run(run_ingestion(job_id, iter_file_lines(file), store, jobs))
    job = jobs.get_job(job_id)
    if job is None:
        console.print(f"[bold red]❌ Ingestion job {job_id} was lost.[/bold red]")
        raise typer.Exit(code=1)
    if job.status is JobStatus.FAILED:
        console.print(f"[bold red]❌ Could not read {file}:[/bold red] {'; '.join(job.errors)}")
        raise typer.Exit(code=1)
    return store, job


def _span(event: Event) -> str:
    return f"{event.start_date:%Y-%m-%d %H:%M} → {event.end_date:%Y-%m-%d %H:%M}"


def _add_branch(tree: Tree, node: TimelineNode) -> None:
    branch = tree.add(
        f"[bold]{node.event_id}[/bold] {node.event_name} [dim]({_span(node)})[/dim]"
    )
    for child in node.children:
        _add_branch(branch, child)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def ingest(file: EventFile) -> None:
    """Ingest a file and print the job summary with any per-line errors."""
    _, job = _load(file)

    table = Table(title=f"Ingestion {job.job_id}")
    table.add_column("Status")
    table.add_column("Total", justify="right")
    table.add_column("Processed", justify="right")
    table.add_column("Errors", justify="right")
    table.add_row(
        job.status.value,
        str(job.total_lines),
        str(job.processed_lines),
        str(job.error_lines),
    )
    console.print(table)

    for message in job.errors:
        console.print(f" [yellow]•[/yellow] {message}")


@app.command()  # type: ignore[misc]
def timeline(
    file: EventFile,
    event_id: Annotated[str, typer.Argument(help="Root event id.")],
) -> None:
    """Render an event and all of its descendants as a tree."""
    store, _ = _load(file)
    try:
        root = asyncio.run(build_timeline(store, event_id))
    except CycleDetectedError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise typer.Exit(code=1) from e

    if root is None:
        console.print(f"[bold red]Timeline not found:[/bold red] {event_id}")
        raise typer.Exit(code=1)

    tree = Tree(f"[bold cyan]{root.event_id}[/bold cyan] {root.event_name} ({_span(root)})")
    for child in root.children:
        _add_branch(tree, child)
    console.print(tree)


@app.command()  # type: ignore[misc]
def overlaps(file: EventFile) -> None:
    """List every pair of events whose spans intersect."""
    store, _ = _load(file)
    pairs = asyncio.run(find_overlapping_events(store))
    if not pairs:
        console.print("[dim]No overlapping events.[/dim]")
        return

    table = Table(title="Overlapping events")
    table.add_column("Event A")
    table.add_column("Event B")
    table.add_column("Overlap (min)", justify="right")
    for pair in pairs:
        a, b = pair.events
        table.add_row(a.event_id, b.event_id, str(pair.overlap_duration_minutes))
    console.print(table)


@app.command()  # type: ignore[misc]
def gaps(
    file: EventFile,
    start: Annotated[datetime, typer.Option("--start", "-s", help="Window start.")],
    end: Annotated[datetime, typer.Option("--end", "-e", help="Window end.")],
) -> None:
    """Show the largest idle gap between consecutive events in a window."""
    store, _ = _load(file)
    report = asyncio.run(find_largest_gap(store, start, end))
    gap = report.largest_gap
    if gap is None:
        console.print(f"[dim]{report.message}[/dim]")
        return

    console.print(
        Panel(
            f"{gap.preceding_event.event_id} → {gap.succeeding_event.event_id}\n"
            f"{gap.start_of_gap:%Y-%m-%d %H:%M} → {gap.end_of_gap:%Y-%m-%d %H:%M}\n"
            f"[bold]{gap.duration_minutes}[/bold] minutes",
            title=report.message,
            border_style="green",
        )
    )


@app.command()  # type: ignore[misc]
def influence(
    file: EventFile,
    from_id: Annotated[str, typer.Option("--from", help="Source event id.")],
    to_id: Annotated[str, typer.Option("--to", help="Descendant event id.")],
) -> None:
    """Show the descendant path between two events and its total duration."""
    store, _ = _load(file)
    path = asyncio.run(find_influence_path(store, from_id, to_id))
    if path is None:
        console.print("[bold red]No influence path found.[/bold red]")
        raise typer.Exit(code=1)

    console.print(
        Panel(
            " → ".join(e.event_id for e in path.path)
            + f"\nTotal duration: [bold]{path.total_duration}[/bold] minutes",
            title=f"{path.from_id} ⇢ {path.to_id}",
            border_style="cyan",
        )
    )


if __name__ == "__main__":
    app()
