"""tshelf library command: inspect a library rows file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from tshelf.library.index import build_index
from tshelf.library.loader import LibraryFormatError, load_rows
from tshelf.utils.console import console


def library(
    path: Annotated[
        Path,
        typer.Argument(help="Library rows file (JSON array, {'episodes': [...]}, or JSON Lines)."),
    ],
    lookup: Annotated[
        Optional[list[str]],
        typer.Option("--lookup", "-k", help="Asset id to resolve. Repeatable."),
    ] = None,
) -> None:
    """Load a library file and report how many episodes and ids it indexes."""
    try:
        index = build_index(load_rows(path))
    except (FileNotFoundError, LibraryFormatError) as e:
        console.print(f"[red]Error loading library:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[green]Library loaded![/green] Found {index.record_count} episodes "
        f"under {len(index)} ids."
    )

    if not lookup:
        return

    table = Table(title="Lookups")
    table.add_column("Asset id", style="bold cyan")
    table.add_column("Show")
    table.add_column("Episode")

    for asset_id in lookup:
        record = index.resolve(asset_id)
        if record is None:
            table.add_row(asset_id, "[dim]-[/dim]", "[yellow]not found[/yellow]")
        else:
            table.add_row(asset_id, record.show_name, record.title)

    console.print(table)
