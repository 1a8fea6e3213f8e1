"""Shared CLI utilities."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.markup import escape

from tshelf.core.config import TShelfConfig, load_config
from tshelf.core.shelf import Shelf
from tshelf.library.loader import LibraryFormatError, load_rows
from tshelf.utils.console import console


def expand_inputs(inputs: list[str]) -> list[str]:
    """Expand glob patterns and path list files into individual paths."""
    expanded = []
    for inp in inputs:
        path = Path(inp)

        # .txt file: read as path list (one per line)
        if path.suffix == ".txt" and path.is_file():
            for line in path.read_text().splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    expanded.append(line)
            continue

        # Try as glob pattern if it contains wildcards
        if any(c in inp for c in "*?["):
            matches = sorted(Path(".").glob(inp))
            if matches:
                expanded.extend(str(m) for m in matches)
                continue

        expanded.append(inp)

    return expanded


def load_cli_config(**cli_overrides: object) -> TShelfConfig:
    """Load configuration, exiting with status 1 on invalid settings."""
    try:
        return load_config(**cli_overrides)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def build_shelf(inputs: list[str], config: TShelfConfig) -> Shelf:
    """Create a shelf, load the configured library and ingest all inputs.

    Exits with status 1 when the library cannot be read or no input resolves.
    Individual transcripts that cannot be read are reported and skipped.
    """
    shelf = Shelf(
        pause_threshold=config.segment.pause_threshold,
        max_words=config.segment.max_words,
        batch_size=config.search.batch_size,
    )

    if config.library.path is not None:
        try:
            index = shelf.load_library(load_rows(config.library.path))
        except (FileNotFoundError, LibraryFormatError) as e:
            console.print(f"[red]Error loading library:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        console.print(
            f"[green]Library loaded:[/green] {index.record_count} episodes, {len(index)} ids"
        )

    expanded = expand_inputs(inputs)
    if not expanded:
        console.print("[red]No inputs resolved. Check your paths or patterns.[/red]")
        raise typer.Exit(1)

    for input_path in expanded:
        try:
            shelf.ingest_file(Path(input_path))
        except OSError as e:
            console.print(f"[red]Failed:[/red] {input_path}: {e}")

    if not len(shelf):
        console.print("[red]No transcripts could be loaded.[/red]")
        raise typer.Exit(1)

    console.print(f"[dim]{shelf.status}[/dim]")
    return shelf
