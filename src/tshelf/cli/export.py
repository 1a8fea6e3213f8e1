"""tshelf export command: write transcripts as text or subtitles."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from tshelf.cli.utils import build_shelf, load_cli_config
from tshelf.subtitles.converter import EXPORT_FORMATS, save_transcript
from tshelf.utils.console import console
from tshelf.utils.paths import export_path, unique_path


def export(
    inputs: Annotated[
        list[str],
        typer.Argument(help="TTML files, glob patterns, or .txt files listing paths."),
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for exported files."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: txt, timestamped, srt, vtt."),
    ] = "txt",
    library: Annotated[
        Optional[Path],
        typer.Option("--library", "-L", help="Library rows file for episode titles."),
    ] = None,
) -> None:
    """Export transcripts, one file per episode."""
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format:[/red] {fmt} (choose from {', '.join(EXPORT_FORMATS)})")
        raise typer.Exit(1)

    config = load_cli_config(**{"library.path": library, "export_dir": output_dir})
    shelf = build_shelf(inputs, config)

    table = Table(title=f"Exported ({len(shelf)} files)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Source", max_width=40, no_wrap=True)
    table.add_column("Output")

    written: set[Path] = set()
    for i, episode in enumerate(shelf, 1):
        target = unique_path(export_path(episode, config.export_dir, fmt), written)
        path = save_transcript(episode, target, fmt)
        table.add_row(str(i), episode.filename, str(path))

    console.print(table)
