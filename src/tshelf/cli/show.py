"""tshelf show command: print transcripts as readable paragraphs."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from tshelf.cli.utils import build_shelf, load_cli_config
from tshelf.core.models import Episode, Line, Paragraph
from tshelf.utils.console import console


def print_episode(
    episode: Episode,
    paragraphs: list[Paragraph] | None = None,
    lines: list[Line] | None = None,
    timestamps: bool = False,
) -> None:
    """Print one episode header followed by its paragraphs or timed lines."""
    console.rule(f"[bold]{escape(episode.show_name)}[/bold]")
    console.print(f"[bold]{escape(episode.title)}[/bold]")
    console.print(f"[dim]{escape(episode.filename)}[/dim]")
    if not episode.has_metadata:
        console.print(
            f"[yellow]Episode ID {escape(episode.id)} not found in library "
            "(may have been removed from library)[/yellow]"
        )

    if timestamps:
        shown_lines = episode.lines if lines is None else lines
        if not shown_lines:
            console.print("No transcript content found.")
        for line in shown_lines:
            stamp = escape(f"{line.start_time:>8}")
            console.print(f"[cyan]{stamp}[/cyan]  {escape(line.text)}")
    else:
        shown = episode.paragraphs if paragraphs is None else paragraphs
        if not shown:
            console.print("No transcript content found.")
        for p in shown:
            speaker = f"[bold]{escape(p.speaker)}:[/bold] " if p.speaker else ""
            console.print(f"[cyan]{escape(p.time_range)}[/cyan]")
            console.print(f"{speaker}{escape(p.text)}\n")


def show(
    inputs: Annotated[
        list[str],
        typer.Argument(help="TTML files, glob patterns, or .txt files listing paths."),
    ],
    library: Annotated[
        Optional[Path],
        typer.Option("--library", "-L", help="Library rows file for episode metadata."),
    ] = None,
    timestamps: Annotated[
        bool,
        typer.Option("--timestamps", "-t", help="Show timed lines instead of paragraphs."),
    ] = False,
    pause: Annotated[
        Optional[float],
        typer.Option("--pause", help="Pause (seconds) after a sentence that starts a paragraph."),
    ] = None,
    max_words: Annotated[
        Optional[int],
        typer.Option("--max-words", help="Word count after which a paragraph is split."),
    ] = None,
) -> None:
    """Show transcripts with library metadata, grouped into paragraphs."""
    config = load_cli_config(
        **{
            "library.path": library,
            "segment.pause_threshold": pause,
            "segment.max_words": max_words,
        }
    )
    shelf = build_shelf(inputs, config)

    for episode in shelf:
        print_episode(episode, timestamps=timestamps)
        console.print(f"[dim]({len(episode.paragraphs)} paragraphs)[/dim]\n")
