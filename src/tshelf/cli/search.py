"""tshelf search command: find lines across many transcripts."""

from __future__ import annotations

import asyncio
import signal
from pathlib import Path
from typing import Annotated, Optional

import typer

from tshelf.cli.show import print_episode
from tshelf.cli.utils import build_shelf, load_cli_config
from tshelf.core.events import ProgressEvent
from tshelf.core.models import SearchResult
from tshelf.core.shelf import Shelf
from tshelf.utils.console import console


async def _run_search(shelf: Shelf, query: str) -> SearchResult:
    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.set)
    except (NotImplementedError, RuntimeError):
        pass  # no signal handlers on this platform; Ctrl-C aborts instead

    with console.status("Searching...") as status:

        def on_event(event: ProgressEvent) -> None:
            status.update(event.message)

        try:
            return await shelf.search(query, cancel=cancel, on_event=on_event)
        finally:
            try:
                loop.remove_signal_handler(signal.SIGINT)
            except (NotImplementedError, RuntimeError):
                pass


def search(
    query: Annotated[
        str,
        typer.Argument(help="Text to look for (case-insensitive). Empty shows everything."),
    ],
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
        typer.Option(
            "--timestamps/--paragraphs",
            help="Show matching timed lines, or the paragraphs containing them.",
        ),
    ] = True,
) -> None:
    """Search loaded transcripts for a phrase. Press Ctrl-C to stop early."""
    config = load_cli_config(**{"library.path": library})
    shelf = build_shelf(inputs, config)

    result = asyncio.run(_run_search(shelf, query))

    for match in result.matches:
        print_episode(
            match.episode,
            paragraphs=match.paragraphs,
            lines=match.lines,
            timestamps=timestamps,
        )
        if result.query:
            console.print(f"[dim]{len(match.paragraphs)} sections with matches[/dim]\n")

    if result.cancelled:
        console.print(f"[yellow]{result.summary}[/yellow]")
    elif result.query:
        console.print(f"[green]{result.summary}[/green]")
