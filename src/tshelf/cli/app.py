"""TranscriptShelf CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from tshelf import __version__
from tshelf.cli.export import export
from tshelf.cli.library import library
from tshelf.cli.search import search
from tshelf.cli.show import show

app = typer.Typer(
    name="tshelf",
    help="TranscriptShelf: read, cross-reference and search podcast transcripts.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tshelf {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """TranscriptShelf: read, cross-reference and search podcast transcripts."""
    # TSHELF_* settings may live in a .env file; shell exports take precedence
    load_dotenv(override=False)


app.command("library")(library)
app.command("show")(show)
app.command("search")(search)
app.command("export")(export)
