"""CLI commands for reading the saved library."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

import typer
from rich.console import Console

from spotify_library.client import SpotifyClient
from spotify_library.commands.auth_cmd import build_lifecycle
from spotify_library.config import get_config
from spotify_library.services.library import LibraryService
from spotify_library.utils.errors import SpotifyError, handle_error
from spotify_library.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="library", help="Fetch saved tracks, albums and artists.")


class Section(str, Enum):
    TRACKS = "tracks"
    ALBUMS = "albums"
    ARTISTS = "artists"


COLUMNS = {
    Section.TRACKS: ["name", "album_id", "disc", "track_no", "duration_ms"],
    Section.ALBUMS: ["album_id", "name", "release_date", "artist_ids"],
    Section.ARTISTS: ["artist_id", "name", "genres"],
}


def _build_service() -> tuple[LibraryService, SpotifyClient]:
    config = get_config()
    client = SpotifyClient(config, build_lifecycle(config))
    return LibraryService(client), client


@app.command()
def tracks(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """List saved tracks."""
    try:
        service, client = _build_service()
    except SpotifyError as e:
        handle_error(e)
        raise typer.Exit(e.exit_code)

    try:
        saved, incomplete = service.fetch_saved_tracks()
        if incomplete:
            console.print("[yellow]Listing stopped early; results are incomplete.[/yellow]")
        if not saved:
            console.print("[dim]No saved tracks found.[/dim]")
            raise typer.Exit(0)

        print_output(saved, output, columns=COLUMNS[Section.TRACKS], title="Saved Tracks")
    except SpotifyError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command()
def fetch(
    show: Annotated[Section, typer.Option("--show", "-s", help="Which part of the library to print")] = Section.ARTISTS,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Fetch saved tracks and resolve their albums and artists."""
    try:
        service, client = _build_service()
    except SpotifyError as e:
        handle_error(e)
        raise typer.Exit(e.exit_code)

    try:
        library = service.fetch_saved_library()
        if library.incomplete:
            console.print("[yellow]Some requests failed; results are incomplete.[/yellow]")

        records = getattr(library, show.value)
        console.print(f"{len(records)} {show.value}:")
        print_output(records, output, columns=COLUMNS[show], title=show.value.capitalize())
    except SpotifyError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
