"""Spotify library CLI entry point.

Logs in through the web authorisation flow and pulls the saved library.
"""

from __future__ import annotations

import logging

import typer

from spotify_library.commands.auth_cmd import app as auth_app
from spotify_library.commands.library_cmd import app as library_app

app = typer.Typer(
    name="spotify-library",
    help="CLI tool for fetching a Spotify user's saved library.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(library_app, name="library")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Spotify library CLI: log in and fetch saved tracks, albums and artists."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s][%(name)s] %(message)s")


if __name__ == "__main__":
    app()
