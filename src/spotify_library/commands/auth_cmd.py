"""CLI commands for authentication management."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from spotify_library.auth import AuthSession, TokenLifecycle
from spotify_library.config import Config, get_config
from spotify_library.models.auth import Credentials
from spotify_library.utils.cache import TokenCache
from spotify_library.utils.errors import SpotifyError, handle_error
from spotify_library.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Manage the cached bearer token.")


def build_lifecycle(config: Config, credentials: Credentials | None = None) -> TokenLifecycle:
    """Wire credentials, the login session and the token cache together."""
    if credentials is None:
        credentials = config.credentials()
    return TokenLifecycle(
        credentials,
        AuthSession(config.service),
        TokenCache(config.config_dir()),
    )


def _status_row(lifecycle: TokenLifecycle, status: str) -> dict[str, object]:
    token_status = lifecycle.get_status()
    return {
        "status": status,
        "expires_at": str(token_status.expires_at),
        "seconds_remaining": token_status.seconds_remaining,
    }


@app.command()
def login(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Obtain a token (from cache if still valid) and display its status."""
    config = get_config()
    try:
        lifecycle = build_lifecycle(config)
    except SpotifyError as e:
        handle_error(e)
        raise typer.Exit(e.exit_code)

    try:
        console.print("Authenticating...", style="yellow")
        lifecycle.ensure_token()
        print_output(_status_row(lifecycle, "authenticated"), output, title="Authentication")
    except SpotifyError as e:
        console.print(f"[red]Authentication failed:[/red] {e}")
        raise typer.Exit(1)
    finally:
        lifecycle.close()


@app.command()
def status(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show the status of the cached token without logging in."""
    config = get_config()
    lifecycle = build_lifecycle(config, Credentials(username="", password=""))

    token_status = lifecycle.get_status()
    result = {
        "has_token": token_status.has_token,
        "is_expired": token_status.is_expired,
        "source": token_status.source,
        "expires_at": str(token_status.expires_at) if token_status.expires_at else "N/A",
        "seconds_remaining": token_status.seconds_remaining or 0,
        "cache_file": str(lifecycle.cache.path),
    }
    print_output(result, output, title="Token Status")
    lifecycle.close()


@app.command()
def refresh(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Force a new login, ignoring any cached token."""
    config = get_config()
    try:
        lifecycle = build_lifecycle(config)
    except SpotifyError as e:
        handle_error(e)
        raise typer.Exit(e.exit_code)

    try:
        console.print("Force refreshing token...", style="yellow")
        lifecycle.ensure_token(force_refresh=True)
        print_output(_status_row(lifecycle, "refreshed"), output, title="Token Refreshed")
    except SpotifyError as e:
        console.print(f"[red]Token refresh failed:[/red] {e}")
        raise typer.Exit(1)
    finally:
        lifecycle.close()


@app.command()
def logout() -> None:
    """Delete the cached token."""
    config = get_config()
    lifecycle = build_lifecycle(config, Credentials(username="", password=""))
    try:
        if lifecycle.forget():
            console.print("Cached token removed.", style="green")
        else:
            console.print("[dim]No cached token.[/dim]")
    finally:
        lifecycle.close()
