"""Error taxonomy and structured error output."""

from __future__ import annotations

import json
import sys

from rich.console import Console

console = Console(stderr=True)


class SpotifyError(Exception):
    """Base class for every failure this package raises on purpose."""

    code = "RUNTIME_ERROR"
    exit_code = 1


class AuthMissingCookie(SpotifyError):
    code = "AUTH_MISSING_COOKIE"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Expected cookie '{name}' was not present")


class AuthBadCreds(SpotifyError):
    code = "AUTH_BAD_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Bad credentials")


class AuthFailedAccept(SpotifyError):
    code = "AUTH_FAILED_ACCEPT"

    def __init__(self) -> None:
        super().__init__("Spotify rejected the authorisation request")


class BadTokenCache(SpotifyError):
    code = "BAD_TOKEN_CACHE"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Token cache invalid: {reason}")


class BadResponseStatusCode(SpotifyError):
    code = "BAD_STATUS"

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected response status code (HTTP {status_code})")


class BadResponseBody(SpotifyError):
    code = "BAD_BODY"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Unexpected response body: {reason}")


class TransportError(SpotifyError):
    """Wraps network, I/O and URL failures raised by httpx."""

    code = "CONNECTION_ERROR"

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Request failed: {cause}")


class MissingCredentials(SpotifyError):
    code = "MISSING_CREDENTIALS"
    exit_code = 2

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(f"No credentials provided in env var {env_var}")


class MalformedCredentials(SpotifyError):
    code = "MALFORMED_CREDENTIALS"
    exit_code = 3

    def __init__(self) -> None:
        super().__init__("Credentials must be in format user:password")


# Actionable hints keyed by error class
_ERROR_HINTS: dict[type[SpotifyError], str] = {
    AuthBadCreds: "Check the user:password pair in SPOTIFY_CREDS",
    AuthMissingCookie: "The login page changed or blocked the request; retry later",
    AuthFailedAccept: "Authorisation was refused; run `spotify-library auth refresh`",
    BadTokenCache: "Run `spotify-library auth logout` to discard the cached token",
    MissingCredentials: "Export SPOTIFY_CREDS=user:password or add it to .env",
    MalformedCredentials: "Export SPOTIFY_CREDS=user:password or add it to .env",
    TransportError: "Connection error, check network connectivity",
}


def _get_hint(error: Exception) -> str | None:
    """Match an error to an actionable hint."""
    if isinstance(error, BadResponseStatusCode) and error.status_code == 401:
        return "Token may be expired, run `spotify-library auth refresh`"
    for error_type, hint in _ERROR_HINTS.items():
        if isinstance(error, error_type):
            return hint
    return None


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout:
    {"error": true, "code": "AUTH_BAD_CREDENTIALS", "message": "...", "hint": "..."}

    Also prints a human-readable error to stderr.
    """
    message = str(error)
    hint = _get_hint(error)
    code = error.code if isinstance(error, SpotifyError) else "RUNTIME_ERROR"

    error_obj: dict[str, object] = {
        "error": True,
        "code": code,
        "message": message,
    }
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
