"""On-disk single-slot cache for the bearer token."""

from __future__ import annotations

import logging
from pathlib import Path

from spotify_library.models.auth import TokenState
from spotify_library.utils.errors import BadTokenCache

logger = logging.getLogger(__name__)

STATE_FILE = "state.conf"


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        return line[:-1]
    return line


class TokenCache:
    """Persists one TokenState as two lines: the token, then its expiry in epoch seconds.

    The file lives at ``<config_dir>/state.conf``. Resolving and creating the
    config directory is the caller's job.
    """

    def __init__(self, config_dir: Path | str) -> None:
        self._path = Path(config_dir) / STATE_FILE

    @property
    def path(self) -> Path:
        return self._path

    @property
    def exists(self) -> bool:
        return self._path.is_file()

    def save(self, state: TokenState) -> None:
        """Write the token state, replacing any previous one."""
        with open(self._path, "w", encoding="utf-8") as f:
            f.write(f"{state.token}\n{state.expiry_time}")
        logger.debug(f"Saved token to {self._path}")

    def load(self) -> TokenState:
        """Read the cached token state.

        Raises:
            FileNotFoundError: If nothing has been cached yet.
            BadTokenCache: If either line is missing or the expiry is not an integer.
        """
        with open(self._path, encoding="utf-8") as f:
            token = f.readline()
            if not token:
                raise BadTokenCache("Token missing")
            expiry = f.readline()
            if not expiry:
                raise BadTokenCache("Expiry time missing")

        token = _strip_newline(token)
        expiry = _strip_newline(expiry)
        try:
            expiry_time = int(expiry)
        except ValueError:
            raise BadTokenCache("Expiry time is not a number") from None

        logger.debug("Loaded token from file successfully")
        return TokenState(token=token, expiry_time=expiry_time)

    def clear(self) -> bool:
        """Delete the cache file. Returns False if there was nothing to delete."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        return True
