"""Base API client for the Spotify Web API.

Injects the bearer token and maps failures onto the package's error types.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import httpx

from spotify_library.auth import TokenLifecycle
from spotify_library.config import Config
from spotify_library.utils.errors import BadResponseBody, BadResponseStatusCode, TransportError

logger = logging.getLogger(__name__)


class ApiEndpoint(str, Enum):
    SAVED_TRACKS = "/v1/me/tracks"
    ALBUMS = "/v1/albums"
    ARTISTS = "/v1/artists"


# Maximum ids per request on the several-items endpoints
BATCH_LIMITS = {
    ApiEndpoint.ALBUMS: 20,
    ApiEndpoint.ARTISTS: 50,
}


class SpotifyClient:
    """HTTP client for authenticated Web API reads."""

    def __init__(
        self,
        config: Config,
        auth: TokenLifecycle,
        http: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._auth = auth
        self._http = http or httpx.Client(timeout=config.service.http_timeout)

    def endpoint_url(self, endpoint: ApiEndpoint) -> str:
        """Absolute URL of an API endpoint."""
        return self._config.service.api_url.rstrip("/") + endpoint.value

    def get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET an absolute URL with the bearer token and decode the JSON body.

        Raises:
            BadResponseStatusCode: On any non-2xx response.
            BadResponseBody: If the body is not JSON.
            TransportError: If the request itself failed.
        """
        headers = {"Authorization": f"Bearer {self._auth.ensure_token()}"}

        logger.debug(f"Sending HTTP request to {url}")
        try:
            response = self._http.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise TransportError(e) from e

        if not response.is_success:
            raise BadResponseStatusCode(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise BadResponseBody(f"invalid JSON ({e})") from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()
        self._auth.close()
