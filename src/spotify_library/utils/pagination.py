"""Cursor pagination over items/total/next shaped endpoints."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from spotify_library.client import ApiEndpoint, SpotifyClient
from spotify_library.utils.errors import (
    BadResponseBody,
    BadResponseStatusCode,
    SpotifyError,
    TransportError,
)

logger = logging.getLogger(__name__)

PAGE_LIMIT = 50


class PageIterator(Iterator[Any]):
    """Lazily walks a paginated collection, one GET per page.

    Records of a page are handed out from the end of the page's ``items``
    array backwards. A failed fetch is logged, kept in
    ``last_error`` and ends the sequence; to a plain ``for`` loop it looks
    like the last page. Errors raised while obtaining the bearer token
    propagate. Once exhausted the iterator stays exhausted.
    """

    def __init__(
        self,
        client: SpotifyClient,
        endpoint: ApiEndpoint,
        limit: int = PAGE_LIMIT,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._limit = limit
        self._next_url: str | None = client.endpoint_url(endpoint)
        self._next_params: dict[str, str] | None = {"limit": str(limit), "offset": "0"}
        self._buffer: list[Any] = []
        self._exhausted = False
        self.total = 0
        self.pages_fetched = 0
        self.last_error: SpotifyError | None = None

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def next_url(self) -> str | None:
        return self._next_url

    def __iter__(self) -> PageIterator:
        return self

    def __next__(self) -> Any:
        if self._buffer:
            return self._buffer.pop()
        if self._exhausted:
            raise StopIteration

        try:
            self._fetch()
        except (BadResponseStatusCode, BadResponseBody, TransportError) as e:
            logger.warning(f"Failed to get next in iterator: {e}")
            self.last_error = e

        if not self._buffer:
            self._exhausted = True
            raise StopIteration
        return self._buffer.pop()

    def _fetch(self) -> None:
        url, params = self._next_url, self._next_params
        # Taken before the request so a failure leaves the cursor terminal
        self._next_url, self._next_params = None, None
        if url is None:
            return

        response = self._client.get_json(url, params=params)
        if not isinstance(response, dict):
            raise BadResponseBody("expected a JSON object page")

        items = response.get("items")
        self._buffer = list(items) if isinstance(items, list) else []
        self.total = int(response.get("total") or 0)
        next_url = response.get("next")
        self._next_url = next_url if isinstance(next_url, str) else None
        self.pages_fetched += 1

        logger.debug(
            f"Next href in pagination of {self.total} items is {self._next_url}"
        )
