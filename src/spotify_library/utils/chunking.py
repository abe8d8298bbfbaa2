"""Chunking utilities for batched id lookups."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, TypeVar

from spotify_library.client import BATCH_LIMITS, ApiEndpoint, SpotifyClient
from spotify_library.utils.errors import (
    BadResponseBody,
    BadResponseStatusCode,
    SpotifyError,
    TransportError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunk_list(items: list[T], chunk_size: int) -> list[list[T]]:
    """Split a list into chunks of the given size.

    Args:
        items: The list to split.
        chunk_size: Maximum items per chunk.

    Returns:
        A list of sub-lists, each with at most chunk_size items.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [items[i : i + chunk_size] for i in range(0, len(items), chunk_size)]


class ChunkedBatchIterator(Iterator[Any]):
    """Resolves ids through an ``?ids=a,b,c`` endpoint, one chunk per request.

    The response is expected to be an object whose (single) value is the
    array of records. A chunk that resolves to no records is skipped. Same
    error policy as PageIterator: a failed chunk is logged, kept in
    ``last_error`` and ends the sequence, while token errors propagate.
    """

    def __init__(
        self,
        client: SpotifyClient,
        endpoint: ApiEndpoint,
        ids: Iterable[str],
    ) -> None:
        if endpoint not in BATCH_LIMITS:
            raise ValueError(f"Endpoint {endpoint.value} does not accept batched ids")

        self._client = client
        self._endpoint = endpoint
        self.batch_size = BATCH_LIMITS[endpoint]
        self._chunks = chunk_list(list(ids), self.batch_size)
        self._chunks.reverse()
        self._buffer: list[Any] = []
        self._exhausted = False
        self.requests_made = 0
        self.last_error: SpotifyError | None = None

    @property
    def remaining_chunks(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> ChunkedBatchIterator:
        return self

    def __next__(self) -> Any:
        if self._buffer:
            return self._buffer.pop()
        if self._exhausted:
            raise StopIteration

        try:
            while not self._buffer and self._chunks:
                self._fetch()
        except (BadResponseStatusCode, BadResponseBody, TransportError) as e:
            logger.warning(f"Failed to get next in iterator: {e}")
            self.last_error = e

        if not self._buffer:
            self._exhausted = True
            raise StopIteration
        return self._buffer.pop()

    def _fetch(self) -> None:
        ids = self._chunks.pop()

        # Built by hand so the commas go out unescaped
        url = f"{self._client.endpoint_url(self._endpoint)}?ids={','.join(ids)}"
        self.requests_made += 1
        response = self._client.get_json(url)

        if not isinstance(response, dict) or not response:
            raise BadResponseBody("expected a JSON object wrapping the records")
        records = list(response.values())[-1]
        if not isinstance(records, list):
            raise BadResponseBody("expected an array of records")
        self._buffer = list(records)
