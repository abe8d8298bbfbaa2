"""Saved library assembly: tracks, then the albums and artists they reference."""

from __future__ import annotations

import logging
from typing import Any

from spotify_library.client import ApiEndpoint, SpotifyClient
from spotify_library.models.library import (
    Album,
    Artist,
    Image,
    ReleaseDate,
    SavedLibrary,
    Track,
)
from spotify_library.utils.chunking import ChunkedBatchIterator
from spotify_library.utils.pagination import PageIterator

logger = logging.getLogger(__name__)


def collect_artist_ids(artists: Any) -> list[str]:
    """Pull the ``id`` of every artist object; ``None`` or a non-list yields nothing."""
    if not isinstance(artists, list):
        return []
    return [a["id"] for a in artists if isinstance(a, dict) and a.get("id")]


def collect_images(images: Any) -> list[Image]:
    if not isinstance(images, list):
        return []
    return [
        Image(width=i.get("width"), height=i.get("height"), url=i["url"])
        for i in images
        if isinstance(i, dict) and i.get("url")
    ]


def parse_track(item: dict[str, Any]) -> Track | None:
    """Build a Track from a saved-track item (``{"added_at": ..., "track": {...}}``).

    Returns None for unavailable items (``"track": null``) and for local
    files, whose album has no id.
    """
    track = item.get("track") if isinstance(item, dict) else None
    if not isinstance(track, dict):
        return None
    album = track.get("album")
    album_id = album.get("id") if isinstance(album, dict) else None
    if not album_id:
        return None
    return Track(
        album_id=album_id,
        artist_ids=collect_artist_ids(track.get("artists")),
        disc=track["disc_number"],
        track_no=track["track_number"],
        duration_ms=track["duration_ms"],
        name=track["name"],
    )


def parse_album(data: dict[str, Any]) -> Album:
    return Album(
        album_id=data["id"],
        artist_ids=collect_artist_ids(data.get("artists")),
        images=collect_images(data.get("images")),
        release_date=ReleaseDate(
            date=data["release_date"],
            precision=data["release_date_precision"],
        ),
        name=data["name"],
    )


def parse_artist(data: dict[str, Any]) -> Artist:
    return Artist(
        artist_id=data["id"],
        images=collect_images(data.get("images")),
        genres=[g for g in data.get("genres") or [] if isinstance(g, str)],
        name=data["name"],
    )


class LibraryService:
    """Service for fetching the user's saved library."""

    def __init__(self, client: SpotifyClient) -> None:
        self._client = client

    def iter_saved_tracks(self) -> PageIterator:
        """Raw saved-track items, one page request at a time."""
        return PageIterator(self._client, ApiEndpoint.SAVED_TRACKS)

    def fetch_saved_tracks(self) -> tuple[list[Track], bool]:
        """All saved tracks, and whether the listing stopped on an error."""
        pages = self.iter_saved_tracks()
        tracks = [t for t in map(parse_track, pages) if t is not None]
        return tracks, pages.last_error is not None

    def fetch_saved_library(self) -> SavedLibrary:
        """Fetch saved tracks, then resolve their albums and artists in batches.

        Album and artist ids are de-duplicated before lookup. If any listing
        ended on a fetch error the result is marked ``incomplete``.
        """
        album_ids: dict[str, None] = {}
        artist_ids: dict[str, None] = {}

        pages = self.iter_saved_tracks()
        tracks: list[Track] = []
        for item in pages:
            track = parse_track(item)
            if track is None:
                logger.debug(f"Skipping saved item without a track or album id: {item}")
                continue
            album_ids[track.album_id] = None
            for artist_id in track.artist_ids:
                artist_ids[artist_id] = None
            tracks.append(track)
        logger.info(
            f"Fetched {len(tracks)} saved tracks referencing "
            f"{len(album_ids)} albums and {len(artist_ids)} artists"
        )

        album_iter = ChunkedBatchIterator(self._client, ApiEndpoint.ALBUMS, album_ids)
        # Unknown ids come back as null entries
        albums = [parse_album(a) for a in album_iter if a is not None]

        artist_iter = ChunkedBatchIterator(self._client, ApiEndpoint.ARTISTS, artist_ids)
        artists = [parse_artist(a) for a in artist_iter if a is not None]

        incomplete = any(
            it.last_error is not None for it in (pages, album_iter, artist_iter)
        )
        if incomplete:
            logger.warning("Library fetch ended early; results are incomplete")

        return SavedLibrary(
            tracks=tracks,
            albums=albums,
            artists=artists,
            incomplete=incomplete,
        )
