"""Saved library data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Image(BaseModel):
    # Artist and album images sometimes come back without dimensions
    width: int | None = None
    height: int | None = None
    url: str


class ReleaseDate(BaseModel):
    date: str
    precision: str  # year, month, or day


class Track(BaseModel):
    album_id: str
    artist_ids: list[str] = Field(default_factory=list)
    disc: int
    track_no: int
    duration_ms: int
    name: str


class Album(BaseModel):
    album_id: str
    artist_ids: list[str] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)
    release_date: ReleaseDate
    name: str


class Artist(BaseModel):
    artist_id: str
    images: list[Image] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    name: str


class SavedLibrary(BaseModel):
    """Saved tracks plus every album and artist they reference."""
    tracks: list[Track] = Field(default_factory=list)
    albums: list[Album] = Field(default_factory=list)
    artists: list[Artist] = Field(default_factory=list)
    incomplete: bool = False
