"""Shared fixtures for the spotify-library test suite."""
from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from spotify_library.config import Config, ServiceConfig, Settings
from spotify_library.models.auth import Credentials


@pytest.fixture
def fake_service() -> ServiceConfig:
    return ServiceConfig(
        accounts_url="https://accounts.example.com",
        api_url="https://api.example.com",
        client_id="test-client-id",
        redirect_uri="http://localhost",
        scope="user-library-read",
    )


@pytest.fixture
def fake_settings(tmp_path) -> Settings:
    return Settings(
        creds="alice:s3cret",
        config_dir=str(tmp_path / "config"),
    )


@pytest.fixture
def fake_config(fake_settings, fake_service) -> Config:
    return Config(settings=fake_settings, service=fake_service)


@pytest.fixture
def creds() -> Credentials:
    return Credentials(username="alice", password="s3cret")


@pytest.fixture
def mock_client():
    """MagicMock standing in for SpotifyClient."""
    client = MagicMock()
    client.endpoint_url.side_effect = lambda endpoint: "https://api.example.com" + endpoint.value
    client.get_json = MagicMock()
    client.close = MagicMock()
    return client


def make_response(
    status_code: int = 200,
    set_cookies: list[str] | None = None,
    location: str | None = None,
    json_data=None,
) -> httpx.Response:
    """Build a real httpx.Response so header lookups behave like the wire."""
    headers = [("set-cookie", c) for c in set_cookies or []]
    if location is not None:
        headers.append(("location", location))
    if json_data is not None:
        return httpx.Response(status_code, headers=headers, json=json_data)
    return httpx.Response(status_code, headers=headers)
