"""Configuration management for the Spotify library CLI.

Loads credentials and paths from the environment (and .env) and service
endpoints from config/service.yaml.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from spotify_library.models.auth import Credentials
from spotify_library.utils.errors import MalformedCredentials, MissingCredentials

CREDS_ENV = "SPOTIFY_CREDS"
APP_DIR_NAME = "spotify_library"


class ServiceConfig(BaseModel):
    """Hosts and client parameters of the music service."""
    accounts_url: str = "https://accounts.spotify.com"
    api_url: str = "https://api.spotify.com"
    client_id: str = "a4a869822602493c828f424d7552379c"
    redirect_uri: str = "http://localhost"
    scope: str = "user-library-read"
    user_agent: str = Field(
        default="Mozilla/5.0 (X11; Linux x86_64; rv:54.0) Gecko/20100101 Firefox/54.0",
        description="Desktop browser User-Agent sent during the login flow",
    )
    http_timeout: float = 30.0


class Settings(BaseModel):
    """Application settings loaded from environment variables."""
    creds: str = Field(default="", description="Credentials as user:password")
    config_dir: str = Field(default="", description="Directory holding the token cache")


class Config(BaseModel):
    """Full application configuration."""
    settings: Settings
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    def credentials(self) -> Credentials:
        """Parse the configured user:password pair."""
        return parse_credentials(self.settings.creds)

    def config_dir(self) -> Path:
        """Resolve the per-application config directory, creating it if needed."""
        path = Path(self.settings.config_dir) if self.settings.config_dir else default_config_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path


def parse_credentials(raw: str | None) -> Credentials:
    """Split ``user:password`` on the first colon.

    Raises:
        MissingCredentials: If nothing was provided.
        MalformedCredentials: If there is no colon.
    """
    if not raw:
        raise MissingCredentials(CREDS_ENV)
    username, sep, password = raw.partition(":")
    if not sep:
        raise MalformedCredentials()
    return Credentials(username=username, password=password)


def default_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/spotify_library``, falling back to ``~/.config``."""
    base = os.environ.get("XDG_CONFIG_HOME", "")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_DIR_NAME


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (where config/ lives)."""
    current = Path(__file__).resolve().parent
    for parent in [current, *current.parents]:
        if (parent / "config" / "service.yaml").exists():
            return parent
    # Fallback: cwd
    return Path.cwd()


def _load_service(project_root: Path) -> ServiceConfig:
    """Load service endpoints from service.yaml, or defaults if it is absent."""
    service_path = project_root / "config" / "service.yaml"
    if not service_path.exists():
        return ServiceConfig()

    with open(service_path) as f:
        data = yaml.safe_load(f) or {}

    return ServiceConfig(**data.get("service", {}))


def _env(*keys: str, default: str = "") -> str:
    """Try multiple env var names, return the first one found."""
    for key in keys:
        val = os.environ.get(key, "")
        if val:
            return val.strip().strip('"')
    return default


def _load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        creds=_env(CREDS_ENV),
        config_dir=_env("SPOTIFY_LIBRARY_CONFIG_DIR"),
    )


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache the full application configuration."""
    project_root = _find_project_root()

    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    settings = _load_settings()
    service = _load_service(project_root)

    return Config(settings=settings, service=service)
