"""Auth-related data models."""

from __future__ import annotations

import time
from datetime import datetime

from pydantic import BaseModel


class Credentials(BaseModel):
    """Account username and password used for the browser login flow."""
    username: str
    password: str

    model_config = {"frozen": True}

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    __str__ = __repr__


class TokenState(BaseModel):
    """A bearer token and the epoch second at which it stops being usable."""
    token: str
    expiry_time: int

    def is_valid(self, now: int | None = None) -> bool:
        """True while ``expiry_time`` is strictly in the future. No skew margin."""
        if now is None:
            now = int(time.time())
        return self.expiry_time > now

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.expiry_time)


class TokenStatus(BaseModel):
    """Current state of the in-memory or cached access token."""
    has_token: bool
    is_expired: bool
    source: str = "none"  # memory, cache, or none
    expires_at: datetime | None = None
    seconds_remaining: int | None = None
