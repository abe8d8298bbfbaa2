"""Browser-emulating authorisation for the Spotify Web API.

The service offers no machine-to-machine grant for the library scope, so
AuthSession walks the same three requests a browser makes on the accounts
site and reads the bearer token out of the final redirect. TokenLifecycle
sits on top and keeps a usable token around, backed by the on-disk cache.
"""

from __future__ import annotations

import logging
import time

import httpx

from spotify_library.config import ServiceConfig
from spotify_library.models.auth import Credentials, TokenState, TokenStatus
from spotify_library.utils.cache import TokenCache
from spotify_library.utils.cookies import build_cookie_header, find_cookie, find_fragment
from spotify_library.utils.errors import (
    AuthBadCreds,
    AuthFailedAccept,
    AuthMissingCookie,
    BadTokenCache,
    TransportError,
)

logger = logging.getLogger(__name__)

CSRF = "csrf_token"

# Session continuation cookie the login form expects alongside the CSRF token
BON_COOKIE = "MHwwfDYyODMzMzc0OHwyNjM5MDAxNzQxNnwxfDF8MXww"

AUTHORIZE_PATH = "/authorize"
LOGIN_PATH = "/api/login"
ACCEPT_PATH = "/en/authorize/accept"


def _extract_cookie(response: httpx.Response, name: str) -> str:
    value = find_cookie(response.headers.get_list("set-cookie"), name)
    if value is None:
        raise AuthMissingCookie(name)
    return value


class AuthSession:
    """Exchanges credentials for a bearer token through the web login flow."""

    def __init__(self, service: ServiceConfig, http: httpx.Client | None = None) -> None:
        self._service = service
        self._http = http or httpx.Client(follow_redirects=False, timeout=service.http_timeout)

    def _query_params(self) -> list[tuple[str, str]]:
        return [
            ("client_id", self._service.client_id),
            ("response_type", "token"),
            ("redirect_uri", self._service.redirect_uri),
            ("scope", self._service.scope),
            ("show_dialog", "true"),
        ]

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(e) from e

    def authorize(self, credentials: Credentials) -> TokenState:
        """Run the authorize → login → accept choreography.

        Raises:
            AuthMissingCookie: A response lacked a cookie the next step needs.
            AuthBadCreds: The login submission was rejected.
            AuthFailedAccept: The accept redirect carried no token or expiry.
            TransportError: A request could not be completed.
        """
        accounts = self._service.accounts_url.rstrip("/")
        query_params = self._query_params()
        authorize_url = str(httpx.URL(accounts + AUTHORIZE_PATH, params=query_params))

        # Cookies are set by hand at every step; the client jar must not add its own
        self._http.cookies.clear()

        headers = {
            "User-Agent": self._service.user_agent,
            "Connection": "keep-alive",
        }

        logger.debug("Sending GET to /authorize")
        response = self._send("GET", authorize_url, headers=dict(headers))
        csrf = _extract_cookie(response, CSRF)

        login_data = {
            "remember": "false",
            "username": credentials.username,
            "password": credentials.password,
            "csrf_token": csrf,
        }
        headers["Referer"] = authorize_url
        headers["Cookie"] = build_cookie_header([
            (CSRF, csrf),
            ("__bon", BON_COOKIE),
            ("fb_continue", authorize_url),
            ("remember", credentials.username),
        ])

        logger.debug("Sending POST to /login")
        response = self._send("POST", accounts + LOGIN_PATH, headers=dict(headers), data=login_data)
        if not response.is_success:
            raise AuthBadCreds()

        logger.debug("Authenticated!")

        csrf = _extract_cookie(response, CSRF)
        accept_data = dict(query_params)
        accept_data[CSRF] = csrf
        headers["Cookie"] = build_cookie_header([
            ("sp_ac", _extract_cookie(response, "sp_ac")),
            ("sp_dc", _extract_cookie(response, "sp_dc")),
            (CSRF, csrf),
        ])

        logger.debug("Sending POST to /accept")
        response = self._send("POST", accounts + ACCEPT_PATH, headers=dict(headers), data=accept_data)

        return self._parse_redirect(response.headers.get("location"))

    @staticmethod
    def _parse_redirect(location: str | None) -> TokenState:
        if not location:
            raise AuthFailedAccept()

        expires_in = find_fragment(location, "expires_in", "&")
        token = find_fragment(location, "access_token", "&")
        if expires_in is None or token is None:
            raise AuthFailedAccept()

        try:
            seconds = int(expires_in)
        except ValueError:
            raise AuthFailedAccept() from None

        return TokenState(token=token, expiry_time=int(time.time()) + seconds)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()


class TokenLifecycle:
    """Hands out a valid bearer token, authorising only when memory and cache are stale.

    Owns the token state; nothing else mutates it. Callers fetching
    concurrently would need a lock around ``ensure_token``.
    """

    def __init__(
        self,
        credentials: Credentials,
        session: AuthSession,
        cache: TokenCache,
    ) -> None:
        self._credentials = credentials
        self._session = session
        self._cache = cache
        self._state: TokenState | None = None

    @property
    def state(self) -> TokenState | None:
        return self._state

    @property
    def cache(self) -> TokenCache:
        return self._cache

    def ensure_token(self, force_refresh: bool = False) -> str:
        """Get a valid access token, loading or re-authorising if needed.

        Args:
            force_refresh: Skip the in-memory and cached token and authorise again.

        Returns:
            A bearer token string.
        """
        if not force_refresh:
            if self._state is not None and self._state.is_valid():
                return self._state.token

            cached = self._load_cached()
            if cached is not None and cached.is_valid():
                self._state = cached
                return cached.token

        state = self._session.authorize(self._credentials)
        self._state = state
        try:
            self._cache.save(state)
        except OSError as e:
            logger.warning(f"Failed to cache token at {self._cache.path}: {e}")
        return state.token

    def _load_cached(self) -> TokenState | None:
        try:
            return self._cache.load()
        except FileNotFoundError:
            logger.debug("No cached token")
        except (BadTokenCache, OSError) as e:
            logger.debug(f"Ignoring token cache: {e}")
        return None

    def get_status(self) -> TokenStatus:
        """Get the current token status without authorising."""
        state = self._state
        source = "memory"
        if state is None:
            state = self._load_cached()
            source = "cache"
        if state is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = int(time.time())
        is_expired = not state.is_valid(now)
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = state.expiry_time - now

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            source=source,
            expires_at=state.expires_at,
            seconds_remaining=seconds_remaining,
        )

    def forget(self) -> bool:
        """Drop the in-memory token and delete the cache file."""
        self._state = None
        return self._cache.clear()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._session.close()
