"""Value extraction from Set-Cookie headers and redirect fragments."""

from __future__ import annotations

from typing import Iterable


def find_fragment(text: str, key: str, separator: str) -> str | None:
    """Return the value following the first ``key=`` in ``text``.

    This is a flat scan, not a cookie or query parser: the value runs from the
    character after ``key=`` up to the next ``separator``, or to the end of the
    string when no separator follows.
    """
    index = text.find(key)
    if index < 0:
        return None

    start = index + len(key) + 1  # skip "="
    end = text.find(separator, start)
    if end < 0:
        end = len(text)
    return text[start:end]


def find_cookie(set_cookie_headers: Iterable[str], name: str) -> str | None:
    """Find a cookie value in a list of raw Set-Cookie header values."""
    for header in set_cookie_headers:
        if header.startswith(name):
            return find_fragment(header, name, ";")
    return None


def build_cookie_header(pairs: Iterable[tuple[str, str]]) -> str:
    """Assemble a Cookie request header from name/value pairs."""
    return "; ".join(f"{name}={value}" for name, value in pairs)
