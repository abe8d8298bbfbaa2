"""Tests for utils/cookies.py — pure functions, no mocking needed."""
from spotify_library.utils.cookies import build_cookie_header, find_cookie, find_fragment


# ── find_fragment ────────────────────────────────────────────────────

def test_fragment_between_separators():
    assert find_fragment("a=1&access_token=tok&b=2", "access_token", "&") == "tok"


def test_fragment_runs_to_end_without_separator():
    loc = "http://localhost/#token_type=Bearer&expires_in=3600"
    assert find_fragment(loc, "expires_in", "&") == "3600"


def test_fragment_missing_key():
    assert find_fragment("a=1&b=2", "access_token", "&") is None


def test_fragment_uses_first_occurrence():
    assert find_fragment("k=first&k=second", "k", "&") == "first"


def test_fragment_empty_value():
    assert find_fragment("k=&x=1", "k", "&") == ""


def test_fragment_is_a_flat_scan():
    # The key matches inside a longer name; no structured parsing is done
    assert find_fragment("my_token=abc&token=xyz", "token", "&") == "abc"


def test_fragment_key_at_end_of_string():
    assert find_fragment("a=1&k", "k", "&") == ""


# ── find_cookie ──────────────────────────────────────────────────────

def test_cookie_value_extracted():
    headers = [
        "__Host-device_id=xyz; Path=/; Secure",
        "csrf_token=AQBc123; Version=1; Domain=accounts.example.com; Path=/",
    ]
    assert find_cookie(headers, "csrf_token") == "AQBc123"


def test_cookie_without_attributes():
    assert find_cookie(["sp_dc=dc-value"], "sp_dc") == "dc-value"


def test_cookie_absent():
    assert find_cookie(["sp_ac=1; Path=/"], "sp_dc") is None


def test_cookie_empty_headers():
    assert find_cookie([], "csrf_token") is None


def test_cookie_first_matching_entry_wins():
    headers = ["csrf_token=first; Path=/", "csrf_token=second; Path=/"]
    assert find_cookie(headers, "csrf_token") == "first"


def test_cookie_name_must_start_the_entry():
    assert find_cookie(["other=1; csrf_token=hidden"], "csrf_token") is None


# ── build_cookie_header ──────────────────────────────────────────────

def test_build_cookie_header():
    assert build_cookie_header([("a", "1"), ("b", "2")]) == "a=1; b=2"


def test_build_cookie_header_empty():
    assert build_cookie_header([]) == ""
