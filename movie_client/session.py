"""
Session state kept on the client side.

The server sets a `username` cookie on successful login or registration.
Components read it through a `SessionStore` so tests can hand in a plain
in-memory store instead of a live cookie jar.
"""

from typing import Optional, Protocol

from aiohttp.abc import AbstractCookieJar

from movie_client.logger import logger

USERNAME_KEY = "username"


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def clear(self) -> None:
        ...


class CookieJarStore:
    """Session entries held in the cookie jar of an aiohttp session."""

    def __init__(self, cookie_jar: AbstractCookieJar):
        self.cookie_jar = cookie_jar

    def get(self, key: str) -> Optional[str]:
        for morsel in self.cookie_jar:
            if morsel.key == key:
                return morsel.value
        return None

    def clear(self) -> None:
        self.cookie_jar.clear()


class MemoryStore:
    def __init__(self, entries: Optional[dict[str, str]] = None):
        self.entries = dict(entries or {})

    @classmethod
    def from_cookie_header(cls, header: str) -> "MemoryStore":
        """Parse a `name=value; other=value` string, skipping malformed pairs."""
        entries = {}
        for pair in header.split(";"):
            name, sep, value = pair.strip().partition("=")
            if sep and name:
                entries[name] = value
        return cls(entries)

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def clear(self) -> None:
        self.entries.clear()


def current_username(store: SessionStore) -> Optional[str]:
    """Username of the logged in user, or None when there is no usable entry."""
    try:
        username = store.get(USERNAME_KEY)
    except Exception as exc:
        logger.debug(f"could not read session entry: {exc}")
        return None
    if not isinstance(username, str):
        return None
    username = username.strip().strip('"')
    return username or None
