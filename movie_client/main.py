import os
from typing import NamedTuple, Optional

import aiohttp
from yarl import URL

from movie_client.actions import MutationActions
from movie_client.api.catalog import create_session
from movie_client.gate import apply_visibility
from movie_client.images import DEFAULT_CACHE_TTL, ImageAssembler
from movie_client.logger import logger
from movie_client.movie_list import MovieListController
from movie_client.page import (DELETE_MOVIE_PATH, LOGIN_PATH, MOVIES_PATH,
                               Page, create_page)
from movie_client.session import CookieJarStore, SessionStore, current_username

API_URL = "http://localhost:8000"
REQUEST_TIMEOUT = 10.0


def origin_url(api_url: str) -> str:
    """The API is addressed by origin only, aiohttp sessions reject a base URL with a path."""
    url = URL(api_url)
    if not url.is_absolute() or url.path not in ("", "/") or url.query_string:
        raise ValueError(f"MOVIE_API_URL must be scheme://host[:port], got {api_url!r}")
    return str(url.origin())


class Settings(NamedTuple):
    api_url: str
    request_timeout: float
    thumbnail_cache_ttl: int

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=origin_url(os.environ.get("MOVIE_API_URL", API_URL)),
            request_timeout=float(os.environ.get("REQUEST_TIMEOUT", REQUEST_TIMEOUT)),
            thumbnail_cache_ttl=int(os.environ.get("THUMBNAIL_CACHE_TTL", DEFAULT_CACHE_TTL)),
        )


class CatalogClient:
    """Everything one page needs: its session store, list controller and actions."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        page: Page,
        store: Optional[SessionStore] = None,
        thumbnail_cache_ttl: int = DEFAULT_CACHE_TTL,
    ):
        self.session = session
        self.page = page
        self.store = store if store is not None else CookieJarStore(session.cookie_jar)
        self.assembler = ImageAssembler(session, cache_ttl=thumbnail_cache_ttl)
        self.movie_list = MovieListController(session, page, self.assembler)
        self.actions = MutationActions(session, page, self.store)

    def open_page(self, path: str) -> Page:
        """Switch to a freshly laid out page, keeping the session and thumbnail cache."""
        self.page = create_page(path)
        self.movie_list = MovieListController(self.session, self.page, self.assembler)
        self.actions = MutationActions(self.session, self.page, self.store)
        return self.page


def create_client(settings: Optional[Settings] = None, path: str = MOVIES_PATH) -> CatalogClient:
    settings = settings or Settings.from_env()
    logger.info(f"connecting to movie catalog at {settings.api_url}")
    session = create_session(settings.api_url, timeout=settings.request_timeout)
    return CatalogClient(session, create_page(path), thumbnail_cache_ttl=settings.thumbnail_cache_ttl)


async def load_movies_page(client: CatalogClient) -> bool:
    apply_visibility(client.page, client.store)
    return await client.movie_list.load_list()


async def load_my_movies_page(client: CatalogClient) -> bool:
    apply_visibility(client.page, client.store)
    username = current_username(client.store)
    if username is None:
        client.page.navigate(LOGIN_PATH)
        return False
    return await client.movie_list.load_list(owner=username)


async def load_page(client: CatalogClient) -> bool:
    """Page-load handler dispatch; pages without a list only get their controls set."""
    if client.page.path == MOVIES_PATH:
        return await load_movies_page(client)
    if client.page.path == DELETE_MOVIE_PATH:
        return await load_my_movies_page(client)
    apply_visibility(client.page, client.store)
    return True
