"""
Loading and rendering of movie lists.

One collection request is followed by one thumbnail task per movie. Rows
are appended in completion order (first completed, first rendered), so a
slow or failing thumbnail never holds back the other rows.
"""

import asyncio
from typing import NamedTuple, Optional

import aiohttp

from movie_client.api.catalog import (TRANSPORT_ERRORS, get_all_movies,
                                      get_movies_by_owner)
from movie_client.images import ImageAssembler
from movie_client.logger import logger
from movie_client.models import DisplayableImage, MovieSummary
from movie_client.page import MOVIES_LIST, Page, rating_input_id
from movie_client.render import render_row
from movie_client.utils import timed


class RenderedRow(NamedTuple):
    movie: MovieSummary
    image: DisplayableImage
    html: str


class MovieListController:
    def __init__(self, session: aiohttp.ClientSession, page: Page, assembler: ImageAssembler):
        self.session = session
        self.page = page
        self.assembler = assembler
        self._render_lock: Optional[asyncio.Lock] = None

    async def _fetch(self, owner: Optional[str]) -> list[MovieSummary]:
        if owner is None:
            return await get_all_movies(self.session)
        return await get_movies_by_owner(self.session, owner)

    async def _assemble(self, movie: MovieSummary) -> tuple[MovieSummary, DisplayableImage]:
        return movie, await self.assembler.resolve(movie.image_ref)

    @timed
    async def load_list(self, owner: Optional[str] = None) -> bool:
        """
        Replace the list container with the movies of `owner`, or all movies.

        Returns False, leaving the container as it was, when the collection
        could not be fetched or the page has no list container.
        """
        # created on first use so it belongs to the running loop
        if self._render_lock is None:
            self._render_lock = asyncio.Lock()
        async with self._render_lock:
            container = self.page.get_element(MOVIES_LIST)
            if container is None:
                logger.warning(f"page {self.page.path} has no {MOVIES_LIST} element")
                return False

            try:
                movies = await self._fetch(owner)
            except TRANSPORT_ERRORS as exc:
                logger.error(f"error fetching movies: {exc!r}")
                return False

            self._clear_rows(container)
            tasks = [asyncio.create_task(self._assemble(movie)) for movie in movies]
            for next_done in asyncio.as_completed(tasks):
                movie, image = await next_done
                self._append_row(container, movie, image, owned=owner is not None)

        scope = "all users" if owner is None else owner
        logger.info(f"rendered {len(movies)} movies of {scope}")
        return True

    def _clear_rows(self, container) -> None:
        for row in container.children:
            self.page.remove_element(rating_input_id(row.movie.id))
        container.clear()

    def _append_row(self, container, movie: MovieSummary, image: DisplayableImage, owned: bool) -> None:
        html = render_row(movie, image, owned=owned)
        container.children.append(RenderedRow(movie, image, html))
        container.html += html
        if not owned:
            self.page.add_element(rating_input_id(movie.id))
