"""
User-triggered actions: account forms, logout, movie upload, delete and rate.

Each action is one round trip. Validation problems are shown before any
request is made, `error` fields of responses go to the error region, and
transport failures are only logged.
"""

import asyncio
from pathlib import Path
from typing import Optional, Union

import aiohttp
from pydantic import ValidationError

from movie_client.api.catalog import (TRANSPORT_ERRORS, create_user,
                                      login_user, logout_user, upload_movie)
from movie_client.logger import logger
from movie_client.models import (EMPTY_IMAGE, ActionResponse, DisplayableImage,
                                 NewMovieDraft, RatingSubmission)
from movie_client.page import (ERROR_CONTAINER, LANDING_PATH, LOGIN_PATH,
                               MESSAGE_CONTAINER, PREVIEW_IMAGE, Page,
                               rating_input_id)
from movie_client.session import SessionStore

PASSWORD_MISMATCH = "Passwords do not match"
MISSING_IMAGE = "Error failed to get image"

ImageFile = Optional[Union[str, Path]]


async def read_image_file(image_file: Union[str, Path]) -> bytes:
    return await asyncio.to_thread(Path(image_file).read_bytes)


class MutationActions:
    def __init__(self, session: aiohttp.ClientSession, page: Page, store: SessionStore):
        self.session = session
        self.page = page
        self.store = store

    def clean_interface(self) -> None:
        self.page.set_text(MESSAGE_CONTAINER, "")
        self.page.set_text(ERROR_CONTAINER, "")

    def _follow_redirect_or_show_error(self, response: ActionResponse) -> None:
        if response.redirect_path:
            self.page.navigate(response.redirect_path)
        elif response.error:
            self.page.set_text(ERROR_CONTAINER, response.error)

    async def register(self, name: str, password: str, confirm_password: str) -> Optional[ActionResponse]:
        if password != confirm_password:
            self.page.alert(PASSWORD_MISMATCH)
            return None

        try:
            response = await create_user(self.session, name, password)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"registration of {name} failed: {exc!r}")
            return None
        self._follow_redirect_or_show_error(response)
        return response

    async def login(self, name: str, password: str) -> Optional[ActionResponse]:
        try:
            response = await login_user(self.session, name, password)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"login of {name} failed: {exc!r}")
            return None
        self._follow_redirect_or_show_error(response)
        return response

    async def logout(self) -> str:
        """Forget the local session, notify the server and leave the page.

        Goes to the login page when the server acknowledged the logout and to
        the landing page otherwise. Returns the path navigated to.
        """
        self.store.clear()
        try:
            acknowledged = await logout_user(self.session)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"logout request failed: {exc!r}")
            acknowledged = False

        target = LOGIN_PATH if acknowledged else LANDING_PATH
        self.page.navigate(target)
        return target

    async def add_movie(self, title: str, author: str, image_file: ImageFile) -> Optional[ActionResponse]:
        self.clean_interface()
        if not image_file:
            self.page.set_text(ERROR_CONTAINER, MISSING_IMAGE)
            return None

        try:
            image = await read_image_file(image_file)
        except OSError as exc:
            logger.error(f"could not read image file {image_file}: {exc!r}")
            self.page.set_text(ERROR_CONTAINER, MISSING_IMAGE)
            return None

        draft = NewMovieDraft(title=title, author=author, image=image)
        try:
            response = await upload_movie(self.session, draft)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"error adding movie {title}: {exc!r}")
            return None

        if response.message:
            self.page.set_text(MESSAGE_CONTAINER, response.message)
        elif response.error:
            self.page.set_text(ERROR_CONTAINER, response.error)
        return response

    async def preview_image(self, image_file: ImageFile) -> DisplayableImage:
        preview = self.page.get_element(PREVIEW_IMAGE)
        image = EMPTY_IMAGE
        if image_file:
            try:
                data = await read_image_file(image_file)
                image = DisplayableImage.from_bytes(data, _guess_media_type(image_file))
            except OSError as exc:
                logger.error(f"could not preview {image_file}: {exc!r}")
        if preview is not None:
            preview.src = image.data_url
        return image

    def delete_movie(self, movie_id: str) -> None:
        # TODO: send the deletion once the API exposes a per-movie delete route
        logger.info(f"movie {movie_id} will be deleted")

    def submit_rating(self, movie_id: str) -> Optional[RatingSubmission]:
        rating_input = self.page.get_element(rating_input_id(movie_id))
        if rating_input is None:
            logger.warning(f"no rating input for movie {movie_id}")
            return None

        try:
            submission = RatingSubmission(movie_id=movie_id, rating=rating_input.value)
        except ValidationError as exc:
            logger.warning(f"invalid rating {rating_input.value!r} for movie {movie_id}: {exc}")
            return None
        # TODO: post the submission once the API defines a rating route
        logger.info(f"movie {submission.movie_id} rated {submission.rating}")
        return submission


def _guess_media_type(image_file: Union[str, Path]) -> str:
    suffix = Path(image_file).suffix.lower()
    return {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".gif": "image/gif",
        ".webp": "image/webp",
    }.get(suffix, "image/png")
