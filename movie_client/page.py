"""
In-process model of the pages served by the catalog site.

Only what the client logic touches is modelled: elements addressed by id,
their text, visibility, input value, image source and inner HTML, plus the
location the page navigated to and any alerts it raised.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from movie_client.logger import logger

LANDING_PATH = "/"
MOVIES_PATH = "/movies"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
ADD_MOVIE_PATH = "/add-movie"
DELETE_MOVIE_PATH = "/delete-movie"

SHOWN = "inline-block"
HIDDEN = "none"

USERNAME_DISPLAY = "username-display"
LOGOUT_BUTTON = "logout-button"
MOVIES_BUTTON = "movies-button"
LOGIN_BUTTON = "login-button"
ADD_MOVIES_BUTTON = "add-movies-button"
MOVIES_LIST = "movies-list"
MESSAGE_CONTAINER = "message-container"
ERROR_CONTAINER = "error-container"
PREVIEW_IMAGE = "preview-image"

NAVIGATION = [USERNAME_DISPLAY, LOGOUT_BUTTON, MOVIES_BUTTON, LOGIN_BUTTON, ADD_MOVIES_BUTTON]

PAGE_LAYOUTS = {
    MOVIES_PATH: [*NAVIGATION, MOVIES_LIST],
    DELETE_MOVIE_PATH: [*NAVIGATION, MOVIES_LIST],
    LOGIN_PATH: [*NAVIGATION, "username", "password", ERROR_CONTAINER],
    REGISTER_PATH: [*NAVIGATION, "name", "password", "confirmPassword", ERROR_CONTAINER],
    ADD_MOVIE_PATH: [
        *NAVIGATION,
        "movie-title",
        "movie-author",
        "movie-image",
        PREVIEW_IMAGE,
        MESSAGE_CONTAINER,
        ERROR_CONTAINER,
    ],
}


def rating_input_id(movie_id: str) -> str:
    return f"rating_{movie_id}"


@dataclass
class Element:
    element_id: str
    text: str = ""
    display: str = ""
    value: str = ""
    src: str = ""
    html: str = ""
    children: list = field(default_factory=list)

    def clear(self) -> None:
        self.text = ""
        self.html = ""
        self.children.clear()


class Page:
    def __init__(self, path: str, element_ids: Iterable[str] = ()):
        self.path = path
        self.elements = {element_id: Element(element_id) for element_id in element_ids}
        self.location: Optional[str] = None
        self.alerts: list[str] = []

    def get_element(self, element_id: str) -> Optional[Element]:
        return self.elements.get(element_id)

    def add_element(self, element_id: str, **attrs) -> Element:
        element = Element(element_id, **attrs)
        self.elements[element_id] = element
        return element

    def remove_element(self, element_id: str) -> None:
        self.elements.pop(element_id, None)

    def set_text(self, element_id: str, text: str) -> None:
        element = self.get_element(element_id)
        if element is None:
            logger.debug(f"no element {element_id} on page {self.path}")
            return
        element.text = text

    def navigate(self, path: str) -> None:
        logger.info(f"navigating from {self.path} to {path}")
        self.location = path

    def alert(self, message: str) -> None:
        logger.info(f"alert on {self.path}: {message}")
        self.alerts.append(message)


def create_page(path: str) -> Page:
    return Page(path, PAGE_LAYOUTS.get(path, NAVIGATION))
