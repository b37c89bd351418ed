from movie_client.page import (ADD_MOVIES_BUTTON, HIDDEN, LOGIN_BUTTON,
                               LOGOUT_BUTTON, MOVIES_BUTTON, SHOWN,
                               USERNAME_DISPLAY, Page)
from movie_client.session import SessionStore, current_username

LOGGED_IN_CONTROLS = [LOGOUT_BUTTON, MOVIES_BUTTON, ADD_MOVIES_BUTTON]


def apply_visibility(page: Page, store: SessionStore) -> None:
    """Show the controls matching the session state, skipping missing elements."""
    username = current_username(store)
    logged_in = username is not None

    label = page.get_element(USERNAME_DISPLAY)
    if label is not None:
        label.text = f"Welcome, {username}!" if logged_in else ""
        label.display = SHOWN if logged_in else HIDDEN

    for element_id in LOGGED_IN_CONTROLS:
        control = page.get_element(element_id)
        if control is not None:
            control.display = SHOWN if logged_in else HIDDEN

    login_button = page.get_element(LOGIN_BUTTON)
    if login_button is not None:
        login_button.display = HIDDEN if logged_in else SHOWN
