"""
Functions to interact with the movie catalog HTTP API.
"""

import asyncio
import json
from typing import Annotated, Any
from urllib.parse import quote

import aiohttp
from pydantic import Field, TypeAdapter, ValidationError

from movie_client.models import ActionResponse, MovieSummary, NewMovieDraft
from movie_client.utils import timed

# network unreachable, bad status, invalid JSON or unexpected shape
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, json.JSONDecodeError, ValidationError)

_movies_adapter = TypeAdapter(list[MovieSummary])
_bytes_adapter = TypeAdapter(list[Annotated[int, Field(ge=0, le=255)]])


def create_session(base_url: str, timeout: float = 10.0) -> aiohttp.ClientSession:
    # unsafe jar: the API is often served from a bare IP in local deployments
    return aiohttp.ClientSession(
        base_url=base_url,
        timeout=aiohttp.ClientTimeout(total=timeout),
        cookie_jar=aiohttp.CookieJar(unsafe=True),
    )


async def _get_json(session: aiohttp.ClientSession, path: str) -> Any:
    async with session.get(path) as response:
        response.raise_for_status()
        return await response.json(content_type=None)


async def _post_json(session: aiohttp.ClientSession, path: str, body: dict) -> ActionResponse:
    # error bodies come with 4xx/5xx statuses, so the status is not checked here
    async with session.post(path, json=body) as response:
        data = await response.json(content_type=None)
    return ActionResponse.model_validate(data)


@timed
async def get_all_movies(session: aiohttp.ClientSession) -> list[MovieSummary]:
    data = await _get_json(session, "/api/movies")
    return _movies_adapter.validate_python(data)


@timed
async def get_movies_by_owner(session: aiohttp.ClientSession, username: str) -> list[MovieSummary]:
    data = await _get_json(session, f"/api/movies/{quote(username, safe='')}")
    return _movies_adapter.validate_python(data)


async def get_thumbnail(session: aiohttp.ClientSession, image_ref: str) -> bytes:
    if not image_ref:
        raise ValueError("thumbnail requested for an empty image reference")
    data = await _get_json(session, f"/api/thumbnail/{quote(image_ref, safe='')}")
    return bytes(_bytes_adapter.validate_python(data))


async def create_user(session: aiohttp.ClientSession, name: str, password: str) -> ActionResponse:
    return await _post_json(session, "/api/users", {"name": name, "password": password})


async def login_user(session: aiohttp.ClientSession, name: str, password: str) -> ActionResponse:
    return await _post_json(session, "/api/login", {"name": name, "password": password})


async def logout_user(session: aiohttp.ClientSession) -> bool:
    async with session.post("/logout") as response:
        return 200 <= response.status < 300


@timed
async def upload_movie(session: aiohttp.ClientSession, draft: NewMovieDraft) -> ActionResponse:
    return await _post_json(session, "/api/add-movie", draft.to_payload())
