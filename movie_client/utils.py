"""
Miscelaneous utilities.
"""

import base64
import time
from functools import wraps
from typing import Callable

from movie_client.logger import logger

DATA_URL_PREFIX = "data:"


def timed(func) -> Callable:
    @wraps(func)
    async def timed_func(*args, **kwargs):
        init = time.perf_counter()
        out = await func(*args, **kwargs)
        end = time.perf_counter() - init
        logger.info(f"{func.__name__} finished in {1000 * end:.2f} ms")
        return out
    return timed_func


def to_data_url(data: bytes, media_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"{DATA_URL_PREFIX}{media_type};base64,{encoded}"


def from_data_url(data_url: str) -> bytes:
    """Inverse of `to_data_url`, only base64 payloads are supported."""
    if not data_url.startswith(DATA_URL_PREFIX):
        raise ValueError(f"not a data URL: {data_url[:32]!r}")
    header, _, payload = data_url.partition(",")
    if not header.endswith(";base64"):
        raise ValueError("data URL is not base64 encoded")
    return base64.b64decode(payload, validate=True)
