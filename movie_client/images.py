"""
Turns server-side image references into displayable data URLs.
"""

from typing import Optional

import aiohttp
from aiocache import SimpleMemoryCache

from movie_client.api.catalog import TRANSPORT_ERRORS, get_thumbnail
from movie_client.logger import logger
from movie_client.models import EMPTY_IMAGE, THUMBNAIL_MEDIA_TYPE, DisplayableImage

DEFAULT_CACHE_TTL = 600


class ImageAssembler:
    def __init__(
        self,
        session: aiohttp.ClientSession,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        cache: Optional[SimpleMemoryCache] = None,
    ):
        self.session = session
        self.cache_ttl = cache_ttl
        self.cache = cache if cache is not None else SimpleMemoryCache()

    async def resolve(self, image_ref: str) -> DisplayableImage:
        """
        Fetch the thumbnail for `image_ref` and wrap it as a data URL.

        Never raises: an empty reference, a failed request or a malformed
        payload all give the empty image, and only successes are cached.
        """
        if not image_ref:
            return EMPTY_IMAGE

        image = await self.cache.get(image_ref)
        if image is not None:
            return image

        try:
            data = await get_thumbnail(self.session, image_ref)
        except TRANSPORT_ERRORS as exc:
            logger.error(f"error fetching thumbnail {image_ref}: {exc!r}")
            return EMPTY_IMAGE

        image = DisplayableImage.from_bytes(data, THUMBNAIL_MEDIA_TYPE)
        await self.cache.set(image_ref, image, ttl=self.cache_ttl)
        return image
