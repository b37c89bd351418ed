"""
Log in and upload a movie with its image.

    MOVIE_API_URL=http://localhost:8000 python -m scripts.add_movie alice secret "Alien" "Ridley Scott" alien.png
"""

import argparse
import asyncio

from movie_client.logger import logger
from movie_client.main import Settings, create_client
from movie_client.page import ADD_MOVIE_PATH, ERROR_CONTAINER, LOGIN_PATH, MESSAGE_CONTAINER


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("user")
    parser.add_argument("password")
    parser.add_argument("title")
    parser.add_argument("author")
    parser.add_argument("image", help="path to the movie image")
    args = parser.parse_args()

    client = create_client(Settings.from_env(), LOGIN_PATH)
    async with client.session:
        response = await client.actions.login(args.user, args.password)
        if response is None or response.error:
            logger.error(f"could not log in as {args.user}")
            return

        page = client.open_page(ADD_MOVIE_PATH)
        await client.actions.add_movie(args.title, args.author, args.image)
        for element_id in (MESSAGE_CONTAINER, ERROR_CONTAINER):
            text = page.get_element(element_id).text
            if text:
                logger.info(f"{element_id}: {text}")


if __name__ == "__main__":
    asyncio.run(main())
