"""
Render a movie list from a running catalog API and print it.

    MOVIE_API_URL=http://localhost:8000 python -m scripts.list_movies --user alice --password secret --mine
"""

import argparse
import asyncio

from movie_client.main import Settings, create_client, load_page
from movie_client.page import DELETE_MOVIE_PATH, MOVIES_LIST, MOVIES_PATH


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--user", help="log in as this user first")
    parser.add_argument("--password", default="")
    parser.add_argument("--mine", action="store_true", help="list only movies owned by --user")
    args = parser.parse_args()

    settings = Settings.from_env()
    client = create_client(settings, DELETE_MOVIE_PATH if args.mine else MOVIES_PATH)
    async with client.session:
        if args.user:
            await client.actions.login(args.user, args.password)
        if not await load_page(client):
            return

        for row in client.page.get_element(MOVIES_LIST).children:
            movie = row.movie
            image = "no image" if row.image.is_empty else f"{len(row.image.decode())} byte image"
            print(
                f"{movie.id} | {movie.title} by {movie.author} | "
                f"{movie.avg_rating:.1f} ({movie.num_ratings} ratings) | {image}"
            )


if __name__ == "__main__":
    asyncio.run(main())
