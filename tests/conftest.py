import asyncio
import uuid

import pytest
from aiohttp import web

from movie_client.api.catalog import create_session
from movie_client.page import create_page

PNG_BYTES = bytes([137, 80, 78, 71, 13, 10, 26, 10, 0, 0, 0, 13, 73, 72, 68, 82, 255])


class FakeCatalogApi:
    """In-memory stand-in for the catalog API, recording every request it gets."""

    def __init__(self):
        self.users = {"alice": "secret"}
        self.movies = []
        self.thumbnails = {}
        self.thumbnail_delays = {}
        self.failing_thumbnails = set()
        self.malformed_thumbnails = set()
        self.invalid_json_thumbnails = set()
        self.fail_movies = False
        self.logout_status = 200
        self.login_error = "Wrong username or password"
        self.requests = []

    def add_movie(self, title, author, owner="alice", image=None, avg_rating=0.0, num_ratings=0):
        movie_id = uuid.uuid4().hex[:24]
        image_url = ""
        if image is not None:
            image_url = f"{uuid.uuid4()}.png"
            self.thumbnails[image_url] = image
        self.movies.append(
            {
                "id": movie_id,
                "title": title,
                "author": author,
                "image_url": image_url,
                "avg_rating": avg_rating,
                "num_ratings": num_ratings,
                "owner": owner,
            }
        )
        return self.movies[-1]

    def thumbnail_requests(self):
        return [path for _, path in self.requests if path.startswith("/api/thumbnail/")]

    @staticmethod
    def _public(movie):
        return {key: value for key, value in movie.items() if key != "owner"}

    @staticmethod
    def _logged_in(response, name):
        response.set_cookie("username", name, path="/")
        response.set_cookie("id", str(uuid.uuid4()), path="/")
        return response

    async def create_user(self, request):
        body = await request.json()
        if body["name"] in self.users:
            return web.json_response({"error": "Username alredy exists"}, status=401)
        self.users[body["name"]] = body["password"]
        return self._logged_in(web.json_response({"redirectPath": "/movies"}), body["name"])

    async def login(self, request):
        body = await request.json()
        if self.users.get(body["name"]) != body["password"]:
            return web.json_response({"error": self.login_error}, status=401)
        return self._logged_in(web.json_response({"redirectPath": "/movies"}), body["name"])

    async def logout(self, request):
        return web.Response(text="", status=self.logout_status)

    async def get_movies(self, request):
        if self.fail_movies:
            return web.json_response({"error": "Database error"}, status=500)
        return web.json_response([self._public(movie) for movie in self.movies])

    async def get_movies_by_owner(self, request):
        owner = request.match_info["username"]
        if request.cookies.get("username") != owner:
            return web.json_response({"error": "Unauthorized"}, status=401)
        return web.json_response(
            [self._public(movie) for movie in self.movies if movie["owner"] == owner]
        )

    async def add_movie_handler(self, request):
        owner = request.cookies.get("username")
        if owner not in self.users:
            return web.json_response({"error": "Unauthorized"}, status=401)
        body = await request.json()
        for movie in self.movies:
            if (movie["title"], movie["author"]) == (body["title"], body["author"]):
                return web.json_response({"error": "Movie already exists"}, status=409)
        self.add_movie(body["title"], body["author"], owner=owner, image=bytes(body["image"]))
        return web.json_response({"message": "Movie added"})

    async def get_thumbnail(self, request):
        image_url = request.match_info["image_url"]
        await asyncio.sleep(self.thumbnail_delays.get(image_url, 0))
        if image_url in self.failing_thumbnails or image_url not in self.thumbnails:
            return web.json_response({"error": "Storage error"}, status=500)
        if image_url in self.invalid_json_thumbnails:
            return web.Response(text="[137, 80,", content_type="application/json")
        if image_url in self.malformed_thumbnails:
            return web.json_response({"bytes": "nope"})
        return web.json_response(list(self.thumbnails[image_url]))

    def app(self) -> web.Application:
        @web.middleware
        async def record_requests(request, handler):
            self.requests.append((request.method, request.path))
            return await handler(request)

        app = web.Application(middlewares=[record_requests])
        app.router.add_post("/api/users", self.create_user)
        app.router.add_post("/api/login", self.login)
        app.router.add_post("/logout", self.logout)
        app.router.add_get("/api/movies", self.get_movies)
        app.router.add_get("/api/movies/{username}", self.get_movies_by_owner)
        app.router.add_post("/api/add-movie", self.add_movie_handler)
        app.router.add_get("/api/thumbnail/{image_url}", self.get_thumbnail)
        return app


@pytest.fixture
def api():
    return FakeCatalogApi()


@pytest.fixture
async def server(aiohttp_server, api):
    return await aiohttp_server(api.app())


@pytest.fixture
async def session(server):
    async with create_session(f"http://{server.host}:{server.port}") as session:
        yield session


@pytest.fixture
async def unreachable_session():
    # nothing listens on port 1, connections are refused
    async with create_session("http://127.0.0.1:1", timeout=2.0) as session:
        yield session


@pytest.fixture
def movies_page():
    return create_page("/movies")
