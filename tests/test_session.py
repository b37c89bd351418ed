from aiohttp import CookieJar
from yarl import URL

from movie_client.session import CookieJarStore, MemoryStore, current_username


class BrokenStore:
    def get(self, key):
        raise RuntimeError("corrupt store")

    def clear(self):
        pass


def test_current_username_present():
    assert current_username(MemoryStore({"username": "alice"})) == "alice"


def test_current_username_absent():
    assert current_username(MemoryStore()) is None


def test_current_username_empty_value():
    assert current_username(MemoryStore({"username": ""})) is None


def test_current_username_quoted_value():
    assert current_username(MemoryStore({"username": '"alice"'})) == "alice"


def test_current_username_never_raises():
    assert current_username(BrokenStore()) is None


def test_current_username_non_string_entry():
    assert current_username(MemoryStore({"username": 42})) is None


def test_cookie_header_parsing():
    store = MemoryStore.from_cookie_header("id=1234; username=bob")
    assert current_username(store) == "bob"
    assert store.get("id") == "1234"


def test_cookie_header_skips_malformed_pairs():
    store = MemoryStore.from_cookie_header("garbage; =nothing;; username=carol")
    assert store.entries == {"username": "carol"}


def test_cookie_header_without_username():
    assert current_username(MemoryStore.from_cookie_header("id=1234")) is None


def test_memory_store_clear():
    store = MemoryStore({"username": "alice", "id": "1"})
    store.clear()
    assert store.entries == {}
    assert current_username(store) is None


async def test_cookie_jar_store():
    jar = CookieJar()
    jar.update_cookies({"username": "dave", "id": "42"}, URL("http://example.com/"))
    store = CookieJarStore(jar)
    assert current_username(store) == "dave"
    store.clear()
    assert current_username(store) is None
    assert len(jar) == 0
