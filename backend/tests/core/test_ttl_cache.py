from threading import Thread

import pytest

from cinelog.core.ttl_cache import TTLCache
from tests.fixtures.tmdb import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(now=0.0)


def test_get_returns_fresh_value(clock: FakeClock):
    cache = TTLCache(clock=clock)
    cache.set("movie:550", {"id": 550}, ttl_seconds=60)

    clock.advance(59.9)

    assert cache.get("movie:550") == {"id": 550}


def test_get_misses_on_unknown_key(clock: FakeClock):
    cache = TTLCache(clock=clock)

    assert cache.get("movie:550") is None


def test_entry_expires_at_ttl_and_is_evicted_on_read(clock: FakeClock):
    cache = TTLCache(clock=clock)
    cache.set("genres", [{"id": 18}], ttl_seconds=60)

    clock.advance(60)

    # Still stored until something reads it
    assert "genres" in cache
    assert len(cache) == 1

    assert cache.get("genres") is None
    assert "genres" not in cache
    assert len(cache) == 0


def test_expired_entries_are_not_swept_without_reads(clock: FakeClock):
    cache = TTLCache(clock=clock)
    for i in range(5):
        cache.set(f"movie:{i}", i, ttl_seconds=1)

    clock.advance(10)

    assert len(cache) == 5
    assert cache.get("movie:0") is None
    assert len(cache) == 4


def test_set_overwrites_value_and_expiry(clock: FakeClock):
    cache = TTLCache(clock=clock)
    cache.set("search:fight club:1", "old", ttl_seconds=10)

    clock.advance(5)
    cache.set("search:fight club:1", "new", ttl_seconds=10)
    clock.advance(9)

    assert cache.get("search:fight club:1") == "new"


def test_keys_are_isolated(clock: FakeClock):
    cache = TTLCache(clock=clock)
    cache.set("search:matrix:1", "page one", ttl_seconds=60)
    cache.set("search:matrix:2", "page two", ttl_seconds=5)

    clock.advance(5)

    assert cache.get("search:matrix:1") == "page one"
    assert cache.get("search:matrix:2") is None


def test_zero_ttl_is_never_served(clock: FakeClock):
    cache = TTLCache(clock=clock)
    cache.set("languages", ["es"], ttl_seconds=0)

    assert cache.get("languages") is None


def test_delete_and_clear(clock: FakeClock):
    cache = TTLCache(clock=clock)
    cache.set("a", 1, ttl_seconds=60)
    cache.set("b", 2, ttl_seconds=60)

    cache.delete("a")
    cache.delete("missing")

    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()

    assert len(cache) == 0


def test_concurrent_writers_do_not_lose_entries():
    cache = TTLCache()

    def writer(offset: int) -> None:
        for i in range(200):
            cache.set(f"movie:{offset + i}", i, ttl_seconds=60)

    threads = [Thread(target=writer, args=(n * 1000,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 8 * 200
