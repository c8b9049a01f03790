"""Process-local key/value cache with per-entry expiry."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

__all__ = [
    "CacheEntry",
    "TTLCache",
]


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    expires_at: float


class TTLCache:
    """
    Key/value store where every entry expires ``ttl_seconds`` after it was set.

    Expiry is checked lazily on read: an expired entry is removed the first
    time ``get`` sees it, and nothing sweeps the store in the background.
    There is no size limit, the key space is expected to stay small
    (``search:<term>:<page>``, ``movie:<id>``, ``genres``, ``languages``,
    ``collection:<name>``).

    Parameters:
        clock (Callable[[], float]): Returns the current time in seconds.
            Defaults to ``time.monotonic``; tests inject a fake clock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        """
        Store ``value`` under ``key``, replacing any existing entry.

        Parameters:
            key (str): The cache key.
            value (Any): The value to store, returned as-is by ``get``.
            ttl_seconds (float): Seconds until the entry expires.
        """
        entry = CacheEntry(
            key=key,
            value=value,
            expires_at=self._clock() + ttl_seconds,
        )
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str) -> Any | None:
        """
        Return the value stored under ``key`` if it has not expired yet.

        An expired entry is removed from the store and None is returned.

        Parameters:
            key (str): The cache key.
        Returns:
            Any | None: The cached value, or None on a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        # Inspection only, does not evict.
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
