"""Per-category LRU caches with time-to-live expiry."""

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from cachetools import TTLCache

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUBJECT = "subject"
AUTHOR = "author"
WORK = "work"
RATING = "rating"
RESULT = "result"

DEFAULT_TTLS: dict[str, float] = {
    SUBJECT: 6 * 60 * 60,
    AUTHOR: 12 * 60 * 60,
    WORK: 24 * 60 * 60,
    RATING: 24 * 60 * 60,
    RESULT: 10 * 60,
}


class TTLCacheStore:
    """
    Cache keyed by ``(category, key)`` where each category has its own TTL.

    An entry written at time T is served for reads strictly before T + ttl
    and is treated as absent from T + ttl on. Each category is capped at
    ``max_entries`` and evicts least-recently-used entries beyond that.
    A missing value is reported as ``None``; storing ``None`` is therefore
    indistinguishable from a miss.
    """

    def __init__(
        self,
        ttls: Mapping[str, float] | None = None,
        max_entries: int = 2048,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttls = dict(ttls or DEFAULT_TTLS)
        self._stores: dict[str, TTLCache] = {
            category: TTLCache(maxsize=max_entries, ttl=ttl, timer=clock)
            for category, ttl in self._ttls.items()
        }

    def _store(self, category: str) -> TTLCache:
        try:
            return self._stores[category]
        except KeyError:
            raise KeyError(f"Unknown cache category: {category}") from None

    def get(self, category: str, key: str) -> Any | None:
        store = self._store(category)
        # drop stale entries before reading
        store.expire()
        return store.get(key)

    def set(self, category: str, key: str, value: T) -> T:
        self._store(category)[key] = value
        return value

    async def get_or_set(
        self, category: str, key: str, factory: Callable[[], Awaitable[T]]
    ) -> T:
        """Return the cached value or compute, store and return it."""
        hit = self.get(category, key)
        if hit is not None:
            return hit
        logger.debug("Cache miss %s:%s", category, key)
        return self.set(category, key, await factory())

