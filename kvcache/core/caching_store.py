"""Caching decorator for key-value stores.

Wraps any KeyValueStore with a Cache. Reads are served from the cache when
possible and fall through to the store on a miss; writes go to the store
first and then to the cache; clear empties both.
"""

import logging
from typing import Callable, List, Optional, Tuple

from kvcache.domain.exceptions import ConfigurationError, NoSuchKeyError
from kvcache.domain.interfaces.cache import Cache, ClearableCache, FlushableCache
from kvcache.domain.interfaces.store import KeyValueStore
from kvcache.domain.models.common import NO_EXPIRY, Key, KeyList, Ttl, Value, ValueMap

logger = logging.getLogger(__name__)


class CachingStore(KeyValueStore):
    """A KeyValueStore decorator that adds a cache layer in front of a store.

    The inner store stays authoritative. The cache only ever holds values the
    store returned or accepted, but it is not told about changes made to the
    store behind the decorator's back: such entries stay stale until they
    expire or are evicted.

    A hit is decided by `contains` and read by a separate `fetch`. An entry
    that expires between the two calls is returned as whatever the cache's
    `fetch` yields for a missing key (None for the bundled caches).
    """

    def __init__(self, store: KeyValueStore, cache: Cache, ttl: int = NO_EXPIRY):
        """Initializes the decorator.

        Args:
            store: The cached store.
            cache: The cache. Must be a ClearableCache or a FlushableCache.
            ttl: Time-to-live for cache entries in seconds. 0 means cache
                entries never expire.

        Raises:
            ConfigurationError: If the cache cannot be cleared or ttl is negative.
        """
        if isinstance(cache, ClearableCache):
            clear_cache: Callable[[], None] = cache.clear_all
        elif isinstance(cache, FlushableCache):
            clear_cache = cache.flush_all
        else:
            raise ConfigurationError(
                "The cache must either implement ClearableCache or FlushableCache. "
                f"Got: {type(cache).__name__}"
            )

        if ttl < 0:
            raise ConfigurationError(f"The ttl must be 0 or greater. Got: {ttl}")

        self._store = store
        self._cache = cache
        self._ttl = Ttl(ttl)
        self._clear_cache = clear_cache

        logger.debug(f"CachingStore initialized. store={type(store).__name__}, cache={type(cache).__name__}, ttl={ttl}s")

    @property
    def ttl(self) -> Ttl:
        return self._ttl

    def set(self, key: Key, value: Value) -> None:
        self._store.set(key, value)
        self._cache.save(key, value, self._ttl)

    def get(self, key: Key, default: Optional[Value] = None) -> Value:
        if self._cache.contains(key):
            logger.debug(f"Cache hit for key: {key!r}")
            return self._cache.fetch(key)

        try:
            value = self._store.get_or_fail(key)
        except NoSuchKeyError:
            # Negative results are never cached
            logger.debug(f"Key {key!r} not found in store, returning default")
            return default

        self._cache.save(key, value, self._ttl)
        logger.debug(f"Cached value for key {key!r} after store read")

        return value

    def get_or_fail(self, key: Key) -> Value:
        if self._cache.contains(key):
            logger.debug(f"Cache hit for key: {key!r}")
            return self._cache.fetch(key)

        value = self._store.get_or_fail(key)

        self._cache.save(key, value, self._ttl)
        logger.debug(f"Cached value for key {key!r} after store read")

        return value

    def get_multiple(self, keys: KeyList, default: Optional[Value] = None) -> ValueMap:
        keys = list(keys)
        hits, misses = self._partition(keys)

        fetched = self._store.get_multiple(misses, default) if misses else {}

        # Not written back: a defaulted key is indistinguishable from a stored one
        merged = {**fetched, **hits}
        return {key: merged[key] for key in keys}

    def get_multiple_or_fail(self, keys: KeyList) -> ValueMap:
        keys = list(keys)
        hits, misses = self._partition(keys)

        fetched = self._store.get_multiple_or_fail(misses) if misses else {}

        for key in misses:
            self._cache.save(key, fetched[key], self._ttl)
        if misses:
            logger.debug(f"Cached {len(misses)} value(s) after batch store read")

        merged = {**fetched, **hits}
        return {key: merged[key] for key in keys}

    def remove(self, key: Key) -> bool:
        removed = self._store.remove(key)
        self._cache.delete(key)

        return removed

    def exists(self, key: Key) -> bool:
        if self._cache.contains(key):
            return True

        return self._store.exists(key)

    def clear(self) -> None:
        self._store.clear()
        self._clear_cache()
        logger.info("Cleared store and cache.")

    def keys(self) -> List[Key]:
        return self._store.keys()

    def _partition(self, keys: List[Key]) -> Tuple[ValueMap, List[Key]]:
        """Splits keys into cached values and keys that must be read from the store."""
        hits: ValueMap = {}
        misses: List[Key] = []

        for key in dict.fromkeys(keys):
            if self._cache.contains(key):
                hits[key] = self._cache.fetch(key)
            else:
                misses.append(key)

        logger.debug(f"Batch read: {len(hits)} cache hit(s), {len(misses)} miss(es)")
        return hits, misses
