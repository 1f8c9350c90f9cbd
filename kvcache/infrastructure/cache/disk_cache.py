"""Cache adapter over a diskcache directory.

Survives process restarts, which makes it the cache used by the command
line tool. Expiry and eviction are handled by diskcache itself.
"""

import logging
from pathlib import Path
from typing import Union

import diskcache as dc

from kvcache.domain.interfaces.cache import FlushableCache
from kvcache.domain.models.common import Key, Ttl, Value

logger = logging.getLogger(__name__)


class DiskCacheAdapter(FlushableCache):
    """Exposes a diskcache.Cache through the Cache interface."""

    def __init__(self, directory: Union[str, Path], timeout: float = 1):
        self.directory = Path(directory)
        self._cache = dc.Cache(str(self.directory), timeout=timeout)
        logger.info(f"Initialized disk cache at: {self._cache.directory}")

    def contains(self, key: Key) -> bool:
        return key in self._cache

    def fetch(self, key: Key) -> Value:
        return self._cache.get(key)

    def save(self, key: Key, value: Value, ttl: Ttl) -> None:
        # diskcache uses None for entries that never expire
        self._cache.set(key, value, expire=ttl or None)

    def delete(self, key: Key) -> None:
        self._cache.delete(key)

    def flush_all(self) -> None:
        count = self._cache.clear()
        logger.debug(f"Flushed {count} entries from disk cache at: {self.directory}")

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> "DiskCacheAdapter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
