"""In-memory cache with per-entry expiry and an optional size bound."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from kvcache.domain.interfaces.cache import ClearableCache
from kvcache.domain.models.common import Key, Ttl, Value

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 0  # 0 = unbounded


@dataclass
class CacheEntry:
    """Internal representation of a cache entry with expiry."""
    value: Any
    expiry_time: Optional[float]  # Unix timestamp when the entry expires, None = never


class MemoryCache(ClearableCache):
    """Dictionary-backed cache living in the current process."""

    def __init__(self, max_items: int = DEFAULT_MAX_ITEMS):
        """Initializes the cache.

        Args:
            max_items: Maximum number of entries kept. Once exceeded, the
                oldest inserted entries are evicted. 0 disables the bound.
        """
        if max_items < 0:
            raise ValueError(f"max_items must be 0 or greater. Got: {max_items}")
        self._entries: Dict[Key, CacheEntry] = {}
        self.max_items = max_items
        logger.debug(f"MemoryCache initialized. max_items={max_items or 'unbounded'}")

    def __len__(self) -> int:
        self._prune_expired()
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return entry.expiry_time is not None and now > entry.expiry_time

    def _live_entry(self, key: Key) -> Optional[CacheEntry]:
        """Returns the entry for the key, dropping it first if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, time.time()):
            del self._entries[key]
            logger.debug(f"Cache entry expired for key: {key!r}")
            return None
        return entry

    def _prune_expired(self) -> None:
        now = time.time()
        expired_keys = [k for k, v in self._entries.items() if self._is_expired(v, now)]
        for k in expired_keys:
            del self._entries[k]

    def _evict_overflow(self) -> None:
        if not self.max_items:
            return
        self._prune_expired()
        while len(self._entries) > self.max_items:
            # Oldest by insertion order
            oldest_key = next(iter(self._entries))
            del self._entries[oldest_key]
            logger.debug(f"Evicted cache entry for key: {oldest_key!r}")

    def contains(self, key: Key) -> bool:
        return self._live_entry(key) is not None

    def fetch(self, key: Key) -> Value:
        entry = self._live_entry(key)
        return entry.value if entry is not None else None

    def save(self, key: Key, value: Value, ttl: Ttl) -> None:
        expiry_time = time.time() + ttl if ttl > 0 else None
        # Re-inserting moves the key to the end of the eviction order
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(value=value, expiry_time=expiry_time)
        self._evict_overflow()

    def delete(self, key: Key) -> None:
        self._entries.pop(key, None)

    def clear_all(self) -> None:
        self._entries.clear()
        logger.debug("Cleared in-memory cache.")
