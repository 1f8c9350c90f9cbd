"""Interface for caching mechanisms.

Defines the contract for the secondary, typically faster and possibly
volatile layer used to accelerate reads. Expiry and eviction belong to the
implementation; callers only pass a TTL on save.

A cache declares how it can be emptied by deriving from ClearableCache or
FlushableCache (or both).
"""

import abc

from kvcache.domain.models.common import Key, Ttl, Value


class Cache(abc.ABC):
    """Abstract Base Class for caching operations."""

    @abc.abstractmethod
    def contains(self, key: Key) -> bool:
        """Checks whether a non-expired entry exists for the key."""
        pass

    @abc.abstractmethod
    def fetch(self, key: Key) -> Value:
        """Returns the cached value for the key.

        The result is undefined if `contains(key)` is False.
        """
        pass

    @abc.abstractmethod
    def save(self, key: Key, value: Value, ttl: Ttl) -> None:
        """Stores a value under the key.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            ttl: Time-to-live in seconds; 0 means the entry never expires.
        """
        pass

    @abc.abstractmethod
    def delete(self, key: Key) -> None:
        """Deletes the entry for the key. Deleting an absent key is a no-op."""
        pass


class ClearableCache(Cache):
    """A cache that can delete all of its own entries."""

    @abc.abstractmethod
    def clear_all(self) -> None:
        pass


class FlushableCache(Cache):
    """A cache whose whole backend can be flushed."""

    @abc.abstractmethod
    def flush_all(self) -> None:
        pass
