"""Interface for key-value stores.

Defines the contract of the durable, authoritative backend wrapped by the
caching decorator. Every read comes in a default-fallback form and a
fail-fast form, each with a single-key and a batch variant.
"""

import abc
from typing import List, Optional

from kvcache.domain.models.common import Key, KeyList, Value, ValueMap


class KeyValueStore(abc.ABC):
    """Abstract Base Class for key-value stores."""

    @abc.abstractmethod
    def set(self, key: Key, value: Value) -> None:
        """Stores a value under a key, replacing any previous value.

        Raises:
            StoreError: If the backend fails to write.
        """
        pass

    @abc.abstractmethod
    def get(self, key: Key, default: Optional[Value] = None) -> Value:
        """Returns the value stored under a key, or `default` if it is missing."""
        pass

    @abc.abstractmethod
    def get_or_fail(self, key: Key) -> Value:
        """Returns the value stored under a key.

        Raises:
            NoSuchKeyError: If the key does not exist.
        """
        pass

    @abc.abstractmethod
    def get_multiple(self, keys: KeyList, default: Optional[Value] = None) -> ValueMap:
        """Returns a mapping of every requested key to its value or `default`."""
        pass

    @abc.abstractmethod
    def get_multiple_or_fail(self, keys: KeyList) -> ValueMap:
        """Returns a mapping of every requested key to its value.

        Raises:
            NoSuchKeyError: If any of the keys does not exist.
        """
        pass

    @abc.abstractmethod
    def remove(self, key: Key) -> bool:
        """Removes a key. Returns whether the key existed."""
        pass

    @abc.abstractmethod
    def exists(self, key: Key) -> bool:
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes all keys from the store."""
        pass

    @abc.abstractmethod
    def keys(self) -> List[Key]:
        """Returns all keys currently held by the store."""
        pass
