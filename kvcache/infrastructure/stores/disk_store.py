"""Durable key-value store persisted with diskcache.

Entries are written without expiry, so the directory behaves as a plain
persistent key-value store. Values are pickled by diskcache.
"""

import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Union

import diskcache as dc

from kvcache.domain.exceptions import NoSuchKeyError, StoreError
from kvcache.domain.interfaces.store import KeyValueStore
from kvcache.domain.models.common import Key, KeyList, Value, ValueMap
from kvcache.infrastructure.stores.key_util import assert_key

logger = logging.getLogger(__name__)

# Failures of the underlying SQLite/filesystem backend
BACKEND_ERRORS = (dc.Timeout, sqlite3.Error, OSError)

_MISSING = object()


class DiskStore(KeyValueStore):
    """A persistent store kept in a diskcache directory."""

    def __init__(self, directory: Union[str, Path], timeout: float = 1):
        """Opens (or creates) the store directory.

        Args:
            directory: Directory holding the store's database.
            timeout: SQLite connection timeout in seconds.

        Raises:
            StoreError: If the directory cannot be opened.
        """
        self.directory = Path(directory)
        try:
            # The store is authoritative and must never evict entries
            self._cache = dc.Cache(str(self.directory), timeout=timeout, eviction_policy="none")
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to open disk store at {self.directory}: {e}")
            raise StoreError(f"Could not open store at {self.directory}: {e}") from e
        logger.info(f"Initialized disk store at: {self._cache.directory}")

    def set(self, key: Key, value: Value) -> None:
        assert_key(key)
        try:
            self._cache.set(key, value)
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to write key {key!r} to disk store: {e}")
            raise StoreError(f"Could not write key {key!r}: {e}") from e

    def get(self, key: Key, default: Optional[Value] = None) -> Value:
        value = self._read(key)
        return default if value is _MISSING else value

    def get_or_fail(self, key: Key) -> Value:
        value = self._read(key)
        if value is _MISSING:
            raise NoSuchKeyError.for_key(key)
        return value

    def get_multiple(self, keys: KeyList, default: Optional[Value] = None) -> ValueMap:
        return {key: self.get(key, default) for key in keys}

    def get_multiple_or_fail(self, keys: KeyList) -> ValueMap:
        values = {}
        missing = []
        for key in keys:
            value = self._read(key)
            if value is _MISSING:
                missing.append(key)
            else:
                values[key] = value

        if missing:
            raise NoSuchKeyError.for_keys(missing)

        return values

    def remove(self, key: Key) -> bool:
        assert_key(key)
        try:
            return bool(self._cache.delete(key))
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to remove key {key!r} from disk store: {e}")
            raise StoreError(f"Could not remove key {key!r}: {e}") from e

    def exists(self, key: Key) -> bool:
        assert_key(key)
        try:
            return key in self._cache
        except BACKEND_ERRORS as e:
            raise StoreError(f"Could not check key {key!r}: {e}") from e

    def clear(self) -> None:
        try:
            self._cache.clear()
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to clear disk store at {self.directory}: {e}")
            raise StoreError(f"Could not clear store: {e}") from e
        logger.info(f"Cleared disk store at: {self.directory}")

    def keys(self) -> List[Key]:
        try:
            return list(self._cache.iterkeys())
        except BACKEND_ERRORS as e:
            raise StoreError(f"Could not list keys: {e}") from e

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> "DiskStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _read(self, key: Key) -> Value:
        assert_key(key)
        try:
            return self._cache.get(key, default=_MISSING)
        except BACKEND_ERRORS as e:
            logger.error(f"Failed to read key {key!r} from disk store: {e}")
            raise StoreError(f"Could not read key {key!r}: {e}") from e
