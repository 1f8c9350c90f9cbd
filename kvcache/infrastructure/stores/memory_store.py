"""In-memory key-value store backed by a plain dictionary."""

import logging
from typing import Dict, List, Optional

from kvcache.domain.exceptions import NoSuchKeyError
from kvcache.domain.interfaces.store import KeyValueStore
from kvcache.domain.models.common import Key, KeyList, Value, ValueMap
from kvcache.infrastructure.stores.key_util import assert_key

logger = logging.getLogger(__name__)


class InMemoryStore(KeyValueStore):
    """A non-persistent store. Contents are lost when the instance is discarded."""

    def __init__(self, values: Optional[Dict[Key, Value]] = None):
        self._values: Dict[Key, Value] = {}
        for key, value in (values or {}).items():
            self.set(key, value)

    def set(self, key: Key, value: Value) -> None:
        assert_key(key)
        self._values[key] = value

    def get(self, key: Key, default: Optional[Value] = None) -> Value:
        assert_key(key)
        return self._values.get(key, default)

    def get_or_fail(self, key: Key) -> Value:
        assert_key(key)
        if key not in self._values:
            raise NoSuchKeyError.for_key(key)
        return self._values[key]

    def get_multiple(self, keys: KeyList, default: Optional[Value] = None) -> ValueMap:
        return {key: self.get(key, default) for key in keys}

    def get_multiple_or_fail(self, keys: KeyList) -> ValueMap:
        keys = list(keys)
        for key in keys:
            assert_key(key)

        missing = [key for key in keys if key not in self._values]
        if missing:
            raise NoSuchKeyError.for_keys(missing)

        return {key: self._values[key] for key in keys}

    def remove(self, key: Key) -> bool:
        assert_key(key)
        if key not in self._values:
            return False
        del self._values[key]
        return True

    def exists(self, key: Key) -> bool:
        assert_key(key)
        return key in self._values

    def clear(self) -> None:
        self._values.clear()
        logger.debug("Cleared in-memory store.")

    def keys(self) -> List[Key]:
        return list(self._values)

    def to_dict(self) -> Dict[Key, Value]:
        """Returns a copy of the stored key/value pairs."""
        return dict(self._values)
