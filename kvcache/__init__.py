"""kvcache: a caching decorator for key-value stores.

Wraps any KeyValueStore with a Cache so that reads are served from the cache
when possible while writes keep both layers coherent.
"""

from kvcache.core.caching_store import CachingStore
from kvcache.domain.exceptions import (
    ConfigurationError,
    InvalidKeyError,
    KeyValueStoreError,
    NoSuchKeyError,
    StoreError,
)
from kvcache.domain.interfaces.cache import Cache, ClearableCache, FlushableCache
from kvcache.domain.interfaces.store import KeyValueStore

__version__ = "1.0.0"

__all__ = [
    "Cache",
    "CachingStore",
    "ClearableCache",
    "ConfigurationError",
    "FlushableCache",
    "InvalidKeyError",
    "KeyValueStore",
    "KeyValueStoreError",
    "NoSuchKeyError",
    "StoreError",
]
