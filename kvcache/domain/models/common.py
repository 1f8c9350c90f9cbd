"""Defines common Value Objects used across the key-value store contexts.

Keys and values are opaque to the caching layer; these aliases exist for
semantic clarity in signatures.
"""

from typing import Any, Dict, Iterable, NewType, Union

# === Core Value Objects ===

Key = Union[str, int]                 # Unique identifier of an entry within a store
Value = Any                           # Opaque payload, store- and cache-agnostic
KeyList = Iterable[Key]               # Keys requested by a batch operation
ValueMap = Dict[Key, Value]           # Result of a batch read, keyed by requested key

# === Caching Context ===
Ttl = NewType("Ttl", int)             # Time-to-live in seconds, 0 = never expires

NO_EXPIRY = Ttl(0)
