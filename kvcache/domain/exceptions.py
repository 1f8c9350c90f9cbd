"""Domain exceptions raised by stores, caches and the caching decorator."""

from typing import Any, Iterable, Tuple


class KeyValueStoreError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(KeyValueStoreError, ValueError):
    """Raised when a component is constructed with unsupported collaborators or settings."""


class StoreError(KeyValueStoreError):
    """Raised when the backend of a store fails to read or write."""


class InvalidKeyError(KeyValueStoreError, ValueError):
    """Raised when a key is neither a string nor an integer."""

    @classmethod
    def for_key(cls, key: Any) -> "InvalidKeyError":
        return cls(f"Expected a key of type str or int. Got: {type(key).__name__}")


class NoSuchKeyError(KeyValueStoreError, KeyError):
    """Raised by fail-fast reads when one or more keys do not exist."""

    def __init__(self, message: str, keys: Iterable[Any] = ()):
        self.keys: Tuple[Any, ...] = tuple(keys)
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0]) if self.args else ""

    @classmethod
    def for_key(cls, key: Any) -> "NoSuchKeyError":
        return cls(f"The key {key!r} does not exist.", keys=[key])

    @classmethod
    def for_keys(cls, keys: Iterable[Any]) -> "NoSuchKeyError":
        keys = list(keys)
        if len(keys) == 1:
            return cls.for_key(keys[0])
        names = ", ".join(repr(key) for key in keys)
        return cls(f"The keys {names} do not exist.", keys=keys)
