"""Key validation shared by the store implementations."""

from typing import Any

from kvcache.domain.exceptions import InvalidKeyError


def is_valid_key(key: Any) -> bool:
    """Returns whether the key is a string or an integer (booleans excluded)."""
    if isinstance(key, bool):
        return False
    return isinstance(key, (str, int))


def assert_key(key: Any) -> None:
    """Raises InvalidKeyError unless the key is a string or an integer."""
    if not is_valid_key(key):
        raise InvalidKeyError.for_key(key)
