"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), runs them against a
KeyValueStore (normally a CachingStore) and reports results through the
UserInterface. Every handler returns True on success and False if the store
raised one of the package's errors.
"""

import logging
from typing import List, Optional

from kvcache.domain.exceptions import KeyValueStoreError
from kvcache.domain.interfaces.store import KeyValueStore
from kvcache.domain.interfaces.user_interface import UserInterface
from kvcache.domain.models.common import Key, Value

logger = logging.getLogger(__name__)


class CommandHandler:
    """Handles incoming commands and delegates to the store."""

    def __init__(self, store: KeyValueStore, ui: UserInterface):
        self.store = store
        self.ui = ui

    def _report_failure(self, command: str, error: KeyValueStoreError) -> bool:
        logger.error(f"Command '{command}' failed: {error}")
        self.ui.display_error(str(error))
        return False

    def handle_set(self, key: Key, value: Value) -> bool:
        logger.info(f"Handling 'set' command for key: {key!r}")
        try:
            self.store.set(key, value)
        except KeyValueStoreError as e:
            return self._report_failure("set", e)
        self.ui.display_info(f"Stored key {key!r}.")
        return True

    def handle_get(self, key: Key, default: Optional[Value] = None, fail: bool = False) -> bool:
        logger.info(f"Handling 'get' command for key: {key!r} (fail={fail})")
        try:
            value = self.store.get_or_fail(key) if fail else self.store.get(key, default)
        except KeyValueStoreError as e:
            return self._report_failure("get", e)
        self.ui.display_value(value)
        return True

    def handle_get_many(self, keys: List[Key], default: Optional[Value] = None, fail: bool = False) -> bool:
        logger.info(f"Handling 'get-many' command for {len(keys)} key(s) (fail={fail})")
        try:
            if fail:
                values = self.store.get_multiple_or_fail(keys)
            else:
                values = self.store.get_multiple(keys, default)
        except KeyValueStoreError as e:
            return self._report_failure("get-many", e)
        self.ui.display_values(values)
        return True

    def handle_remove(self, key: Key) -> bool:
        logger.info(f"Handling 'remove' command for key: {key!r}")
        try:
            removed = self.store.remove(key)
        except KeyValueStoreError as e:
            return self._report_failure("remove", e)
        if removed:
            self.ui.display_info(f"Removed key {key!r}.")
        else:
            self.ui.display_info(f"Key {key!r} did not exist.")
        return True

    def handle_exists(self, key: Key) -> bool:
        """Displays whether the key exists. Returns the existence itself."""
        try:
            found = self.store.exists(key)
        except KeyValueStoreError as e:
            return self._report_failure("exists", e)
        self.ui.display_value(found)
        return found

    def handle_keys(self) -> bool:
        try:
            keys = self.store.keys()
        except KeyValueStoreError as e:
            return self._report_failure("keys", e)
        for key in keys:
            self.ui.display_value(key)
        return True

    def handle_clear(self) -> bool:
        logger.info("Handling 'clear' command.")
        try:
            self.store.clear()
        except KeyValueStoreError as e:
            return self._report_failure("clear", e)
        self.ui.display_info("Store and cache cleared.")
        return True
