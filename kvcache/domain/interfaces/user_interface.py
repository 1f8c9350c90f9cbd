import abc
from typing import Any

from kvcache.domain.models.common import ValueMap


class UserInterface(abc.ABC):
    """Interface for reporting command results to the user."""

    @abc.abstractmethod
    def display_value(self, value: Any) -> None:
        """Displays a single value read from the store."""
        pass

    @abc.abstractmethod
    def display_values(self, values: ValueMap) -> None:
        """Displays the key/value pairs of a batch read."""
        pass

    @abc.abstractmethod
    def display_info(self, message: str) -> None:
        pass

    @abc.abstractmethod
    def display_error(self, message: str) -> None:
        pass
