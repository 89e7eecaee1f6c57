from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator
import logging

from digest_sets.digest import digest
from digest_sets.logging_config import get_logger

logger = get_logger("OrderedSet")


@dataclass(frozen=True)
class Entry:
    """
    A stored element: the digest key and the original value.

    Attributes:
        key (str): Hex digest of the value, the sole ordering key.
        value (Any): The original payload, never compared for ordering.
    """
    __slots__ = ("key", "value")

    key: str
    value: Any


class OrderedDigestSet(ABC):
    """
    Abstract base class for sets ordered by the content digest of their values.

    Implementations share one contract: ``add``/``contains``/``remove`` take
    any non-None value, ``size`` is O(1), and ``entries`` yields entries in
    ascending key order. Everything else (``equals_set``, ``len``, ``in``,
    iteration over values) is derived from those.
    """
    __slots__ = ()

    @staticmethod
    def key_for(value) -> str:
        """Compute the ordering key of *value*; raises InvalidArgument for None."""
        return digest(value)

    @abstractmethod
    def add(self, value) -> bool:
        """
        Insert *value* unless an entry with the same key exists.

        Returns:
            bool: True if inserted, False if the key was already present.
        """
        pass

    @abstractmethod
    def contains(self, value) -> bool:
        """Return True if an entry with *value*'s key is present."""
        pass

    @abstractmethod
    def remove(self, value) -> bool:
        """
        Remove the entry with *value*'s key.

        Returns:
            bool: True if an entry was removed, False if it was absent.
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored entries in O(1)."""
        pass

    @abstractmethod
    def entries(self) -> Iterator[Entry]:
        """Yield all entries in ascending key order."""
        pass

    def equals_set(self, other) -> bool:
        """Return True if *other* holds the same (key, value) sequence."""
        from digest_sets.setops import ordered_sets_equal
        return ordered_sets_equal(self, other)

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, value) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[Any]:
        for entry in self.entries():
            yield entry.value

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(size={self.size()})"


def debug_log(message, *args, **kwargs):
    """Log a debug message only if debug logging is enabled"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(message, *args, **kwargs)
