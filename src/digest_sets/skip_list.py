"""
Skip-list implementation of the digest-ordered set.

Node heights follow a geometric distribution: a new node starts at height 1
and is promoted one level at a time with probability ``p`` until a draw fails
or ``max_level`` is reached. Search, insert and delete are O(log n) expected.

The random source is injectable: pass ``rng`` (anything with a ``random()``
method) or ``seed`` to get reproducible structures.
"""
import random
from typing import Iterator, List, Optional

from digest_sets.base import Entry, OrderedDigestSet, debug_log

MAX_LEVEL = 16
PROMOTION_PROBABILITY = 0.5


class SkipListNode:
    __slots__ = ("key", "value", "forward")

    def __init__(self, key: Optional[str], value, height: int):
        self.key = key
        self.value = value
        self.forward: List[Optional[SkipListNode]] = [None] * height

    @property
    def height(self) -> int:
        return len(self.forward)

    def __repr__(self) -> str:
        shown = "HEAD" if self.key is None else f"{self.key[:8]}..."
        return f"SkipListNode(key={shown}, height={self.height})"


class SkipListSet(OrderedDigestSet):
    """Probabilistic variant; the head sentinel has ``max_level`` links and no key."""
    __slots__ = ("_head", "_level", "_size", "_max_level", "_p", "_rng")

    def __init__(
        self,
        values=None,
        max_level: int = MAX_LEVEL,
        p: float = PROMOTION_PROBABILITY,
        rng=None,
        seed: Optional[int] = None,
    ):
        if max_level < 1:
            raise ValueError(f"max_level must be at least 1, got {max_level}")
        if not 0.0 < p < 1.0:
            raise ValueError(f"p must lie strictly between 0 and 1, got {p}")

        self._max_level = max_level
        self._p = p
        self._rng = rng if rng is not None else random.Random(seed)
        self._head = SkipListNode(None, None, max_level)
        self._level = 0
        self._size = 0
        if values is not None:
            for value in values:
                self.add(value)

    @property
    def head(self) -> SkipListNode:
        return self._head

    @property
    def level(self) -> int:
        """Number of levels currently in use (0 when empty)."""
        return self._level

    @property
    def max_level(self) -> int:
        return self._max_level

    def size(self) -> int:
        return self._size

    def random_height(self) -> int:
        """Draw a node height from the injected random source."""
        height = 1
        rand = self._rng.random
        while height < self._max_level and rand() < self._p:
            height += 1
        return height

    def _find_update(self, key: str) -> List[SkipListNode]:
        """Return the last node before *key* on every level (the update vector)."""
        update = [self._head] * self._max_level
        current = self._head
        for i in range(self._level - 1, -1, -1):
            nxt = current.forward[i]
            while nxt is not None and nxt.key < key:
                current = nxt
                nxt = current.forward[i]
            update[i] = current
        return update

    def add(self, value) -> bool:
        key = self.key_for(value)
        update = self._find_update(key)

        successor = update[0].forward[0]
        if successor is not None and successor.key == key:
            return False

        height = self.random_height()
        if height > self._level:
            # update[] already points at the head above the old level
            debug_log("SkipList level grows %d -> %d", self._level, height)
            self._level = height

        node = SkipListNode(key, value, height)
        for i in range(height):
            node.forward[i] = update[i].forward[i]
            update[i].forward[i] = node

        self._size += 1
        return True

    def contains(self, value) -> bool:
        key = self.key_for(value)
        current = self._head
        for i in range(self._level - 1, -1, -1):
            nxt = current.forward[i]
            while nxt is not None and nxt.key < key:
                current = nxt
                nxt = current.forward[i]

        candidate = current.forward[0]
        return candidate is not None and candidate.key == key

    def remove(self, value) -> bool:
        key = self.key_for(value)
        update = self._find_update(key)

        node = update[0].forward[0]
        if node is None or node.key != key:
            return False

        for i in range(node.height):
            if update[i].forward[i] is not node:
                break
            update[i].forward[i] = node.forward[i]

        old_level = self._level
        while self._level > 0 and self._head.forward[self._level - 1] is None:
            self._level -= 1
        if self._level != old_level:
            debug_log("SkipList level shrinks %d -> %d", old_level, self._level)

        node.forward = []
        self._size -= 1
        return True

    def entries(self) -> Iterator[Entry]:
        node = self._head.forward[0]
        while node is not None:
            yield Entry(node.key, node.value)
            node = node.forward[0]

    def iter_level(self, level: int) -> Iterator[SkipListNode]:
        """Yield the nodes linked on *level* (0-based), in order."""
        node = self._head.forward[level]
        while node is not None:
            yield node
            node = node.forward[level]
