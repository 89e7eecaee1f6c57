"""Unbalanced binary search tree over digest keys, kept as an experiment baseline."""
from typing import Iterator, Optional

from digest_sets.base import Entry, OrderedDigestSet


class BSTNode:
    __slots__ = ("key", "value", "left", "right")

    def __init__(self, key: str, value):
        self.key = key
        self.value = value
        self.left: Optional[BSTNode] = None
        self.right: Optional[BSTNode] = None


class BinarySearchTreeSet(OrderedDigestSet):
    """
    Plain BST with the same contract as the balanced variants.

    No rebalancing happens, so the expected depth relies on digests being
    uniformly spread; the worst case is O(n).
    """
    __slots__ = ("_root", "_size")

    def __init__(self, values=None):
        self._root: Optional[BSTNode] = None
        self._size = 0
        if values is not None:
            for value in values:
                self.add(value)

    @property
    def root(self) -> Optional[BSTNode]:
        return self._root

    def size(self) -> int:
        return self._size

    def add(self, value) -> bool:
        key = self.key_for(value)
        if self._root is None:
            self._root = BSTNode(key, value)
            self._size += 1
            return True

        current = self._root
        while True:
            if key == current.key:
                return False
            if key < current.key:
                if current.left is None:
                    current.left = BSTNode(key, value)
                    break
                current = current.left
            else:
                if current.right is None:
                    current.right = BSTNode(key, value)
                    break
                current = current.right

        self._size += 1
        return True

    def contains(self, value) -> bool:
        key = self.key_for(value)
        current = self._root
        while current is not None:
            if key == current.key:
                return True
            current = current.left if key < current.key else current.right
        return False

    def remove(self, value) -> bool:
        key = self.key_for(value)
        parent = None
        current = self._root
        while current is not None and current.key != key:
            parent = current
            current = current.left if key < current.key else current.right

        if current is None:
            return False

        # Two children: take over the successor's entry and unlink the successor
        if current.left is not None and current.right is not None:
            successor_parent = current
            successor = current.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            current.key = successor.key
            current.value = successor.value
            current = successor
            parent = successor_parent

        child = current.left if current.left is not None else current.right
        if parent is None:
            self._root = child
        elif parent.left is current:
            parent.left = child
        else:
            parent.right = child

        current.left = current.right = None
        self._size -= 1
        return True

    def entries(self) -> Iterator[Entry]:
        stack: list[BSTNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield Entry(node.key, node.value)
            node = node.right
