"""
Red-black tree implementation of the digest-ordered set.

Properties maintained after every public mutation:
1. Keys are in binary-search-tree order
2. Root is always black
3. Red nodes cannot have red children
4. Every path from root to an empty position has the same number of black nodes
"""

from enum import IntEnum
from typing import Iterator, Optional

from digest_sets.base import Entry, OrderedDigestSet, debug_log


class Color(IntEnum):
    """Node color for the red-black tree."""

    RED = 0
    BLACK = 1


RED = Color.RED
BLACK = Color.BLACK


class RBNode:
    """
    Node in the red-black tree.

    ``left``/``right`` own the subtrees; ``parent`` is only a back-reference
    used to walk upward during fix-up and is cleared once the node is detached.
    """
    __slots__ = ("key", "value", "color", "left", "right", "parent")

    def __init__(self, key: str, value, color: Color = RED, parent: Optional["RBNode"] = None):
        self.key = key
        self.value = value
        self.color = color
        self.left: Optional[RBNode] = None
        self.right: Optional[RBNode] = None
        self.parent = parent

    def __repr__(self) -> str:
        return f"RBNode(key={self.key[:8]}..., color={self.color.name})"


def _color(node: Optional[RBNode]) -> Color:
    """Empty positions count as black."""
    return BLACK if node is None else node.color


class RedBlackTreeSet(OrderedDigestSet):
    """Deterministic self-balancing variant; every operation is O(log n) worst case."""
    __slots__ = ("_root", "_size")

    def __init__(self, values=None):
        self._root: Optional[RBNode] = None
        self._size: int = 0
        if values is not None:
            for value in values:
                self.add(value)

    @property
    def root(self) -> Optional[RBNode]:
        return self._root

    def size(self) -> int:
        return self._size

    def add(self, value) -> bool:
        key = self.key_for(value)

        parent = None
        current = self._root
        while current is not None:
            parent = current
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return False

        node = RBNode(key, value, RED, parent)
        if parent is None:
            self._root = node
        elif key < parent.key:
            parent.left = node
        else:
            parent.right = node

        self._size += 1
        self._fix_insert(node)
        return True

    def contains(self, value) -> bool:
        return self._find_node(self.key_for(value)) is not None

    def remove(self, value) -> bool:
        key = self.key_for(value)
        node = self._find_node(key)
        if node is None:
            return False

        self._delete_node(node)
        self._size -= 1
        return True

    def entries(self) -> Iterator[Entry]:
        """In-order traversal with an explicit stack."""
        stack: list[RBNode] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield Entry(node.key, node.value)
            node = node.right

    def _find_node(self, key: str) -> Optional[RBNode]:
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current
        return None

    def _rotate_left(self, node: RBNode) -> None:
        pivot = node.right
        node.right = pivot.left
        if pivot.left is not None:
            pivot.left.parent = node

        pivot.parent = node.parent
        if node.parent is None:
            self._root = pivot
            debug_log("rotate_left replaced root with %s", pivot.key[:8])
        elif node is node.parent.left:
            node.parent.left = pivot
        else:
            node.parent.right = pivot

        pivot.left = node
        node.parent = pivot

    def _rotate_right(self, node: RBNode) -> None:
        pivot = node.left
        node.left = pivot.right
        if pivot.right is not None:
            pivot.right.parent = node

        pivot.parent = node.parent
        if node.parent is None:
            self._root = pivot
            debug_log("rotate_right replaced root with %s", pivot.key[:8])
        elif node is node.parent.right:
            node.parent.right = pivot
        else:
            node.parent.left = pivot

        pivot.right = node
        node.parent = pivot

    def _fix_insert(self, z: RBNode) -> None:
        """Restore red-black properties after attaching the red leaf *z*."""
        recolors = inner = outer = 0
        while z.parent is not None and z.parent.color is RED:
            parent = z.parent
            grandparent = parent.parent  # exists: a red parent is never the root
            if parent is grandparent.left:
                uncle = grandparent.right
                if _color(uncle) is RED:
                    # Case 1: recolor and continue from the grandparent
                    recolors += 1
                    parent.color = BLACK
                    uncle.color = BLACK
                    grandparent.color = RED
                    z = grandparent
                    continue
                if z is parent.right:
                    # Case 2: inner grandchild, rotate it outward
                    inner += 1
                    z = parent
                    self._rotate_left(z)
                    parent = z.parent
                # Case 3: outer grandchild
                outer += 1
                parent.color = BLACK
                grandparent.color = RED
                self._rotate_right(grandparent)
            else:
                uncle = grandparent.left
                if _color(uncle) is RED:
                    recolors += 1
                    parent.color = BLACK
                    uncle.color = BLACK
                    grandparent.color = RED
                    z = grandparent
                    continue
                if z is parent.left:
                    inner += 1
                    z = parent
                    self._rotate_right(z)
                    parent = z.parent
                outer += 1
                parent.color = BLACK
                grandparent.color = RED
                self._rotate_left(grandparent)

        if recolors or inner or outer:
            debug_log("fix_insert case counts: 1=%d 2=%d 3=%d", recolors, inner, outer)
        self._root.color = BLACK

    def _delete_node(self, node: RBNode) -> None:
        """Physically remove *node*, or its in-order successor if it has two children."""
        if node.left is not None and node.right is not None:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            node.key = successor.key
            node.value = successor.value
            node = successor

        child = node.left if node.left is not None else node.right
        parent = node.parent
        self._replace_node(node, child)

        if node.color is BLACK:
            self._fix_delete(child, parent)

        node.left = node.right = node.parent = None

    def _replace_node(self, node: RBNode, child: Optional[RBNode]) -> None:
        if node.parent is None:
            self._root = child
        elif node is node.parent.left:
            node.parent.left = child
        else:
            node.parent.right = child

        if child is not None:
            child.parent = node.parent

    def _fix_delete(self, x: Optional[RBNode], parent: Optional[RBNode]) -> None:
        """
        Absorb the extra black carried by *x* after a black node was removed.

        *x* may be an empty position, so its parent is tracked separately.
        The sibling is never empty while *x* is doubly black: its subtree
        must have a black-height of at least one.
        """
        cases = [0, 0, 0, 0]
        while x is not self._root and _color(x) is BLACK:
            if x is parent.left:
                sibling = parent.right
                if sibling.color is RED:
                    # Case 1: red sibling, rotate to get a black one
                    cases[0] += 1
                    sibling.color = BLACK
                    parent.color = RED
                    self._rotate_left(parent)
                    sibling = parent.right
                if _color(sibling.left) is BLACK and _color(sibling.right) is BLACK:
                    # Case 2: push the deficiency up
                    cases[1] += 1
                    sibling.color = RED
                    x = parent
                    parent = x.parent
                    continue
                if _color(sibling.right) is BLACK:
                    # Case 3: near child red, far child black
                    cases[2] += 1
                    sibling.left.color = BLACK
                    sibling.color = RED
                    self._rotate_right(sibling)
                    sibling = parent.right
                # Case 4: far child red
                cases[3] += 1
                sibling.color = parent.color
                parent.color = BLACK
                sibling.right.color = BLACK
                self._rotate_left(parent)
                x = self._root
                parent = None
            else:
                sibling = parent.left
                if sibling.color is RED:
                    cases[0] += 1
                    sibling.color = BLACK
                    parent.color = RED
                    self._rotate_right(parent)
                    sibling = parent.left
                if _color(sibling.left) is BLACK and _color(sibling.right) is BLACK:
                    cases[1] += 1
                    sibling.color = RED
                    x = parent
                    parent = x.parent
                    continue
                if _color(sibling.left) is BLACK:
                    cases[2] += 1
                    sibling.right.color = BLACK
                    sibling.color = RED
                    self._rotate_left(sibling)
                    sibling = parent.left
                cases[3] += 1
                sibling.color = parent.color
                parent.color = BLACK
                sibling.left.color = BLACK
                self._rotate_right(parent)
                x = self._root
                parent = None

        if any(cases):
            debug_log("fix_delete case counts: 1=%d 2=%d 3=%d 4=%d", *cases)
        if x is not None:
            x.color = BLACK
