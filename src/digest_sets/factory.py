"""Factory helpers for building sets by kind name."""

from typing import Callable

from digest_sets.base import OrderedDigestSet
from digest_sets.bst import BinarySearchTreeSet
from digest_sets.rb_tree import RedBlackTreeSet
from digest_sets.skip_list import SkipListSet

SET_TYPES: dict[str, type[OrderedDigestSet]] = {
    "rbtree": RedBlackTreeSet,
    "skiplist": SkipListSet,
    "bst": BinarySearchTreeSet,
}


def make_set_factory(kind: str, **kwargs) -> Callable[..., OrderedDigestSet]:
    """
    Return a zero-argument constructor for sets of the given kind.

    Args:
        kind: One of ``SET_TYPES`` ("rbtree", "skiplist", "bst").
        **kwargs: Extra constructor arguments, e.g. ``seed`` for skip lists.

    Raises:
        ValueError: If *kind* is unknown.
    """
    try:
        cls = SET_TYPES[kind]
    except KeyError:
        known = ", ".join(sorted(SET_TYPES))
        raise ValueError(f"Unknown set kind {kind!r}; expected one of: {known}") from None

    def factory(values=None) -> OrderedDigestSet:
        return cls(values, **kwargs)

    factory.__name__ = f"create_{kind}"
    return factory


def create_ordered_set(kind: str, values=None, **kwargs) -> OrderedDigestSet:
    """Create a new set of the given kind, optionally filled with *values*."""
    return make_set_factory(kind, **kwargs)(values)
