"""
digest_sets: ordered sets keyed by the SHA-256 digest of their values.

Quick-start imports::

    from digest_sets import RedBlackTreeSet, SkipListSet

Both variants share the ``OrderedDigestSet`` contract and compare equal
across variants via ``equals_set``.
"""

from digest_sets.base import Entry, OrderedDigestSet
from digest_sets.bst import BinarySearchTreeSet
from digest_sets.digest import InvalidArgument, canonical_bytes, digest
from digest_sets.factory import SET_TYPES, create_ordered_set, make_set_factory
from digest_sets.invariants import (
    FLAGS_BY_TYPE,
    InvariantError,
    assert_set_invariants_raise,
    check_entries_in_order,
)
from digest_sets.rb_tree import Color, RedBlackTreeSet
from digest_sets.set_stats import Stats, set_stats_
from digest_sets.setops import intersection, ordered_sets_equal, overlap_count
from digest_sets.skip_list import SkipListSet

__all__ = [
    "FLAGS_BY_TYPE",
    "SET_TYPES",
    "BinarySearchTreeSet",
    "Color",
    "Entry",
    "InvalidArgument",
    "InvariantError",
    "OrderedDigestSet",
    "RedBlackTreeSet",
    "SkipListSet",
    "Stats",
    "assert_set_invariants_raise",
    "canonical_bytes",
    "check_entries_in_order",
    "create_ordered_set",
    "digest",
    "intersection",
    "make_set_factory",
    "ordered_sets_equal",
    "overlap_count",
    "set_stats_",
]
