"""Shared invariant-checking utilities.

Used by the stats experiment, the benchmark verify phase and the test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional

from digest_sets.logging_config import get_logger
from digest_sets.rb_tree import RedBlackTreeSet
from digest_sets.skip_list import SkipListSet

logger = get_logger(__name__)

if TYPE_CHECKING:
    from digest_sets.base import OrderedDigestSet
    from digest_sets.set_stats import Stats

COMMON_FLAGS = (
    "is_search_tree",
    "size_matches",
    "keys_match_values",
)

RB_TREE_FLAGS = COMMON_FLAGS + (
    "root_is_black",
    "no_red_red",
    "black_height_uniform",
    "parent_links_ok",
)

SKIP_LIST_FLAGS = COMMON_FLAGS + (
    "levels_sorted",
    "levels_nested",
    "level_tracked",
)

# variants not listed here (the plain BST) are checked against COMMON_FLAGS
FLAGS_BY_TYPE = {
    RedBlackTreeSet: RB_TREE_FLAGS,
    SkipListSet: SKIP_LIST_FLAGS,
}


class InvariantError(Exception):
    """Raised when a structural invariant of a set is violated."""


def flags_for(s: OrderedDigestSet) -> tuple[str, ...]:
    """Return the invariant flags that apply to the type of *s*."""
    for set_type, flags in FLAGS_BY_TYPE.items():
        if isinstance(s, set_type):
            return flags
    return COMMON_FLAGS


def _fail(s: OrderedDigestSet, message: str) -> None:
    logger.error("%s: %s", type(s).__name__, message)
    raise InvariantError(message)


def assert_set_invariants_raise(
    s: OrderedDigestSet,
    stats: Optional[Stats] = None,
) -> None:
    """Check all invariants, raising :class:`InvariantError` on the first failure."""
    from digest_sets.set_stats import set_stats_

    if stats is None:
        stats = set_stats_(s)

    for flag in flags_for(s):
        if not getattr(stats, flag):
            _fail(s, f"Invariant failed: {flag} is False")

    if not s.is_empty():
        if stats.height <= 0:
            _fail(s, f"Invariant failed: height={stats.height} ≤ 0 for non-empty set")
        if stats.least_key is None or stats.greatest_key is None:
            _fail(s, "Invariant failed: least/greatest key missing for non-empty set")
    elif stats.height != 0:
        _fail(s, f"Invariant failed: height={stats.height} ≠ 0 for empty set")


def check_entries_in_order(
    s: OrderedDigestSet,
    expected_values: Optional[Iterable] = None,
) -> tuple[list[str], bool, bool]:
    """Traverse the entries of *s* and validate ordering and presence.

    Returns
    -------
    (keys, presence_ok, order_ok)
    """
    keys: list[str] = []
    order_ok = True
    prev_key = None
    for entry in s.entries():
        if prev_key is not None and entry.key <= prev_key:
            order_ok = False
        keys.append(entry.key)
        prev_key = entry.key

    presence_ok = True
    if expected_values is not None:
        expected_keys = {s.key_for(v) for v in expected_values}
        presence_ok = len(keys) == len(expected_keys) and set(keys) == expected_keys

    return keys, presence_ok, order_ok
