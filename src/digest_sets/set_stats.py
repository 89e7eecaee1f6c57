"""Statistics and structural checks for digest-ordered sets."""

from __future__ import annotations

import collections
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from digest_sets.digest import digest

if TYPE_CHECKING:
    from digest_sets.base import OrderedDigestSet
    from digest_sets.skip_list import SkipListSet


@dataclass
class Stats:
    """Aggregated statistics for one set instance."""

    item_count: int
    height: int
    least_key: Optional[str]
    greatest_key: Optional[str]
    is_search_tree: bool
    size_matches: bool
    keys_match_values: bool
    # red-black / tree flags
    root_is_black: bool = True
    no_red_red: bool = True
    black_height: int = 0
    black_height_uniform: bool = True
    parent_links_ok: bool = True
    # skip-list flags
    levels_sorted: bool = True
    levels_nested: bool = True
    level_tracked: bool = True
    level_hist: Optional[dict[int, int]] = None


def set_stats_(s: OrderedDigestSet) -> Stats:
    """
    Returns aggregated statistics for a set in **O(n)** time.

    Trees are walked with an explicit stack; skip lists level by level.
    """
    from digest_sets.skip_list import SkipListSet

    if isinstance(s, SkipListSet):
        return _skip_list_stats(s)
    return _tree_stats(s)


def _tree_stats(t) -> Stats:
    from digest_sets.rb_tree import BLACK, RED, RedBlackTreeSet

    is_rb = isinstance(t, RedBlackTreeSet)
    root = t.root

    item_count = 0
    height = 0
    is_search_tree = True
    keys_match_values = True
    no_red_red = True
    parent_links_ok = True
    leaf_black_heights = set()
    least_key = None
    greatest_key = None

    if root is not None:
        if is_rb and root.parent is not None:
            parent_links_ok = False
        # (node, depth, black count including node, lower bound, upper bound)
        stack = [(root, 1, 0, None, None)]
        while stack:
            node, depth, blacks, lo, hi = stack.pop()
            item_count += 1
            height = max(height, depth)
            if is_rb and node.color is BLACK:
                blacks += 1

            key = node.key
            if (lo is not None and key <= lo) or (hi is not None and key >= hi):
                is_search_tree = False
            if digest(node.value) != key:
                keys_match_values = False
            if least_key is None or key < least_key:
                least_key = key
            if greatest_key is None or key > greatest_key:
                greatest_key = key

            for child, c_lo, c_hi in ((node.left, lo, key), (node.right, key, hi)):
                if child is None:
                    leaf_black_heights.add(blacks)
                    continue
                if is_rb:
                    if child.parent is not node:
                        parent_links_ok = False
                    if node.color is RED and child.color is RED:
                        no_red_red = False
                stack.append((child, depth + 1, blacks, c_lo, c_hi))

    uniform = len(leaf_black_heights) <= 1
    stats = Stats(
        item_count=item_count,
        height=height,
        least_key=least_key,
        greatest_key=greatest_key,
        is_search_tree=is_search_tree,
        size_matches=item_count == t.size(),
        keys_match_values=keys_match_values,
    )
    if is_rb:
        stats.root_is_black = root is None or root.color is BLACK
        stats.no_red_red = no_red_red
        stats.black_height_uniform = uniform
        if not uniform:
            stats.black_height = -1
        elif leaf_black_heights:
            stats.black_height = leaf_black_heights.pop()
        stats.parent_links_ok = parent_links_ok
    return stats


def _skip_list_stats(sl: SkipListSet) -> Stats:
    head = sl.head
    level_hist = collections.Counter()

    item_count = 0
    keys_match_values = True
    levels_sorted = True
    least_key = None
    greatest_key = None
    level0_members = set()

    node = head.forward[0]
    prev_key = None
    while node is not None:
        item_count += 1
        level_hist[node.height] += 1
        level0_members.add(id(node))
        if prev_key is not None and node.key <= prev_key:
            levels_sorted = False
        if digest(node.value) != node.key:
            keys_match_values = False
        if least_key is None:
            least_key = node.key
        greatest_key = node.key
        prev_key = node.key
        node = node.forward[0]

    # every higher level must be a sorted subsequence of the one below
    levels_nested = True
    below = level0_members
    highest_used = 1 if head.forward[0] is not None else 0
    for level in range(1, sl.max_level):
        members = set()
        prev_key = None
        node = head.forward[level]
        if node is not None:
            highest_used = level + 1
        while node is not None:
            if id(node) not in below or node.height <= level:
                levels_nested = False
                break
            if prev_key is not None and node.key <= prev_key:
                levels_sorted = False
            members.add(id(node))
            prev_key = node.key
            node = node.forward[level]
        below = members

    return Stats(
        item_count=item_count,
        height=sl.level,
        least_key=least_key,
        greatest_key=greatest_key,
        is_search_tree=levels_sorted,
        size_matches=item_count == sl.size(),
        keys_match_values=keys_match_values,
        levels_sorted=levels_sorted,
        levels_nested=levels_nested,
        level_tracked=highest_used == sl.level,
        level_hist=dict(level_hist),
    )
