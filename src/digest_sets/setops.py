"""Operations over any two digest-ordered sets, driven by their ascending traversals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from digest_sets.base import OrderedDigestSet

if TYPE_CHECKING:
    from digest_sets.base import Entry

_DONE = object()


def ordered_sets_equal(a: OrderedDigestSet, b) -> bool:
    """
    Compare two sets by cardinality and by their ascending (key, value) sequences.

    Works across variants: internal shape (colors, levels, balance) never
    matters. Returns False when *b* is not an ordered set.
    """
    if not isinstance(b, OrderedDigestSet):
        return False
    if a is b:
        return True
    if a.size() != b.size():
        return False

    it_a = a.entries()
    it_b = b.entries()
    while True:
        ea = next(it_a, _DONE)
        eb = next(it_b, _DONE)
        if ea is _DONE or eb is _DONE:
            # both traversals must end together
            return ea is eb
        if ea.key != eb.key or ea.value != eb.value:
            return False


def _merge_common(a: OrderedDigestSet, b: OrderedDigestSet):
    """Yield the entries of *a* whose key also occurs in *b*."""
    it_a = a.entries()
    it_b = b.entries()
    ea: Entry = next(it_a, _DONE)
    eb: Entry = next(it_b, _DONE)
    while ea is not _DONE and eb is not _DONE:
        if ea.key < eb.key:
            ea = next(it_a, _DONE)
        elif ea.key > eb.key:
            eb = next(it_b, _DONE)
        else:
            yield ea
            ea = next(it_a, _DONE)
            eb = next(it_b, _DONE)


def intersection(
    a: OrderedDigestSet,
    b: OrderedDigestSet,
    into: Optional[OrderedDigestSet] = None,
) -> OrderedDigestSet:
    """
    Return a set holding the elements common to *a* and *b*.

    Values are taken from *a*. The result goes into *into* when given,
    otherwise into a fresh instance of ``type(a)``.
    """
    result = into if into is not None else type(a)()
    add = result.add
    for entry in _merge_common(a, b):
        add(entry.value)
    return result


def overlap_count(a: OrderedDigestSet, b: OrderedDigestSet) -> int:
    """Count the keys present in both sets without building a result set."""
    return sum(1 for _ in _merge_common(a, b))
