"""Contract tests shared by every set variant."""

import random
import unittest

from digest_sets.bst import BinarySearchTreeSet
from digest_sets.digest import digest
from digest_sets.rb_tree import RedBlackTreeSet
from digest_sets.skip_list import SkipListSet
from tests.test_base import OrderedSetTestCase


class OrderedSetContractMixin:
    """Behaviour every ``OrderedDigestSet`` must show; subclasses supply ``make_set``."""

    def make_set(self, values=None):
        raise NotImplementedError

    def setUp(self):
        self.ordered_set = self.make_set()

    def test_abc_scenario(self):
        s = self.ordered_set
        for v in ("a", "b", "c"):
            self.assertTrue(s.add(v))
        self.assertEqual(s.size(), 3)
        self.assertTrue(s.contains("b"))
        self.assertFalse(s.contains("z"))
        self.assertTrue(s.remove("b"))
        self.assertEqual(s.size(), 2)
        self.assertFalse(s.contains("b"))
        self.assertFalse(s.remove("b"))
        self.expected_values = ["a", "c"]

    def test_add_is_idempotent(self):
        s = self.ordered_set
        self.assertTrue(s.add("v"))
        self.assertFalse(s.add("v"))
        self.assertEqual(s.size(), 1)
        self.expected_values = ["v"]

    def test_add_remove_round_trip(self):
        s = self.ordered_set
        for i in range(50):
            s.add(i)
        before = s.size()
        s.add("transient")
        s.remove("transient")
        self.assertEqual(s.size(), before)
        self.assertFalse(s.contains("transient"))
        self.expected_values = range(50)

    def test_entries_ascending_by_key(self):
        values = [f"e{i}" for i in range(100)]
        for v in values:
            self.ordered_set.add(v)
        keys = [e.key for e in self.ordered_set.entries()]
        self.assertEqual(keys, sorted(digest(v) for v in values))
        self.assertEqual(list(self.ordered_set), sorted(values, key=digest))
        self.expected_values = values

    def test_contains_after_each_add(self):
        inserted = []
        rng = random.Random(17)
        for _ in range(120):
            v = rng.randrange(10**6)
            self.ordered_set.add(v)
            inserted.append(v)
            for w in inserted:
                self.assertTrue(self.ordered_set.contains(w))
        self.expected_values = inserted

    def test_dunder_wrappers(self):
        s = self.make_set(["x", "y"])
        self.assertEqual(len(s), 2)
        self.assertIn("x", s)
        self.assertNotIn("z", s)
        self.assertFalse(s.is_empty())
        self.assertIn("size=2", repr(s))
        self.ordered_set = s

    def test_equality_is_order_independent(self):
        x = self.make_set([5, 3, 8, 1])
        y = self.make_set([1, 3, 5, 8])
        self.assertTrue(x.equals_set(y))
        self.assertTrue(y.equals_set(x))
        self.ordered_set = x

    def test_equality_detects_differences(self):
        x = self.make_set(["a", "b"])
        self.assertFalse(x.equals_set(self.make_set(["a"])))
        self.assertFalse(x.equals_set(self.make_set(["a", "c"])))
        self.assertFalse(x.equals_set(None))
        self.assertFalse(x.equals_set({"a", "b"}))
        self.assertTrue(x.equals_set(x))
        self.assertTrue(self.make_set().equals_set(self.make_set()))
        self.ordered_set = x

    def test_equality_compares_values_not_only_keys(self):
        # 5 and "5" share a key but are different values
        self.assertFalse(self.make_set([5]).equals_set(self.make_set(["5"])))

    def test_equality_across_variants(self):
        values = [f"cross-{i}" for i in range(64)]
        mine = self.make_set(values)
        for other in (RedBlackTreeSet(reversed(values)),
                      SkipListSet(values[::2] + values[1::2], seed=4),
                      BinarySearchTreeSet(sorted(values))):
            with self.subTest(other=type(other).__name__):
                self.assertTrue(mine.equals_set(other))
                self.assertTrue(other.equals_set(mine))
        other = RedBlackTreeSet(values[:-1])
        self.assertFalse(mine.equals_set(other))
        self.ordered_set = mine


class TestRedBlackTreeContract(OrderedSetContractMixin, OrderedSetTestCase):
    def make_set(self, values=None):
        return RedBlackTreeSet(values)


class TestSkipListContract(OrderedSetContractMixin, OrderedSetTestCase):
    def make_set(self, values=None):
        return SkipListSet(values, seed=12345)


class TestBinarySearchTreeContract(OrderedSetContractMixin, OrderedSetTestCase):
    def make_set(self, values=None):
        return BinarySearchTreeSet(values)


if __name__ == "__main__":
    unittest.main()
