"""Tests for structure rendering and the set factory."""

import unittest

from digest_sets.bst import BinarySearchTreeSet
from digest_sets.digest import digest
from digest_sets.display import print_structure
from digest_sets.factory import SET_TYPES, create_ordered_set, make_set_factory
from digest_sets.rb_tree import RedBlackTreeSet
from digest_sets.skip_list import SkipListSet
from tests.utils import rng_for_heights


class TestPrintStructure(unittest.TestCase):

    def test_none_and_empty(self):
        self.assertEqual(print_structure(None), "None")
        self.assertEqual(print_structure(RedBlackTreeSet()), "RedBlackTreeSet: Empty")
        self.assertEqual(print_structure(SkipListSet(seed=0)), "SkipListSet: Empty")

    def test_tree_layers(self):
        t = RedBlackTreeSet(["a", "b", "c"])
        lines = print_structure(t).splitlines()
        self.assertEqual(lines[0], "RedBlackTreeSet (size=3)")
        self.assertTrue(lines[1].startswith("D0: "))
        self.assertEqual(lines[1], f"D0: {t.root.key[:8]}")
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[2].count("(R)"), 2)

    def test_skip_list_levels(self):
        sl = SkipListSet(max_level=4, rng=rng_for_heights([2, 1], 4))
        sl.add("a")
        sl.add("b")
        lines = print_structure(sl).splitlines()
        self.assertEqual(lines[0], "SkipListSet (size=2, level=2)")
        self.assertEqual(lines[1], f"L1: HEAD -> {digest('a')[:8]}")
        self.assertTrue(lines[2].startswith("L0: HEAD -> "))
        self.assertEqual(lines[2].count("->"), 2)

    def test_bst_has_no_color_marks(self):
        text = print_structure(BinarySearchTreeSet(range(10)))
        self.assertNotIn("(R)", text)


class TestFactory(unittest.TestCase):

    def test_known_kinds(self):
        self.assertEqual(set(SET_TYPES), {"rbtree", "skiplist", "bst"})
        for kind, cls in SET_TYPES.items():
            with self.subTest(kind=kind):
                s = create_ordered_set(kind, ["x", "y"])
                self.assertIsInstance(s, cls)
                self.assertEqual(s.size(), 2)

    def test_kwargs_forwarded(self):
        factory = make_set_factory("skiplist", max_level=3, seed=1)
        s = factory()
        self.assertEqual(s.max_level, 3)
        self.assertEqual(factory.__name__, "create_skiplist")

    def test_unknown_kind(self):
        with self.assertRaisesRegex(ValueError, "rbtree"):
            make_set_factory("avl")


if __name__ == "__main__":
    unittest.main()
