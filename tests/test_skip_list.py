"""Tests for the skip-list set."""

import random
import unittest

from digest_sets.digest import InvalidArgument, digest
from digest_sets.set_stats import set_stats_
from digest_sets.skip_list import MAX_LEVEL, SkipListSet
from tests.test_base import OrderedSetTestCase
from tests.utils import ScriptedRandom, rng_for_heights


class TestSkipListConstruction(unittest.TestCase):

    def test_defaults(self):
        sl = SkipListSet()
        self.assertEqual(sl.max_level, MAX_LEVEL)
        self.assertEqual(sl.head.height, MAX_LEVEL)
        self.assertIsNone(sl.head.key)
        self.assertEqual(sl.level, 0)
        self.assertEqual(sl.size(), 0)

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            SkipListSet(max_level=0)
        for p in (0.0, 1.0, -0.1, 1.5):
            with self.subTest(p=p):
                with self.assertRaises(ValueError):
                    SkipListSet(p=p)

    def test_seeded_structures_are_reproducible(self):
        values = [f"s{i}" for i in range(200)]
        a = SkipListSet(values, seed=99)
        b = SkipListSet(values, seed=99)
        heights_a = [n.height for n in a.iter_level(0)]
        heights_b = [n.height for n in b.iter_level(0)]
        self.assertEqual(heights_a, heights_b)


class TestRandomHeight(unittest.TestCase):

    def test_scripted_heights(self):
        heights = [1, 4, 2, 8]
        sl = SkipListSet(max_level=8, rng=rng_for_heights(heights, 8))
        self.assertEqual([sl.random_height() for _ in heights], heights)

    def test_height_capped_at_max_level(self):
        sl = SkipListSet(max_level=3, rng=ScriptedRandom([0.0] * 10))
        self.assertEqual(sl.random_height(), 3)

    def test_distribution_is_roughly_geometric(self):
        sl = SkipListSet(seed=1)
        draws = [sl.random_height() for _ in range(20000)]
        share_height_one = draws.count(1) / len(draws)
        self.assertAlmostEqual(share_height_one, 0.5, delta=0.03)
        self.assertTrue(all(1 <= h <= MAX_LEVEL for h in draws))


class TestSkipListOperations(OrderedSetTestCase):

    def setUp(self):
        self.ordered_set = SkipListSet(seed=2024)

    def test_forced_heights_build_expected_levels(self):
        values = ["a", "b", "c", "d"]
        heights = {"a": 3, "b": 1, "c": 2, "d": 1}
        sl = SkipListSet(max_level=4, rng=rng_for_heights([heights[v] for v in values], 4))
        for v in values:
            self.assertTrue(sl.add(v))
        self.assertEqual(sl.level, 3)

        by_key = sorted(values, key=digest)
        for level in range(3):
            expected = [v for v in by_key if heights[v] > level]
            actual = [n.value for n in sl.iter_level(level)]
            self.assertEqual(actual, expected, f"level {level}")
        self.assertIsNone(sl.head.forward[3])
        self.ordered_set = sl
        self.expected_values = values

    def test_duplicate_does_not_draw_height(self):
        rng = rng_for_heights([2], 4)
        sl = SkipListSet(max_level=4, rng=rng)
        self.assertTrue(sl.add("x"))
        self.assertEqual(rng.remaining, 0)
        # a second draw would exhaust the scripted source
        self.assertFalse(sl.add("x"))
        self.assertEqual(sl.size(), 1)
        self.ordered_set = sl
        self.expected_values = ["x"]

    def test_remove_shrinks_level(self):
        sl = SkipListSet(max_level=6, rng=rng_for_heights([5, 1, 2], 6))
        for v in ("tall", "short", "mid"):
            sl.add(v)
        self.assertEqual(sl.level, 5)
        self.assertTrue(sl.remove("tall"))
        self.assertEqual(sl.level, 2)
        self.assertTrue(sl.remove("mid"))
        self.assertEqual(sl.level, 1)
        self.assertTrue(sl.remove("short"))
        self.assertEqual(sl.level, 0)
        self.assertIsNone(sl.head.forward[0])
        self.ordered_set = sl
        self.expected_values = []

    def test_invariants_after_every_operation(self):
        rng = random.Random(5)
        present = set()
        for _ in range(1500):
            v = rng.randrange(200)
            if rng.random() < 0.6:
                self.assertEqual(self.ordered_set.add(v), v not in present)
                present.add(v)
            else:
                self.assertEqual(self.ordered_set.remove(v), v in present)
                present.discard(v)
            self.assert_invariants(self.ordered_set)
        for v in range(200):
            self.assertEqual(self.ordered_set.contains(v), v in present)
        self.expected_values = present

    def test_level_histogram_matches_size(self):
        for i in range(500):
            self.ordered_set.add(i)
        stats = set_stats_(self.ordered_set)
        self.assertEqual(sum(stats.level_hist.values()), 500)
        self.assertEqual(max(stats.level_hist), self.ordered_set.level)
        self.expected_values = range(500)

    def test_none_rejected(self):
        for op in (self.ordered_set.add, self.ordered_set.contains, self.ordered_set.remove):
            with self.subTest(op=op.__name__):
                with self.assertRaises(InvalidArgument):
                    op(None)
        self.assertEqual(self.ordered_set.size(), 0)

    def test_empty_operations(self):
        self.assertFalse(self.ordered_set.contains("nothing"))
        self.assertFalse(self.ordered_set.remove("nothing"))
        self.assertEqual(list(self.ordered_set.entries()), [])


class TestSkipListCorruptionDetected(unittest.TestCase):

    def test_unnested_level_flagged(self):
        sl = SkipListSet(max_level=4, rng=rng_for_heights([2, 1], 4))
        sl.add("p")
        sl.add("q")
        tall = next(sl.iter_level(1))
        short = next(n for n in sl.iter_level(0) if n is not tall)
        # link the height-1 node on level 1 without giving it a level-1 slot
        sl.head.forward[1] = short
        stats = set_stats_(sl)
        self.assertFalse(stats.levels_nested)

    def test_out_of_order_chain_flagged(self):
        sl = SkipListSet(["a", "b", "c"], max_level=1)
        first = sl.head.forward[0]
        second = first.forward[0]
        third = second.forward[0]
        sl.head.forward[0] = second
        second.forward[0] = first
        first.forward[0] = third
        self.assertFalse(set_stats_(sl).levels_sorted)


if __name__ == "__main__":
    unittest.main()
