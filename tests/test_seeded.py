"""Tests for the SplitMix64 generator."""

from __future__ import annotations

import unittest

from tilekit.config import PLACEMENT_RULES
from tilekit.placer import SeededGenerator


class TestSeededGenerator(unittest.TestCase):

    def test_reference_stream(self):
        """Seed 1234567 reproduces the published SplitMix64 outputs."""
        rng = SeededGenerator(1234567)
        self.assertEqual(
            [rng.next_uint64() for _ in range(3)],
            [6457827717110365317, 3203168211198807973, 9817491932198370423],
        )

    def test_same_seed_same_stream(self):
        a, b = SeededGenerator(42), SeededGenerator(42)
        self.assertEqual([a.random() for _ in range(20)], [b.random() for _ in range(20)])

    def test_different_seeds_differ(self):
        self.assertNotEqual(SeededGenerator(1).random(), SeededGenerator(2).random())

    def test_zero_seed_is_replaced(self):
        a = SeededGenerator(0)
        b = SeededGenerator(PLACEMENT_RULES.zero_seed_replacement)
        self.assertEqual(a.next_uint64(), b.next_uint64())

    def test_random_in_unit_interval(self):
        rng = SeededGenerator(7)
        for _ in range(1000):
            value = rng.random()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_stdlib_helpers_work(self):
        rng = SeededGenerator(99)
        for _ in range(200):
            self.assertTrue(0 <= rng.randrange(7) < 7)
            self.assertTrue(2.0 <= rng.uniform(2.0, 3.0) <= 3.0)
        self.assertIn(rng.choice("abc"), "abc")

    def test_getrandbits_width(self):
        rng = SeededGenerator(5)
        self.assertLess(rng.getrandbits(10), 1 << 10)
        self.assertLess(rng.getrandbits(100), 1 << 100)
        self.assertEqual(rng.getrandbits(0), 0)

    def test_state_round_trip(self):
        rng = SeededGenerator(11)
        rng.random()
        state = rng.getstate()
        expected = [rng.random() for _ in range(5)]
        rng.setstate(state)
        self.assertEqual([rng.random() for _ in range(5)], expected)

    def test_reseed_restarts_stream(self):
        rng = SeededGenerator(3)
        first = rng.random()
        rng.seed(3)
        self.assertEqual(rng.random(), first)

    def test_foreign_state_rejected(self):
        with self.assertRaises(ValueError):
            SeededGenerator(1).setstate(("mt19937", 0, None))

    def test_non_integer_seed_rejected(self):
        with self.assertRaises(TypeError):
            SeededGenerator("seed")


if __name__ == "__main__":
    unittest.main()
