"""Tests for pairbench.measure — the paired measurement loop."""

from __future__ import annotations

import random
import unittest

from pairbench_test_helpers import CountingGenerator, constant_routine, recording_routine

from pairbench.generator import RandomStringGenerator
from pairbench.measure import measure
from pairbench.routines import ROUTINES


def _first_tags(calls: list[tuple[str, object]]) -> list[str]:
    """Tag of the routine that ran first in each trial."""
    return [calls[i][0] for i in range(0, len(calls), 2)]


class TestMeasureLength(unittest.TestCase):
    """measure() returns exactly n pairs."""

    def test_lengths(self) -> None:
        for n in (0, 1, 2, 37, 500):
            with self.subTest(n=n):
                result = measure(
                    CountingGenerator(),
                    constant_routine(1),
                    constant_routine(2),
                    n,
                    rng=random.Random(n),
                )
                self.assertEqual(len(result), n)

    def test_negative_n_rejected(self) -> None:
        with self.assertRaises(ValueError):
            measure(CountingGenerator(), constant_routine(1), constant_routine(1), -1)


class TestMeasurePairOrder(unittest.TestCase):
    """Base duration is always first, whatever order the calls ran in."""

    def test_pair_positions(self) -> None:
        calls: list[tuple[str, object]] = []
        result = measure(
            CountingGenerator(),
            recording_routine(111, calls, "base"),
            recording_routine(222, calls, "candidate"),
            300,
            rng=random.Random(0),
        )
        self.assertEqual(result, [(111, 222)] * 300)
        # Both physical orders actually occurred.
        self.assertEqual(set(_first_tags(calls)), {"base", "candidate"})

    def test_order_is_roughly_balanced(self) -> None:
        calls: list[tuple[str, object]] = []
        measure(
            CountingGenerator(),
            recording_routine(1, calls, "base"),
            recording_routine(2, calls, "candidate"),
            2000,
            rng=random.Random(42),
        )
        base_first = _first_tags(calls).count("base")
        self.assertGreater(base_first, 800)
        self.assertLess(base_first, 1200)

    def test_seeded_rng_is_deterministic(self) -> None:
        orders = []
        for _ in range(2):
            calls: list[tuple[str, object]] = []
            measure(
                CountingGenerator(),
                recording_routine(1, calls, "base"),
                recording_routine(2, calls, "candidate"),
                100,
                rng=random.Random(7),
            )
            orders.append(_first_tags(calls))
        self.assertEqual(orders[0], orders[1])


class TestMeasurePayloads(unittest.TestCase):
    """Each trial draws one fresh payload shared by both routines."""

    def test_one_payload_per_trial(self) -> None:
        generator = CountingGenerator()
        calls: list[tuple[str, object]] = []
        measure(
            generator,
            recording_routine(1, calls, "base"),
            recording_routine(2, calls, "candidate"),
            50,
            rng=random.Random(1),
        )
        self.assertEqual(generator.produced, 50)
        self.assertEqual(len(calls), 100)
        for trial in range(50):
            first, second = calls[2 * trial], calls[2 * trial + 1]
            self.assertEqual(first[1], trial)
            self.assertEqual(second[1], trial)
            self.assertNotEqual(first[0], second[0])


class TestMeasureErrors(unittest.TestCase):
    """Routine failures are not swallowed."""

    def test_routine_exception_propagates(self) -> None:
        def broken(payload: object) -> tuple[int, object]:
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            measure(CountingGenerator(), constant_routine(1), broken, 5)


class TestMeasureRealRoutines(unittest.TestCase):
    """End-to-end with the built-in timed routines."""

    def test_durations_are_non_negative_ints(self) -> None:
        result = measure(
            RandomStringGenerator(0, 50, seed=3),
            ROUTINES["len"],
            ROUTINES["count"],
            200,
        )
        self.assertEqual(len(result), 200)
        for base_ns, candidate_ns in result:
            self.assertIsInstance(base_ns, int)
            self.assertIsInstance(candidate_ns, int)
            self.assertGreaterEqual(base_ns, 0)
            self.assertGreaterEqual(candidate_ns, 0)


if __name__ == "__main__":
    unittest.main()
