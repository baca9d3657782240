"""Tests for pairbench.routines — built-in comparison routines."""

from __future__ import annotations

import unittest

from pairbench.routines import DEFAULT_PAIRS, DESCRIPTIONS, ROUTINES, get_routine


class TestBuiltinRoutines(unittest.TestCase):
    """Each routine reports a duration and the expected output."""

    def test_outputs(self) -> None:
        expected = {
            "len": 5,
            "count": 5,
            "count_reversed": 5,
            "len_x1000": 5000,
            "len_x985": 4925,
        }
        for name, value in expected.items():
            with self.subTest(routine=name):
                duration, output = ROUTINES[name]("hello")
                self.assertEqual(output, value)
                self.assertIsInstance(duration, int)
                self.assertGreaterEqual(duration, 0)

    def test_empty_payload(self) -> None:
        for name, routine in ROUTINES.items():
            with self.subTest(routine=name):
                _, output = routine("")
                self.assertEqual(output, 0)

    def test_every_routine_described(self) -> None:
        self.assertEqual(set(DESCRIPTIONS), set(ROUTINES))

    def test_default_pairs_use_known_routines(self) -> None:
        self.assertEqual(len(DEFAULT_PAIRS), 6)
        for base, candidate in DEFAULT_PAIRS:
            self.assertIn(base, ROUTINES)
            self.assertIn(candidate, ROUTINES)

    def test_repeat_names(self) -> None:
        self.assertEqual(ROUTINES["len_x1000"].__name__, "len_x1000")
        self.assertEqual(ROUTINES["len_x985"].__name__, "len_x985")


class TestGetRoutine(unittest.TestCase):
    """Tests for get_routine()."""

    def test_known(self) -> None:
        self.assertIs(get_routine("len"), ROUTINES["len"])

    def test_unknown_lists_available(self) -> None:
        with self.assertRaises(KeyError) as ctx:
            get_routine("nope")
        self.assertIn("count_reversed", str(ctx.exception))

    def test_custom_table(self) -> None:
        def routine(payload: object) -> tuple[int, object]:
            return 1, payload

        self.assertIs(get_routine("mine", {"mine": routine}), routine)
        with self.assertRaises(KeyError):
            get_routine("len", {"mine": routine})


if __name__ == "__main__":
    unittest.main()
