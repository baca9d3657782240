"""Tests for pairbench.export — sampled CSV export of raw pairs."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from pairbench.export import (
    MAX_EXPORT_ROWS,
    export_csv,
    sample_pairs,
    sample_stride,
    write_csv,
)


def _pairs(n: int) -> list[tuple[int, int]]:
    return [(i, 10 * i) for i in range(n)]


class TestSampleStride(unittest.TestCase):
    """Tests for sample_stride()."""

    def test_known_values(self) -> None:
        cases = {0: 1, 1: 1, 999: 1, 1000: 1, 1001: 2, 1999: 2, 2000: 2, 2001: 3, 50000: 50}
        for n, stride in cases.items():
            with self.subTest(n=n):
                self.assertEqual(sample_stride(n), stride)


class TestSamplePairs(unittest.TestCase):
    """Tests for sample_pairs()."""

    def test_never_more_than_max_rows(self) -> None:
        for n in (0, 1, 999, 1000, 1001, 1999, 2500, 50000):
            with self.subTest(n=n):
                self.assertLessEqual(len(sample_pairs(_pairs(n))), MAX_EXPORT_ROWS)

    def test_strided_and_ordered(self) -> None:
        samples = _pairs(5432)
        stride = sample_stride(len(samples))
        sampled = sample_pairs(samples)
        self.assertEqual(sampled[0], samples[0])
        self.assertEqual(sampled, [samples[i] for i in range(0, len(samples), stride)])

    def test_small_input_kept_whole(self) -> None:
        samples = _pairs(10)
        self.assertEqual(sample_pairs(samples), samples)


class TestExportCSV(unittest.TestCase):
    """Tests for export_csv() and write_csv()."""

    def test_format(self) -> None:
        text = export_csv([(1, 2), (30, 40)])
        self.assertEqual(text, "1,2\n30,40\n")

    def test_no_header(self) -> None:
        first_line = export_csv(_pairs(3)).splitlines()[0]
        self.assertEqual(first_line, "0,0")

    def test_empty(self) -> None:
        self.assertEqual(export_csv([]), "")

    def test_line_count_bounded(self) -> None:
        text = export_csv(_pairs(12345))
        self.assertLessEqual(len(text.splitlines()), MAX_EXPORT_ROWS)

    def test_write_creates_parents(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "dir" / "out.csv"
            rows = write_csv(path, _pairs(2500))
            self.assertTrue(path.exists())
            lines = path.read_text().splitlines()
            self.assertEqual(rows, len(lines))
            self.assertEqual(rows, 834)
            self.assertEqual(lines[1], "3,30")


if __name__ == "__main__":
    unittest.main()
