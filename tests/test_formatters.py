from __future__ import annotations

from datetime import date, datetime
import unittest

import numpy as np

from dataviz.axes import default_formatter, number_formatter, si_formatter, time_formatter


class FormatterTests(unittest.TestCase):
    def test_si_prefixes(self) -> None:
        self.assertEqual(si_formatter(1500.0), "1.5k")
        self.assertEqual(si_formatter(1000000.0), "1M")
        self.assertEqual(si_formatter(0.001), "1m")
        self.assertEqual(si_formatter(0.0), "0")

    def test_si_formatter_edges(self) -> None:
        self.assertEqual(si_formatter(-2500), "-2.5k")
        self.assertEqual(si_formatter(0.003), "3m")
        self.assertEqual(si_formatter(42), "42")
        self.assertEqual(si_formatter(2e-15), "2.00e-15")
        self.assertEqual(si_formatter("n/a"), "n/a")
        self.assertEqual(si_formatter(999999.0), "1M")
        self.assertEqual(si_formatter(999.96), "1k")
        self.assertEqual(si_formatter(0.99999), "1")
        self.assertEqual(si_formatter(-999960.0), "-1M")
        self.assertEqual(si_formatter(999.4), "999.4")

    def test_default_formatter(self) -> None:
        self.assertEqual(default_formatter(10), "10")
        self.assertEqual(default_formatter(10.0), "10")
        self.assertEqual(default_formatter(np.float64(2.5)), "2.50")
        self.assertEqual(default_formatter(datetime(2024, 3, 1, 12)), "2024-03-01")
        self.assertEqual(default_formatter("Mon"), "Mon")

    def test_number_formatter(self) -> None:
        fmt = number_formatter(3)
        self.assertEqual(fmt(1.23456), "1.235")
        self.assertEqual(fmt(7), "7")
        with self.assertRaises(ValueError):
            number_formatter(-1)

    def test_time_formatter(self) -> None:
        fmt = time_formatter("%b %d")
        self.assertEqual(fmt(date(2024, 2, 9)), "Feb 09")
        self.assertEqual(fmt(3), "3")


if __name__ == "__main__":
    unittest.main()
