from __future__ import annotations

import unittest

from dataviz.errors import ScaleDomainError
from dataviz.scales import BandScale, OrdinalScale, PointScale, band_scale, point_scale
from dataviz.units import ZERO, em, percent, px

DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]


class BandScaleTests(unittest.TestCase):
    def test_zero_padding_band_midpoints(self) -> None:
        scale = BandScale(DAYS, (0, 500))
        self.assertEqual(scale.bandwidth(), px(100))
        mids = [scale.tick_position(day).value for day in DAYS]
        self.assertEqual(mids, [50.0, 150.0, 250.0, 350.0, 450.0])
        self.assertEqual(scale.ticks(), DAYS)

    def test_single_key_sits_at_range_centre(self) -> None:
        scale = BandScale(["a"], (0, 100))
        self.assertEqual(scale.tick_position("a"), px(50))
        self.assertEqual(scale.bandwidth(), px(100))
        padded = band_scale(["a"], (0, 100), padding_inner=0.2, padding_outer=0.1)
        self.assertAlmostEqual(padded.tick_position("a").value, 50.0)
        self.assertAlmostEqual(padded.bandwidth().value, 80.0)
        self.assertAlmostEqual(BandScale(["a"], (100, 0)).tick_position("a").value, 50.0)

    def test_padding_keeps_bands_equidistant(self) -> None:
        scale = band_scale(DAYS, (0, 500), padding_inner=0.2, padding_outer=0.1)
        starts = [scale.apply(day).value for day in DAYS]
        gaps = {round(b - a, 9) for a, b in zip(starts, starts[1:])}
        self.assertEqual(gaps, {round(scale.step().value, 9)})
        self.assertAlmostEqual(scale.bandwidth().value, scale.step().value * 0.8)
        # Outer padding on both sides is equal with the default centre alignment.
        left = starts[0]
        right = 500 - (starts[-1] + scale.bandwidth().value)
        self.assertAlmostEqual(left, right)

    def test_inverted_range_keeps_key_order_from_r0(self) -> None:
        scale = BandScale(["a", "b"], (200, 0))
        self.assertEqual(scale.apply("a").value, 100.0)
        self.assertEqual(scale.apply("b").value, 0.0)
        self.assertEqual(scale.tick_position("a").value, 150.0)

    def test_invert_is_bucket_lookup(self) -> None:
        scale = BandScale(DAYS, (0, 500), padding_inner=0.5)
        self.assertEqual(scale.invert(scale.tick_position("Wed")), "Wed")
        gap_start = scale.apply("Mon").value + scale.bandwidth().value + 1
        self.assertIsNone(scale.invert(gap_start))
        self.assertIsNone(scale.invert(-10))

    def test_unknown_key_and_non_string(self) -> None:
        scale = BandScale(DAYS, (0, 500))
        with self.assertRaises(ScaleDomainError):
            scale.apply("Sun")
        with self.assertRaises(ScaleDomainError):
            scale.apply(3)

    def test_duplicate_keys_collapse(self) -> None:
        scale = BandScale(["a", "b", "a"], (0, 100))
        self.assertEqual(scale.domain(), ("a", "b"))

    def test_padding_bounds_validated(self) -> None:
        with self.assertRaises(ValueError):
            BandScale(DAYS, (0, 500), padding_inner=1.5)

    def test_padding_copy(self) -> None:
        scale = BandScale(DAYS, (0, 500)).padding(0.1)
        self.assertLess(scale.bandwidth().value, 100.0)

    def test_empty_keys_give_no_ticks(self) -> None:
        scale = BandScale([], (0, 500))
        self.assertEqual(scale.ticks(), [])
        self.assertIsNone(scale.invert(10))

    def test_rounded_bands(self) -> None:
        scale = BandScale(["a", "b", "c"], (0, 100), rounded=True)
        self.assertEqual(scale.step().value, 33.0)
        self.assertTrue(scale.apply("b").value.is_integer())


class PointScaleTests(unittest.TestCase):
    def test_points_span_the_range(self) -> None:
        scale = point_scale(["a", "b", "c"], (0, 100))
        self.assertEqual([scale.apply(k).value for k in "abc"], [0.0, 50.0, 100.0])
        self.assertEqual(scale.bandwidth(), px(0))

    def test_padding_insets_the_outer_points(self) -> None:
        scale = PointScale(["a", "b", "c"], (0, 100), padding=1.0)
        self.assertEqual([scale.apply(k).value for k in "abc"], [25.0, 50.0, 75.0])

    def test_single_key_is_centred(self) -> None:
        self.assertEqual(PointScale(["only"], (0, 80)).apply("only").value, 40.0)

    def test_invert_snaps_to_nearest(self) -> None:
        scale = PointScale(["a", "b", "c"], (0, 100))
        self.assertEqual(scale.invert(40), "b")
        self.assertEqual(scale.invert(1000), "c")


class OrdinalScaleTests(unittest.TestCase):
    def test_values_cycle(self) -> None:
        scale = OrdinalScale(["a", "b", "c"], [px(10), px(20)])
        self.assertEqual(scale.apply("a"), px(10))
        self.assertEqual(scale.apply("c"), px(10))

    def test_mixed_units_are_allowed(self) -> None:
        scale = OrdinalScale(["a", "b"], [px(4), em(1)])
        self.assertEqual(scale.apply("b").resolve(font_size=12), 12.0)
        self.assertEqual(scale.range(), (px(4), em(1)))

    def test_unknown_key_uses_unknown_value(self) -> None:
        scale = OrdinalScale(["a"], [percent(30)], unknown=px(-1))
        self.assertEqual(scale.apply("zzz"), px(-1))
        self.assertEqual(OrdinalScale(["a"], []).apply("a"), ZERO)
        with self.assertRaises(ScaleDomainError):
            scale.apply(1)

    def test_invert_finds_first_key(self) -> None:
        scale = OrdinalScale(["a", "b", "c"], [1, 2, 1])
        self.assertEqual(scale.invert(1), "a")
        self.assertEqual(scale.invert(px(2)), "b")
        self.assertIsNone(scale.invert(9))


if __name__ == "__main__":
    unittest.main()
