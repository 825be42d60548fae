from __future__ import annotations

import unittest

import numpy as np

from dataviz.errors import ScaleDomainError
from dataviz.scales import CategoricalColorScale, DivergingColorScale, SequentialColorScale
from dataviz.scales.color import CATEGORY10, mix, parse_hex_rgb, rgb_to_hex


class ColorHelpersTests(unittest.TestCase):
    def test_parse_and_format_hex(self) -> None:
        self.assertTrue(np.array_equal(parse_hex_rgb("#ff8000"), np.array([255.0, 128.0, 0.0])))
        self.assertEqual(rgb_to_hex(np.array([255.4, -3.0, 300.0])), "#ff00ff")
        with self.assertRaisesRegex(ValueError, "invalid color"):
            parse_hex_rgb("orange")

    def test_alpha_is_ignored(self) -> None:
        self.assertTrue(np.array_equal(parse_hex_rgb("#10203040"), np.array([16.0, 32.0, 48.0])))

    def test_mix_clamps_t(self) -> None:
        self.assertEqual(mix("#000000", "#ffffff", 2.0), "#ffffff")
        self.assertEqual(mix("#000000", "#ffffff", 0.0), "#000000")


class SequentialColorScaleTests(unittest.TestCase):
    def test_midpoint_colour(self) -> None:
        scale = SequentialColorScale((0, 100), "#ffffff", "#0000ff")
        self.assertEqual(scale.apply_color(50), "#8080ff")
        self.assertEqual(scale.apply_color(0), "#ffffff")
        self.assertEqual(scale.apply_color(250), "#0000ff")

    def test_custom_interpolator(self) -> None:
        scale = SequentialColorScale((0, 1), "#000000", "#ffffff", interpolate=lambda t: t * t)
        self.assertAlmostEqual(scale.apply_value(0.5), 0.25)

    def test_samples(self) -> None:
        scale = SequentialColorScale((0, 1), "#000000", "#ffffff")
        self.assertEqual(scale.samples(3), ["#000000", "#808080", "#ffffff"])
        self.assertEqual(scale.samples(0), [])
        self.assertEqual(scale.samples(1), ["#000000"])


class DivergingColorScaleTests(unittest.TestCase):
    def test_midpoint_gets_mid_colour(self) -> None:
        scale = DivergingColorScale((-10, 30), "#ff0000", "#ffffff", "#0000ff", midpoint=0)
        self.assertEqual(scale.apply_color(0), "#ffffff")
        self.assertEqual(scale.apply_color(-10), "#ff0000")
        self.assertEqual(scale.apply_color(30), "#0000ff")
        self.assertAlmostEqual(scale.apply_value(15), 0.75)

    def test_default_midpoint_is_domain_centre(self) -> None:
        scale = DivergingColorScale((0, 10), "#000000", "#808080", "#ffffff")
        self.assertEqual(scale.midpoint, 5.0)


class CategoricalColorScaleTests(unittest.TestCase):
    def test_palette_cycles(self) -> None:
        keys = [f"k{i}" for i in range(12)]
        scale = CategoricalColorScale(keys)
        self.assertEqual(scale.apply_color("k0"), CATEGORY10[0])
        self.assertEqual(scale.apply_color("k10"), CATEGORY10[0])

    def test_unknown_key(self) -> None:
        scale = CategoricalColorScale(["a"], ["#111111"], unknown="#eeeeee")
        self.assertEqual(scale.apply_color("b"), "#eeeeee")
        with self.assertRaises(ScaleDomainError):
            scale.apply_color(None)

    def test_invalid_palette(self) -> None:
        with self.assertRaises(ValueError):
            CategoricalColorScale(["a"], [])
        with self.assertRaises(ValueError):
            CategoricalColorScale(["a"], ["red"])


if __name__ == "__main__":
    unittest.main()
