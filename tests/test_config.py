import unittest

from dataviz.config import (
    DEFAULT_AXIS_STYLE,
    DEFAULT_LEGEND_STYLE,
    is_hex_color,
    validate_axis_style,
    validate_legend_style,
)
from dataviz.errors import StyleConfigError


class StyleConfigTests(unittest.TestCase):
    def test_defaults_round_trip(self) -> None:
        self.assertEqual(validate_axis_style(), DEFAULT_AXIS_STYLE)
        self.assertEqual(validate_legend_style(), DEFAULT_LEGEND_STYLE)

    def test_partial_axis_override(self) -> None:
        style = validate_axis_style({"stroke_color": "#112233", "font_size": 14})
        self.assertEqual(style.stroke_color, "#112233")
        self.assertEqual(style.font_size, 14.0)
        self.assertIsInstance(style.font_size, float)
        self.assertEqual(style.text_color, DEFAULT_AXIS_STYLE.text_color)

    def test_override_on_custom_base(self) -> None:
        base = validate_axis_style({"font_size": 9})
        style = validate_axis_style({"title_font_size": 20}, base=base)
        self.assertEqual((style.font_size, style.title_font_size), (9.0, 20.0))

    def test_unknown_key(self) -> None:
        with self.assertRaisesRegex(StyleConfigError, "Unknown axis style key"):
            validate_axis_style({"colour": "#000000"})
        with self.assertRaisesRegex(StyleConfigError, "Unknown legend style key"):
            validate_legend_style({"margin": 3})

    def test_invalid_hex_color(self) -> None:
        with self.assertRaisesRegex(StyleConfigError, "hex color"):
            validate_axis_style({"text_color": "black"})
        with self.assertRaisesRegex(StyleConfigError, "hex color"):
            validate_legend_style({"background": "#fff"})

    def test_sizes(self) -> None:
        with self.assertRaisesRegex(StyleConfigError, "positive number"):
            validate_axis_style({"font_size": 0})
        with self.assertRaisesRegex(StyleConfigError, ">= 0"):
            validate_legend_style({"padding": -1})
        with self.assertRaisesRegex(StyleConfigError, "must be a number"):
            validate_legend_style({"border_width": True})

    def test_legend_background_may_be_set_or_cleared(self) -> None:
        self.assertEqual(validate_legend_style({"background": "#ffffffcc"}).background, "#ffffffcc")
        self.assertIsNone(validate_legend_style({"background": None}).background)

    def test_font_family_and_weight(self) -> None:
        with self.assertRaises(StyleConfigError):
            validate_axis_style({"font_family": "  "})
        with self.assertRaises(StyleConfigError):
            validate_axis_style({"title_font_weight": ""})

    def test_is_hex_color(self) -> None:
        self.assertTrue(is_hex_color("#A0b1C2"))
        self.assertFalse(is_hex_color("#abc"))
        self.assertFalse(is_hex_color(None))
        # StyleConfigError stays catchable as ValueError.
        self.assertTrue(issubclass(StyleConfigError, ValueError))


if __name__ == "__main__":
    unittest.main()
