from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from dataviz.text import ELLIPSIS, HeuristicMeasurer, PillowMeasurer, elide, escape_xml, estimate_text_width


class TypographyTests(unittest.TestCase):
    def test_estimate_is_linear_in_length_and_size(self) -> None:
        self.assertAlmostEqual(estimate_text_width("abcd", 10), 24.0)
        self.assertEqual(estimate_text_width("", 10), 0.0)
        self.assertAlmostEqual(HeuristicMeasurer().text_width("ab", 20, "serif"), 24.0)

    def test_escape_xml_covers_all_five_entities(self) -> None:
        self.assertEqual(escape_xml("<a & 'b' \"c\">"), "&lt;a &amp; &apos;b&apos; &quot;c&quot;&gt;")

    def test_escape_xml_is_not_idempotent_on_raw_ampersand(self) -> None:
        once = escape_xml("a & b")
        self.assertEqual(escape_xml(once), "a &amp;amp; b")

    def test_elide_keeps_short_text(self) -> None:
        self.assertEqual(elide("short", 1000, 12), "short")

    def test_elide_trims_with_ellipsis_within_width(self) -> None:
        out = elide("a rather long label", 60, 10)
        self.assertTrue(out.endswith(ELLIPSIS))
        self.assertLessEqual(estimate_text_width(out, 10), 60)

    def test_elide_returns_empty_when_ellipsis_does_not_fit(self) -> None:
        self.assertEqual(elide("abc", 1, 10), "")

    def test_pillow_measurer_falls_back_to_default_font(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            measurer = PillowMeasurer(font_dirs=(Path(tmp),))
            self.assertEqual(measurer.text_width("", 12), 0.0)
            self.assertGreater(measurer.text_width("hello", 12, "NoSuchFamily"), 0.0)


if __name__ == "__main__":
    unittest.main()
