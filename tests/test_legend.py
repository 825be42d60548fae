from __future__ import annotations

import unittest
import xml.etree.ElementTree as ET

from dataviz.config import validate_legend_style
from dataviz.errors import StyleConfigError
from dataviz.layout import Rect
from dataviz.legends import (
    ColorSwatch,
    Legend,
    LegendItem,
    LineSample,
    MarkerSymbol,
    dashed_line,
    line_with_marker,
    marker,
    swatch,
)
from dataviz.render.commands import Group, Line, Path, Text, Translate
from dataviz.text import estimate_text_width


def two_swatches() -> list[LegendItem]:
    return [LegendItem("Alpha", ColorSwatch("#ff0000")), LegendItem("Beta", ColorSwatch("#0000ff"))]


class LegendLayoutTests(unittest.TestCase):
    def test_vertical_two_swatch_bounds(self) -> None:
        legend = Legend.create(two_swatches(), position="top-left", layout="vertical")
        bounds = legend.bounds(800, 600)
        self.assertEqual(bounds.height, 2 * 10 + 2 * 12 + 8)
        self.assertGreaterEqual(bounds.width, 10 + 12 + 6 + estimate_text_width("Alpha", 12) + 10)
        self.assertEqual((bounds.x, bounds.y), (10, 10))

    def test_auto_layout(self) -> None:
        self.assertEqual(Legend(two_swatches(), position="top-center").layout, "horizontal")
        self.assertEqual(Legend(two_swatches(), position="bottom-center").layout, "horizontal")
        self.assertEqual(Legend(two_swatches(), position="right").layout, "vertical")

    def test_horizontal_layout_width(self) -> None:
        legend = Legend(two_swatches(), position="top-center")
        size = legend.size()
        row = lambda text: 12 + 6 + estimate_text_width(text, 12)
        self.assertAlmostEqual(size.width, 10 + row("Alpha") + 8 + row("Beta") + 10)
        self.assertEqual(size.height, 10 + 12 + 10)

    def test_positions(self) -> None:
        items = two_swatches()
        size = Legend(items).size()
        w, h = size.width, size.height
        expected = {
            "top-left": (10, 10),
            "top-right": (800 - w - 10, 10),
            "bottom-left": (10, 600 - h - 10),
            "bottom-right": (800 - w - 10, 600 - h - 10),
            "left": (10, (600 - h) / 2),
            "right": (800 - w - 10, (600 - h) / 2),
        }
        for position, origin in expected.items():
            bounds = Legend(items, position=position, layout="vertical").bounds(800, 600)
            self.assertEqual((bounds.x, bounds.y), origin, position)
        centre = Legend(items, position="bottom-center").bounds(800, 600)
        self.assertAlmostEqual(centre.x + centre.width / 2, 400)

    def test_value_suffix(self) -> None:
        self.assertEqual(LegendItem("Sales", swatch("#00ff00"), "42").text, "Sales (42)")
        self.assertEqual(LegendItem("Sales", swatch("#00ff00")).text, "Sales")

    def test_invalid_options(self) -> None:
        with self.assertRaises(ValueError):
            Legend(two_swatches(), position="middle")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            Legend(two_swatches(), layout="grid")  # type: ignore[arg-type]
        with self.assertRaises(StyleConfigError):
            Legend.create(two_swatches(), style={"text_color": "grey"})


class LegendRenderTests(unittest.TestCase):
    def test_empty_or_hidden_legend_renders_nothing(self) -> None:
        self.assertEqual(Legend([]).render(800, 600), "")
        self.assertEqual(Legend(two_swatches(), position="none").render(800, 600), "")
        self.assertEqual(Legend([]).bounds(800, 600), Rect(800 - 10, 10, 0, 0))

    def test_svg_structure(self) -> None:
        legend = Legend.create(two_swatches(), position="top-left", style={"background": "#ffffff"})
        root = ET.fromstring(legend.render(800, 600))
        self.assertEqual(root.get("class"), "legend")
        self.assertEqual(root.get("transform"), "translate(10 10)")
        box = root.find("rect")
        self.assertEqual(box.get("fill"), "#ffffff")
        self.assertEqual(box.get("stroke"), "#e5e7eb")
        texts = root.findall("text")
        self.assertEqual([t.text for t in texts], ["Alpha", "Beta"])
        # Second row: padding + first row + item spacing, baseline at 0.85 em.
        self.assertAlmostEqual(float(texts[1].get("y")), 10 + 12 + 8 + 12 * 0.85)
        self.assertEqual(float(texts[0].get("x")), 10 + 12 + 6)

    def test_symbols_are_translated_into_their_boxes(self) -> None:
        legend = Legend(two_swatches(), position="top-left")
        group = legend.commands(800, 600)
        symbol_groups = [c for c in group.children if isinstance(c, Group)]
        self.assertEqual(symbol_groups[0].transform, (Translate(10.0, 10.0),))
        self.assertEqual(symbol_groups[1].transform, (Translate(10.0, 30.0),))

    def test_unfilled_borderless_box_is_omitted(self) -> None:
        style = validate_legend_style({"border_width": 0})
        root = ET.fromstring(Legend(two_swatches(), style=style).render(800, 600))
        self.assertIsNone(root.find("rect"))
        self.assertEqual([r.get("width") for r in root.iter("rect")], ["12", "12"])

    def test_text_is_escaped(self) -> None:
        items = [LegendItem("R&D <2024>", swatch("#123456"))]
        svg = Legend(items).render(400, 300)
        self.assertIn("R&amp;D &lt;2024&gt;", svg)


class SymbolTests(unittest.TestCase):
    def test_swatch(self) -> None:
        sym = ColorSwatch("#ff0000", size=14)
        self.assertEqual((sym.width, sym.height), (14, 14))
        (rect,) = sym.commands()
        self.assertEqual(rect.style.fill, "#ff0000")
        with self.assertRaises(ValueError):
            ColorSwatch("red")

    def test_line_sample(self) -> None:
        sym = dashed_line("#00ff00")
        self.assertEqual((sym.width, sym.height), (20, 2))
        (stroke,) = sym.commands()
        self.assertIsInstance(stroke, Line)
        self.assertEqual(stroke.style.stroke_dasharray, "4,2")
        self.assertEqual((stroke.y1, stroke.y2), (1.0, 1.0))

    def test_line_with_marker_is_as_tall_as_the_marker(self) -> None:
        sym = line_with_marker("#00ff00", "square")
        self.assertEqual(sym.height, 6)
        stroke, mark = sym.commands()
        self.assertEqual(stroke.y1, 3.0)
        self.assertIsInstance(mark, Path)
        self.assertEqual(mark.d, "M7,0 L13,0 L13,6 L7,6 Z")

    def test_marker_shapes(self) -> None:
        for shape in ("circle", "square", "diamond", "triangle", "cross", "x", "dot"):
            sym = marker(shape, "#336699")
            (path,) = sym.commands()
            self.assertTrue(path.d.startswith("M"), shape)
        cross = MarkerSymbol("cross", "#336699").commands()[0]
        self.assertEqual(cross.style.stroke_linecap, "round")
        self.assertEqual(cross.style.fill, "none")

    def test_unknown_marker_falls_back_to_circle(self) -> None:
        circle = MarkerSymbol("circle", "#000000").commands()[0]
        with self.assertLogs("dataviz.legends.symbols", level="DEBUG"):
            odd = MarkerSymbol("star", "#000000").commands()[0]  # type: ignore[arg-type]
        self.assertEqual(odd, circle)

    def test_line_sample_validation(self) -> None:
        with self.assertRaises(ValueError):
            LineSample("#000000", stroke_width=0)


class LegendTextTests(unittest.TestCase):
    def test_text_commands_use_legend_style(self) -> None:
        legend = Legend.create(two_swatches(), style={"font_size": 14, "text_color": "#111111"})
        texts = [c for c in legend.commands(500, 500).children if isinstance(c, Text)]
        self.assertTrue(all(t.style.font_size == 14.0 and t.style.fill == "#111111" for t in texts))


if __name__ == "__main__":
    unittest.main()
