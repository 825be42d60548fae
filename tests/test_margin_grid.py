import unittest

from dataviz.layout import (
    GridLayout,
    MarginConvention,
    Rect,
    Spacing,
    apply_margin,
    auto_grid,
    default_margin,
    inset,
    margins_for_axes,
    split_horizontal,
    split_into_grid,
    split_vertical,
)
from dataviz.units import percent, px


class MarginConventionTests(unittest.TestCase):
    def test_plot_area(self) -> None:
        mc = MarginConvention(800, 600, Spacing(px(40), px(20), px(50), px(60)))
        self.assertEqual(mc.plot_area, Rect(60, 40, 720, 510))
        self.assertEqual((mc.plot_width, mc.plot_height), (720, 510))

    def test_margin_areas_surround_plot(self) -> None:
        mc = MarginConvention(800, 600)
        self.assertEqual(mc.left_area, Rect(0, 40, 60, 510))
        self.assertEqual(mc.right_area, Rect(780, 40, 20, 510))
        self.assertEqual(mc.top_area, Rect(60, 0, 720, 40))
        self.assertEqual(mc.bottom_area, Rect(60, 550, 720, 50))

    def test_percentage_margins(self) -> None:
        mc = MarginConvention(1000, 500, Spacing.uniform(percent(10)))
        self.assertEqual(mc.plot_area, Rect(100, 50, 800, 400))

    def test_with_padding(self) -> None:
        mc = MarginConvention(800, 600)
        self.assertEqual(mc.with_padding(Spacing.uniform(10)), Rect(70, 50, 700, 490))

    def test_invalid_size(self) -> None:
        with self.assertRaises(ValueError):
            MarginConvention(0, 100)


class MarginHelperTests(unittest.TestCase):
    def test_default_margin(self) -> None:
        self.assertEqual(default_margin(), Spacing(px(20), px(30), px(40), px(50)))

    def test_apply_margin_and_inset(self) -> None:
        bounds = Rect(0, 0, 100, 80)
        self.assertEqual(apply_margin(bounds, Spacing(px(1), px(2), px(3), px(4))), Rect(4, 1, 94, 76))
        self.assertEqual(inset(bounds, 10), Rect(10, 10, 80, 60))

    def test_margins_for_axes(self) -> None:
        spacing = margins_for_axes(left=True, bottom=True, title=True)
        self.assertEqual(spacing, Spacing(px(40), px(10), px(50), px(60)))
        self.assertEqual(margins_for_axes(top=True).top, px(30))
        self.assertEqual(margins_for_axes().right, px(10))

    def test_splits(self) -> None:
        left, right = split_horizontal(Rect(0, 0, 100, 50), 0.25)
        self.assertEqual((left, right), (Rect(0, 0, 25, 50), Rect(25, 0, 75, 50)))
        top, bottom = split_vertical(Rect(0, 0, 100, 50), 0.5)
        self.assertEqual(bottom, Rect(0, 25, 100, 25))
        with self.assertRaises(ValueError):
            split_horizontal(Rect(0, 0, 1, 1), 1.5)


class GridTests(unittest.TestCase):
    def test_split_into_grid(self) -> None:
        cells = split_into_grid(Rect(0, 0, 200, 100), 2, 2, gap=10)
        self.assertEqual(cells[1][1], Rect(105, 55, 95, 45))
        self.assertEqual(split_into_grid(Rect(0, 0, 10, 10), 0, 3), [])

    def test_grid_layout_cells_and_spans(self) -> None:
        grid = GridLayout(200, 100, 2, 2, gap=px(10))
        self.assertEqual(grid.cell(1, 1), Rect(105, 55, 95, 45))
        self.assertEqual(grid.cell_with_span(0, 0, 2, 2), Rect(0, 0, 200, 100))
        self.assertEqual(grid.cell(5, 0), Rect())
        self.assertEqual(len(grid.flat_cells()), 4)

    def test_grid_layout_margin(self) -> None:
        grid = GridLayout(220, 120, 1, 2, gap=0).set_margin(Spacing.uniform(10))
        self.assertEqual(grid.cell(0, 1), Rect(110, 10, 100, 100))

    def test_auto_grid(self) -> None:
        self.assertEqual(auto_grid(5), (2, 3))
        self.assertEqual(auto_grid(9), (3, 3))
        self.assertEqual(auto_grid(0), (0, 0))


if __name__ == "__main__":
    unittest.main()
