from __future__ import annotations

import unittest

from dataviz.layout import (
    Constraints,
    Node,
    Rect,
    Size,
    Spacing,
    fixed,
    hstack,
    layout_simple,
    spacer,
    vstack,
)
from dataviz.units import em, percent, px


class LayoutTreeTests(unittest.TestCase):
    def test_fixed_root(self) -> None:
        node = fixed(100, 50)
        self.assertEqual(layout_simple(node), Size(100, 50))
        self.assertEqual(node.rect, Rect(0, 0, 100, 50))

    def test_hstack_places_children_after_padding(self) -> None:
        a, b = fixed(10, 20), fixed(30, 40)
        root = hstack(a, b).with_padding(5)
        self.assertEqual(layout_simple(root), Size(50, 50))
        self.assertEqual(a.rect, Rect(5, 5, 10, 20))
        self.assertEqual(b.rect, Rect(15, 5, 30, 40))

    def test_vstack_margins_separate_children(self) -> None:
        a = fixed(40, 10)
        b = fixed(20, 10).with_margin(Spacing(top=px(8), left=px(4)))
        root = vstack(a, b)
        self.assertEqual(layout_simple(root), Size(40, 28))
        self.assertEqual(b.rect, Rect(4, 18, 20, 10))

    def test_root_margin_is_not_part_of_size(self) -> None:
        root = vstack(fixed(10, 10)).with_margin(25)
        self.assertEqual(layout_simple(root), Size(10, 10))

    def test_percentages_resolve_against_parent_content_box(self) -> None:
        half = fixed(percent(50), 10)
        tail = fixed(20, 10)
        root = hstack(half, tail).with_padding(10)
        size = layout_simple(root, Constraints.tight(220, 100))
        self.assertEqual(size, Size(220, 100))
        self.assertEqual(half.rect, Rect(10, 10, 100, 10))
        self.assertEqual(tail.rect.x, 110)

    def test_em_lengths_use_font_size(self) -> None:
        node = hstack(fixed(em(2), em(1))).with_padding(em(0.5))
        self.assertEqual(layout_simple(node, font_size=10), Size(30, 20))
        self.assertEqual(node.children[0].rect, Rect(5, 5, 20, 10))

    def test_bounded_leaf_resolves_own_percentages(self) -> None:
        node = fixed(percent(50), em(2))
        self.assertEqual(layout_simple(node, Constraints.loose(300, 100)), Size(150, 32))

    def test_overflow_is_clipped_silently(self) -> None:
        a, b = fixed(80, 10), fixed(80, 10)
        root = hstack(a, b)
        with self.assertLogs("dataviz.layout.node", level="DEBUG"):
            size = layout_simple(root, Constraints.loose(100, 100))
        self.assertEqual(size, Size(100, 10))
        self.assertEqual(b.rect, Rect(80, 0, 20, 10))
        self.assertGreaterEqual(b.rect.x, a.rect.x + a.rect.width)

    def test_hstack_children_never_overlap_and_stay_in_content_box(self) -> None:
        kids = [fixed(w, 12).with_margin(Spacing(left=px(m))) for w, m in ((15, 0), (40, 3), (5, 9), (70, 2))]
        root = hstack(*kids).with_padding(Spacing(px(2), px(4), px(6), px(8)))
        size = layout_simple(root, Constraints.loose(120, 18))
        for prev, nxt in zip(kids, kids[1:]):
            self.assertGreaterEqual(nxt.rect.x, prev.rect.x + prev.rect.width)
        for kid in kids:
            self.assertGreaterEqual(kid.rect.x, 8)
            self.assertLessEqual(kid.rect.right, size.width - 4)
            self.assertGreaterEqual(kid.rect.y, 2)
            self.assertLessEqual(kid.rect.bottom, size.height - 6)

    def test_spacer_takes_space(self) -> None:
        a, b = fixed(10, 10), fixed(10, 10)
        root = hstack(a, spacer(30), b)
        self.assertEqual(layout_simple(root).width, 50)
        self.assertEqual(b.rect.x, 40)

    def test_empty_container(self) -> None:
        self.assertEqual(layout_simple(vstack().with_padding(3)), Size(6, 6))

    def test_walk_yields_absolute_rects(self) -> None:
        inner = fixed(5, 5)
        row = hstack(fixed(10, 5), inner)
        root = vstack(fixed(1, 7), row).with_padding(2)
        layout_simple(root)
        rects = {id(node): rect for node, rect in root.walk()}
        self.assertEqual(rects[id(inner)], Rect(12, 9, 5, 5))

    def test_structural_errors(self) -> None:
        with self.assertRaises(ValueError):
            Node("grid")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            fixed(1, 1).add_child(fixed(1, 1))
        with self.assertRaises(ValueError):
            Node("fixed", children=[fixed(1, 1)])
        with self.assertRaises(ValueError):
            Constraints(min_width=10, max_width=5)

    def test_rect_helpers(self) -> None:
        rect = Rect(10, 20, 30, 40)
        self.assertEqual((rect.right, rect.bottom, rect.center), (40, 60, (25.0, 40.0)))
        self.assertTrue(rect.contains(40, 60))
        self.assertFalse(rect.contains(41, 60))
        self.assertEqual(rect.inset(5), Rect(15, 25, 20, 30))

    def test_spacing_resolution(self) -> None:
        spacing = Spacing(percent(10), percent(10), px(3), em(1))
        self.assertEqual(spacing.resolve(200, 50, 12), (5.0, 20.0, 3.0, 12.0))
        self.assertEqual(spacing.absolute(12), (0.0, 0.0, 3.0, 12.0))
        self.assertEqual(Spacing.symmetric(1, 2), Spacing(px(1), px(2), px(1), px(2)))


if __name__ == "__main__":
    unittest.main()
