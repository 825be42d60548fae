from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Literal, Mapping, Sequence

from dataviz.config import DEFAULT_LEGEND_STYLE, LegendStyle, validate_legend_style
from dataviz.layout.node import Node, fixed, hstack, layout_simple, vstack
from dataviz.layout.types import Rect, Size, Spacing
from dataviz.legends.symbols import Symbol
from dataviz.render.commands import DrawCommand, DrawStyle, Group, Rect as RectCommand, Text, Translate
from dataviz.render.svg import SvgBackend
from dataviz.text import DEFAULT_MEASURER, TextMeasurer
from dataviz.units import px


LOGGER = logging.getLogger(__name__)

LegendPosition = Literal[
    "top-left",
    "top-right",
    "top-center",
    "bottom-left",
    "bottom-right",
    "bottom-center",
    "left",
    "right",
    "none",
]
LegendLayout = Literal["vertical", "horizontal", "auto"]

POSITIONS: tuple[LegendPosition, ...] = (
    "top-left",
    "top-right",
    "top-center",
    "bottom-left",
    "bottom-right",
    "bottom-center",
    "left",
    "right",
    "none",
)
LAYOUTS: tuple[LegendLayout, ...] = ("vertical", "horizontal", "auto")

# Distance from the chart edges.
EDGE_MARGIN = 10.0
# Text baseline below the top of its row, as a fraction of the font size.
BASELINE_RATIO = 0.85


@dataclass(frozen=True)
class LegendItem:
    label: str
    symbol: Symbol
    value: str | None = None

    @property
    def text(self) -> str:
        if self.value:
            return f"{self.label} ({self.value})"
        return self.label


class Legend:
    """Symbol/label list laid out with the layout tree and placed in a chart corner.

    Example::

        legend = Legend.create([LegendItem("A", ColorSwatch("#ff0000"))], position="top-right")
        svg = legend.render(800, 600)
    """

    def __init__(
        self,
        items: Sequence[LegendItem],
        position: LegendPosition = "top-right",
        layout: LegendLayout = "auto",
        style: LegendStyle | None = None,
        measurer: TextMeasurer | None = None,
    ) -> None:
        if position not in POSITIONS:
            raise ValueError(f"unknown legend position: {position}")
        if layout not in LAYOUTS:
            raise ValueError(f"unknown legend layout: {layout}")
        self.items: tuple[LegendItem, ...] = tuple(items)
        self.position: LegendPosition = position
        self.style = style or DEFAULT_LEGEND_STYLE
        self.measurer = measurer or DEFAULT_MEASURER
        if layout == "auto":
            layout = "horizontal" if position in ("top-center", "bottom-center") else "vertical"
        self.layout: LegendLayout = layout

    @classmethod
    def create(
        cls,
        items: Sequence[LegendItem],
        position: LegendPosition = "top-right",
        layout: LegendLayout = "auto",
        style: LegendStyle | Mapping[str, Any] | None = None,
        measurer: TextMeasurer | None = None,
    ) -> "Legend":
        """Build a legend; a mapping `style` is validated as overrides of the default."""

        if style is not None and not isinstance(style, LegendStyle):
            style = validate_legend_style(style)
        return cls(items, position=position, layout=layout, style=style, measurer=measurer)

    @property
    def visible(self) -> bool:
        return self.position != "none" and bool(self.items)

    def build_tree(self) -> Node:
        """Container of one `hstack(symbol, gap, label)` row per item."""

        style = self.style
        rows: list[Node] = []
        for i, item in enumerate(self.items):
            text_width = self.measurer.text_width(item.text, style.font_size, style.font_family)
            row = hstack(
                fixed(px(item.symbol.width), px(item.symbol.height)),
                fixed(px(style.symbol_spacing), px(1)),
                fixed(px(text_width), px(style.font_size)),
            )
            if i > 0:
                if self.layout == "horizontal":
                    row.with_margin(Spacing(left=px(style.item_spacing)))
                else:
                    row.with_margin(Spacing(top=px(style.item_spacing)))
            rows.append(row)
        container = hstack(*rows) if self.layout == "horizontal" else vstack(*rows)
        return container.with_padding(px(style.padding))

    def size(self) -> Size:
        if not self.items:
            return Size()
        return layout_simple(self.build_tree())

    def bounds(self, chart_width: float, chart_height: float) -> Rect:
        size = self.size()
        w, h = size.width, size.height
        left, right = EDGE_MARGIN, chart_width - w - EDGE_MARGIN
        top, bottom = EDGE_MARGIN, chart_height - h - EDGE_MARGIN
        center_x, center_y = (chart_width - w) / 2.0, (chart_height - h) / 2.0
        origins = {
            "top-left": (left, top),
            "top-right": (right, top),
            "top-center": (center_x, top),
            "bottom-left": (left, bottom),
            "bottom-right": (right, bottom),
            "bottom-center": (center_x, bottom),
            "left": (left, center_y),
            "right": (right, center_y),
            "none": (0.0, 0.0),
        }
        x, y = origins[self.position]
        return Rect(x, y, w, h)

    def commands(self, chart_width: float, chart_height: float) -> Group | None:
        if not self.visible:
            LOGGER.debug("legend not drawn (position=%s, items=%d)", self.position, len(self.items))
            return None

        style = self.style
        tree = self.build_tree()
        size = layout_simple(tree)
        bounds = self.bounds(chart_width, chart_height)

        children: list[DrawCommand] = []
        if style.background is not None or style.border_width > 0:
            children.append(
                RectCommand(
                    0.0,
                    0.0,
                    size.width,
                    size.height,
                    DrawStyle(
                        fill=style.background or "none",
                        stroke=style.border_color if style.border_width > 0 else None,
                        stroke_width=style.border_width if style.border_width > 0 else None,
                    ),
                )
            )

        text_style = DrawStyle(fill=style.text_color, font_size=style.font_size, font_family=style.font_family)
        for item, row in zip(self.items, tree.children):
            symbol_box, _, text_box = row.children
            sx = row.rect.x + symbol_box.rect.x
            sy = row.rect.y + symbol_box.rect.y
            children.append(Group(children=item.symbol.commands(), transform=(Translate(sx, sy),)))
            tx = row.rect.x + text_box.rect.x
            ty = row.rect.y + text_box.rect.y + style.font_size * BASELINE_RATIO
            children.append(Text(item.text, tx, ty, text_style))

        return Group(children=tuple(children), transform=(Translate(bounds.x, bounds.y),), css_class="legend")

    def render(self, chart_width: float, chart_height: float) -> str:
        group = self.commands(chart_width, chart_height)
        if group is None:
            return ""
        return SvgBackend().render([group])
