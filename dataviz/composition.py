from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Callable, Literal, Sequence, Union

from dataviz.figure import Figure
from dataviz.layout.grid import GridLayout, auto_grid
from dataviz.layout.margin import apply_margin, default_margin
from dataviz.layout.types import Rect, Spacing
from dataviz.render.commands import DrawCommand, DrawStyle, Group, Rect as RectCommand, Text, Translate
from dataviz.render.svg import svg_document
from dataviz.render.terminal import TerminalBackend
from dataviz.units import Length, LengthLike, as_length, px


LOGGER = logging.getLogger(__name__)

CompositionLayout = Literal["grid", "stack", "custom", "dashboard"]
LAYOUTS: tuple[CompositionLayout, ...] = ("grid", "stack", "custom", "dashboard")

# Called with the chart's local bounds (origin at 0, 0).
ChartRenderer = Callable[[Rect], Union[Figure, Sequence[DrawCommand]]]
Chart = Union[Figure, ChartRenderer]

TITLE_HEIGHT = 30.0
TITLE_FONT_SIZE = 18.0
CHART_TITLE_HEIGHT = 20.0
CHART_TITLE_FONT_SIZE = 12.0
BORDER_COLOR = "#cccccc"


@dataclass(frozen=True)
class ChartSpec:
    """One chart in a composition and where it goes.

    `row`/`col` pin a grid or dashboard cell; left as None the chart takes the
    next cell in row-major order. `bounds` is only read by the custom layout
    and is relative to the composition's content area.
    """

    chart: Chart
    row: int | None = None
    col: int | None = None
    row_span: int = 1
    col_span: int = 1
    bounds: Rect | None = None
    title: str = ""
    margin: Spacing = field(default_factory=lambda: Spacing.uniform(px(5)))

    def __post_init__(self) -> None:
        if self.row_span < 1 or self.col_span < 1:
            raise ValueError("row_span and col_span must be >= 1")
        if (self.row is None) != (self.col is None):
            raise ValueError("row and col must be given together")
        if self.row is not None and (self.row < 0 or self.col < 0):
            raise ValueError("row and col must be >= 0")


class Composition:
    """Several charts drawn into one canvas.

    Example::

        comp = side_by_side(900, 400, left_figure, lambda box: build(box.width, box.height))
        comp.set_title("Quarterly results")
        svg = comp.to_svg()
    """

    def __init__(
        self,
        width: float,
        height: float,
        layout: CompositionLayout = "grid",
        *,
        rows: int = 1,
        cols: int = 1,
        gap: LengthLike = px(10),
        margin: Spacing | None = None,
        title: str = "",
        background: str | None = "#ffffff",
        border: bool = False,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("composition width/height must be >= 0")
        self.width = float(width)
        self.height = float(height)
        self.layout: CompositionLayout = "grid"
        self.set_layout(layout)
        self.rows = rows
        self.cols = cols
        self.gap: Length = as_length(gap)
        self.margin = margin if margin is not None else default_margin()
        self.title = title
        self.background = background
        self.border = border
        self.charts: list[ChartSpec] = []

    def set_layout(self, layout: CompositionLayout) -> "Composition":
        if layout not in LAYOUTS:
            raise ValueError(f"unknown composition layout: {layout}")
        self.layout = layout
        return self

    def set_grid(self, rows: int, cols: int) -> "Composition":
        self.rows = rows
        self.cols = cols
        return self

    def set_gap(self, gap: LengthLike) -> "Composition":
        self.gap = as_length(gap)
        return self

    def set_margin(self, margin: Spacing) -> "Composition":
        self.margin = margin
        return self

    def set_title(self, title: str) -> "Composition":
        self.title = str(title)
        return self

    def set_background(self, color: str | None) -> "Composition":
        self.background = color
        return self

    def set_border(self, enabled: bool = True) -> "Composition":
        self.border = enabled
        return self

    def add_chart(self, chart: Chart | ChartSpec) -> "Composition":
        self.charts.append(chart if isinstance(chart, ChartSpec) else ChartSpec(chart))
        return self

    def content_area(self) -> Rect:
        """Canvas minus the outer margin and the title band."""

        content = apply_margin(Rect(0.0, 0.0, self.width, self.height), self.margin)
        if self.title:
            content = Rect(content.x, content.y + TITLE_HEIGHT, content.width, content.height - TITLE_HEIGHT)
        return content

    def placements(self) -> list[tuple[ChartSpec, Rect]]:
        """Cell of every placed chart, before its own margin and title."""

        content = self.content_area()
        if self.layout == "stack":
            return self._stack(content)
        if self.layout == "custom":
            return self._custom(content)
        if self.layout == "dashboard":
            return self._dashboard(content)
        return self._grid(content)

    def commands(self) -> list[DrawCommand]:
        out: list[DrawCommand] = []
        if self.border:
            out.append(
                RectCommand(0.0, 0.0, self.width, self.height, DrawStyle(fill="none", stroke=BORDER_COLOR, stroke_width=1.0))
            )
        if self.title:
            top = apply_margin(Rect(0.0, 0.0, self.width, self.height), self.margin)
            out.append(
                Text(
                    self.title,
                    top.x + top.width / 2.0,
                    top.y + TITLE_HEIGHT / 2.0,
                    DrawStyle(font_size=TITLE_FONT_SIZE, font_weight="bold", text_anchor="middle", dominant_baseline="middle"),
                )
            )
        for spec, cell in self.placements():
            out.extend(self._chart_commands(spec, cell))
        return out

    def to_svg(self) -> str:
        return svg_document(self.width, self.height, self.commands(), background=self.background)

    def to_terminal(self, backend: TerminalBackend | None = None) -> str:
        return (backend or TerminalBackend()).render(self.width, self.height, self.commands())

    def _chart_commands(self, spec: ChartSpec, cell: Rect) -> list[DrawCommand]:
        bounds = apply_margin(cell, spec.margin)
        out: list[DrawCommand] = []
        if spec.title:
            out.append(
                Text(
                    spec.title,
                    bounds.x + bounds.width / 2.0,
                    bounds.y + CHART_TITLE_HEIGHT / 2.0,
                    DrawStyle(
                        font_size=CHART_TITLE_FONT_SIZE,
                        font_weight="bold",
                        text_anchor="middle",
                        dominant_baseline="middle",
                    ),
                )
            )
            bounds = Rect(bounds.x, bounds.y + CHART_TITLE_HEIGHT, bounds.width, bounds.height - CHART_TITLE_HEIGHT)
        if bounds.width <= 0 or bounds.height <= 0:
            LOGGER.debug("chart cell %s has no room left after margin and title", cell)

        chart = spec.chart
        if not isinstance(chart, Figure):
            chart = chart(Rect(0.0, 0.0, max(0.0, bounds.width), max(0.0, bounds.height)))
        if isinstance(chart, Figure):
            if chart.width > bounds.width + 1e-9 or chart.height > bounds.height + 1e-9:
                LOGGER.debug(
                    "figure %gx%g overflows its %gx%g cell",
                    chart.width,
                    chart.height,
                    bounds.width,
                    bounds.height,
                )
            children = tuple(chart.commands())
        else:
            children = tuple(chart)
        out.append(Group(children=children, transform=(Translate(bounds.x, bounds.y),), css_class="chart"))
        return out

    def _grid_shape(self, n: int) -> tuple[int, int]:
        rows, cols = self.rows, self.cols
        if rows <= 0 and cols <= 0:
            return auto_grid(n)
        if rows <= 0:
            return (math.ceil(n / cols), cols)
        if cols <= 0:
            return (rows, math.ceil(n / rows))
        return (rows, cols)

    def _grid_cells(self, content: Rect, rows: int, cols: int) -> GridLayout:
        return GridLayout(content.width, content.height, rows, cols, gap=self.gap)

    def _grid(self, content: Rect) -> list[tuple[ChartSpec, Rect]]:
        rows, cols = self._grid_shape(len(self.charts))
        if rows <= 0 or cols <= 0:
            return []
        grid = self._grid_cells(content, rows, cols)
        out: list[tuple[ChartSpec, Rect]] = []
        for i, spec in enumerate(self.charts):
            if spec.row is not None and spec.col is not None:
                row, col = spec.row, spec.col
            elif i < rows * cols:
                row, col = divmod(i, cols)
            else:
                LOGGER.debug("chart %d does not fit a %dx%d grid; skipped", i, rows, cols)
                continue
            if row >= rows or col >= cols:
                LOGGER.debug("chart %d at (%d, %d) is outside a %dx%d grid; skipped", i, row, col, rows, cols)
                continue
            cell = grid.cell_with_span(row, col, spec.row_span, spec.col_span)
            out.append((spec, cell.translated(content.x, content.y)))
        return out

    def _stack(self, content: Rect) -> list[tuple[ChartSpec, Rect]]:
        n = len(self.charts)
        if n == 0:
            return []
        gap = self.gap.resolve(content.height)
        height = (content.height - (n - 1) * gap) / n
        return [
            (spec, Rect(content.x, content.y + i * (height + gap), content.width, height))
            for i, spec in enumerate(self.charts)
        ]

    def _custom(self, content: Rect) -> list[tuple[ChartSpec, Rect]]:
        out: list[tuple[ChartSpec, Rect]] = []
        for i, spec in enumerate(self.charts):
            if spec.bounds is None:
                raise ValueError(f"chart {i} needs bounds in a custom layout")
            out.append((spec, spec.bounds.translated(content.x, content.y)))
        return out

    def _dashboard(self, content: Rect) -> list[tuple[ChartSpec, Rect]]:
        pinned = [spec for spec in self.charts if spec.row is not None and spec.col is not None]
        if not pinned:
            LOGGER.debug("dashboard has no positioned charts; using a grid")
            return self._grid(content)
        rows = max(spec.row + spec.row_span for spec in pinned)
        cols = max(spec.col + spec.col_span for spec in pinned)
        grid = self._grid_cells(content, rows, cols)
        if len(pinned) < len(self.charts):
            LOGGER.debug("%d dashboard charts without a position skipped", len(self.charts) - len(pinned))
        return [
            (spec, grid.cell_with_span(spec.row, spec.col, spec.row_span, spec.col_span).translated(content.x, content.y))
            for spec in pinned
        ]


def grid_composition(width: float, height: float, rows: int, cols: int, *charts: Chart) -> Composition:
    comp = Composition(width, height, "grid", rows=rows, cols=cols)
    for chart in charts:
        comp.add_chart(chart)
    return comp


def stack_composition(width: float, height: float, *charts: Chart) -> Composition:
    comp = Composition(width, height, "stack")
    for chart in charts:
        comp.add_chart(chart)
    return comp


def dashboard_composition(width: float, height: float, *charts: ChartSpec) -> Composition:
    comp = Composition(width, height, "dashboard")
    for spec in charts:
        comp.add_chart(spec)
    return comp


def custom_composition(width: float, height: float, *charts: ChartSpec) -> Composition:
    comp = Composition(width, height, "custom")
    for spec in charts:
        comp.add_chart(spec)
    return comp


def side_by_side(width: float, height: float, left: Chart, right: Chart) -> Composition:
    return grid_composition(width, height, 1, 2, left, right)


def top_and_bottom(width: float, height: float, top: Chart, bottom: Chart) -> Composition:
    return grid_composition(width, height, 2, 1, top, bottom)


def quad(
    width: float,
    height: float,
    top_left: Chart,
    top_right: Chart,
    bottom_left: Chart,
    bottom_right: Chart,
) -> Composition:
    return grid_composition(width, height, 2, 2, top_left, top_right, bottom_left, bottom_right)
