from __future__ import annotations

import logging
from typing import Any, Mapping

from dataviz.axes.axis import Axis, AxisRenderOptions
from dataviz.config import DEFAULT_AXIS_STYLE, AxisStyle, validate_axis_style
from dataviz.layout.margin import MarginConvention
from dataviz.layout.types import Rect, Spacing
from dataviz.legends.legend import Legend
from dataviz.render.commands import DrawCommand, DrawStyle, Group, Text, Translate
from dataviz.render.svg import svg_document
from dataviz.render.terminal import TerminalBackend
from dataviz.text import TextMeasurer


LOGGER = logging.getLogger(__name__)

TITLE_FONT_SIZE = 16.0


class Figure:
    """One chart canvas: a margin convention, up to two axes, a legend and marks.

    Marks and axes are drawn in plot-area coordinates (origin at the plot
    area's top-left); the legend is placed against the full canvas. Build
    scales over `x_range()` / `y_range()` so they line up with the axes.

    Example::

        fig = Figure(800, 600)
        x = LinearScale((0, 10), fig.x_range())
        y = LinearScale((0, 1), fig.y_range())
        fig.set_x_axis(Axis(x, "bottom")).set_y_axis(Axis(y, "left"))
        svg = fig.to_svg()
    """

    def __init__(self, width: float, height: float, margin: Spacing | None = None) -> None:
        self.convention = MarginConvention(width, height, margin) if margin is not None else MarginConvention(width, height)
        self.x_axis: Axis | None = None
        self.y_axis: Axis | None = None
        self.legend: Legend | None = None
        self.title = ""
        self.axis_style: AxisStyle = DEFAULT_AXIS_STYLE
        self.measurer: TextMeasurer | None = None
        self._marks: list[DrawCommand] = []

    @property
    def width(self) -> float:
        return float(self.convention.width)

    @property
    def height(self) -> float:
        return float(self.convention.height)

    @property
    def plot_area(self) -> Rect:
        return self.convention.plot_area

    def x_range(self) -> tuple[float, float]:
        return (0.0, self.plot_area.width)

    def y_range(self) -> tuple[float, float]:
        # Pixel y grows downward, so larger values sit higher.
        return (self.plot_area.height, 0.0)

    def set_x_axis(self, axis: Axis) -> "Figure":
        if not axis.is_horizontal:
            raise ValueError(f"x axis must be top or bottom, got {axis.orientation}")
        self.x_axis = axis
        return self

    def set_y_axis(self, axis: Axis) -> "Figure":
        if axis.is_horizontal:
            raise ValueError(f"y axis must be left or right, got {axis.orientation}")
        self.y_axis = axis
        return self

    def set_legend(self, legend: Legend) -> "Figure":
        self.legend = legend
        return self

    def set_title(self, text: str) -> "Figure":
        self.title = str(text)
        return self

    def set_axis_style(self, style: AxisStyle | Mapping[str, Any]) -> "Figure":
        self.axis_style = style if isinstance(style, AxisStyle) else validate_axis_style(style)
        return self

    def add_marks(self, *commands: DrawCommand) -> "Figure":
        self._marks.extend(commands)
        return self

    def commands(self) -> list[DrawCommand]:
        plot = self.plot_area
        if plot.width <= 0 or plot.height <= 0:
            LOGGER.debug("plot area %s is empty; margins exceed the canvas", plot)

        inner: list[DrawCommand] = []
        if self._marks:
            inner.append(Group(children=tuple(self._marks), css_class="marks"))
        for axis in (self.x_axis, self.y_axis):
            if axis is None:
                continue
            group = axis.commands(self._axis_options(axis, plot))
            if group is not None:
                inner.append(group)

        out: list[DrawCommand] = []
        if inner:
            out.append(Group(children=tuple(inner), transform=(Translate(plot.x, plot.y),), css_class="plot"))
        if self.title:
            out.append(
                Text(
                    self.title,
                    self.width / 2.0,
                    plot.y / 2.0,
                    DrawStyle(
                        fill=self.axis_style.text_color,
                        font_size=TITLE_FONT_SIZE,
                        font_family=self.axis_style.font_family,
                        font_weight="bold",
                        text_anchor="middle",
                        dominant_baseline="middle",
                    ),
                )
            )
        if self.legend is not None:
            group = self.legend.commands(self.width, self.height)
            if group is not None:
                out.append(group)
        return out

    def to_svg(self, background: str | None = None) -> str:
        return svg_document(self.width, self.height, self.commands(), background=background)

    def to_terminal(self, backend: TerminalBackend | None = None) -> str:
        return (backend or TerminalBackend()).render(self.width, self.height, self.commands())

    def _axis_options(self, axis: Axis, plot: Rect) -> AxisRenderOptions:
        position = {
            "bottom": plot.height,
            "top": 0.0,
            "left": 0.0,
            "right": plot.width,
        }[axis.orientation]
        reference = plot.width if axis.is_horizontal else plot.height
        return AxisRenderOptions(position=position, style=self.axis_style, reference=reference, measurer=self.measurer)
