from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Literal

from dataviz.axes.formatters import TickFormatter, default_formatter
from dataviz.config import DEFAULT_AXIS_STYLE, AxisStyle
from dataviz.render.commands import DrawStyle, Group, Line, Rotate, Text
from dataviz.render.svg import SvgBackend
from dataviz.scales.base import DEFAULT_TICK_COUNT, Scale
from dataviz.text import DEFAULT_MEASURER, TextMeasurer
from dataviz.units import ZERO, Length, LengthLike, as_length, px


LOGGER = logging.getLogger(__name__)

Orientation = Literal["top", "bottom", "left", "right"]
ORIENTATIONS: tuple[Orientation, ...] = ("top", "bottom", "left", "right")

# Gap between the outer edge of the tick labels and the axis title.
TITLE_GAP = 5.0


@dataclass(frozen=True)
class Tick:
    value: Any
    position: float
    label: str


@dataclass(frozen=True)
class AxisRenderOptions:
    """Per-render inputs.

    `position` is the perpendicular baseline of the axis (y for horizontal
    axes, x for vertical ones). `reference` resolves percentage lengths and
    `style.font_size` resolves em lengths.
    """

    position: LengthLike = 0.0
    style: AxisStyle = DEFAULT_AXIS_STYLE
    reference: float | None = None
    measurer: TextMeasurer | None = None


class Axis:
    """Orientation-aware axis over any scale.

    Example::

        axis = Axis(LinearScale((0, 100), (0, 500)), "bottom").title("X Axis").tick_count(10)
        svg = axis.render(AxisRenderOptions(position=300))
    """

    def __init__(self, scale: Scale, orientation: Orientation = "bottom") -> None:
        if orientation not in ORIENTATIONS:
            raise ValueError(f"unknown axis orientation: {orientation}")
        self._scale = scale
        self._orientation: Orientation = orientation
        self._title = ""
        self._tick_count = DEFAULT_TICK_COUNT
        self._tick_size: Length = px(6)
        self._tick_padding: Length = px(3)
        self._formatter: TickFormatter = default_formatter
        self._show_grid = False
        self._grid_length: Length = ZERO

    @property
    def scale(self) -> Scale:
        return self._scale

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def is_horizontal(self) -> bool:
        return self._orientation in ("top", "bottom")

    @property
    def title_text(self) -> str:
        return self._title

    @property
    def show_grid(self) -> bool:
        return self._show_grid

    def title(self, text: str) -> "Axis":
        self._title = str(text)
        return self

    def tick_count(self, count: int) -> "Axis":
        self._tick_count = int(count)
        return self

    def tick_size(self, size: LengthLike) -> "Axis":
        self._tick_size = as_length(size)
        return self

    def tick_padding(self, padding: LengthLike) -> "Axis":
        self._tick_padding = as_length(padding)
        return self

    def tick_format(self, formatter: TickFormatter) -> "Axis":
        self._formatter = formatter
        return self

    def grid(self, length: LengthLike) -> "Axis":
        self._show_grid = True
        self._grid_length = as_length(length)
        return self

    def ticks(self, reference: float | None = None, font_size: float | None = None) -> list[Tick]:
        out: list[Tick] = []
        for value in self._scale.ticks(self._tick_count):
            position = self._scale.tick_position(value).resolve(reference, font_size)
            # Formatter errors propagate to the caller.
            out.append(Tick(value=value, position=position, label=self._formatter(value)))
        return out

    def thickness(self, options: AxisRenderOptions | None = None) -> float:
        """Perpendicular extent of ticks, labels and title beyond the axis line."""

        opts = options or AxisRenderOptions()
        ticks = self.ticks(opts.reference, opts.style.font_size)
        if not ticks:
            return 0.0
        metrics = self._metrics(opts, ticks)
        if self._title:
            return metrics["title_offset"] + opts.style.title_font_size / 2.0
        return metrics["label_offset"] + metrics["label_extent"]

    def commands(self, options: AxisRenderOptions | None = None) -> Group | None:
        opts = options or AxisRenderOptions()
        style = opts.style
        ticks = self.ticks(opts.reference, style.font_size)
        if not ticks:
            LOGGER.debug("axis-%s has no ticks; nothing to draw", self._orientation)
            return None

        r0, r1 = (r.resolve(opts.reference, style.font_size) for r in self._scale.range())
        pos = as_length(opts.position).resolve(opts.reference, style.font_size)
        tick_size = self._tick_size.resolve(opts.reference, style.font_size)
        metrics = self._metrics(opts, ticks)
        # Outward is +perp for bottom/right and -perp for top/left.
        sign = 1.0 if self._orientation in ("bottom", "right") else -1.0

        line_style = DrawStyle(stroke=style.stroke_color, stroke_width=style.stroke_width)
        grid_style = DrawStyle(
            stroke=style.grid_stroke_color,
            stroke_width=style.grid_stroke_width,
            stroke_dasharray=style.grid_dash_array or None,
        )
        label_style = DrawStyle(
            fill=style.text_color,
            font_size=style.font_size,
            font_family=style.font_family,
            **self._label_alignment(),
        )

        children: list[Any] = [self._segment(r0, pos, r1, pos, line_style)]
        grid_length = self._grid_length.resolve(opts.reference, style.font_size) if self._show_grid else 0.0
        label_perp = pos + sign * metrics["label_offset"]
        for tick in ticks:
            children.append(self._segment(tick.position, pos, tick.position, pos + sign * tick_size, line_style))
            if self._show_grid:
                children.append(self._segment(tick.position, pos, tick.position, pos - sign * grid_length, grid_style))
            x, y = self._point(tick.position, label_perp)
            children.append(Text(tick.label, x, y, label_style))

        if self._title:
            children.append(self._title_command(style, (r0 + r1) / 2.0, pos + sign * metrics["title_offset"]))

        return Group(children=tuple(children), css_class=f"axis axis-{self._orientation}")

    def render(self, options: AxisRenderOptions | None = None) -> str:
        group = self.commands(options)
        if group is None:
            return ""
        return SvgBackend().render([group])

    def _metrics(self, opts: AxisRenderOptions, ticks: list[Tick]) -> dict[str, float]:
        style = opts.style
        tick_size = self._tick_size.resolve(opts.reference, style.font_size)
        tick_padding = self._tick_padding.resolve(opts.reference, style.font_size)
        label_offset = tick_size + tick_padding + style.font_size / 2.0
        if self.is_horizontal:
            label_extent = style.font_size
        else:
            measurer = opts.measurer or DEFAULT_MEASURER
            label_extent = max(measurer.text_width(t.label, style.font_size, style.font_family) for t in ticks)
        title_offset = label_offset + label_extent + TITLE_GAP + style.title_font_size / 2.0
        return {"label_offset": label_offset, "label_extent": label_extent, "title_offset": title_offset}

    def _label_alignment(self) -> dict[str, str]:
        if self._orientation == "bottom":
            return {"text_anchor": "middle", "dominant_baseline": "hanging"}
        if self._orientation == "top":
            return {"text_anchor": "middle", "dominant_baseline": "auto"}
        if self._orientation == "left":
            return {"text_anchor": "end", "dominant_baseline": "middle"}
        return {"text_anchor": "start", "dominant_baseline": "middle"}

    def _title_command(self, style: AxisStyle, along: float, perp: float) -> Text:
        title_style = DrawStyle(
            fill=style.text_color,
            font_size=style.title_font_size,
            font_family=style.font_family,
            font_weight=style.title_font_weight,
            text_anchor="middle",
            dominant_baseline="middle",
        )
        x, y = self._point(along, perp)
        if self.is_horizontal:
            return Text(self._title, x, y, title_style)
        angle = 90.0 if self._orientation == "left" else -90.0
        return Text(self._title, x, y, title_style, transform=(Rotate(angle, x, y),))

    def _point(self, along: float, perp: float) -> tuple[float, float]:
        if self.is_horizontal:
            return along, perp
        return perp, along

    def _segment(self, a_along: float, a_perp: float, b_along: float, b_perp: float, style: DrawStyle) -> Line:
        x1, y1 = self._point(a_along, a_perp)
        x2, y2 = self._point(b_along, b_perp)
        return Line(x1, y1, x2, y2, style)
