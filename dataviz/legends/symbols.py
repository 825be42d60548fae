from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal, Protocol

from dataviz.config import is_hex_color
from dataviz.render.commands import DrawCommand, DrawStyle, Line, Path, Rect
from dataviz.render.svg import fmt_num


LOGGER = logging.getLogger(__name__)

MarkerShape = Literal["circle", "square", "diamond", "triangle", "cross", "x", "dot"]
MARKER_SHAPES: tuple[MarkerShape, ...] = ("circle", "square", "diamond", "triangle", "cross", "x", "dot")

# Triangle height relative to its base (equilateral).
_TRIANGLE_RATIO = 0.866


class Symbol(Protocol):
    """Anything a legend item can draw in its symbol box (origin at top-left)."""

    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def commands(self) -> tuple[DrawCommand, ...]: ...


def _check_color(color: str) -> None:
    if not is_hex_color(color):
        raise ValueError(f"symbol color must be a hex color, got {color!r}")


@dataclass(frozen=True)
class ColorSwatch:
    color: str
    size: float = 12.0

    def __post_init__(self) -> None:
        _check_color(self.color)
        if self.size <= 0:
            raise ValueError("ColorSwatch size must be > 0")

    @property
    def width(self) -> float:
        return self.size

    @property
    def height(self) -> float:
        return self.size

    def commands(self) -> tuple[DrawCommand, ...]:
        return (Rect(0.0, 0.0, self.size, self.size, DrawStyle(fill=self.color, stroke="#000000", stroke_width=0.5)),)


@dataclass(frozen=True)
class MarkerSymbol:
    shape: MarkerShape
    color: str
    size: float = 10.0

    def __post_init__(self) -> None:
        _check_color(self.color)
        if self.size <= 0:
            raise ValueError("MarkerSymbol size must be > 0")

    @property
    def width(self) -> float:
        return self.size

    @property
    def height(self) -> float:
        return self.size

    def commands(self) -> tuple[DrawCommand, ...]:
        return (marker_path(self.shape, self.size / 2.0, self.size / 2.0, self.size, self.color),)


@dataclass(frozen=True)
class LineSample:
    """Stroke sample, optionally dashed and with a marker at its midpoint."""

    color: str
    stroke_width: float = 2.0
    length: float = 20.0
    dash: str = ""
    marker: MarkerShape | None = None
    marker_size: float = 6.0

    def __post_init__(self) -> None:
        _check_color(self.color)
        if self.stroke_width <= 0 or self.length <= 0:
            raise ValueError("LineSample stroke_width and length must be > 0")

    @property
    def width(self) -> float:
        return self.length

    @property
    def height(self) -> float:
        if self.marker is not None:
            return max(self.stroke_width, self.marker_size)
        return self.stroke_width

    def commands(self) -> tuple[DrawCommand, ...]:
        mid = self.height / 2.0
        style = DrawStyle(stroke=self.color, stroke_width=self.stroke_width, stroke_dasharray=self.dash or None)
        out: list[DrawCommand] = [Line(0.0, mid, self.length, mid, style)]
        if self.marker is not None:
            out.append(marker_path(self.marker, self.length / 2.0, mid, self.marker_size, self.color))
        return tuple(out)


def marker_path(shape: str, cx: float, cy: float, size: float, color: str) -> Path:
    """Marker outline centred on (cx, cy); unknown shapes fall back to a circle."""

    h = size / 2.0
    if shape == "square":
        d = _polygon([(cx - h, cy - h), (cx + h, cy - h), (cx + h, cy + h), (cx - h, cy + h)])
        return Path(d, DrawStyle(fill=color))
    if shape == "diamond":
        d = _polygon([(cx, cy - h), (cx + h, cy), (cx, cy + h), (cx - h, cy)])
        return Path(d, DrawStyle(fill=color))
    if shape == "triangle":
        th = size * _TRIANGLE_RATIO
        d = _polygon([(cx, cy - th / 2.0), (cx + h, cy + th / 2.0), (cx - h, cy + th / 2.0)])
        return Path(d, DrawStyle(fill=color))
    if shape in ("cross", "x"):
        if shape == "cross":
            d = f"M{fmt_num(cx - h)},{fmt_num(cy)} L{fmt_num(cx + h)},{fmt_num(cy)} M{fmt_num(cx)},{fmt_num(cy - h)} L{fmt_num(cx)},{fmt_num(cy + h)}"
        else:
            d = (
                f"M{fmt_num(cx - h)},{fmt_num(cy - h)} L{fmt_num(cx + h)},{fmt_num(cy + h)} "
                f"M{fmt_num(cx + h)},{fmt_num(cy - h)} L{fmt_num(cx - h)},{fmt_num(cy + h)}"
            )
        return Path(d, DrawStyle(stroke=color, stroke_width=2.0, stroke_linecap="round", fill="none"))
    if shape == "dot":
        return Path(_circle(cx, cy, size / 4.0), DrawStyle(fill=color))
    if shape != "circle":
        LOGGER.debug("unknown marker shape %r; drawing a circle", shape)
    return Path(_circle(cx, cy, h), DrawStyle(fill=color, stroke="#ffffff", stroke_width=1.0))


def _polygon(points: list[tuple[float, float]]) -> str:
    head, *rest = points
    parts = [f"M{fmt_num(head[0])},{fmt_num(head[1])}"]
    parts.extend(f"L{fmt_num(x)},{fmt_num(y)}" for x, y in rest)
    parts.append("Z")
    return " ".join(parts)


def _circle(cx: float, cy: float, r: float) -> str:
    # Two half arcs; SVG has no single-arc full circle.
    return (
        f"M{fmt_num(cx - r)},{fmt_num(cy)} "
        f"A{fmt_num(r)},{fmt_num(r)} 0 1 0 {fmt_num(cx + r)},{fmt_num(cy)} "
        f"A{fmt_num(r)},{fmt_num(r)} 0 1 0 {fmt_num(cx - r)},{fmt_num(cy)} Z"
    )


def swatch(color: str) -> ColorSwatch:
    return ColorSwatch(color)


def line(color: str) -> LineSample:
    return LineSample(color)


def dashed_line(color: str) -> LineSample:
    return LineSample(color, dash="4,2")


def line_with_marker(color: str, shape: MarkerShape = "circle") -> LineSample:
    return LineSample(color, marker=shape)


def marker(shape: MarkerShape, color: str) -> MarkerSymbol:
    return MarkerSymbol(shape, color)
