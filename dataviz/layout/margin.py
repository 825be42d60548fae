from __future__ import annotations

from dataclasses import dataclass, field

from dataviz.layout.types import Rect, Spacing
from dataviz.units import LengthLike, px


def default_margin() -> Spacing:
    return Spacing(px(20), px(30), px(40), px(50))


def apply_margin(bounds: Rect, margin: Spacing, font_size: float | None = None) -> Rect:
    """Shrink `bounds` by `margin`; percentages resolve against the bounds' own size."""

    top, right, bottom, left = margin.resolve(bounds.width, bounds.height, font_size)
    return Rect(
        bounds.x + left,
        bounds.y + top,
        bounds.width - left - right,
        bounds.height - top - bottom,
    )


def inset(bounds: Rect, amount: LengthLike) -> Rect:
    return apply_margin(bounds, Spacing.uniform(amount))


def margins_for_axes(
    *,
    left: bool = False,
    right: bool = False,
    top: bool = False,
    bottom: bool = False,
    title: bool = False,
) -> Spacing:
    """Room for the axes present on each side (a chart title takes the top)."""

    if title:
        top_px = 40.0
    elif top:
        top_px = 30.0
    else:
        top_px = 10.0
    return Spacing(
        px(top_px),
        px(60.0 if right else 10.0),
        px(50.0 if bottom else 10.0),
        px(60.0 if left else 10.0),
    )


def split_horizontal(bounds: Rect, ratio: float) -> tuple[Rect, Rect]:
    if ratio < 0 or ratio > 1:
        raise ValueError(f"split ratio must be in [0, 1], got {ratio}")
    split = bounds.width * ratio
    return (
        Rect(bounds.x, bounds.y, split, bounds.height),
        Rect(bounds.x + split, bounds.y, bounds.width - split, bounds.height),
    )


def split_vertical(bounds: Rect, ratio: float) -> tuple[Rect, Rect]:
    if ratio < 0 or ratio > 1:
        raise ValueError(f"split ratio must be in [0, 1], got {ratio}")
    split = bounds.height * ratio
    return (
        Rect(bounds.x, bounds.y, bounds.width, split),
        Rect(bounds.x, bounds.y + split, bounds.width, bounds.height - split),
    )


@dataclass(frozen=True)
class MarginConvention:
    """Outer canvas split into a plot area and four margin bands.

    Example::

        mc = MarginConvention(800, 600, Spacing(px(40), px(20), px(50), px(60)))
        mc.plot_area  # Rect(60, 40, 720, 510)
    """

    width: float
    height: float
    margin: Spacing = field(default_factory=lambda: Spacing(px(40), px(20), px(50), px(60)))
    font_size: float | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("MarginConvention width/height must be > 0")

    @property
    def bounds(self) -> Rect:
        return Rect(0.0, 0.0, float(self.width), float(self.height))

    def _sides(self) -> tuple[float, float, float, float]:
        return self.margin.resolve(self.width, self.height, self.font_size)

    @property
    def plot_area(self) -> Rect:
        return apply_margin(self.bounds, self.margin, self.font_size)

    @property
    def plot_width(self) -> float:
        return self.plot_area.width

    @property
    def plot_height(self) -> float:
        return self.plot_area.height

    @property
    def left_area(self) -> Rect:
        top, _, _, left = self._sides()
        return Rect(0.0, top, left, self.plot_height)

    @property
    def right_area(self) -> Rect:
        top, right, _, _ = self._sides()
        return Rect(self.plot_area.right, top, right, self.plot_height)

    @property
    def top_area(self) -> Rect:
        top, _, _, left = self._sides()
        return Rect(left, 0.0, self.plot_width, top)

    @property
    def bottom_area(self) -> Rect:
        _, _, bottom, left = self._sides()
        return Rect(left, self.plot_area.bottom, self.plot_width, bottom)

    def with_padding(self, padding: Spacing) -> Rect:
        return apply_margin(self.plot_area, padding, self.font_size)
