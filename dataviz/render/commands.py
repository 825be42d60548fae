from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Literal, Union


TextAnchor = Literal["start", "middle", "end"]
DominantBaseline = Literal["auto", "middle", "hanging", "central", "alphabetic"]


@dataclass(frozen=True)
class DrawStyle:
    """Presentation attributes; `None` means "inherit / not set"."""

    stroke: str | None = None
    stroke_width: float | None = None
    stroke_dasharray: str | None = None
    stroke_linecap: str | None = None
    fill: str | None = None
    opacity: float | None = None
    font_size: float | None = None
    font_family: str | None = None
    font_weight: str | None = None
    text_anchor: TextAnchor | None = None
    dominant_baseline: DominantBaseline | None = None
    marker_start: str | None = None
    marker_end: str | None = None

    def __post_init__(self) -> None:
        if self.stroke_width is not None and self.stroke_width < 0:
            raise ValueError("DrawStyle stroke_width must be >= 0")
        if self.opacity is not None and (self.opacity < 0.0 or self.opacity > 1.0):
            raise ValueError("DrawStyle opacity must be in [0, 1]")
        if self.font_size is not None and self.font_size <= 0:
            raise ValueError("DrawStyle font_size must be > 0")

    def merged(self, other: "DrawStyle | None") -> "DrawStyle":
        """Copy of this style with every attribute `other` sets taking precedence."""
        if other is None:
            return self
        updates = {f.name: getattr(other, f.name) for f in fields(other) if getattr(other, f.name) is not None}
        return replace(self, **updates)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


EMPTY_STYLE = DrawStyle()


@dataclass(frozen=True)
class Translate:
    dx: float
    dy: float


@dataclass(frozen=True)
class Rotate:
    angle: float
    cx: float = 0.0
    cy: float = 0.0


Transform = Union[Translate, Rotate]


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    style: DrawStyle = EMPTY_STYLE


@dataclass(frozen=True)
class Text:
    text: str
    x: float
    y: float
    style: DrawStyle = EMPTY_STYLE
    transform: tuple[Transform, ...] = ()


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    style: DrawStyle = EMPTY_STYLE
    rx: float = 0.0


@dataclass(frozen=True)
class Path:
    d: str
    style: DrawStyle = EMPTY_STYLE


@dataclass(frozen=True)
class Marker:
    """Reusable marker definition; lines reference it by `id` via `marker_start` / `marker_end`."""

    id: str
    path: str
    width: float
    height: float
    ref_x: float = 0.0
    ref_y: float = 0.0
    orient: str = "auto"
    style: DrawStyle = EMPTY_STYLE

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("Marker requires a non-empty id")


@dataclass(frozen=True)
class Group:
    children: tuple["DrawCommand", ...] = ()
    transform: tuple[Transform, ...] = ()
    style: DrawStyle = EMPTY_STYLE
    css_class: str | None = None


DrawCommand = Union[Line, Text, Rect, Path, Group, Marker]


def translated(commands: tuple[DrawCommand, ...] | list[DrawCommand], dx: float, dy: float) -> Group:
    return Group(children=tuple(commands), transform=(Translate(dx, dy),))
