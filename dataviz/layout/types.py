from __future__ import annotations

from dataclasses import dataclass
import math

from dataviz.units import ZERO, Length, LengthLike, as_length


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def translated(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def inset(self, amount: float) -> "Rect":
        return Rect(self.x + amount, self.y + amount, self.width - 2 * amount, self.height - 2 * amount)


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Spacing:
    """Four-sided lengths used for margins and paddings."""

    top: Length = ZERO
    right: Length = ZERO
    bottom: Length = ZERO
    left: Length = ZERO

    def __post_init__(self) -> None:
        for side in ("top", "right", "bottom", "left"):
            object.__setattr__(self, side, as_length(getattr(self, side)))

    @classmethod
    def uniform(cls, value: LengthLike) -> "Spacing":
        v = as_length(value)
        return cls(v, v, v, v)

    @classmethod
    def symmetric(cls, vertical: LengthLike = ZERO, horizontal: LengthLike = ZERO) -> "Spacing":
        v = as_length(vertical)
        h = as_length(horizontal)
        return cls(v, h, v, h)

    def resolve(
        self,
        reference_width: float | None = None,
        reference_height: float | None = None,
        font_size: float | None = None,
    ) -> tuple[float, float, float, float]:
        """(top, right, bottom, left) in pixels; left/right percentages use the width, top/bottom the height."""
        return (
            self.top.resolve(reference_height, font_size),
            self.right.resolve(reference_width, font_size),
            self.bottom.resolve(reference_height, font_size),
            self.left.resolve(reference_width, font_size),
        )

    def absolute(self, font_size: float) -> tuple[float, float, float, float]:
        """Like `resolve` with percentage parts counted as zero."""
        return (
            _absolute(self.top, font_size),
            _absolute(self.right, font_size),
            _absolute(self.bottom, font_size),
            _absolute(self.left, font_size),
        )


@dataclass(frozen=True)
class Constraints:
    min_width: float = 0.0
    max_width: float = math.inf
    min_height: float = 0.0
    max_height: float = math.inf

    def __post_init__(self) -> None:
        if self.min_width < 0 or self.min_height < 0:
            raise ValueError("constraint minimums must be >= 0")
        if self.max_width < self.min_width or self.max_height < self.min_height:
            raise ValueError("constraint maximums must be >= minimums")

    @classmethod
    def unconstrained(cls) -> "Constraints":
        return cls()

    @classmethod
    def loose(cls, width: float, height: float) -> "Constraints":
        return cls(0.0, float(width), 0.0, float(height))

    @classmethod
    def tight(cls, width: float, height: float) -> "Constraints":
        return cls(float(width), float(width), float(height), float(height))

    @property
    def has_bounded_width(self) -> bool:
        return math.isfinite(self.max_width)

    @property
    def has_bounded_height(self) -> bool:
        return math.isfinite(self.max_height)

    def constrain(self, width: float, height: float) -> Size:
        return Size(
            min(self.max_width, max(self.min_width, width)),
            min(self.max_height, max(self.min_height, height)),
        )


def _absolute(length: Length, font_size: float) -> float:
    return length.px + length.em * font_size
