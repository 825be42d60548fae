from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Literal, Union

from dataviz.errors import UnitResolutionError


Unit = Literal["px", "%", "em"]


@dataclass(frozen=True)
class Length:
    """Length kept as a symbolic sum of pixel, percentage and em parts.

    Nothing is converted to pixels until `resolve` is called with the
    reference size (for `%`) and font size (for `em`), so chained layout
    arithmetic never accumulates rounding.
    """

    px: float = 0.0
    pct: float = 0.0
    em: float = 0.0

    @property
    def unit(self) -> str:
        parts = [name for name, v in (("px", self.px), ("%", self.pct), ("em", self.em)) if v != 0.0]
        if not parts:
            return "px"
        if len(parts) == 1:
            return parts[0]
        return "mixed"

    @property
    def value(self) -> float:
        unit = self.unit
        if unit == "px":
            return self.px
        if unit == "%":
            return self.pct
        if unit == "em":
            return self.em
        raise UnitResolutionError(f"mixed length has no single magnitude: {self}")

    @property
    def is_absolute(self) -> bool:
        return self.pct == 0.0 and self.em == 0.0

    def of(self, reference: float) -> "Length":
        """Fold the percentage part into pixels against a resolved reference."""
        return Length(px=self.px + self.pct * float(reference) / 100.0, em=self.em)

    def resolve(self, reference: float | None = None, font_size: float | None = None) -> float:
        total = self.px
        if self.pct != 0.0:
            if reference is None:
                raise UnitResolutionError("percentage length needs a reference size")
            total += self.pct * float(reference) / 100.0
        if self.em != 0.0:
            if font_size is None:
                raise UnitResolutionError("em length needs a font size")
            total += self.em * float(font_size)
        return total

    def __add__(self, other: object) -> "Length":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(px=self.px + other.px, pct=self.pct + other.pct, em=self.em + other.em)

    def __sub__(self, other: object) -> "Length":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(px=self.px - other.px, pct=self.pct - other.pct, em=self.em - other.em)

    def __neg__(self) -> "Length":
        return Length(px=-self.px, pct=-self.pct, em=-self.em)

    def __mul__(self, factor: object) -> "Length":
        if not isinstance(factor, (int, float)) or isinstance(factor, bool):
            return NotImplemented
        f = float(factor)
        return Length(px=self.px * f, pct=self.pct * f, em=self.em * f)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> "Length":
        if not isinstance(divisor, (int, float)) or isinstance(divisor, bool):
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError("length division by zero")
        return self * (1.0 / float(divisor))

    def __str__(self) -> str:
        unit = self.unit
        if unit == "mixed":
            return f"calc({_fmt(self.px)}px + {_fmt(self.pct)}% + {_fmt(self.em)}em)"
        return f"{_fmt(self.value)}{unit}"


LengthLike = Union[Length, int, float]


def px(value: float) -> Length:
    return Length(px=float(value))


def percent(value: float) -> Length:
    return Length(pct=float(value))


def em(value: float) -> Length:
    return Length(em=float(value))


ZERO = Length()


def as_length(value: LengthLike) -> Length:
    if isinstance(value, Length):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a Length or number, got {type(value).__name__}")
    if math.isnan(float(value)):
        raise ValueError("length must not be NaN")
    return px(float(value))


def same_unit_values(a: Length, b: Length) -> tuple[float, float, str]:
    """Return the raw magnitudes of two single-unit lengths sharing one unit."""

    ua = a.unit
    ub = b.unit
    if a == ZERO:
        ua = ub
    if b == ZERO:
        ub = ua
    if ua == "mixed" or ub == "mixed" or ua != ub:
        raise ValueError(f"range endpoints must share one unit, got {a} and {b}")
    return _component(a, ua), _component(b, ub), ua


def make_length(value: float, unit: str) -> Length:
    if unit == "%":
        return percent(value)
    if unit == "em":
        return em(value)
    return px(value)


def _component(length: Length, unit: str) -> float:
    if unit == "%":
        return length.pct
    if unit == "em":
        return length.em
    return length.px


def _fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
