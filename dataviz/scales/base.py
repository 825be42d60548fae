from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
import math
from typing import Any, Sequence

import numpy as np

from dataviz.errors import ScaleDomainError
from dataviz.units import ZERO, Length, LengthLike, as_length, make_length, same_unit_values


NICE_MULTIPLIERS = (1.0, 2.0, 2.5, 5.0, 10.0)
DEFAULT_TICK_COUNT = 10


class Scale(ABC):
    """Capability set shared by every scale; axes consume nothing else."""

    kind: str = "scale"

    def __init__(self, range_: Sequence[LengthLike]) -> None:
        if len(range_) != 2:
            raise ValueError("range must have exactly two endpoints")
        r0 = as_length(range_[0])
        r1 = as_length(range_[1])
        self._r0, self._r1, self._unit = same_unit_values(r0, r1)
        self._range = (make_length(self._r0, self._unit), make_length(self._r1, self._unit))

    @abstractmethod
    def apply(self, value: Any) -> Length:
        ...

    @abstractmethod
    def invert(self, position: LengthLike) -> Any:
        ...

    @abstractmethod
    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[Any]:
        ...

    @abstractmethod
    def domain(self) -> Any:
        ...

    def range(self) -> tuple[Length, Length]:
        return self._range

    def tick_position(self, value: Any) -> Length:
        return self.apply(value)

    @property
    def inverted(self) -> bool:
        return self._r0 > self._r1

    def _out(self, raw: float) -> Length:
        return make_length(raw, self._unit)

    def _lerp_range(self, t: float) -> float:
        if t == 0.0:
            return self._r0
        if t == 1.0:
            return self._r1
        return (1.0 - t) * self._r0 + t * self._r1

    def _range_fraction(self, position: LengthLike) -> float:
        raw = self._in_range_unit(position)
        span = self._r1 - self._r0
        if span == 0:
            return 0.0
        return (raw - self._r0) / span

    def _in_range_unit(self, position: LengthLike) -> float:
        if isinstance(position, Length):
            if position != ZERO and position.unit != self._unit:
                raise ValueError(f"position {position} is not in the range unit {self._unit}")
            return {"px": position.px, "%": position.pct, "em": position.em}[self._unit]
        value = float(position)
        if math.isnan(value):
            raise ScaleDomainError("cannot invert NaN position")
        return value


def coerce_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ScaleDomainError(f"expected a number, got {type(value).__name__}")
    v = float(value)
    if math.isnan(v):
        raise ScaleDomainError("NaN is outside every domain")
    return v


def clamp_unit(t: float) -> float:
    return min(1.0, max(0.0, t))


def nice_step(span: float, count: int) -> float:
    """Smallest `k * 10**e` (k in 1, 2, 2.5, 5, 10) splitting `span` into at most `count` intervals."""

    if count <= 0:
        count = DEFAULT_TICK_COUNT
    span = abs(span)
    if span == 0 or not math.isfinite(span):
        return 0.0
    raw = span / count
    base = 10.0 ** math.floor(math.log10(raw))
    for k in NICE_MULTIPLIERS:
        step = base * k
        if step >= raw * (1.0 - 1e-12):
            return step
    return base * 10.0


def linear_ticks(d0: float, d1: float, count: int) -> list[float]:
    """Multiples of a nice step inside the domain, between `ceil(count / 2)` and `2 * count` of them."""

    if count <= 0:
        count = DEFAULT_TICK_COUNT
    lo, hi = min(d0, d1), max(d0, d1)
    if lo == hi:
        return [lo]
    step = nice_step(hi - lo, count)
    if step == 0:
        return [lo]
    start, stop = _multiple_bounds(lo, hi, step)
    minimum = math.ceil(count / 2)
    # A step chosen from the span alone can leave too few multiples inside an offset domain.
    while stop - start + 1 < minimum:
        step = _smaller_nice_step(step)
        start, stop = _multiple_bounds(lo, hi, step)
    decimals = decimals_from_step(step)
    ticks = np.arange(start, stop + 1, dtype=np.float64) * step
    # Normalize floating-point drift so values like 0.30000000000000004 become 0.3.
    ticks = np.round(ticks, decimals)
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return [float(v) for v in ticks if lo <= v <= hi]


def _multiple_bounds(lo: float, hi: float, step: float) -> tuple[int, int]:
    eps = 1e-9
    return math.ceil(lo / step - eps), math.floor(hi / step + eps)


def _smaller_nice_step(step: float) -> float:
    """Next rung down the `{10, 5, 2.5, 2, 1} * 10**e` ladder."""

    base = 10.0 ** math.floor(math.log10(step))
    for k in reversed(NICE_MULTIPLIERS[:-1]):
        candidate = base * k
        if candidate < step * (1.0 - 1e-9):
            return candidate
    return base * 0.5


def decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(repr(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)


def nice_domain(d0: float, d1: float, count: int) -> tuple[float, float]:
    lo, hi = min(d0, d1), max(d0, d1)
    if lo == hi:
        return d0, d1
    step = nice_step(hi - lo, count)
    decimals = decimals_from_step(step)
    lo = round(math.floor(lo / step) * step, decimals)
    hi = round(math.ceil(hi / step) * step, decimals)
    if d0 > d1:
        return hi, lo
    return lo, hi
