from __future__ import annotations

from typing import Any, Sequence

from dataviz.scales.base import DEFAULT_TICK_COUNT, Scale, clamp_unit, coerce_number, linear_ticks, nice_domain
from dataviz.units import Length, LengthLike


class LinearScale(Scale):
    """Continuous scale mapping `[d0, d1]` onto `[r0, r1]` by interpolation.

    Example::

        scale = LinearScale((0, 100), (0, 500))
        scale.apply(50)     # px(250)
        scale.invert(250)   # 50.0
    """

    kind = "linear"

    def __init__(self, domain: Sequence[float], range_: Sequence[LengthLike], *, clamp: bool = False) -> None:
        super().__init__(range_)
        if len(domain) != 2:
            raise ValueError("continuous domain must have exactly two endpoints")
        self._d0 = coerce_number(domain[0])
        self._d1 = coerce_number(domain[1])
        self._clamp = clamp

    def domain(self) -> tuple[float, float]:
        return (self._d0, self._d1)

    @property
    def clamped(self) -> bool:
        return self._clamp

    def apply(self, value: Any) -> Length:
        v = coerce_number(value)
        if self._d0 == self._d1:
            return self._out(self._r0)
        t = self._normalize(v)
        if self._clamp:
            t = clamp_unit(t)
        return self._out(self._lerp_range(t))

    def invert(self, position: LengthLike) -> float:
        t = self._range_fraction(position)
        if self._clamp:
            t = clamp_unit(t)
        return self._denormalize(t)

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[float]:
        return linear_ticks(self._d0, self._d1, count)

    def nice(self, count: int = DEFAULT_TICK_COUNT) -> "LinearScale":
        return type(self)(nice_domain(self._d0, self._d1, count), self._range, clamp=self._clamp)

    def with_clamp(self, enabled: bool = True) -> "LinearScale":
        return type(self)((self._d0, self._d1), self._range, clamp=enabled)

    def _normalize(self, v: float) -> float:
        if v == self._d0:
            return 0.0
        if v == self._d1:
            return 1.0
        return (v - self._d0) / (self._d1 - self._d0)

    def _denormalize(self, t: float) -> float:
        if t == 0.0:
            return self._d0
        if t == 1.0:
            return self._d1
        return (1.0 - t) * self._d0 + t * self._d1


def linear_scale(domain: Sequence[float], range_: Sequence[LengthLike], *, clamp: bool = False) -> LinearScale:
    return LinearScale(domain, range_, clamp=clamp)
