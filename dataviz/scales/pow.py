from __future__ import annotations

import math
from typing import Sequence

from dataviz.scales.base import clamp_unit, nice_domain
from dataviz.scales.linear import LinearScale
from dataviz.units import LengthLike


class PowScale(LinearScale):
    """Linear scale whose normalized position is raised to `exponent` (sign preserved)."""

    kind = "pow"

    def __init__(
        self,
        domain: Sequence[float],
        range_: Sequence[LengthLike],
        *,
        exponent: float = 1.0,
        clamp: bool = False,
    ) -> None:
        super().__init__(domain, range_, clamp=clamp)
        exponent = float(exponent)
        if exponent <= 0 or not math.isfinite(exponent):
            raise ValueError(f"pow exponent must be a positive number, got {exponent}")
        self._exponent = exponent
        if abs(exponent - 0.5) < 1e-9:
            self.kind = "sqrt"

    @property
    def exponent(self) -> float:
        return self._exponent

    def _normalize(self, v: float) -> float:
        t = super()._normalize(v)
        if self._clamp:
            t = clamp_unit(t)
        return math.copysign(abs(t) ** self._exponent, t)

    def _denormalize(self, t: float) -> float:
        return super()._denormalize(math.copysign(abs(t) ** (1.0 / self._exponent), t))

    def nice(self, count: int = 10) -> "PowScale":
        return PowScale(nice_domain(self._d0, self._d1, count), self._range, exponent=self._exponent, clamp=self._clamp)

    def with_clamp(self, enabled: bool = True) -> "PowScale":
        return PowScale((self._d0, self._d1), self._range, exponent=self._exponent, clamp=enabled)


def pow_scale(
    domain: Sequence[float],
    range_: Sequence[LengthLike],
    *,
    exponent: float = 1.0,
    clamp: bool = False,
) -> PowScale:
    return PowScale(domain, range_, exponent=exponent, clamp=clamp)


def sqrt_scale(domain: Sequence[float], range_: Sequence[LengthLike], *, clamp: bool = False) -> PowScale:
    return PowScale(domain, range_, exponent=0.5, clamp=clamp)
