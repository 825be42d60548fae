from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from dataviz.errors import ScaleDomainError
from dataviz.scales.base import DEFAULT_TICK_COUNT, Scale, clamp_unit, coerce_number
from dataviz.units import Length, LengthLike


LOGGER = logging.getLogger(__name__)

DECADE_SUBDIVISIONS = (2.0, 3.0, 5.0)


class LogScale(Scale):
    kind = "log"

    def __init__(
        self,
        domain: Sequence[float],
        range_: Sequence[LengthLike],
        *,
        base: float = 10.0,
        clamp: bool = False,
    ) -> None:
        super().__init__(range_)
        if len(domain) != 2:
            raise ValueError("continuous domain must have exactly two endpoints")
        d0 = coerce_number(domain[0])
        d1 = coerce_number(domain[1])
        if d0 <= 0 or d1 <= 0:
            raise ScaleDomainError(f"log scale domain must be strictly positive, got ({d0}, {d1})")
        base = float(base)
        if base <= 0 or base == 1.0 or not math.isfinite(base):
            raise ValueError(f"log base must be > 0 and != 1, got {base}")
        self._d0 = d0
        self._d1 = d1
        self._base = base
        self._clamp = clamp
        self._l0 = self._log(d0)
        self._l1 = self._log(d1)

    @property
    def base(self) -> float:
        return self._base

    def domain(self) -> tuple[float, float]:
        return (self._d0, self._d1)

    def apply(self, value: Any) -> Length:
        v = coerce_number(value)
        if v <= 0:
            raise ScaleDomainError(f"log scale cannot map non-positive value {v}")
        if self._d0 == self._d1:
            return self._out(self._r0)
        if v == self._d0:
            t = 0.0
        elif v == self._d1:
            t = 1.0
        else:
            t = (self._log(v) - self._l0) / (self._l1 - self._l0)
        if self._clamp:
            t = clamp_unit(t)
        return self._out(self._lerp_range(t))

    def invert(self, position: LengthLike) -> float:
        t = self._range_fraction(position)
        if self._clamp:
            t = clamp_unit(t)
        if t == 0.0:
            return self._d0
        if t == 1.0:
            return self._d1
        return self._base ** ((1.0 - t) * self._l0 + t * self._l1)

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[float]:
        if count <= 0:
            count = DEFAULT_TICK_COUNT
        lo, hi = min(self._d0, self._d1), max(self._d0, self._d1)
        if lo == hi:
            return [lo]
        first = math.floor(self._log(lo))
        last = math.ceil(self._log(hi))
        powers = [p for p in (self._pow(k) for k in range(first, last + 1)) if _within(p, lo, hi)]
        if len(powers) >= count:
            return powers
        mults = (1.0,) + tuple(m for m in DECADE_SUBDIVISIONS if m < self._base)
        ticks: list[float] = []
        for k in range(first, last + 1):
            decade = self._pow(k)
            for m in mults:
                tick = _snap(decade * m)
                if _within(tick, lo, hi):
                    ticks.append(tick)
        if not ticks:
            LOGGER.debug("log domain (%s, %s) contains no subdivided ticks; using endpoints", lo, hi)
            return [lo, hi]
        return sorted(set(ticks))

    def nice(self) -> "LogScale":
        lo = self._pow(math.floor(self._log(min(self._d0, self._d1))))
        hi = self._pow(math.ceil(self._log(max(self._d0, self._d1))))
        domain = (hi, lo) if self._d0 > self._d1 else (lo, hi)
        return LogScale(domain, self._range, base=self._base, clamp=self._clamp)

    def with_clamp(self, enabled: bool = True) -> "LogScale":
        return LogScale((self._d0, self._d1), self._range, base=self._base, clamp=enabled)

    def _log(self, v: float) -> float:
        if self._base == 10.0:
            return math.log10(v)
        return math.log(v) / math.log(self._base)

    def _pow(self, k: int) -> float:
        return _snap(self._base ** k)


def _snap(v: float) -> float:
    # 10**-3 * 3 style products carry float noise; 12 significant digits is plenty for ticks.
    return float(f"{v:.12g}")


def _within(v: float, lo: float, hi: float) -> bool:
    tol = 1e-12 * max(abs(lo), abs(hi))
    return lo - tol <= v <= hi + tol


def log_scale(
    domain: Sequence[float],
    range_: Sequence[LengthLike],
    *,
    base: float = 10.0,
    clamp: bool = False,
) -> LogScale:
    return LogScale(domain, range_, base=base, clamp=clamp)
