from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from dataviz.errors import ScaleDomainError
from dataviz.scales.base import Scale
from dataviz.units import Length, LengthLike


LOGGER = logging.getLogger(__name__)


def _unique_keys(keys: Sequence[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for key in keys:
        if not isinstance(key, str):
            raise ScaleDomainError(f"categorical keys must be strings, got {type(key).__name__}")
        if key in seen:
            LOGGER.debug("dropping duplicate categorical key %r", key)
            continue
        seen[key] = None
    return tuple(seen)


def _unit_interval(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or value < 0.0 or value > 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")
    return value


class CategoricalScale(Scale):
    def __init__(self, keys: Sequence[str], range_: Sequence[LengthLike]) -> None:
        super().__init__(range_)
        self._keys = _unique_keys(keys)
        self._index = {key: i for i, key in enumerate(self._keys)}

    def domain(self) -> tuple[str, ...]:
        return self._keys

    def index(self, key: str) -> int:
        return self._index.get(key, -1)

    def ticks(self, count: int = 0) -> list[str]:
        return list(self._keys)

    def _require_index(self, value: Any) -> int:
        if not isinstance(value, str):
            raise ScaleDomainError(f"expected a string key, got {type(value).__name__}")
        idx = self._index.get(value, -1)
        if idx < 0:
            raise ScaleDomainError(f"unknown key {value!r}")
        return idx


class BandScale(CategoricalScale):
    """Categorical scale giving every key a band of equal width.

    Bands follow the D3 convention: `step = span / max(1, n - inner + 2 * outer)`,
    `bandwidth = step * (1 - inner)`. Keys run from `r0` toward `r1` and
    `apply` always returns the lower pixel edge, so a band covers
    `[apply(k), apply(k) + bandwidth]` whichever way the range points.
    """

    kind = "band"

    def __init__(
        self,
        keys: Sequence[str],
        range_: Sequence[LengthLike],
        *,
        padding_inner: float = 0.0,
        padding_outer: float = 0.0,
        align: float = 0.5,
        rounded: bool = False,
    ) -> None:
        super().__init__(keys, range_)
        self._padding_inner = _unit_interval("padding_inner", padding_inner)
        self._padding_outer = _unit_interval("padding_outer", padding_outer)
        self._align = _unit_interval("align", align)
        self._round = rounded
        self._rescale()

    def _rescale(self) -> None:
        n = len(self._keys)
        lo, hi = min(self._r0, self._r1), max(self._r0, self._r1)
        if n == 0:
            self._step = 0.0
            self._bandwidth = 0.0
            self._start = lo
            return
        step = (hi - lo) / max(1.0, n - self._padding_inner + 2.0 * self._padding_outer)
        if self._round:
            step = float(math.floor(step))
        start = lo + (hi - lo - step * (n - self._padding_inner)) * self._align
        bandwidth = step * (1.0 - self._padding_inner)
        if self._round:
            start = float(round(start))
            bandwidth = float(round(bandwidth))
        self._step = step
        self._bandwidth = bandwidth
        self._start = start

    def apply(self, value: Any) -> Length:
        idx = self._require_index(value)
        if self.inverted:
            idx = len(self._keys) - 1 - idx
        return self._out(self._start + idx * self._step)

    def tick_position(self, value: Any) -> Length:
        idx = self._require_index(value)
        if self.inverted:
            idx = len(self._keys) - 1 - idx
        return self._out(self._start + idx * self._step + self._bandwidth / 2.0)

    def invert(self, position: LengthLike) -> str | None:
        p = self._in_range_unit(position)
        if not self._keys or self._step <= 0:
            return None
        slot = int(math.floor((p - self._start) / self._step))
        if slot < 0 or slot >= len(self._keys):
            return None
        if p - (self._start + slot * self._step) > self._bandwidth:
            return None
        idx = len(self._keys) - 1 - slot if self.inverted else slot
        return self._keys[idx]

    def bandwidth(self) -> Length:
        return self._out(self._bandwidth)

    def step(self) -> Length:
        return self._out(self._step)

    def padding(self, value: float) -> "BandScale":
        return self._copy(padding_inner=value, padding_outer=value)

    def _copy(self, **overrides: Any) -> "BandScale":
        params = {
            "padding_inner": self._padding_inner,
            "padding_outer": self._padding_outer,
            "align": self._align,
            "rounded": self._round,
        }
        params.update(overrides)
        return BandScale(self._keys, self._range, **params)


class PointScale(CategoricalScale):
    """Band scale with zero bandwidth; each key maps to a single point."""

    kind = "point"

    def __init__(
        self,
        keys: Sequence[str],
        range_: Sequence[LengthLike],
        *,
        padding: float = 0.0,
        align: float = 0.5,
        rounded: bool = False,
    ) -> None:
        super().__init__(keys, range_)
        self._padding = _unit_interval("padding", padding)
        self._align = _unit_interval("align", align)
        self._round = rounded
        n = len(self._keys)
        lo, hi = min(self._r0, self._r1), max(self._r0, self._r1)
        if n == 0:
            step = 0.0
            start = lo
        else:
            step = (hi - lo) / max(1.0, n - 1 + 2.0 * self._padding)
            if rounded and n > 1:
                step = float(math.floor(step))
            start = lo + (hi - lo - step * (n - 1)) * self._align
            if rounded:
                start = float(round(start))
        self._step = step
        self._start = start

    def apply(self, value: Any) -> Length:
        idx = self._require_index(value)
        if self.inverted:
            idx = len(self._keys) - 1 - idx
        return self._out(self._start + idx * self._step)

    def invert(self, position: LengthLike) -> str | None:
        p = self._in_range_unit(position)
        if not self._keys:
            return None
        if self._step <= 0:
            return self._keys[0]
        slot = int(round((p - self._start) / self._step))
        slot = min(len(self._keys) - 1, max(0, slot))
        idx = len(self._keys) - 1 - slot if self.inverted else slot
        return self._keys[idx]

    def bandwidth(self) -> Length:
        return self._out(0.0)

    def step(self) -> Length:
        return self._out(self._step)


def band_scale(
    keys: Sequence[str],
    range_: Sequence[LengthLike],
    *,
    padding_inner: float = 0.0,
    padding_outer: float = 0.0,
    align: float = 0.5,
) -> BandScale:
    return BandScale(keys, range_, padding_inner=padding_inner, padding_outer=padding_outer, align=align)


def point_scale(keys: Sequence[str], range_: Sequence[LengthLike], *, padding: float = 0.0, align: float = 0.5) -> PointScale:
    return PointScale(keys, range_, padding=padding, align=align)
