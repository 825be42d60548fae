from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from dataviz.config import is_hex_color
from dataviz.errors import ScaleDomainError
from dataviz.scales.base import clamp_unit, coerce_number


# Tableau 10.
CATEGORY10 = (
    "#4e79a7",
    "#f28e2b",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc948",
    "#b07aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ac",
)

Interpolator = Callable[[float], float]


def parse_hex_rgb(value: str) -> np.ndarray:
    """`#rrggbb` (alpha ignored) -> float array of 0..255 channels."""

    if not isinstance(value, str) or not is_hex_color(value.strip()):
        raise ValueError(f"invalid color: {value!r}")
    h = value.strip()[1:]
    return np.array([int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)], dtype=np.float64)


def rgb_to_hex(rgb: np.ndarray) -> str:
    r, g, b = (int(c) for c in np.clip(np.rint(rgb), 0, 255))
    return f"#{r:02x}{g:02x}{b:02x}"


def mix(start: str, end: str, t: float) -> str:
    a = parse_hex_rgb(start)
    b = parse_hex_rgb(end)
    return rgb_to_hex(a + (b - a) * clamp_unit(t))


class SequentialColorScale:
    """Continuous domain -> colour gradient between two hex colours.

    Example::

        scale = SequentialColorScale((0, 100), "#ffffff", "#0000ff")
        scale.apply_color(50)  # "#8080ff"
    """

    kind = "sequential"

    def __init__(
        self,
        domain: Sequence[float],
        start: str,
        end: str,
        *,
        clamp: bool = True,
        interpolate: Interpolator | None = None,
    ) -> None:
        if len(domain) != 2:
            raise ValueError("continuous domain must have exactly two endpoints")
        self._d0 = coerce_number(domain[0])
        self._d1 = coerce_number(domain[1])
        self._start = parse_hex_rgb(start)
        self._end = parse_hex_rgb(end)
        self._clamp = clamp
        self._interpolate = interpolate

    def domain(self) -> tuple[float, float]:
        return (self._d0, self._d1)

    def apply_value(self, value: Any) -> float:
        v = coerce_number(value)
        if self._d0 == self._d1:
            return 0.0
        t = (v - self._d0) / (self._d1 - self._d0)
        if self._clamp:
            t = clamp_unit(t)
        if self._interpolate is not None:
            t = self._interpolate(t)
        return t

    def apply_color(self, value: Any) -> str:
        t = clamp_unit(self.apply_value(value))
        return rgb_to_hex(self._start + (self._end - self._start) * t)

    def samples(self, n: int) -> list[str]:
        if n <= 0:
            return []
        if n == 1:
            return [self.apply_color(self._d0)]
        return [self.apply_color(float(v)) for v in np.linspace(self._d0, self._d1, n)]


class DivergingColorScale:
    """Two gradients meeting at `mid` colour on `midpoint` (default: domain centre)."""

    kind = "diverging"

    def __init__(
        self,
        domain: Sequence[float],
        start: str,
        mid: str,
        end: str,
        *,
        midpoint: float | None = None,
        clamp: bool = True,
    ) -> None:
        if len(domain) != 2:
            raise ValueError("continuous domain must have exactly two endpoints")
        self._d0 = coerce_number(domain[0])
        self._d1 = coerce_number(domain[1])
        self._start = parse_hex_rgb(start)
        self._mid = parse_hex_rgb(mid)
        self._end = parse_hex_rgb(end)
        self._midpoint = (self._d0 + self._d1) / 2.0 if midpoint is None else coerce_number(midpoint)
        self._clamp = clamp

    @property
    def midpoint(self) -> float:
        return self._midpoint

    def domain(self) -> tuple[float, float]:
        return (self._d0, self._d1)

    def apply_value(self, value: Any) -> float:
        v = coerce_number(value)
        if v < self._midpoint:
            span = self._midpoint - self._d0
            t = 0.5 * (v - self._d0) / span if span else 0.5
        else:
            span = self._d1 - self._midpoint
            t = 0.5 + 0.5 * (v - self._midpoint) / span if span else 0.5
        if self._clamp:
            t = clamp_unit(t)
        return t

    def apply_color(self, value: Any) -> str:
        t = clamp_unit(self.apply_value(value))
        if t < 0.5:
            local = t * 2.0
            return rgb_to_hex(self._start + (self._mid - self._start) * local)
        local = (t - 0.5) * 2.0
        return rgb_to_hex(self._mid + (self._end - self._mid) * local)

    def samples(self, n: int) -> list[str]:
        if n <= 0:
            return []
        if n == 1:
            return [self.apply_color(self._midpoint)]
        return [self.apply_color(float(v)) for v in np.linspace(self._d0, self._d1, n)]


class CategoricalColorScale:
    kind = "categorical"

    def __init__(
        self,
        keys: Sequence[str],
        colors: Sequence[str] = CATEGORY10,
        *,
        unknown: str = "#cccccc",
    ) -> None:
        for color in (*colors, unknown):
            parse_hex_rgb(color)
        if not colors:
            raise ValueError("categorical color scale needs at least one color")
        self._keys: list[str] = []
        for key in keys:
            if key not in self._keys:
                self._keys.append(key)
        self._index = {key: i for i, key in enumerate(self._keys)}
        self._colors = tuple(colors)
        self._unknown = unknown

    def domain(self) -> tuple[str, ...]:
        return tuple(self._keys)

    def apply_color(self, value: Any) -> str:
        if not isinstance(value, str):
            raise ScaleDomainError(f"expected a string key, got {type(value).__name__}")
        idx = self._index.get(value, -1)
        if idx < 0:
            return self._unknown
        return self._colors[idx % len(self._colors)]
