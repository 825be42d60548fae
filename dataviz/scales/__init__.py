from .band import BandScale, CategoricalScale, PointScale, band_scale, point_scale
from .base import DEFAULT_TICK_COUNT, Scale, linear_ticks, nice_step
from .color import CategoricalColorScale, DivergingColorScale, SequentialColorScale
from .linear import LinearScale, linear_scale
from .log import LogScale, log_scale
from .ordinal import OrdinalScale, ordinal_scale
from .pow import PowScale, pow_scale, sqrt_scale
from .time import TICK_INTERVALS, TimeInterval, TimeScale, time_scale

__all__ = [
    "BandScale",
    "CategoricalColorScale",
    "CategoricalScale",
    "DEFAULT_TICK_COUNT",
    "DivergingColorScale",
    "LinearScale",
    "LogScale",
    "OrdinalScale",
    "PointScale",
    "PowScale",
    "Scale",
    "SequentialColorScale",
    "TICK_INTERVALS",
    "TimeInterval",
    "TimeScale",
    "band_scale",
    "linear_scale",
    "linear_ticks",
    "log_scale",
    "nice_step",
    "ordinal_scale",
    "point_scale",
    "pow_scale",
    "sqrt_scale",
    "time_scale",
]
