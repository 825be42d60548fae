from .axis import ORIENTATIONS, Axis, AxisRenderOptions, Orientation, Tick
from .formatters import TickFormatter, default_formatter, number_formatter, si_formatter, time_formatter

__all__ = [
    "ORIENTATIONS",
    "Axis",
    "AxisRenderOptions",
    "Orientation",
    "Tick",
    "TickFormatter",
    "default_formatter",
    "number_formatter",
    "si_formatter",
    "time_formatter",
]
