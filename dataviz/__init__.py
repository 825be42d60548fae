from dataviz.axes import Axis, AxisRenderOptions, Tick
from dataviz.composition import (
    ChartSpec,
    Composition,
    custom_composition,
    dashboard_composition,
    grid_composition,
    quad,
    side_by_side,
    stack_composition,
    top_and_bottom,
)
from dataviz.config import AxisStyle, LegendStyle, validate_axis_style, validate_legend_style
from dataviz.errors import ScaleDomainError, StyleConfigError, UnitResolutionError
from dataviz.figure import Figure
from dataviz.layout import Constraints, MarginConvention, Node, Spacing, fixed, hstack, layout_simple, spacer, vstack
from dataviz.legends import ColorSwatch, Legend, LegendItem, LineSample, MarkerSymbol
from dataviz.render import SvgBackend, TerminalBackend, svg_document
from dataviz.scales import (
    BandScale,
    LinearScale,
    LogScale,
    OrdinalScale,
    PointScale,
    PowScale,
    TimeScale,
    band_scale,
    linear_scale,
    log_scale,
    ordinal_scale,
    point_scale,
    pow_scale,
    time_scale,
)
from dataviz.text import escape_xml, estimate_text_width
from dataviz.units import Length, em, percent, px

__all__ = [
    "Axis",
    "AxisRenderOptions",
    "AxisStyle",
    "BandScale",
    "ChartSpec",
    "ColorSwatch",
    "Composition",
    "Constraints",
    "Figure",
    "Legend",
    "LegendItem",
    "LegendStyle",
    "Length",
    "LineSample",
    "LinearScale",
    "LogScale",
    "MarginConvention",
    "MarkerSymbol",
    "Node",
    "OrdinalScale",
    "PointScale",
    "PowScale",
    "ScaleDomainError",
    "Spacing",
    "StyleConfigError",
    "SvgBackend",
    "TerminalBackend",
    "Tick",
    "TimeScale",
    "UnitResolutionError",
    "band_scale",
    "custom_composition",
    "dashboard_composition",
    "em",
    "escape_xml",
    "estimate_text_width",
    "fixed",
    "grid_composition",
    "hstack",
    "layout_simple",
    "linear_scale",
    "log_scale",
    "ordinal_scale",
    "percent",
    "point_scale",
    "pow_scale",
    "px",
    "quad",
    "side_by_side",
    "spacer",
    "stack_composition",
    "svg_document",
    "time_scale",
    "top_and_bottom",
    "validate_axis_style",
    "validate_legend_style",
    "vstack",
]
