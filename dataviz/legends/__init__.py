from .legend import (
    BASELINE_RATIO,
    EDGE_MARGIN,
    LAYOUTS,
    POSITIONS,
    Legend,
    LegendItem,
    LegendLayout,
    LegendPosition,
)
from .symbols import (
    MARKER_SHAPES,
    ColorSwatch,
    LineSample,
    MarkerShape,
    MarkerSymbol,
    Symbol,
    dashed_line,
    line,
    line_with_marker,
    marker,
    marker_path,
    swatch,
)

__all__ = [
    "BASELINE_RATIO",
    "ColorSwatch",
    "EDGE_MARGIN",
    "LAYOUTS",
    "Legend",
    "LegendItem",
    "LegendLayout",
    "LegendPosition",
    "LineSample",
    "MARKER_SHAPES",
    "MarkerShape",
    "MarkerSymbol",
    "POSITIONS",
    "Symbol",
    "dashed_line",
    "line",
    "line_with_marker",
    "marker",
    "marker_path",
    "swatch",
]
