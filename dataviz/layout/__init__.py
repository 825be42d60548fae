from .grid import GridLayout, auto_grid, split_into_grid
from .margin import (
    MarginConvention,
    apply_margin,
    default_margin,
    inset,
    margins_for_axes,
    split_horizontal,
    split_vertical,
)
from .node import Node, NodeStyle, fixed, hstack, layout_simple, spacer, vstack
from .types import Constraints, Rect, Size, Spacing

__all__ = [
    "Constraints",
    "GridLayout",
    "MarginConvention",
    "Node",
    "NodeStyle",
    "Rect",
    "Size",
    "Spacing",
    "apply_margin",
    "auto_grid",
    "default_margin",
    "fixed",
    "hstack",
    "inset",
    "layout_simple",
    "margins_for_axes",
    "spacer",
    "split_horizontal",
    "split_into_grid",
    "split_vertical",
    "vstack",
]
