from .commands import (
    DrawCommand,
    DrawStyle,
    Group,
    Line,
    Marker,
    Path,
    Rect,
    Rotate,
    Text,
    Translate,
)
from .svg import SvgBackend, fmt_num, svg_document
from .terminal import TerminalBackend

__all__ = [
    "DrawCommand",
    "DrawStyle",
    "Group",
    "Line",
    "Marker",
    "Path",
    "Rect",
    "Rotate",
    "SvgBackend",
    "TerminalBackend",
    "Text",
    "Translate",
    "fmt_num",
    "svg_document",
]
