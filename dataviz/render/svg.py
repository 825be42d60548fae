from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, Sequence

from dataviz.render.commands import (
    DrawCommand,
    DrawStyle,
    Group,
    Line,
    Marker,
    Path,
    Rect,
    Rotate,
    Text,
    Transform,
    Translate,
)
from dataviz.text import escape_xml


LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

# DrawStyle field -> SVG presentation attribute, in emission order.
_STYLE_ATTRIBUTES = (
    ("fill", "fill"),
    ("stroke", "stroke"),
    ("stroke_width", "stroke-width"),
    ("stroke_dasharray", "stroke-dasharray"),
    ("stroke_linecap", "stroke-linecap"),
    ("opacity", "opacity"),
    ("font_family", "font-family"),
    ("font_size", "font-size"),
    ("font_weight", "font-weight"),
    ("text_anchor", "text-anchor"),
    ("dominant_baseline", "dominant-baseline"),
)


def fmt_num(value: float) -> str:
    """At most three decimals, trailing zeros dropped, never `-0`."""

    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f"cannot emit non-finite coordinate {value!r}")
    text = f"{v:.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def fmt_transform(transform: Sequence[Transform]) -> str:
    parts: list[str] = []
    for t in transform:
        if isinstance(t, Translate):
            parts.append(f"translate({fmt_num(t.dx)} {fmt_num(t.dy)})")
        elif isinstance(t, Rotate):
            if t.cx == 0 and t.cy == 0:
                parts.append(f"rotate({fmt_num(t.angle)})")
            else:
                parts.append(f"rotate({fmt_num(t.angle)} {fmt_num(t.cx)} {fmt_num(t.cy)})")
        else:
            raise TypeError(f"unsupported transform: {type(t).__name__}")
    return " ".join(parts)


class SvgBackend:
    """Translates draw commands to SVG 1.1 markup.

    Marker definitions found anywhere in the command tree are hoisted into a
    single leading `<defs>` block (first definition per id wins); everything
    else is emitted in command order.
    """

    def render(self, commands: Iterable[DrawCommand]) -> str:
        commands = list(commands)
        markers = collect_markers(commands)
        body = "".join(self._emit(c) for c in commands)
        if not markers:
            return body
        return self._defs(markers) + body

    def document(
        self,
        width: float,
        height: float,
        commands: Iterable[DrawCommand],
        *,
        background: str | None = None,
    ) -> str:
        commands = list(commands)
        w = fmt_num(width)
        h = fmt_num(height)
        parts = [f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" viewBox="0 0 {w} {h}">']
        markers = collect_markers(commands)
        if markers:
            parts.append(self._defs(markers))
        if background is not None:
            parts.append(f'<rect x="0" y="0" width="{w}" height="{h}" fill="{escape_xml(background)}"/>')
        parts.extend(self._emit(c) for c in commands)
        parts.append("</svg>")
        return "".join(parts)

    def _defs(self, markers: Sequence[Marker]) -> str:
        return "<defs>" + "".join(self._marker(m) for m in markers) + "</defs>"

    def _marker(self, marker: Marker) -> str:
        attrs = [
            ("id", marker.id),
            ("markerWidth", fmt_num(marker.width)),
            ("markerHeight", fmt_num(marker.height)),
            ("refX", fmt_num(marker.ref_x)),
            ("refY", fmt_num(marker.ref_y)),
            ("orient", marker.orient),
        ]
        path = _element("path", [("d", marker.path)] + _style_attributes(marker.style))
        return f"<marker{_attrs(attrs)}>{path}</marker>"

    def _emit(self, command: DrawCommand) -> str:
        if isinstance(command, Marker):
            return ""
        if isinstance(command, Line):
            attrs = [
                ("x1", fmt_num(command.x1)),
                ("y1", fmt_num(command.y1)),
                ("x2", fmt_num(command.x2)),
                ("y2", fmt_num(command.y2)),
            ]
            return _element("line", attrs + _style_attributes(command.style) + _marker_refs(command.style))
        if isinstance(command, Text):
            attrs = [("x", fmt_num(command.x)), ("y", fmt_num(command.y))] + _style_attributes(command.style)
            if command.transform:
                attrs.append(("transform", fmt_transform(command.transform)))
            return f"<text{_attrs(attrs)}>{escape_xml(command.text)}</text>"
        if isinstance(command, Rect):
            attrs = [
                ("x", fmt_num(command.x)),
                ("y", fmt_num(command.y)),
                ("width", fmt_num(max(0.0, command.width))),
                ("height", fmt_num(max(0.0, command.height))),
            ]
            if command.rx:
                attrs.append(("rx", fmt_num(command.rx)))
            return _element("rect", attrs + _style_attributes(command.style))
        if isinstance(command, Path):
            attrs = [("d", command.d)] + _style_attributes(command.style) + _marker_refs(command.style)
            return _element("path", attrs)
        if isinstance(command, Group):
            attrs = []
            if command.css_class:
                attrs.append(("class", command.css_class))
            if command.transform:
                attrs.append(("transform", fmt_transform(command.transform)))
            attrs.extend(_style_attributes(command.style))
            inner = "".join(self._emit(c) for c in command.children)
            if not inner:
                return f"<g{_attrs(attrs)}/>"
            return f"<g{_attrs(attrs)}>{inner}</g>"
        raise TypeError(f"unsupported draw command: {type(command).__name__}")


def collect_markers(commands: Iterable[DrawCommand]) -> list[Marker]:
    found: dict[str, Marker] = {}
    for command in _walk(commands):
        if isinstance(command, Marker):
            if command.id in found:
                LOGGER.debug("duplicate marker id %r ignored", command.id)
                continue
            found[command.id] = command
    return list(found.values())


def _walk(commands: Iterable[DrawCommand]) -> Iterator[DrawCommand]:
    """Depth-first, in emission order."""

    for command in commands:
        yield command
        if isinstance(command, Group):
            yield from _walk(command.children)


def svg_document(
    width: float,
    height: float,
    commands: Iterable[DrawCommand],
    background: str | None = None,
) -> str:
    return SvgBackend().document(width, height, commands, background=background)


def _style_attributes(style: DrawStyle) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for field_name, attr in _STYLE_ATTRIBUTES:
        value = getattr(style, field_name)
        if value is None:
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            out.append((attr, fmt_num(value)))
        else:
            out.append((attr, str(value)))
    return out


def _marker_refs(style: DrawStyle) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    if style.marker_start:
        out.append(("marker-start", f"url(#{style.marker_start})"))
    if style.marker_end:
        out.append(("marker-end", f"url(#{style.marker_end})"))
    return out


def _attrs(attrs: Sequence[tuple[str, str]]) -> str:
    return "".join(f' {name}="{escape_xml(value)}"' for name, value in attrs)


def _element(tag: str, attrs: Sequence[tuple[str, str]]) -> str:
    return f"<{tag}{_attrs(attrs)}/>"
