from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Iterator, Literal, Union

from dataviz.layout.types import Constraints, Rect, Size, Spacing, _absolute
from dataviz.units import ZERO, Length, LengthLike, as_length


LOGGER = logging.getLogger(__name__)

NodeKind = Literal["fixed", "hstack", "vstack", "spacer"]

DEFAULT_FONT_SIZE = 16.0

SpacingLike = Union[Spacing, Length, int, float]


@dataclass(frozen=True)
class NodeStyle:
    margin: Spacing = field(default_factory=Spacing)
    padding: Spacing = field(default_factory=Spacing)


class Node:
    """Layout tree element.

    `rect` is filled in by `layout_simple` and is relative to the parent's
    origin (the root sits at `(0, 0)`); `intrinsic` is the size computed by
    the bottom-up pass.
    """

    def __init__(
        self,
        kind: NodeKind,
        width: LengthLike = ZERO,
        height: LengthLike = ZERO,
        children: list["Node"] | None = None,
        style: NodeStyle | None = None,
    ) -> None:
        if kind not in ("fixed", "hstack", "vstack", "spacer"):
            raise ValueError(f"unknown node kind: {kind}")
        if kind in ("fixed", "spacer") and children:
            raise ValueError(f"{kind} nodes cannot have children")
        self.kind: NodeKind = kind
        self.width = as_length(width)
        self.height = as_length(height)
        self.children: list[Node] = list(children or [])
        self.style = style or NodeStyle()
        self.rect = Rect()
        self.intrinsic = Size()

    def __repr__(self) -> str:
        return f"Node({self.kind}, rect={self.rect}, children={len(self.children)})"

    @property
    def is_container(self) -> bool:
        return self.kind in ("hstack", "vstack")

    def add_child(self, child: "Node") -> "Node":
        if not self.is_container:
            raise ValueError(f"{self.kind} nodes cannot have children")
        self.children.append(child)
        return self

    def with_margin(self, margin: SpacingLike) -> "Node":
        self.style = replace(self.style, margin=_spacing(margin))
        return self

    def with_padding(self, padding: SpacingLike) -> "Node":
        self.style = replace(self.style, padding=_spacing(padding))
        return self

    def walk(self, origin_x: float = 0.0, origin_y: float = 0.0) -> Iterator[tuple["Node", Rect]]:
        """Depth-first (node, absolute rect) pairs, parents before children."""

        absolute = self.rect.translated(origin_x, origin_y)
        yield self, absolute
        for child in self.children:
            yield from child.walk(absolute.x, absolute.y)


def fixed(width: LengthLike, height: LengthLike) -> Node:
    return Node("fixed", width, height)


def spacer(width: LengthLike = ZERO, height: LengthLike = ZERO) -> Node:
    return Node("spacer", width, height)


def hstack(*children: Node) -> Node:
    return Node("hstack", children=list(children))


def vstack(*children: Node) -> Node:
    return Node("vstack", children=list(children))


def layout_simple(node: Node, constraints: Constraints | None = None, font_size: float = DEFAULT_FONT_SIZE) -> Size:
    """Lay out `node` and its subtree; returns the root size (without its own margin).

    Bottom-up, every node gets an intrinsic size in which percentage parts
    count as zero. Top-down, each container places its children along its
    main axis in list order; percentages in a child resolve against the
    parent's content box. Rectangles that do not fit the content box are
    clipped to it without error.
    """

    constraints = constraints or Constraints.unconstrained()
    _measure(node, font_size)
    size = constraints.constrain(node.intrinsic.width, node.intrinsic.height)
    if node.kind in ("fixed", "spacer") and (constraints.has_bounded_width or constraints.has_bounded_height):
        # A leaf's own percentages resolve against the bounded constraint.
        w = node.width.resolve(constraints.max_width, font_size) if constraints.has_bounded_width else size.width
        h = node.height.resolve(constraints.max_height, font_size) if constraints.has_bounded_height else size.height
        size = constraints.constrain(w, h)
    node.rect = Rect(0.0, 0.0, size.width, size.height)
    ref_w = constraints.max_width if constraints.has_bounded_width else size.width
    ref_h = constraints.max_height if constraints.has_bounded_height else size.height
    _place(node, ref_w, ref_h, font_size)
    return size


def _measure(node: Node, font_size: float) -> Size:
    pad_t, pad_r, pad_b, pad_l = node.style.padding.absolute(font_size)
    if not node.is_container:
        node.intrinsic = Size(max(0.0, _absolute(node.width, font_size)), max(0.0, _absolute(node.height, font_size)))
        return node.intrinsic

    main = 0.0
    cross = 0.0
    for child in node.children:
        child_size = _measure(child, font_size)
        m_t, m_r, m_b, m_l = child.style.margin.absolute(font_size)
        if node.kind == "hstack":
            main += m_l + child_size.width + m_r
            cross = max(cross, m_t + child_size.height + m_b)
        else:
            main += m_t + child_size.height + m_b
            cross = max(cross, m_l + child_size.width + m_r)

    if node.kind == "hstack":
        node.intrinsic = Size(max(0.0, main + pad_l + pad_r), max(0.0, cross + pad_t + pad_b))
    else:
        node.intrinsic = Size(max(0.0, cross + pad_l + pad_r), max(0.0, main + pad_t + pad_b))
    return node.intrinsic


def _place(node: Node, ref_w: float, ref_h: float, font_size: float) -> None:
    if not node.is_container:
        return
    pad_t, pad_r, pad_b, pad_l = node.style.padding.resolve(ref_w, ref_h, font_size)
    content_w = max(0.0, node.rect.width - pad_l - pad_r)
    content_h = max(0.0, node.rect.height - pad_t - pad_b)
    right_edge = pad_l + content_w
    bottom_edge = pad_t + content_h

    cursor = pad_l if node.kind == "hstack" else pad_t
    for child in node.children:
        m_t, m_r, m_b, m_l = child.style.margin.resolve(content_w, content_h, font_size)
        w, h = _resolved_size(child, content_w, content_h, font_size)
        if node.kind == "hstack":
            x = cursor + m_l
            y = pad_t + m_t
            cursor = x + w + m_r
        else:
            x = pad_l + m_l
            y = cursor + m_t
            cursor = y + h + m_b

        cx = min(max(x, pad_l), right_edge)
        cy = min(max(y, pad_t), bottom_edge)
        cw = max(0.0, min(w, right_edge - cx))
        ch = max(0.0, min(h, bottom_edge - cy))
        if (cx, cy, cw, ch) != (x, y, w, h):
            LOGGER.debug("clipping %s child from %s to %s", node.kind, (x, y, w, h), (cx, cy, cw, ch))
        child.rect = Rect(cx, cy, cw, ch)
        _place(child, content_w, content_h, font_size)


def _resolved_size(child: Node, content_w: float, content_h: float, font_size: float) -> tuple[float, float]:
    if child.is_container:
        return child.intrinsic.width, child.intrinsic.height
    w = child.width.resolve(content_w, font_size)
    h = child.height.resolve(content_h, font_size)
    return max(0.0, w), max(0.0, h)


def _spacing(value: SpacingLike) -> Spacing:
    if isinstance(value, Spacing):
        return value
    return Spacing.uniform(value)

