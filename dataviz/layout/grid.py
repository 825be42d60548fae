from __future__ import annotations

import math

import numpy as np

from dataviz.layout.margin import apply_margin
from dataviz.layout.types import Rect, Spacing
from dataviz.units import Length, LengthLike, as_length, px


def split_into_grid(bounds: Rect, rows: int, cols: int, gap: float = 0.0) -> list[list[Rect]]:
    """Row-major grid of equal cells separated by `gap`; empty for non-positive dimensions."""

    if rows <= 0 or cols <= 0:
        return []
    cell_w = (bounds.width - (cols - 1) * gap) / cols
    cell_h = (bounds.height - (rows - 1) * gap) / rows
    xs = bounds.x + np.arange(cols, dtype=np.float64) * (cell_w + gap)
    ys = bounds.y + np.arange(rows, dtype=np.float64) * (cell_h + gap)
    return [[Rect(float(x), float(y), cell_w, cell_h) for x in xs] for y in ys]


def auto_grid(n: int) -> tuple[int, int]:
    """(rows, cols) of the squarest grid holding `n` cells."""

    if n <= 0:
        return (0, 0)
    cols = int(math.ceil(math.sqrt(n)))
    rows = (n + cols - 1) // cols
    return (rows, cols)


class GridLayout:
    """Equal-cell grid over a canvas with an outer margin and row/column gaps."""

    def __init__(
        self,
        width: float,
        height: float,
        rows: int,
        cols: int,
        *,
        gap: LengthLike = px(10),
        margin: Spacing | None = None,
    ) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("grid rows/cols must be >= 0")
        self.bounds = Rect(0.0, 0.0, float(width), float(height))
        self.rows = rows
        self.cols = cols
        self.gap: Length = as_length(gap)
        self.margin = margin or Spacing()

    def set_gap(self, gap: LengthLike) -> "GridLayout":
        self.gap = as_length(gap)
        return self

    def set_margin(self, margin: Spacing) -> "GridLayout":
        self.margin = margin
        return self

    def cells(self) -> list[list[Rect]]:
        content = apply_margin(self.bounds, self.margin)
        return split_into_grid(content, self.rows, self.cols, self.gap.resolve(content.width))

    def cell(self, row: int, col: int) -> Rect:
        """Cell rectangle; out-of-range positions give an empty rect."""
        cells = self.cells()
        if row < 0 or row >= self.rows or col < 0 or col >= self.cols:
            return Rect()
        return cells[row][col]

    def cell_with_span(self, row: int, col: int, row_span: int = 1, col_span: int = 1) -> Rect:
        cells = self.cells()
        if row < 0 or row >= self.rows or col < 0 or col >= self.cols:
            return Rect()
        end_row = min(self.rows - 1, row + max(1, row_span) - 1)
        end_col = min(self.cols - 1, col + max(1, col_span) - 1)
        start = cells[row][col]
        end = cells[end_row][end_col]
        return Rect(start.x, start.y, end.right - start.x, end.bottom - start.y)

    def flat_cells(self) -> list[Rect]:
        return [cell for row in self.cells() for cell in row]
